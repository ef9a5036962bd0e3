"""Serve mode: run the HTTP API with the background mailbox poller."""

import sys

import typer
import uvicorn

from rfp_desk.api.server import create_app
from rfp_desk.config import API_PORT, IMAP_HOST, IMAP_USER
from rfp_desk.db import init_db

from .shared import console, logger


def serve(
    port: int = typer.Option(API_PORT, "--port", "-p", help="Port for the API server"),
    host: str = typer.Option("0.0.0.0", "--host", "-h", help="Bind host"),
    no_poll: bool = typer.Option(False, "--no-poll", help="Do not connect to IMAP or poll for replies"),
) -> None:
    """Start the API server; replies are polled from IMAP unless --no-poll is given."""
    init_db()
    log = logger.bind(command="serve", port=port)
    log.info("serve.start", polling=not no_poll)

    if not no_poll and not (IMAP_HOST and IMAP_USER):
        console.print("[yellow]IMAP is not configured; reply polling will be disabled.[/yellow]")

    app = create_app(start_poller=not no_poll)
    console.print(f"[green]Starting RFP Desk API on http://{host}:{port}[/green]")
    console.print("[dim]Endpoints: /vendors, /rfps, /proposals, /email, GET /health[/dim]")
    try:
        uvicorn.run(app, host=host, port=port, log_level="info", timeout_graceful_shutdown=15)
    except KeyboardInterrupt:
        console.print("\n[dim]Shutting down...[/dim]")
        sys.exit(0)
