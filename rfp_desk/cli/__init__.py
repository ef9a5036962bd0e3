"""CLI commands: one module per mode (serve, check-mail, init-db)."""

from typer import Typer

from rfp_desk.cli import check_mode, db_mode, serve_mode
from rfp_desk.utils.tracing import init_tracing

init_tracing()

app = Typer(help="RFP Desk: procurement RFPs and vendor proposal ingestion")


def register_commands() -> None:
    """Register all CLI commands on the global app."""
    app.command()(serve_mode.serve)
    app.command(name="check-mail")(check_mode.check_mail)
    app.command(name="init-db")(db_mode.init_db_command)


register_commands()
