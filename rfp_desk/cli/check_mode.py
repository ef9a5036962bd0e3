"""Check mode: one manual mailbox scan from the command line."""

import asyncio

import typer

from rfp_desk.db import init_db
from rfp_desk.ingestion.poller import MailboxPoller
from rfp_desk.models.outputs import CheckResult

from .shared import console, logger, print_check_result


async def _check_once(poller: MailboxPoller) -> CheckResult:
    try:
        return await poller.check_now()
    finally:
        await poller.stop()


def check_mail() -> None:
    """Connect to IMAP, ingest unseen vendor replies once, and print the summary."""
    init_db()
    log = logger.bind(command="check-mail")
    poller = MailboxPoller.from_config()
    with console.status("Connecting to mailbox..."):
        poller.connect()
    result = asyncio.run(_check_once(poller))
    log.info("check_mail.done", success=result.success, processed=result.processed)
    print_check_result(result)
    if not result.success:
        raise typer.Exit(1)
