"""Mailbox poller: scan the inbox for unseen vendor replies on a timer and on demand."""

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from rfp_desk.config import (
    IMAP_HOST,
    IMAP_MAILBOX,
    IMAP_PASS,
    IMAP_PORT,
    IMAP_TIMEOUT_SECONDS,
    IMAP_USER,
    MAIL_POLL_INTERVAL_SECONDS,
)
from rfp_desk.db.models.proposal import Proposal
from rfp_desk.ingestion.proposal_builder import process_incoming_email
from rfp_desk.mail.imap_client import ImapMailboxClient
from rfp_desk.mail.parser import parse_raw_email
from rfp_desk.mail.protocol import MailboxClient
from rfp_desk.models.outputs import CheckResult
from rfp_desk.utils.logger import bind_context, get_logger, unbind_context
from rfp_desk.utils.tracing import get_tracer

logger = get_logger("rfp_desk.ingestion.poller")

Processor = Callable[[str], Awaitable[Optional[Proposal]]]

NOT_CONFIGURED_MESSAGE = "IMAP client not initialized. Check IMAP configuration."
BUSY_MESSAGE = "A mailbox scan is already in progress."


@dataclass
class ScanStats:
    unseen: int = 0
    processed: int = 0
    skipped: int = 0
    failed: int = 0


class MailboxPoller:
    """Owns the optional mailbox client and runs sequential, non-overlapping scans.

    The client handle is None when IMAP is not configured or the startup connection
    failed; the poller then stays disabled for the process lifetime.
    """

    def __init__(
        self,
        client: Optional[MailboxClient],
        mailbox: str = IMAP_MAILBOX,
        interval_seconds: float = MAIL_POLL_INTERVAL_SECONDS,
        process: Optional[Processor] = None,
    ):
        self._client = client
        self._mailbox = mailbox
        self._interval = interval_seconds
        self._process = process or process_incoming_email
        self._connected = False
        self._scanning = False
        self._task: Optional[asyncio.Task[None]] = None

    @classmethod
    def from_config(cls) -> "MailboxPoller":
        if not (IMAP_HOST and IMAP_USER and IMAP_PASS):
            return cls(None)
        client = ImapMailboxClient(
            host=IMAP_HOST,
            user=IMAP_USER,
            password=IMAP_PASS,
            port=IMAP_PORT,
            timeout=IMAP_TIMEOUT_SECONDS,
        )
        return cls(client)

    @property
    def enabled(self) -> bool:
        return self._client is not None and self._connected

    @property
    def scanning(self) -> bool:
        return self._scanning

    def connect(self) -> bool:
        """Connect once at startup. Missing config or a failed connection disables polling."""
        if self._client is None:
            logger.warning("poller.disabled", reason="IMAP credentials not configured")
            return False
        try:
            self._client.connect()
        except Exception as e:
            logger.error("poller.connect_failed", error=str(e))
            self._client = None
            return False
        self._connected = True
        logger.info("poller.connected", mailbox=self._mailbox)
        return True

    async def check_now(self) -> CheckResult:
        """Run one scan and summarize it. Never raises."""
        if not self.enabled:
            return CheckResult(success=False, message=NOT_CONFIGURED_MESSAGE, processed=0)
        # check-and-set with no await in between
        if self._scanning:
            return CheckResult(success=False, message=BUSY_MESSAGE, processed=0)
        self._scanning = True
        stats = ScanStats()
        bind_context(scan_trigger="manual")
        try:
            await self._scan(stats)
        except Exception as e:
            logger.exception("poller.scan_failed", error=str(e))
            return CheckResult(
                success=False,
                message=f"Error checking emails: {e}",
                processed=stats.processed,
            )
        finally:
            self._scanning = False
            unbind_context("scan_trigger")
        return CheckResult(
            success=True,
            message=f"Checked for new emails. Processed {stats.processed} new proposal(s).",
            processed=stats.processed,
        )

    async def _tick(self) -> None:
        if self._scanning:
            logger.debug("poller.tick_skipped", reason="scan_in_progress")
            return
        self._scanning = True
        bind_context(scan_trigger="timer")
        try:
            await self._scan(ScanStats())
        except Exception as e:
            logger.exception("poller.scan_failed", error=str(e))
        finally:
            self._scanning = False
            unbind_context("scan_trigger")

    async def _run(self) -> None:
        """Scan, then sleep; the next scan is scheduled only after the previous one finished."""
        logger.info("poller.timer_started", interval_seconds=self._interval)
        try:
            while True:
                await self._tick()
                await asyncio.sleep(self._interval)
        except asyncio.CancelledError:
            logger.info("poller.timer_stopped")
            raise

    def start(self) -> bool:
        """Start the background timer on the running loop. Returns False if disabled."""
        if not self.enabled:
            return False
        if self._task is not None and not self._task.done():
            return True
        self._task = asyncio.create_task(self._run(), name="mailbox-poller")
        return True

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is not None:
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
        if self._client is not None and self._connected:
            await asyncio.to_thread(self._client.close)
            self._connected = False

    async def _scan(self, stats: ScanStats) -> None:
        client = self._client
        tracer = get_tracer()
        with tracer.start_as_current_span("mailbox_scan", attributes={"mailbox": self._mailbox}):
            await asyncio.to_thread(client.lock_mailbox, self._mailbox)
            try:
                uids = await asyncio.to_thread(client.search_unseen)
                stats.unseen = len(uids)
                for uid in uids:
                    await self._handle_message(client, uid, stats)
            finally:
                await asyncio.to_thread(client.unlock_mailbox)
        logger.info(
            "poller.scan_complete",
            unseen=stats.unseen,
            processed=stats.processed,
            skipped=stats.skipped,
            failed=stats.failed,
        )

    async def _handle_message(self, client: MailboxClient, uid: str, stats: ScanStats) -> None:
        """Process one message in isolation. It is flagged seen whether or not a proposal resulted."""
        log = logger.bind(uid=uid)
        try:
            raw = await asyncio.to_thread(client.fetch_message, uid)
        except Exception as e:
            stats.failed += 1
            log.exception("poller.fetch_failed", error=str(e))
            return
        if not raw:
            stats.skipped += 1
            log.debug("poller.empty_source")
            return

        try:
            proposal = await self._process(raw)
        except Exception as e:
            stats.failed += 1
            parsed = parse_raw_email(raw)
            log.exception("poller.message_failed", sender=parsed.sender, subject=parsed.subject, error=str(e))
        else:
            if proposal is None:
                stats.skipped += 1
            else:
                stats.processed += 1

        try:
            await asyncio.to_thread(client.mark_seen, uid)
        except Exception as e:
            log.exception("poller.mark_seen_failed", error=str(e))
