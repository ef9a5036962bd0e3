"""Test doubles for the mailbox client, SMTP sender and LLM extractors."""

import threading
from typing import Optional

from rfp_desk.models.proposal import ProposalStructure


class FakeMailboxClient:
    """In-memory mailbox: uid -> raw source, with a seen set and failure injection."""

    def __init__(self, messages: Optional[dict[str, str]] = None, fail_connect: bool = False):
        self.messages = dict(messages or {})
        self.seen: set[str] = set()
        self.fail_connect = fail_connect
        self.fail_fetch: set[str] = set()
        self.connected = False
        self.closed = False
        # lock attempts, including ones that found the mailbox already locked
        self.lock_count = 0
        self.lock_threads: list[int] = []
        self._lock = threading.Lock()

    def connect(self) -> None:
        if self.fail_connect:
            raise ConnectionRefusedError("imap down")
        self.connected = True

    def lock_mailbox(self, mailbox: str) -> None:
        self.lock_count += 1
        if not self._lock.acquire(blocking=False):
            raise RuntimeError("mailbox is already locked")
        self.lock_threads.append(threading.get_ident())

    def unlock_mailbox(self) -> None:
        self.lock_threads.append(threading.get_ident())
        self._lock.release()

    @property
    def locked(self) -> bool:
        return self._lock.locked()

    def search_unseen(self) -> list[str]:
        return [uid for uid in self.messages if uid not in self.seen]

    def fetch_message(self, uid: str) -> Optional[str]:
        if uid in self.fail_fetch:
            raise OSError("fetch failed")
        return self.messages.get(uid)

    def mark_seen(self, uid: str) -> None:
        self.seen.add(uid)

    def close(self) -> None:
        self.closed = True


class FakeSmtpSender:
    configured = True

    def __init__(self, fail_for: Optional[set[str]] = None):
        self.fail_for = fail_for or set()
        self.sent: list[tuple[str, str, str]] = []

    def send(self, to: str, subject: str, text: str) -> None:
        if to in self.fail_for:
            raise ConnectionError(f"550 mailbox unavailable: {to}")
        self.sent.append((to, subject, text))


def fixed_extractor(**fields):
    """Async extractor returning the same ProposalStructure for every body."""
    calls: list[str] = []

    async def extract(body: str) -> ProposalStructure:
        calls.append(body)
        return ProposalStructure(**fields)

    extract.calls = calls
    return extract


def raw_message(sender: str, subject: str, body: str) -> str:
    return (
        f"From: Vendor <{sender}>\r\n"
        "To: rfp@example.com\r\n"
        f"Subject: {subject}\r\n"
        "Content-Type: text/plain; charset=utf-8\r\n"
        "\r\n"
        f"{body}\r\n"
    )
