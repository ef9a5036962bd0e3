"""Mailbox client protocol (IMAP-like interface).

Every method may block on the network; async callers run them through asyncio.to_thread.
"""

from typing import Protocol


class MailboxClient(Protocol):
    """Abstract interface for reading unseen mail and flagging it seen."""

    def connect(self) -> None:
        """Open and authenticate the connection. Raises on failure."""
        ...

    def lock_mailbox(self, mailbox: str) -> None:
        """Take the exclusive lock and select mailbox. The lock is not held if this raises."""
        ...

    def unlock_mailbox(self) -> None:
        """Deselect the mailbox and release the lock taken by lock_mailbox."""
        ...

    def search_unseen(self) -> list[str]:
        """Ids of messages in the locked mailbox not yet flagged seen."""
        ...

    def fetch_message(self, message_id: str) -> str | None:
        """Full message source without setting the seen flag; None if the message is gone."""
        ...

    def mark_seen(self, message_id: str) -> None:
        ...

    def close(self) -> None:
        ...
