"""IMAP mailbox client over imaplib (SSL, UID commands)."""

import imaplib
import threading
from typing import Optional

from rfp_desk.utils.logger import get_logger

logger = get_logger("rfp_desk.mail.imap")


class ImapMailboxClient:
    """One authenticated IMAP4_SSL connection; lock_mailbox serializes scans on it."""

    def __init__(
        self,
        host: str,
        user: str,
        password: str,
        port: int = 993,
        timeout: float | None = 30.0,
    ):
        self._host = host
        self._port = port
        self._user = user
        self._password = password
        self._timeout = timeout
        self._conn: imaplib.IMAP4_SSL | None = None
        # threading.Lock, not RLock: lock and unlock may run on different worker threads
        self._lock = threading.Lock()
        self._selected: Optional[str] = None

    def connect(self) -> None:
        conn = imaplib.IMAP4_SSL(self._host, self._port, timeout=self._timeout)
        try:
            conn.login(self._user, self._password)
        except imaplib.IMAP4.error:
            conn.shutdown()
            raise
        self._conn = conn
        logger.info("imap.connected", host=self._host, user=self._user)

    def _require_conn(self) -> imaplib.IMAP4_SSL:
        if self._conn is None:
            raise RuntimeError("IMAP client is not connected")
        return self._conn

    def lock_mailbox(self, mailbox: str) -> None:
        self._lock.acquire()
        try:
            conn = self._require_conn()
            status, data = conn.select(mailbox)
            if status != "OK":
                raise imaplib.IMAP4.error(f"SELECT {mailbox} failed: {data!r}")
        except BaseException:
            self._lock.release()
            raise
        self._selected = mailbox
        logger.debug("imap.mailbox_locked", mailbox=mailbox)

    def unlock_mailbox(self) -> None:
        mailbox, self._selected = self._selected, None
        try:
            if self._conn is not None:
                self._conn.close()
        except (imaplib.IMAP4.error, OSError) as e:
            logger.debug("imap.mailbox_close_error", mailbox=mailbox, error=str(e))
        finally:
            self._lock.release()
        logger.debug("imap.mailbox_released", mailbox=mailbox)

    def search_unseen(self) -> list[str]:
        status, data = self._require_conn().uid("search", None, "UNSEEN")
        if status != "OK":
            raise imaplib.IMAP4.error(f"UID SEARCH UNSEEN failed: {data!r}")
        raw = data[0] if data and data[0] else b""
        return [uid.decode() for uid in raw.split()]

    def fetch_message(self, message_id: str) -> str | None:
        # BODY.PEEK[] = fetch without setting \Seen
        status, data = self._require_conn().uid("fetch", message_id, "(BODY.PEEK[])")
        if status != "OK":
            raise imaplib.IMAP4.error(f"UID FETCH {message_id} failed: {data!r}")
        for part in data or []:
            if isinstance(part, tuple) and len(part) >= 2 and isinstance(part[1], bytes):
                return part[1].decode("utf-8", errors="replace")
        return None

    def mark_seen(self, message_id: str) -> None:
        status, data = self._require_conn().uid("store", message_id, "+FLAGS", "(\\Seen)")
        if status != "OK":
            raise imaplib.IMAP4.error(f"UID STORE {message_id} +FLAGS failed: {data!r}")

    def close(self) -> None:
        if self._conn is None:
            return
        try:
            self._conn.logout()
        except (imaplib.IMAP4.error, OSError) as e:
            logger.debug("imap.logout_error", error=str(e))
        self._conn = None
