"""Mail access: raw message parsing, IMAP mailbox client and SMTP sender."""

from rfp_desk.mail.imap_client import ImapMailboxClient
from rfp_desk.mail.parser import parse_raw_email
from rfp_desk.mail.protocol import MailboxClient
from rfp_desk.mail.smtp_sender import SmtpSender

__all__ = [
    "ImapMailboxClient",
    "MailboxClient",
    "SmtpSender",
    "parse_raw_email",
]
