"""SMTP transport for outbound RFP email (STARTTLS + login)."""

import smtplib
from email.message import EmailMessage

from rfp_desk.config import (
    SMTP_FROM,
    SMTP_HOST,
    SMTP_PASS,
    SMTP_PORT,
    SMTP_TIMEOUT_SECONDS,
    SMTP_USER,
)
from rfp_desk.errors import MailNotConfiguredError
from rfp_desk.utils.logger import get_logger

logger = get_logger("rfp_desk.mail.smtp")


class SmtpSender:
    """Sends one plain-text message per call over a fresh SMTP connection."""

    def __init__(
        self,
        host: str = SMTP_HOST,
        port: int = SMTP_PORT,
        user: str = SMTP_USER,
        password: str = SMTP_PASS,
        from_addr: str = SMTP_FROM,
        timeout: float = SMTP_TIMEOUT_SECONDS,
    ):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.from_addr = from_addr
        self.timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self.host and self.user and self.password)

    def send(self, to: str, subject: str, text: str) -> None:
        if not self.configured:
            raise MailNotConfiguredError("SMTP credentials are not configured (SMTP_HOST/SMTP_USER/SMTP_PASS)")
        msg = EmailMessage()
        msg["From"] = self.from_addr
        msg["To"] = to
        msg["Subject"] = subject
        msg.set_content(text)
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
            smtp.starttls()
            smtp.login(self.user, self.password)
            smtp.send_message(msg)
        logger.info("smtp.sent", to=to, subject=subject)
