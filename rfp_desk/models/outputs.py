"""Result models returned to API and CLI callers."""

from pydantic import BaseModel


class CheckResult(BaseModel):
    """Summary of one mailbox scan. processed counts proposals created."""

    success: bool
    message: str
    processed: int = 0


class SendResult(BaseModel):
    """Outcome of sending an RFP to one vendor."""

    vendor_id: str
    success: bool
    message: str


class EmailPreview(BaseModel):
    subject: str
    text: str
