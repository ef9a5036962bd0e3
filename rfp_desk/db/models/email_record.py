"""ORM model for outbound RFP emails: one row per (RFP, vendor) send attempt."""

from datetime import datetime
from typing import Optional

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rfp_desk.db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

STATUS_PENDING = "pending"
STATUS_SENT = "sent"
STATUS_FAILED = "failed"


class EmailRecord(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Created pending before the SMTP call, then moved to sent or failed."""

    __tablename__ = "email_records"

    rfp_id: Mapped[str] = mapped_column(ForeignKey("rfps.id", ondelete="CASCADE"), nullable=False, index=True)
    vendor_id: Mapped[str] = mapped_column(
        ForeignKey("vendors.id", ondelete="CASCADE"), nullable=False, index=True
    )
    recipient_email: Mapped[str] = mapped_column(String(320), nullable=False)
    subject: Mapped[str] = mapped_column(String(1024), nullable=False)
    email_body: Mapped[str] = mapped_column(Text, nullable=False)

    status: Mapped[str] = mapped_column(String(16), nullable=False, default=STATUS_PENDING, index=True)
    error_message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    sent_at: Mapped[Optional[datetime]] = mapped_column(nullable=True, index=True)

    rfp: Mapped["Rfp"] = relationship("Rfp")  # noqa: F821
    vendor: Mapped["Vendor"] = relationship("Vendor")  # noqa: F821
