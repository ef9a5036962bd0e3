"""ORM model for vendor proposals parsed from inbound email."""

from typing import Any, Optional

from sqlalchemy import JSON, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rfp_desk.db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Proposal(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """One row per correlated vendor reply. score/ai_summary are filled by comparison or manual edit."""

    __tablename__ = "proposals"

    vendor_id: Mapped[str] = mapped_column(
        ForeignKey("vendors.id", ondelete="CASCADE"), nullable=False, index=True
    )
    rfp_id: Mapped[str] = mapped_column(ForeignKey("rfps.id", ondelete="CASCADE"), nullable=False, index=True)
    raw_email: Mapped[str] = mapped_column(Text, nullable=False)
    structured_proposal: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    ai_summary: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    score: Mapped[Optional[float]] = mapped_column(nullable=True)

    vendor: Mapped["Vendor"] = relationship("Vendor", back_populates="proposals")  # noqa: F821
    rfp: Mapped["Rfp"] = relationship("Rfp", back_populates="proposals")  # noqa: F821
