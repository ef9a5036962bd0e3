"""ORM models for the procurement directory: Vendor and Rfp."""

from typing import Any

from sqlalchemy import JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rfp_desk.db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Vendor(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Vendor; email is stored lowercased and trimmed and is the key for inbound mail."""

    __tablename__ = "vendors"

    name: Mapped[str] = mapped_column(String(256), nullable=False)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False, index=True)
    metadata_json: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)

    proposals: Mapped[list["Proposal"]] = relationship(  # noqa: F821
        "Proposal", back_populates="vendor", cascade="all, delete-orphan"
    )


class Rfp(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Request for proposal: the raw description plus the LLM-structured payload."""

    __tablename__ = "rfps"

    description_raw: Mapped[str] = mapped_column(Text, nullable=False)
    structured_data: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    proposals: Mapped[list["Proposal"]] = relationship(  # noqa: F821
        "Proposal", back_populates="rfp", cascade="all, delete-orphan"
    )

    @property
    def category(self) -> str:
        return (self.structured_data or {}).get("category") or ""
