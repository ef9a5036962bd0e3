"""Email record repository: outbound send lifecycle and the history used for reply matching."""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from rfp_desk.db import get_session
from rfp_desk.db.models.email_record import (
    STATUS_FAILED,
    STATUS_PENDING,
    STATUS_SENT,
    EmailRecord,
)


def insert_pending(
    rfp_id: str,
    vendor_id: str,
    recipient_email: str,
    subject: str,
    email_body: str,
) -> EmailRecord:
    """Insert a pending row. Call immediately before the SMTP send attempt."""
    with get_session() as session:
        row = EmailRecord(
            rfp_id=rfp_id,
            vendor_id=vendor_id,
            recipient_email=recipient_email,
            subject=subject,
            email_body=email_body,
            status=STATUS_PENDING,
        )
        session.add(row)
        session.flush()
        session.refresh(row)
        session.expunge(row)
        return row


def mark_sent(record_id: str, sent_at: Optional[datetime] = None) -> bool:
    """Set status to sent with a timestamp. Returns True if a row was updated."""
    with get_session() as session:
        row = session.get(EmailRecord, record_id)
        if row is None:
            return False
        row.status = STATUS_SENT
        row.sent_at = sent_at or datetime.now(timezone.utc)
        row.error_message = None
        return True


def mark_failed(record_id: str, error_message: str) -> bool:
    """Set status to failed with the error text. Returns True if a row was updated."""
    with get_session() as session:
        row = session.get(EmailRecord, record_id)
        if row is None:
            return False
        row.status = STATUS_FAILED
        row.error_message = error_message
        return True


def get(record_id: str) -> Optional[EmailRecord]:
    with get_session() as session:
        row = session.get(EmailRecord, record_id)
        if row is not None:
            session.expunge(row)
        return row


def recent_sent_for_vendor(vendor_id: str, since: datetime, limit: int = 10) -> list[EmailRecord]:
    """Sent records for this vendor with sent_at >= since, newest first, with the RFP loaded."""
    with get_session() as session:
        q = (
            select(EmailRecord)
            .options(selectinload(EmailRecord.rfp))
            .where(EmailRecord.vendor_id == vendor_id)
            .where(EmailRecord.status == STATUS_SENT)
            .where(EmailRecord.sent_at >= since)
            .order_by(EmailRecord.sent_at.desc())
            .limit(limit)
        )
        rows = list(session.scalars(q).all())
        session.expunge_all()
        return rows


def list_all(rfp_id: Optional[str] = None) -> list[EmailRecord]:
    """All records (optionally for one RFP), newest first, with RFP and vendor loaded."""
    with get_session() as session:
        q = select(EmailRecord).options(
            selectinload(EmailRecord.rfp),
            selectinload(EmailRecord.vendor),
        )
        if rfp_id is not None:
            q = q.where(EmailRecord.rfp_id == rfp_id)
        q = q.order_by(EmailRecord.created_at.desc())
        rows = list(session.scalars(q).all())
        session.expunge_all()
        return rows
