"""Vendor repository: the vendor directory used to resolve inbound senders."""

from typing import Any, Optional

from sqlalchemy import delete as sql_delete
from sqlalchemy import select

from rfp_desk.db import get_session
from rfp_desk.db.models.email_record import EmailRecord
from rfp_desk.db.models.procurement import Vendor


def insert(name: str, email: str, metadata: Optional[dict[str, Any]] = None) -> Vendor:
    """Insert a vendor. Caller normalizes the email."""
    with get_session() as session:
        row = Vendor(name=name, email=email, metadata_json=metadata)
        session.add(row)
        session.flush()
        session.refresh(row)
        session.expunge(row)
        return row


def get(vendor_id: str) -> Optional[Vendor]:
    with get_session() as session:
        row = session.get(Vendor, vendor_id)
        if row is not None:
            session.expunge(row)
        return row


def get_by_email(email: str) -> Optional[Vendor]:
    """Exact match on the stored (lowercased, trimmed) address."""
    with get_session() as session:
        row = session.scalars(select(Vendor).where(Vendor.email == email)).first()
        if row is not None:
            session.expunge(row)
        return row


def list_all() -> list[Vendor]:
    with get_session() as session:
        rows = list(session.scalars(select(Vendor).order_by(Vendor.name.asc())).all())
        session.expunge_all()
        return rows


def update(vendor_id: str, **fields: Any) -> Optional[Vendor]:
    """Apply name/email/metadata_json changes. Returns None if the vendor does not exist."""
    with get_session() as session:
        row = session.get(Vendor, vendor_id)
        if row is None:
            return None
        for key in ("name", "email", "metadata_json"):
            if key in fields:
                setattr(row, key, fields[key])
        session.flush()
        session.refresh(row)
        session.expunge(row)
        return row


def delete(vendor_id: str) -> bool:
    with get_session() as session:
        row = session.get(Vendor, vendor_id)
        if row is None:
            return False
        session.execute(sql_delete(EmailRecord).where(EmailRecord.vendor_id == vendor_id))
        session.delete(row)
        return True
