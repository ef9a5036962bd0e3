"""RFP repository."""

from typing import Any, Optional

from sqlalchemy import delete as sql_delete
from sqlalchemy import select

from rfp_desk.db import get_session
from rfp_desk.db.models.email_record import EmailRecord
from rfp_desk.db.models.procurement import Rfp


def insert(description_raw: str, structured_data: dict[str, Any]) -> Rfp:
    with get_session() as session:
        row = Rfp(description_raw=description_raw, structured_data=structured_data)
        session.add(row)
        session.flush()
        session.refresh(row)
        session.expunge(row)
        return row


def get(rfp_id: str) -> Optional[Rfp]:
    """Return the RFP for this id, or None. Ids are compared in canonical lowercase form."""
    with get_session() as session:
        row = session.get(Rfp, (rfp_id or "").strip().lower())
        if row is not None:
            session.expunge(row)
        return row


def list_all() -> list[Rfp]:
    with get_session() as session:
        rows = list(session.scalars(select(Rfp).order_by(Rfp.created_at.desc())).all())
        session.expunge_all()
        return rows


def update(
    rfp_id: str,
    description_raw: Optional[str] = None,
    structured_data: Optional[dict[str, Any]] = None,
) -> Optional[Rfp]:
    with get_session() as session:
        row = session.get(Rfp, rfp_id)
        if row is None:
            return None
        if description_raw is not None:
            row.description_raw = description_raw
        if structured_data is not None:
            row.structured_data = structured_data
        session.flush()
        session.refresh(row)
        session.expunge(row)
        return row


def delete(rfp_id: str) -> bool:
    """Delete the RFP with its proposals and outbound email history."""
    with get_session() as session:
        row = session.get(Rfp, rfp_id)
        if row is None:
            return False
        session.execute(sql_delete(EmailRecord).where(EmailRecord.rfp_id == rfp_id))
        session.delete(row)
        return True
