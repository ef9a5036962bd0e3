"""Proposal repository: create-only ingestion plus comparison/manual-edit updates."""

from typing import Any, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from rfp_desk.db import get_session
from rfp_desk.db.models.proposal import Proposal

_UNSET: Any = object()


def insert(
    vendor_id: str,
    rfp_id: str,
    raw_email: str,
    structured_proposal: dict[str, Any],
    score: Optional[float] = None,
) -> Proposal:
    """Insert a new proposal. No dedup: every call creates a row."""
    with get_session() as session:
        row = Proposal(
            vendor_id=vendor_id,
            rfp_id=rfp_id,
            raw_email=raw_email,
            structured_proposal=structured_proposal,
            ai_summary=None,
            score=score,
        )
        session.add(row)
        session.flush()
        session.refresh(row)
        session.expunge(row)
        return row


def _with_relations(q):
    return q.options(selectinload(Proposal.vendor), selectinload(Proposal.rfp))


def get(proposal_id: str) -> Optional[Proposal]:
    with get_session() as session:
        row = session.scalars(_with_relations(select(Proposal).where(Proposal.id == proposal_id))).first()
        session.expunge_all()
        return row


def list_all(rfp_id: Optional[str] = None) -> list[Proposal]:
    """All proposals (optionally for one RFP), newest first, with vendor and RFP loaded."""
    with get_session() as session:
        q = _with_relations(select(Proposal))
        if rfp_id is not None:
            q = q.where(Proposal.rfp_id == rfp_id)
        q = q.order_by(Proposal.created_at.desc())
        rows = list(session.scalars(q).all())
        session.expunge_all()
        return rows


def count_for(vendor_id: str, rfp_id: str) -> int:
    """Proposals received from one vendor for one RFP."""
    with get_session() as session:
        q = (
            select(func.count(Proposal.id))
            .where(Proposal.vendor_id == vendor_id)
            .where(Proposal.rfp_id == rfp_id)
        )
        return session.scalar(q) or 0


def update(
    proposal_id: str,
    structured_proposal: Any = _UNSET,
    ai_summary: Any = _UNSET,
    score: Any = _UNSET,
) -> Optional[Proposal]:
    """Update only the fields that were passed. Returns None if the proposal does not exist."""
    with get_session() as session:
        row = session.get(Proposal, proposal_id)
        if row is None:
            return None
        if structured_proposal is not _UNSET:
            row.structured_proposal = structured_proposal
        if ai_summary is not _UNSET:
            row.ai_summary = ai_summary
        if score is not _UNSET:
            row.score = score
        session.flush()
        session.refresh(row)
        session.expunge(row)
        return row


def apply_vendor_scores(rfp_id: str, scores: dict[str, tuple[float, str]]) -> int:
    """Write (score, reasoning) onto every proposal of the RFP whose vendor_id is keyed. Returns rows updated."""
    with get_session() as session:
        rows = list(session.scalars(select(Proposal).where(Proposal.rfp_id == rfp_id)).all())
        updated = 0
        for row in rows:
            if row.vendor_id not in scores:
                continue
            row.score, row.ai_summary = scores[row.vendor_id]
            updated += 1
        return updated
