"""Proposal queries, manual edits and LLM comparison for one RFP."""

from typing import Any, Awaitable, Callable, Optional

from rfp_desk.agents.comparison_agent import compare_proposals as run_comparison
from rfp_desk.db.models.proposal import Proposal
from rfp_desk.db.repositories import proposal_repo
from rfp_desk.errors import NotFoundError
from rfp_desk.models.proposal import ComparisonResult
from rfp_desk.services.rfp_service import get_rfp
from rfp_desk.utils.logger import get_logger

logger = get_logger("rfp_desk.services.proposals")

Comparer = Callable[[list[dict[str, Any]]], Awaitable[ComparisonResult]]

NO_PROPOSALS_SUMMARY = "No proposals found for this RFP"


def list_proposals() -> list[Proposal]:
    return proposal_repo.list_all()


def list_proposals_for_rfp(rfp_id: str) -> list[Proposal]:
    """Newest first. Raises NotFoundError for an unknown RFP."""
    return proposal_repo.list_all(rfp_id=get_rfp(rfp_id).id)


def get_proposal(proposal_id: str) -> Proposal:
    proposal = proposal_repo.get(proposal_id)
    if proposal is None:
        raise NotFoundError(f"Proposal with ID {proposal_id} not found")
    return proposal


def update_proposal(proposal_id: str, **fields: Any) -> Proposal:
    """Manual edit of structured_proposal, ai_summary and/or score."""
    allowed = {k: v for k, v in fields.items() if k in ("structured_proposal", "ai_summary", "score")}
    proposal = proposal_repo.update(proposal_id, **allowed)
    if proposal is None:
        raise NotFoundError(f"Proposal with ID {proposal_id} not found")
    logger.info("proposals.updated", proposal_id=proposal_id, fields=sorted(allowed))
    return get_proposal(proposal_id)


def _comparison_input(proposal: Proposal) -> dict[str, Any]:
    return {
        "id": proposal.id,
        "vendor_id": proposal.vendor_id,
        "vendor_name": proposal.vendor.name if proposal.vendor else None,
        "vendor_email": proposal.vendor.email if proposal.vendor else None,
        "structured_proposal": proposal.structured_proposal,
        "existing_score": proposal.score,
    }


async def compare_proposals(rfp_id: str, compare: Optional[Comparer] = None) -> ComparisonResult:
    """Score every proposal of the RFP and write score and reasoning back per vendor."""
    rfp = get_rfp(rfp_id)
    proposals = proposal_repo.list_all(rfp_id=rfp.id)
    if not proposals:
        return ComparisonResult(summary=NO_PROPOSALS_SUMMARY, scores={}, recommended_vendor=None)

    compare = compare or run_comparison
    result = await compare([_comparison_input(p) for p in proposals])
    updated = proposal_repo.apply_vendor_scores(
        rfp.id,
        {vendor_id: (s.score, s.reasoning) for vendor_id, s in result.scores.items()},
    )
    logger.info(
        "proposals.compared",
        rfp_id=rfp.id,
        proposals=len(proposals),
        updated=updated,
        recommended=result.recommended_vendor.vendor_id if result.recommended_vendor else None,
    )
    return result
