"""Proposal routes: listing, manual edit and comparison."""

from typing import Any

from fastapi import APIRouter

from rfp_desk.api.schemas import ProposalUpdateBody, proposal_to_dict
from rfp_desk.services import proposal_service

router = APIRouter(prefix="/proposals", tags=["proposals"])


@router.get("")
async def list_proposals() -> list[dict[str, Any]]:
    return [proposal_to_dict(p) for p in proposal_service.list_proposals()]


@router.get("/rfp/{rfp_id}")
async def list_proposals_for_rfp(rfp_id: str) -> list[dict[str, Any]]:
    return [proposal_to_dict(p) for p in proposal_service.list_proposals_for_rfp(rfp_id)]


@router.get("/rfp/{rfp_id}/compare")
async def compare_proposals(rfp_id: str) -> dict[str, Any]:
    """Run the comparison agent and persist per-vendor scores."""
    result = await proposal_service.compare_proposals(rfp_id)
    return result.model_dump()


@router.get("/{proposal_id}")
async def get_proposal(proposal_id: str) -> dict[str, Any]:
    return proposal_to_dict(proposal_service.get_proposal(proposal_id))


@router.patch("/{proposal_id}")
async def update_proposal(proposal_id: str, body: ProposalUpdateBody) -> dict[str, Any]:
    fields = body.model_dump(exclude_unset=True)
    return proposal_to_dict(proposal_service.update_proposal(proposal_id, **fields))
