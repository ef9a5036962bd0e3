"""Comparison Agent: score and rank the proposals received for one RFP."""

import json
from typing import Any

from pydantic_ai import Agent

from rfp_desk.agents.base import create_agent
from rfp_desk.models.proposal import ComparisonResult
from rfp_desk.utils.logger import log_agent_step

COMPARISON_SYSTEM_PROMPT = """You compare vendor proposals for one RFP and recommend a vendor.

Score each proposal from 0 to 100:
- Price: up to 30 (lower is better, normalized across vendors; missing price scores low)
- Delivery: up to 20 (fewer delivery_days is better; missing scores low)
- Warranty: up to 15 (longer, clearer or on-site coverage is better)
- Completeness: up to 20 (from structured_proposal.completeness)
- Value/notes: up to 15 (discounts, payment flexibility, extra services)

Key "scores" and "recommended_vendor.vendor_id" by the vendor_id given in the input.
"summary" compares all proposals; each "reasoning" explains that vendor's score."""

_agent: Agent | None = None


def _get_agent() -> Agent:
    global _agent
    if _agent is None:
        _agent = create_agent("comparison", COMPARISON_SYSTEM_PROMPT, output_type=ComparisonResult)
    return _agent


async def compare_proposals(proposals: list[dict[str, Any]]) -> ComparisonResult:
    """proposals: dicts with id, vendor_id, vendor_name, vendor_email, structured_proposal, existing_score."""
    log_agent_step("comparison", "Comparing proposals", {"count": len(proposals)})
    prompt = f"Proposals data:\n{json.dumps(proposals, indent=2, default=str)}"
    result = await _get_agent().run(prompt)
    out = result.output
    recommended = out.recommended_vendor.vendor_id if out.recommended_vendor else None
    log_agent_step("comparison", "Comparison ready", {"recommended": recommended})
    return out
