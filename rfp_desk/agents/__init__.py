"""Pydantic AI agents for RFP structuring, proposal extraction and comparison."""

from rfp_desk.agents.comparison_agent import compare_proposals
from rfp_desk.agents.proposal_agent import parse_vendor_email
from rfp_desk.agents.rfp_agent import (
    DEFAULT_SUBJECT,
    generate_email_subject,
    generate_structured_rfp,
)

__all__ = [
    "compare_proposals",
    "parse_vendor_email",
    "generate_structured_rfp",
    "generate_email_subject",
    "DEFAULT_SUBJECT",
]
