"""Proposal Agent: extract a structured proposal from a vendor's reply body."""

from pydantic_ai import Agent

from rfp_desk.agents.base import create_agent
from rfp_desk.models.proposal import ProposalStructure
from rfp_desk.utils.logger import log_agent_step

PROPOSAL_SYSTEM_PROMPT = """You extract structured proposal information from vendor email replies to an RFP.

Extract:
- price: total price quoted (number). Read regional digit grouping correctly, e.g. "1,40,500" is 140500.
- items: each quoted item with name, quantity, unit_price and total_price when stated.
- delivery_days: days until delivery (number).
- warranty: warranty terms as stated.
- notes: other conditions (discounts, payment terms, support).
- completeness: 0-100. Pricing 30, all requested items addressed 30, delivery timeline 20, warranty 10, extra details 10.

Use null for anything the email does not state. Do not invent values."""

_agent: Agent | None = None


def _get_agent() -> Agent:
    global _agent
    if _agent is None:
        _agent = create_agent("proposal", PROPOSAL_SYSTEM_PROMPT, output_type=ProposalStructure)
    return _agent


async def parse_vendor_email(email_body: str) -> ProposalStructure:
    """Turn a vendor reply body into a ProposalStructure. Failures propagate to the caller."""
    log_agent_step("proposal", "Parsing vendor email", {"body_chars": len(email_body)})
    result = await _get_agent().run(f"Email body:\n{email_body}")
    out = result.output
    log_agent_step("proposal", "Parsed vendor email", {"price": out.price, "completeness": out.completeness})
    return out
