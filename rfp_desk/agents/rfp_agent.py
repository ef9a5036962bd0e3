"""RFP Agent: structure a natural-language request and write the outbound subject line."""

from pydantic_ai import Agent

from rfp_desk.agents.base import create_agent
from rfp_desk.models.rfp import RfpStructure
from rfp_desk.utils.logger import get_logger, log_agent_step

logger = get_logger("rfp_desk.agents.rfp")

DEFAULT_SUBJECT = "RFP Request"

RFP_SYSTEM_PROMPT = """You convert natural-language procurement requests into a structured RFP.

Extract budget (number), budget_currency (ISO code inferred from symbols such as $, ₹, €), budget_per_unit,
items (name, quantity, specifications), quantities (item name -> quantity), delivery_timeline, payment_terms,
warranty, special_requests (always keep discount expectations and urgent quantities), category and metadata.

Rephrase text fields in clear, professional, vendor-friendly language while keeping their meaning.
Only extract what is stated or clearly implied. If the request is too vague to quote against,
leave most fields null."""

SUBJECT_SYSTEM_PROMPT = """You write short, professional email subject lines for RFP emails.
Use the form "RFP for <main item or service>", at most 60 characters.
Return only the subject text, without quotes."""

_rfp_agent: Agent | None = None
_subject_agent: Agent | None = None


def _get_rfp_agent() -> Agent:
    global _rfp_agent
    if _rfp_agent is None:
        _rfp_agent = create_agent("rfp", RFP_SYSTEM_PROMPT, output_type=RfpStructure)
    return _rfp_agent


def _get_subject_agent() -> Agent:
    global _subject_agent
    if _subject_agent is None:
        _subject_agent = create_agent("email_subject", SUBJECT_SYSTEM_PROMPT, output_type=str)
    return _subject_agent


async def generate_structured_rfp(description: str) -> RfpStructure:
    log_agent_step("rfp", "Structuring RFP description", {"description_chars": len(description)})
    result = await _get_rfp_agent().run(f"User description: {description}")
    out = result.output
    log_agent_step("rfp", "Structured RFP", {"items": len(out.items), "category": out.category})
    return out


async def generate_email_subject(description: str) -> str:
    """Return an LLM-written subject line, or DEFAULT_SUBJECT if the call fails."""
    try:
        result = await _get_subject_agent().run(f"RFP description: {description}")
    except Exception as e:
        logger.warning("rfp_agent.subject_fallback", error=str(e))
        return DEFAULT_SUBJECT
    subject = (result.output or "").strip().strip("\"'").strip()
    return subject or DEFAULT_SUBJECT
