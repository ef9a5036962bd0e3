"""RFP lifecycle: structure a free-text request with the RFP Agent and persist it."""

from typing import Awaitable, Callable, Optional

from rfp_desk.agents.rfp_agent import generate_structured_rfp
from rfp_desk.db.models.procurement import Rfp
from rfp_desk.db.repositories import rfp_repo
from rfp_desk.errors import InvalidRfpError, NotFoundError
from rfp_desk.models.rfp import RfpStructure
from rfp_desk.utils.logger import get_logger

logger = get_logger("rfp_desk.services.rfps")

Structurer = Callable[[str], Awaitable[RfpStructure]]

VAGUE_MESSAGE = (
    "The description is too vague to build an RFP. Include items, quantities, "
    "budget, delivery timeline, payment terms or warranty."
)


async def _structure(description: str, structure: Optional[Structurer]) -> tuple[str, RfpStructure]:
    text = (description or "").strip()
    if not text:
        raise InvalidRfpError("RFP description must not be empty")
    structure = structure or generate_structured_rfp
    structured = await structure(text)
    if not structured.is_actionable():
        logger.warning("rfps.not_actionable", description=text[:120])
        raise InvalidRfpError(VAGUE_MESSAGE)
    return text, structured


async def create_rfp(description: str, structure: Optional[Structurer] = None) -> Rfp:
    text, structured = await _structure(description, structure)
    rfp = rfp_repo.insert(description_raw=text, structured_data=structured.model_dump())
    logger.info("rfps.created", rfp_id=rfp.id, category=structured.category)
    return rfp


def list_rfps() -> list[Rfp]:
    return rfp_repo.list_all()


def get_rfp(rfp_id: str) -> Rfp:
    rfp = rfp_repo.get(rfp_id)
    if rfp is None:
        raise NotFoundError(f"RFP with ID {rfp_id} not found")
    return rfp


async def update_rfp(rfp_id: str, description: str, structure: Optional[Structurer] = None) -> Rfp:
    """Replace the description and re-run structuring."""
    rfp = get_rfp(rfp_id)
    text, structured = await _structure(description, structure)
    updated = rfp_repo.update(rfp.id, description_raw=text, structured_data=structured.model_dump())
    logger.info("rfps.updated", rfp_id=rfp.id)
    return updated


async def regenerate_rfp(rfp_id: str, structure: Optional[Structurer] = None) -> Rfp:
    """Re-structure the stored description, e.g. after a prompt change."""
    rfp = get_rfp(rfp_id)
    return await update_rfp(rfp.id, rfp.description_raw, structure=structure)


def delete_rfp(rfp_id: str) -> None:
    rfp = get_rfp(rfp_id)
    rfp_repo.delete(rfp.id)
    logger.info("rfps.deleted", rfp_id=rfp.id)
