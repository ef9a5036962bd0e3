"""Turn a correlated vendor reply into a persisted proposal."""

from typing import Awaitable, Callable, Optional

from rfp_desk.agents.proposal_agent import parse_vendor_email
from rfp_desk.correlation import correlate
from rfp_desk.db.models.proposal import Proposal
from rfp_desk.db.repositories import proposal_repo, rfp_repo, vendor_repo
from rfp_desk.errors import NotFoundError
from rfp_desk.mail.parser import parse_raw_email
from rfp_desk.models.proposal import ProposalStructure
from rfp_desk.utils.logger import get_logger
from rfp_desk.utils.tracing import get_tracer

logger = get_logger("rfp_desk.ingestion.proposal_builder")

Extractor = Callable[[str], Awaitable[ProposalStructure]]


async def create_proposal_from_email(
    vendor_email: str,
    rfp_id: str,
    email_body: str,
    extract: Optional[Extractor] = None,
) -> Proposal:
    """Create one proposal row. Raises NotFoundError if the vendor or RFP is missing.

    Extraction failures propagate; score starts as the extraction's completeness.
    """
    vendor = vendor_repo.get_by_email(vendor_email)
    if vendor is None:
        logger.warning("proposal_builder.vendor_not_found", vendor_email=vendor_email)
        raise NotFoundError(f"Vendor with email {vendor_email} not found")

    rfp = rfp_repo.get(rfp_id)
    if rfp is None:
        logger.warning("proposal_builder.rfp_not_found", rfp_id=rfp_id)
        raise NotFoundError(f"RFP with ID {rfp_id} not found")

    extract = extract or parse_vendor_email
    structured = await extract(email_body)

    # no dedup; repeat replies (or reprocessed messages) become additional proposals
    existing = proposal_repo.count_for(vendor.id, rfp.id)
    if existing:
        logger.info("proposal_builder.additional_proposal", vendor_id=vendor.id, rfp_id=rfp.id, existing=existing)

    row = proposal_repo.insert(
        vendor_id=vendor.id,
        rfp_id=rfp.id,
        raw_email=email_body,
        structured_proposal=structured.model_dump(),
        score=structured.completeness,
    )
    logger.info(
        "proposal_builder.created",
        proposal_id=row.id,
        vendor_id=vendor.id,
        rfp_id=rfp.id,
        price=structured.price,
    )
    return row


async def process_incoming_email(raw: str, extract: Optional[Extractor] = None) -> Optional[Proposal]:
    """Parse, correlate and persist one inbound message.

    Returns None when the sender cannot be read or no RFP can be resolved. Builder and
    extraction errors propagate to the caller.
    """
    tracer = get_tracer()
    with tracer.start_as_current_span("process_incoming_email") as span:
        email = parse_raw_email(raw)
        log = logger.bind(sender=email.sender, subject=email.subject)
        if not email.sender:
            log.warning("ingest.no_sender")
            return None

        correlation = correlate(email)
        if correlation is None:
            log.warning("ingest.unresolved_rfp", detail="Manual linking may be required")
            return None
        span.set_attribute("ingest.rfp_id", correlation.rfp_id)
        span.set_attribute("ingest.match_method", correlation.method)

        proposal = await create_proposal_from_email(email.sender, correlation.rfp_id, email.body, extract=extract)
        log.info(
            "ingest.proposal_created",
            proposal_id=proposal.id,
            rfp_id=proposal.rfp_id,
            method=correlation.method,
        )
        return proposal
