"""Correlate an inbound vendor reply with the RFP it answers."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from rfp_desk.config import (
    CONTEXT_MATCH_LIMIT,
    CONTEXT_MATCH_THRESHOLD,
    CONTEXT_MATCH_WINDOW_DAYS,
)
from rfp_desk.correlation.matchers import first_match
from rfp_desk.db.models.procurement import Rfp
from rfp_desk.db.repositories import email_record_repo, vendor_repo
from rfp_desk.models.email import InboundEmail
from rfp_desk.utils.logger import get_logger

logger = get_logger("rfp_desk.correlation")

METHOD_CONTEXT_KEYWORDS = "context_keywords"
METHOD_CONTEXT_RECENT = "context_recent"


@dataclass(frozen=True)
class Correlation:
    """Resolved RFP id plus the rule that produced it (matcher name or context_*)."""

    rfp_id: str
    method: str


def keyword_overlap(tokens: list[str], rfp: Rfp) -> int:
    """Count tokens contained (as substrings) in the RFP's category or raw description."""
    category = rfp.category.lower()
    description = (rfp.description_raw or "").lower()
    return sum(1 for token in tokens if token in category or token in description)


def match_by_context(
    sender: str,
    subject: str,
    now: Optional[datetime] = None,
) -> Optional[Correlation]:
    """Fallback for replies without an identifier, using the vendor's recent sent RFP emails.

    Candidates are scanned newest first and the first one reaching the keyword threshold
    wins, even if a later candidate would overlap more. Without any such candidate the
    most recent RFP emailed to the vendor is used.
    """
    vendor = vendor_repo.get_by_email(sender)
    if vendor is None:
        logger.info("correlation.context.unknown_sender", sender=sender)
        return None

    now = now or datetime.now(timezone.utc)
    since = now - timedelta(days=CONTEXT_MATCH_WINDOW_DAYS)
    records = email_record_repo.recent_sent_for_vendor(vendor.id, since, limit=CONTEXT_MATCH_LIMIT)
    if not records:
        logger.info("correlation.context.no_history", sender=sender, vendor_id=vendor.id)
        return None

    tokens = subject.lower().split()
    for record in records:
        if record.rfp is None:
            continue
        score = keyword_overlap(tokens, record.rfp)
        if score >= CONTEXT_MATCH_THRESHOLD:
            logger.debug(
                "correlation.context.keyword_match",
                rfp_id=record.rfp.id,
                score=score,
                sent_at=str(record.sent_at),
            )
            return Correlation(record.rfp.id, METHOD_CONTEXT_KEYWORDS)

    latest = records[0].rfp
    if latest is None:
        return None
    logger.debug("correlation.context.recent_fallback", rfp_id=latest.id, candidates=len(records))
    return Correlation(latest.id, METHOD_CONTEXT_RECENT)


def correlate(email: InboundEmail, now: Optional[datetime] = None) -> Optional[Correlation]:
    """Return the RFP this email answers, or None when it cannot be resolved."""
    hit = first_match(email)
    if hit is not None:
        method, rfp_id = hit
        logger.debug("correlation.identifier_match", method=method, rfp_id=rfp_id)
        return Correlation(rfp_id, method)

    if not email.sender:
        return None
    logger.info("correlation.context.start", sender=email.sender)
    return match_by_context(email.sender, email.subject, now=now)
