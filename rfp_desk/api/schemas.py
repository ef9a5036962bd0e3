"""Request bodies and row serializers for the HTTP API."""

from typing import Any, Optional

from pydantic import BaseModel, Field

from rfp_desk.db.models.email_record import EmailRecord
from rfp_desk.db.models.procurement import Rfp, Vendor
from rfp_desk.db.models.proposal import Proposal


class VendorCreateBody(BaseModel):
    name: str
    email: str
    metadata: Optional[dict[str, Any]] = None


class VendorUpdateBody(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    metadata: Optional[dict[str, Any]] = None


class RfpBody(BaseModel):
    description: str


class SendRfpBody(BaseModel):
    vendor_ids: list[str] = Field(..., min_length=1)


class ProposalUpdateBody(BaseModel):
    structured_proposal: Optional[dict[str, Any]] = None
    ai_summary: Optional[str] = None
    score: Optional[float] = Field(None, ge=0, le=100)


def _iso(value) -> Optional[str]:
    return value.isoformat() if value else None


def vendor_to_dict(vendor: Vendor) -> dict[str, Any]:
    return {
        "id": vendor.id,
        "name": vendor.name,
        "email": vendor.email,
        "metadata": vendor.metadata_json,
        "created_at": _iso(vendor.created_at),
        "updated_at": _iso(vendor.updated_at),
    }


def rfp_to_dict(rfp: Rfp) -> dict[str, Any]:
    return {
        "id": rfp.id,
        "description_raw": rfp.description_raw,
        "structured_data": rfp.structured_data,
        "created_at": _iso(rfp.created_at),
        "updated_at": _iso(rfp.updated_at),
    }


def proposal_to_dict(proposal: Proposal) -> dict[str, Any]:
    """Includes nested vendor and RFP when they were loaded with the row."""
    state = proposal.__dict__
    vendor = state.get("vendor")
    rfp = state.get("rfp")
    return {
        "id": proposal.id,
        "vendor_id": proposal.vendor_id,
        "rfp_id": proposal.rfp_id,
        "raw_email": proposal.raw_email,
        "structured_proposal": proposal.structured_proposal,
        "ai_summary": proposal.ai_summary,
        "score": proposal.score,
        "created_at": _iso(proposal.created_at),
        "vendor": vendor_to_dict(vendor) if vendor is not None else None,
        "rfp": rfp_to_dict(rfp) if rfp is not None else None,
    }


def email_record_to_dict(record: EmailRecord) -> dict[str, Any]:
    state = record.__dict__
    vendor = state.get("vendor")
    rfp = state.get("rfp")
    return {
        "id": record.id,
        "rfp_id": record.rfp_id,
        "vendor_id": record.vendor_id,
        "recipient_email": record.recipient_email,
        "subject": record.subject,
        "email_body": record.email_body,
        "status": record.status,
        "error_message": record.error_message,
        "sent_at": _iso(record.sent_at),
        "created_at": _iso(record.created_at),
        "vendor": vendor_to_dict(vendor) if vendor is not None else None,
        "rfp": rfp_to_dict(rfp) if rfp is not None else None,
    }
