"""Pydantic models for RFP Desk."""

from rfp_desk.models.email import InboundEmail
from rfp_desk.models.outputs import CheckResult, EmailPreview, SendResult
from rfp_desk.models.proposal import (
    ComparisonResult,
    ProposalItem,
    ProposalStructure,
    RecommendedVendor,
    VendorScore,
)
from rfp_desk.models.rfp import RfpItem, RfpStructure

__all__ = [
    "InboundEmail",
    "CheckResult",
    "EmailPreview",
    "SendResult",
    "ComparisonResult",
    "ProposalItem",
    "ProposalStructure",
    "RecommendedVendor",
    "VendorScore",
    "RfpItem",
    "RfpStructure",
]
