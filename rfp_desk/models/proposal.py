"""Structured proposal and comparison models returned by the LLM agents."""

from typing import Optional

from pydantic import BaseModel, Field


class ProposalItem(BaseModel):
    """One priced line item quoted by a vendor."""

    name: str
    quantity: float
    unit_price: Optional[float] = None
    total_price: Optional[float] = None


class ProposalStructure(BaseModel):
    """Fields extracted from a vendor reply. completeness is 0-100."""

    price: Optional[float] = None
    items: list[ProposalItem] = Field(default_factory=list)
    delivery_days: Optional[float] = None
    warranty: Optional[str] = None
    notes: Optional[str] = None
    completeness: float = Field(0, ge=0, le=100)


class VendorScore(BaseModel):
    score: float = Field(..., ge=0, le=100)
    reasoning: str


class RecommendedVendor(BaseModel):
    vendor_id: str
    reason: str


class ComparisonResult(BaseModel):
    """Comparison Agent output: summary, per-vendor scores keyed by vendor_id, and the pick."""

    summary: str
    scores: dict[str, VendorScore] = Field(default_factory=dict)
    recommended_vendor: Optional[RecommendedVendor] = None
