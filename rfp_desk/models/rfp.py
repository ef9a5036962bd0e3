"""Structured RFP model returned by the RFP Agent."""

from typing import Any, Optional

from pydantic import BaseModel, Field


class RfpItem(BaseModel):
    name: str
    quantity: float
    specifications: Optional[str] = None


class RfpStructure(BaseModel):
    """Structured form of a natural-language procurement request."""

    budget: Optional[float] = None
    budget_currency: Optional[str] = None
    budget_per_unit: Optional[float] = None
    items: list[RfpItem] = Field(default_factory=list)
    quantities: dict[str, Optional[float]] = Field(default_factory=dict)
    delivery_timeline: Optional[str] = None
    payment_terms: Optional[str] = None
    warranty: Optional[str] = None
    special_requests: Optional[str] = None
    category: Optional[str] = None
    metadata: Optional[dict[str, Any]] = None

    def is_actionable(self) -> bool:
        """True if at least one field gives a vendor something concrete to quote against."""
        if self.budget is not None:
            return True
        if any(item.name and item.name.strip() for item in self.items):
            return True
        if any(qty is not None for qty in self.quantities.values()):
            return True
        text_fields = (self.delivery_timeline, self.payment_terms, self.warranty, self.category)
        return any(value and value.strip() for value in text_fields)
