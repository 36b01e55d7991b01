"""
Sweets module data models.

These models define the catalog item and the request/filter shapes used
by the catalog and inventory services.
"""

from datetime import datetime, timezone
from typing import Annotated, Any, Optional
from pydantic import BaseModel, BeforeValidator, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _reject_bool(value: Any) -> Any:
    # JSON true/false would otherwise coerce to 1/0
    if isinstance(value, bool):
        raise ValueError("must be a number, not a boolean")
    return value


PriceInput = Annotated[Optional[float], BeforeValidator(_reject_bool)]
QuantityInput = Annotated[Optional[int], BeforeValidator(_reject_bool)]


class Sweet(BaseModel):
    """A sellable catalog item."""

    id: str = Field(..., description="Sweet ID")
    name: str = Field(..., description="Display name")
    category: str = Field(..., description="Category, e.g. 'Traditional'")
    price: float = Field(..., ge=0, description="Unit price")
    quantity: int = Field(default=0, ge=0, description="Units in stock")
    description: str = Field(default="", description="Optional description")
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


class SweetCreate(BaseModel):
    """
    Request to add a sweet to the catalog.

    Required fields are optional at the schema level; the catalog
    validators report each missing one as a violation.
    """

    name: Optional[str] = None
    category: Optional[str] = None
    price: PriceInput = None
    quantity: QuantityInput = None
    description: Optional[str] = None


class SweetUpdate(BaseModel):
    """Partial update; only fields present in the request are changed."""

    name: Optional[str] = None
    category: Optional[str] = None
    price: PriceInput = None
    quantity: QuantityInput = None
    description: Optional[str] = None


class SweetSearch(BaseModel):
    """
    Catalog search filters.

    Each filter is optional. Text filters are case-insensitive substring
    matches; the price bounds are inclusive.
    """

    name: Optional[str] = None
    category: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None

    def matches(self, sweet: Sweet) -> bool:
        """Check a sweet against every filter that is set."""
        if self.name and self.name.lower() not in sweet.name.lower():
            return False
        if self.category and self.category.lower() not in sweet.category.lower():
            return False
        if self.min_price is not None and sweet.price < self.min_price:
            return False
        if self.max_price is not None and sweet.price > self.max_price:
            return False
        return True


class PurchaseRequest(BaseModel):
    """Request body for a purchase. Quantity defaults to one unit."""

    quantity: QuantityInput = 1


class RestockRequest(BaseModel):
    """Request body for a restock. Quantity is required."""

    quantity: QuantityInput = None
