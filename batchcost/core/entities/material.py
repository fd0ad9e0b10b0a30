"""
Raw material domain entities.

A raw material's average cost is never stored: it is derived on demand
from the accepted stock receipts recorded against it.
"""

from datetime import UTC, datetime

from pydantic import BaseModel, Field


class RawMaterial(BaseModel):
    """An ingredient or packaging item bought in from suppliers."""

    id: str | None = None
    name: str
    unit: str = "kg"
    category: str | None = None
    minimum_stock: float = 0.0
    current_stock: float = 0.0
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class StockReceipt(BaseModel):
    """
    A delivery of a raw material.

    Only accepted receipts take part in average-cost calculation.
    Receipts are immutable once recorded.
    """

    id: int | None = None
    raw_material_id: str
    quantity: float = Field(..., gt=0)
    unit_price: float = Field(..., ge=0)
    is_accepted: bool = True
    supplier: str | None = None
    invoice_number: str | None = None
    received_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def total_cost(self) -> float:
        """Total spend on this receipt = quantity * unit_price."""
        return self.quantity * self.unit_price
