"""Inventory domain entities."""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field


class MovementType(str, Enum):
    """Types of inventory movements."""

    RECEIVE = "receive"
    MANUFACTURING_CONSUME = "manufacturing_consume"
    MANUFACTURING_PRODUCE = "manufacturing_produce"
    MANUFACTURING_ADJUST = "manufacturing_adjust"
    MANUAL_ADJUSTMENT = "manual_adjustment"
    SALE = "sale"
    WASTAGE = "wastage"


class ReferenceType(str, Enum):
    """Kind of entity that caused a movement."""

    BATCH = "batch"
    STOCK_RECEIPT = "stock_receipt"
    SALE = "sale"
    WASTAGE = "wastage"
    MANUAL = "manual"


class InventoryRecord(BaseModel):
    """
    Stock level of one raw material or final product.

    Records are matched to materials and products by name, not by key.
    """

    id: int | None = None
    product_name: str
    stock_level: float = 0.0
    unit: str = "kg"
    is_final_product: bool = False
    is_recipe_based: bool = False
    reorder_point: float = 0.0
    last_updated: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def needs_reorder(self) -> bool:
        """True when stock is at or below the reorder point."""
        return self.stock_level <= self.reorder_point

    def apply_delta(self, delta: float) -> float:
        """
        Apply a signed quantity change, flooring the level at zero.

        Returns the change actually applied.
        """
        previous = self.stock_level
        self.stock_level = max(0.0, previous + delta)
        return self.stock_level - previous


class InventoryMovement(BaseModel):
    """Append-only audit entry for a signed stock change."""

    id: int | None = None
    inventory_id: int  # FK → inventory.id
    movement_type: MovementType
    quantity: float  # signed: negative for stock leaving
    reference_type: ReferenceType | None = None
    reference_id: str | None = None
    notes: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
