"""Batch manufacturing domain entities."""

from datetime import UTC, date, datetime
from enum import Enum

from pydantic import BaseModel, Field


class BatchState(str, Enum):
    """Lifecycle state of a batch as seen by the inventory reactor."""

    CREATED = "created"
    FINISHED = "finished"


class BatchIngredient(BaseModel):
    """Raw material consumed by a batch."""

    id: int | None = None
    batch_id: str | None = None
    raw_material_id: str
    quantity: float = Field(..., ge=0)
    batch_number: str | None = None  # supplier lot used
    best_before_date: date | None = None


class BatchManufacturingRecord(BaseModel):
    """
    One production run of a final product.

    batch_size is in kilograms; bags_count is the number of units produced.
    """

    id: str | None = None
    product_id: str
    product_batch_number: str | None = None
    batch_size: float | None = None
    bags_count: int | None = None
    batch_started: datetime | None = None
    batch_finished: datetime | None = None
    ingredients: list[BatchIngredient] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def state(self) -> BatchState:
        if self.batch_finished is not None:
            return BatchState.FINISHED
        return BatchState.CREATED

    @property
    def is_finished(self) -> bool:
        return self.batch_finished is not None

    @property
    def kg_per_bag(self) -> float | None:
        """Batch weight per bag, when both figures are known."""
        if not self.batch_size or not self.bags_count:
            return None
        return self.batch_size / self.bags_count
