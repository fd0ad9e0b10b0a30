"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field


class ReceiveStockRequest(BaseModel):
    """Request to record a supplier delivery of a raw material."""

    material_id: str = Field(..., description="Raw material ID")
    quantity: float = Field(..., gt=0, description="Quantity received, in the material's unit")
    unit_price: float = Field(..., ge=0, description="Price paid per unit")
    is_accepted: bool = Field(
        default=True,
        description="Rejected deliveries are recorded but never costed or stocked",
    )
    supplier: str | None = Field(default=None, description="Supplier name")
    invoice_number: str | None = Field(default=None, description="Supplier invoice reference")


class RecordWastageRequest(BaseModel):
    """Request to write off final product stock."""

    product_id: str = Field(..., description="Final product ID")
    quantity: float = Field(..., gt=0, description="Quantity wasted, in bags")
    reason: str | None = Field(
        default=None,
        description="Why the stock was written off",
        examples=["damaged packaging", "expired"],
    )


class SaleLineRequest(BaseModel):
    """One product line of a sale."""

    product_id: str = Field(..., description="Final product ID")
    quantity: float = Field(..., gt=0, description="Quantity sold, in bags")


class RecordSaleRequest(BaseModel):
    """Request to take sold final product out of stock."""

    lines: list[SaleLineRequest] = Field(..., min_length=1)
    customer: str | None = Field(default=None, description="Customer name")
    invoice_number: str | None = Field(
        default=None,
        description="Sale reference; generated when omitted",
    )


class AdjustStockRequest(BaseModel):
    """Request for a manual signed correction of an inventory record."""

    inventory_id: int = Field(..., description="Inventory record ID")
    delta: float = Field(..., description="Signed change; the level never drops below 0")
    notes: str | None = Field(default=None, description="Reason for the correction")


class BatchIngredientRequest(BaseModel):
    """Raw material consumed by a batch."""

    raw_material_id: str = Field(..., description="Raw material ID")
    quantity: float = Field(..., ge=0, description="Quantity consumed")
    batch_number: str | None = Field(default=None, description="Supplier lot number")
    best_before_date: date | None = Field(default=None, description="Lot best-before date")


class CreateBatchRequest(BaseModel):
    """Request to record a production batch."""

    product_id: str = Field(..., description="Final product ID")
    product_batch_number: str | None = Field(
        default=None,
        description="Human-readable batch number",
        examples=["B-2024-001"],
    )
    batch_size: float | None = Field(default=None, ge=0, description="Batch weight in kg")
    bags_count: int | None = Field(default=None, ge=1, description="Units produced")
    batch_started: datetime | None = Field(default=None)
    batch_finished: datetime | None = Field(
        default=None,
        description="Set when the batch is complete; triggers production",
    )
    ingredients: list[BatchIngredientRequest] = Field(default_factory=list)


class UpdateBatchRequest(BaseModel):
    """Partial update of a batch header.

    Only fields present in the request body are changed.
    """

    product_batch_number: str | None = None
    batch_size: float | None = Field(default=None, ge=0)
    bags_count: int | None = Field(default=None, ge=1)
    batch_started: datetime | None = None
    batch_finished: datetime | None = None
