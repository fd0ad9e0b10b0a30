"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field


class ComponentHealthResponse(BaseModel):
    """Health status for one backing component."""

    status: str
    detail: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ComponentHealthResponse | None = None
    reactor: ComponentHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. RECIPE_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)


# --- Costing ---


class AverageCostResponse(BaseModel):
    """Weighted-average unit cost of a raw material."""

    material_id: str
    average_cost: float = Field(..., description="0 when no accepted receipts exist")


class CostUpdateResponse(BaseModel):
    """Outcome of a multi-recipe cost refresh."""

    recipes_updated: list[str]
    recipes_skipped: list[str] = Field(
        default_factory=list, description="Recipes with no items"
    )
    products_updated: int


class RecipeCostResponse(BaseModel):
    """Outcome of refreshing a single recipe."""

    recipe_id: str
    recomputed: bool = Field(..., description="False when the recipe has no items")
    total_price: float
    products_updated: int


# --- Inventory ---


class InventoryRecordResponse(BaseModel):
    """Inventory record response DTO."""

    id: int
    product_name: str
    stock_level: float
    unit: str
    is_final_product: bool
    is_recipe_based: bool
    reorder_point: float
    needs_reorder: bool
    last_updated: datetime


class InventoryMovementResponse(BaseModel):
    """Inventory movement response DTO."""

    id: int
    inventory_id: int
    movement_type: str
    quantity: float
    reference_type: str | None = None
    reference_id: str | None = None
    notes: str | None = None
    created_at: datetime


class InventoryStatusResponse(BaseModel):
    """Paginated inventory status response."""

    items: list[InventoryRecordResponse]
    total: int


class StockReceiptResponse(BaseModel):
    """Stock receipt response DTO."""

    id: int
    raw_material_id: str
    quantity: float
    unit_price: float
    total_cost: float
    is_accepted: bool
    supplier: str | None = None
    invoice_number: str | None = None
    received_at: datetime


class ReceiveStockResponse(BaseModel):
    """Response for a stock receipt.

    Inventory, movement and cost fields are empty for rejected receipts.
    """

    receipt: StockReceiptResponse
    inventory_record: InventoryRecordResponse | None = None
    movement: InventoryMovementResponse | None = None
    costs: CostUpdateResponse | None = None
    created: bool = False  # True if a new inventory record was created


class StockChangeResponse(BaseModel):
    """Response for wastage and manual adjustment."""

    inventory_record: InventoryRecordResponse
    movement: InventoryMovementResponse


class SaleResponse(BaseModel):
    """Response for a recorded sale, one change per line."""

    sale_reference: str
    changes: list[StockChangeResponse]


# --- Batches ---


class BatchIngredientResponse(BaseModel):
    """Batch ingredient response DTO."""

    id: int
    raw_material_id: str
    quantity: float
    batch_number: str | None = None
    best_before_date: date | None = None


class BatchResponse(BaseModel):
    """Batch manufacturing record response DTO."""

    id: str
    product_id: str
    product_batch_number: str | None = None
    batch_size: float | None = None
    bags_count: int | None = None
    batch_started: datetime | None = None
    batch_finished: datetime | None = None
    state: str
    kg_per_bag: float | None = None
    ingredients: list[BatchIngredientResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class TraceabilityEntryResponse(BaseModel):
    """One inventory effect of a batch."""

    inventory_id: int
    product_name: str | None = None
    unit: str | None = None
    movement_type: str
    quantity: float
    notes: str | None = None
    created_at: datetime


class BatchTraceabilityResponse(BaseModel):
    """What a batch consumed and produced."""

    batch: BatchResponse
    consumed: list[TraceabilityEntryResponse]
    produced: list[TraceabilityEntryResponse]
    adjusted: list[TraceabilityEntryResponse]
