"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from batchcost.application.dto.requests import (
    AdjustStockRequest,
    BatchIngredientRequest,
    CreateBatchRequest,
    ReceiveStockRequest,
    RecordSaleRequest,
    RecordWastageRequest,
    SaleLineRequest,
    UpdateBatchRequest,
)
from batchcost.application.dto.responses import (
    AverageCostResponse,
    BatchIngredientResponse,
    BatchResponse,
    BatchTraceabilityResponse,
    ComponentHealthResponse,
    CostUpdateResponse,
    ErrorResponse,
    HealthResponse,
    InventoryMovementResponse,
    InventoryRecordResponse,
    InventoryStatusResponse,
    ReceiveStockResponse,
    RecipeCostResponse,
    SaleResponse,
    StockChangeResponse,
    StockReceiptResponse,
    TraceabilityEntryResponse,
)

__all__ = [
    # Requests
    "ReceiveStockRequest",
    "RecordWastageRequest",
    "RecordSaleRequest",
    "SaleLineRequest",
    "AdjustStockRequest",
    "BatchIngredientRequest",
    "CreateBatchRequest",
    "UpdateBatchRequest",
    # Responses
    "AverageCostResponse",
    "BatchIngredientResponse",
    "BatchResponse",
    "BatchTraceabilityResponse",
    "ComponentHealthResponse",
    "CostUpdateResponse",
    "ErrorResponse",
    "HealthResponse",
    "InventoryMovementResponse",
    "InventoryRecordResponse",
    "InventoryStatusResponse",
    "ReceiveStockResponse",
    "RecipeCostResponse",
    "SaleResponse",
    "StockChangeResponse",
    "StockReceiptResponse",
    "TraceabilityEntryResponse",
]
