"""
Application layer - Use cases, DTOs, and service factories.

Use cases are the only entry point for API handlers.
"""

from batchcost.application.services import (
    get_batch_reactor,
    get_costing_service,
    reset_services,
)
from batchcost.application.use_cases import (
    AdjustStockUseCase,
    BatchTraceabilityUseCase,
    CreateBatchUseCase,
    RecalculateCostsUseCase,
    ReceiveStockUseCase,
    RecordSaleUseCase,
    RecordWastageUseCase,
    UpdateBatchUseCase,
)

__all__ = [
    # Services
    "get_costing_service",
    "get_batch_reactor",
    "reset_services",
    # Use cases
    "RecalculateCostsUseCase",
    "ReceiveStockUseCase",
    "RecordWastageUseCase",
    "RecordSaleUseCase",
    "AdjustStockUseCase",
    "CreateBatchUseCase",
    "UpdateBatchUseCase",
    "BatchTraceabilityUseCase",
]
