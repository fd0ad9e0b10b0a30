"""Application use cases."""

from batchcost.application.use_cases.adjust_stock import AdjustStockUseCase
from batchcost.application.use_cases.batch_traceability import (
    BatchTraceability,
    BatchTraceabilityUseCase,
)
from batchcost.application.use_cases.recalculate_costs import (
    RecalculateCostsUseCase,
    RecipeCostResult,
)
from batchcost.application.use_cases.receive_stock import (
    ReceiveStockResult,
    ReceiveStockUseCase,
)
from batchcost.application.use_cases.record_sale import RecordSaleUseCase, SaleResult
from batchcost.application.use_cases.record_batch import CreateBatchUseCase, UpdateBatchUseCase
from batchcost.application.use_cases.record_wastage import (
    RecordWastageUseCase,
    StockChangeResult,
)

__all__ = [
    "RecalculateCostsUseCase",
    "RecipeCostResult",
    "ReceiveStockUseCase",
    "ReceiveStockResult",
    "RecordWastageUseCase",
    "RecordSaleUseCase",
    "SaleResult",
    "StockChangeResult",
    "AdjustStockUseCase",
    "CreateBatchUseCase",
    "UpdateBatchUseCase",
    "BatchTraceabilityUseCase",
    "BatchTraceability",
]
