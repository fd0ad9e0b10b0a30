"""
Dependency injection container for FastAPI.

Provides use cases and stores to route handlers. Tests swap these out
through ``app.dependency_overrides``.
"""

from functools import lru_cache

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
from batchcost.config import Settings, get_settings
from batchcost.infrastructure.storage.sqlite import SQLiteInventoryStore, get_inventory_store


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# Use case dependencies
def get_recalculate_costs_use_case() -> RecalculateCostsUseCase:
    """Get recalculate costs use case."""
    return RecalculateCostsUseCase()


def get_receive_stock_use_case() -> ReceiveStockUseCase:
    """Get receive stock use case."""
    return ReceiveStockUseCase()


def get_record_wastage_use_case() -> RecordWastageUseCase:
    return RecordWastageUseCase()


def get_record_sale_use_case() -> RecordSaleUseCase:
    return RecordSaleUseCase()


def get_adjust_stock_use_case() -> AdjustStockUseCase:
    return AdjustStockUseCase()


def get_create_batch_use_case() -> CreateBatchUseCase:
    return CreateBatchUseCase()


def get_update_batch_use_case() -> UpdateBatchUseCase:
    return UpdateBatchUseCase()


def get_batch_traceability_use_case() -> BatchTraceabilityUseCase:
    return BatchTraceabilityUseCase()


# Store dependencies
async def get_inv_store() -> SQLiteInventoryStore:
    """Get inventory store."""
    return await get_inventory_store()
