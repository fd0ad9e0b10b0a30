"""Storage infrastructure implementations."""

from batchcost.infrastructure.storage.sqlite import (
    SQLiteBatchStore,
    SQLiteInventoryStore,
    SQLiteMaterialStore,
    SQLiteProductStore,
    SQLiteRecipeStore,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)

__all__ = [
    # SQLite stores
    "SQLiteMaterialStore",
    "SQLiteRecipeStore",
    "SQLiteProductStore",
    "SQLiteInventoryStore",
    "SQLiteBatchStore",
    # Connection pool
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
