"""SQLite storage implementations."""

from batchcost.infrastructure.storage.sqlite.batch_store import SQLiteBatchStore
from batchcost.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from batchcost.infrastructure.storage.sqlite.inventory_store import SQLiteInventoryStore
from batchcost.infrastructure.storage.sqlite.material_store import SQLiteMaterialStore
from batchcost.infrastructure.storage.sqlite.product_store import SQLiteProductStore
from batchcost.infrastructure.storage.sqlite.recipe_store import SQLiteRecipeStore

# Singleton instances
_material_store: SQLiteMaterialStore | None = None
_recipe_store: SQLiteRecipeStore | None = None
_product_store: SQLiteProductStore | None = None
_inventory_store: SQLiteInventoryStore | None = None
_batch_store: SQLiteBatchStore | None = None


async def get_material_store() -> SQLiteMaterialStore:
    """Get singleton raw material store instance."""
    global _material_store
    if _material_store is None:
        _material_store = SQLiteMaterialStore()
    return _material_store


async def get_recipe_store() -> SQLiteRecipeStore:
    """Get singleton recipe store instance."""
    global _recipe_store
    if _recipe_store is None:
        _recipe_store = SQLiteRecipeStore()
    return _recipe_store


async def get_product_store() -> SQLiteProductStore:
    """Get singleton final product store instance."""
    global _product_store
    if _product_store is None:
        _product_store = SQLiteProductStore()
    return _product_store


async def get_inventory_store() -> SQLiteInventoryStore:
    """Get singleton inventory store instance."""
    global _inventory_store
    if _inventory_store is None:
        _inventory_store = SQLiteInventoryStore()
    return _inventory_store


async def get_batch_store() -> SQLiteBatchStore:
    """Get singleton batch store instance, bound to the global change feed."""
    global _batch_store
    if _batch_store is None:
        _batch_store = SQLiteBatchStore()
    return _batch_store


def reset_stores() -> None:
    """Drop store singletons (used by tests)."""
    global _material_store, _recipe_store, _product_store, _inventory_store, _batch_store
    _material_store = None
    _recipe_store = None
    _product_store = None
    _inventory_store = None
    _batch_store = None


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    # Store classes
    "SQLiteMaterialStore",
    "SQLiteRecipeStore",
    "SQLiteProductStore",
    "SQLiteInventoryStore",
    "SQLiteBatchStore",
    # Factory functions
    "get_material_store",
    "get_recipe_store",
    "get_product_store",
    "get_inventory_store",
    "get_batch_store",
    "reset_stores",
]
