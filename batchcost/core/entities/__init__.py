"""Core domain entities."""

from batchcost.core.entities.batch import (
    BatchIngredient,
    BatchManufacturingRecord,
    BatchState,
)
from batchcost.core.entities.events import BATCH_TABLE, ChangeEvent, ChangeKind
from batchcost.core.entities.inventory import (
    InventoryMovement,
    InventoryRecord,
    MovementType,
    ReferenceType,
)
from batchcost.core.entities.material import RawMaterial, StockReceipt
from batchcost.core.entities.product import FinalProduct, UnitConversion
from batchcost.core.entities.recipe import Recipe, RecipeItem

__all__ = [
    # Material entities
    "RawMaterial",
    "StockReceipt",
    # Recipe entities
    "Recipe",
    "RecipeItem",
    # Product entities
    "FinalProduct",
    "UnitConversion",
    # Inventory entities
    "InventoryRecord",
    "InventoryMovement",
    "MovementType",
    "ReferenceType",
    # Batch entities
    "BatchManufacturingRecord",
    "BatchIngredient",
    "BatchState",
    # Change feed
    "BATCH_TABLE",
    "ChangeEvent",
    "ChangeKind",
]
