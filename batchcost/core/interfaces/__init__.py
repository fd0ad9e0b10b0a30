"""Abstract interfaces implemented by the infrastructure layer."""

from batchcost.core.interfaces.batch_store import IBatchStore
from batchcost.core.interfaces.change_feed import IChangeFeed
from batchcost.core.interfaces.inventory_store import IInventoryStore
from batchcost.core.interfaces.material_store import IMaterialStore
from batchcost.core.interfaces.product_store import IProductStore
from batchcost.core.interfaces.recipe_store import IRecipeStore

__all__ = [
    "IBatchStore",
    "IChangeFeed",
    "IInventoryStore",
    "IMaterialStore",
    "IProductStore",
    "IRecipeStore",
]
