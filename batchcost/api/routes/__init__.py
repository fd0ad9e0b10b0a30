"""API route modules."""

from batchcost.api.routes.batches import router as batches_router
from batchcost.api.routes.costing import router as costing_router
from batchcost.api.routes.health import router as health_router
from batchcost.api.routes.inventory import router as inventory_router
from batchcost.api.routes.stock import router as stock_router

__all__ = [
    "health_router",
    "costing_router",
    "stock_router",
    "batches_router",
    "inventory_router",
]
