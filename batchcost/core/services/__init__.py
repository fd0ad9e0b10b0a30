"""Core domain services."""

from batchcost.core.services.batch_reactor import BatchInventoryReactor, ReactionResult
from batchcost.core.services.costing import (
    CostingService,
    CostUpdateResult,
    ProductPricing,
    price_product,
    weighted_average_cost,
)

__all__ = [
    "BatchInventoryReactor",
    "ReactionResult",
    "CostingService",
    "CostUpdateResult",
    "ProductPricing",
    "price_product",
    "weighted_average_cost",
]
