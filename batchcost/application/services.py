"""
Service factory functions for dependency injection.

This module wires SQLite store implementations to core services.
Use cases should import from here.
"""

from typing import TYPE_CHECKING

from batchcost.config import get_settings
from batchcost.core.services import BatchInventoryReactor, CostingService

if TYPE_CHECKING:
    from batchcost.core.interfaces import (
        IBatchStore,
        IInventoryStore,
        IMaterialStore,
        IProductStore,
        IRecipeStore,
    )


# Singleton service instances
_costing_service: CostingService | None = None
_batch_reactor: BatchInventoryReactor | None = None


async def get_costing_service(
    material_store: "IMaterialStore | None" = None,
    recipe_store: "IRecipeStore | None" = None,
    product_store: "IProductStore | None" = None,
) -> CostingService:
    """
    Get or create the CostingService.

    Store overrides bypass the singleton.
    """
    global _costing_service

    overridden = any(s is not None for s in (material_store, recipe_store, product_store))
    if _costing_service is not None and not overridden:
        return _costing_service

    # Lazy import infrastructure to avoid circular imports
    from batchcost.infrastructure.storage.sqlite import (
        get_material_store,
        get_product_store,
        get_recipe_store,
    )

    service = CostingService(
        material_store=material_store or await get_material_store(),
        recipe_store=recipe_store or await get_recipe_store(),
        product_store=product_store or await get_product_store(),
        price_decimals=get_settings().costing.price_decimals,
    )

    if not overridden:
        _costing_service = service

    return service


async def get_batch_reactor(
    inventory_store: "IInventoryStore | None" = None,
    batch_store: "IBatchStore | None" = None,
    material_store: "IMaterialStore | None" = None,
    product_store: "IProductStore | None" = None,
) -> BatchInventoryReactor:
    """
    Get or create the BatchInventoryReactor.

    Defaults for the produced inventory record come from ReactorSettings.
    """
    global _batch_reactor

    overridden = any(
        s is not None for s in (inventory_store, batch_store, material_store, product_store)
    )
    if _batch_reactor is not None and not overridden:
        return _batch_reactor

    from batchcost.infrastructure.storage.sqlite import (
        get_batch_store,
        get_inventory_store,
        get_material_store,
        get_product_store,
    )

    reactor_settings = get_settings().reactor
    reactor = BatchInventoryReactor(
        inventory_store=inventory_store or await get_inventory_store(),
        batch_store=batch_store or await get_batch_store(),
        material_store=material_store or await get_material_store(),
        product_store=product_store or await get_product_store(),
        final_product_unit=reactor_settings.final_product_unit,
        default_reorder_point=reactor_settings.default_reorder_point,
        default_bags_count=reactor_settings.default_bags_count,
    )

    if not overridden:
        _batch_reactor = reactor

    return reactor


def reset_services() -> None:
    """
    Reset all singleton service instances.

    Useful for testing or when configuration changes.
    """
    global _costing_service
    global _batch_reactor

    _costing_service = None
    _batch_reactor = None


__all__ = [
    "get_costing_service",
    "get_batch_reactor",
    "reset_services",
]
