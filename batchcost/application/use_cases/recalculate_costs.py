"""Recalculate Costs Use Case: weighted-average cost cascade on demand."""

from dataclasses import dataclass

from batchcost.application.dto.mappers import cost_update_response
from batchcost.application.dto.responses import (
    AverageCostResponse,
    CostUpdateResponse,
    RecipeCostResponse,
)
from batchcost.config import get_logger
from batchcost.core.exceptions import RawMaterialNotFoundError, RecipeNotFoundError
from batchcost.core.interfaces.material_store import IMaterialStore
from batchcost.core.interfaces.recipe_store import IRecipeStore
from batchcost.core.services.costing import CostingService, CostUpdateResult

logger = get_logger(__name__)


@dataclass
class RecipeCostResult:
    """Result of refreshing one recipe."""

    recipe_id: str
    recomputed: bool
    total_price: float
    products_updated: int


class RecalculateCostsUseCase:
    """Expose the costing cascade for a material, a recipe or everything."""

    def __init__(
        self,
        costing_service: CostingService | None = None,
        material_store: IMaterialStore | None = None,
        recipe_store: IRecipeStore | None = None,
    ):
        self._costing_service = costing_service
        self._material_store = material_store
        self._recipe_store = recipe_store

    async def _get_costing_service(self) -> CostingService:
        if self._costing_service is None:
            from batchcost.application.services import get_costing_service

            self._costing_service = await get_costing_service()
        return self._costing_service

    async def _get_material_store(self) -> IMaterialStore:
        if self._material_store is None:
            from batchcost.infrastructure.storage.sqlite import get_material_store

            self._material_store = await get_material_store()
        return self._material_store

    async def _get_recipe_store(self) -> IRecipeStore:
        if self._recipe_store is None:
            from batchcost.infrastructure.storage.sqlite import get_recipe_store

            self._recipe_store = await get_recipe_store()
        return self._recipe_store

    async def _require_material(self, material_id: str) -> None:
        store = await self._get_material_store()
        if await store.get_material(material_id) is None:
            raise RawMaterialNotFoundError(material_id)

    async def average_cost(self, material_id: str) -> float:
        """Current weighted-average unit cost of a material."""
        await self._require_material(material_id)
        costing = await self._get_costing_service()
        return await costing.compute_average_cost(material_id)

    async def for_material(self, material_id: str) -> CostUpdateResult:
        """Refresh every recipe using the material."""
        await self._require_material(material_id)
        costing = await self._get_costing_service()
        return await costing.update_costs_for_material(material_id)

    async def for_recipe(self, recipe_id: str) -> RecipeCostResult:
        """Recompute one recipe and push its cost to its products."""
        store = await self._get_recipe_store()
        if await store.get_recipe(recipe_id) is None:
            raise RecipeNotFoundError(recipe_id)

        costing = await self._get_costing_service()
        recomputed, products = await costing.update_recipe(recipe_id)

        recipe = await store.get_recipe(recipe_id)
        if recipe is None:
            raise RecipeNotFoundError(recipe_id)
        return RecipeCostResult(
            recipe_id=recipe_id,
            recomputed=recomputed,
            total_price=recipe.total_price,
            products_updated=products,
        )

    async def for_all(self) -> CostUpdateResult:
        """Full resync of every recipe and final product."""
        costing = await self._get_costing_service()
        return await costing.update_all_costs()

    @staticmethod
    def average_cost_response(material_id: str, average_cost: float) -> AverageCostResponse:
        return AverageCostResponse(material_id=material_id, average_cost=average_cost)

    @staticmethod
    def recipe_response(result: RecipeCostResult) -> RecipeCostResponse:
        return RecipeCostResponse(
            recipe_id=result.recipe_id,
            recomputed=result.recomputed,
            total_price=result.total_price,
            products_updated=result.products_updated,
        )

    @staticmethod
    def to_response(result: CostUpdateResult) -> CostUpdateResponse:
        return cost_update_response(result)
