"""Costing endpoints: weighted-average cost and cascade refresh."""

from fastapi import APIRouter, Depends

from batchcost.api.dependencies import get_recalculate_costs_use_case
from batchcost.application.dto.responses import (
    AverageCostResponse,
    CostUpdateResponse,
    ErrorResponse,
    RecipeCostResponse,
)
from batchcost.application.use_cases.recalculate_costs import RecalculateCostsUseCase

router = APIRouter(prefix="/api/costing", tags=["costing"])


@router.get(
    "/materials/{material_id}/average-cost",
    response_model=AverageCostResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_average_cost(
    material_id: str,
    use_case: RecalculateCostsUseCase = Depends(get_recalculate_costs_use_case),
) -> AverageCostResponse:
    """Weighted-average unit cost over accepted receipts."""
    average_cost = await use_case.average_cost(material_id)
    return use_case.average_cost_response(material_id, average_cost)


@router.post(
    "/materials/{material_id}/recalculate",
    response_model=CostUpdateResponse,
    responses={404: {"model": ErrorResponse}},
)
async def recalculate_material(
    material_id: str,
    use_case: RecalculateCostsUseCase = Depends(get_recalculate_costs_use_case),
) -> CostUpdateResponse:
    """Refresh every recipe and product that uses a material."""
    result = await use_case.for_material(material_id)
    return use_case.to_response(result)


@router.post(
    "/recipes/{recipe_id}/recalculate",
    response_model=RecipeCostResponse,
    responses={404: {"model": ErrorResponse}},
)
async def recalculate_recipe(
    recipe_id: str,
    use_case: RecalculateCostsUseCase = Depends(get_recalculate_costs_use_case),
) -> RecipeCostResponse:
    """Recompute one recipe and push its cost to its final products."""
    result = await use_case.for_recipe(recipe_id)
    return use_case.recipe_response(result)


@router.post("/recalculate", response_model=CostUpdateResponse)
async def recalculate_all(
    use_case: RecalculateCostsUseCase = Depends(get_recalculate_costs_use_case),
) -> CostUpdateResponse:
    """Full resync of every recipe and final product."""
    result = await use_case.for_all()
    return use_case.to_response(result)
