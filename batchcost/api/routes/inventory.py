"""Inventory read endpoints."""

from fastapi import APIRouter, Depends, Query

from batchcost.api.dependencies import get_inv_store
from batchcost.application.dto.mappers import movement_response, record_response
from batchcost.application.dto.responses import (
    ErrorResponse,
    InventoryMovementResponse,
    InventoryStatusResponse,
)
from batchcost.core.exceptions import InventoryRecordNotFoundError
from batchcost.core.interfaces.inventory_store import IInventoryStore

router = APIRouter(prefix="/api/inventory", tags=["inventory"])


@router.get("/status", response_model=InventoryStatusResponse)
async def get_inventory_status(
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    store: IInventoryStore = Depends(get_inv_store),
) -> InventoryStatusResponse:
    """Current stock level of every raw material and final product."""
    records = await store.list_records(limit=limit, offset=offset)
    return InventoryStatusResponse(
        items=[record_response(r) for r in records],
        total=len(records),
    )


@router.get("/low-stock", response_model=InventoryStatusResponse)
async def get_low_stock(
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    store: IInventoryStore = Depends(get_inv_store),
) -> InventoryStatusResponse:
    """Records at or below their reorder point."""
    records = await store.list_low_stock(limit=limit, offset=offset)
    return InventoryStatusResponse(
        items=[record_response(r) for r in records],
        total=len(records),
    )


@router.get(
    "/{inventory_id}/movements",
    response_model=list[InventoryMovementResponse],
    responses={404: {"model": ErrorResponse}},
)
async def get_movements(
    inventory_id: int,
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    store: IInventoryStore = Depends(get_inv_store),
) -> list[InventoryMovementResponse]:
    """Movement history of one inventory record, newest first."""
    if await store.get_record(inventory_id) is None:
        raise InventoryRecordNotFoundError(inventory_id)
    movements = await store.get_movements(inventory_id, limit=limit, offset=offset)
    return [movement_response(m) for m in movements]
