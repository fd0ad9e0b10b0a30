"""Adjust Stock Use Case: manual signed correction of an inventory record."""

from batchcost.application.dto.mappers import movement_response, record_response
from batchcost.application.dto.requests import AdjustStockRequest
from batchcost.application.dto.responses import StockChangeResponse
from batchcost.application.use_cases.record_wastage import StockChangeResult
from batchcost.config import get_logger
from batchcost.core.entities.inventory import InventoryMovement, MovementType, ReferenceType
from batchcost.core.exceptions import InventoryRecordNotFoundError, ValidationError
from batchcost.core.interfaces.inventory_store import IInventoryStore

logger = get_logger(__name__)


class AdjustStockUseCase:
    """Apply a stock-take correction; the level is floored at zero."""

    def __init__(self, inventory_store: IInventoryStore | None = None):
        self._inventory_store = inventory_store

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from batchcost.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def execute(self, request: AdjustStockRequest) -> StockChangeResult:
        """Execute adjust stock use case."""
        if request.delta == 0:
            raise ValidationError("delta", "Adjustment must be non-zero", request.delta)

        inv_store = await self._get_inventory_store()
        record = await inv_store.get_record(request.inventory_id)
        if record is None:
            raise InventoryRecordNotFoundError(request.inventory_id)

        applied = record.apply_delta(request.delta)
        record = await inv_store.update_stock_level(record)

        movement = await inv_store.add_movement(
            InventoryMovement(
                inventory_id=record.id,  # type: ignore[arg-type]
                movement_type=MovementType.MANUAL_ADJUSTMENT,
                quantity=request.delta,
                reference_type=ReferenceType.MANUAL,
                notes=request.notes,
            )
        )

        logger.info(
            "stock_adjusted",
            inventory_id=record.id,
            requested=request.delta,
            applied=applied,
            stock_level=record.stock_level,
        )
        return StockChangeResult(inventory_record=record, movement=movement)

    def to_response(self, result: StockChangeResult) -> StockChangeResponse:
        return StockChangeResponse(
            inventory_record=record_response(result.inventory_record),
            movement=movement_response(result.movement),
        )
