"""Record Wastage Use Case: write off final product stock."""

from dataclasses import dataclass

from batchcost.application.dto.mappers import movement_response, record_response
from batchcost.application.dto.requests import RecordWastageRequest
from batchcost.application.dto.responses import StockChangeResponse
from batchcost.config import get_logger
from batchcost.core.entities.inventory import (
    InventoryMovement,
    InventoryRecord,
    MovementType,
    ReferenceType,
)
from batchcost.core.exceptions import (
    FinalProductNotFoundError,
    InsufficientStockError,
    InventoryRecordNotFoundError,
)
from batchcost.core.interfaces.inventory_store import IInventoryStore
from batchcost.core.interfaces.product_store import IProductStore

logger = get_logger(__name__)


@dataclass
class StockChangeResult:
    """Inventory record after a change and the movement recording it."""

    inventory_record: InventoryRecord
    movement: InventoryMovement


class RecordWastageUseCase:
    """Write off damaged or expired final product, with a balance check."""

    def __init__(
        self,
        product_store: IProductStore | None = None,
        inventory_store: IInventoryStore | None = None,
    ):
        self._product_store = product_store
        self._inventory_store = inventory_store

    async def _get_product_store(self) -> IProductStore:
        if self._product_store is None:
            from batchcost.infrastructure.storage.sqlite import get_product_store

            self._product_store = await get_product_store()
        return self._product_store

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from batchcost.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def execute(self, request: RecordWastageRequest) -> StockChangeResult:
        """Execute record wastage use case."""
        product_store = await self._get_product_store()
        product = await product_store.get_product(request.product_id)
        if product is None:
            raise FinalProductNotFoundError(request.product_id)

        inv_store = await self._get_inventory_store()
        record = await inv_store.find_by_name(product.name, is_final_product=True)
        if record is None:
            raise InventoryRecordNotFoundError(product.name)

        if record.stock_level < request.quantity:
            raise InsufficientStockError(
                inventory_id=record.id,
                requested=request.quantity,
                available=record.stock_level,
            )

        record.apply_delta(-request.quantity)
        record = await inv_store.update_stock_level(record)

        movement = await inv_store.add_movement(
            InventoryMovement(
                inventory_id=record.id,  # type: ignore[arg-type]
                movement_type=MovementType.WASTAGE,
                quantity=-request.quantity,
                reference_type=ReferenceType.WASTAGE,
                reference_id=product.id,
                notes=request.reason,
            )
        )

        logger.info(
            "wastage_recorded",
            product_id=product.id,
            inventory_id=record.id,
            quantity=request.quantity,
            remaining=record.stock_level,
        )
        return StockChangeResult(inventory_record=record, movement=movement)

    def to_response(self, result: StockChangeResult) -> StockChangeResponse:
        return StockChangeResponse(
            inventory_record=record_response(result.inventory_record),
            movement=movement_response(result.movement),
        )
