"""Receive Stock Use Case: record a delivery and refresh dependent costs."""

from dataclasses import dataclass

from batchcost.application.dto.mappers import (
    cost_update_response,
    movement_response,
    receipt_response,
    record_response,
)
from batchcost.application.dto.requests import ReceiveStockRequest
from batchcost.application.dto.responses import ReceiveStockResponse
from batchcost.config import get_logger
from batchcost.core.entities.inventory import (
    InventoryMovement,
    InventoryRecord,
    MovementType,
    ReferenceType,
)
from batchcost.core.entities.material import StockReceipt
from batchcost.core.exceptions import RawMaterialNotFoundError
from batchcost.core.interfaces.inventory_store import IInventoryStore
from batchcost.core.interfaces.material_store import IMaterialStore
from batchcost.core.services.costing import CostingService, CostUpdateResult

logger = get_logger(__name__)


@dataclass
class ReceiveStockResult:
    """Result of receiving stock."""

    receipt: StockReceipt
    inventory_record: InventoryRecord | None = None
    movement: InventoryMovement | None = None
    costs: CostUpdateResult | None = None
    created: bool = False  # True if a new inventory record was created


class ReceiveStockUseCase:
    """
    Receive raw material stock.

    Rejected receipts are stored for the record only. Accepted receipts
    raise the material's stock, land in its inventory record and trigger
    a cost refresh of every recipe that uses the material.
    """

    def __init__(
        self,
        material_store: IMaterialStore | None = None,
        inventory_store: IInventoryStore | None = None,
        costing_service: CostingService | None = None,
    ):
        self._material_store = material_store
        self._inventory_store = inventory_store
        self._costing_service = costing_service

    async def _get_material_store(self) -> IMaterialStore:
        if self._material_store is None:
            from batchcost.infrastructure.storage.sqlite import get_material_store

            self._material_store = await get_material_store()
        return self._material_store

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from batchcost.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def _get_costing_service(self) -> CostingService:
        if self._costing_service is None:
            from batchcost.application.services import get_costing_service

            self._costing_service = await get_costing_service()
        return self._costing_service

    async def execute(self, request: ReceiveStockRequest) -> ReceiveStockResult:
        """Execute receive stock use case."""
        logger.info(
            "receive_stock_started",
            material_id=request.material_id,
            quantity=request.quantity,
            accepted=request.is_accepted,
        )

        # 1. Validate material exists
        mat_store = await self._get_material_store()
        material = await mat_store.get_material(request.material_id)
        if material is None:
            raise RawMaterialNotFoundError(request.material_id)

        # 2. Record the receipt, accepted or not
        receipt = await mat_store.add_receipt(
            StockReceipt(
                raw_material_id=request.material_id,
                quantity=request.quantity,
                unit_price=request.unit_price,
                is_accepted=request.is_accepted,
                supplier=request.supplier,
                invoice_number=request.invoice_number,
            )
        )
        if not receipt.is_accepted:
            logger.info("receipt_rejected_not_stocked", receipt_id=receipt.id)
            return ReceiveStockResult(receipt=receipt)

        # 3. Raise the material's own stock figure
        material.current_stock += request.quantity
        await mat_store.update_current_stock(material.id, material.current_stock)  # type: ignore[arg-type]

        # 4. Get or create the inventory record
        inv_store = await self._get_inventory_store()
        created = False
        record = await inv_store.find_by_name(material.name, is_final_product=False)
        if record is None:
            record = await inv_store.create_record(
                InventoryRecord(
                    product_name=material.name,
                    stock_level=request.quantity,
                    unit=material.unit,
                    is_final_product=False,
                    reorder_point=material.minimum_stock,
                )
            )
            created = True
        else:
            record.apply_delta(request.quantity)
            record = await inv_store.update_stock_level(record)

        # 5. Record the movement
        movement = await inv_store.add_movement(
            InventoryMovement(
                inventory_id=record.id,  # type: ignore[arg-type]
                movement_type=MovementType.RECEIVE,
                quantity=request.quantity,
                reference_type=ReferenceType.STOCK_RECEIPT,
                reference_id=str(receipt.id),
                notes=f"Received from {request.supplier}" if request.supplier else None,
            )
        )

        # 6. Refresh costs of every recipe using the material
        costing = await self._get_costing_service()
        costs = await costing.update_costs_for_material(material.id)  # type: ignore[arg-type]

        logger.info(
            "receive_stock_complete",
            material_id=material.id,
            inventory_id=record.id,
            stock_level=record.stock_level,
            recipes_updated=len(costs.recipes_updated),
        )

        return ReceiveStockResult(
            receipt=receipt,
            inventory_record=record,
            movement=movement,
            costs=costs,
            created=created,
        )

    def to_response(self, result: ReceiveStockResult) -> ReceiveStockResponse:
        """Convert result to API response."""
        return ReceiveStockResponse(
            receipt=receipt_response(result.receipt),
            inventory_record=(
                record_response(result.inventory_record) if result.inventory_record else None
            ),
            movement=movement_response(result.movement) if result.movement else None,
            costs=cost_update_response(result.costs) if result.costs else None,
            created=result.created,
        )
