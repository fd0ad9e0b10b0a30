"""
Record Sale Use Case: take sold final product out of stock.

Every line is checked against stock on hand before any line is applied,
so a sale that cannot be filled leaves inventory untouched.
"""

import uuid
from dataclasses import dataclass, field

from batchcost.application.dto.mappers import movement_response, record_response
from batchcost.application.dto.requests import RecordSaleRequest
from batchcost.application.dto.responses import SaleResponse, StockChangeResponse
from batchcost.application.use_cases.record_wastage import StockChangeResult
from batchcost.config import get_logger
from batchcost.core.entities.inventory import (
    InventoryMovement,
    InventoryRecord,
    MovementType,
    ReferenceType,
)
from batchcost.core.entities.product import FinalProduct
from batchcost.core.exceptions import (
    FinalProductNotFoundError,
    InsufficientStockError,
    InventoryRecordNotFoundError,
)
from batchcost.core.interfaces.inventory_store import IInventoryStore
from batchcost.core.interfaces.product_store import IProductStore

logger = get_logger(__name__)


@dataclass
class SaleResult:
    """Per-line stock changes of one sale."""

    sale_reference: str
    changes: list[StockChangeResult] = field(default_factory=list)


class RecordSaleUseCase:
    """Decrement final product stock for each sold line."""

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

    async def execute(self, request: RecordSaleRequest) -> SaleResult:
        """Execute record sale use case."""
        sale_reference = request.invoice_number or f"SALE-{uuid.uuid4().hex[:12]}"
        product_store = await self._get_product_store()
        inv_store = await self._get_inventory_store()

        # 1. Resolve every line to its final product inventory record
        resolved: list[tuple[FinalProduct, InventoryRecord, float]] = []
        records: dict[int, InventoryRecord] = {}
        requested: dict[int, float] = {}
        for line in request.lines:
            product = await product_store.get_product(line.product_id)
            if product is None:
                raise FinalProductNotFoundError(line.product_id)

            record = await inv_store.find_by_name(product.name, is_final_product=True)
            if record is None:
                raise InventoryRecordNotFoundError(product.name)

            # Lines for the same product share one record
            record = records.setdefault(record.id, record)  # type: ignore[arg-type]
            requested[record.id] = requested.get(record.id, 0.0) + line.quantity  # type: ignore[index]
            resolved.append((product, record, line.quantity))

        # 2. Balance check across all lines
        for record_id, quantity in requested.items():
            record = records[record_id]
            if record.stock_level < quantity:
                raise InsufficientStockError(
                    inventory_id=record_id,
                    requested=quantity,
                    available=record.stock_level,
                )

        # 3. Apply
        result = SaleResult(sale_reference=sale_reference)
        for product, record, quantity in resolved:
            record.apply_delta(-quantity)
            await inv_store.update_stock_level(record)
            movement = await inv_store.add_movement(
                InventoryMovement(
                    inventory_id=record.id,  # type: ignore[arg-type]
                    movement_type=MovementType.SALE,
                    quantity=-quantity,
                    reference_type=ReferenceType.SALE,
                    reference_id=sale_reference,
                    notes=f"Sold to {request.customer}" if request.customer else None,
                )
            )
            result.changes.append(
                StockChangeResult(
                    inventory_record=record.model_copy(),
                    movement=movement,
                )
            )

        logger.info(
            "sale_recorded",
            sale_reference=sale_reference,
            lines=len(request.lines),
            products=[p.id for p, _, _ in resolved],
        )
        return result

    def to_response(self, result: SaleResult) -> SaleResponse:
        return SaleResponse(
            sale_reference=result.sale_reference,
            changes=[
                StockChangeResponse(
                    inventory_record=record_response(change.inventory_record),
                    movement=movement_response(change.movement),
                )
                for change in result.changes
            ],
        )
