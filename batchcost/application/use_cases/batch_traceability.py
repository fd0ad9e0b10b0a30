"""Batch Traceability Use Case: what a batch consumed and produced."""

from dataclasses import dataclass, field

from batchcost.application.dto.mappers import batch_response
from batchcost.application.dto.responses import (
    BatchTraceabilityResponse,
    TraceabilityEntryResponse,
)
from batchcost.config import get_logger
from batchcost.core.entities.batch import BatchManufacturingRecord
from batchcost.core.entities.inventory import (
    InventoryMovement,
    InventoryRecord,
    MovementType,
    ReferenceType,
)
from batchcost.core.exceptions import BatchNotFoundError
from batchcost.core.interfaces.batch_store import IBatchStore
from batchcost.core.interfaces.inventory_store import IInventoryStore

logger = get_logger(__name__)


@dataclass
class TraceabilityEntry:
    movement: InventoryMovement
    record: InventoryRecord | None = None


@dataclass
class BatchTraceability:
    """A batch with its inventory movements grouped by effect."""

    batch: BatchManufacturingRecord
    consumed: list[TraceabilityEntry] = field(default_factory=list)
    produced: list[TraceabilityEntry] = field(default_factory=list)
    adjusted: list[TraceabilityEntry] = field(default_factory=list)


class BatchTraceabilityUseCase:
    """Trace a batch back to the inventory it touched."""

    def __init__(
        self,
        batch_store: IBatchStore | None = None,
        inventory_store: IInventoryStore | None = None,
    ):
        self._batch_store = batch_store
        self._inventory_store = inventory_store

    async def _get_batch_store(self) -> IBatchStore:
        if self._batch_store is None:
            from batchcost.infrastructure.storage.sqlite import get_batch_store

            self._batch_store = await get_batch_store()
        return self._batch_store

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from batchcost.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def execute(self, batch_id: str) -> BatchTraceability:
        """Execute batch traceability use case."""
        batch_store = await self._get_batch_store()
        batch = await batch_store.get_batch(batch_id)
        if batch is None:
            raise BatchNotFoundError(batch_id)

        inv_store = await self._get_inventory_store()
        movements = await inv_store.get_movements_by_reference(ReferenceType.BATCH, batch_id)

        records: dict[int, InventoryRecord | None] = {}
        trace = BatchTraceability(batch=batch)
        for movement in movements:
            if movement.inventory_id not in records:
                records[movement.inventory_id] = await inv_store.get_record(movement.inventory_id)
            entry = TraceabilityEntry(movement=movement, record=records[movement.inventory_id])

            if movement.movement_type == MovementType.MANUFACTURING_CONSUME:
                trace.consumed.append(entry)
            elif movement.movement_type == MovementType.MANUFACTURING_PRODUCE:
                trace.produced.append(entry)
            elif movement.movement_type == MovementType.MANUFACTURING_ADJUST:
                trace.adjusted.append(entry)

        logger.debug(
            "batch_traced",
            batch_id=batch_id,
            consumed=len(trace.consumed),
            produced=len(trace.produced),
            adjusted=len(trace.adjusted),
        )
        return trace

    def to_response(self, trace: BatchTraceability) -> BatchTraceabilityResponse:
        return BatchTraceabilityResponse(
            batch=batch_response(trace.batch),
            # Consumption is reported as positive quantities
            consumed=[self._entry(e, absolute=True) for e in trace.consumed],
            produced=[self._entry(e) for e in trace.produced],
            adjusted=[self._entry(e) for e in trace.adjusted],
        )

    @staticmethod
    def _entry(entry: TraceabilityEntry, absolute: bool = False) -> TraceabilityEntryResponse:
        movement = entry.movement
        return TraceabilityEntryResponse(
            inventory_id=movement.inventory_id,
            product_name=entry.record.product_name if entry.record else None,
            unit=entry.record.unit if entry.record else None,
            movement_type=movement.movement_type.value,
            quantity=abs(movement.quantity) if absolute else movement.quantity,
            notes=movement.notes,
            created_at=movement.created_at,
        )
