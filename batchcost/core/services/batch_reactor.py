"""
Batch-inventory reactor.

Reacts to insert and update changes on batch manufacturing records:

- insert: consume every ingredient from raw-material stock (the inventory
  record and the material's current_stock), and produce
  finished bags when the batch is already finished;
- update, unfinished -> finished: produce finished bags;
- update while finished with a new bags_count: adjust finished stock
  by the difference.

Each step is best effort. Store failures and missing rows are logged and
the remaining steps still run. Consume and produce are keyed on
(batch id, movement type) so a replayed event does not apply them twice.
Stock lookups are by name and are not atomic with the write that follows.
"""

from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from typing import Any

from batchcost.config import get_logger, log_context
from batchcost.core.entities.batch import BatchIngredient, BatchManufacturingRecord
from batchcost.core.entities.events import BATCH_TABLE, ChangeEvent, ChangeKind
from batchcost.core.entities.inventory import (
    InventoryMovement,
    InventoryRecord,
    MovementType,
    ReferenceType,
)
from batchcost.core.entities.product import UnitConversion
from batchcost.core.exceptions import BatchCostError
from batchcost.core.interfaces.batch_store import IBatchStore
from batchcost.core.interfaces.inventory_store import IInventoryStore
from batchcost.core.interfaces.material_store import IMaterialStore
from batchcost.core.interfaces.product_store import IProductStore

logger = get_logger(__name__)


@dataclass
class ReactionResult:
    """What a single change event did to inventory."""

    batch_id: str
    movements: list[InventoryMovement] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    conversion: UnitConversion | None = None

    def of_type(self, movement_type: MovementType) -> list[InventoryMovement]:
        return [m for m in self.movements if m.movement_type == movement_type]


def _as_batch(value: Any) -> BatchManufacturingRecord:
    if isinstance(value, BatchManufacturingRecord):
        return value
    return BatchManufacturingRecord.model_validate(value)


def _event_batch_id(event: ChangeEvent) -> str | None:
    row = event.new if event.new is not None else event.old
    if isinstance(row, dict):
        return row.get("id")
    return getattr(row, "id", None)


class BatchInventoryReactor:
    """Applies batch lifecycle changes to inventory stock levels."""

    def __init__(
        self,
        inventory_store: IInventoryStore,
        batch_store: IBatchStore,
        material_store: IMaterialStore,
        product_store: IProductStore,
        final_product_unit: str = "bag",
        default_reorder_point: float = 5.0,
        default_bags_count: int = 1,
    ):
        self._inventory_store = inventory_store
        self._batch_store = batch_store
        self._material_store = material_store
        self._product_store = product_store
        self._final_product_unit = final_product_unit
        self._default_reorder_point = default_reorder_point
        self._default_bags_count = default_bags_count

    async def run(self, events: AsyncIterator[ChangeEvent]) -> None:
        """Consume a change subscription until it is closed or cancelled."""
        logger.info("batch_reactor_started")
        async for event in events:
            with log_context(batch_id=_event_batch_id(event), change=event.kind.value):
                try:
                    await self.handle(event)
                except Exception as e:
                    logger.error("batch_reaction_failed", error=str(e))
        logger.info("batch_reactor_stopped")

    async def handle(self, event: ChangeEvent) -> ReactionResult | None:
        """Dispatch one change event."""
        if event.table != BATCH_TABLE or event.new is None:
            return None
        if event.kind == ChangeKind.INSERT:
            return await self.handle_insert(_as_batch(event.new))
        if event.old is None:
            logger.warning("batch_update_without_old_row")
            return None
        return await self.handle_update(_as_batch(event.old), _as_batch(event.new))

    async def handle_insert(self, batch: BatchManufacturingRecord) -> ReactionResult:
        """Consume ingredients; produce too if the batch arrived finished."""
        result = ReactionResult(batch_id=batch.id or "")
        logger.info(
            "batch_insert_received",
            batch_id=batch.id,
            finished=batch.is_finished,
        )

        await self._consume_ingredients(batch, result)
        if batch.is_finished:
            await self._produce(batch, result)

        logger.info(
            "batch_insert_applied",
            batch_id=batch.id,
            movements=len(result.movements),
            skipped=len(result.skipped),
        )
        return result

    async def handle_update(
        self,
        old: BatchManufacturingRecord,
        new: BatchManufacturingRecord,
    ) -> ReactionResult:
        """Produce on finish, adjust on bag-count change while finished."""
        result = ReactionResult(batch_id=new.id or "")

        if not new.is_finished:
            return result

        if not old.is_finished:
            await self._produce(new, result)
            return result

        delta = self._bags(new) - self._bags(old)
        if delta != 0:
            await self._adjust(new, delta, result)
        if delta != 0 or old.batch_size != new.batch_size:
            await self._record_conversion(new, result)
        return result

    # --- steps ---

    async def _consume_ingredients(
        self, batch: BatchManufacturingRecord, result: ReactionResult
    ) -> None:
        try:
            if await self._inventory_store.has_movement(
                ReferenceType.BATCH, batch.id, MovementType.MANUFACTURING_CONSUME  # type: ignore[arg-type]
            ):
                logger.info("batch_consumption_already_recorded", batch_id=batch.id)
                result.skipped.append("consume:already_recorded")
                return
            ingredients = await self._batch_store.list_ingredients(batch.id)  # type: ignore[arg-type]
        except BatchCostError as e:
            logger.error("batch_ingredients_unavailable", batch_id=batch.id, error=str(e))
            result.skipped.append("consume:ingredients_unavailable")
            return

        for ingredient in ingredients:
            try:
                await self._consume_one(batch, ingredient, result)
            except BatchCostError as e:
                logger.error(
                    "ingredient_consumption_failed",
                    batch_id=batch.id,
                    material_id=ingredient.raw_material_id,
                    error=str(e),
                )
                result.skipped.append(f"consume:{ingredient.raw_material_id}")

    async def _consume_one(
        self,
        batch: BatchManufacturingRecord,
        ingredient: BatchIngredient,
        result: ReactionResult,
    ) -> None:
        material = await self._material_store.get_material(ingredient.raw_material_id)
        if material is None:
            logger.warning(
                "ingredient_material_missing",
                batch_id=batch.id,
                material_id=ingredient.raw_material_id,
            )
            result.skipped.append(f"consume:{ingredient.raw_material_id}")
            return

        record = await self._inventory_store.find_by_name(
            material.name, is_final_product=False
        )
        if record is None:
            logger.warning(
                "ingredient_inventory_missing",
                batch_id=batch.id,
                material=material.name,
            )
            result.skipped.append(f"consume:{ingredient.raw_material_id}")
            return

        record.apply_delta(-ingredient.quantity)
        await self._inventory_store.update_stock_level(record)
        material.current_stock = max(0.0, material.current_stock - ingredient.quantity)
        await self._material_store.update_current_stock(
            material.id, material.current_stock  # type: ignore[arg-type]
        )
        movement = await self._inventory_store.add_movement(
            InventoryMovement(
                inventory_id=record.id,  # type: ignore[arg-type]
                movement_type=MovementType.MANUFACTURING_CONSUME,
                quantity=-ingredient.quantity,
                reference_type=ReferenceType.BATCH,
                reference_id=batch.id,
                notes=f"Used in batch {self._label(batch)}",
            )
        )
        result.movements.append(movement)

    async def _produce(
        self, batch: BatchManufacturingRecord, result: ReactionResult
    ) -> None:
        try:
            if await self._inventory_store.has_movement(
                ReferenceType.BATCH, batch.id, MovementType.MANUFACTURING_PRODUCE  # type: ignore[arg-type]
            ):
                logger.info("batch_production_already_recorded", batch_id=batch.id)
                result.skipped.append("produce:already_recorded")
                return

            product = await self._product_store.get_product(batch.product_id)
            if product is None:
                logger.warning(
                    "batch_product_missing",
                    batch_id=batch.id,
                    product_id=batch.product_id,
                )
                result.skipped.append("produce:product_missing")
                return

            quantity = self._bags(batch)
            record = await self._inventory_store.find_by_name(
                product.name, is_final_product=True
            )
            if record is None:
                record = await self._inventory_store.create_record(
                    InventoryRecord(
                        product_name=product.name,
                        stock_level=quantity,
                        unit=self._final_product_unit,
                        is_final_product=True,
                        is_recipe_based=True,
                        reorder_point=self._default_reorder_point,
                    )
                )
                logger.info(
                    "final_product_inventory_created",
                    product=product.name,
                    inventory_id=record.id,
                )
            else:
                record.apply_delta(quantity)
                await self._inventory_store.update_stock_level(record)

            movement = await self._inventory_store.add_movement(
                InventoryMovement(
                    inventory_id=record.id,  # type: ignore[arg-type]
                    movement_type=MovementType.MANUFACTURING_PRODUCE,
                    quantity=quantity,
                    reference_type=ReferenceType.BATCH,
                    reference_id=batch.id,
                    notes=f"Produced in batch {self._label(batch)}",
                )
            )
            result.movements.append(movement)
        except BatchCostError as e:
            logger.error("batch_production_failed", batch_id=batch.id, error=str(e))
            result.skipped.append("produce:failed")
            return

        await self._record_conversion(batch, result)

    async def _adjust(
        self,
        batch: BatchManufacturingRecord,
        delta: int,
        result: ReactionResult,
    ) -> None:
        try:
            product = await self._product_store.get_product(batch.product_id)
            if product is None:
                logger.warning("batch_product_missing", batch_id=batch.id)
                result.skipped.append("adjust:product_missing")
                return

            record = await self._inventory_store.find_by_name(
                product.name, is_final_product=True
            )
            if record is None:
                logger.warning(
                    "final_product_inventory_missing",
                    batch_id=batch.id,
                    product=product.name,
                )
                result.skipped.append("adjust:inventory_missing")
                return

            record.apply_delta(delta)
            await self._inventory_store.update_stock_level(record)
            movement = await self._inventory_store.add_movement(
                InventoryMovement(
                    inventory_id=record.id,  # type: ignore[arg-type]
                    movement_type=MovementType.MANUFACTURING_ADJUST,
                    quantity=delta,
                    reference_type=ReferenceType.BATCH,
                    reference_id=batch.id,
                    notes=f"Bag count changed on batch {self._label(batch)}",
                )
            )
            result.movements.append(movement)
            logger.info("batch_output_adjusted", batch_id=batch.id, delta=delta)
        except BatchCostError as e:
            logger.error("batch_adjustment_failed", batch_id=batch.id, error=str(e))
            result.skipped.append("adjust:failed")

    async def _record_conversion(
        self, batch: BatchManufacturingRecord, result: ReactionResult
    ) -> None:
        kg_per_bag = batch.kg_per_bag
        if kg_per_bag is None:
            return
        try:
            result.conversion = await self._product_store.upsert_unit_conversion(
                UnitConversion(product_id=batch.product_id, kg_per_bag=kg_per_bag)
            )
        except BatchCostError as e:
            logger.error("unit_conversion_failed", batch_id=batch.id, error=str(e))
            result.skipped.append("conversion:failed")

    # --- helpers ---

    def _bags(self, batch: BatchManufacturingRecord) -> int:
        return batch.bags_count or self._default_bags_count

    @staticmethod
    def _label(batch: BatchManufacturingRecord) -> str:
        return batch.product_batch_number or batch.id or "?"
