"""
Batch Use Cases: record and update production batches.

Inventory effects are not applied here. The batch store publishes each
committed change and the inventory reactor reacts to it.
"""

from datetime import UTC, datetime

from batchcost.application.dto.mappers import batch_response
from batchcost.application.dto.requests import CreateBatchRequest, UpdateBatchRequest
from batchcost.application.dto.responses import BatchResponse
from batchcost.config import get_logger
from batchcost.core.entities.batch import BatchIngredient, BatchManufacturingRecord
from batchcost.core.exceptions import (
    BatchNotFoundError,
    FinalProductNotFoundError,
    RawMaterialNotFoundError,
    ValidationError,
)
from batchcost.core.interfaces.batch_store import IBatchStore
from batchcost.core.interfaces.material_store import IMaterialStore
from batchcost.core.interfaces.product_store import IProductStore

logger = get_logger(__name__)

_UPDATABLE_FIELDS = (
    "product_batch_number",
    "batch_size",
    "bags_count",
    "batch_started",
    "batch_finished",
)


def _as_utc(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _check_dates(batch: BatchManufacturingRecord) -> None:
    if (
        batch.batch_started is not None
        and batch.batch_finished is not None
        and batch.batch_finished < batch.batch_started
    ):
        raise ValidationError(
            "batch_finished",
            "Batch cannot finish before it started",
            batch.batch_finished.isoformat(),
        )


class CreateBatchUseCase:
    """Record a production batch with its consumed ingredients."""

    def __init__(
        self,
        batch_store: IBatchStore | None = None,
        product_store: IProductStore | None = None,
        material_store: IMaterialStore | None = None,
    ):
        self._batch_store = batch_store
        self._product_store = product_store
        self._material_store = material_store

    async def _get_batch_store(self) -> IBatchStore:
        if self._batch_store is None:
            from batchcost.infrastructure.storage.sqlite import get_batch_store

            self._batch_store = await get_batch_store()
        return self._batch_store

    async def _get_product_store(self) -> IProductStore:
        if self._product_store is None:
            from batchcost.infrastructure.storage.sqlite import get_product_store

            self._product_store = await get_product_store()
        return self._product_store

    async def _get_material_store(self) -> IMaterialStore:
        if self._material_store is None:
            from batchcost.infrastructure.storage.sqlite import get_material_store

            self._material_store = await get_material_store()
        return self._material_store

    async def execute(self, request: CreateBatchRequest) -> BatchManufacturingRecord:
        """Execute create batch use case."""
        product_store = await self._get_product_store()
        if await product_store.get_product(request.product_id) is None:
            raise FinalProductNotFoundError(request.product_id)

        mat_store = await self._get_material_store()
        for ingredient in request.ingredients:
            if await mat_store.get_material(ingredient.raw_material_id) is None:
                raise RawMaterialNotFoundError(ingredient.raw_material_id)

        batch = BatchManufacturingRecord(
            product_id=request.product_id,
            product_batch_number=request.product_batch_number,
            batch_size=request.batch_size,
            bags_count=request.bags_count,
            batch_started=_as_utc(request.batch_started),
            batch_finished=_as_utc(request.batch_finished),
            ingredients=[
                BatchIngredient(**ingredient.model_dump()) for ingredient in request.ingredients
            ],
        )
        _check_dates(batch)

        batch_store = await self._get_batch_store()
        batch = await batch_store.create_batch(batch)
        logger.info(
            "batch_recorded",
            batch_id=batch.id,
            product_id=batch.product_id,
            state=batch.state.value,
        )
        return batch

    def to_response(self, batch: BatchManufacturingRecord) -> BatchResponse:
        return batch_response(batch)


class UpdateBatchUseCase:
    """Partially update a batch header (finish it, correct the bag count)."""

    def __init__(self, batch_store: IBatchStore | None = None):
        self._batch_store = batch_store

    async def _get_batch_store(self) -> IBatchStore:
        if self._batch_store is None:
            from batchcost.infrastructure.storage.sqlite import get_batch_store

            self._batch_store = await get_batch_store()
        return self._batch_store

    async def execute(
        self, batch_id: str, request: UpdateBatchRequest
    ) -> BatchManufacturingRecord:
        """
        Execute update batch use case.

        Raises:
            BatchNotFoundError: Unknown batch
            ValidationError: Clearing batch_finished or finishing before start
        """
        store = await self._get_batch_store()
        batch = await store.get_batch(batch_id)
        if batch is None:
            raise BatchNotFoundError(batch_id)

        changes = {
            name: getattr(request, name)
            for name in _UPDATABLE_FIELDS
            if name in request.model_fields_set
        }
        if batch.is_finished and "batch_finished" in changes and changes["batch_finished"] is None:
            raise ValidationError(
                "batch_finished", "A finished batch cannot be reopened", None
            )

        for name, value in changes.items():
            if isinstance(value, datetime):
                value = _as_utc(value)
            setattr(batch, name, value)
        _check_dates(batch)

        batch = await store.update_batch(batch)
        logger.info("batch_changed", batch_id=batch_id, fields=sorted(changes))
        return batch

    def to_response(self, batch: BatchManufacturingRecord) -> BatchResponse:
        return batch_response(batch)
