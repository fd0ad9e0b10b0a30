"""Pytest configuration and shared fixtures."""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from batchcost.core.entities import (
    BatchIngredient,
    BatchManufacturingRecord,
    FinalProduct,
    InventoryRecord,
    RawMaterial,
    StockReceipt,
)


@pytest.fixture(autouse=True)
def _reset_singletons():
    """Give every test a fresh change feed and service singletons."""
    from batchcost.application.services import reset_services
    from batchcost.infrastructure.events import reset_change_feed

    reset_change_feed()
    reset_services()
    yield
    reset_change_feed()
    reset_services()


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
def mock_settings(temp_db_path: Path):
    """Mock settings pointing the pool at the temp database."""
    mock = MagicMock()
    mock.storage.db_path = temp_db_path
    mock.storage.pool_size = 1
    mock.storage.busy_timeout = 5000
    return mock


@pytest.fixture
async def sqlite_db(temp_db_path: Path, mock_settings) -> AsyncGenerator[Path, None]:
    """Migrated temp database with the global pool bound to it."""
    import batchcost.infrastructure.storage.sqlite.connection as conn_module
    from batchcost.infrastructure.storage.sqlite import reset_stores
    from batchcost.infrastructure.storage.sqlite.migrations import initialize_database

    await initialize_database(temp_db_path, create_backup_before=False)

    conn_module._pool = None
    reset_stores()
    with patch.object(conn_module, "get_settings", return_value=mock_settings):
        try:
            yield temp_db_path
        finally:
            await conn_module.close_pool()
            reset_stores()


@pytest.fixture
def flour() -> RawMaterial:
    return RawMaterial(id="MAT-FLOUR", name="Flour", unit="kg", minimum_stock=10.0)


@pytest.fixture
def sugar() -> RawMaterial:
    return RawMaterial(id="MAT-SUGAR", name="Sugar", unit="kg", minimum_stock=5.0)


@pytest.fixture
def cake_mix() -> FinalProduct:
    return FinalProduct(id="PRD-CAKE", name="Cake Mix", recipe_id="RCP-CAKE", unit_price=12.0)


@pytest.fixture
def flour_record() -> InventoryRecord:
    return InventoryRecord(id=1, product_name="Flour", stock_level=20.0, reorder_point=10.0)


@pytest.fixture
def make_receipt():
    """Factory for stock receipts."""

    def _make(material_id: str, quantity: float, unit_price: float, accepted: bool = True):
        return StockReceipt(
            raw_material_id=material_id,
            quantity=quantity,
            unit_price=unit_price,
            is_accepted=accepted,
        )

    return _make


@pytest.fixture
def make_batch():
    """Factory for batch records; started 2024-05-01 08:00 UTC."""

    def _make(
        batch_id: str = "BATCH-1",
        product_id: str = "PRD-CAKE",
        finished: bool = False,
        bags_count: int | None = None,
        batch_size: float | None = None,
        ingredients: list[BatchIngredient] | None = None,
    ) -> BatchManufacturingRecord:
        return BatchManufacturingRecord(
            id=batch_id,
            product_id=product_id,
            product_batch_number=f"PB-{batch_id}",
            batch_size=batch_size,
            bags_count=bags_count,
            batch_started=datetime(2024, 5, 1, 8, 0, tzinfo=UTC),
            batch_finished=datetime(2024, 5, 1, 16, 0, tzinfo=UTC) if finished else None,
            ingredients=ingredients or [],
        )

    return _make
