"""Tests for the schema migrator."""

import aiosqlite

from batchcost.core.entities import BATCH_TABLE
from batchcost.infrastructure.storage.sqlite.migrations import (
    REQUIRED_TABLES,
    discover_migrations,
    initialize_database,
    verify_schema_integrity,
)


def test_discovers_initial_migration():
    migrations = discover_migrations()
    assert migrations[0].version == "001"
    assert migrations[0].name == "initial"
    assert len(migrations[0].checksum) == 16


async def test_initialize_creates_required_tables(temp_db_path):
    results = await initialize_database(temp_db_path, create_backup_before=False)

    assert results and all(r.success for r in results)
    async with aiosqlite.connect(temp_db_path) as conn:
        cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
        tables = {row[0] for row in await cursor.fetchall()}
    assert set(REQUIRED_TABLES) <= tables
    assert BATCH_TABLE in tables


async def test_initialize_is_idempotent(temp_db_path):
    await initialize_database(temp_db_path, create_backup_before=False)
    assert await initialize_database(temp_db_path) == []
    assert list(temp_db_path.parent.glob("*.backup_*")) == []


async def test_schema_integrity_passes(temp_db_path):
    await initialize_database(temp_db_path, create_backup_before=False)
    checks = await verify_schema_integrity(temp_db_path)
    assert {c["check"]: c["status"] for c in checks} == {
        "foreign_keys": "PASS",
        "integrity": "PASS",
        "required_tables": "PASS",
    }
