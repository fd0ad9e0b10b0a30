"""Change notification entities pushed by the store."""

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

# Table whose changes drive the inventory reactor
BATCH_TABLE = "batch_records"


class ChangeKind(str, Enum):
    """Kind of row change."""

    INSERT = "insert"
    UPDATE = "update"


class ChangeEvent(BaseModel):
    """A committed row change: the row before (``old``) and after (``new``)."""

    table: str
    kind: ChangeKind
    old: Any = None
    new: Any = None
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
