"""Infrastructure layer implementations."""

from batchcost.infrastructure import events, storage

__all__ = ["storage", "events"]
