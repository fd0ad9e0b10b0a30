"""Abstract interface for store change notifications."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Iterable

from batchcost.core.entities.events import ChangeEvent, ChangeKind


class IChangeFeed(ABC):
    """
    Push-based feed of committed row changes.

    Subscribers receive ``ChangeEvent`` objects for a table, filtered by kind.
    """

    @abstractmethod
    async def publish(self, event: ChangeEvent) -> None:
        """Deliver an event to every matching subscriber."""

    @abstractmethod
    def subscribe(
        self, table: str, kinds: Iterable[ChangeKind] | None = None
    ) -> AsyncIterator[ChangeEvent]:
        """Open a subscription; iterate it to receive events."""
