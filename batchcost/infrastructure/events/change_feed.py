"""
In-process change feed.

Each subscription owns an asyncio queue. ``publish`` fans an event out to
every subscription whose table and kinds match, without blocking the
publisher. Consumers iterate the subscription with ``async for``.
"""

import asyncio
from collections.abc import Iterable

from batchcost.config import get_logger
from batchcost.core.entities.events import ChangeEvent, ChangeKind
from batchcost.core.interfaces.change_feed import IChangeFeed

logger = get_logger(__name__)

_CLOSED = object()


class Subscription:
    """Async iterator over the change events delivered to one subscriber."""

    def __init__(self, feed: "InMemoryChangeFeed", table: str, kinds: frozenset[ChangeKind]):
        self._feed = feed
        self.table = table
        self.kinds = kinds
        self._queue: asyncio.Queue[object] = asyncio.Queue()
        self._closed = False

    def matches(self, event: ChangeEvent) -> bool:
        return event.table == self.table and event.kind in self.kinds

    def deliver(self, event: ChangeEvent) -> None:
        if not self._closed:
            self._queue.put_nowait(event)

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def close(self) -> None:
        """Stop iteration once queued events are drained."""
        if self._closed:
            return
        self._closed = True
        self._queue.put_nowait(_CLOSED)
        self._feed._unsubscribe(self)

    def __aiter__(self) -> "Subscription":
        return self

    async def __anext__(self) -> ChangeEvent:
        item = await self._queue.get()
        if item is _CLOSED:
            raise StopAsyncIteration
        return item  # type: ignore[return-value]


class InMemoryChangeFeed(IChangeFeed):
    """Fan-out change feed for a single process."""

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []

    async def publish(self, event: ChangeEvent) -> None:
        delivered = 0
        for subscription in list(self._subscriptions):
            if subscription.matches(event):
                subscription.deliver(event)
                delivered += 1
        logger.debug(
            "change_published",
            table=event.table,
            kind=event.kind.value,
            subscribers=delivered,
        )

    def subscribe(
        self, table: str, kinds: Iterable[ChangeKind] | None = None
    ) -> Subscription:
        subscription = Subscription(
            self, table, frozenset(kinds) if kinds else frozenset(ChangeKind)
        )
        self._subscriptions.append(subscription)
        logger.info(
            "change_feed_subscribed",
            table=table,
            kinds=sorted(k.value for k in subscription.kinds),
        )
        return subscription

    def close(self) -> None:
        """Close every open subscription."""
        for subscription in list(self._subscriptions):
            subscription.close()

    def _unsubscribe(self, subscription: Subscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)


# Global change feed
_feed: InMemoryChangeFeed | None = None


def get_change_feed() -> InMemoryChangeFeed:
    """Get or create the global change feed."""
    global _feed
    if _feed is None:
        _feed = InMemoryChangeFeed()
    return _feed


def reset_change_feed() -> None:
    """Close and drop the global change feed (for testing)."""
    global _feed
    if _feed is not None:
        _feed.close()
    _feed = None
