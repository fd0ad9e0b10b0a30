"""
Background runner for the batch-inventory reactor.

Subscribes the reactor to batch changes on the change feed and drives it
from a single asyncio task, so events are applied one at a time in the
order they were published.
"""

import asyncio

from batchcost.config import get_logger
from batchcost.core.entities.events import BATCH_TABLE, ChangeKind
from batchcost.core.interfaces.change_feed import IChangeFeed
from batchcost.core.services.batch_reactor import BatchInventoryReactor

logger = get_logger(__name__)


class ReactorRunner:
    """Owns the reactor's subscription and background task."""

    def __init__(
        self,
        reactor: BatchInventoryReactor,
        change_feed: IChangeFeed,
        shutdown_timeout: float = 5.0,
    ):
        self._reactor = reactor
        self._change_feed = change_feed
        self._shutdown_timeout = shutdown_timeout
        self._subscription = None
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Subscribe and start consuming. Idempotent."""
        if self.running:
            return
        self._subscription = self._change_feed.subscribe(
            BATCH_TABLE, kinds=(ChangeKind.INSERT, ChangeKind.UPDATE)
        )
        self._task = asyncio.create_task(
            self._reactor.run(self._subscription),
            name="batch-inventory-reactor",
        )
        logger.info("reactor_runner_started")

    async def stop(self) -> None:
        """
        Close the subscription and wait for queued events to drain.

        The task is cancelled if draining takes longer than the timeout.
        """
        if self._task is None:
            return
        if self._subscription is not None:
            self._subscription.close()
        try:
            await asyncio.wait_for(self._task, timeout=self._shutdown_timeout)
        except TimeoutError:
            logger.warning("reactor_drain_timeout", timeout=self._shutdown_timeout)
        finally:
            self._task = None
            self._subscription = None
        logger.info("reactor_runner_stopped")
