"""Tests for the background reactor runner."""

import asyncio

from batchcost.application.reactor_runner import ReactorRunner
from batchcost.core.entities import BATCH_TABLE, ChangeEvent, ChangeKind
from batchcost.infrastructure.events import InMemoryChangeFeed


class RecordingReactor:
    """Collects every event it is fed."""

    def __init__(self):
        self.events: list[ChangeEvent] = []

    async def run(self, events):
        async for event in events:
            self.events.append(event)


class StuckReactor:
    async def run(self, events):
        await asyncio.Event().wait()


def _event(kind=ChangeKind.INSERT, table=BATCH_TABLE):
    return ChangeEvent(table=table, kind=kind, new={"id": "B1", "product_id": "P1"})


async def test_start_and_stop_drains_queued_events():
    feed = InMemoryChangeFeed()
    reactor = RecordingReactor()
    runner = ReactorRunner(reactor, feed)

    runner.start()
    assert runner.running is True

    await feed.publish(_event(ChangeKind.INSERT))
    await feed.publish(_event(ChangeKind.UPDATE))
    await runner.stop()

    assert runner.running is False
    assert [e.kind for e in reactor.events] == [ChangeKind.INSERT, ChangeKind.UPDATE]


async def test_only_batch_table_is_delivered():
    feed = InMemoryChangeFeed()
    reactor = RecordingReactor()
    runner = ReactorRunner(reactor, feed)
    runner.start()

    await feed.publish(_event(table="recipes"))
    await runner.stop()

    assert reactor.events == []


async def test_start_is_idempotent():
    feed = InMemoryChangeFeed()
    runner = ReactorRunner(RecordingReactor(), feed)

    runner.start()
    runner.start()
    await feed.publish(_event())
    await runner.stop()

    assert feed._subscriptions == []


async def test_stop_times_out_on_stuck_reactor():
    runner = ReactorRunner(StuckReactor(), InMemoryChangeFeed(), shutdown_timeout=0.05)
    runner.start()
    await asyncio.sleep(0)

    await runner.stop()

    assert runner.running is False


async def test_stop_without_start_is_noop():
    runner = ReactorRunner(RecordingReactor(), InMemoryChangeFeed())
    await runner.stop()
    assert runner.running is False
