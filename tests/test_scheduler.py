import asyncio

import pytest

from jobportal.services.notifications import NOTIFICATION_CATALOG, NotificationFeed
from jobportal.services.scheduler import PeriodicTask, TaskRegistry


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        PeriodicTask("bad", 0, lambda: None)


def test_task_ticks_until_cancelled():
    calls = []

    async def scenario():
        task = PeriodicTask("tick", 0.01, lambda: calls.append(1)).start()
        await asyncio.sleep(0.1)
        task.cancel()
        seen = len(calls)
        await asyncio.sleep(0.05)
        return task, seen

    task, seen = asyncio.run(scenario())
    assert seen >= 2
    assert len(calls) == seen
    assert task.cancelled
    assert not task.running


def test_coroutine_callbacks_are_awaited():
    calls = []

    async def callback():
        calls.append(1)

    async def scenario():
        task = PeriodicTask("async", 0.01, callback).start()
        await asyncio.sleep(0.05)
        task.cancel()

    asyncio.run(scenario())
    assert calls


def test_failing_tick_keeps_ticking():
    async def scenario():
        def boom():
            raise RuntimeError("boom")

        task = PeriodicTask("failing", 0.01, boom).start()
        await asyncio.sleep(0.06)
        task.cancel()
        return task

    task = asyncio.run(scenario())
    assert task.ticks >= 2


def test_cancel_is_idempotent_and_final():
    async def scenario():
        task = PeriodicTask("once", 10, lambda: None).start()
        task.cancel()
        task.cancel()
        with pytest.raises(RuntimeError):
            task.start()
        await task.run_once()
        return task

    task = asyncio.run(scenario())
    assert task.ticks == 0


def test_cancel_before_start_is_safe():
    task = PeriodicTask("never", 1, lambda: None)
    task.cancel()
    assert task.cancelled


def test_registry_scopes_tasks_per_client():
    registry = TaskRegistry()

    async def scenario():
        first = registry.ensure("a", "activity", 10, lambda: None)
        again = registry.ensure("a", "activity", 10, lambda: None)
        registry.ensure("a", "notifications", 10, lambda: None)
        other = registry.ensure("b", "activity", 10, lambda: None)

        assert first is again
        assert registry.has_tasks("a")
        assert registry.cancel_client("a") == 2
        assert not registry.has_tasks("a")
        assert first.cancelled
        assert other.running
        assert registry.cancel_client("a") == 0
        assert registry.cancel_all() == 1

    asyncio.run(scenario())


def test_notification_feed_expires_and_clears():
    now = [1000.0]
    feed = NotificationFeed(now=lambda: now[0])

    entry = feed.emit("client")
    assert {"title": entry["title"], "text": entry["text"]} in NOTIFICATION_CATALOG
    assert feed.active("client") == [entry]

    now[0] += 11
    assert feed.active("client") == []

    feed.emit("client")
    feed.clear("client")
    assert feed.active("client") == []


def test_notification_backlog_is_bounded():
    feed = NotificationFeed(now=lambda: 1000.0)
    for _ in range(30):
        feed.emit("client")
    assert len(feed.active("client")) == 20
