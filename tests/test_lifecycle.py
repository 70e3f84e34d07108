import asyncio
import time

from jobportal.auth.lifecycle import (
    ACTIVITY_TASK, NOTIFICATION_TASK, emit_notification, session_active, start_session_tasks, teardown_client
)
from jobportal.auth.schemas import SessionRecord
from jobportal.auth.session import SessionManager
from jobportal.config import settings
from jobportal.services.notifications import notification_feed
from jobportal.services.scheduler import task_registry
from jobportal.storage import AUTH_TOKEN_KEY, SESSION_KEY, USER_KEY


def _two_days_ago():
    return time.time() - 2 * 86400


def _expired_session(store):
    return SessionManager(store, now=_two_days_ago).establish(1, "demo@example.com", "Demo User")


def test_activity_tick_refreshes_last_activity(monkeypatch, store):
    monkeypatch.setattr(settings.session, "activity_refresh_seconds", 0.02)
    ctx = SessionManager(store).establish(1, "demo@example.com", "Demo User")

    async def scenario():
        start_session_tasks(ctx)
        task = task_registry.get(ctx.client_id, ACTIVITY_TASK)
        await asyncio.sleep(0.2)
        teardown_client(ctx.client_id)
        return task

    task = asyncio.run(scenario())

    assert task.ticks >= 1
    store.db.expire_all()
    session = SessionRecord.model_validate(store.get(SESSION_KEY))
    assert session.last_activity > ctx.session.last_activity
    assert session.login_time == ctx.session.login_time


def test_activity_tick_tears_down_expired_session(monkeypatch, store):
    monkeypatch.setattr(settings.session, "activity_refresh_seconds", 0.02)
    ctx = _expired_session(store)

    async def scenario():
        start_session_tasks(ctx)
        activity = task_registry.get(ctx.client_id, ACTIVITY_TASK)
        notifications = task_registry.get(ctx.client_id, NOTIFICATION_TASK)
        await asyncio.sleep(0.2)
        return activity, notifications

    activity, notifications = asyncio.run(scenario())

    assert activity.ticks == 1
    assert activity.cancelled
    assert notifications.cancelled
    assert not task_registry.has_tasks(ctx.client_id)
    assert task_registry.get(ctx.client_id, ACTIVITY_TASK) is None
    assert notification_feed.active(ctx.client_id) == []

    store.db.expire_all()
    assert store.get(AUTH_TOKEN_KEY) is None
    assert store.get(USER_KEY) is None
    assert store.get(SESSION_KEY) is None


def test_notification_tick_skips_expired_session(store):
    ctx = _expired_session(store)

    async def scenario():
        start_session_tasks(ctx)
        try:
            return emit_notification(ctx.client_id)
        finally:
            teardown_client(ctx.client_id)

    assert asyncio.run(scenario()) is None
    assert notification_feed.active(ctx.client_id) == []


def test_notification_tick_emits_for_valid_session(store):
    ctx = SessionManager(store).establish(1, "demo@example.com", "Demo User")

    async def scenario():
        start_session_tasks(ctx)
        try:
            entry = emit_notification(ctx.client_id)
            return entry, notification_feed.active(ctx.client_id)
        finally:
            teardown_client(ctx.client_id)

    entry, active = asyncio.run(scenario())
    assert entry is not None
    assert entry in active


def test_session_active_follows_token_expiry(store):
    ctx = SessionManager(store).establish(1, "demo@example.com", "Demo User")
    expires_at = ctx.claims.expires_at

    async def scenario():
        start_session_tasks(ctx)
        try:
            return (
                session_active(ctx.client_id, now=lambda: expires_at),
                session_active(ctx.client_id, now=lambda: expires_at + 1),
            )
        finally:
            teardown_client(ctx.client_id)

    assert asyncio.run(scenario()) == (True, False)
    assert not session_active(ctx.client_id)
