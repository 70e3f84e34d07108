"""
JobPortal - Background work bound to a session.

While a client has a valid session two ticks run for it: the activity refresh
and the mock notification feed. Both are started at login (or when a page load
finds a valid session without them) and cancelled when the session is torn
down, so no tick fires against cleared state.

The activity tick does its database work in a worker thread. The notification
tick only emits while the client's token is unexpired; once it lapses the
activity tick tears the session down on its next run.
"""
import asyncio
import logging
import time
from typing import Dict, Optional

from ..config import settings
from ..database import get_resilient_session
from ..services.notifications import notification_feed
from ..services.scheduler import task_registry
from ..storage import RecordStore
from .session import SessionContext, SessionManager
from .tokens import Clock

logger = logging.getLogger("jobportal.auth")

ACTIVITY_TASK = "activity"
NOTIFICATION_TASK = "notifications"

# client_id -> token expiry (epoch seconds) of the session the ticks serve
_session_expiry: Dict[str, int] = {}


def teardown_client(client_id: str) -> None:
    """Cancel a client's ticks and drop its notifications."""
    task_registry.cancel_client(client_id)
    notification_feed.clear(client_id)
    _session_expiry.pop(client_id, None)


def session_manager_for(store: RecordStore) -> SessionManager:
    return SessionManager(store, on_terminate=teardown_client)


def session_active(client_id: str, now: Clock = time.time) -> bool:
    """True while the token the client's ticks were started for has not expired."""
    expires_at = _session_expiry.get(client_id)
    return expires_at is not None and not expires_at < int(now())


def _refresh_activity(client_id: str) -> None:
    with get_resilient_session() as db:
        session_manager_for(RecordStore(db, client_id)).refresh_activity()


async def refresh_client_activity(client_id: str) -> None:
    """Activity tick: refresh lastActivity if the client still has a valid session."""
    await asyncio.to_thread(_refresh_activity, client_id)


def emit_notification(client_id: str) -> Optional[dict]:
    """Notification tick: emit one message unless the session has expired."""
    if not session_active(client_id):
        logger.debug("Skipping notification for client %s: session expired", client_id)
        return None
    return notification_feed.emit(client_id)


def start_session_tasks(ctx: SessionContext) -> None:
    """Start the client's ticks. Already running ticks are left alone."""
    client_id = ctx.client_id
    _session_expiry[client_id] = ctx.claims.expires_at

    task_registry.ensure(
        client_id,
        ACTIVITY_TASK,
        settings.session.activity_refresh_seconds,
        lambda: refresh_client_activity(client_id)
    )
    task_registry.ensure(
        client_id,
        NOTIFICATION_TASK,
        settings.mock.notification_interval_seconds,
        lambda: emit_notification(client_id)
    )
