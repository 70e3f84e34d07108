"""
JobPortal - Dashboard API.

Session overview for the dashboard header and the mock notification feed.
"""
from fastapi import APIRouter, Depends
from typing import List

from ..auth.dependencies import get_record_store, require_session
from ..auth.session import SessionContext
from ..profile.tracker import ProfileTracker
from ..schemas import DashboardResponse, NotificationResponse, ResumeRecordResponse
from ..services.notifications import notification_feed
from ..services.resume_gate import format_file_size
from ..storage import RecordStore

router = APIRouter()


@router.get("/", response_model=DashboardResponse)
def get_dashboard(
    ctx: SessionContext = Depends(require_session),
    store: RecordStore = Depends(get_record_store)
):
    """Who is logged in, when the session expires, and where the profile stands."""
    tracker = ProfileTracker(store)
    profile = tracker.load()
    view = tracker.view(profile)

    resume = None
    if tracker.has_resume():
        record = tracker.resume()
        resume = ResumeRecordResponse(
            **record,
            size_label=format_file_size(record["file_size"])
        )

    return DashboardResponse(
        client_id=ctx.client_id,
        user=ctx.user,
        session=ctx.session,
        expires_at=ctx.expires_at,
        profile_state=view.state,
        completion_percentage=view.completion_percentage,
        resume=resume
    )


@router.get("/notifications", response_model=List[NotificationResponse])
def get_notifications(ctx: SessionContext = Depends(require_session)):
    """Notifications emitted for this client that have not expired yet."""
    return [
        NotificationResponse(title=n["title"], text=n["text"], time=n["time"])
        for n in notification_feed.active(ctx.client_id)
    ]
