"""
JobPortal - Authentication Dependencies

FastAPI dependencies for client scoping, session access and route protection.

Usage in routers:
    from ..auth.dependencies import require_session

    @router.get("/protected")
    async def protected_route(ctx: SessionContext = Depends(require_session)):
        return {"user_id": ctx.user_id}

Dependency hierarchy:
    get_client_id       - Base: client scope from the signed session cookie
    get_record_store    - Adds: record store for that client
    get_session_manager - Adds: session lifecycle for that client
    get_session_context - Returns None instead of raising 401 if not authenticated
    require_session     - Raises 401 if not authenticated

Dependencies that touch the database are plain functions, which FastAPI
runs in its threadpool.
"""
from typing import Optional
import logging
import uuid

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..storage import RecordStore
from .lifecycle import session_manager_for
from .session import SessionContext, SessionManager

logger = logging.getLogger("jobportal.auth")

CLIENT_ID_KEY = "client_id"


async def get_client_id(request: Request) -> str:
    """
    Return the client scope of the caller, creating one on first contact.

    The scope lives in the signed session cookie and stands in for the
    browser's local storage: every record belongs to exactly one scope.
    """
    client_id = request.session.get(CLIENT_ID_KEY)
    if not client_id:
        client_id = uuid.uuid4().hex
        request.session[CLIENT_ID_KEY] = client_id
        logger.debug("Assigned new client scope %s", client_id)
    return client_id


def get_record_store(
    client_id: str = Depends(get_client_id),
    db: Session = Depends(get_db)
) -> RecordStore:
    return RecordStore(db, client_id)


def get_session_manager(store: RecordStore = Depends(get_record_store)) -> SessionManager:
    return session_manager_for(store)


def get_session_context(
    manager: SessionManager = Depends(get_session_manager)
) -> Optional[SessionContext]:
    """Current session, or None. Decode failures degrade silently to logged out."""
    return manager.current()


def require_session(
    ctx: Optional[SessionContext] = Depends(get_session_context)
) -> SessionContext:
    """
    Require a valid session.

    Raises:
        HTTPException: 401 if there is no valid session
    """
    if ctx is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated"
        )
    return ctx
