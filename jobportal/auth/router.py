"""
JobPortal - Authentication Router

API endpoints for the mock authentication backend.

Endpoints:
    POST /auth/login              - Email/password login -> session token
    POST /auth/register           - Email/password registration with consents
    POST /auth/logout             - Terminate the session (idempotent)
    GET  /auth/session            - Page-load session check
    POST /auth/session/activity   - Refresh the session's last activity
"""
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session
import asyncio
import logging

from ..database import get_db
from ..rate_limit import limiter, RATE_LIMIT_AUTH
from .dependencies import get_session_manager
from .lifecycle import start_session_tasks
from .schemas import (
    LoginRequest, LoginResponse, RegisterRequest, RegisterResponse,
    SessionStatus, ActivityResponse, MessageResponse, UserResponse
)
from .service import auth_service, InvalidCredentialsError, RegistrationError
from .session import SessionManager

logger = logging.getLogger("jobportal.auth")
router = APIRouter()


# -----------------------------------------------------------------------------
# Registration & Login
# -----------------------------------------------------------------------------

@router.post("/login", response_model=LoginResponse)
@limiter.limit(RATE_LIMIT_AUTH)
async def login(
    request: Request,
    credentials: LoginRequest,
    db: Session = Depends(get_db),
    manager: SessionManager = Depends(get_session_manager)
):
    """
    Login with email and password.

    The token expires after one day, or thirty days with rememberMe.
    On failure nothing is written for the client.
    """
    try:
        account = await auth_service.login(credentials.email, credentials.password, db)
    except InvalidCredentialsError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"}
        )

    ctx = await asyncio.to_thread(
        manager.establish,
        account.id,
        account.email,
        account.name,
        credentials.remember_me
    )
    start_session_tasks(ctx)
    token = await asyncio.to_thread(manager.stored_token)

    return LoginResponse(
        token=token,
        user=ctx.user,
        session=ctx.session
    )


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(RATE_LIMIT_AUTH)
async def register(
    request: Request,
    user_data: RegisterRequest,
    db: Session = Depends(get_db)
):
    """
    Register a new account.

    Requires name, email and password, matching confirmation when given,
    and consent to the terms and the privacy policy.
    """
    try:
        account = await auth_service.register(
            name=user_data.name,
            email=user_data.email,
            password=user_data.password,
            confirm_password=user_data.confirm_password,
            terms_consent=user_data.terms_consent,
            privacy_consent=user_data.privacy_consent,
            marketing_consent=user_data.marketing_consent,
            db=db
        )
    except RegistrationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    return RegisterResponse(
        user=UserResponse(id=account.id, name=account.name, email=account.email)
    )


@router.post("/logout", response_model=MessageResponse)
def logout(manager: SessionManager = Depends(get_session_manager)):
    """Clear the token, user and session records. Always succeeds."""
    manager.terminate()
    return MessageResponse(message="Logged out")


# -----------------------------------------------------------------------------
# Session
# -----------------------------------------------------------------------------

@router.get("/session", response_model=SessionStatus)
async def get_session_status(manager: SessionManager = Depends(get_session_manager)):
    """
    Check the stored token on page load.

    Never fails: malformed or expired tokens read as logged out.
    """
    ctx = await asyncio.to_thread(manager.current)
    if ctx is None:
        return SessionStatus(authenticated=False)

    start_session_tasks(ctx)
    return SessionStatus(authenticated=True, user=ctx.user, session=ctx.session)


@router.post("/session/activity", response_model=ActivityResponse)
def refresh_activity(manager: SessionManager = Depends(get_session_manager)):
    """Refresh lastActivity. A no-op without a valid session."""
    session = manager.refresh_activity()
    if session is None:
        return ActivityResponse(refreshed=False)
    return ActivityResponse(refreshed=True, last_activity=session.last_activity)
