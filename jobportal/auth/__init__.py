"""
JobPortal - Authentication Module

Mock login/registration and the session lifecycle.

Usage:
    from jobportal.auth import require_session, SessionContext

    @router.get("/protected")
    async def protected_route(ctx: SessionContext = Depends(require_session)):
        return {"user_id": ctx.user_id}

Configuration (environment variables):
    JOBPORTAL_SECRET_KEY=<key>                 - Token signing key (required in production)
    JOBPORTAL_SESSION_TTL_SECONDS=86400
    JOBPORTAL_REMEMBER_ME_TTL_SECONDS=2592000
"""

# Models
from .models import Account

# Tokens & session lifecycle
from .tokens import Authenticated, Unauthenticated, TokenClaims, issue_token, decode_token
from .session import SessionContext, SessionManager

# Service
from .service import auth_service, AuthServiceError, InvalidCredentialsError, RegistrationError

# Dependencies (for use in routers)
from .dependencies import (
    get_client_id,
    get_record_store,
    get_session_manager,
    get_session_context,
    require_session,
)

# Router (for mounting in main.py)
from .router import router

__all__ = [
    # Models
    "Account",
    # Tokens & session
    "Authenticated",
    "Unauthenticated",
    "TokenClaims",
    "issue_token",
    "decode_token",
    "SessionContext",
    "SessionManager",
    # Service
    "auth_service",
    "AuthServiceError",
    "InvalidCredentialsError",
    "RegistrationError",
    # Dependencies
    "get_client_id",
    "get_record_store",
    "get_session_manager",
    "get_session_context",
    "require_session",
    # Router
    "router",
]
