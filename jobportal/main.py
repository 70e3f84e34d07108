"""
JobPortal - FastAPI application entry point.

Job seeker portal backend: mock login and registration, session lifecycle,
profile onboarding with completeness tracking, and resume upload/parsing.
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from contextlib import asynccontextmanager
from datetime import datetime
import logging

from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from . import __version__
from .config import settings
from .rate_limit import limiter
from .database import init_db, SessionLocal
from .routers import profile, resume, dashboard
from .auth import router as auth_router
from .auth.service import auth_service
from .schemas import HealthResponse
from .services.scheduler import task_registry

# --- Logging Configuration ---
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger("jobportal")


def seed_demo_account():
    """Create the demo login if it does not exist."""
    db = SessionLocal()
    try:
        auth_service.seed_demo_account(db)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database on startup, stop background ticks on shutdown."""
    logger.info("Starting JobPortal application...")
    init_db()
    seed_demo_account()
    logger.info("JobPortal ready!")
    yield
    cancelled = task_registry.cancel_all()
    logger.info("Shutting down JobPortal (%d background task(s) cancelled)...", cancelled)


app = FastAPI(
    title="JobPortal",
    description="Job seeker portal - login, profile onboarding, resume upload and dashboard",
    version=__version__,
    lifespan=lifespan
)

# --- Rate Limiting ---
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


# --- Security Headers Middleware ---
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response


# --- Middleware ---
# Parse allowed origins from config
_allowed_origins = [o.strip() for o in settings.allowed_origins.split(",") if o.strip()]

app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=_allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.session.secret_key,  # Signs the client scope cookie
    session_cookie="jobportal_client",
    # Never shorter than a remember-me token
    max_age=max(settings.session.client_scope_max_age_seconds, settings.session.remember_me_ttl_seconds),
)

# Include routers
app.include_router(auth_router, prefix="/auth", tags=["auth"])
app.include_router(profile.router, prefix="/api/profile", tags=["profile"])
app.include_router(resume.router, prefix="/api/resume", tags=["resume"])
app.include_router(dashboard.router, prefix="/api/dashboard", tags=["dashboard"])


# --- API Endpoints ---

@app.get("/api/health", tags=["system"], response_model=HealthResponse)
async def health_check():
    """Health check endpoint for monitoring."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        timestamp=datetime.utcnow()
    )
