"""
JobPortal - Centralized rate limiting configuration.

All rate limit decorators should import `limiter` from this module.
The limiter keys on client IP address (via X-Forwarded-For when behind a proxy).
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

from .config import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)

# --- Rate limit constants ---

# Auth endpoints (login, register): strict
RATE_LIMIT_AUTH = "5/minute"

# Profile and resume writes
RATE_LIMIT_GENERAL = "30/minute"
