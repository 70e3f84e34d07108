"""
JobPortal - Application configuration.

Centralized configuration using Pydantic Settings for environment variable management.

Environment Variables:
    All settings can be overridden via environment variables with JOBPORTAL_ prefix.

    Session Settings:
        JOBPORTAL_SECRET_KEY=...                 - Token signing key (required in production)
        JOBPORTAL_SESSION_TTL_SECONDS=86400      - Token lifetime without "remember me"
        JOBPORTAL_REMEMBER_ME_TTL_SECONDS=...    - Token lifetime with "remember me"
        JOBPORTAL_ACTIVITY_REFRESH_SECONDS=300   - Activity refresh tick
        JOBPORTAL_CLIENT_SCOPE_MAX_AGE_SECONDS=31536000 - Client scope cookie lifetime

    Mock Backend Settings:
        JOBPORTAL_LOGIN_DELAY_SECONDS=1.0        - Artificial latency of login calls
        JOBPORTAL_PARSE_DELAY_SECONDS=3.0        - Artificial latency of resume parsing

    Profile Settings:
        JOBPORTAL_PROFILE_REQUIRED_FIELDS='["first_name", ...]'
"""
from pydantic_settings import BaseSettings
from typing import List, Optional


class SessionSettings(BaseSettings):
    """
    Session token configuration.

    For production deployment:
        1. Generate a secret key: openssl rand -hex 32
        2. Set JOBPORTAL_SECRET_KEY to the generated key
    """
    secret_key: str = "development-secret-key-change-in-production"
    algorithm: str = "HS256"
    session_ttl_seconds: int = 24 * 60 * 60
    remember_me_ttl_seconds: int = 30 * 24 * 60 * 60
    activity_refresh_seconds: float = 5 * 60
    client_scope_max_age_seconds: int = 365 * 24 * 60 * 60

    class Config:
        env_prefix = "JOBPORTAL_"
        env_file = ".env"
        extra = "ignore"


class MockBackendSettings(BaseSettings):
    """
    Simulated backend behavior.

    Login, registration, upload and parse calls wait for a fixed delay
    before resolving. There is no retry: a failed call is final.
    """
    demo_email: str = "demo@example.com"
    demo_password: str = "password123"
    demo_name: str = "Demo User"

    login_delay_seconds: float = 1.0
    register_delay_seconds: float = 1.0
    upload_delay_seconds: float = 2.0
    parse_delay_seconds: float = 3.0

    notification_interval_seconds: float = 8.0
    notification_ttl_seconds: float = 10.0
    notification_backlog: int = 20

    class Config:
        env_prefix = "JOBPORTAL_"
        env_file = ".env"
        extra = "ignore"


class ProfileSettings(BaseSettings):
    """Profile and resume rules that are configuration rather than logic."""
    # None means "use the required flags from the field schema"
    profile_required_fields: Optional[List[str]] = None
    max_resume_bytes: int = 5 * 1024 * 1024

    class Config:
        env_prefix = "JOBPORTAL_"
        env_file = ".env"
        extra = "ignore"


class Settings(BaseSettings):
    """Combined application settings."""
    session: SessionSettings = SessionSettings()
    mock: MockBackendSettings = MockBackendSettings()
    profile: ProfileSettings = ProfileSettings()

    # CORS allowed origins (comma-separated, e.g. "http://localhost:3000,https://myapp.com")
    allowed_origins: str = "*"

    # Rate limiting on auth endpoints
    rate_limit_enabled: bool = True

    # Database
    database_url: str = "sqlite:///./data/jobportal.db"

    # Database connection pool (PostgreSQL only)
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: int = 30
    db_pool_recycle: int = 1800

    # Database retry settings
    db_retry_max_attempts: int = 3
    db_retry_base_delay: float = 0.1

    class Config:
        env_prefix = "JOBPORTAL_"
        env_file = ".env"
        extra = "ignore"


# Global settings instance
settings = Settings()
