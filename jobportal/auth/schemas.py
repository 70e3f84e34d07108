"""
JobPortal - Authentication Schemas

Pydantic models for authentication request/response validation.
Wire names are camelCase (rememberMe, loginTime); Python names are snake_case.
"""
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Optional


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase JSON."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


# -----------------------------------------------------------------------------
# Stored records
# -----------------------------------------------------------------------------

class UserRecord(CamelModel):
    """Identity of the logged-in user, stored under the user key."""
    id: int
    name: Optional[str] = None
    email: str
    login_time: Optional[datetime] = None


class SessionRecord(CamelModel):
    """Session bookkeeping derived from the token at issuance."""
    login_time: datetime
    last_activity: datetime
    expires_at: Optional[datetime] = None


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------

class LoginRequest(CamelModel):
    """Schema for email/password login."""
    email: str = Field(..., max_length=254)
    password: str = Field(..., max_length=128)
    remember_me: bool = False


class RegisterRequest(CamelModel):
    """
    Schema for user registration.

    Presence and consent rules are checked by the auth service so that an
    incomplete payload is answered with 400 rather than a schema error.
    """
    name: Optional[str] = Field(None, max_length=200)
    email: Optional[str] = Field(None, max_length=254)
    password: Optional[str] = Field(None, max_length=256)
    confirm_password: Optional[str] = Field(None, max_length=256)
    terms_consent: bool = False
    privacy_consent: bool = False
    marketing_consent: bool = False


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------

class UserResponse(CamelModel):
    """Public user information."""
    id: int
    name: Optional[str] = None
    email: str


class LoginResponse(CamelModel):
    """Response after successful login."""
    token: str
    token_type: str = "bearer"
    user: UserRecord
    session: SessionRecord


class RegisterResponse(CamelModel):
    """Response after successful registration."""
    user: UserResponse
    message: str = "Account created successfully! Please sign in."


class SessionStatus(CamelModel):
    """Result of the page-load session check."""
    authenticated: bool
    user: Optional[UserRecord] = None
    session: Optional[SessionRecord] = None


class ActivityResponse(CamelModel):
    refreshed: bool
    last_activity: Optional[datetime] = None


class MessageResponse(CamelModel):
    message: str
