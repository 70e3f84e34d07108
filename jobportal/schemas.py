"""
JobPortal - Pydantic schemas for request/response validation.

The profile request model is generated from the field schema so that field
names are declared only once. Wire names are camelCase.
"""
from pydantic import BaseModel, Field, create_model
from datetime import datetime
from typing import Any, Dict, List, Optional

from .auth.schemas import CamelModel, SessionRecord, UserRecord
from .profile.completeness import ProfileState
from .profile.fields import PROFILE_FIELDS


# --- Profile Schemas ---

class EmploymentEntry(CamelModel):
    company: Optional[str] = Field(None, max_length=200)
    position: Optional[str] = Field(None, max_length=200)
    start_date: Optional[str] = Field(None, max_length=20)
    end_date: Optional[str] = Field(None, max_length=20)
    description: Optional[str] = Field(None, max_length=5000)


ProfilePayload = create_model(
    "ProfilePayload",
    __base__=CamelModel,
    employment=(Optional[List[EmploymentEntry]], None),
    **{spec.name: (Optional[str], Field(None, max_length=5000)) for spec in PROFILE_FIELDS}
)


class ProfileViewResponse(CamelModel):
    state: ProfileState
    completion_percentage: int
    missing_fields: List[str]
    summary: Optional[Dict[str, Any]] = None
    form: Optional[Dict[str, Any]] = None


class ProfileCompletionResponse(CamelModel):
    state: ProfileState
    completion_percentage: int
    filled_fields: List[str]
    missing_fields: List[str]


class StepCheckResponse(CamelModel):
    step: int
    can_advance: bool
    missing_fields: List[str]
    resume_required: bool


# --- Resume Schemas ---

class ResumeRecordResponse(CamelModel):
    file_name: str
    file_size: int
    upload_date: datetime
    file_type: str
    size_label: Optional[str] = None


class ParsedResume(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    skills: List[str] = []
    experience: Optional[str] = None
    education: Optional[str] = None


class ResumeParseResponse(CamelModel):
    parsed: ParsedResume
    autofill: Dict[str, str]
    message: str = "Resume parsed successfully! Please review and update the information."


# --- Dashboard Schemas ---

class NotificationResponse(CamelModel):
    title: str
    text: str
    time: datetime


class DashboardResponse(CamelModel):
    client_id: str
    user: UserRecord
    session: Optional[SessionRecord] = None
    expires_at: datetime
    profile_state: ProfileState
    completion_percentage: int
    resume: Optional[ResumeRecordResponse] = None


class HealthResponse(BaseModel):
    status: str
    version: str
    timestamp: datetime
