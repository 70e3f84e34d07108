"""
JobPortal - Profile Module

Field schema, completeness evaluation, summary display policy, wizard gates
and the per-client profile tracker.
"""
from .completeness import ProfileState, evaluate, missing_fields, completion_percentage, counted_employment
from .fields import PROFILE_FIELDS, FieldSpec, required_fields, resolve_university
from .tracker import ProfileTracker, ProfileView
from .validation import ProfileValidationError
from .wizard import StepCheck, UnknownStepError, check_step

__all__ = [
    "ProfileState",
    "evaluate",
    "missing_fields",
    "completion_percentage",
    "counted_employment",
    "PROFILE_FIELDS",
    "FieldSpec",
    "required_fields",
    "resolve_university",
    "ProfileTracker",
    "ProfileView",
    "ProfileValidationError",
    "StepCheck",
    "UnknownStepError",
    "check_step",
]
