"""
JobPortal - Profile completeness.

A profile is Complete iff every required field is present and non-blank
after trimming whitespace. The required set is a parameter, defaulting to
the configured set from the field schema.
"""
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from .fields import EMPLOYMENT_REQUIRED, is_blank, required_fields


class ProfileState(str, Enum):
    COMPLETE = "complete"
    INCOMPLETE = "incomplete"


def missing_fields(
    profile: Optional[Mapping[str, Any]],
    required: Optional[Sequence[str]] = None
) -> List[str]:
    """Required fields that are absent or blank, in schema order."""
    profile = profile or {}
    required = required_fields() if required is None else required
    return [name for name in required if is_blank(profile.get(name))]


def evaluate(
    profile: Optional[Mapping[str, Any]],
    required: Optional[Sequence[str]] = None
) -> ProfileState:
    if missing_fields(profile, required):
        return ProfileState.INCOMPLETE
    return ProfileState.COMPLETE


def completion_percentage(
    profile: Optional[Mapping[str, Any]],
    required: Optional[Sequence[str]] = None
) -> int:
    """Share of required fields that are filled, as an integer percentage."""
    required = required_fields() if required is None else required
    if not required:
        return 100
    filled = len(required) - len(missing_fields(profile, required))
    return int((filled / len(required)) * 100)


def is_counted_entry(entry: Optional[Mapping[str, Any]]) -> bool:
    """An employment entry counts only if company, position and start date are filled."""
    if not entry:
        return False
    return all(not is_blank(entry.get(name)) for name in EMPLOYMENT_REQUIRED)


def counted_employment(entries: Optional[Iterable[Mapping[str, Any]]]) -> List[Mapping[str, Any]]:
    return [entry for entry in entries or () if is_counted_entry(entry)]
