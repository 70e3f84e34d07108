"""
JobPortal - Profile save validation.

Checks values by the kind declared in the field schema. Blank values are
never errors here: blank means "not filled yet", which only affects
completeness.
"""
import re
from datetime import date
from typing import Any, Dict, Mapping, Optional

from .fields import (
    EMPLOYMENT_FIELDS, FIELDS_BY_NAME, OTHER_UNIVERSITY, UNIVERSITIES,
    companion_gaps, is_blank
)

EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')
PHONE_PATTERN = re.compile(r'^\+?[0-9 ()\-]{7,20}$')


class ProfileValidationError(Exception):
    """One or more profile fields failed validation."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = errors
        super().__init__("; ".join(f"{name}: {message}" for name, message in errors.items()))


def _parse_date(value: str) -> Optional[date]:
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return None


def _check_kind(kind: str, value: str) -> Optional[str]:
    if kind == "email" and not EMAIL_PATTERN.match(value.strip()):
        return "Invalid email format"
    if kind == "phone" and not PHONE_PATTERN.match(value.strip()):
        return "Invalid phone number"
    if kind == "date" and _parse_date(value) is None:
        return "Invalid date, expected YYYY-MM-DD"
    if kind == "choice" and value.strip() != OTHER_UNIVERSITY and value.strip() not in UNIVERSITIES:
        return "Unknown university"
    return None


def validate_profile(changes: Mapping[str, Any], merged: Mapping[str, Any]) -> None:
    """
    Validate a profile save.

    Args:
        changes: Fields sent in this save
        merged: The record as it would be stored after the save

    Raises:
        ProfileValidationError: If any field is invalid; nothing should be written
    """
    errors: Dict[str, str] = {}

    for name, value in changes.items():
        field = FIELDS_BY_NAME.get(name)
        if field is None or is_blank(value):
            continue
        message = _check_kind(field.kind, value)
        if message:
            errors[name] = message

    for index, entry in enumerate(changes.get("employment") or ()):
        for name in ("start_date", "end_date"):
            value = entry.get(name)
            if not is_blank(value) and _parse_date(value) is None:
                errors[f"employment[{index}].{name}"] = "Invalid date, expected YYYY-MM-DD"

    for name in companion_gaps(merged):
        errors.setdefault(name, "Enter the university name when choosing Other")

    start, end = merged.get("study_start"), merged.get("graduation_date")
    if not is_blank(start) and not is_blank(end) and "study_start" not in errors and "graduation_date" not in errors:
        start_date, end_date = _parse_date(start), _parse_date(end)
        if start_date and end_date and end_date < start_date:
            errors["graduation_date"] = "Graduation date cannot be before study start"

    if errors:
        raise ProfileValidationError(errors)


def clean_employment(entries) -> list:
    """Keep only known employment keys, with None for the missing ones."""
    return [{name: entry.get(name) for name in EMPLOYMENT_FIELDS} for entry in entries or ()]
