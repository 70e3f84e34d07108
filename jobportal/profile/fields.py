"""
JobPortal - Profile field schema.

The one place where profile fields are declared. The completeness evaluator,
the summary view, the wizard gates, save validation and the request model are
all derived from PROFILE_FIELDS; none of them lists field names of its own.
"""
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from ..config import settings

OTHER_UNIVERSITY = "other"

UNIVERSITIES: Dict[str, str] = {
    "um": "Universiti Malaya",
    "ukm": "Universiti Kebangsaan Malaysia",
    "usm": "Universiti Sains Malaysia",
    "upm": "Universiti Putra Malaysia",
    "utm": "Universiti Teknologi Malaysia",
    "taylors": "Taylor's University",
    "monash": "Monash University Malaysia",
    "nottingham": "University of Nottingham Malaysia",
}

# Wizard steps
STEP_IDENTITY = 1
STEP_EDUCATION = 2
STEP_REVIEW = 3
STEPS = (STEP_IDENTITY, STEP_EDUCATION, STEP_REVIEW)

# Summary view sections
SECTION_HEADER = "header"
SECTION_PERSONAL = "personal"
SECTION_ABOUT = "about"
SECTION_EDUCATION = "education"


def is_blank(value: Any) -> bool:
    """True for None and for strings that are empty after trimming."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False


def format_date(value: Optional[str]) -> str:
    """Render an ISO date as '01 Sep 2020'; other strings pass through."""
    if is_blank(value):
        return ""
    try:
        return date.fromisoformat(value.strip()).strftime("%d %b %Y")
    except ValueError:
        return value


def resolve_university(profile: Mapping[str, Any]) -> str:
    """
    Display name of the profile's university.

    The `other` sentinel takes the free-text companion field; a known code
    resolves through the lookup; an unknown code shows as itself.
    """
    code = (profile.get("university") or "").strip()
    if code == OTHER_UNIVERSITY:
        return (profile.get("other_university") or "").strip()
    return UNIVERSITIES.get(code, code)


def parse_skills(value: Optional[str]) -> List[str]:
    """Split a comma-separated skills string, dropping blanks."""
    if is_blank(value):
        return []
    return [skill.strip() for skill in value.split(",") if skill.strip()]


@dataclass(frozen=True)
class FieldSpec:
    name: str
    label: str
    step: int
    required: bool = False
    kind: str = "text"
    section: str = SECTION_PERSONAL
    formatter: Optional[Callable[[Optional[str]], str]] = None

    def display(self, value: Optional[str]) -> str:
        if self.formatter:
            return self.formatter(value)
        return (value or "").strip()


PROFILE_FIELDS: Tuple[FieldSpec, ...] = (
    FieldSpec("first_name", "First Name", STEP_IDENTITY, required=True, section=SECTION_HEADER),
    FieldSpec("last_name", "Last Name", STEP_IDENTITY, required=True, section=SECTION_HEADER),
    FieldSpec("email", "Email", STEP_IDENTITY, required=True, kind="email", section=SECTION_HEADER),
    FieldSpec("phone", "Phone", STEP_IDENTITY, required=True, kind="phone", section=SECTION_HEADER),
    FieldSpec("date_of_birth", "Date of Birth", STEP_IDENTITY, required=True, kind="date", formatter=format_date),
    FieldSpec("address", "Address", STEP_IDENTITY, required=True),
    FieldSpec("city", "City", STEP_IDENTITY, required=True),
    FieldSpec("country", "Country", STEP_IDENTITY, required=True),
    FieldSpec("bio", "Professional Summary", STEP_IDENTITY, section=SECTION_ABOUT),
    FieldSpec("skills", "Skills", STEP_IDENTITY, kind="list", section=SECTION_ABOUT),
    FieldSpec("university", "University", STEP_EDUCATION, required=True, kind="choice", section=SECTION_EDUCATION),
    FieldSpec("other_university", "Other University", STEP_EDUCATION, section=SECTION_EDUCATION),
    FieldSpec("course", "Course", STEP_EDUCATION, required=True, section=SECTION_EDUCATION),
    FieldSpec("grade", "Grade", STEP_EDUCATION, required=True, section=SECTION_EDUCATION),
    FieldSpec("study_start", "Study Start", STEP_EDUCATION, required=True, kind="date",
              section=SECTION_EDUCATION, formatter=format_date),
    FieldSpec("graduation_date", "Graduation Date", STEP_EDUCATION, required=True, kind="date",
              section=SECTION_EDUCATION, formatter=format_date),
)

FIELDS_BY_NAME: Dict[str, FieldSpec] = {field.name: field for field in PROFILE_FIELDS}

# Employment history entries
EMPLOYMENT_FIELDS = ("company", "position", "start_date", "end_date", "description")
# An entry counts once these are all filled
EMPLOYMENT_REQUIRED = ("company", "position", "start_date")


def default_required_fields() -> Tuple[str, ...]:
    return tuple(field.name for field in PROFILE_FIELDS if field.required)


def required_fields() -> Tuple[str, ...]:
    """
    The configured required-field set.

    JOBPORTAL_PROFILE_REQUIRED_FIELDS overrides the schema's required flags.
    """
    configured = settings.profile.profile_required_fields
    if configured is None:
        return default_required_fields()

    unknown = [name for name in configured if name not in FIELDS_BY_NAME]
    if unknown:
        raise ValueError(f"Unknown profile fields in configuration: {', '.join(unknown)}")
    # Keep schema order
    return tuple(field.name for field in PROFILE_FIELDS if field.name in configured)


def fields_for_step(step: int) -> Tuple[FieldSpec, ...]:
    return tuple(field for field in PROFILE_FIELDS if field.step == step)


def companion_gaps(profile: Mapping[str, Any]) -> List[str]:
    """Fields that are required only because of another field's value."""
    gaps = []
    code = (profile.get("university") or "").strip()
    if code == OTHER_UNIVERSITY and is_blank(profile.get("other_university")):
        gaps.append("other_university")
    return gaps
