"""
JobPortal - Profile summary display policy.

Optional sections of the read-only summary render only when their backing
data is non-blank. Each rule is a separate predicate so it can be checked on
its own:

    bio        - bio non-blank
    skills     - at least one skill after splitting on commas
    education  - university and course non-blank
    employment - at least one counted employment entry
    resume     - a resume record with a file name
"""
from typing import Any, Dict, Mapping, Optional

from .completeness import counted_employment
from .fields import (
    FIELDS_BY_NAME, PROFILE_FIELDS, SECTION_PERSONAL,
    format_date, is_blank, parse_skills, resolve_university
)


def show_bio(profile: Mapping[str, Any]) -> bool:
    return not is_blank(profile.get("bio"))


def show_skills(profile: Mapping[str, Any]) -> bool:
    return bool(parse_skills(profile.get("skills")))


def show_education(profile: Mapping[str, Any]) -> bool:
    return not is_blank(profile.get("university")) and not is_blank(profile.get("course"))


def show_employment(profile: Mapping[str, Any]) -> bool:
    return bool(counted_employment(profile.get("employment")))


def show_resume(resume: Optional[Mapping[str, Any]]) -> bool:
    return bool(resume) and not is_blank(resume.get("file_name"))


def visible_sections(profile: Mapping[str, Any], resume: Optional[Mapping[str, Any]] = None) -> Dict[str, bool]:
    return {
        "bio": show_bio(profile),
        "skills": show_skills(profile),
        "education": show_education(profile),
        "employment": show_employment(profile),
        "resume": show_resume(resume),
    }


def _label(name: str) -> str:
    return FIELDS_BY_NAME[name].label


def build_summary(profile: Mapping[str, Any], resume: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Read-only summary of a complete profile."""
    sections = visible_sections(profile, resume)
    full_name = f"{(profile.get('first_name') or '').strip()} {(profile.get('last_name') or '').strip()}".strip()

    summary: Dict[str, Any] = {
        "full_name": full_name,
        "email": (profile.get("email") or "").strip(),
        "phone": (profile.get("phone") or "").strip(),
        "personal": [
            {"label": field.label, "value": field.display(profile.get(field.name))}
            for field in PROFILE_FIELDS
            if field.section == SECTION_PERSONAL
        ],
        "sections": sections,
    }

    if sections["bio"]:
        summary["bio"] = profile["bio"].strip()

    if sections["skills"]:
        summary["skills"] = parse_skills(profile.get("skills"))

    if sections["education"]:
        summary["education"] = {
            "university": resolve_university(profile),
            "course": profile["course"].strip(),
            "grade": f"{_label('grade')}: {(profile.get('grade') or '').strip()}",
            "dates": f"{format_date(profile.get('study_start'))} - {format_date(profile.get('graduation_date'))}",
        }

    if sections["employment"]:
        summary["employment"] = [
            {
                "company": entry["company"].strip(),
                "position": entry["position"].strip(),
                "dates": f"{format_date(entry.get('start_date'))} - {format_date(entry.get('end_date')) or 'Present'}",
                "description": (entry.get("description") or "").strip(),
            }
            for entry in counted_employment(profile.get("employment"))
        ]

    if sections["resume"]:
        summary["resume"] = {"file_name": resume["file_name"]}

    return summary
