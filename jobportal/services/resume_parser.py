"""
JobPortal - Simulated resume parsing.

Parsing waits for a fixed delay and returns canned data; the caller shows the
autofill values in the profile form for the user to review. Nothing is stored.
"""
import asyncio
import logging
from typing import Any, Dict

from ..config import settings
from .resume_gate import PendingAttachment

logger = logging.getLogger("jobportal.resume")

SAMPLE_PARSE_RESULT: Dict[str, Any] = {
    "name": "John Doe",
    "email": "john.doe@example.com",
    "phone": "+1 (555) 123-4567",
    "skills": ["JavaScript", "Python", "React", "Node.js", "SQL"],
    "experience": "5 years of software development experience",
    "education": "Bachelor of Computer Science",
}


def autofill_fields(parsed: Dict[str, Any]) -> Dict[str, str]:
    """
    Map parsed resume data onto profile form fields.

    Blank values are left out so they never overwrite what the user typed.
    """
    name_parts = (parsed.get("name") or "").split(" ")
    fields = {
        "first_name": name_parts[0] if name_parts else "",
        "last_name": " ".join(name_parts[1:]),
        "phone": parsed.get("phone") or "",
        "skills": ", ".join(parsed.get("skills") or []),
        "bio": parsed.get("experience") or "",
    }
    return {name: value for name, value in fields.items() if value}


async def parse_resume(pending: PendingAttachment) -> Dict[str, Any]:
    await asyncio.sleep(settings.mock.parse_delay_seconds)
    logger.info("Parsed resume %s", pending.file_name)
    parsed = dict(SAMPLE_PARSE_RESULT)
    parsed["skills"] = list(SAMPLE_PARSE_RESULT["skills"])
    return parsed
