"""
JobPortal - Onboarding wizard gates.

Three steps: identity and resume, education, review. A step lets the user
advance when its own required fields are filled. Step 1 also needs an
attached resume, step 2 the free-text university name when "other" is
chosen, and the review step a complete profile.
"""
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence

from .completeness import missing_fields
from .fields import STEP_EDUCATION, STEP_IDENTITY, STEP_REVIEW, STEPS, companion_gaps, fields_for_step, required_fields


class UnknownStepError(ValueError):
    pass


@dataclass
class StepCheck:
    step: int
    can_advance: bool
    missing_fields: List[str] = field(default_factory=list)
    resume_required: bool = False


def step_required_fields(step: int, required: Optional[Sequence[str]] = None) -> List[str]:
    """Required fields that belong to a step, in schema order."""
    required = required_fields() if required is None else required
    return [spec.name for spec in fields_for_step(step) if spec.name in required]


def check_step(
    step: int,
    profile: Mapping[str, Any],
    resume_attached: bool,
    required: Optional[Sequence[str]] = None
) -> StepCheck:
    """Decide whether the user may advance past `step`."""
    if step not in STEPS:
        raise UnknownStepError(f"Unknown wizard step: {step}")

    if step == STEP_REVIEW:
        missing = missing_fields(profile, required) + companion_gaps(profile)
        resume_missing = False
    else:
        missing = missing_fields(profile, step_required_fields(step, required))
        if step == STEP_EDUCATION:
            missing += companion_gaps(profile)
        resume_missing = step == STEP_IDENTITY and not resume_attached

    return StepCheck(
        step=step,
        can_advance=not missing and not resume_missing,
        missing_fields=missing,
        resume_required=resume_missing
    )
