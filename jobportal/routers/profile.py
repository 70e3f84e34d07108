"""
JobPortal - Profile onboarding API.

Endpoints for saving the job seeker's profile, reading it back as either the
pre-filled form (incomplete) or the read-only summary (complete), and checking
whether a wizard step may be left.
"""
from fastapi import APIRouter, Depends, HTTPException, Request

from ..auth.dependencies import get_record_store, require_session
from ..auth.session import SessionContext
from ..profile.tracker import ProfileTracker, ProfileView
from ..profile.validation import ProfileValidationError
from ..profile.wizard import UnknownStepError, check_step
from ..rate_limit import limiter, RATE_LIMIT_GENERAL
from ..schemas import ProfilePayload, ProfileViewResponse, ProfileCompletionResponse, StepCheckResponse
from ..storage import RecordStore

router = APIRouter()


def get_profile_tracker(store: RecordStore = Depends(get_record_store)) -> ProfileTracker:
    return ProfileTracker(store)


def view_to_response(view: ProfileView) -> ProfileViewResponse:
    return ProfileViewResponse(
        state=view.state,
        completion_percentage=view.completion_percentage,
        missing_fields=view.missing_fields,
        summary=view.summary,
        form=view.form
    )


@router.get("/", response_model=ProfileViewResponse)
def get_profile(
    ctx: SessionContext = Depends(require_session),
    tracker: ProfileTracker = Depends(get_profile_tracker)
):
    """Summary view when complete, pre-filled form otherwise."""
    return view_to_response(tracker.view())


@router.post("/", response_model=ProfileViewResponse)
@limiter.limit(RATE_LIMIT_GENERAL)
def save_profile(
    request: Request,
    profile: ProfilePayload,
    ctx: SessionContext = Depends(require_session),
    tracker: ProfileTracker = Depends(get_profile_tracker)
):
    """
    Save profile fields.

    Fields that are not sent keep their saved value, so a partial save
    followed by the missing fields completes the profile.
    """
    try:
        view = tracker.save(profile.model_dump(exclude_unset=True))
    except ProfileValidationError as e:
        raise HTTPException(
            status_code=400,
            detail={"message": "Profile validation failed", "errors": e.errors}
        )
    return view_to_response(view)


@router.get("/completion", response_model=ProfileCompletionResponse)
def get_profile_completion(
    ctx: SessionContext = Depends(require_session),
    tracker: ProfileTracker = Depends(get_profile_tracker)
):
    """Detailed completion information."""
    view = tracker.view()
    required = tracker.required_fields()

    return ProfileCompletionResponse(
        state=view.state,
        completion_percentage=view.completion_percentage,
        filled_fields=[name for name in required if name not in view.missing_fields],
        missing_fields=view.missing_fields
    )


@router.post("/steps/{step}", response_model=StepCheckResponse)
def check_wizard_step(
    step: int,
    profile: ProfilePayload,
    ctx: SessionContext = Depends(require_session),
    tracker: ProfileTracker = Depends(get_profile_tracker)
):
    """
    Check whether the wizard may advance past a step.

    The body holds the form's current (unsaved) values; they are laid over
    the saved profile before the step's gate is applied.
    """
    form = dict(tracker.load())
    form.update({k: v for k, v in profile.model_dump(exclude_unset=True).items() if v is not None})

    try:
        result = check_step(step, form, resume_attached=tracker.has_resume(), required=tracker.required)
    except UnknownStepError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return StepCheckResponse(
        step=result.step,
        can_advance=result.can_advance,
        missing_fields=result.missing_fields,
        resume_required=result.resume_required
    )
