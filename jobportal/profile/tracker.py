"""
JobPortal - Profile completeness tracker.

Loads and saves the client's profile record and evaluates it on every save
and every view. A complete profile is shown as a read-only summary; an
incomplete one as the editable form, pre-filled from whatever was saved.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from ..storage import RecordStore, PROFILE_KEY, RESUME_KEY
from .completeness import ProfileState, completion_percentage, evaluate, missing_fields
from .display import build_summary
from .fields import PROFILE_FIELDS, required_fields
from .validation import clean_employment, validate_profile

logger = logging.getLogger("jobportal.profile")


@dataclass
class ProfileView:
    state: ProfileState
    completion_percentage: int
    missing_fields: List[str] = field(default_factory=list)
    summary: Optional[Dict[str, Any]] = None
    form: Optional[Dict[str, Any]] = None


class ProfileTracker:
    """
    Profile state machine for one client.

    Args:
        store: Record store of the client
        required: Required-field set; defaults to the configured set
    """

    def __init__(self, store: RecordStore, required: Optional[Sequence[str]] = None):
        self.store = store
        self.required = required

    def required_fields(self) -> Tuple[str, ...]:
        return tuple(self.required) if self.required is not None else required_fields()

    def load(self) -> Dict[str, Any]:
        profile = self.store.get(PROFILE_KEY)
        return profile if isinstance(profile, dict) else {}

    def resume(self) -> Optional[Dict[str, Any]]:
        resume = self.store.get(RESUME_KEY)
        return resume if isinstance(resume, dict) else None

    def has_resume(self) -> bool:
        resume = self.resume()
        return bool(resume and resume.get("file_name"))

    def state(self, profile: Optional[Mapping[str, Any]] = None) -> ProfileState:
        return evaluate(self.load() if profile is None else profile, self.required)

    def view(self, profile: Optional[Mapping[str, Any]] = None) -> ProfileView:
        profile = self.load() if profile is None else profile
        state = evaluate(profile, self.required)
        view = ProfileView(
            state=state,
            completion_percentage=completion_percentage(profile, self.required),
            missing_fields=missing_fields(profile, self.required)
        )
        if state == ProfileState.COMPLETE:
            view.summary = build_summary(profile, self.resume())
        else:
            view.form = self.prefill(profile)
        return view

    def prefill(self, profile: Mapping[str, Any]) -> Dict[str, Any]:
        """Form values for every schema field, blank where nothing was saved."""
        form = {spec.name: profile.get(spec.name) or "" for spec in PROFILE_FIELDS}
        form["employment"] = list(profile.get("employment") or [])
        return form

    def save(self, changes: Mapping[str, Any]) -> ProfileView:
        """
        Merge `changes` into the stored profile and re-evaluate.

        Fields not in `changes` keep their saved value; None means "not sent".

        Raises:
            ProfileValidationError: If a value is invalid; nothing is written
        """
        changes = {name: value for name, value in changes.items() if value is not None}
        if "employment" in changes:
            changes["employment"] = clean_employment(changes["employment"])

        merged = dict(self.load())
        merged.update(changes)

        validate_profile(changes, merged)

        self.store.put(PROFILE_KEY, merged)
        state = evaluate(merged, self.required)
        logger.info(
            "Saved profile for client %s (%d field(s) changed, %s)",
            self.store.client_id, len(changes), state.value
        )
        return self.view(merged)
