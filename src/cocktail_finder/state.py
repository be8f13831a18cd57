"""Immutable form state with pure transition functions."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from cocktail_finder.preferences import MAX_BASE_SPIRITS, SCALES, PreferenceModel, ScaleName, Slider
from cocktail_finder.schema import Cocktail

SUBMISSION_FAILED = "Failed to generate suggestions"


class FormState(BaseModel):
    """Everything the cocktail form holds between user actions."""

    model_config = ConfigDict(frozen=True)

    preferences: PreferenceModel = Field(default_factory=PreferenceModel)
    loading: bool = False
    error: str | None = None
    suggestions: tuple[Cocktail, ...] = ()


def _with_preferences(state: FormState, **changes) -> FormState:
    data = state.preferences.model_dump()
    data.update(changes)
    return state.model_copy(update={"preferences": PreferenceModel.model_validate(data)})


def toggle_flavor(state: FormState, tag: str) -> FormState:
    tags = set(state.preferences.flavor_tags)
    canonical = PreferenceModel(flavor_tags=[tag]).ordered_flavor_tags()[0]
    tags.symmetric_difference_update({canonical})
    return _with_preferences(state, flavor_tags=tags)


def toggle_base_spirit(state: FormState, spirit: str) -> FormState:
    """Add or remove a base spirit; adding beyond the maximum is ignored."""
    canonical = PreferenceModel(base_spirits=[spirit]).base_spirits[0]
    spirits = list(state.preferences.base_spirits)
    if canonical in spirits:
        spirits.remove(canonical)
    elif len(spirits) >= MAX_BASE_SPIRITS:
        return state
    else:
        spirits.append(canonical)
    return _with_preferences(state, base_spirits=spirits)


def set_slider(state: FormState, slider: Slider, value: float | None) -> FormState:
    """Set a slider, clamping to the current scale. None clears it."""
    if value is not None:
        value = state.preferences.slider_scale.clamp(value)
    return _with_preferences(state, **{slider: value})


def set_bubbles(state: FormState, bubbles: bool | None) -> FormState:
    return _with_preferences(state, bubbles=bubbles)


def set_scale(state: FormState, scale: ScaleName) -> FormState:
    """Switch scale variant; slider values are reset since their meaning changes."""
    if scale not in SCALES:
        raise ValueError(f"unknown scale: {scale}")
    cleared = {name: None for name in state.preferences.sliders()}
    return _with_preferences(state, scale=scale, **cleared)


def begin_submission(state: FormState) -> tuple[FormState, bool]:
    """Mark a submission in flight. Refused while one is already running."""
    if state.loading:
        return state, False
    return state.model_copy(update={"loading": True, "error": None}), True


def complete_submission(state: FormState, suggestions: list[Cocktail]) -> FormState:
    return state.model_copy(update={"loading": False, "error": None, "suggestions": tuple(suggestions)})


def fail_submission(state: FormState, message: str = SUBMISSION_FAILED) -> FormState:
    return state.model_copy(update={"loading": False, "error": message})
