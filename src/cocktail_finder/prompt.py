"""Compile a preference model into a prompt for the suggestion service."""

from __future__ import annotations

import bisect
import json

from cocktail_finder.preferences import SCALES, PreferenceModel, SliderScale
from cocktail_finder.schema import UNITS, Cocktail, FlavorProfile, Ingredient, SuggestionResponse

BUCKET_COUNT = 5
NO_PREFERENCES = "No specific preferences were given"

BUCKET_LABELS: dict[str, tuple[str, str, str, str, str]] = {
    "sweetness": ("dry", "off-dry", "semi-sweet", "sweet", "very sweet"),
    "sourness": ("not sour", "mildly tart", "balanced tartness", "tart", "very sour"),
    "booziness": ("very light", "light", "moderate", "strong", "very strong"),
    "body": ("very light-bodied", "light-bodied", "medium-bodied", "full-bodied", "rich and heavy"),
    "complexity": ("very simple", "simple", "moderately complex", "complex", "very complex"),
}

_SLIDER_TITLES = {
    "sweetness": "Sweetness",
    "sourness": "Sourness",
    "booziness": "Booziness",
    "body": "Body",
    "complexity": "Complexity",
}

_EXAMPLE = SuggestionResponse(
    suggestions=[
        Cocktail(
            name="Cocktail Name",
            base_spirits=[Ingredient(name="Main spirit", amount=2, unit="oz")],
            ingredients=[
                Ingredient(name="Fresh lemon juice", amount=0.75, unit="oz"),
                Ingredient(name="Angostura bitters", amount=2, unit="dash"),
            ],
            technique="How to build, shake or stir the drink",
            garnish="Garnish description",
            flavor_profile=FlavorProfile(sweetness=0.5, booziness=0.4, balance_rating=0.8),
            rationale="Why this cocktail matches the preferences",
            source_links=["https://example.com/recipe"],
        )
    ]
)

RESPONSE_EXAMPLE = json.dumps(
    {"suggestions": [item.to_payload() for item in _EXAMPLE.suggestions]},
    indent=2,
)


def _thresholds(scale: SliderScale) -> list[float]:
    width = (scale.high - scale.low) / BUCKET_COUNT
    return [round(scale.low + width * i, 10) for i in range(1, BUCKET_COUNT)]


def bucket_index(value: float, scale: SliderScale | str = "ten_point") -> int:
    """Map a slider value onto one of five equal-width buckets.

    Buckets are closed on the lower bound and open on the upper bound, except
    the topmost bucket which also includes the scale maximum. Out-of-range
    values clamp to the end buckets.
    """
    if isinstance(scale, str):
        scale = SCALES[scale]
    return bisect.bisect_right(_thresholds(scale), value)


def bucket_label(axis: str, value: float, scale: SliderScale | str = "ten_point") -> str:
    return BUCKET_LABELS[axis][bucket_index(value, scale)]


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def _slider_line(axis: str, value: float, scale: SliderScale) -> str:
    label = bucket_label(axis, value, scale)
    return (
        f"- {_SLIDER_TITLES[axis]}: {label} "
        f"({_format_number(value)} on a {_format_number(scale.low)} to {_format_number(scale.high)} scale)"
    )


def _bubbles_line(bubbles: bool) -> str:
    if bubbles:
        return "- Carbonation: the cocktail must be sparkling, built with a carbonated ingredient such as soda, tonic or sparkling wine"
    return "- Carbonation: the cocktail must not contain any carbonated ingredient"


def _preference_lines(preferences: PreferenceModel) -> list[str]:
    lines: list[str] = []
    anchored = bool(preferences.flavor_tags or preferences.base_spirits)

    if preferences.flavor_tags:
        lines.append(f"- Flavor profile: {', '.join(preferences.ordered_flavor_tags())}")
    if preferences.base_spirits:
        lines.append(f"- Base spirits: {', '.join(preferences.base_spirits)}")
    if anchored:
        scale = preferences.slider_scale
        for axis, value in preferences.sliders().items():
            lines.append(_slider_line(axis, value, scale))
    else:
        lines.append(f"- {NO_PREFERENCES}; choose well-balanced, approachable cocktails")
    if preferences.bubbles is not None:
        lines.append(_bubbles_line(preferences.bubbles))
    return lines


def compile_prompt(preferences: PreferenceModel | None = None, *, count: int = 5) -> str:
    """Build the natural-language prompt for a preference model.

    Only preferences the user set are listed. Sliders qualify the chosen
    flavors and spirits, so they are omitted when neither is chosen.
    """
    preferences = preferences or PreferenceModel()
    lines = "\n".join(_preference_lines(preferences))
    units = ", ".join(UNITS)
    return f"""As a professional mixologist, suggest {count} cocktails with these preferences:
{lines}

Return the suggestions in this exact JSON format:
{RESPONSE_EXAMPLE}

Rules:
- "amount" must be a positive number and "unit" one of: {units}
- "balance_rating" must be between 0 and 1
- "source_links" may be empty if you have no reliable reference
- Return valid JSON only, no additional text"""
