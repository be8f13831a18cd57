"""Preference model submitted with a suggestion request."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

FLAVOR_TAGS = ("Sweet", "Sour", "Salty", "Bitter", "Fruity", "Umami", "Spicy", "Herbal")
BASE_SPIRITS = ("Vodka", "Gin", "Rum", "Tequila", "Whiskey", "Brandy")
MAX_BASE_SPIRITS = 3
SLIDERS = ("sweetness", "sourness", "booziness", "body", "complexity")

ScaleName = Literal["ten_point", "balance"]
Slider = Literal["sweetness", "sourness", "booziness", "body", "complexity"]


@dataclass(frozen=True)
class SliderScale:
    low: float
    high: float
    integral: bool

    def contains(self, value: float) -> bool:
        return self.low <= value <= self.high

    def clamp(self, value: float) -> float:
        clamped = min(self.high, max(self.low, value))
        return float(round(clamped)) if self.integral else clamped


SCALES: dict[str, SliderScale] = {
    "ten_point": SliderScale(low=0, high=10, integral=True),
    "balance": SliderScale(low=-1.0, high=1.0, integral=False),
}

_FLAVOR_LOOKUP = {tag.lower(): tag for tag in FLAVOR_TAGS}
_SPIRIT_LOOKUP = {spirit.lower(): spirit for spirit in BASE_SPIRITS}


def _canonical(value: Any, lookup: dict[str, str], kind: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{kind} must be a string")
    canonical = lookup.get(value.strip().lower())
    if canonical is None:
        raise ValueError(f"unknown {kind}: {value}")
    return canonical


def _as_items(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, str):
        return [item for item in (part.strip() for part in value.split(",")) if item]
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    raise ValueError("expected a list of strings")


class PreferenceModel(BaseModel):
    """User-selected cocktail attributes. Unset sliders are None."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    flavor_tags: frozenset[str] = Field(
        default_factory=frozenset,
        validation_alias=AliasChoices("flavorProfile", "flavorTags", "flavor_tags"),
        serialization_alias="flavorProfile",
    )
    base_spirits: tuple[str, ...] = Field(
        default=(),
        validation_alias=AliasChoices("baseSpirits", "baseSpirit", "base_spirits"),
        serialization_alias="baseSpirits",
    )
    bubbles: bool | None = None
    sweetness: float | None = None
    sourness: float | None = None
    booziness: float | None = None
    body: float | None = Field(
        default=None,
        validation_alias=AliasChoices("body", "bodyWeight"),
    )
    complexity: float | None = None
    scale: ScaleName = "ten_point"

    @field_validator("flavor_tags", mode="before")
    @classmethod
    def _validate_flavor_tags(cls, value: Any) -> frozenset[str]:
        return frozenset(_canonical(item, _FLAVOR_LOOKUP, "flavor tag") for item in _as_items(value))

    @field_validator("base_spirits", mode="before")
    @classmethod
    def _validate_base_spirits(cls, value: Any) -> tuple[str, ...]:
        spirits: list[str] = []
        for item in _as_items(value):
            spirit = _canonical(item, _SPIRIT_LOOKUP, "base spirit")
            if spirit not in spirits:
                spirits.append(spirit)
        if len(spirits) > MAX_BASE_SPIRITS:
            raise ValueError(f"at most {MAX_BASE_SPIRITS} base spirits may be selected")
        return tuple(spirits)

    @field_validator("bubbles", mode="before")
    @classmethod
    def _validate_bubbles(cls, value: Any) -> Any:
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in {"yes", "true", "1", "on"}:
                return True
            if lowered in {"no", "false", "0", "off"}:
                return False
            if not lowered:
                return None
        return value

    @model_validator(mode="after")
    def _check_slider_bounds(self) -> "PreferenceModel":
        scale = SCALES[self.scale]
        for name in SLIDERS:
            value = getattr(self, name)
            if value is None:
                continue
            if not scale.contains(value):
                raise ValueError(f"{name} must be between {scale.low:g} and {scale.high:g}")
            if scale.integral and not float(value).is_integer():
                raise ValueError(f"{name} must be a whole number on the {self.scale} scale")
        return self

    @property
    def slider_scale(self) -> SliderScale:
        return SCALES[self.scale]

    def sliders(self) -> dict[str, float]:
        """Return the sliders the user actually set, in display order."""
        return {name: getattr(self, name) for name in SLIDERS if getattr(self, name) is not None}

    def is_empty(self) -> bool:
        return not (self.flavor_tags or self.base_spirits or self.bubbles is not None or self.sliders())

    def ordered_flavor_tags(self) -> list[str]:
        return [tag for tag in FLAVOR_TAGS if tag in self.flavor_tags]
