"""Data models for cocktail-finder.

The remote suggestion service is not schema-guaranteed, so every model here
coerces partial or mistyped input into a fully-typed value instead of
rejecting it: missing strings become ``""``, missing numbers ``0`` and
missing lists ``[]``.
"""

from __future__ import annotations

import math
import re
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

UNITS = (
    "oz",
    "ml",
    "cl",
    "dash",
    "barspoon",
    "tsp",
    "tbsp",
    "drop",
    "piece",
    "slice",
    "wedge",
    "sprig",
    "leaf",
    "top",
)

_UNIT_ALIASES = {
    "ounce": "oz",
    "ounces": "oz",
    "fl oz": "oz",
    "milliliter": "ml",
    "milliliters": "ml",
    "millilitre": "ml",
    "millilitres": "ml",
    "centiliter": "cl",
    "centiliters": "cl",
    "dashes": "dash",
    "bar spoon": "barspoon",
    "barspoons": "barspoon",
    "teaspoon": "tsp",
    "teaspoons": "tsp",
    "tablespoon": "tbsp",
    "tablespoons": "tbsp",
    "drops": "drop",
    "pieces": "piece",
    "slices": "slice",
    "wedges": "wedge",
    "sprigs": "sprig",
    "leaves": "leaf",
    "top up": "top",
}


_LONE_SURROGATE = re.compile(r"[\ud800-\udfff]")


def _as_text(value: Any) -> str:
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, str):
        # Lone surrogates cannot be encoded as UTF-8.
        return _LONE_SURROGATE.sub("\ufffd", value).strip()
    if isinstance(value, (int, float)):
        return str(value)
    return ""


def _as_number(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0.0
    else:
        return 0.0
    return number if math.isfinite(number) else 0.0


def _as_list(value: Any) -> list[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def normalize_unit(raw: Any) -> str:
    """Map common unit spellings onto the enumerated set; keep unknown units."""
    unit = _as_text(raw).lower().rstrip(".")
    if unit in UNITS:
        return unit
    return _UNIT_ALIASES.get(unit, unit)


class Ingredient(BaseModel):
    """A measured component of a cocktail. ``amount == 0`` means unspecified."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    amount: float = 0.0
    unit: str = ""

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, value: Any) -> str:
        return _as_text(value)

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_amount(cls, value: Any) -> float:
        return max(0.0, _as_number(value))

    @field_validator("unit", mode="before")
    @classmethod
    def _coerce_unit(cls, value: Any) -> str:
        return normalize_unit(value)


class FlavorProfile(BaseModel):
    """Flavor scores reported by the suggestion service."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    sweetness: float = 0.0
    booziness: float = 0.0
    balance_rating: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        validation_alias=AliasChoices("balance_rating", "balanceRating"),
    )

    @field_validator("sweetness", "booziness", mode="before")
    @classmethod
    def _coerce_score(cls, value: Any) -> float:
        return _as_number(value)

    @field_validator("balance_rating", mode="before")
    @classmethod
    def _clamp_rating(cls, value: Any) -> float:
        return min(1.0, max(0.0, _as_number(value)))


def _coerce_ingredients(value: Any) -> list[Any]:
    items: list[Any] = []
    for item in _as_list(value):
        if isinstance(item, Ingredient):
            if item.name:
                items.append(item)
        elif isinstance(item, dict):
            if _as_text(item.get("name")):
                items.append(item)
        elif isinstance(item, str) and item.strip():
            items.append({"name": item})
    return items


class Cocktail(BaseModel):
    """A single cocktail suggestion, immutable after creation."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = ""
    base_spirits: list[Ingredient] = Field(
        default_factory=list,
        validation_alias=AliasChoices("baseSpirits", "base_spirits"),
        serialization_alias="baseSpirits",
    )
    ingredients: list[Ingredient] = Field(default_factory=list)
    technique: str = ""
    garnish: str = ""
    flavor_profile: FlavorProfile = Field(
        default_factory=FlavorProfile,
        validation_alias=AliasChoices("flavor_profile", "flavorProfile"),
    )
    rationale: str = ""
    source_links: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("source_links", "sourceLinks"),
    )

    @field_validator("name", "technique", "garnish", "rationale", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _as_text(value)

    @field_validator("base_spirits", "ingredients", mode="before")
    @classmethod
    def _coerce_ingredient_list(cls, value: Any) -> list[Any]:
        return _coerce_ingredients(value)

    @field_validator("flavor_profile", mode="before")
    @classmethod
    def _coerce_profile(cls, value: Any) -> Any:
        if isinstance(value, (FlavorProfile, dict)):
            return value
        return {}

    @field_validator("source_links", mode="before")
    @classmethod
    def _coerce_links(cls, value: Any) -> list[str]:
        links = (_as_text(link) for link in _as_list(value) if isinstance(link, str))
        return [link for link in links if link]

    def to_payload(self) -> dict[str, Any]:
        """Serialize with the keys the browser client reads."""
        return self.model_dump(mode="json", by_alias=True)


class SuggestionResponse(BaseModel):
    """Wrapper object returned by the suggestion endpoint."""

    suggestions: list[Cocktail] = Field(default_factory=list)


def normalize_suggestion(raw: Any) -> Cocktail | None:
    """Normalize one raw suggestion entry; non-objects yield None."""
    if isinstance(raw, Cocktail):
        return raw
    if not isinstance(raw, dict):
        return None
    return Cocktail.model_validate(raw)
