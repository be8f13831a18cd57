"""Tests for response recovery."""

import json

import pytest

from cocktail_finder import Cocktail, recover_suggestions
from cocktail_finder.recovery import recover_with_outcome


def _cocktail(name: str) -> dict:
    return {
        "name": name,
        "baseSpirits": [{"name": "Gin", "amount": 2, "unit": "oz"}],
        "ingredients": [
            {"name": "Lemon juice", "amount": 0.75, "unit": "oz"},
            {"name": "Simple syrup", "amount": 0.5, "unit": "oz"},
        ],
        "technique": "Shake with ice and strain",
        "garnish": "Lemon twist",
        "flavor_profile": {"sweetness": 0.5, "booziness": 0.4, "balance_rating": 0.8},
        "rationale": "Bright and balanced",
        "source_links": ["https://example.com/" + name.lower()],
    }


def _response(*names: str, indent: int | None = 2) -> str:
    return json.dumps({"suggestions": [_cocktail(name) for name in names]}, indent=indent)


def test_minimal_suggestion_gets_defaults():
    suggestions = recover_suggestions('{"suggestions":[{"name":"Test"}]}')

    assert len(suggestions) == 1
    assert suggestions[0].name == "Test"
    assert suggestions[0].base_spirits == []
    assert suggestions[0].ingredients == []
    assert suggestions[0].technique == ""
    assert suggestions[0].garnish == ""
    assert suggestions[0].flavor_profile.sweetness == 0
    assert suggestions[0].flavor_profile.balance_rating == 0
    assert suggestions[0].rationale == ""
    assert suggestions[0].source_links == []


def test_valid_response_returned_unchanged():
    text = _response("Bee's Knees", "Tom Collins", "Aviation")
    result = recover_with_outcome(text)

    assert result.outcome == "strict"
    assert [item.name for item in result.suggestions] == ["Bee's Knees", "Tom Collins", "Aviation"]
    assert result.suggestions[0] == Cocktail.model_validate(_cocktail("Bee's Knees"))


def test_fenced_response_is_parsed():
    text = "```json\n" + _response("Negroni") + "\n```"
    assert [item.name for item in recover_suggestions(text)] == ["Negroni"]


@pytest.mark.parametrize("indent", [None, 2])
def test_truncated_mid_suggestion_keeps_completed_entries(indent):
    full = _response("Alpha", "Bravo", "Charlie", indent=indent)
    cut = full.index("Charlie") + 3
    result = recover_with_outcome(full[:cut])

    assert result.outcome == "truncated"
    assert [item.name for item in result.suggestions] == ["Alpha", "Bravo"]
    assert result.suggestions[1] == Cocktail.model_validate(_cocktail("Bravo"))


def test_truncated_right_after_separator():
    full = _response("Alpha", "Bravo")
    cut = full.index("Bravo")
    prefix = full[: full.rindex("{", 0, cut)]
    assert [item.name for item in recover_suggestions(prefix)] == ["Alpha"]


def test_truncated_inside_nested_list_keeps_leading_entries():
    full = _response("Alpha", "Bravo", indent=None)
    cut = full.index("Simple syrup", full.index("Bravo"))
    result = recover_with_outcome(full[:cut])

    assert result.outcome == "truncated"
    assert [item.name for item in result.suggestions] == ["Alpha"]
    assert result.suggestions[0] == Cocktail.model_validate(_cocktail("Alpha"))


@pytest.mark.parametrize("marker", ["Lemon juice", "Gin", "Shake"])
def test_truncated_inside_later_suggestion_never_returns_it(marker):
    full = _response("Alpha", "Bravo", "Charlie", indent=2)
    cut = full.index(marker, full.index("Charlie"))
    names = [item.name for item in recover_suggestions(full[:cut])]
    assert names == ["Alpha", "Bravo"]


def test_braces_inside_strings_do_not_confuse_recovery():
    first = _cocktail("Alpha")
    first["rationale"] = 'Tricky "},{" text ] with brackets ['
    text = json.dumps({"suggestions": [first, _cocktail("Bravo")]})
    truncated = text[: text.index("Bravo") + 2]

    suggestions = recover_suggestions(truncated)
    assert [item.name for item in suggestions] == ["Alpha"]
    assert suggestions[0].rationale == first["rationale"]


def test_truncated_first_suggestion_returns_empty():
    full = _response("Alpha")
    assert recover_with_outcome(full[:40]).outcome == "empty"
    assert recover_suggestions(full[:40]) == []


@pytest.mark.parametrize(
    "text",
    [
        None,
        "",
        "   ",
        "not json at all",
        "[]",
        '{"cocktails": []}',
        '{"suggestions": "none"}',
        "}}]],,{{[[",
        '{"suggestions": [' * 50,
    ],
)
def test_unusable_text_returns_empty_list(text):
    assert recover_suggestions(text) == []


def test_non_object_entries_are_skipped():
    suggestions = recover_suggestions('{"suggestions": ["Mojito", null, {"name": "Daiquiri"}]}')
    assert [item.name for item in suggestions] == ["Daiquiri"]


def test_every_prefix_is_safe():
    full = _response("Alpha", "Bravo")
    for end in range(0, len(full), 7):
        suggestions = recover_suggestions(full[:end])
        assert isinstance(suggestions, list)
        assert len(suggestions) <= 2
