"""Tests for the command-line interface."""

import json

from cocktail_finder import Cocktail, encode_share_token
from cocktail_finder.cli import main
from cocktail_finder.exceptions import SuggestionError


def test_suggest_builds_preferences_from_flags(mocker, capsys):
    suggest = mocker.patch("cocktail_finder.cli.suggest_cocktails", return_value=[Cocktail(name="Test")])

    code = main(["suggest", "--flavor", "Sweet", "--spirit", "gin", "--bubbles", "--sweetness", "8", "--json"])

    assert code == 0
    preferences = suggest.call_args.args[0]
    assert preferences.flavor_tags == frozenset({"Sweet"})
    assert preferences.base_spirits == ("Gin",)
    assert preferences.bubbles is True
    assert preferences.sweetness == 8
    output = json.loads(capsys.readouterr().out)
    assert output["suggestions"][0]["name"] == "Test"


def test_suggest_reports_failure(mocker, capsys):
    mocker.patch("cocktail_finder.cli.suggest_cocktails", side_effect=SuggestionError("upstream down"))

    assert main(["suggest"]) == 1
    assert "upstream down" in capsys.readouterr().err


def test_suggest_rejects_unknown_flavor(mocker, capsys):
    suggest = mocker.patch("cocktail_finder.cli.suggest_cocktails")

    assert main(["suggest", "--flavor", "Smoky"]) == 2
    suggest.assert_not_called()


def test_suggest_prints_share_paths(mocker, capsys):
    cocktail = Cocktail(name="Test")
    mocker.patch("cocktail_finder.cli.suggest_cocktails", return_value=[cocktail])

    assert main(["suggest", "--share"]) == 0
    assert f"/cocktails/{encode_share_token(cocktail)}" in capsys.readouterr().out


def test_decode_token(capsys):
    token = encode_share_token(Cocktail(name="Sidecar", garnish="Sugar rim"))

    assert main(["decode", token]) == 0
    output = capsys.readouterr().out
    assert "Sidecar" in output
    assert "Sugar rim" in output


def test_decode_invalid_token(capsys):
    assert main(["decode", "???"]) == 1
    assert "Error" in capsys.readouterr().err
