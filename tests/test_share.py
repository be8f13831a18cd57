"""Tests for share tokens."""

import base64
import random
import string
import zlib

import pytest

from cocktail_finder import Cocktail, FlavorProfile, Ingredient, decode_share_token, encode_share_token
from cocktail_finder.exceptions import ShareDecodeError
from cocktail_finder.share import LOADING, open_shared_view, share_path

TOKEN_ALPHABET = set(string.ascii_letters + string.digits + "-_")


def _sample() -> Cocktail:
    return Cocktail(
        name="Caipirinha à la Mañana 🍹",
        base_spirits=[Ingredient(name="Cachaça", amount=2, unit="oz")],
        ingredients=[
            Ingredient(name="Lime", amount=0.5, unit="piece"),
            Ingredient(name="Sugar", amount=2, unit="tsp"),
        ],
        technique="Muddle lime and sugar, add cachaça and crushed ice",
        garnish="",
        flavor_profile=FlavorProfile(sweetness=0.6, booziness=0.7, balance_rating=0.85),
        rationale="Tart, sweet and refreshing — 清爽",
        source_links=[],
    )


def test_round_trip_with_non_ascii_and_empty_fields():
    cocktail = _sample()
    assert decode_share_token(encode_share_token(cocktail)) == cocktail


def test_round_trip_default_cocktail():
    cocktail = Cocktail()
    assert decode_share_token(encode_share_token(cocktail)) == cocktail


def test_token_is_url_safe():
    token = encode_share_token(_sample())
    assert token
    assert set(token) <= TOKEN_ALPHABET


def test_encoding_is_deterministic():
    assert encode_share_token(_sample()) == encode_share_token(_sample())


def test_share_path():
    cocktail = _sample()
    assert share_path(cocktail) == f"/cocktails/{encode_share_token(cocktail)}"


@pytest.mark.parametrize(
    "token",
    [
        "",
        "not a token",
        "abc/def",
        "a",
        "AAAA",
        "eyJuYW1lIjogIlRlc3QifQ",
        base64.urlsafe_b64encode(zlib.compress(b"not json")).decode().rstrip("="),
        base64.urlsafe_b64encode(zlib.compress(b"[1, 2, 3]")).decode().rstrip("="),
        base64.urlsafe_b64encode(zlib.compress(b'{"flavor_profile": {"balance_rating": "x"}, "x": 1}')[:-4])
        .decode()
        .rstrip("="),
        base64.urlsafe_b64encode(zlib.compress(b"[" * 60000)).decode().rstrip("="),
        base64.urlsafe_b64encode(zlib.compress(b'{"name": ' + b"{\"a\": " * 10000)).decode().rstrip("="),
    ],
)
def test_invalid_tokens_raise_decode_error(token):
    with pytest.raises(ShareDecodeError):
        decode_share_token(token)


def test_oversized_payload_is_rejected():
    payload = b'{"name": "' + b"x" * (200 * 1024) + b'"}'
    token = base64.urlsafe_b64encode(zlib.compress(payload)).decode().rstrip("=")
    with pytest.raises(ShareDecodeError):
        decode_share_token(token)


def test_random_strings_never_escape_as_other_errors():
    rng = random.Random(1234)
    alphabet = string.ascii_letters + string.digits + "-_+/=%. "
    for _ in range(300):
        token = "".join(rng.choice(alphabet) for _ in range(rng.randint(0, 80)))
        try:
            decode_share_token(token)
        except ShareDecodeError:
            pass


def test_open_shared_view_decoded():
    cocktail = _sample()
    view = open_shared_view(encode_share_token(cocktail))
    assert LOADING.state == "loading"
    assert view.state == "decoded"
    assert view.cocktail == cocktail
    assert view.redirect_to is None


def test_open_shared_view_redirects_on_garbage():
    view = open_shared_view("%%%garbage")
    assert view.state == "redirected"
    assert view.cocktail is None
    assert view.redirect_to == "/"


def test_lone_surrogate_text_can_be_shared():
    cocktail = Cocktail.model_validate({"name": "Broken \ud800 name", "source_links": ["https://x.example/\udfff"]})
    assert cocktail.name == "Broken � name"

    decoded = decode_share_token(encode_share_token(cocktail))
    assert decoded == cocktail
