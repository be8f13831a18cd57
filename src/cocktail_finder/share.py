"""Share tokens: reversible, URL-safe encoding of a single cocktail."""

from __future__ import annotations

import base64
import binascii
import json
import logging
import re
import zlib
from dataclasses import dataclass
from typing import Literal

from pydantic import ValidationError

from cocktail_finder.exceptions import ShareDecodeError
from cocktail_finder.schema import Cocktail

logger = logging.getLogger(__name__)

MAX_PAYLOAD_BYTES = 64 * 1024
SHARE_ROUTE = "/cocktails"
REDIRECT_TARGET = "/"

_TOKEN_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


def _canonical_json(cocktail: Cocktail) -> bytes:
    return json.dumps(
        cocktail.to_payload(),
        ensure_ascii=False,
        sort_keys=True,
        separators=(",", ":"),
    ).encode("utf-8")


def encode_share_token(cocktail: Cocktail) -> str:
    """Encode a cocktail into a token usable directly as a URL path segment."""
    compressed = zlib.compress(_canonical_json(cocktail), 9)
    return base64.urlsafe_b64encode(compressed).decode("ascii").rstrip("=")


def _inflate(data: bytes) -> bytes:
    decompressor = zlib.decompressobj()
    payload = decompressor.decompress(data, MAX_PAYLOAD_BYTES)
    if decompressor.unconsumed_tail:
        raise ShareDecodeError("share token payload too large")
    if not decompressor.eof:
        raise ShareDecodeError("share token payload is incomplete")
    return payload


def decode_share_token(token: str) -> Cocktail:
    """Decode a share token back into a cocktail.

    Raises:
        ShareDecodeError: If the token is not one this module produced.
    """
    if not isinstance(token, str) or not _TOKEN_PATTERN.match(token):
        raise ShareDecodeError("share token contains invalid characters")

    padded = token + "=" * (-len(token) % 4)
    try:
        compressed = base64.b64decode(padded, altchars=b"-_", validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ShareDecodeError(f"invalid share token encoding: {exc}") from exc

    try:
        raw = _inflate(compressed)
    except zlib.error as exc:
        raise ShareDecodeError(f"invalid share token payload: {exc}") from exc

    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as exc:
        raise ShareDecodeError("share token does not contain JSON") from exc

    if not isinstance(data, dict):
        raise ShareDecodeError("share token does not contain a cocktail")

    try:
        return Cocktail.model_validate(data)
    except ValidationError as exc:
        raise ShareDecodeError(f"share token contains an invalid cocktail: {exc}") from exc


def share_path(cocktail: Cocktail) -> str:
    return f"{SHARE_ROUTE}/{encode_share_token(cocktail)}"


@dataclass(frozen=True)
class SharedView:
    """Terminal state of the shared-cocktail view."""

    state: Literal["loading", "decoded", "redirected"]
    cocktail: Cocktail | None = None
    redirect_to: str | None = None


LOADING = SharedView(state="loading")


def open_shared_view(token: str) -> SharedView:
    """Resolve a shared link: decoded on success, redirected on any failure."""
    try:
        cocktail = decode_share_token(token)
    except ShareDecodeError as exc:
        logger.info("redirecting invalid share token: %s", exc)
        return SharedView(state="redirected", redirect_to=REDIRECT_TARGET)
    return SharedView(state="decoded", cocktail=cocktail)
