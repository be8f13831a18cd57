"""Best-effort recovery of suggestions from remote response text.

The suggestion service may cut its output off at the length limit, so the
text is not guaranteed to be well-formed JSON. Recovery never raises: the
caller always receives a (possibly empty) list.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Literal

from cocktail_finder.schema import Cocktail, normalize_suggestion

logger = logging.getLogger(__name__)

Outcome = Literal["strict", "truncated", "empty"]

_FENCE = re.compile(r"```(?:json)?\s*([\s\S]*?)(?:```|$)", re.IGNORECASE)
_CLOSERS = {"{": "}", "[": "]"}


@dataclass(frozen=True)
class RecoveryResult:
    suggestions: list[Cocktail] = field(default_factory=list)
    outcome: Outcome = "empty"


def _strip_fences(text: str) -> str:
    stripped = text.strip()
    match = _FENCE.search(stripped)
    if match and stripped.startswith("```"):
        return match.group(1).strip()
    return stripped


def _parse_wrapper(text: str) -> list[Cocktail] | None:
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, RecursionError):
        return None
    if not isinstance(data, dict) or not isinstance(data.get("suggestions"), list):
        return None
    suggestions: list[Cocktail] = []
    for raw in data["suggestions"]:
        item = normalize_suggestion(raw)
        if item is not None:
            suggestions.append(item)
    return suggestions


def _scan(text: str) -> tuple[list[int], list[str]]:
    """Walk the text outside string literals.

    Returns the cut points that follow a completed element of the wrapper's
    top-level array (the next suggestion was about to start) and the brackets
    still open at the end of the text.
    """
    cut_points: list[int] = []
    stack: list[str] = []
    in_str = False
    escaped = False
    pending: int | None = None

    for index, ch in enumerate(text):
        if in_str:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_str = False
            continue

        if ch == '"':
            in_str = True
            pending = None
        elif ch in _CLOSERS:
            stack.append(ch)
            pending = None
        elif ch in "}]":
            if stack:
                stack.pop()
            pending = index + 1 if ch == "}" and stack == ["{", "["] else None
        elif ch == ",":
            if pending is not None:
                cut_points.append(pending)
            pending = None
        elif not ch.isspace():
            pending = None

    return cut_points, stack


def _closing_tokens(prefix: str) -> str:
    _, stack = _scan(prefix)
    return "".join(_CLOSERS[opener] for opener in reversed(stack))


def _recover_truncated(text: str) -> list[Cocktail] | None:
    cut_points, _ = _scan(text)
    for cut in reversed(cut_points):
        prefix = text[:cut]
        suggestions = _parse_wrapper(prefix + _closing_tokens(prefix))
        if suggestions is not None:
            return suggestions
    return None


def recover_with_outcome(text: str | None) -> RecoveryResult:
    """Recover suggestions and report which path produced them."""
    if not text or not text.strip():
        logger.warning("empty response text from suggestion service")
        return RecoveryResult()

    try:
        body = _strip_fences(text)
        suggestions = _parse_wrapper(body)
        if suggestions is not None:
            return RecoveryResult(suggestions=suggestions, outcome="strict")

        suggestions = _recover_truncated(body)
        if suggestions is not None:
            logger.warning("recovered %d suggestions from truncated response", len(suggestions))
            return RecoveryResult(suggestions=suggestions, outcome="truncated")
    except Exception:
        logger.exception("response recovery failed")
        return RecoveryResult()

    logger.warning("could not recover suggestions from response (%d chars)", len(text))
    return RecoveryResult()


def recover_suggestions(text: str | None) -> list[Cocktail]:
    """Parse response text into suggestions; returns [] when nothing is usable."""
    return recover_with_outcome(text).suggestions

