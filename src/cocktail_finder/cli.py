"""Command-line interface for cocktail-finder."""

import argparse
import json
import sys

from pydantic import ValidationError

from cocktail_finder import __version__, suggest_cocktails
from cocktail_finder.exceptions import CocktailFinderError, ShareDecodeError
from cocktail_finder.preferences import BASE_SPIRITS, FLAVOR_TAGS, SLIDERS
from cocktail_finder.share import decode_share_token, share_path
from cocktail_finder.state import (
    FormState,
    begin_submission,
    complete_submission,
    fail_submission,
    set_bubbles,
    set_scale,
    set_slider,
    toggle_base_spirit,
    toggle_flavor,
)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cocktail-finder",
        description="Suggest cocktails from flavor and strength preferences",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"cocktail-finder {__version__}",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    suggest = subparsers.add_parser("suggest", help="Ask for cocktail suggestions")
    suggest.add_argument(
        "--flavor",
        action="append",
        default=[],
        help=f"Flavor tag, repeatable ({', '.join(FLAVOR_TAGS)})",
    )
    suggest.add_argument(
        "--spirit",
        action="append",
        default=[],
        help=f"Base spirit, up to three ({', '.join(BASE_SPIRITS)})",
    )
    bubbles = suggest.add_mutually_exclusive_group()
    bubbles.add_argument("--bubbles", dest="bubbles", action="store_true", default=None)
    bubbles.add_argument("--no-bubbles", dest="bubbles", action="store_false")
    suggest.set_defaults(bubbles=None)
    suggest.add_argument(
        "--scale",
        choices=["ten_point", "balance"],
        default="ten_point",
        help="Slider scale: 0..10 integers or -1..1 reals",
    )
    for slider in SLIDERS:
        suggest.add_argument(f"--{slider}", type=float, default=None)
    suggest.add_argument("--count", type=int, default=None, help="Number of suggestions")
    suggest.add_argument("--json", action="store_true", help="Output as JSON")
    suggest.add_argument("--share", action="store_true", help="Print a share path per suggestion")
    suggest.add_argument(
        "--api-key",
        help="Gemini API key (default: GEMINI_API_KEY env var)",
    )

    decode = subparsers.add_parser("decode", help="Decode a share token")
    decode.add_argument("token", help="Share token from a /cocktails/<token> link")
    decode.add_argument("--json", action="store_true", help="Output as JSON")
    return parser


def _form_from_args(args: argparse.Namespace) -> FormState:
    state = set_scale(FormState(), args.scale)
    for flavor in args.flavor:
        state = toggle_flavor(state, flavor)
    for spirit in args.spirit:
        state = toggle_base_spirit(state, spirit)
    if args.bubbles is not None:
        state = set_bubbles(state, args.bubbles)
    for slider in SLIDERS:
        value = getattr(args, slider)
        if value is not None:
            state = set_slider(state, slider, value)
    return state


def _run_suggest(args: argparse.Namespace) -> int:
    try:
        state = _form_from_args(args)
    except ValidationError as e:
        print(f"Error: invalid preferences: {e.errors()[0]['msg']}", file=sys.stderr)
        return 2

    state, _ = begin_submission(state)
    try:
        suggestions = suggest_cocktails(state.preferences, api_key=args.api_key, count=args.count)
    except CocktailFinderError as e:
        state = fail_submission(state, str(e))
    else:
        state = complete_submission(state, suggestions)

    if state.error:
        print(f"Error: {state.error}", file=sys.stderr)
        return 1

    if args.json:
        payload = {"suggestions": [item.to_payload() for item in state.suggestions]}
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    elif not state.suggestions:
        print("No suggestions could be generated.")
    else:
        for cocktail in state.suggestions:
            _print_formatted(cocktail)
            if args.share:
                print(f"  {'Share:':<14} {share_path(cocktail)}")
                print()
    return 0


def _run_decode(args: argparse.Namespace) -> int:
    try:
        cocktail = decode_share_token(args.token)
    except ShareDecodeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(cocktail.to_payload(), indent=2, ensure_ascii=False))
    else:
        _print_formatted(cocktail)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    args = _build_parser().parse_args(argv)
    if args.command == "decode":
        return _run_decode(args)
    return _run_suggest(args)


def _print_formatted(cocktail) -> None:
    """Print a cocktail in human-readable format."""
    print()
    print(f"  {cocktail.name or 'Unnamed cocktail'}")
    print()

    fields = [
        ("Ingredients", _format_ingredients([*cocktail.base_spirits, *cocktail.ingredients])),
        ("Preparation", cocktail.technique),
        ("Garnish", cocktail.garnish),
        ("Balance", f"{cocktail.flavor_profile.balance_rating:.0%}"),
        ("Why", cocktail.rationale),
        ("References", _format_list(cocktail.source_links)),
    ]

    for label, value in fields:
        display = value if value else "-"
        print(f"  {label + ':':<14} {display}")

    print()


def _format_ingredients(items) -> str | None:
    """Format ingredients as a comma-separated string with measures."""
    if not items:
        return None
    parts = []
    for item in items:
        if item.amount:
            parts.append(f"{item.name} {item.amount:g} {item.unit}".rstrip())
        else:
            parts.append(item.name)
    return ", ".join(parts)


def _format_list(items: list[str] | None) -> str | None:
    """Format list as comma-separated string."""
    if not items:
        return None
    return ", ".join(items)


if __name__ == "__main__":
    sys.exit(main())
