"""Core suggestion function."""

import logging

from cocktail_finder.config import ServiceConfig
from cocktail_finder.preferences import PreferenceModel
from cocktail_finder.prompt import compile_prompt
from cocktail_finder.providers.base import BaseProvider
from cocktail_finder.recovery import recover_with_outcome
from cocktail_finder.schema import Cocktail

logger = logging.getLogger(__name__)


def _build_gemini_provider(api_key: str | None, config: ServiceConfig) -> BaseProvider:
    from cocktail_finder.providers.gemini import GeminiProvider

    return GeminiProvider(
        api_key=api_key or config.gemini_api_key,
        model=config.gemini_model,
        max_output_tokens=config.max_output_tokens,
    )


def _select_provider(provider: str | None, api_key: str | None, config: ServiceConfig) -> BaseProvider:
    provider_name = (provider or config.provider).strip().lower()
    if provider_name in {"gemini", "google"}:
        return _build_gemini_provider(api_key, config)
    raise ValueError(f"Unsupported provider: {provider_name}")


def suggest_cocktails(
    preferences: PreferenceModel | None = None,
    *,
    api_key: str | None = None,
    provider: str | None = None,
    count: int | None = None,
) -> list[Cocktail]:
    """Suggest cocktails matching the given preferences.

    Args:
        preferences: Preferences collected from the user. None or an empty
            model produces a generic request.
        api_key: Gemini API key. Falls back to GEMINI_API_KEY env var.
        provider: Provider name. Defaults to `COCKTAIL_FINDER_PROVIDER` env
            var, then `gemini`.
        count: Number of suggestions to ask for.

    Returns:
        Suggestions recovered from the response. Empty if nothing usable
        came back.
    """
    suggestions, _ = suggest_with_metadata(preferences, api_key=api_key, provider=provider, count=count)
    return suggestions


def suggest_with_metadata(
    preferences: PreferenceModel | None = None,
    *,
    api_key: str | None = None,
    provider: str | None = None,
    count: int | None = None,
) -> tuple[list[Cocktail], dict[str, str]]:
    """Suggest cocktails and return provider metadata."""

    config = ServiceConfig.from_env()
    engine = _select_provider(provider, api_key, config)
    prompt = compile_prompt(preferences, count=count or config.suggestion_count)
    text = engine.generate(prompt)
    result = recover_with_outcome(text)

    metadata = dict(engine.get_generation_metadata() or {})
    metadata["parser"] = result.outcome
    logger.info(
        "suggestions generated provider=%s parser=%s count=%d",
        metadata.get("provider"),
        result.outcome,
        len(result.suggestions),
    )
    return result.suggestions, metadata
