"""Providers for cocktail-finder."""

from cocktail_finder.providers.base import BaseProvider
from cocktail_finder.providers.gemini import GeminiProvider

__all__ = ["BaseProvider", "GeminiProvider"]
