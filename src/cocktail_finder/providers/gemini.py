"""Gemini provider implementation."""

import logging
import os

from google import genai
from google.genai import errors, types

from cocktail_finder.exceptions import AuthenticationError, RateLimitError, SuggestionError
from cocktail_finder.providers.base import BaseProvider

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_MAX_OUTPUT_TOKENS = 4096


class GeminiProvider(BaseProvider):
    """Gemini text generation provider."""

    name = "gemini"

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        *,
        max_output_tokens: int | None = None,
        temperature: float = 0.9,
        client=None,
    ):
        """Initialize Gemini provider.

        Args:
            api_key: Gemini API key. Falls back to GEMINI_API_KEY env var.
            model: Model name. Falls back to GEMINI_MODEL env var.
            max_output_tokens: Response length limit. Responses cut off at
                this limit are handled by the response recoverer.
            temperature: Sampling temperature.
            client: Preconfigured client, mainly for tests.

        Raises:
            AuthenticationError: If no API key is provided or found.
        """
        self.model = model or os.environ.get("GEMINI_MODEL") or DEFAULT_MODEL
        self.max_output_tokens = max_output_tokens or DEFAULT_MAX_OUTPUT_TOKENS
        self.temperature = temperature

        if client is not None:
            self.client = client
            return

        self.api_key = api_key or os.environ.get("GEMINI_API_KEY")
        if not self.api_key:
            raise AuthenticationError(
                "No API key provided. Set GEMINI_API_KEY environment variable "
                "or pass api_key parameter."
            )
        self.client = genai.Client(api_key=self.api_key)

    def generate(self, prompt: str) -> str:
        """Generate cocktail suggestions text for a prompt.

        Raises:
            RateLimitError: If API rate limit or quota is exceeded
            AuthenticationError: If API key is invalid
            SuggestionError: For any other upstream failure
        """
        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=[prompt],
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    max_output_tokens=self.max_output_tokens,
                    temperature=self.temperature,
                ),
            )
        except errors.ClientError as e:
            message = str(e).lower()
            if "rate" in message or "quota" in message or getattr(e, "code", None) == 429:
                raise RateLimitError(f"API rate limit exceeded: {e}") from e
            if "auth" in message or "key" in message or getattr(e, "code", None) in {401, 403}:
                raise AuthenticationError(f"Invalid API key: {e}") from e
            raise SuggestionError(f"Gemini request rejected: {e}") from e
        except Exception as e:
            raise SuggestionError(f"Failed to generate suggestions: {e}") from e

        text = getattr(response, "text", None) or ""
        if not text:
            logger.warning("gemini returned an empty response for model %s", self.model)
        return text

    def get_generation_metadata(self) -> dict[str, str]:
        return {"provider": self.name, "model": self.model}
