"""Base provider interface."""

from abc import ABC, abstractmethod


class BaseProvider(ABC):
    """Abstract base class for generative-language providers."""

    name = "base"

    @abstractmethod
    def generate(self, prompt: str) -> str:
        """Send a compiled prompt to the remote service.

        Args:
            prompt: Prompt produced by the prompt compiler

        Returns:
            Raw response text, expected but not guaranteed to be JSON
        """
        pass

    def get_generation_metadata(self) -> dict[str, str]:
        """Return provider-specific generation metadata."""
        return {"provider": self.name}
