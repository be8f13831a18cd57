"""Custom exceptions for cocktail-finder."""


class CocktailFinderError(Exception):
    """Base exception for cocktail-finder."""

    pass


class AuthenticationError(CocktailFinderError):
    """Raised when API key or bearer token is invalid or missing."""

    pass


class RateLimitError(CocktailFinderError):
    """Raised when API rate limit is exceeded."""

    pass


class SuggestionError(CocktailFinderError):
    """Raised when the suggestion service fails to produce a response."""

    pass


class ShareDecodeError(CocktailFinderError):
    """Raised when a share token cannot be decoded into a cocktail."""

    pass
