"""Bearer token verification against the identity provider's JWKS."""

from __future__ import annotations

import logging

import jwt

from cocktail_finder.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

ALGORITHMS = ["RS256"]


class TokenVerifier:
    """Verify RS256 access tokens issued for a given audience."""

    def __init__(self, audience: str, issuer_base_url: str, *, jwks_client=None):
        self.audience = audience
        self.issuer = issuer_base_url.rstrip("/") + "/"
        self.jwks_client = jwks_client or jwt.PyJWKClient(f"{self.issuer}.well-known/jwks.json")

    def verify(self, token: str) -> dict:
        """Return the token claims.

        Raises:
            AuthenticationError: If the token is malformed, expired, or not
                issued for this audience.
        """
        try:
            signing_key = self.jwks_client.get_signing_key_from_jwt(token)
            return jwt.decode(
                token,
                signing_key.key,
                algorithms=ALGORITHMS,
                audience=self.audience,
                issuer=self.issuer,
            )
        except jwt.PyJWTError as exc:
            logger.info("rejected bearer token: %s", exc)
            raise AuthenticationError("Invalid or expired access token") from exc


def bearer_token(authorization: str | None) -> str:
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError("Missing bearer token")
    return token.strip()
