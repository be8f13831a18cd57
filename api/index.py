import logging
from pathlib import Path
import sys

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

# Ensure local src package is importable in serverless runtime.
ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from cocktail_finder import Cocktail, PreferenceModel  # noqa: E402
from cocktail_finder.config import ServiceConfig  # noqa: E402
from cocktail_finder.core import suggest_with_metadata  # noqa: E402
from cocktail_finder.exceptions import AuthenticationError, RateLimitError  # noqa: E402
from cocktail_finder.share import SHARE_ROUTE, encode_share_token, open_shared_view  # noqa: E402
from api.auth import TokenVerifier, bearer_token  # noqa: E402
from api.rate_limit import FixedWindowRateLimiter  # noqa: E402

logger = logging.getLogger(__name__)

SUGGESTION_FAILED = "Failed to generate suggestions"


def _error(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def caller_identity(request: Request) -> str:
    """Identity used as the rate-limit key; verifies the bearer token when auth is on."""
    verifier: TokenVerifier | None = request.app.state.token_verifier
    if verifier is None:
        return request.client.host if request.client else "anonymous"
    claims = verifier.verify(bearer_token(request.headers.get("authorization")))
    return str(claims.get("sub") or "anonymous")


def create_app(config: ServiceConfig | None = None, *, token_verifier: TokenVerifier | None = None) -> FastAPI:
    config = config or ServiceConfig.from_env()
    app = FastAPI(title="cocktail-finder API", version="1.0.0")
    app.state.config = config
    app.state.token_verifier = token_verifier or (
        TokenVerifier(config.auth_audience, config.auth_issuer_base_url) if config.auth_enabled else None
    )
    app.state.rate_limiter = FixedWindowRateLimiter(
        max_requests=config.rate_limit_max_requests,
        window_sec=config.rate_limit_window_sec,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.frontend_origins),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(AuthenticationError)
    async def _authentication_failed(request: Request, exc: AuthenticationError) -> JSONResponse:
        return _error(401, str(exc))

    @app.exception_handler(RequestValidationError)
    async def _invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        detail = errors[0].get("msg", "invalid request") if errors else "invalid request"
        return _error(422, f"Invalid request: {detail}")

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/your-endpoint")
    def greeting() -> dict[str, str]:
        return {"message": "Hello from Render!"}

    @app.post("/api/suggest-cocktails")
    def suggest(preferences: PreferenceModel, request: Request, identity: str = Depends(caller_identity)):
        if config.rate_limit_enabled:
            allowed, retry_after = request.app.state.rate_limiter.check(identity)
            if not allowed:
                return _error(
                    429,
                    "Too many requests, please try again later",
                    headers={"Retry-After": str(max(1, int(retry_after)))},
                )

        try:
            suggestions, metadata = suggest_with_metadata(
                preferences,
                api_key=config.gemini_api_key,
                count=config.suggestion_count,
            )
        except RateLimitError:
            logger.warning("suggestion service quota exhausted")
            return _error(500, SUGGESTION_FAILED)
        except Exception:
            logger.exception("suggest failed")
            return _error(500, SUGGESTION_FAILED)

        logger.info(
            "suggest ok identity=%s parser=%s count=%d",
            identity,
            metadata.get("parser"),
            len(suggestions),
        )
        return {"suggestions": [item.to_payload() for item in suggestions]}

    @app.post("/api/share")
    def share(cocktail: Cocktail) -> dict[str, str]:
        token = encode_share_token(cocktail)
        return {"token": token, "path": f"{SHARE_ROUTE}/{token}"}

    @app.get("/cocktails/{token}")
    def shared_cocktail(token: str):
        view = open_shared_view(token)
        if view.state != "decoded" or view.cocktail is None:
            return RedirectResponse(url=view.redirect_to or "/", status_code=307)
        return view.cocktail.to_payload()

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=app.state.config.port)
