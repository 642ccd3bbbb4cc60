from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from shellscope.api.router import router as analysis_router
from shellscope.core.config import get_settings
from shellscope.core.limiter import limiter
from shellscope.core.logging import configure_structlog
from shellscope.core.middleware import RequestIdMiddleware, SecurityHeadersMiddleware


def create_app() -> FastAPI:
    settings = get_settings()

    # structlog first, so anything logged while wiring the app is rendered
    configure_structlog(debug=settings.debug)

    _app = FastAPI(
        title="ShellScope API",
        description="Explains what a pasted shell command would do before it is run",
        version="0.1.0",
    )

    # SlowAPI looks the limiter up on app.state
    _app.state.limiter = limiter
    _app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # ---------------------------------------------------------------------------
    # Middleware. Starlette wraps each new one around the previous ones, so
    # RequestIdMiddleware (added last) sees every request first.
    # ---------------------------------------------------------------------------
    _app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    _app.add_middleware(SlowAPIMiddleware)
    _app.add_middleware(SecurityHeadersMiddleware)
    _app.add_middleware(RequestIdMiddleware)

    # ---------------------------------------------------------------------------
    # Routes
    # ---------------------------------------------------------------------------

    @_app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "ok"}

    _app.include_router(analysis_router)

    return _app


app = create_app()
