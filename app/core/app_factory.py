"""Application factory for the FastAPI app.

Centralizes app construction (metadata, middleware, handlers, routers and the
fortune store) so tests can build isolated instances.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.adapters.fortune_store.base import AbstractFortuneStore
from app.api.routes import fortune_router, frame_router, health_router
from app.core.config import settings
from app.core.dependencies import build_fortune_store
from app.core.exception_handlers import setup_exception_handlers
from app.core.logging import configure_logging
from app.core.middleware import request_id_middleware
from app.core.openapi import apply_openapi_customizations
from app.services.fortune_service import FortuneService


def _parse_origins(raw: str) -> list[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def create_app(
    store: AbstractFortuneStore | None = None,
    *,
    service: FortuneService | None = None,
    setup_logging: bool = True,
) -> FastAPI:
    """Create and configure the FastAPI application instance.

    Args:
        store: Fortune store to use; built from settings when omitted.
        service: Fully built FortuneService (takes precedence over store).
        setup_logging: Configure the root logger (disabled by some tests).

    Returns:
        Configured FastAPI app with middleware, handlers, routers and docs.
    """
    # Logging first so subsequent init logs are formatted as desired
    if setup_logging:
        configure_logging(settings.log, debug=settings.app.debug)

    app = FastAPI(
        title="Drunk Fortune Cookie",
        description=(
            "Daily drunk fortune cookie messages for web clients and Farcaster "
            "Frames. Web users get one fortune per cooldown window; Frame "
            "viewers get a fresh fortune on every click."
        ),
        version="0.1.0",
        debug=settings.app.debug,
    )

    app.state.fortune_service = service or FortuneService(store or build_fortune_store())

    # Middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_parse_origins(settings.app.cors_allow_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(request_id_middleware)

    # Exception handlers
    setup_exception_handlers(app)

    # Routers
    app.include_router(fortune_router)
    app.include_router(frame_router)
    app.include_router(health_router)

    apply_openapi_customizations(app)

    return app
