"""APOD Explorer API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map every failure to the response envelope
    - CORS configured from settings (not hardcoded)
    - Shared state lives in a ServiceRuntime on app.state, built per app
    - Upstream client closed on shutdown via lifespan context manager

Design Decisions:
    - create_app() factory: tests build isolated apps with their own settings,
      counters and a mocked upstream transport
    - No module-level app: importing this module opens no HTTP client; uvicorn
      calls create_app itself (factory=True)
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - SIGTERM/SIGINT handled by uvicorn: stops accepting connections, then
      runs lifespan shutdown
"""

import logging
from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from apod_explorer.api.error_handlers import register_error_handlers
from apod_explorer.api.middleware import register_middleware
from apod_explorer.api.routes import apod, health, root
from apod_explorer.config import APP_VERSION, Settings, get_settings
from apod_explorer.infrastructure.observability import setup_logging
from apod_explorer.infrastructure.process_hooks import install_process_hooks
from apod_explorer.services.runtime import build_runtime

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    runtime = app.state.runtime
    settings = runtime.settings
    setup_logging(settings.log_level, settings.log_format)
    install_process_hooks()
    if settings.uses_demo_key:
        logger.warning(
            "NASA_API_KEY not set, using DEMO_KEY (limited to 1000 requests per day)",
        )
    logger.info(
        f"APOD Explorer API started on port {settings.port} "
        f"(environment={settings.environment}, "
        f"key={'DEMO_KEY' if settings.uses_demo_key else 'custom'})",
    )
    yield
    logger.info("APOD Explorer API shutting down")
    await runtime.close()


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build an app; transport replaces the network for the upstream client."""
    settings = settings or get_settings()

    app = FastAPI(
        title="APOD Explorer API", version=APP_VERSION, lifespan=lifespan,
    )
    app.state.runtime = build_runtime(settings, transport)

    # Routes — explicit registration
    app.include_router(root.router)
    app.include_router(health.router)
    app.include_router(apod.router)

    register_error_handlers(app)
    register_middleware(app)

    # CORS outermost so 429s and error envelopes still carry CORS headers
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_origin],
        allow_credentials=True,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=[
            "X-Request-ID", "RateLimit-Limit", "RateLimit-Remaining",
            "RateLimit-Reset", "Retry-After",
        ],
    )
    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "apod_explorer.main:create_app", factory=True,
        host=settings.host, port=settings.port,
    )


if __name__ == "__main__":
    run()
