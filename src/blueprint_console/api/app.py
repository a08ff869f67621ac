"""
FastAPI Application Factory for the blueprint console.

This module initializes the FastAPI application instance. It is responsible for:
1.  **Lifecycle**: activating the console plugin on startup and deactivating it
    on shutdown (the registry lives exactly that long).
2.  **Exception Handling**: global handlers so errors return structured JSON.
3.  **Routing**: mounting the console routes under the configured plugin label.

Design Pattern
--------------
We use an **Application Factory** pattern (`create_app`). Tests build one app
per case, each with its own platform and plugin, so no state leaks between them.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from blueprint_console import __version__
from blueprint_console.api.routers import containers
from blueprint_console.api.schemas import HealthInfo
from blueprint_console.core.errors import BlueprintConsoleError
from blueprint_console.core.settings import Settings, get_logger, load_settings
from blueprint_console.demo import seed_platform
from blueprint_console.hosting import LocalPlatform, ModulePlatform
from blueprint_console.plugin import BlueprintConsolePlugin

log = get_logger(__name__)


def create_app(
    platform: ModulePlatform | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """
    Construct and configure the console application.

    Parameters
    ----------
    platform : ModulePlatform | None
        Host delivering container discovery and lifecycle events. A fresh
        :class:`LocalPlatform` is used when omitted; it is seeded with the
        demo modules when `settings.demo` is set.
    settings : Settings | None
        Configuration; defaults to the cached process settings.

    Returns
    -------
    FastAPI
        The configured ASGI application ready to be served by Uvicorn.
    """
    cfg = settings if settings is not None else load_settings()
    host = platform if platform is not None else LocalPlatform()
    plugin = BlueprintConsolePlugin(host, cfg)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Activate the plugin before serving; deactivate it on shutdown."""
        plugin.activate()
        if cfg.demo and isinstance(host, LocalPlatform):
            seed_platform(host)
        try:
            yield
        finally:
            plugin.deactivate()

    app = FastAPI(
        title="Blueprint Console",
        description="Blueprint containers and their recipes",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.plugin = plugin
    app.state.settings = cfg

    # -----------------------------------------------------------------------
    # Global Exception Handlers
    # -----------------------------------------------------------------------
    @app.exception_handler(BlueprintConsoleError)
    async def console_error_handler(request: Request, exc: BlueprintConsoleError) -> JSONResponse:
        """Container/event data the console cannot display -> HTTP 500."""
        log.error("Console error on %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=500,
            content={
                "error": type(exc).__name__,
                "detail": str(exc),
                "path": request.url.path,
            },
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all handler so unhandled exceptions return structured JSON."""
        log.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal Server Error",
                "detail": str(exc),
                "path": request.url.path,
            },
        )

    # -----------------------------------------------------------------------
    # Routes
    # -----------------------------------------------------------------------
    app.include_router(containers.router, prefix=f"/{plugin.label}")

    @app.get("/health", tags=["System"], response_model=HealthInfo)
    async def health_check() -> HealthInfo:
        """Simple liveness probe."""
        return HealthInfo(environment=cfg.environment, version=__version__, active=plugin.active)

    return app


__all__ = ["create_app"]
