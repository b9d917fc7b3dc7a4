"""Application factory for creating FastAPI instances.

This module provides the create_app factory function that:
- Configures the FastAPI application with appropriate settings
- Sets up the middleware stack in the correct order
- Registers exception handlers
- Mounts API routers
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from recipe_service.api.v1.router import router as v1_router
from recipe_service.auth.middleware import AccessControlMiddleware
from recipe_service.core.config import Settings, get_settings
from recipe_service.core.events import lifespan
from recipe_service.core.exceptions import setup_exception_handlers
from recipe_service.core.middleware import LoggingMiddleware, RequestIDMiddleware


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure a FastAPI application instance.

    Args:
        settings: Optional settings override. If not provided, uses get_settings().

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    docs_enabled = not settings.is_production
    app = FastAPI(
        title=settings.app.name,
        version=settings.app.version,
        description="Recipe management API with JWT authentication and AI helpers",
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        debug=settings.app.debug,
    )

    # Store settings in app state for access in routes and lifespan
    app.state.settings = settings

    setup_exception_handlers(app)

    # Middleware order matters - first added = last executed
    _setup_middleware(app, settings)

    _setup_routers(app, settings)

    return app


def public_prefixes(settings: Settings) -> tuple[str, ...]:
    """Path prefixes the access-control middleware does not inspect."""
    prefix = settings.api.v1_prefix
    return (
        f"{prefix}/auth",
        f"{prefix}/health",
        f"{prefix}/info",
        "/docs",
        "/redoc",
        "/openapi.json",
    )


def protected_paths(settings: Settings) -> tuple[str, ...]:
    """Paths under a public prefix that still need the caller resolved."""
    prefix = settings.api.v1_prefix
    return (f"{prefix}/auth/me", f"{prefix}/auth/change-password")


def _setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure middleware stack.

    Middleware is executed in reverse order of addition. Order from the
    request perspective:
    1. CORSMiddleware (handles CORS preflight)
    2. RequestIDMiddleware (adds request ID and logging context)
    3. LoggingMiddleware (logs requests/responses)
    4. AccessControlMiddleware (resolves the bearer token to a caller)
    """
    app.add_middleware(
        AccessControlMiddleware,
        public_prefixes=public_prefixes(settings),
        protected_paths=protected_paths(settings),
    )

    app.add_middleware(
        LoggingMiddleware,
        exclude_paths={f"{settings.api.v1_prefix}/health", "/favicon.ico"},
    )

    app.add_middleware(RequestIDMiddleware)

    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID"],
        )


def _setup_routers(app: FastAPI, settings: Settings) -> None:
    """Mount API routers.

    Args:
        app: FastAPI application instance.
        settings: Application settings.
    """
    app.include_router(v1_router, prefix=settings.api.v1_prefix)

    @app.get("/", include_in_schema=False)
    async def root() -> dict[str, str]:
        """Root endpoint returning basic service info."""
        return {
            "service": settings.app.name,
            "version": settings.app.version,
            "docs": "/docs" if not settings.is_production else "disabled",
        }
