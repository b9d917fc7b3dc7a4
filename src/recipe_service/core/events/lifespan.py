"""Application lifespan event handlers.

Startup builds the process-wide collaborators and stores them on
``app.state``; request dependencies read them from there:

- ``token_service``: signs and verifies JWTs
- ``password_hasher``: bcrypt hashing
- ``llm_client``: chat-completions client, or None when AI is disabled
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from recipe_service.auth.passwords import BcryptPasswordHasher
from recipe_service.auth.tokens import TokenService
from recipe_service.db.session import close_database, create_all, init_database
from recipe_service.llm.client import ChatCompletionsClient
from recipe_service.llm.exceptions import LLMConfigurationError
from recipe_service.observability.logging import get_logger, setup_logging


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

    from recipe_service.core.config import Settings
    from recipe_service.llm.client.protocol import LLMClientProtocol


logger = get_logger(__name__)


async def _startup(app: FastAPI, settings: Settings) -> None:
    """Initialize all application services during startup.

    Args:
        app: The FastAPI application instance.
        settings: Application settings.
    """
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
    )
    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
        debug=settings.app.debug,
    )

    # Critical: refuse to start without a signing key or a database
    app.state.token_service = TokenService.from_settings(settings)
    app.state.password_hasher = BcryptPasswordHasher(
        rounds=settings.auth.password.bcrypt_rounds
    )
    init_database(settings)
    await create_all()

    # Optional: AI endpoints answer 503 without a client
    app.state.llm_client = await _init_llm_client(settings)

    logger.info("Application startup complete")


async def _init_llm_client(settings: Settings) -> LLMClientProtocol | None:
    if not settings.llm.enabled:
        logger.info("LLM features disabled by configuration")
        return None
    try:
        client = ChatCompletionsClient.from_settings(settings)
    except LLMConfigurationError as e:
        logger.warning("LLM client not configured - AI features unavailable", reason=str(e))
        return None
    await client.initialize()
    return client


async def _shutdown(app: FastAPI) -> None:
    """Shutdown all application services.

    Args:
        app: The FastAPI application instance.
    """
    logger.info("Shutting down application")

    llm_client: LLMClientProtocol | None = getattr(app.state, "llm_client", None)
    if llm_client is not None:
        await llm_client.shutdown()
        app.state.llm_client = None

    await close_database()

    logger.info("Application shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan events.

    Args:
        app: The FastAPI application instance; ``app.state.settings`` is
            set by the application factory.

    Yields:
        None - control returns to the application to handle requests.
    """
    await _startup(app, app.state.settings)
    try:
        yield
    finally:
        await _shutdown(app)
