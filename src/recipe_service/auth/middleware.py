"""Access-control middleware.

For every request outside the public allow-list this middleware looks for a
``Bearer`` access token, verifies it, loads the user it names and attaches a
:class:`CurrentUser` to ``request.state.principal``.

It never rejects a request. Any failure (missing, expired or forged token,
refresh token used as access token, unknown or disabled user) is logged and
the request continues anonymously; route dependencies decide whether that
means 401 or 403.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from recipe_service.auth.exceptions import TokenError
from recipe_service.auth.principal import CurrentUser
from recipe_service.auth.tokens import TokenType, extract_bearer_token
from recipe_service.db.repositories import UserRepository
from recipe_service.db.session import get_session_factory
from recipe_service.observability.logging import bind_context, get_logger


if TYPE_CHECKING:
    from collections.abc import Iterable

    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp

    from recipe_service.auth.tokens import TokenService


logger = get_logger(__name__)


class AccessControlMiddleware(BaseHTTPMiddleware):
    """Attach the authenticated caller, if any, to each request.

    Args:
        app: Downstream ASGI app.
        public_prefixes: Path prefixes that skip token processing entirely.
        protected_paths: Exact paths under a public prefix that still need
            the caller resolved (e.g. ``/api/auth/me``).
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        public_prefixes: Iterable[str] = (),
        protected_paths: Iterable[str] = (),
    ) -> None:
        super().__init__(app)
        self.public_prefixes = tuple(public_prefixes)
        self.protected_paths = frozenset(protected_paths)

    def is_public(self, path: str) -> bool:
        if path in self.protected_paths:
            return False
        return path.startswith(self.public_prefixes)

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        if getattr(request.state, "principal", None) is None:
            request.state.principal = None
            if not self.is_public(request.url.path):
                request.state.principal = await self._authenticate(request)
        return await call_next(request)

    async def _authenticate(self, request: Request) -> CurrentUser | None:
        token = extract_bearer_token(request.headers.get("authorization"))
        if token is None:
            return None

        tokens: TokenService = request.app.state.token_service
        try:
            claims = tokens.decode(token, expected_type=TokenType.ACCESS)
            async with get_session_factory()() as session:
                user = await UserRepository(session).find_by_username(claims.sub)
        except TokenError as e:
            logger.debug("Ignoring bearer token", reason=str(e))
            return None
        except Exception:
            logger.exception("Could not resolve caller from bearer token")
            return None

        if user is None or not user.enabled:
            logger.debug("Ignoring bearer token", reason="unknown or disabled user")
            return None

        bind_context(username=user.username)
        return CurrentUser(id=user.id, username=user.username, role=user.role)
