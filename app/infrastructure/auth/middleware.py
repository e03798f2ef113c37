"""Starlette middleware applying the auth redirect rules."""

from typing import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response
from starlette.types import ASGIApp

from infrastructure.auth.routing import (
    AUTH_PAGES,
    is_protected_path,
    resolve_auth_redirect,
)
from infrastructure.logging import get_module_logger

logger = get_module_logger()

AuthCheck = Callable[[Request], Awaitable[bool]]


class AuthRedirectMiddleware(BaseHTTPMiddleware):
    """Redirect requests according to their authentication state.

    Args:
        app: The ASGI application
        is_authenticated: Async callable deciding whether a request is signed in
    """

    def __init__(self, app: ASGIApp, is_authenticated: AuthCheck):
        super().__init__(app)
        self.is_authenticated = is_authenticated

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        path = request.url.path
        if path not in AUTH_PAGES and not is_protected_path(path):
            return await call_next(request)

        authenticated = await self.is_authenticated(request)
        target = resolve_auth_redirect(path, authenticated)
        logger.debug(
            "auth_redirect_checked",
            path=path,
            authenticated=authenticated,
            redirect_to=target,
        )
        if target is not None:
            logger.info("auth_redirect", path=path, redirect_to=target)
            return RedirectResponse(url=target, status_code=307)
        return await call_next(request)
