"""Unit tests for AuthRedirectMiddleware."""

from unittest.mock import AsyncMock

import pytest
from starlette.applications import Starlette
from starlette.responses import PlainTextResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from infrastructure.auth.middleware import AuthRedirectMiddleware

pytestmark = pytest.mark.unit


async def page(request):
    return PlainTextResponse(request.url.path)


def make_client(is_authenticated):
    app = Starlette(
        routes=[
            Route("/", page),
            Route("/login", page),
            Route("/settings/profile", page),
            Route("/health", page),
        ]
    )
    app.add_middleware(AuthRedirectMiddleware, is_authenticated=is_authenticated)
    return TestClient(app)


class TestAuthRedirectMiddleware:
    def test_signed_out_request_redirected_to_login(self):
        client = make_client(AsyncMock(return_value=False))

        response = client.get("/settings/profile", follow_redirects=False)

        assert response.status_code == 307
        assert response.headers["location"] == "/login"

    def test_signed_in_request_on_login_redirected_home(self):
        client = make_client(AsyncMock(return_value=True))

        response = client.get("/login", follow_redirects=False)

        assert response.status_code == 307
        assert response.headers["location"] == "/"

    def test_signed_in_request_passes_through(self):
        client = make_client(AsyncMock(return_value=True))

        response = client.get("/settings/profile")

        assert response.status_code == 200
        assert response.text == "/settings/profile"

    def test_unprotected_path_skips_auth_check(self):
        check = AsyncMock(return_value=False)
        client = make_client(check)

        response = client.get("/health")

        assert response.status_code == 200
        check.assert_not_awaited()
