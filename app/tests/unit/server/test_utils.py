"""Unit tests for request authentication helpers."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import HTTPException
from starlette.requests import Request

from server.utils import (
    get_access_token,
    get_current_session,
    get_current_user_id,
    get_request_user_id,
    is_request_authenticated,
)

pytestmark = pytest.mark.unit


def make_request(headers=None, cookies=None, path="/"):
    raw_headers = [
        (name.lower().encode(), value.encode())
        for name, value in (headers or {}).items()
    ]
    if cookies:
        cookie = "; ".join(f"{k}={v}" for k, v in cookies.items())
        raw_headers.append((b"cookie", cookie.encode()))
    return Request({"type": "http", "path": path, "headers": raw_headers})


@pytest.fixture
def provider():
    session_provider = MagicMock()
    session_provider.verify_access_token = AsyncMock(return_value="user-123")
    with patch("server.utils.get_session_provider", return_value=session_provider):
        yield session_provider


class TestGetAccessToken:
    def test_bearer_header(self):
        request = make_request({"Authorization": "Bearer abc"})

        assert get_access_token(request) == "abc"

    def test_cookie(self):
        assert get_access_token(make_request(cookies={"access_token": "xyz"})) == "xyz"

    def test_header_wins_over_cookie(self):
        request = make_request({"Authorization": "Bearer abc"}, {"access_token": "xyz"})

        assert get_access_token(request) == "abc"

    def test_non_bearer_scheme_ignored(self):
        assert get_access_token(make_request({"Authorization": "Basic abc"})) is None

    def test_missing(self):
        assert get_access_token(make_request()) is None


class TestGetRequestUserId:
    @pytest.mark.asyncio
    async def test_valid_token(self, provider):
        request = make_request({"Authorization": "Bearer abc"})

        assert await get_request_user_id(request) == "user-123"
        provider.verify_access_token.assert_awaited_once_with("abc")

    @pytest.mark.asyncio
    async def test_no_token_skips_verification(self, provider):
        assert await get_request_user_id(make_request()) is None
        provider.verify_access_token.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unconfigured_client_is_signed_out(self, provider):
        provider.verify_access_token.side_effect = ValueError("missing SUPABASE_URL")

        assert await is_request_authenticated(
            make_request({"Authorization": "Bearer abc"})
        ) is False


class TestGetCurrentSession:
    @pytest.mark.asyncio
    async def test_returns_session_with_cookie_refresh_token(self, provider):
        request = make_request(
            {"Authorization": "Bearer abc"}, {"refresh_token": "r-1"}
        )

        session = await get_current_session(request, None)

        assert session.user_id == "user-123"
        assert session.access_token == "abc"
        assert session.refresh_token == "r-1"

    @pytest.mark.asyncio
    async def test_missing_refresh_cookie_gives_empty_token(self, provider):
        session = await get_current_session(
            make_request(cookies={"access_token": "xyz"}), None
        )

        assert session.access_token == "xyz"
        assert session.refresh_token == ""

    @pytest.mark.asyncio
    async def test_raises_401(self, provider):
        provider.verify_access_token.return_value = None

        with pytest.raises(HTTPException) as exc_info:
            await get_current_session(make_request({"Authorization": "Bearer bad"}), None)

        assert exc_info.value.status_code == 401


class TestGetCurrentUserId:
    @pytest.mark.asyncio
    async def test_returns_user_id(self, provider):
        session = await get_current_session(
            make_request({"Authorization": "Bearer abc"}), None
        )

        assert await get_current_user_id(session) == "user-123"
