"""Supabase-backed implementation of the SessionProvider protocol."""

from datetime import datetime, timezone
from typing import Any, Optional

import structlog
from supabase import AuthError

from infrastructure.auth.session import RefreshResult, Session
from infrastructure.clients.supabase.client import (
    SupabaseClientManager,
    UserClientManager,
)

logger = structlog.get_logger()


def session_from_supabase(raw: Any) -> Optional[Session]:
    """Convert a supabase-auth Session into the application's Session."""
    if raw is None:
        return None
    user = getattr(raw, "user", None)
    expires_at = getattr(raw, "expires_at", None)
    return Session(
        access_token=raw.access_token,
        refresh_token=raw.refresh_token,
        user_id=getattr(user, "id", None),
        expires_at=(
            datetime.fromtimestamp(expires_at, tz=timezone.utc)
            if expires_at
            else None
        ),
    )


class SupabaseSessionProvider:
    """Session provider over the Supabase auth client.

    Auth library errors during refresh are reported as
    ``RefreshResult(session=None)`` so the executor can stop retrying.
    """

    def __init__(self, client_manager: SupabaseClientManager) -> None:
        self._client_manager = client_manager
        self._logger = logger.bind(component="supabase_session_provider")

    async def get_session(self) -> Optional[Session]:
        client = await self._client_manager.get_client()
        try:
            raw = await client.auth.get_session()
        except AuthError as e:
            self._logger.warning("get_session_failed", error=str(e))
            return None
        return session_from_supabase(raw)

    async def refresh_session(self) -> RefreshResult:
        client = await self._client_manager.get_client()
        try:
            response = await client.auth.refresh_session()
        except AuthError as e:
            self._logger.warning("refresh_session_failed", error=str(e))
            return RefreshResult(session=None)
        session = session_from_supabase(getattr(response, "session", None))
        if session is None:
            self._logger.warning("refresh_session_empty")
        return RefreshResult(session=session)

    async def sign_out(self) -> None:
        client = await self._client_manager.get_client()
        await client.auth.sign_out()
        self._logger.info("signed_out")

    async def verify_access_token(self, access_token: str) -> Optional[str]:
        """Return the user ID for a valid access token, else None.

        Used by server-side request checks where the token arrives in a
        header or cookie rather than in the client's stored session.
        """
        client = await self._client_manager.get_client()
        try:
            response = await client.auth.get_user(access_token)
        except AuthError as e:
            self._logger.info("access_token_rejected", error=str(e))
            return None
        user = getattr(response, "user", None)
        return getattr(user, "id", None)


class RequestSessionProvider:
    """Session provider for a single API request.

    Holds the caller's session (access token plus the refresh token from the
    request cookie, when one was sent). A refresh exchanges the refresh token
    and points the request's client at the new access token, so the next
    attempt of the operation runs with it.

    Args:
        client_manager: The request's user-scoped client manager
        session: Session presented by the caller
    """

    def __init__(self, client_manager: UserClientManager, session: Session) -> None:
        self._client_manager = client_manager
        self._session: Optional[Session] = session
        self._logger = logger.bind(
            component="request_session_provider", user_id=session.user_id
        )

    async def get_session(self) -> Optional[Session]:
        return self._session

    async def refresh_session(self) -> RefreshResult:
        if self._session is None or not self._session.refresh_token:
            self._logger.info("refresh_token_missing")
            return RefreshResult(session=None)

        client = await self._client_manager.get_client()
        try:
            response = await client.auth.refresh_session(self._session.refresh_token)
        except AuthError as e:
            self._logger.warning("refresh_session_failed", error=str(e))
            return RefreshResult(session=None)

        session = session_from_supabase(getattr(response, "session", None))
        if session is None:
            self._logger.warning("refresh_session_empty")
            return RefreshResult(session=None)

        self._session = session
        self._client_manager.set_access_token(session.access_token)
        return RefreshResult(session=session)

    async def sign_out(self) -> None:
        # The caller's tokens live in its own cookies; the server only forgets them
        self._session = None
        self._logger.info("request_session_cleared")
