"""Supabase async client creation and sharing."""

import asyncio
from typing import Optional

import structlog
from supabase import AsyncClient, acreate_client
from supabase.lib.client_options import AsyncClientOptions

from infrastructure.configuration import SupabaseSettings

logger = structlog.get_logger()


async def create_supabase_client(
    settings: SupabaseSettings, access_token: Optional[str] = None
) -> AsyncClient:
    """Create an async Supabase client for the configured project.

    Every request is tagged with the x-application-name header. Without an
    access token the client manages its own session and refreshes it
    automatically. With one, the client acts as that user: the token is sent
    as the Authorization header so row-level security applies, and nothing is
    persisted between requests.

    Args:
        settings: Supabase settings
        access_token: Signed-in user's access token, if acting for a user

    Returns:
        AsyncClient bound to the project

    Raises:
        ValueError: If SUPABASE_URL or SUPABASE_ANON_KEY is not set
    """
    missing = settings.missing_required()
    if missing:
        raise ValueError(
            f"Missing required environment variables: {', '.join(missing)}"
        )

    headers = {"x-application-name": settings.APP_NAME}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    options = AsyncClientOptions(
        auto_refresh_token=access_token is None,
        persist_session=access_token is None,
        headers=headers,
    )
    client = await acreate_client(
        settings.SUPABASE_URL, settings.SUPABASE_ANON_KEY, options=options
    )
    logger.info(
        "supabase_client_created",
        app_name=settings.APP_NAME,
        user_scoped=access_token is not None,
    )
    return client


class SupabaseClientManager:
    """Creates the Supabase client on first use and shares it afterwards.

    Args:
        settings: Supabase settings
        client: Optional pre-built client (tests, scripts)
    """

    def __init__(
        self, settings: SupabaseSettings, client: Optional[AsyncClient] = None
    ) -> None:
        self._settings = settings
        self._client = client
        self._lock = asyncio.Lock()

    async def get_client(self) -> AsyncClient:
        """Return the shared client, creating it if needed."""
        if self._client is not None:
            return self._client
        async with self._lock:
            if self._client is None:
                self._client = await create_supabase_client(self._settings)
        return self._client

    def reset(self) -> None:
        """Drop the shared client (for testing or after sign-out)."""
        self._client = None


class UserClientManager(SupabaseClientManager):
    """Client manager acting for one signed-in user.

    Built per API request, so queries run under the caller's row-level
    security policies instead of the anonymous role. The client is created on
    first use; set_access_token() switches it to a refreshed token.

    Args:
        settings: Supabase settings
        access_token: The caller's access token
        client: Optional pre-built client (tests)
    """

    def __init__(
        self,
        settings: SupabaseSettings,
        access_token: str,
        client: Optional[AsyncClient] = None,
    ) -> None:
        super().__init__(settings, client)
        self._access_token = access_token

    @property
    def access_token(self) -> str:
        return self._access_token

    async def get_client(self) -> AsyncClient:
        if self._client is not None:
            return self._client
        async with self._lock:
            if self._client is None:
                self._client = await create_supabase_client(
                    self._settings, access_token=self._access_token
                )
        return self._client

    def set_access_token(self, access_token: str) -> None:
        """Send ``access_token`` with every later query."""
        self._access_token = access_token
        if self._client is not None:
            self._client.postgrest.auth(access_token)
