"""Session types and the session provider protocol.

The authentication collaborator owns sessions; the rest of the application
only needs to read the current session, ask for a refresh, and sign out.
Providers are injected (see infrastructure.services.providers) rather than
reached through a module-level client.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol, runtime_checkable

import structlog

logger = structlog.get_logger()


@dataclass(frozen=True)
class Session:
    """Authenticated session issued by the auth provider.

    Attributes:
        access_token: Bearer token sent to the data store
        refresh_token: Token used to obtain a new access token
        user_id: ID of the signed-in user
        expires_at: When the access token expires, if known
    """

    access_token: str
    refresh_token: str
    user_id: Optional[str] = None
    expires_at: Optional[datetime] = None

    def __repr__(self) -> str:
        return f"Session(user_id={self.user_id!r}, expires_at={self.expires_at!r})"


@dataclass(frozen=True)
class RefreshResult:
    """Outcome of a session refresh.

    ``session`` is None when the session can no longer be refreshed
    (for example the refresh token expired) and the user must sign in again.
    """

    session: Optional[Session] = None

    @property
    def is_refreshed(self) -> bool:
        return self.session is not None


@runtime_checkable
class SessionProvider(Protocol):
    """Capability interface of the authentication collaborator.

    Contract:
        - refresh_session() is safe to call while the current session is still
          valid (it behaves like a successful no-op)
        - refresh_session() returns RefreshResult(session=None) rather than
          raising when a refresh is impossible
    """

    async def get_session(self) -> Optional[Session]:
        """Return the current session, or None when signed out."""
        ...

    async def refresh_session(self) -> RefreshResult:
        """Exchange the refresh token for a new session."""
        ...

    async def sign_out(self) -> None:
        """End the current session."""
        ...


async def is_authenticated(provider: SessionProvider) -> bool:
    """Return True when the provider holds a session with a user.

    Provider errors are logged and treated as "not authenticated".
    """
    try:
        session = await provider.get_session()
    except Exception as e:
        logger.error("auth_session_check_failed", error=str(e))
        return False
    return bool(session is not None and session.user_id)
