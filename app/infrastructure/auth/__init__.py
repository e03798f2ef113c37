"""Infrastructure auth module - sessions and auth redirects.

Exports:
    Session: Authenticated session issued by the auth provider
    RefreshResult: Outcome of a session refresh
    SessionProvider: Protocol of the injected authentication collaborator
    is_authenticated: Check whether a provider holds a signed-in session
    resolve_auth_redirect: Redirect decision for a path and auth state
    is_protected_path: Whether a path requires a signed-in user
"""

from infrastructure.auth.session import (
    RefreshResult,
    Session,
    SessionProvider,
    is_authenticated,
)
from infrastructure.auth.routing import is_protected_path, resolve_auth_redirect

__all__ = [
    "Session",
    "RefreshResult",
    "SessionProvider",
    "is_authenticated",
    "resolve_auth_redirect",
    "is_protected_path",
]
