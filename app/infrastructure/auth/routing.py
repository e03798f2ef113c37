"""Auth redirect rules for page routes.

Signed-in users are sent away from the login/signup pages, and signed-out
users are sent to the login page from any protected path. The only input is
whether the request is authenticated.
"""

from typing import Optional, Tuple

LOGIN_PATH = "/login"
HOME_PATH = "/"
AUTH_PAGES: Tuple[str, ...] = ("/login", "/signup")
PROTECTED_PATHS: Tuple[str, ...] = (
    "/",
    "/todo",
    "/calendar",
    "/settings",
    "/input",
    "/fixed-costs",
)


def is_protected_path(path: str) -> bool:
    """Check whether a path requires an authenticated user.

    "/" only matches exactly; every other protected path also covers its
    sub-paths (e.g. "/settings/finance/budget").
    """
    for protected in PROTECTED_PATHS:
        if path == protected:
            return True
        if protected != HOME_PATH and path.startswith(protected + "/"):
            return True
    return False


def resolve_auth_redirect(path: str, authenticated: bool) -> Optional[str]:
    """Return the path to redirect to, or None to let the request through.

    Args:
        path: Request path
        authenticated: Whether the request carries a valid session

    Returns:
        "/" for signed-in users on an auth page, "/login" for signed-out users
        on a protected path, otherwise None

    Example:
        >>> resolve_auth_redirect("/settings/group", authenticated=False)
        '/login'
        >>> resolve_auth_redirect("/login", authenticated=True)
        '/'
    """
    if authenticated and path in AUTH_PAGES:
        return HOME_PATH
    if not authenticated and is_protected_path(path):
        return LOGIN_PATH
    return None
