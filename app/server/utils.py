from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from infrastructure.auth.session import Session
from infrastructure.logging import get_module_logger
from infrastructure.services.providers import get_session_provider

ACCESS_TOKEN_COOKIE = "access_token"
REFRESH_TOKEN_COOKIE = "refresh_token"

logger = get_module_logger()
bearer_scheme = HTTPBearer(auto_error=False)


def get_access_token(request: Request) -> Optional[str]:
    """Read the access token from the Authorization header or the cookie."""
    header = request.headers.get("authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() == "bearer" and token:
        return token.strip()
    return request.cookies.get(ACCESS_TOKEN_COOKIE) or None


async def get_request_user_id(request: Request) -> Optional[str]:
    """Return the ID of the user the request's access token belongs to.

    Returns None when there is no token, the token is rejected, or the
    Supabase client is not configured.
    """
    token = get_access_token(request)
    if not token:
        return None
    try:
        return await get_session_provider().verify_access_token(token)
    except ValueError as e:
        logger.error("session_check_unavailable", error=str(e))
        return None


async def is_request_authenticated(request: Request) -> bool:
    return await get_request_user_id(request) is not None


async def get_current_session(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Session:
    """FastAPI dependency resolving the caller's session or raising 401.

    The access token comes from the bearer header or cookie; the refresh
    token, when present, from the refresh_token cookie.
    """
    user_id = await get_request_user_id(request)
    if user_id is None:
        logger.info(
            "unauthenticated_api_request",
            path=request.url.path,
            bearer_present=credentials is not None,
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return Session(
        access_token=get_access_token(request),
        refresh_token=request.cookies.get(REFRESH_TOKEN_COOKIE, ""),
        user_id=user_id,
    )


async def get_current_user_id(session: Session = Depends(get_current_session)) -> str:
    """FastAPI dependency resolving the signed-in user's ID."""
    return session.user_id
