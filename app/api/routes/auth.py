from fastapi import APIRouter, Request

from api.dependencies.rate_limits import get_limiter
from infrastructure.auth.routing import resolve_auth_redirect
from server.utils import get_request_user_id

router = APIRouter(prefix="/auth", tags=["Authentication"])
limiter = get_limiter()


@router.get("/session")
@limiter.limit("30/minute")
async def get_session_status(request: Request, path: str = "/"):
    """Report whether the request is signed in and where ``path`` would redirect.

    Lets a client-rendered UI apply the same redirect rules as the server.
    """
    user_id = await get_request_user_id(request)
    authenticated = user_id is not None
    return {
        "authenticated": authenticated,
        "user_id": user_id,
        "redirect_to": resolve_auth_redirect(path, authenticated),
    }
