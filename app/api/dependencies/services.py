"""Request-scoped domain services.

Every API request gets its own Supabase client acting as the caller, so
queries run under the caller's row-level security policies, and its own
executor whose session provider refreshes the caller's session. Retry policy
and idempotency cache stay application-scoped. FastAPI caches dependencies
per request, so all services of one request share the same client.

Usage:
    @router.get("/wishlist")
    async def list_items(request: Request, user_id: CurrentUserIdDep,
                         wishlist: WishlistServiceDep):
        return await wishlist.fetch_wishlist(user_id)
"""

from typing import Annotated

from fastapi import Depends

from infrastructure.auth.session import Session
from infrastructure.clients.supabase import RequestSessionProvider, UserClientManager
from infrastructure.resilience.executor import ResilientExecutor
from infrastructure.services import SettingsDep
from infrastructure.services.providers import get_idempotency_service, get_retry_policy
from modules.finance import FinanceService
from modules.groups import GroupService
from modules.users import UserService
from modules.wishlist import WishlistService
from server.utils import get_current_session, get_current_user_id

CurrentSessionDep = Annotated[Session, Depends(get_current_session)]
CurrentUserIdDep = Annotated[str, Depends(get_current_user_id)]


def get_user_client_manager(
    settings: SettingsDep, session: CurrentSessionDep
) -> UserClientManager:
    return UserClientManager(settings.supabase, session.access_token)


UserClientManagerDep = Annotated[UserClientManager, Depends(get_user_client_manager)]


def get_request_session_provider(
    session: CurrentSessionDep, client_manager: UserClientManagerDep
) -> RequestSessionProvider:
    return RequestSessionProvider(client_manager, session)


def get_request_executor(
    session_provider: Annotated[
        RequestSessionProvider, Depends(get_request_session_provider)
    ],
) -> ResilientExecutor:
    """Executor for one request: the caller's session, the app-wide policy."""
    return ResilientExecutor(
        session_provider=session_provider,
        policy=get_retry_policy(),
        idempotency=get_idempotency_service(),
    )


RequestExecutorDep = Annotated[ResilientExecutor, Depends(get_request_executor)]


def get_finance_service(
    client_manager: UserClientManagerDep, executor: RequestExecutorDep
) -> FinanceService:
    return FinanceService(client_manager, executor)


def get_wishlist_service(
    client_manager: UserClientManagerDep, executor: RequestExecutorDep
) -> WishlistService:
    return WishlistService(client_manager, executor)


def get_user_service(
    client_manager: UserClientManagerDep, executor: RequestExecutorDep
) -> UserService:
    return UserService(client_manager, executor)


def get_group_service(
    client_manager: UserClientManagerDep, executor: RequestExecutorDep
) -> GroupService:
    return GroupService(client_manager, executor)


FinanceServiceDep = Annotated[FinanceService, Depends(get_finance_service)]
WishlistServiceDep = Annotated[WishlistService, Depends(get_wishlist_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
GroupServiceDep = Annotated[GroupService, Depends(get_group_service)]

__all__ = [
    "CurrentSessionDep",
    "CurrentUserIdDep",
    "UserClientManagerDep",
    "RequestExecutorDep",
    "FinanceServiceDep",
    "WishlistServiceDep",
    "UserServiceDep",
    "GroupServiceDep",
    "get_user_client_manager",
    "get_request_session_provider",
    "get_request_executor",
    "get_finance_service",
    "get_wishlist_service",
    "get_user_service",
    "get_group_service",
]
