from fastapi import APIRouter, Request

from api.dependencies.rate_limits import get_limiter
from api.dependencies.services import CurrentUserIdDep, UserServiceDep
from api.responses import not_completed, not_found, serialize
from modules.users.schemas import NotificationSettingsUpdate, ProfileUpdate

router = APIRouter(prefix="/users/me", tags=["Users"])
limiter = get_limiter()


@router.get("")
@limiter.limit("60/minute")
async def get_profile(
    request: Request, user_id: CurrentUserIdDep, users: UserServiceDep
):  # pylint: disable=unused-argument
    profile = await users.fetch_user_profile(user_id)
    if profile is None:
        raise not_found("Profile")
    return serialize(profile)


@router.patch("")
@limiter.limit("30/minute")
async def update_profile(
    request: Request,
    updates: ProfileUpdate,
    user_id: CurrentUserIdDep,
    users: UserServiceDep,
):  # pylint: disable=unused-argument
    profile = await users.update_user_profile(
        user_id, updates.model_dump(mode="json", exclude_unset=True)
    )
    if profile is None:
        raise not_completed("update the profile")
    return serialize(profile)


@router.get("/notifications")
@limiter.limit("60/minute")
async def get_notification_settings(
    request: Request, user_id: CurrentUserIdDep, users: UserServiceDep
):  # pylint: disable=unused-argument
    settings = await users.fetch_notification_settings(user_id)
    if settings is None:
        raise not_found("Notification settings")
    return serialize(settings)


@router.patch("/notifications")
@limiter.limit("30/minute")
async def update_notification_settings(
    request: Request,
    updates: NotificationSettingsUpdate,
    user_id: CurrentUserIdDep,
    users: UserServiceDep,
):  # pylint: disable=unused-argument
    settings = await users.update_notification_settings(
        user_id, updates.model_dump(mode="json", exclude_unset=True)
    )
    if settings is None:
        raise not_completed("update the notification settings")
    return serialize(settings)
