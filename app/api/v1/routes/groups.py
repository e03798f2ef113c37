from typing import Optional

from fastapi import APIRouter, Header, HTTPException, Request, status

from api.dependencies.rate_limits import get_limiter
from api.dependencies.services import CurrentUserIdDep, GroupServiceDep
from api.responses import not_completed, not_found, serialize, serialize_many
from modules.groups import (
    AlreadyInGroupError,
    GroupPermissionError,
    InvalidInviteCodeError,
)
from modules.groups.schemas import GroupCreate, GroupUpdate, JoinGroupRequest

router = APIRouter(prefix="/groups", tags=["Groups"])
limiter = get_limiter()


@router.get("/me")
@limiter.limit("60/minute")
async def get_my_group(
    request: Request, user_id: CurrentUserIdDep, groups: GroupServiceDep
):  # pylint: disable=unused-argument
    group = await groups.fetch_user_group(user_id)
    if group is None:
        raise not_found("Group")
    return serialize(group)


@router.post("", status_code=status.HTTP_201_CREATED)
@limiter.limit("10/minute")
async def create_group(
    request: Request,
    group: GroupCreate,
    user_id: CurrentUserIdDep,
    groups: GroupServiceDep,
    idempotency_key: Optional[str] = Header(default=None, alias="Idempotency-Key"),
):  # pylint: disable=unused-argument
    try:
        created = await groups.create_user_group(
            user_id, group.model_dump(mode="json"), request_id=idempotency_key
        )
    except AlreadyInGroupError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    if created is None:
        raise not_completed("create the group")
    return serialize(created)


@router.patch("/{group_id}")
@limiter.limit("30/minute")
async def update_group(
    request: Request,
    group_id: str,
    updates: GroupUpdate,
    user_id: CurrentUserIdDep,
    groups: GroupServiceDep,
):  # pylint: disable=unused-argument
    """Rename or describe a group. Only its author can; others get 404."""
    updated = await groups.update_user_group(
        user_id, group_id, updates.model_dump(mode="json", exclude_unset=True)
    )
    if updated is None:
        raise not_found("Group")
    return serialize(updated)


@router.get("/{group_id}/members")
@limiter.limit("60/minute")
async def list_members(
    request: Request,
    group_id: str,
    user_id: CurrentUserIdDep,
    groups: GroupServiceDep,
):  # pylint: disable=unused-argument
    return serialize_many(await groups.fetch_group_members(group_id))


@router.post("/{group_id}/invites", status_code=status.HTTP_201_CREATED)
@limiter.limit("10/minute")
async def create_invite(
    request: Request,
    group_id: str,
    user_id: CurrentUserIdDep,
    groups: GroupServiceDep,
    idempotency_key: Optional[str] = Header(default=None, alias="Idempotency-Key"),
):  # pylint: disable=unused-argument
    code = await groups.generate_invite_code(
        user_id, group_id, request_id=idempotency_key
    )
    if code is None:
        raise not_completed("create the invite code")
    return {"code": code}


@router.post("/join")
@limiter.limit("10/minute")
async def join_group(
    request: Request,
    join: JoinGroupRequest,
    user_id: CurrentUserIdDep,
    groups: GroupServiceDep,
):  # pylint: disable=unused-argument
    try:
        joined = await groups.join_group_with_invite_code(user_id, join.invite_code)
    except AlreadyInGroupError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    except InvalidInviteCodeError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)
        ) from e
    if not joined:
        raise not_completed("join the group")
    return {"success": True}


@router.delete("/{group_id}/members/{member_id}")
@limiter.limit("30/minute")
async def remove_member(
    request: Request,
    group_id: str,
    member_id: str,
    user_id: CurrentUserIdDep,
    groups: GroupServiceDep,
):  # pylint: disable=unused-argument
    try:
        removed = await groups.remove_group_member(user_id, group_id, member_id)
    except GroupPermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e)) from e
    if not removed:
        raise not_completed("remove the member")
    return {"success": True}


@router.post("/me/leave")
@limiter.limit("10/minute")
async def leave_group(
    request: Request, user_id: CurrentUserIdDep, groups: GroupServiceDep
):  # pylint: disable=unused-argument
    """Leave the caller's group; when the author leaves the group is dissolved."""
    group = await groups.fetch_user_group(user_id)
    if group is None:
        raise not_found("Group")
    if not await groups.leave_group(user_id, group):
        raise not_completed("leave the group")
    return {"success": True}
