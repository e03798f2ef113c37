from typing import Optional

from fastapi import APIRouter, Header, Request, status

from api.dependencies.rate_limits import get_limiter
from api.dependencies.services import CurrentUserIdDep, WishlistServiceDep
from api.responses import not_completed, serialize, serialize_many
from modules.wishlist.schemas import WishlistItemCreate, WishlistItemUpdate

router = APIRouter(prefix="/wishlist", tags=["Wishlist"])
limiter = get_limiter()


@router.get("")
@limiter.limit("60/minute")
async def list_wishlist(
    request: Request, user_id: CurrentUserIdDep, wishlist: WishlistServiceDep
):  # pylint: disable=unused-argument
    return serialize_many(await wishlist.fetch_wishlist(user_id))


@router.post("", status_code=status.HTTP_201_CREATED)
@limiter.limit("30/minute")
async def create_wishlist_item(
    request: Request,
    item: WishlistItemCreate,
    user_id: CurrentUserIdDep,
    wishlist: WishlistServiceDep,
    idempotency_key: Optional[str] = Header(default=None, alias="Idempotency-Key"),
):  # pylint: disable=unused-argument
    created = await wishlist.add_wishlist_item(
        user_id, item.model_dump(mode="json"), request_id=idempotency_key
    )
    if created is None:
        raise not_completed("add the wishlist item")
    return serialize(created)


@router.patch("/{item_id}")
@limiter.limit("30/minute")
async def update_wishlist_item(
    request: Request,
    item_id: str,
    updates: WishlistItemUpdate,
    user_id: CurrentUserIdDep,
    wishlist: WishlistServiceDep,
):  # pylint: disable=unused-argument
    if not await wishlist.update_wishlist_item(
        user_id, item_id, updates.model_dump(mode="json", exclude_unset=True)
    ):
        raise not_completed("update the wishlist item")
    return {"success": True}


@router.delete("/{item_id}")
@limiter.limit("30/minute")
async def delete_wishlist_item(
    request: Request,
    item_id: str,
    user_id: CurrentUserIdDep,
    wishlist: WishlistServiceDep,
):  # pylint: disable=unused-argument
    if not await wishlist.delete_wishlist_item(user_id, item_id):
        raise not_completed("delete the wishlist item")
    return {"success": True}
