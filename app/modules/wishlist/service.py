"""Wishlist service."""

from typing import Any, Dict, List, Optional

from infrastructure.persistence import TableService
from infrastructure.resilience.models import OperationKind
from modules.wishlist.models import WishlistItem, wishlist_item_from_dict

WISHLIST_TABLE = "wishlist"


class WishlistService(TableService):
    namespace = "wishlist"

    async def fetch_wishlist(self, user_id: str) -> List[WishlistItem]:
        rows = await self.run(
            lambda client: client.table(WISHLIST_TABLE)
            .select("*")
            .eq("created_by", user_id)
            .order("created_at", desc=True),
            operation_name="fetch_wishlist",
        )
        return [wishlist_item_from_dict(row) for row in rows or []]

    async def add_wishlist_item(
        self,
        user_id: str,
        data: Dict[str, Any],
        request_id: Optional[str] = None,
    ) -> Optional[WishlistItem]:
        payload = {**self.writable(data), "created_by": user_id}
        row = await self.insert(
            WISHLIST_TABLE,
            payload,
            user_id=user_id,
            operation_name="add_wishlist_item",
            request_id=request_id,
        )
        return wishlist_item_from_dict(row) if row else None

    async def update_wishlist_item(
        self, user_id: str, item_id: str, data: Dict[str, Any]
    ) -> bool:
        payload = self.writable(data)
        rows = await self.run(
            lambda client: client.table(WISHLIST_TABLE)
            .update(payload)
            .eq("id", item_id)
            .eq("created_by", user_id),
            operation_name="update_wishlist_item",
            kind=OperationKind.IDEMPOTENT_WRITE,
        )
        return rows is not None

    async def delete_wishlist_item(self, user_id: str, item_id: str) -> bool:
        rows = await self.run(
            lambda client: client.table(WISHLIST_TABLE)
            .delete()
            .eq("id", item_id)
            .eq("created_by", user_id),
            operation_name="delete_wishlist_item",
            kind=OperationKind.IDEMPOTENT_WRITE,
        )
        return rows is not None
