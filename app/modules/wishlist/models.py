"""Wishlist data model."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class WishlistItem:
    """Something a user is saving up for."""

    id: str
    name: str
    price: float
    created_by: Optional[str] = None
    created_at: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)


def wishlist_item_from_dict(row: Dict[str, Any]) -> WishlistItem:
    return WishlistItem(
        id=row["id"],
        name=row.get("name", ""),
        price=row.get("price") or 0,
        created_by=row.get("created_by"),
        created_at=row.get("created_at"),
        raw=row,
    )
