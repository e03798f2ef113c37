"""Wishlist module."""

from modules.wishlist.models import WishlistItem
from modules.wishlist.service import WishlistService

__all__ = ["WishlistItem", "WishlistService"]
