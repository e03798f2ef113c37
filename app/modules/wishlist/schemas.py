"""API request schemas for the wishlist endpoints."""

from typing import Optional

from pydantic import BaseModel, Field


class WishlistItemCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    price: float = Field(..., ge=0)


class WishlistItemUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    price: Optional[float] = Field(default=None, ge=0)
