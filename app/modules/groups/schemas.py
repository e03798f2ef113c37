"""API request schemas for the group endpoints."""

from typing import Optional

from pydantic import BaseModel, Field


class GroupCreate(BaseModel):
    group_name: str = Field(..., min_length=1, max_length=50)
    description: Optional[str] = Field(default=None, max_length=200)


class GroupUpdate(BaseModel):
    group_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    description: Optional[str] = Field(default=None, max_length=200)


class JoinGroupRequest(BaseModel):
    invite_code: str = Field(..., min_length=1, max_length=32)
