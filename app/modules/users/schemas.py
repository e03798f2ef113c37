"""API request schemas for the profile endpoints.

Group membership is not part of the profile update; it changes only through
the group endpoints.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ProfileUpdate(BaseModel):
    username: Optional[str] = Field(default=None, max_length=50)
    salary_day: Optional[int] = Field(default=None, ge=1, le=31)


class NotificationSettingsUpdate(BaseModel):
    todo: Optional[bool] = None
    system: Optional[bool] = None
    event: Optional[bool] = None
