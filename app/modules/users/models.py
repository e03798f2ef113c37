"""User profile and notification preference models."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class UserProfile:
    """Row of the ``users`` table.

    Attributes:
        id: User id (same as the auth user id)
        email: Sign-in email
        username: Display name, if set
        salary_day: Day of month the user is paid; drives pay periods
        group_id: Household group the user belongs to, if any
    """

    id: str
    email: str
    username: Optional[str] = None
    salary_day: int = 1
    group_id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)


@dataclass
class NotificationSettings:
    id: str
    todo: bool = True
    system: bool = True
    event: bool = True
    created_at: Optional[str] = None


def profile_from_dict(row: Dict[str, Any]) -> UserProfile:
    return UserProfile(
        id=row["id"],
        email=row.get("email", ""),
        username=row.get("username"),
        salary_day=row.get("salary_day") or 1,
        group_id=row.get("group_id"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
        raw=row,
    )


def notification_settings_from_dict(row: Dict[str, Any]) -> NotificationSettings:
    return NotificationSettings(
        id=row["id"],
        todo=bool(row.get("todo", True)),
        system=bool(row.get("system", True)),
        event=bool(row.get("event", True)),
        created_at=row.get("created_at"),
    )
