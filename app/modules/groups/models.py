"""Group sharing models.

A group links two household members: the author who created it and, once an
invite code is redeemed, the invited user. Membership itself is the
``users.group_id`` column.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class Group:
    """Row of the ``groups`` table."""

    id: str
    group_name: str
    author_user_id: str
    description: Optional[str] = None
    invited_user_id: Optional[str] = None
    created_at: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)


@dataclass
class GroupMember:
    """A user in a group; ``is_admin`` marks the group's author."""

    id: str
    email: str
    username: Optional[str] = None
    created_at: Optional[str] = None
    is_admin: bool = False


def group_from_dict(row: Dict[str, Any]) -> Group:
    return Group(
        id=row["id"],
        group_name=row.get("group_name", ""),
        author_user_id=row.get("author_user_id", ""),
        description=row.get("description"),
        invited_user_id=row.get("invited_user_id"),
        created_at=row.get("created_at"),
        raw=row,
    )


def member_from_dict(row: Dict[str, Any], author_user_id: Optional[str]) -> GroupMember:
    return GroupMember(
        id=row["id"],
        email=row.get("email", ""),
        username=row.get("username"),
        created_at=row.get("created_at"),
        is_admin=author_user_id is not None and row["id"] == author_user_id,
    )
