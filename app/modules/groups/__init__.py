"""Groups module: household sharing between two users."""

from modules.groups.errors import (
    AlreadyInGroupError,
    GroupError,
    GroupPermissionError,
    InvalidInviteCodeError,
)
from modules.groups.models import Group, GroupMember
from modules.groups.service import GroupService

__all__ = [
    "AlreadyInGroupError",
    "Group",
    "GroupError",
    "GroupMember",
    "GroupPermissionError",
    "GroupService",
    "InvalidInviteCodeError",
]
