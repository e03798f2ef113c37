"""Errors for the groups module."""


class GroupError(Exception):
    """Base exception for group membership rules.

    Raised when a request breaks a membership rule, as opposed to the data
    store failing (which services report as ``None``/``False``).
    """


class AlreadyInGroupError(GroupError):
    """Raised when a user who already belongs to a group creates or joins one."""


class InvalidInviteCodeError(GroupError):
    """Raised when an invite code is unknown, expired or already used."""


class GroupPermissionError(GroupError):
    """Raised when a member other than the group's author manages members."""
