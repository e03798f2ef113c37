"""Group sharing service: create a household group, invite and manage members."""

import secrets
import string
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional

import structlog

from infrastructure.persistence import TableService
from infrastructure.resilience.models import OperationKind
from modules.groups.errors import (
    AlreadyInGroupError,
    GroupPermissionError,
    InvalidInviteCodeError,
)
from modules.groups.models import Group, GroupMember, group_from_dict, member_from_dict

logger = structlog.get_logger()

USERS_TABLE = "users"
GROUPS_TABLE = "groups"
INVITES_TABLE = "group_invites"

INVITE_CODE_LENGTH = 8
INVITE_CODE_ALPHABET = string.ascii_uppercase + string.digits
INVITE_TTL = timedelta(days=7)

# Set by the service, never taken from a caller's payload
GROUP_MANAGED_FIELDS = frozenset({"author_user_id", "invited_user_id"})


def new_invite_code() -> str:
    return "".join(
        secrets.choice(INVITE_CODE_ALPHABET) for _ in range(INVITE_CODE_LENGTH)
    )


class GroupService(TableService):
    """Group membership for household sharing.

    Membership rules raise GroupError subclasses; data-store failures fall
    back to ``None``/``False``/``[]`` like the other services.

    Args:
        client_manager: Supabase client manager
        executor: Resilient executor
        clock: Returns the current UTC time (injectable for tests)
        code_factory: Generates invite codes (injectable for tests)
    """

    namespace = "groups"

    def __init__(
        self,
        client_manager,
        executor,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
        code_factory: Callable[[], str] = new_invite_code,
    ):
        super().__init__(client_manager, executor)
        self._clock = clock
        self._code_factory = code_factory

    @classmethod
    def group_writable(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        return {
            k: v for k, v in cls.writable(data).items() if k not in GROUP_MANAGED_FIELDS
        }

    async def _fetch_membership(self, user_id: str):
        """Read ``users.group_id``; the result's data is the row or None."""
        return await self.run_result(
            lambda client: client.table(USERS_TABLE)
            .select("group_id")
            .eq("id", user_id)
            .maybe_single(),
            operation_name="fetch_group_membership",
        )

    async def _set_membership(
        self, user_id: str, group_id: Optional[str], operation_name: str
    ) -> bool:
        rows = await self.run(
            lambda client: client.table(USERS_TABLE)
            .update({"group_id": group_id})
            .eq("id", user_id),
            operation_name=operation_name,
            kind=OperationKind.IDEMPOTENT_WRITE,
        )
        return rows is not None

    async def fetch_user_group(self, user_id: str) -> Optional[Group]:
        membership = await self._fetch_membership(user_id)
        group_id = (membership.data or {}).get("group_id")
        if not group_id:
            return None
        row = await self.run(
            lambda client: client.table(GROUPS_TABLE)
            .select("*")
            .eq("id", group_id)
            .maybe_single(),
            operation_name="fetch_user_group",
        )
        return group_from_dict(row) if row else None

    async def create_user_group(
        self,
        user_id: str,
        data: Dict[str, Any],
        request_id: Optional[str] = None,
    ) -> Optional[Group]:
        """Create a group authored by ``user_id`` and make them its first member.

        Raises:
            AlreadyInGroupError: If the user already belongs to a group
        """
        membership = await self._fetch_membership(user_id)
        if not membership.is_success or membership.data is None:
            return None
        if membership.data.get("group_id"):
            raise AlreadyInGroupError("User already belongs to a group")

        row = await self.insert(
            GROUPS_TABLE,
            {**self.group_writable(data), "author_user_id": user_id},
            user_id=user_id,
            operation_name="create_user_group",
            request_id=request_id,
        )
        if row is None:
            return None
        group = group_from_dict(row)

        if not await self._set_membership(user_id, group.id, "link_group_author"):
            logger.error("group_link_failed", group_id=group.id, user_id=user_id)
            await self.run(
                lambda client: client.table(GROUPS_TABLE)
                .delete()
                .eq("id", group.id)
                .eq("author_user_id", user_id),
                operation_name="discard_unlinked_group",
                kind=OperationKind.IDEMPOTENT_WRITE,
            )
            return None

        logger.info("group_created", group_id=group.id, user_id=user_id)
        return group

    async def update_user_group(
        self, user_id: str, group_id: str, updates: Dict[str, Any]
    ) -> Optional[Group]:
        """Update a group's name or description; only its author may."""
        payload = self.group_writable(updates)
        rows = await self.run(
            lambda client: client.table(GROUPS_TABLE)
            .update(payload)
            .eq("id", group_id)
            .eq("author_user_id", user_id),
            operation_name="update_user_group",
            kind=OperationKind.IDEMPOTENT_WRITE,
        )
        row = self.first_row(rows)
        return group_from_dict(row) if row else None

    async def _fetch_author(self, group_id: str) -> Optional[str]:
        row = await self.run(
            lambda client: client.table(GROUPS_TABLE)
            .select("author_user_id")
            .eq("id", group_id)
            .maybe_single(),
            operation_name="fetch_group_author",
        )
        return row.get("author_user_id") if row else None

    async def fetch_group_members(
        self, group_id: str, author_user_id: Optional[str] = None
    ) -> List[GroupMember]:
        """List a group's members, marking the author as admin.

        The author is looked up when not passed in.
        """
        rows = await self.run(
            lambda client: client.table(USERS_TABLE)
            .select("id, username, email, created_at")
            .eq("group_id", group_id),
            operation_name="fetch_group_members",
        )
        if rows is None:
            return []
        if author_user_id is None:
            author_user_id = await self._fetch_author(group_id)
        return [member_from_dict(row, author_user_id) for row in rows]

    async def generate_invite_code(
        self, user_id: str, group_id: str, request_id: Optional[str] = None
    ) -> Optional[str]:
        """Issue an invite code for ``group_id`` valid for seven days."""
        payload = {
            "group_id": group_id,
            "code": self._code_factory(),
            "created_by": user_id,
            "expires_at": (self._clock() + INVITE_TTL).isoformat(),
        }
        row = await self.insert(
            INVITES_TABLE,
            payload,
            user_id=user_id,
            operation_name="generate_invite_code",
            request_id=request_id,
        )
        if row is None:
            return None
        logger.info("group_invite_created", group_id=group_id, user_id=user_id)
        return row.get("code")

    async def join_group_with_invite_code(self, user_id: str, invite_code: str) -> bool:
        """Join the group an unused, unexpired invite code belongs to.

        Returns False when the data store fails part-way.

        Raises:
            AlreadyInGroupError: If the user already belongs to a group
            InvalidInviteCodeError: If the code is unknown, expired or used
        """
        membership = await self._fetch_membership(user_id)
        if not membership.is_success or membership.data is None:
            return False
        if membership.data.get("group_id"):
            raise AlreadyInGroupError("User already belongs to a group")

        now = self._clock().isoformat()
        invite = await self.run_result(
            lambda client: client.table(INVITES_TABLE)
            .select("id, group_id, expires_at")
            .eq("code", invite_code)
            .gt("expires_at", now)
            .is_("used_by", "null")
            .maybe_single(),
            operation_name="fetch_group_invite",
        )
        if not invite.is_success:
            return False
        if not invite.data:
            logger.info("group_invite_rejected", user_id=user_id)
            raise InvalidInviteCodeError("Invite code is invalid or expired")

        group_id = invite.data["group_id"]
        if not await self._set_membership(user_id, group_id, "join_group"):
            return False

        used = await self.run(
            lambda client: client.table(INVITES_TABLE)
            .update({"used_by": user_id, "used_at": now})
            .eq("id", invite.data["id"]),
            operation_name="mark_invite_used",
            kind=OperationKind.IDEMPOTENT_WRITE,
        )
        invited = await self.run(
            lambda client: client.table(GROUPS_TABLE)
            .update({"invited_user_id": user_id})
            .eq("id", group_id),
            operation_name="record_invited_user",
            kind=OperationKind.IDEMPOTENT_WRITE,
        )
        if used is None or invited is None:
            logger.error("group_join_incomplete", group_id=group_id, user_id=user_id)
            return False

        logger.info("group_joined", group_id=group_id, user_id=user_id)
        return True

    async def _clear_invited_user(self, group_id: str, user_id: str) -> bool:
        rows = await self.run(
            lambda client: client.table(GROUPS_TABLE)
            .update({"invited_user_id": None})
            .eq("id", group_id)
            .eq("invited_user_id", user_id),
            operation_name="clear_invited_user",
            kind=OperationKind.IDEMPOTENT_WRITE,
        )
        return rows is not None

    async def remove_group_member(
        self, admin_user_id: str, group_id: str, member_id: str
    ) -> bool:
        """Remove ``member_id`` from the group.

        Raises:
            GroupPermissionError: If the caller is not the group's author, or
                tries to remove themselves (use leave_group instead)
        """
        if member_id == admin_user_id:
            raise GroupPermissionError("The group author cannot remove themselves")

        author = await self._fetch_author(group_id)
        if author is None:
            return False
        if author != admin_user_id:
            logger.warning(
                "group_member_removal_denied", group_id=group_id, user_id=admin_user_id
            )
            raise GroupPermissionError("Only the group author can remove members")

        rows = await self.run(
            lambda client: client.table(USERS_TABLE)
            .update({"group_id": None})
            .eq("id", member_id)
            .eq("group_id", group_id),
            operation_name="remove_group_member",
            kind=OperationKind.IDEMPOTENT_WRITE,
        )
        if rows is None:
            return False
        return await self._clear_invited_user(group_id, member_id)

    async def leave_group(self, user_id: str, group: Group) -> bool:
        """Leave ``group``.

        When the author leaves, every member is released and the group is
        deleted; any other member only clears their own membership.
        """
        if user_id == group.author_user_id:
            released = await self.run(
                lambda client: client.table(USERS_TABLE)
                .update({"group_id": None})
                .eq("group_id", group.id),
                operation_name="release_group_members",
                kind=OperationKind.IDEMPOTENT_WRITE,
            )
            if released is None:
                return False
            deleted = await self.run(
                lambda client: client.table(GROUPS_TABLE)
                .delete()
                .eq("id", group.id),
                operation_name="delete_group",
                kind=OperationKind.IDEMPOTENT_WRITE,
            )
            if deleted is None:
                return False
            logger.info("group_dissolved", group_id=group.id, user_id=user_id)
            return True

        left = await self.run(
            lambda client: client.table(USERS_TABLE)
            .update({"group_id": None})
            .eq("id", user_id)
            .eq("group_id", group.id),
            operation_name="leave_group",
            kind=OperationKind.IDEMPOTENT_WRITE,
        )
        if left is None:
            return False
        logger.info("group_left", group_id=group.id, user_id=user_id)
        return await self._clear_invited_user(group.id, user_id)
