"""User profile and notification settings service."""

from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from infrastructure.persistence import TableService
from infrastructure.resilience.models import OperationKind
from modules.users.models import (
    NotificationSettings,
    UserProfile,
    notification_settings_from_dict,
    profile_from_dict,
)

USERS_TABLE = "users"
NOTIFICATION_SETTINGS_TABLE = "notification_settings"


class UserService(TableService):
    """Reads and updates the signed-in user's own rows.

    Args:
        client_manager: Shared Supabase client manager
        executor: Resilient executor
        clock: Returns the current UTC time (injectable for tests)
    """

    namespace = "users"

    def __init__(
        self,
        client_manager,
        executor,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        super().__init__(client_manager, executor)
        self._clock = clock

    async def _fetch_one(self, table: str, user_id: str, operation_name: str):
        return await self.run(
            lambda client: client.table(table)
            .select("*")
            .eq("id", user_id)
            .maybe_single(),
            operation_name=operation_name,
        )

    async def _update_one(
        self, table: str, user_id: str, payload: Dict[str, Any], operation_name: str
    ):
        rows = await self.run(
            lambda client: client.table(table).update(payload).eq("id", user_id),
            operation_name=operation_name,
            kind=OperationKind.IDEMPOTENT_WRITE,
        )
        return self.first_row(rows)

    async def fetch_user_profile(self, user_id: str) -> Optional[UserProfile]:
        row = await self._fetch_one(USERS_TABLE, user_id, "fetch_user_profile")
        return profile_from_dict(row) if row else None

    async def update_user_profile(
        self, user_id: str, updates: Dict[str, Any]
    ) -> Optional[UserProfile]:
        """Update profile columns and stamp ``updated_at``."""
        payload = {
            **self.writable(updates),
            "updated_at": self._clock().isoformat(),
        }
        row = await self._update_one(
            USERS_TABLE, user_id, payload, "update_user_profile"
        )
        return profile_from_dict(row) if row else None

    async def fetch_notification_settings(
        self, user_id: str
    ) -> Optional[NotificationSettings]:
        row = await self._fetch_one(
            NOTIFICATION_SETTINGS_TABLE, user_id, "fetch_notification_settings"
        )
        return notification_settings_from_dict(row) if row else None

    async def update_notification_settings(
        self, user_id: str, updates: Dict[str, Any]
    ) -> Optional[NotificationSettings]:
        row = await self._update_one(
            NOTIFICATION_SETTINGS_TABLE,
            user_id,
            self.writable(updates),
            "update_notification_settings",
        )
        return notification_settings_from_dict(row) if row else None
