"""Users module: profile and notification preferences."""

from modules.users.models import NotificationSettings, UserProfile
from modules.users.service import UserService

__all__ = ["NotificationSettings", "UserProfile", "UserService"]
