"""Integration settings __init__ - exports all integration settings."""

from infrastructure.configuration.integrations.supabase import SupabaseSettings

__all__ = [
    "SupabaseSettings",
]
