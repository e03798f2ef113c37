"""Persistence layer for user-owned rows in the data store.

Provides the base class shared by domain services that read and write a
Supabase table through the resilient executor.
"""

from infrastructure.persistence.service import PROTECTED_FIELDS, TableService

__all__ = ["PROTECTED_FIELDS", "TableService"]
