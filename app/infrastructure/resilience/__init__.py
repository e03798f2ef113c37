"""Resilience patterns for data-access calls.

This module contains the resilient executor that wraps every call to the
data store with bounded retry, exponential backoff and session recovery.
"""

from infrastructure.resilience.config import RetryPolicy
from infrastructure.resilience.executor import (
    ResilientExecutor,
    calculate_backoff_delay,
    retry_with_backoff,
)
from infrastructure.resilience.models import ExecutorError, OperationKind

__all__ = [
    "ResilientExecutor",
    "RetryPolicy",
    "OperationKind",
    "ExecutorError",
    "calculate_backoff_delay",
    "retry_with_backoff",
]
