"""Operation result types and status enums.

This module contains the standardized result type for data-access calls,
including status enums, the result dataclass, and the error classifier used
by the retry policy.
"""

from infrastructure.operations.classifiers import (
    classify_error,
    error_code,
    error_message,
)
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import ErrorKind, OperationStatus

__all__ = [
    "OperationResult",
    "OperationStatus",
    "ErrorKind",
    "classify_error",
    "error_code",
    "error_message",
]
