"""Response helpers shared by the v1 routes."""

from dataclasses import asdict
from typing import Any, Dict, Iterable, List

from fastapi import HTTPException, status


def serialize(item: Any) -> Dict[str, Any]:
    """Convert a domain dataclass to a response dict, without its raw row."""
    data = asdict(item)
    data.pop("raw", None)
    return data


def serialize_many(items: Iterable[Any]) -> List[Dict[str, Any]]:
    return [serialize(item) for item in items]


def not_found(resource: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND, detail=f"{resource} not found"
    )


def not_completed(action: str) -> HTTPException:
    """503 for an operation the data store did not complete after retries."""
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=f"Could not {action}, please try again",
    )
