"""
Local argument checks. Everything here runs before a request is built, so a
rejected argument never costs a network round trip.
"""
import uuid
from typing import Any, Type, TypeVar
from enum import Enum

from .exceptions import ValidationError

E = TypeVar("E", bound=Enum)

# Characters that would change the meaning of a path segment
_UNSAFE_SEGMENT_CHARS = set("/?#%\\") | {" ", "\t", "\n", "\r"}


def require_uuid(value: Any, field: str) -> uuid.UUID:
    """
    Parse a UUID given as ``uuid.UUID`` or string.

    Raises:
        ValidationError: If the value is not a well-formed UUID
    """
    if isinstance(value, uuid.UUID):
        return value
    if not isinstance(value, str):
        raise ValidationError(f"invalid {field}: expected UUID, got {type(value).__name__}")
    try:
        return uuid.UUID(value.strip())
    except ValueError:
        raise ValidationError(f"invalid {field}: {value!r} is not a valid UUID")


def require_segment(value: Any, field: str) -> str:
    """
    Validate an opaque identifier that is interpolated into a URL path.

    Raises:
        ValidationError: If the value is empty or contains path/query syntax
    """
    if isinstance(value, uuid.UUID):
        return str(value)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required")
    if any(ch in _UNSAFE_SEGMENT_CHARS for ch in value):
        raise ValidationError(f"invalid {field}: {value!r}")
    # dot segments are collapsed by URL normalisation
    if value in (".", ".."):
        raise ValidationError(f"invalid {field}: {value!r}")
    return value


def require_text(value: Any, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required")
    return value


def require_choice(value: Any, enum_cls: Type[E], field: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"invalid {field} {value!r} (must be one of: {allowed})")


def require_range(value: Any, low: int, high: int, field: str) -> int:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field} must be an integer")
    if not low <= value <= high:
        raise ValidationError(f"{field} must be between {low} and {high} (got: {value})")
    return value
