"""
Command argument validation.

Runs before any network or filesystem work so that a malformed invocation
fails fast with EXIT_INVALID_ARGUMENT.
"""

import re
from typing import Optional

from validation.errors import ArgumentValidationError

_NUMERIC = re.compile(r"[0-9]+")


def is_numeric(value: str) -> bool:
    """True if value consists of ASCII decimal digits only (no sign, no spaces)."""
    return bool(_NUMERIC.fullmatch(value))


def require_path(path: Optional[str]) -> str:
    """Return path, or raise if it is missing or blank."""
    if path is None or not path.strip():
        raise ArgumentValidationError("Please provide a path")
    return path


def require_bucket_id(bucket_id: Optional[str]) -> str:
    """Return bucket_id, or raise if it is missing or not numeric."""
    if bucket_id is None or not bucket_id:
        raise ArgumentValidationError("Please provide a bucket id")
    if not is_numeric(bucket_id):
        raise ArgumentValidationError(f"Bucket id must be numeric, got {bucket_id!r}")
    return bucket_id


def optional_bag_filter(bag_filter: Optional[str]) -> Optional[str]:
    """Return bag_filter unchanged (None allowed), or raise if it is not numeric."""
    if bag_filter is None:
        return None
    if not is_numeric(bag_filter):
        raise ArgumentValidationError(f"Bag filter must be numeric, got {bag_filter!r}")
    return bag_filter
