"""
String normalization helpers shared across pyforestry.
"""
from typing import Optional

__all__ = ['normalize_code']


def normalize_code(code: Optional[str]) -> str:
    """Normalize a code string for lookups.

    Strips surrounding whitespace and upper-cases the value so that
    "oak", " Oak " and "OAK" all compare equal.

    Args:
        code: Raw code string (may be None)

    Returns:
        Normalized code, or an empty string for None
    """
    if code is None:
        return ""
    return str(code).strip().upper()
