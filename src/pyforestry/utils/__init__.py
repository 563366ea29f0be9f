"""
Utility functions for pyforestry.

This module provides common utilities used throughout the codebase.
"""

from .string_utils import normalize_code

__all__ = [
    "normalize_code",
]
