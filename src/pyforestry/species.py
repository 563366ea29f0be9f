"""
Tree species enumeration for type-safe species handling.

This module provides a TreeSpecies enum that inherits from (str, Enum) allowing
it to be used as a string wherever a species tag is expected, while providing
type safety and validation. The enum value is the tag written to saved forest
files, so members must never be renamed or removed.

Usage:
    from pyforestry.species import TreeSpecies

    # Use enum directly
    species = TreeSpecies.PINE
    print(species.value)  # "PINE"

    # Convert from string
    species = TreeSpecies.from_string("pine")

    # Pick one uniformly at random
    species = TreeSpecies.random(random.Random(42))
"""

import random as _random
from enum import Enum
from typing import Optional

from .utils import normalize_code


class TreeSpecies(str, Enum):
    """
    Species that can grow in a forest.

    Each enum member's value is its upper-case name, which doubles as the
    species tag in the persistence format.
    """

    OAK = "OAK"
    """Oak (Quercus spp.) - slow-growing hardwood."""

    PINE = "PINE"
    """Pine (Pinus spp.) - fast-growing conifer."""

    MAPLE = "MAPLE"
    """Maple (Acer spp.) - broadleaf hardwood."""

    BIRCH = "BIRCH"
    """Birch (Betula spp.) - short-lived pioneer hardwood."""

    SPRUCE = "SPRUCE"
    """Spruce (Picea spp.) - shade-tolerant conifer."""

    CEDAR = "CEDAR"
    """Cedar (Thuja/Juniperus spp.) - aromatic softwood."""

    ASPEN = "ASPEN"
    """Aspen (Populus spp.) - clonal pioneer hardwood."""

    @classmethod
    def from_string(cls, code: str) -> "TreeSpecies":
        """
        Convert a string species tag to a TreeSpecies enum member.

        Args:
            code: A species tag string (case-insensitive)

        Returns:
            The corresponding TreeSpecies enum member

        Raises:
            ValueError: If the code is not a valid species tag

        Example:
            >>> TreeSpecies.from_string("OAK")
            TreeSpecies.OAK
            >>> TreeSpecies.from_string("oak")  # Case-insensitive
            TreeSpecies.OAK
        """
        if code is None:
            raise ValueError("Species code cannot be None")
        if isinstance(code, cls):
            return code

        normalized = normalize_code(code)

        for member in cls:
            if member.value == normalized:
                return member

        raise ValueError(
            f"Invalid species code: '{code}'. "
            f"Valid codes: {', '.join(cls.list_all_codes())}"
        )

    @classmethod
    def is_valid(cls, code: str) -> bool:
        """
        Check if a string is a valid species tag.

        Example:
            >>> TreeSpecies.is_valid("maple")
            True
            >>> TreeSpecies.is_valid("PALM")
            False
        """
        if code is None:
            return False

        normalized = normalize_code(code)

        return any(member.value == normalized for member in cls)

    @classmethod
    def random(cls, rng: Optional[_random.Random] = None) -> "TreeSpecies":
        """
        Pick a species uniformly at random.

        Args:
            rng: Random number generator to draw from. Uses the module-level
                generator when None.

        Returns:
            A TreeSpecies enum member
        """
        chooser = rng if rng is not None else _random
        return chooser.choice(list(cls))

    @classmethod
    def list_all_codes(cls) -> list[str]:
        """
        Get a sorted list of all valid species tag strings.
        """
        return sorted(member.value for member in cls)

    def __str__(self) -> str:
        """Return the species tag as a string."""
        return self.value

    def __repr__(self) -> str:
        """Return a detailed string representation."""
        return f"TreeSpecies.{self.name}"


# =============================================================================
# Module-level convenience functions
# =============================================================================

def get_species(code: str) -> TreeSpecies:
    """
    Convert a string to a TreeSpecies enum (convenience function).

    This is an alias for TreeSpecies.from_string().
    """
    return TreeSpecies.from_string(code)


def validate_species(code: str) -> bool:
    """
    Check if a species tag is valid (convenience function).

    This is an alias for TreeSpecies.is_valid().
    """
    return TreeSpecies.is_valid(code)


# =============================================================================
# Default exports
# =============================================================================

__all__ = [
    "TreeSpecies",
    "get_species",
    "validate_species",
]
