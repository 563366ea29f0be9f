"""
Tree class representing an individual tree in a forest.
Implements the linear yearly growth model and the flat record mapping
used by forest persistence.
"""
from dataclasses import dataclass
from typing import Dict, Any, Union

from .species import TreeSpecies
from .exceptions import InvalidDataError

__all__ = ['Tree', 'TREE_RECORD_FIELDS']

# Keys of a serialized tree record, in the order they are written
TREE_RECORD_FIELDS = ('species', 'planted_year', 'height', 'growth_rate')


@dataclass
class Tree:
    """A single tree.

    Only ``height`` changes after construction, and only through grow().

    Values are not range-checked: negative heights or growth rates are
    accepted as given. Trees created by the random generator are always
    non-negative, and loaded trees are taken as written.

    Attributes:
        species: Tree species
        planted_year: Calendar year the tree was planted
        height: Total height (feet)
        growth_rate: Height gained per simulated year (feet/year)
    """
    species: TreeSpecies
    planted_year: int
    height: float
    growth_rate: float

    def __post_init__(self):
        if not isinstance(self.species, TreeSpecies):
            self.species = TreeSpecies.from_string(self.species)

    def grow(self, years: int = 1) -> None:
        """Grow the tree for the specified number of years.

        Each year adds ``growth_rate`` to the height. Years are applied one at
        a time so that k calls of grow() and one grow(k) agree exactly.

        Args:
            years: Number of years to grow. Values <= 0 leave the tree unchanged.
        """
        for _ in range(max(0, int(years))):
            self.height += self.growth_rate

    def age(self, current_year: int) -> int:
        """Years since planting as of ``current_year``."""
        return current_year - self.planted_year

    def to_dict(self) -> Dict[str, Any]:
        """Convert tree to a flat record of plain Python values.

        Numeric fields are coerced to int/float, so numpy scalars are written
        the same way as builtin numbers.

        Raises:
            InvalidDataError: If a numeric field holds a non-numeric value
        """
        try:
            return {
                'species': self.species.value,
                'planted_year': int(self.planted_year),
                'height': float(self.height),
                'growth_rate': float(self.growth_rate),
            }
        except (TypeError, ValueError) as e:
            raise InvalidDataError("tree record", str(e)) from e

    @classmethod
    def from_dict(cls, record: Dict[str, Any]) -> "Tree":
        """Build a tree from a flat record.

        Args:
            record: Mapping with the keys in TREE_RECORD_FIELDS

        Returns:
            Tree instance

        Raises:
            InvalidDataError: If the record is missing a key, names an unknown
                species, or holds a value of the wrong type
        """
        if not isinstance(record, dict):
            raise InvalidDataError("tree record", f"expected a mapping, got {type(record).__name__}")

        missing = [key for key in TREE_RECORD_FIELDS if key not in record]
        if missing:
            raise InvalidDataError("tree record", f"missing field(s): {', '.join(missing)}")
        extra = sorted(str(key) for key in record if key not in TREE_RECORD_FIELDS)
        if extra:
            raise InvalidDataError("tree record", f"unexpected field(s): {', '.join(extra)}")

        species = record['species']
        if not isinstance(species, str) or not TreeSpecies.is_valid(species):
            raise InvalidDataError("tree record", f"unknown species {species!r}")

        planted_year = record['planted_year']
        if isinstance(planted_year, bool) or not isinstance(planted_year, int):
            raise InvalidDataError("tree record", f"planted_year must be an integer, got {planted_year!r}")

        height = _as_float(record['height'], 'height')
        growth_rate = _as_float(record['growth_rate'], 'growth_rate')

        return cls(TreeSpecies.from_string(species), planted_year, height, growth_rate)

    def __str__(self) -> str:
        return (f"{self.species.value:<6} planted {self.planted_year}  "
                f"height {self.height:7.2f} ft  growth {self.growth_rate:5.2f} ft/yr")


def _as_float(value: Union[int, float], field_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidDataError("tree record", f"{field_name} must be a number, got {value!r}")
    return float(value)
