"""
Tree utility functions for pyforestry.

Random tree generation lives here rather than on Forest so that the forest
itself stays deterministic; the CLI supplies the generator with its own
random source and bounds.
"""
import random
from datetime import date
from typing import Optional

from .tree import Tree
from .species import TreeSpecies
from .config_loader import get_config_loader

__all__ = [
    'current_year',
    'generate_random_tree',
]


def current_year() -> int:
    """Return the current calendar year."""
    return date.today().year


def generate_random_tree(rng: Optional[random.Random] = None,
                         year: Optional[int] = None,
                         max_year_offset: Optional[int] = None,
                         max_height: Optional[float] = None,
                         max_growth_rate: Optional[float] = None) -> Tree:
    """Create a tree with random species and measurements.

    The planting year is drawn from the ``max_year_offset`` years up to and
    including ``year``; height and growth rate are uniform on
    [0, max_height) and [0, max_growth_rate).

    Args:
        rng: Random number generator. A fresh unseeded one is used when None.
        year: Reference calendar year. Defaults to the current year.
        max_year_offset: Number of candidate planting years. Defaults to the
            configured generator.max_year_offset.
        max_height: Upper bound on height (feet). Defaults to configuration.
        max_growth_rate: Upper bound on growth rate (feet/year). Defaults to
            configuration.

    Returns:
        New Tree instance

    Example:
        >>> tree = generate_random_tree(random.Random(7), year=2024)
        >>> 2005 <= tree.planted_year <= 2024
        True
    """
    rng = rng if rng is not None else random.Random()
    params = get_config_loader().generator_params
    if year is None:
        year = current_year()
    if max_year_offset is None:
        max_year_offset = params['max_year_offset']
    if max_height is None:
        max_height = params['max_height']
    if max_growth_rate is None:
        max_growth_rate = params['max_growth_rate']

    species = TreeSpecies.random(rng)
    offset = rng.randrange(max_year_offset) if max_year_offset > 0 else 0
    height = rng.random() * max_height
    growth_rate = rng.random() * max_growth_rate

    return Tree(species, year - offset, height, growth_rate)
