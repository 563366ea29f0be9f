"""
Forest class managing a named, ordered collection of trees.

Trees are addressed only by their position in the forest. Operations:
- add_tree / cut_tree for single-tree changes
- grow for yearly growth of every tree
- reap for removing every tree above a height threshold
- save / load for persistence (see storage.py for the record format)
"""
from pathlib import Path
from typing import Dict, Any, Iterator, List, Optional

import numpy as np

from .tree import Tree
from .tree_utils import current_year
from .species import TreeSpecies
from .storage import forest_file_path, read_forest_file, write_forest_file
from .config_loader import get_config_loader
from .exceptions import DataError
from .logging_config import get_logger, log_growth_summary, log_harvest_summary

__all__ = ['Forest']


class Forest:
    """A named forest of trees kept in insertion order."""

    def __init__(self, name: str, trees: Optional[List[Tree]] = None):
        """Initialize a forest.

        Args:
            name: Forest name. Also the base of the saved file name.
            trees: Initial trees in order. If None, creates an empty forest.
        """
        self.name = name
        self.trees: List[Tree] = list(trees) if trees is not None else []
        self.logger = get_logger(__name__)

    def __len__(self) -> int:
        return len(self.trees)

    def __iter__(self) -> Iterator[Tree]:
        return iter(self.trees)

    def __getitem__(self, index: int) -> Tree:
        return self.trees[index]

    def __repr__(self) -> str:
        return f"Forest(name={self.name!r}, trees={len(self.trees)})"

    def add_tree(self, tree: Tree) -> None:
        """Append a tree to the end of the forest."""
        self.trees.append(tree)
        self.logger.debug(f"Added {tree.species.value} to '{self.name}' at index {len(self.trees) - 1}")

    def cut_tree(self, index: int) -> bool:
        """Remove the tree at ``index``.

        Trees after the removed one shift down by one position.

        Args:
            index: Position of the tree to remove

        Returns:
            True if a tree was removed; False if ``index`` is not an integer
            in [0, len), in which case the forest is unchanged
        """
        if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
            return False
        if not 0 <= index < len(self.trees):
            self.logger.debug(f"Cut ignored: index {index} outside forest of {len(self.trees)}")
            return False

        removed = self.trees.pop(int(index))
        self.logger.debug(f"Cut {removed.species.value} at index {index} from '{self.name}'")
        return True

    def grow(self, years: int = 1) -> None:
        """Apply yearly growth to every tree.

        Args:
            years: Number of years to simulate. Values <= 0 do nothing.
        """
        if years <= 0:
            return

        initial_heights = [tree.height for tree in self.trees]
        for tree in self.trees:
            tree.grow(years)

        if self.trees:
            gain = float(np.mean([tree.height - h for tree, h in zip(self.trees, initial_heights)]))
            log_growth_summary(self.logger, self.name, years, len(self.trees), gain)

    grow_all = grow

    def reap(self, height_threshold: float) -> List[Tree]:
        """Remove every tree taller than ``height_threshold``.

        Trees exactly at the threshold are kept. Survivors keep their
        relative order.

        Args:
            height_threshold: Height in feet

        Returns:
            The removed trees, in their former order
        """
        removed = [tree for tree in self.trees if tree.height > height_threshold]
        self.trees = [tree for tree in self.trees if not tree.height > height_threshold]
        log_harvest_summary(self.logger, self.name, height_threshold, len(removed), len(self.trees))
        return removed

    def print_lines(self) -> Iterator[str]:
        """Yield one display line per tree, prefixed by its index."""
        for index, tree in enumerate(self.trees):
            yield f"{index}: {tree}"

    def get_metrics(self, year: Optional[int] = None) -> Dict[str, Any]:
        """Calculate summary metrics for the forest.

        Args:
            year: Calendar year that tree ages are measured at. Defaults to
                the current year.

        Returns:
            Dictionary with tree count, height statistics (feet), mean growth
            rate (feet/year), mean age (years) and the number of trees per
            species
        """
        species_counts = {species.value: 0 for species in TreeSpecies}
        for tree in self.trees:
            species_counts[tree.species.value] += 1

        if not self.trees:
            return {
                'name': self.name,
                'tree_count': 0,
                'mean_height': 0.0,
                'min_height': 0.0,
                'max_height': 0.0,
                'mean_growth_rate': 0.0,
                'mean_age': 0.0,
                'species_counts': species_counts,
            }

        if year is None:
            year = current_year()

        heights = np.array([tree.height for tree in self.trees])
        growth_rates = np.array([tree.growth_rate for tree in self.trees])
        ages = np.array([tree.age(year) for tree in self.trees])

        return {
            'name': self.name,
            'tree_count': len(self.trees),
            'mean_height': float(np.mean(heights)),
            'min_height': float(np.min(heights)),
            'max_height': float(np.max(heights)),
            'mean_growth_rate': float(np.mean(growth_rates)),
            'mean_age': float(np.mean(ages)),
            'species_counts': species_counts,
        }

    def file_path(self, directory: Optional[Path] = None) -> Path:
        """Path of this forest's save file."""
        loader = get_config_loader()
        return forest_file_path(self.name, directory if directory is not None else loader.data_dir,
                                loader.extension)

    def save(self, directory: Optional[Path] = None) -> Path:
        """Save the forest, overwriting any previous save of the same name.

        Args:
            directory: Directory to write to. Defaults to the configured
                storage directory.

        Returns:
            Path of the written file

        Raises:
            ForestIOError: If the file cannot be written
        """
        path = write_forest_file(self.file_path(directory), self.name, self.trees)
        self.logger.info(f"Saved forest '{self.name}' ({len(self.trees)} trees) to {path}")
        return path

    @classmethod
    def load(cls, name: str, directory: Optional[Path] = None) -> "Forest":
        """Load a saved forest.

        Args:
            name: Forest name, exactly as it was saved. The file read is
                ``<name><extension>``.
            directory: Directory to read from. Defaults to the configured
                storage directory.

        Returns:
            New Forest instance

        Raises:
            ForestNotFoundError: If no file exists for ``name``
            ForestParseError: If the file is not a valid forest file
            ForestIOError: If the file cannot be read
        """
        loader = get_config_loader()
        path = forest_file_path(name, directory if directory is not None else loader.data_dir,
                                loader.extension)

        logger = get_logger(__name__)
        try:
            stored_name, trees = read_forest_file(path)
        except DataError as e:
            logger.warning(f"Failed to load forest '{name}': {e}")
            raise

        if stored_name is not None and stored_name != name:
            logger.debug(f"File {path} records name '{stored_name}'; using '{name}'")

        forest = cls(name, trees)
        logger.info(f"Loaded forest '{forest.name}' ({len(trees)} trees) from {path}")
        return forest
