"""
PyForestry: Forestry Simulation for Python

Manage a small named forest of trees: plant random trees, cut them down by
index, simulate yearly growth, reap everything above a height threshold, and
save or load the forest.

Quick Start:
    >>> from pyforestry import Forest, Tree, TreeSpecies
    >>> forest = Forest("north", [Tree(TreeSpecies.PINE, 2010, 50.0, 2.0)])
    >>> forest.grow()
    >>> forest.trees[0].height
    52.0
"""

# =============================================================================
# Package Metadata
# =============================================================================
__version__ = "0.1.0"
__author__ = "PyForestry Development Team"

# =============================================================================
# Core Classes - Primary API
# =============================================================================
from .forest import Forest
from .tree import Tree

# =============================================================================
# Species
# =============================================================================
from .species import TreeSpecies, get_species, validate_species

# =============================================================================
# Configuration Loading
# =============================================================================
from .config_loader import (
    ConfigLoader,
    get_config_loader,
    reset_config_loader,
)

# =============================================================================
# Tree Generation
# =============================================================================
from .tree_utils import generate_random_tree, current_year

# =============================================================================
# Interactive Session
# =============================================================================
from .session import ForestrySession, SessionAction

# =============================================================================
# Exceptions
# =============================================================================
from .exceptions import (
    ForestryError,
    ConfigurationError,
    ParameterError,
    InvalidParameterError,
    ForestError,
    InvalidIndexError,
    NoCurrentForestError,
    DataError,
    ForestNotFoundError,
    ForestParseError,
    ForestIOError,
    InvalidDataError,
)

# =============================================================================
# Entry Point
# =============================================================================
from .main import main

# =============================================================================
# Public API Definition
# =============================================================================
__all__ = [
    # Package Metadata
    "__version__",
    "__author__",
    # Core Classes
    "Forest",
    "Tree",
    # Species
    "TreeSpecies",
    "get_species",
    "validate_species",
    # Configuration
    "ConfigLoader",
    "get_config_loader",
    "reset_config_loader",
    # Tree Generation
    "generate_random_tree",
    "current_year",
    # Session
    "ForestrySession",
    "SessionAction",
    # Exceptions
    "ForestryError",
    "ConfigurationError",
    "ParameterError",
    "InvalidParameterError",
    "ForestError",
    "InvalidIndexError",
    "NoCurrentForestError",
    "DataError",
    "ForestNotFoundError",
    "ForestParseError",
    "ForestIOError",
    "InvalidDataError",
    # Entry Point
    "main",
]
