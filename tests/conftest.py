"""
Shared pytest fixtures for pyforestry tests.

This module provides commonly used fixtures for testing tree, forest and
session functionality, reducing code duplication across test files.
"""
import io
import random

import pytest
from rich.console import Console

from pyforestry.config_loader import ConfigLoader, reset_config_loader
from pyforestry.forest import Forest
from pyforestry.session import ForestrySession
from pyforestry.species import TreeSpecies
from pyforestry.tree import Tree


# =============================================================================
# Configuration Isolation
# =============================================================================

@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory):
    """Install a configuration loader that ignores any local forestry.yaml.

    Every test sees the packaged defaults; the shared loader is cleared again
    afterwards so tests cannot leak configuration into each other.
    """
    missing = tmp_path_factory.mktemp("cfg") / "no-override.yaml"
    loader = ConfigLoader(override_file=missing)
    reset_config_loader(loader)
    yield loader
    reset_config_loader()


# =============================================================================
# Tree Fixtures
# =============================================================================

@pytest.fixture
def pine():
    """A 50 ft pine planted in 2010 growing 2 ft/yr."""
    return Tree(TreeSpecies.PINE, 2010, 50.0, 2.0)


@pytest.fixture
def oak():
    """A 10 ft oak planted in 2020 growing 1 ft/yr."""
    return Tree(TreeSpecies.OAK, 2020, 10.0, 1.0)


@pytest.fixture
def mixed_trees():
    """Five trees of varied species and heights, in a fixed order.

    Heights: 12.5, 40.0, 7.25, 40.0, 88.0
    """
    return [
        Tree(TreeSpecies.BIRCH, 2015, 12.5, 1.5),
        Tree(TreeSpecies.MAPLE, 2001, 40.0, 0.75),
        Tree(TreeSpecies.SPRUCE, 2019, 7.25, 3.0),
        Tree(TreeSpecies.CEDAR, 1999, 40.0, 0.5),
        Tree(TreeSpecies.PINE, 1990, 88.0, 2.25),
    ]


# =============================================================================
# Forest Fixtures
# =============================================================================

@pytest.fixture
def north_forest(pine):
    """The single-pine "north" forest."""
    return Forest("north", [pine])


@pytest.fixture
def mixed_forest(mixed_trees):
    return Forest("mixed", mixed_trees)


@pytest.fixture
def empty_forest():
    return Forest("empty")


# =============================================================================
# Session Fixtures
# =============================================================================

@pytest.fixture
def console_output():
    """A text buffer and a plain (no colour) console writing into it."""
    buffer = io.StringIO()
    console = Console(file=buffer, force_terminal=False, color_system=None, width=200)
    return console, buffer


@pytest.fixture
def make_session(console_output, tmp_path):
    """Factory for sessions reading scripted input and storing under tmp_path.

    Usage:
        session, output = make_session("P\\nX\\n")
    """
    console, buffer = console_output

    def _make(script: str = ""):
        session = ForestrySession(
            console=console,
            stream=io.StringIO(script),
            rng=random.Random(1234),
            directory=tmp_path,
        )
        return session, buffer

    return _make
