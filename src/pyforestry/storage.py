"""
On-disk record format for saved forests.

A forest file is a single YAML document:

    name: north
    trees:
    - species: PINE
      planted_year: 2010
      height: 52.0
      growth_rate: 2.0

PyYAML writes floats with repr(), so heights and growth rates survive a
save/load round trip exactly. The ``name`` key is optional on read; the
file identity already carries the forest name.
"""
from pathlib import Path
from typing import List, Optional, Tuple

import yaml

from .tree import Tree
from .exceptions import (
    ForestIOError,
    ForestNotFoundError,
    ForestParseError,
    InvalidDataError,
)
from .logging_config import get_logger

__all__ = ['read_forest_file', 'write_forest_file', 'forest_file_path']

logger = get_logger(__name__)


def forest_file_path(name: str, directory: Path, extension: str) -> Path:
    """Return the file path that stores the forest called ``name``."""
    return Path(directory) / f"{name}{extension}"


def write_forest_file(path: Path, name: str, trees: List[Tree]) -> Path:
    """Write a forest to ``path``, replacing any existing file.

    Args:
        path: Destination file
        name: Forest name
        trees: Trees in forest order

    Returns:
        The path written

    Raises:
        ForestIOError: If the forest cannot be serialized or the file cannot
            be written. A serialization failure leaves any existing file intact.
    """
    # Serialize before opening: opening with 'w' truncates the previous save.
    try:
        document = {
            'name': name,
            'trees': [tree.to_dict() for tree in trees],
        }
        text = yaml.safe_dump(document, default_flow_style=False, sort_keys=False)
    except (InvalidDataError, yaml.YAMLError) as e:
        logger.warning(f"Could not serialize forest '{name}': {e}")
        raise ForestIOError(str(path), "write", f"cannot serialize forest: {e}") from e

    try:
        with open(path, 'w', encoding='utf-8') as f:
            f.write(text)
    except OSError as e:
        logger.warning(f"Could not write {path}: {e}")
        raise ForestIOError(str(path), "write", e.strerror or str(e)) from e

    logger.debug(f"Wrote {len(trees)} trees to {path}")
    return Path(path)


def read_forest_file(path: Path) -> Tuple[Optional[str], List[Tree]]:
    """Read a forest file.

    Args:
        path: File to read

    Returns:
        Tuple of (stored name or None, trees in file order)

    Raises:
        ForestNotFoundError: If the file does not exist
        ForestParseError: If the file is not a forest record document
        ForestIOError: If the file exists but cannot be read
    """
    path = Path(path)

    try:
        with open(path, 'r', encoding='utf-8') as f:
            text = f.read()
    except FileNotFoundError as e:
        raise ForestNotFoundError(str(path)) from e
    except IsADirectoryError as e:
        raise ForestIOError(str(path), "read", "path is a directory") from e
    except UnicodeDecodeError as e:
        raise ForestParseError(str(path), "file is not UTF-8 text") from e
    except OSError as e:
        logger.warning(f"Could not read {path}: {e}")
        raise ForestIOError(str(path), "read", e.strerror or str(e)) from e

    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ForestParseError(str(path), f"YAML parsing error: {e}") from e

    if not isinstance(document, dict):
        raise ForestParseError(str(path), "expected a mapping with a 'trees' list")

    unknown = sorted(str(key) for key in document if key not in ('name', 'trees'))
    if unknown:
        raise ForestParseError(str(path), f"unexpected key(s): {', '.join(unknown)}")

    name = document.get('name')
    if name is not None and not isinstance(name, str):
        raise ForestParseError(str(path), f"name must be a string, got {name!r}")

    records = document.get('trees')
    if not isinstance(records, list):
        raise ForestParseError(str(path), "'trees' must be a list")

    trees = []
    for position, record in enumerate(records):
        try:
            trees.append(Tree.from_dict(record))
        except InvalidDataError as e:
            raise ForestParseError(str(path), f"tree {position}: {e.reason}") from e

    logger.debug(f"Read {len(trees)} trees from {path}")
    return name, trees
