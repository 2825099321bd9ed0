"""
Link Registry: Named Grid Diagrams
==================================

A registry maps link names (e.g. "unknot", "trefoil") to the stored form of a
grid diagram: two arrays giving, per column, the row of the X marker and the
row of the O marker.

Backends:
- MemoryLinkRegistry: dict-backed (testing/temporary)
- FileSystemLinkRegistry: one JSON file, {"name": [x_rows, o_rows], ...}

A missing name is recoverable (LinkNotFoundError). An unreadable or corrupted
registry is reported as RegistryUnavailableError.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Tuple
import json
import os

import numpy as np

from .constants import DEFAULT_REGISTRY_FILE, REGISTRY_ENV_VAR
from .exceptions import InvalidInputError, LinkNotFoundError, RegistryUnavailableError
from .grid import GridDiagram
from .log import get_logger

logger = get_logger(__name__)

Entry = Tuple[List[int], List[int]]


def _to_entry(savable) -> Entry:
    try:
        array = np.asarray(savable)
    except ValueError as e:
        raise InvalidInputError(f"Stored grid is not a (2, n) array: {e}") from e
    if array.ndim != 2 or array.shape[0] != 2:
        raise InvalidInputError(f"Stored grid must have shape (2, n), got {array.shape}")
    return array[0].tolist(), array[1].tolist()


def _stored_indices(values) -> List[int]:
    """Indices as stored in JSON; floats and booleans are not indices."""
    if not isinstance(values, list):
        raise TypeError(f"expected a list of indices, got {values!r}")
    for v in values:
        if isinstance(v, bool) or not isinstance(v, int):
            raise TypeError(f"not an integer index: {v!r}")
    return list(values)


# =============================================================================
# SECTION 1: Abstract Registry Interface
# =============================================================================

class LinkRegistry(ABC):
    """Abstract lookup of grid diagrams by link name."""

    @abstractmethod
    def lookup(self, name: str) -> Entry:
        """Return (x_rows, o_rows) for ``name``; LinkNotFoundError if absent."""
        pass

    @abstractmethod
    def store(self, name: str, savable) -> None:
        """Store a (2, n) savable array (or pair of lists) under ``name``."""
        pass

    @abstractmethod
    def names(self) -> List[str]:
        pass

    def __contains__(self, name: str) -> bool:
        return name in self.names()


# =============================================================================
# SECTION 2: Memory Backend
# =============================================================================

class MemoryLinkRegistry(LinkRegistry):
    """In-memory registry."""

    def __init__(self, entries: Optional[Dict[str, Entry]] = None):
        self._entries: Dict[str, Entry] = {}
        for name, savable in (entries or {}).items():
            self.store(name, savable)

    def lookup(self, name: str) -> Entry:
        if name not in self._entries:
            raise LinkNotFoundError(name)
        x_rows, o_rows = self._entries[name]
        return list(x_rows), list(o_rows)

    def store(self, name: str, savable) -> None:
        self._entries[name] = _to_entry(savable)

    def names(self) -> List[str]:
        return sorted(self._entries)


# =============================================================================
# SECTION 3: File System Backend
# =============================================================================

class FileSystemLinkRegistry(LinkRegistry):
    """
    JSON file registry.

    Args:
        path: The JSON file, or a directory holding ``grids.json``. Defaults to
            $GRID_DIAGRAMS_REGISTRY, then ``grids.json`` in the working directory.
    """

    def __init__(self, path: Optional[str] = None):
        if path is None:
            path = os.environ.get(REGISTRY_ENV_VAR, DEFAULT_REGISTRY_FILE)
        self.path = Path(path)
        if self.path.is_dir():
            self.path = self.path / DEFAULT_REGISTRY_FILE

    def _read(self) -> Dict[str, Entry]:
        try:
            data = json.loads(self.path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("cannot read link registry %s: %s", self.path, e)
            raise RegistryUnavailableError(f"Cannot read link registry {self.path}: {e}") from e
        if not isinstance(data, dict):
            logger.warning("link registry %s is not a JSON object", self.path)
            raise RegistryUnavailableError(f"Link registry {self.path} is not a JSON object")
        return data

    def lookup(self, name: str) -> Entry:
        data = self._read()
        if name not in data:
            raise LinkNotFoundError(name)
        entry = data[name]
        try:
            x_rows, o_rows = entry
            x_rows = _stored_indices(x_rows)
            o_rows = _stored_indices(o_rows)
        except (TypeError, ValueError) as e:
            logger.warning("malformed entry %r in link registry %s", name, self.path)
            raise RegistryUnavailableError(
                f"Malformed entry {name!r} in link registry {self.path}: {entry!r}"
            ) from e
        logger.info("loaded %r from %s", name, self.path)
        return x_rows, o_rows

    def store(self, name: str, savable) -> None:
        data = self._read() if self.path.exists() else {}
        data[name] = [list(part) for part in _to_entry(savable)]
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2, sort_keys=True))

    def names(self) -> List[str]:
        return sorted(self._read())


# =============================================================================
# SECTION 4: Diagram Loading
# =============================================================================

def load_diagram(name: str, registry: LinkRegistry) -> GridDiagram:
    """
    Build the grid diagram stored under ``name``.

    Raises:
        LinkNotFoundError: if the registry has no such name
        RegistryUnavailableError: if the registry is unreadable or the stored
            arrays are not a valid grid diagram
    """
    x_rows, o_rows = registry.lookup(name)
    try:
        return GridDiagram(x_rows, o_rows)
    except InvalidInputError as e:
        logger.warning("registry entry %r is not a grid diagram: %s", name, e)
        raise RegistryUnavailableError(f"Registry entry {name!r} is not a grid diagram: {e}") from e
