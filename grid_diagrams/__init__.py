"""
Grid Diagrams - Knot and Link Grid Diagrams for Wang-Landau Sampling

Grid diagrams mutated in place by Cromwell moves (commutation, stabilization,
destabilization), with exact and O(1) incremental writhe and an Energy
snapshot of invariant values for density-of-states sampling.
"""

__version__ = "0.1.0"

from .exceptions import (
    GridDiagramError,
    InvalidInputError,
    InvalidArgumentError,
    IndexOutOfRangeError,
    LinkNotFoundError,
    RegistryUnavailableError,
)
from .strands import Row, Column
from .moves import Move, MoveType, MoveSubtype, InsertType
from .grid import GridDiagram
from .energy import Energy, EnergyConfig, Invariant, INVARIANTS, SIZE, WRITHE
from .registry import LinkRegistry, MemoryLinkRegistry, FileSystemLinkRegistry, load_diagram

__all__ = [
    "GridDiagram",
    "Row",
    "Column",
    "Move",
    "MoveType",
    "MoveSubtype",
    "InsertType",
    "Energy",
    "EnergyConfig",
    "Invariant",
    "INVARIANTS",
    "SIZE",
    "WRITHE",
    "LinkRegistry",
    "MemoryLinkRegistry",
    "FileSystemLinkRegistry",
    "load_diagram",
    "GridDiagramError",
    "InvalidInputError",
    "InvalidArgumentError",
    "IndexOutOfRangeError",
    "LinkNotFoundError",
    "RegistryUnavailableError",
]
