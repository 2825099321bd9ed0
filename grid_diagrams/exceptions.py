"""
Exceptions raised by the grid_diagrams package.

Each error also derives from the builtin a caller would naturally catch
(ValueError for bad input, IndexError for bad indices, KeyError for unknown
link names).
"""


class GridDiagramError(Exception):
    """Base class for all grid_diagrams errors."""


class InvalidInputError(GridDiagramError, ValueError):
    """Arrays handed to a diagram constructor do not describe a grid diagram."""


class InvalidArgumentError(GridDiagramError, ValueError):
    """Unknown move type, insert type, subtype or invariant kind."""


class IndexOutOfRangeError(GridDiagramError, IndexError):
    """A row or column index outside the diagram."""


class LinkNotFoundError(GridDiagramError, KeyError):
    """The registry has no diagram under the requested name."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self):
        return f"Link name not found in registry: {self.name!r}"


class RegistryUnavailableError(GridDiagramError, RuntimeError):
    """The registry could not be read or holds corrupted data."""
