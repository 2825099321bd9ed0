"""
Strand Module

Rows and columns of a grid diagram. Each strand stores the position of its X
marker and of its O marker and derives min, max, direction and length from
them. The derived fields are refreshed on every mutation.

Rows and columns use opposite sign conventions for direction:
- Row:    length = x_col - o_col
- Column: length = o_row - x_row
so that in both cases the direction follows the link orientation
(columns run from X to O, rows run from O to X).
"""

from abc import ABC, abstractmethod
from typing import Tuple


class Strand(ABC):
    """
    A horizontal or vertical segment of a grid diagram.

    Attributes:
        x: Index of the X marker on this strand
        o: Index of the O marker on this strand
        min: Smaller of the two stored indices
        max: Larger of the two stored indices
        direction: +1 or -1 (0 only for a degenerate placeholder)
        length: Distance between the two markers
    """

    __slots__ = ("_x", "_o", "min", "max", "direction", "length")

    def __init__(self, x: int, o: int):
        self._x = x
        self._o = o
        self._refresh()

    @abstractmethod
    def _signed_length(self) -> int:
        """X-to-O displacement along the link orientation."""
        pass

    def _refresh(self) -> None:
        if self._x < self._o:
            self.min, self.max = self._x, self._o
        else:
            self.min, self.max = self._o, self._x
        length = self._signed_length()
        self.direction = (length > 0) - (length < 0)
        self.length = length * self.direction

    @property
    def x(self) -> int:
        return self._x

    @x.setter
    def x(self, value: int) -> None:
        self._x = value
        self._refresh()

    @property
    def o(self) -> int:
        return self._o

    @o.setter
    def o(self, value: int) -> None:
        self._o = value
        self._refresh()

    def set(self, x: int, o: int) -> None:
        """Replace both markers at once."""
        self._x = x
        self._o = o
        self._refresh()

    def other_end(self, index: int) -> int:
        """Return the stored index that is not ``index``."""
        return self._o if self._x == index else self._x

    def spans(self, index: int) -> bool:
        """True if ``index`` lies strictly between the two markers."""
        return self.min < index < self.max

    def as_tuple(self) -> Tuple[int, int]:
        return (self._x, self._o)

    def copy(self) -> "Strand":
        return type(self)(self._x, self._o)

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._x == other._x and self._o == other._o

    __hash__ = None


class Row(Strand):
    """A row: ``x`` is the column of its X marker, ``o`` the column of its O marker."""

    __slots__ = ()

    def _signed_length(self) -> int:
        return self._x - self._o

    @property
    def x_col(self) -> int:
        return self._x

    @x_col.setter
    def x_col(self, value: int) -> None:
        self.x = value

    @property
    def o_col(self) -> int:
        return self._o

    @o_col.setter
    def o_col(self, value: int) -> None:
        self.o = value

    def __repr__(self):
        return f"Row(x_col={self._x}, o_col={self._o})"


class Column(Strand):
    """A column: ``x`` is the row of its X marker, ``o`` the row of its O marker."""

    __slots__ = ()

    def _signed_length(self) -> int:
        return self._o - self._x

    @property
    def x_row(self) -> int:
        return self._x

    @x_row.setter
    def x_row(self, value: int) -> None:
        self.x = value

    @property
    def o_row(self) -> int:
        return self._o

    @o_row.setter
    def o_row(self, value: int) -> None:
        self.o = value

    def __repr__(self):
        return f"Column(x_row={self._x}, o_row={self._o})"
