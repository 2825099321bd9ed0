"""
Grid Diagram Module

An n x n grid diagram stored twice: as a list of rows (column of X, column
of O) and as a list of columns (row of X, row of O). Only one list is needed
to describe the diagram, but keeping both makes every move and every writhe
rule local.

Invariant (checked by is_consistent):
    columns[rows[i].x_col].x_row == i and columns[rows[i].o_col].o_row == i

Moves mutate the diagram in place. Each move has a pure predicate
(is_*_valid), a raw form and an *_if_valid form that checks first and
reports whether it changed anything.
"""

from typing import List, Sequence, Tuple

import numpy as np

from .constants import MIN_DESTABILIZE_SIZE
from .exceptions import InvalidInputError, IndexOutOfRangeError, InvalidArgumentError
from .log import get_logger
from .moves import InsertType, Move, MoveSubtype, MoveType
from .strands import Column, Row
from . import writhe

logger = get_logger(__name__)


def _as_array(values, name: str) -> np.ndarray:
    try:
        return np.asarray(values)
    except ValueError as e:
        raise InvalidInputError(f"{name} is not a rectangular array: {e}") from e


def _as_index_array(values, name: str) -> np.ndarray:
    array = _as_array(values, name)
    if array.ndim != 1:
        raise InvalidInputError(f"{name} must be one-dimensional, got shape {array.shape}")
    if array.size and not np.issubdtype(array.dtype, np.integer):
        raise InvalidInputError(f"{name} must hold integers, got dtype {array.dtype}")
    return array.astype(np.int64)


def _check_permutation(array: np.ndarray, name: str) -> None:
    n = len(array)
    if array.min() < 0 or array.max() >= n:
        raise InvalidInputError(f"{name} has values outside [0, {n}): {array.tolist()}")
    if not np.array_equal(np.sort(array), np.arange(n)):
        raise InvalidInputError(f"{name} is not a permutation of range({n}): {array.tolist()}")


class GridDiagram:
    """
    A grid diagram of a knot or link.

    Attributes:
        size: Number of rows (= number of columns)
    """

    def __init__(self, x_rows: Sequence[int], o_rows: Sequence[int]):
        """
        Build a diagram from its column description.

        Args:
            x_rows: x_rows[j] is the row of the X marker in column j
            o_rows: o_rows[j] is the row of the O marker in column j

        Raises:
            InvalidInputError: if the arrays do not describe a grid diagram
        """
        x_arr = _as_index_array(x_rows, "x_rows")
        o_arr = _as_index_array(o_rows, "o_rows")
        if len(x_arr) != len(o_arr):
            raise InvalidInputError(
                f"x_rows and o_rows differ in length ({len(x_arr)} != {len(o_arr)})"
            )
        if len(x_arr) < MIN_DESTABILIZE_SIZE:
            raise InvalidInputError(f"A grid diagram needs at least {MIN_DESTABILIZE_SIZE} columns")
        _check_permutation(x_arr, "x_rows")
        _check_permutation(o_arr, "o_rows")
        clash = np.flatnonzero(x_arr == o_arr)
        if clash.size:
            raise InvalidInputError(f"Columns {clash.tolist()} hold X and O in the same row")

        n = len(x_arr)
        x_cols = np.empty(n, dtype=np.int64)
        o_cols = np.empty(n, dtype=np.int64)
        x_cols[x_arr] = np.arange(n)
        o_cols[o_arr] = np.arange(n)
        self._columns: List[Column] = [Column(int(x), int(o)) for x, o in zip(x_arr, o_arr)]
        self._rows: List[Row] = [Row(int(x), int(o)) for x, o in zip(x_cols, o_cols)]

    # =========================================================================
    # Alternative constructors
    # =========================================================================

    @classmethod
    def _from_strands(cls, rows: List[Row], columns: List[Column]) -> "GridDiagram":
        diagram = cls.__new__(cls)
        diagram._rows = rows
        diagram._columns = columns
        return diagram

    @classmethod
    def from_strands(cls,
                     x_cols: Sequence[int],
                     o_cols: Sequence[int],
                     x_rows: Sequence[int],
                     o_rows: Sequence[int]) -> "GridDiagram":
        """
        Build a diagram from explicit row and column arrays.

        Args:
            x_cols, o_cols: per row, the columns of its X and O markers
            x_rows, o_rows: per column, the rows of its X and O markers

        Raises:
            InvalidInputError: if the two descriptions disagree
        """
        diagram = cls(x_rows, o_rows)
        expected = [(row.x_col, row.o_col) for row in diagram._rows]
        given = list(zip(_as_index_array(x_cols, "x_cols").tolist(),
                         _as_index_array(o_cols, "o_cols").tolist()))
        if given != expected:
            raise InvalidInputError("Row arrays do not match the column arrays")
        return diagram

    @classmethod
    def from_savable(cls, savable) -> "GridDiagram":
        """Inverse of to_savable: a (2, n) array of X rows and O rows per column."""
        array = _as_array(savable, "savable grid")
        if array.ndim != 2 or array.shape[0] != 2:
            raise InvalidInputError(f"Savable grid must have shape (2, n), got {array.shape}")
        return cls(array[0], array[1])

    @classmethod
    def from_registry(cls, name: str, registry) -> "GridDiagram":
        """Look a named link up in a LinkRegistry."""
        from .registry import load_diagram
        return load_diagram(name, registry)

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def size(self) -> int:
        return len(self._rows)

    def row(self, i: int) -> Row:
        """Return a copy of row i."""
        self._check_row(i)
        return self._rows[i].copy()

    def column(self, j: int) -> Column:
        """Return a copy of column j."""
        self._check_column(j)
        return self._columns[j].copy()

    def rows(self) -> List[Tuple[int, int]]:
        """(x_col, o_col) for every row."""
        return [row.as_tuple() for row in self._rows]

    def columns(self) -> List[Tuple[int, int]]:
        """(x_row, o_row) for every column."""
        return [column.as_tuple() for column in self._columns]

    def _check_index(self, value: int, bound: int, what: str) -> None:
        if not 0 <= value < bound:
            raise IndexOutOfRangeError(f"{what} {value} outside [0, {bound})")

    def _check_row(self, i: int) -> None:
        self._check_index(i, self.size, "row")

    def _check_column(self, j: int) -> None:
        self._check_index(j, self.size, "column")

    def is_consistent(self) -> bool:
        """Check that rows and columns describe the same placement of markers."""
        n = self.size
        if len(self._columns) != n:
            logger.debug("%d rows but %d columns", n, len(self._columns))
            return False
        for i, row in enumerate(self._rows):
            if not (0 <= row.x_col < n and 0 <= row.o_col < n):
                logger.debug("row %d points outside the grid: %r", i, row)
                return False
            if self._columns[row.x_col].x_row != i or self._columns[row.o_col].o_row != i:
                logger.debug("row %d is not matched by its columns: %r", i, row)
                return False
        return True

    def to_savable(self) -> np.ndarray:
        """(2, n) integer array: X rows per column, then O rows per column."""
        return np.array(
            [[c.x_row for c in self._columns], [c.o_row for c in self._columns]],
            dtype=np.int64,
        )

    def __str__(self):
        lines = []
        for row in self._rows:
            cells = ['-'] * self.size
            cells[row.o_col] = 'O'
            cells[row.x_col] = 'X'
            lines.append('\n' + ''.join(cells))
        lines.append('\n')
        return ''.join(lines)

    def __repr__(self):
        return f"GridDiagram(size={self.size}, columns={self.columns()})"

    def __eq__(self, other):
        if not isinstance(other, GridDiagram):
            return NotImplemented
        return self._rows == other._rows and self._columns == other._columns

    __hash__ = None

    # =========================================================================
    # Copies and whole-diagram transformations
    # =========================================================================

    def copy(self) -> "GridDiagram":
        """Independent deep copy; no strand is shared with the original."""
        return self._from_strands(
            [row.copy() for row in self._rows],
            [column.copy() for column in self._columns],
        )

    __copy__ = copy

    def __deepcopy__(self, memo):
        return self.copy()

    def mirror(self) -> "GridDiagram":
        """Turn the diagram into its mirror image and return it."""
        n = self.size
        self._columns = [self._columns[n - 1 - j] for j in range(n)]
        self._rows = [Row(n - 1 - row.x_col, n - 1 - row.o_col) for row in self._rows]
        return self

    def translate(self, horizontal: int, vertical: int) -> "GridDiagram":
        """Cyclically shift columns by ``horizontal`` and rows by ``vertical``."""
        n = self.size
        old_rows, old_columns = self._rows, self._columns
        self._rows = [
            Row((r.x_col + horizontal) % n, (r.o_col + horizontal) % n)
            for r in (old_rows[(i - vertical) % n] for i in range(n))
        ]
        self._columns = [
            Column((c.x_row + vertical) % n, (c.o_row + vertical) % n)
            for c in (old_columns[(j - horizontal) % n] for j in range(n))
        ]
        return self

    def concatenate(self, other: "GridDiagram") -> "GridDiagram":
        """
        Turn this diagram into the connect sum of itself and ``other``.

        The last column of this diagram and the first row of ``other`` are
        dropped and their markers merged at the junction. ``other`` is left
        untouched.

        Returns:
            self, now of size self.size + other.size - 1
        """
        if other is self:
            other = self.copy()
        n = self.size
        offset = n - 1
        x_row = self._columns[offset].x_row
        o_row = self._columns[offset].o_row
        junction = other._rows[0]
        x_col = junction.x_col + offset
        o_col = junction.o_col + offset

        self._columns.pop()
        for column in other._columns:
            self._columns.append(Column(column.x_row + offset, column.o_row + offset))
        for row in other._rows[1:]:
            self._rows.append(Row(row.x_col + offset, row.o_col + offset))

        self._rows[x_row].x_col = x_col
        self._rows[o_row].o_col = o_col
        self._columns[x_col].x_row = x_row
        self._columns[o_col].o_row = o_row
        logger.debug("connect sum of sizes %d and %d", n, other.size)
        return self

    # =========================================================================
    # Commutation
    # =========================================================================

    @staticmethod
    def _interleaved(a, b) -> bool:
        return (a.max > b.max > a.min > b.min) or (b.max > a.max > b.min > a.min)

    def is_commute_row_valid(self, i: int) -> bool:
        self._check_row(i)
        return not self._interleaved(self._rows[i], self._rows[(i + 1) % self.size])

    def is_commute_column_valid(self, j: int) -> bool:
        self._check_column(j)
        return not self._interleaved(self._columns[j], self._columns[(j + 1) % self.size])

    def commute_row(self, i: int) -> None:
        """Swap rows i and i+1 (mod n) without checking validity."""
        self._check_row(i)
        k = (i + 1) % self.size
        rows, columns = self._rows, self._columns
        rows[i], rows[k] = rows[k], rows[i]
        for index in (i, k):
            columns[rows[index].x_col].x_row = index
            columns[rows[index].o_col].o_row = index

    def commute_column(self, j: int) -> None:
        """Swap columns j and j+1 (mod n) without checking validity."""
        self._check_column(j)
        k = (j + 1) % self.size
        rows, columns = self._rows, self._columns
        columns[j], columns[k] = columns[k], columns[j]
        for index in (j, k):
            rows[columns[index].x_row].x_col = index
            rows[columns[index].o_row].o_col = index

    def commute_row_if_valid(self, i: int) -> bool:
        if self.is_commute_row_valid(i):
            self.commute_row(i)
            return True
        return False

    def commute_column_if_valid(self, j: int) -> bool:
        if self.is_commute_column_valid(j):
            self.commute_column(j)
            return True
        return False

    # =========================================================================
    # Stabilization
    # =========================================================================

    def is_stabilize_valid(self, row: int, col: int, insert_type: InsertType) -> bool:
        """Stabilization is always legal; only the indices are checked."""
        self._check_stabilize(row, col, insert_type)
        return True

    def _check_stabilize(self, row: int, col: int, insert_type) -> InsertType:
        try:
            insert_type = InsertType(insert_type)
        except ValueError:
            raise InvalidArgumentError(f"Unknown insert type: {insert_type!r}") from None
        n = self.size
        if insert_type.inserts_column:
            self._check_index(row, n, "row")
            self._check_index(col, n + 1, "insertion column")
        else:
            self._check_index(col, n, "column")
            self._check_index(row, n + 1, "insertion row")
        return insert_type

    def stabilize(self, row: int, col: int, insert_type: InsertType) -> None:
        """
        Insert a new row at ``row`` and a new column at ``col``.

        For the COLUMN variants the strand being split is the row currently
        at ``row``; for the ROW variants it is the column currently at ``col``.
        """
        insert_type = self._check_stabilize(row, col, insert_type)
        rows, columns = self._rows, self._columns
        n = self.size

        for i in range(row, n):
            columns[rows[i].x_col].x_row = i + 1
            columns[rows[i].o_col].o_row = i + 1
        new_row = Row(-1, -1)
        rows.insert(row, new_row)

        for j in range(col, n):
            rows[columns[j].x_row].x_col = j + 1
            rows[columns[j].o_row].o_col = j + 1
        new_column = Column(-1, -1)
        columns.insert(col, new_column)

        if insert_type == InsertType.XO_COLUMN:
            split = rows[row + 1]
            columns[split.o_col].o_row = row
            new_column.set(row, row + 1)
            new_row.set(col, split.o_col)
            split.o_col = col
        elif insert_type == InsertType.OX_COLUMN:
            split = rows[row + 1]
            columns[split.x_col].x_row = row
            new_column.set(row + 1, row)
            new_row.set(split.x_col, col)
            split.x_col = col
        elif insert_type == InsertType.XO_ROW:
            split = columns[col + 1]
            rows[split.o_row].o_col = col
            new_row.set(col, col + 1)
            new_column.set(row, split.o_row)
            split.o_row = row
        else:
            split = columns[col + 1]
            rows[split.x_row].x_col = col
            new_row.set(col + 1, col)
            new_column.set(split.x_row, row)
            split.x_row = row
        logger.debug("stabilized at (%d, %d) with %s, size now %d", row, col, insert_type.name, self.size)

    # =========================================================================
    # Destabilization
    # =========================================================================

    @staticmethod
    def _mergeable(lines, transversals, p: int) -> bool:
        line = lines[p]
        if line.max - line.min != 1:
            return False
        # The merged transversal would hold X and O on the same line
        return transversals[line.min].other_end(p) != transversals[line.max].other_end(p)

    def is_destabilize_row_valid(self, i: int) -> bool:
        self._check_row(i)
        return self.size > MIN_DESTABILIZE_SIZE and self._mergeable(self._rows, self._columns, i)

    def is_destabilize_column_valid(self, j: int) -> bool:
        self._check_column(j)
        return self.size > MIN_DESTABILIZE_SIZE and self._mergeable(self._columns, self._rows, j)

    def destabilize_column(self, j: int) -> None:
        """Remove column j and merge its two rows, without checking validity."""
        self._check_column(j)
        rows, columns = self._rows, self._columns
        n = self.size
        column = columns[j]
        larger = column.max
        saved_x_col = rows[column.o_row].x_col
        saved_o_col = rows[column.x_row].o_col

        rows[larger - 1].set(saved_x_col, saved_o_col)
        columns[saved_x_col].x_row = larger - 1
        columns[saved_o_col].o_row = larger - 1

        for k in range(j + 1, n):
            rows[columns[k].x_row].x_col = k - 1
            rows[columns[k].o_row].o_col = k - 1
        columns.pop(j)

        for i in range(larger + 1, n):
            columns[rows[i].x_col].x_row = i - 1
            columns[rows[i].o_col].o_row = i - 1
        rows.pop(larger)
        logger.debug("destabilized column %d, size now %d", j, self.size)

    def destabilize_row(self, i: int) -> None:
        """Remove row i and merge its two columns, without checking validity."""
        self._check_row(i)
        rows, columns = self._rows, self._columns
        n = self.size
        row = rows[i]
        larger = row.max
        saved_x_row = columns[row.o_col].x_row
        saved_o_row = columns[row.x_col].o_row

        columns[larger - 1].set(saved_x_row, saved_o_row)
        rows[saved_x_row].x_col = larger - 1
        rows[saved_o_row].o_col = larger - 1

        for k in range(i + 1, n):
            columns[rows[k].x_col].x_row = k - 1
            columns[rows[k].o_col].o_row = k - 1
        rows.pop(i)

        for j in range(larger + 1, n):
            rows[columns[j].x_row].x_col = j - 1
            rows[columns[j].o_row].o_col = j - 1
        columns.pop(larger)
        logger.debug("destabilized row %d, size now %d", i, self.size)

    def destabilize_row_if_valid(self, i: int) -> bool:
        if self.is_destabilize_row_valid(i):
            self.destabilize_row(i)
            return True
        return False

    def destabilize_column_if_valid(self, j: int) -> bool:
        if self.is_destabilize_column_valid(j):
            self.destabilize_column(j)
            return True
        return False

    def destabilize_if_valid(self, row: int, col: int) -> bool:
        """Destabilize column ``col`` if possible, otherwise row ``row``."""
        if self.is_destabilize_column_valid(col):
            self.destabilize_column(col)
            return True
        if self.is_destabilize_row_valid(row):
            self.destabilize_row(row)
            return True
        return False

    # =========================================================================
    # Generic move interface
    # =========================================================================

    def is_move_valid(self, move: Move) -> bool:
        if move.move_type == MoveType.NONE:
            return True
        if move.move_type == MoveType.COMMUTATION:
            index, subtype = move.arguments
            if subtype == MoveSubtype.COLUMN:
                return self.is_commute_column_valid(index)
            return self.is_commute_row_valid(index)
        if move.move_type == MoveType.DESTABILIZATION:
            index, subtype = move.arguments
            if subtype == MoveSubtype.COLUMN:
                return self.is_destabilize_column_valid(index)
            return self.is_destabilize_row_valid(index)
        if move.move_type == MoveType.STABILIZATION:
            return self.is_stabilize_valid(*move.arguments)
        raise InvalidArgumentError(f"Unknown move type: {move.move_type!r}")

    def apply(self, move: Move) -> None:
        """Apply a move that the caller has already checked."""
        if move.move_type == MoveType.NONE:
            return
        if move.move_type == MoveType.COMMUTATION:
            index, subtype = move.arguments
            if subtype == MoveSubtype.COLUMN:
                self.commute_column(index)
            else:
                self.commute_row(index)
        elif move.move_type == MoveType.DESTABILIZATION:
            index, subtype = move.arguments
            if subtype == MoveSubtype.COLUMN:
                self.destabilize_column(index)
            else:
                self.destabilize_row(index)
        elif move.move_type == MoveType.STABILIZATION:
            self.stabilize(*move.arguments)
        else:
            raise InvalidArgumentError(f"Unknown move type: {move.move_type!r}")

    def apply_if_valid(self, move: Move) -> bool:
        if self.is_move_valid(move):
            self.apply(move)
            return True
        return False

    # =========================================================================
    # Invariants
    # =========================================================================

    def calc_writhe(self) -> int:
        """Writhe by full recount, O(n^2)."""
        return writhe.calc_writhe(self._rows, self._columns)

    def delta_writhe(self, move: Move) -> int:
        """
        Writhe change ``move`` would cause, in O(1).

        Must be called on the diagram before the move is applied, and only for
        a move that is valid on it.
        """
        if move.move_type == MoveType.STABILIZATION:
            self._check_stabilize(*move.arguments)
        elif move.move_type in (MoveType.COMMUTATION, MoveType.DESTABILIZATION):
            self._check_index(move.arguments[0], self.size, move.arguments[1].name.lower())
        return writhe.delta_writhe(self._rows, self._columns, move)

    @staticmethod
    def delta_size(move_type: MoveType) -> int:
        return writhe.delta_size(move_type)
