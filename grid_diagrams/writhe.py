"""
Writhe Module

Exact and incremental writhe of a grid diagram.

Vertical strands pass over horizontal ones. Row i and column j cross when j
lies strictly between the row's markers and i lies strictly between the
column's markers; the crossing contributes

    -direction(column j) * direction(row i)

The contribution and the crossing condition are symmetric in rows and columns,
so every incremental rule below is written once over a pair of strand
families:

- lines:        the family the move acts on (columns for a column move)
- transversals: the perpendicular family (rows for a column move)

and called with (columns, rows) or (rows, columns).

The wrap-around commutation needs one global fact, made local by the
orientation of the link: a closed curve crosses any straight line with zero
net flux. Taking the line just past transversal t, the signed count of lines
strictly spanning t equals minus the directions of the lines that start
at t, and t has markers on exactly two lines.
"""

from collections import Counter
from typing import Sequence

from .exceptions import InvalidArgumentError
from .moves import InsertType, Move, MoveSubtype, MoveType
from .strands import Column, Row, Strand


def calc_writhe(rows: Sequence[Row], columns: Sequence[Column]) -> int:
    """
    Full O(n^2) recount of the writhe.

    Rows 0 and n-1 cannot lie strictly inside any column, so they are skipped.
    """
    total = 0
    for i in range(1, len(rows) - 1):
        row = rows[i]
        for j in range(row.min + 1, row.max):
            column = columns[j]
            if column.min < i < column.max:
                total += -column.direction * row.direction
    return total


def delta_size(move_type: MoveType) -> int:
    """Change in diagram size caused by a move of the given type."""
    if move_type == MoveType.STABILIZATION:
        return 1
    if move_type == MoveType.DESTABILIZATION:
        return -1
    if move_type == MoveType.COMMUTATION:
        return 0
    raise InvalidArgumentError(f"No size delta for move type {move_type!r}")


# =============================================================================
# Per-move rules over (lines, transversals)
# =============================================================================

def _between(value: int, a: int, b: int) -> bool:
    return min(a, b) < value < max(a, b)


def swap_delta(lines: Sequence[Strand], transversals: Sequence[Strand], k: int) -> int:
    """
    Writhe change from swapping lines k and k+1 (no wrap-around).

    Only a transversal ending on one of the two lines and lying strictly
    inside the other line's span can gain or lose a crossing; it does so with
    that other line, depending on which side its far end is on.
    """
    first, second = lines[k], lines[k + 1]
    delta = 0
    for t in (second.x, second.o):
        if first.spans(t):
            far = transversals[t].other_end(k + 1)
            side = 1 if far < k else -1
            delta += side * first.direction * transversals[t].direction
    for t in (first.x, first.o):
        if second.spans(t):
            far = transversals[t].other_end(k)
            side = 1 if far > k + 1 else -1
            delta += side * second.direction * transversals[t].direction
    return delta


def _net_flux(lines: Sequence[Strand], transversals: Sequence[Strand], t: int) -> int:
    """Signed number of lines strictly spanning transversal t."""
    strand = transversals[t]
    return -sum(lines[j].direction for j in (strand.x, strand.o) if lines[j].min == t)


def wrap_swap_delta(lines: Sequence[Strand], transversals: Sequence[Strand]) -> int:
    """
    Writhe change from swapping the last line with the first.

    Lines at the two boundary positions never cross anything. A transversal
    ending on a boundary line flips direction and exchanges the interior
    lines it spans on one side for those on the other, which nets out to its
    direction times the flux through all interior lines. A transversal ending
    on both boundary lines counts twice.
    """
    last, first = lines[-1], lines[0]
    delta = 0
    for t, multiplicity in Counter((last.x, last.o, first.x, first.o)).items():
        flux = _net_flux(lines, transversals, t)
        for edge in (last, first):
            if edge.spans(t):
                flux -= edge.direction
        delta += multiplicity * transversals[t].direction * flux
    return delta


def merge_delta(lines: Sequence[Strand], transversals: Sequence[Strand], p: int) -> int:
    """
    Writhe change from destabilizing line p.

    Line p joins transversals s and s+1, which merge into one. Every crossing
    of the merged transversal existed before on exactly one of the pair, so
    the only change is a crossing lost between one transversal and the line
    carrying the far end of the other.
    """
    s = lines[p].min
    low_far = transversals[s].other_end(p)
    high_far = transversals[s + 1].other_end(p)
    delta = 0
    if lines[low_far].max > s + 1 and _between(low_far, p, high_far):
        delta += lines[low_far].direction * transversals[s + 1].direction
    if lines[high_far].min < s and _between(high_far, p, low_far):
        delta += lines[high_far].direction * transversals[s].direction
    return delta


def kink_delta(target: Strand, lines: Sequence[Strand], position: int, turn: int) -> int:
    """
    Writhe change from stabilizing ``target`` with a new line at ``position``.

    Inserted inside the target's span the kink crosses nothing. Outside it, the
    line at the nearest end crosses the detour iff its direction equals
    ``turn``, which is fixed by the XO/OX variant.
    """
    if position <= target.min:
        near = lines[target.min]
    elif position > target.max:
        near = lines[target.max]
    else:
        return 0
    if near.direction != turn:
        return 0
    return -near.direction * target.direction


# Direction of the near line that produces a crossing, per variant
_KINK_TURN = {
    InsertType.XO_COLUMN: -1,
    InsertType.OX_COLUMN: 1,
    InsertType.XO_ROW: 1,
    InsertType.OX_ROW: -1,
}


def delta_writhe(rows: Sequence[Row], columns: Sequence[Column], move: Move) -> int:
    """
    Writhe change the move would cause, computed from the pre-move diagram.

    Args:
        rows: Rows of the diagram before the move
        columns: Columns of the diagram before the move
        move: The move about to be applied (already checked for validity)

    Returns:
        calc_writhe(after) - calc_writhe(before)
    """
    if move.move_type == MoveType.NONE:
        return 0
    if move.move_type == MoveType.COMMUTATION:
        index, subtype = move.arguments
        lines, transversals = _families(rows, columns, subtype)
        if index == len(lines) - 1:
            return wrap_swap_delta(lines, transversals)
        return swap_delta(lines, transversals, index)
    if move.move_type == MoveType.DESTABILIZATION:
        index, subtype = move.arguments
        lines, transversals = _families(rows, columns, subtype)
        return merge_delta(lines, transversals, index)
    if move.move_type == MoveType.STABILIZATION:
        row, col, insert_type = move.arguments
        turn = _KINK_TURN[insert_type]
        if insert_type.inserts_column:
            return kink_delta(rows[row], columns, col, turn)
        return kink_delta(columns[col], rows, row, turn)
    raise InvalidArgumentError(f"Unknown move type: {move.move_type!r}")


def _families(rows, columns, subtype: MoveSubtype):
    if subtype == MoveSubtype.COLUMN:
        return columns, rows
    return rows, columns
