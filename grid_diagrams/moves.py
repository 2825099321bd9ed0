"""
Cromwell Move Descriptors

A Move names a transformation of a grid diagram together with its arguments,
so a sampler can test it, price it (energy delta) and apply it without the
diagram having to know who proposed it.

Argument layout:
- COMMUTATION:     (index, subtype)
- DESTABILIZATION: (index, subtype)
- STABILIZATION:   (row, col, insert_type)
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Tuple

from .exceptions import InvalidArgumentError


class MoveType(IntEnum):
    NONE = -1
    COMMUTATION = 0
    STABILIZATION = 1
    DESTABILIZATION = 2


class MoveSubtype(IntEnum):
    """Whether a commutation/destabilization acts on a column or a row."""
    COLUMN = 1
    ROW = 2


class InsertType(IntEnum):
    """
    Stabilization variants.

    The COLUMN variants split a row at one of its ends by inserting a short
    column; the ROW variants split a column by inserting a short row.
    XO / OX give the order of the markers on the inserted strand.
    """
    XO_COLUMN = 0
    OX_COLUMN = 1
    XO_ROW = 2
    OX_ROW = 3

    @property
    def inserts_column(self) -> bool:
        return self in (InsertType.XO_COLUMN, InsertType.OX_COLUMN)


def _coerce(enum_cls, value, what: str):
    try:
        return enum_cls(value)
    except ValueError:
        raise InvalidArgumentError(f"Unknown {what}: {value!r}") from None


@dataclass(frozen=True)
class Move:
    """A move type with its integer arguments."""
    move_type: MoveType
    arguments: Tuple[int, ...] = ()

    def __post_init__(self):
        move_type = _coerce(MoveType, self.move_type, "move type")
        object.__setattr__(self, "move_type", move_type)
        try:
            arguments = tuple(int(a) for a in self.arguments)
        except (TypeError, ValueError):
            raise InvalidArgumentError(f"Move arguments must be integers, got {self.arguments!r}") from None
        if move_type in (MoveType.COMMUTATION, MoveType.DESTABILIZATION):
            if len(arguments) != 2:
                raise InvalidArgumentError(
                    f"{move_type.name} takes (index, subtype), got {arguments}"
                )
            arguments = (arguments[0], _coerce(MoveSubtype, arguments[1], "move subtype"))
        elif move_type == MoveType.STABILIZATION:
            if len(arguments) != 3:
                raise InvalidArgumentError(
                    f"STABILIZATION takes (row, col, insert_type), got {arguments}"
                )
            arguments = (arguments[0], arguments[1], _coerce(InsertType, arguments[2], "insert type"))
        object.__setattr__(self, "arguments", arguments)

    @classmethod
    def none(cls) -> "Move":
        return cls(MoveType.NONE)

    @classmethod
    def commutation(cls, index: int, subtype: MoveSubtype) -> "Move":
        return cls(MoveType.COMMUTATION, (index, subtype))

    @classmethod
    def destabilization(cls, index: int, subtype: MoveSubtype) -> "Move":
        return cls(MoveType.DESTABILIZATION, (index, subtype))

    @classmethod
    def stabilization(cls, row: int, col: int, insert_type: InsertType) -> "Move":
        return cls(MoveType.STABILIZATION, (row, col, insert_type))

    def __str__(self):
        args = ", ".join(
            a.name if isinstance(a, IntEnum) else str(a) for a in self.arguments
        )
        return f"{self.move_type.name}({args})"
