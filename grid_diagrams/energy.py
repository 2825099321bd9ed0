"""
Energy Module

An Energy is the tuple of invariant values a Wang-Landau sampler bins
diagrams by. Which invariants, and in which order, is fixed by an explicit
EnergyConfig; an energy built incrementally from a previous one inherits that
config.

Two ways to obtain an Energy:
- Energy.from_diagram(diagram, config): recompute every invariant
- Energy.from_move(previous, diagram, move): previous + per-invariant delta,
  with ``diagram`` still in its pre-move state

Both must agree, which is what the tests check move by move.
"""

from dataclasses import dataclass, field
from numbers import Integral
from typing import Callable, Dict, Iterable, Iterator, Optional, Sequence, Tuple

from .constants import HASH_MULTIPLIER
from .exceptions import InvalidArgumentError
from .moves import Move, MoveType
from . import writhe


@dataclass(frozen=True)
class Invariant:
    """
    One slot of an Energy.

    Attributes:
        name: Key used for lookup and in repr
        compute: diagram -> value
        delta: (pre-move diagram, move) -> value change
    """
    name: str
    compute: Callable = field(compare=False)
    delta: Callable = field(compare=False)


def _size_delta(diagram, move: Move) -> int:
    if move.move_type == MoveType.NONE:
        return 0
    return writhe.delta_size(move.move_type)


SIZE = Invariant("size", lambda diagram: diagram.size, _size_delta)
WRITHE = Invariant(
    "writhe",
    lambda diagram: diagram.calc_writhe(),
    lambda diagram, move: diagram.delta_writhe(move),
)

INVARIANTS: Dict[str, Invariant] = {inv.name: inv for inv in (SIZE, WRITHE)}


@dataclass(frozen=True)
class EnergyConfig:
    """Ordered invariants making up an Energy."""
    invariants: Tuple[Invariant, ...] = (SIZE, WRITHE)

    def __post_init__(self):
        invariants = tuple(self.invariants)
        if not invariants:
            raise InvalidArgumentError("EnergyConfig needs at least one invariant")
        for inv in invariants:
            if not isinstance(inv, Invariant):
                raise InvalidArgumentError(f"Not an Invariant: {inv!r}")
        names = [inv.name for inv in invariants]
        if len(set(names)) != len(names):
            raise InvalidArgumentError(f"Duplicate invariant names: {names}")
        object.__setattr__(self, "invariants", invariants)

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "EnergyConfig":
        """Build a config from built-in invariant names, e.g. ("size", "writhe")."""
        invariants = []
        for name in names:
            if name not in INVARIANTS:
                raise InvalidArgumentError(
                    f"Unknown invariant {name!r}, expected one of {sorted(INVARIANTS)}"
                )
            invariants.append(INVARIANTS[name])
        return cls(tuple(invariants))

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(inv.name for inv in self.invariants)

    def __len__(self):
        return len(self.invariants)


class Energy:
    """Immutable tuple of invariant values."""

    __slots__ = ("_values", "_config", "_hash")

    def __init__(self, values: Sequence[int], config: EnergyConfig):
        values = tuple(values)
        for v in values:
            if isinstance(v, bool) or not isinstance(v, Integral):
                raise InvalidArgumentError(f"Energy values must be integers, got {v!r}")
        values = tuple(int(v) for v in values)
        if len(values) != len(config):
            raise InvalidArgumentError(
                f"Energy has {len(values)} values but the config names {len(config)} invariants"
            )
        self._values = values
        self._config = config
        self._hash: Optional[int] = None

    @classmethod
    def from_diagram(cls, diagram, config: EnergyConfig) -> "Energy":
        return cls([inv.compute(diagram) for inv in config.invariants], config)

    @classmethod
    def from_move(cls, previous: "Energy", diagram, move: Move) -> "Energy":
        """
        Energy after ``move``, from the energy before it.

        Args:
            previous: Energy of ``diagram``
            diagram: The diagram before the move is applied
            move: A move valid on ``diagram``
        """
        config = previous._config
        return cls(
            [v + inv.delta(diagram, move) for v, inv in zip(previous._values, config.invariants)],
            config,
        )

    @property
    def values(self) -> Tuple[int, ...]:
        return self._values

    @property
    def config(self) -> EnergyConfig:
        return self._config

    def __len__(self):
        return len(self._values)

    def __iter__(self) -> Iterator[int]:
        return iter(self._values)

    def __getitem__(self, key):
        if isinstance(key, str):
            try:
                key = self._config.names.index(key)
            except ValueError:
                raise KeyError(key) from None
        return self._values[key]

    def __eq__(self, other):
        if not isinstance(other, Energy):
            return NotImplemented
        return self._values == other._values and self._config.names == other._config.names

    def __hash__(self):
        if self._hash is None:
            h = 0
            for v in self._values:
                h = h * HASH_MULTIPLIER + v
            self._hash = h
        return self._hash

    def __str__(self):
        return "(" + ", ".join(str(v) for v in self._values) + ")"

    def __repr__(self):
        pairs = ", ".join(f"{name}={v}" for name, v in zip(self._config.names, self._values))
        return f"Energy({pairs})"
