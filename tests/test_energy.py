"""
Tests for Energy snapshots
"""

import pytest
import numpy as np

from grid_diagrams import (
    Energy,
    EnergyConfig,
    INVARIANTS,
    InsertType,
    Invariant,
    InvalidArgumentError,
    Move,
    MoveSubtype,
    MoveType,
    SIZE,
    WRITHE,
)


@pytest.fixture
def config():
    return EnergyConfig.from_names(["size", "writhe"])


class TestEnergyConfig:
    def test_default(self):
        assert EnergyConfig().invariants == (SIZE, WRITHE)
        assert EnergyConfig().names == ("size", "writhe")

    def test_from_names(self, config):
        assert config == EnergyConfig((SIZE, WRITHE))
        assert len(config) == 2
        assert EnergyConfig.from_names(["writhe"]).names == ("writhe",)

    def test_unknown_name(self):
        with pytest.raises(InvalidArgumentError):
            EnergyConfig.from_names(["size", "linking"])

    def test_empty(self):
        with pytest.raises(InvalidArgumentError):
            EnergyConfig(())

    def test_duplicates(self):
        with pytest.raises(InvalidArgumentError):
            EnergyConfig((SIZE, SIZE))

    def test_registry_of_builtins(self):
        assert set(INVARIANTS) == {"size", "writhe"}


class TestEnergy:
    def test_from_diagram(self, trefoil, config):
        energy = Energy.from_diagram(trefoil, config)
        assert energy.values == (5, -3)
        assert len(energy) == 2
        assert energy[0] == 5
        assert energy["writhe"] == -3
        assert list(energy) == [5, -3]

    def test_unknown_key(self, unknot, config):
        energy = Energy.from_diagram(unknot, config)
        with pytest.raises(KeyError):
            energy["linking"]

    def test_str_and_repr(self, trefoil, config):
        energy = Energy.from_diagram(trefoil, config)
        assert str(energy) == "(5, -3)"
        assert repr(energy) == "Energy(size=5, writhe=-3)"

    def test_hash(self, trefoil, config):
        energy = Energy.from_diagram(trefoil, config)
        assert hash(energy) == 5 * 31 - 3
        assert hash(energy) == hash(Energy((5, -3), config))

    def test_equality(self, config):
        assert Energy((3, 0), config) == Energy((3, 0), EnergyConfig())
        assert Energy((3, 0), config) != Energy((3, 1), config)
        swapped = EnergyConfig.from_names(["writhe", "size"])
        assert Energy((3, 0), config) != Energy((3, 0), swapped)
        assert Energy((3, 0), config) != Energy((3,), EnergyConfig.from_names(["size"]))

    def test_usable_as_dict_key(self, config):
        counts = {Energy((3, 0), config): 1}
        counts[Energy((3, 0), config)] += 1
        assert counts[Energy((3, 0), config)] == 2

    def test_length_mismatch(self, config):
        with pytest.raises(InvalidArgumentError):
            Energy((1, 2, 3), config)

    @pytest.mark.parametrize("values", [(3.5, 0), (3, True), (3.0, 0), ("3", 0)])
    def test_non_integer_values(self, config, values):
        with pytest.raises(InvalidArgumentError):
            Energy(values, config)

    def test_numpy_integers_accepted(self, config):
        energy = Energy((np.int64(3), np.int32(-1)), config)
        assert energy.values == (3, -1)
        assert all(type(v) is int for v in energy)

    def test_float_invariant_rejected(self, trefoil):
        halved = Invariant("half_size", lambda d: d.size / 2, lambda d, m: 0.5)
        with pytest.raises(InvalidArgumentError):
            Energy.from_diagram(trefoil, EnergyConfig((halved,)))

    def test_custom_invariant(self, trefoil):
        twice = Invariant("twice_size", lambda d: 2 * d.size, lambda d, m: 2 * SIZE.delta(d, m))
        config = EnergyConfig((twice,))
        energy = Energy.from_diagram(trefoil, config)
        assert energy.values == (10,)
        move = Move.stabilization(0, 0, InsertType.XO_ROW)
        assert Energy.from_move(energy, trefoil, move).values == (12,)


class TestIncrementalEnergy:
    def test_from_move(self, trefoil, config):
        energy = Energy.from_diagram(trefoil, config)
        move = Move.commutation(4, MoveSubtype.COLUMN)
        incremental = Energy.from_move(energy, trefoil, move)
        trefoil.apply(move)
        assert incremental == Energy.from_diagram(trefoil, config)
        assert incremental.values == (5, -2)
        assert incremental.config is config

    def test_none_move(self, trefoil, config):
        energy = Energy.from_diagram(trefoil, config)
        assert Energy.from_move(energy, trefoil, Move.none()) == energy

    @pytest.mark.parametrize("seed", [3, 4, 5])
    def test_walk_agrees_with_recount(self, random_grid, all_moves, config, seed):
        rng = np.random.default_rng(seed)
        diagram = random_grid(rng, 3)
        energy = Energy.from_diagram(diagram, config)
        for _ in range(60):
            valid = [m for m in all_moves(diagram) if diagram.is_move_valid(m)]
            # Keep the walk small: stabilizations far outnumber the other moves
            if diagram.size >= 8:
                valid = [m for m in valid if m.move_type != MoveType.STABILIZATION]
            move = valid[int(rng.integers(len(valid)))]
            energy = Energy.from_move(energy, diagram, move)
            diagram.apply(move)
            assert energy == Energy.from_diagram(diagram, config)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
