"""
Shared fixtures for the grid diagram tests
"""

import pytest
import numpy as np

from grid_diagrams import GridDiagram, InsertType, Move, MoveSubtype


@pytest.fixture
def unknot():
    return GridDiagram([0, 1], [1, 0])


@pytest.fixture
def trefoil():
    # Writhe -3 with the package's sign convention
    return GridDiagram([0, 1, 2, 3, 4], [2, 3, 4, 0, 1])


@pytest.fixture
def two_unknots():
    """Split link of two 2x2 unknots side by side."""
    return GridDiagram([0, 1, 2, 3], [1, 0, 3, 2])


@pytest.fixture
def random_grid():
    """Factory: random valid n x n diagram (any link) from a numpy Generator."""
    def make(rng, n):
        x_rows = rng.permutation(n)
        while True:
            o_rows = rng.permutation(n)
            if np.all(x_rows != o_rows):
                return GridDiagram(x_rows, o_rows)
    return make


@pytest.fixture
def all_moves():
    """Factory: every move whose indices are in range for the diagram."""
    def make(diagram):
        n = diagram.size
        moves = [Move.none()]
        for k in range(n):
            for subtype in MoveSubtype:
                moves.append(Move.commutation(k, subtype))
                moves.append(Move.destabilization(k, subtype))
        for insert_type in InsertType:
            rows = n if insert_type.inserts_column else n + 1
            cols = n + 1 if insert_type.inserts_column else n
            for row in range(rows):
                for col in range(cols):
                    moves.append(Move.stabilization(row, col, insert_type))
        return moves
    return make
