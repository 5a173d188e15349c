import os
import sys
import pytest

# Add project root to sys.path (so tests can import orbital_shift.*)
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.append(PROJECT_ROOT)

from orbital_shift.core.board import OrbitBoard
from orbital_shift.utils.seeded_random import SeededRandom


@pytest.fixture
def make_rng():
    """Returns a function that builds a SeededRandom for a seed."""
    def _make(seed=42):
        return SeededRandom(seed)
    return _make


@pytest.fixture
def single_orbit_board():
    """One center at the origin, no blocked cells, target 15."""
    return OrbitBoard([(0, 0)], [], [15])


@pytest.fixture
def pair_board():
    """
    Two centers at distance 2 sharing (1, 0) and (1, -1); (0, 1) and (3, -1) blocked.
    """
    return OrbitBoard([(0, 0), (2, -1)], [(0, 1), (3, -1)], [12, 13])


def plain_scramble(rng, centers, solution):
    """
    Rotation-only scramble with no cap handling: draws a count in 3..8 and
    one center per rotation, then one extra step on the first non-uniform
    orbit if nothing changed. Returns the blocked cells in insertion order.
    """
    board = OrbitBoard(centers, solution)
    for _ in range(rng.next_int(3, 8)):
        board.rotate_orbit(rng.next_int(0, len(centers) - 1), 1)
    if set(board.blocked) == set(solution):
        for i in range(len(centers)):
            if not board.is_uniform(i):
                board.rotate_orbit(i, 1)
                break
    return board.get_blocked_cells()
