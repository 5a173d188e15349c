"""
Digit-sum target space:
- Combination counts for sets of distinct digits
- Tier target bands are reachable and cannot be confused
- Per-orbit ambiguity of a board
"""
import numpy as np
import pytest

from orbital_shift.core.analysis import (
    combination_table,
    orbit_ambiguity,
    target_ranges_are_exclusive,
    target_space_report,
)
from orbital_shift.core.board import OrbitBoard


def test_combination_table_shape_and_totals():
    table = combination_table()
    assert table.shape == (11, 46)
    # Total k-subsets of ten digits is C(10, k)
    assert list(table.sum(axis=1)) == [1, 10, 45, 120, 210, 252, 210, 120, 45, 10, 1]


def test_combination_counts_for_six_cells():
    table = combination_table()
    assert table[6, 15] == 1   # 0..5
    assert table[6, 39] == 1   # 4..9
    assert table[6, 14] == 0
    assert table[6, 18] == 3
    assert table[6, 19] == 5


def test_combination_table_returns_copy():
    table = combination_table()
    table[:] = 0
    assert combination_table()[0, 0] == 1


def test_target_ranges_are_exclusive():
    assert target_ranges_are_exclusive()


def test_target_space_report_rows():
    report = target_space_report()
    assert [row["fillable"] for row in report] == [1, 2, 3, 4, 5, 6]

    six = report[-1]
    assert (six["min_sum"], six["max_sum"]) == (15, 39)
    assert six["reachable_targets"] == 25
    assert six["combinations"] == 210
    assert six["band"] == (15, 39)
    assert six["band_targets"] == 25
    assert six["band_combinations"] == 210

    four = report[3]
    assert four["band"] == (6, 9)
    assert four["band_targets"] == 4
    assert report[0]["band"] is None


def test_orbit_ambiguity(single_orbit_board, pair_board):
    assert orbit_ambiguity(single_orbit_board) == [int(combination_table()[6, 15])]

    table = combination_table()
    expected = [int(table[pair_board.fillable_in_orbit(i), t]) for i, t in enumerate(pair_board.targets)]
    assert orbit_ambiguity(pair_board) == expected
    assert all(count > 0 for count in expected)


def test_orbit_ambiguity_unreachable_target():
    board = OrbitBoard([(0, 0)], [], [50])
    assert orbit_ambiguity(board) == [0]


def test_orbit_ambiguity_requires_targets():
    with pytest.raises(ValueError):
        orbit_ambiguity(OrbitBoard([(0, 0)]))


def test_table_dtype():
    assert combination_table().dtype == np.int64
