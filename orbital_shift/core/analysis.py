"""
Puzzle-space analysis.

Counts how many sets of distinct digits 0-9 reach each sum, per number
of fillable cells. Used to report the target space of each tier band,
to check that the bands cannot be confused with one another, and to
measure how ambiguous a generated orbit is.
"""
from typing import Dict, List, Optional

import numpy as np

from orbital_shift.core.board import OrbitBoard
from orbital_shift.core.tiers import TARGET_RANGES

MAX_DIGIT_SUM = 45  # 0 + 1 + ... + 9

_TABLE: Optional[np.ndarray] = None


def combination_table() -> np.ndarray:
    """
    table[k, s] = number of k-element sets of distinct digits 0-9 summing to s.

    Returns:
        int64 array of shape (11, 46); a copy, safe to modify
    """
    global _TABLE
    if _TABLE is None:
        table = np.zeros((11, MAX_DIGIT_SUM + 1), dtype=np.int64)
        table[0, 0] = 1
        for digit in range(10):
            # Descending k so each digit is used at most once
            for k in range(10, 0, -1):
                table[k, digit:] += table[k - 1, :MAX_DIGIT_SUM + 1 - digit]
        _TABLE = table
    return _TABLE.copy()


def target_space_report(max_fillable: int = 6) -> List[Dict]:
    """
    Target space per fillable-cell count.

    Returns:
        One dict per fillable count 1..max_fillable with keys fillable,
        min_sum, max_sum, reachable_targets, combinations, band (tier
        target range or None), band_targets and band_combinations
    """
    table = combination_table()
    report = []
    for fillable in range(1, max_fillable + 1):
        row = table[fillable]
        reachable = np.nonzero(row)[0]
        entry = {
            "fillable": fillable,
            "min_sum": int(reachable.min()),
            "max_sum": int(reachable.max()),
            "reachable_targets": int(reachable.size),
            "combinations": int(row.sum()),
            "band": TARGET_RANGES.get(fillable),
            "band_targets": 0,
            "band_combinations": 0,
        }
        if entry["band"] is not None:
            low, high = entry["band"]
            band = row[low:high + 1]
            entry["band_targets"] = int(np.count_nonzero(band))
            entry["band_combinations"] = int(band.sum())
        report.append(entry)
    return report


def target_ranges_are_exclusive() -> bool:
    """
    True when every tier band is fully reachable with its fillable count
    and lies below the smallest sum of the next larger fillable count.
    """
    table = combination_table()
    for fillable, (low, high) in TARGET_RANGES.items():
        if not np.all(table[fillable, low:high + 1] > 0):
            return False
        larger = fillable + 1
        if larger in TARGET_RANGES:
            smallest_larger = int(np.nonzero(table[larger])[0].min())
            if high >= smallest_larger:
                return False
    return True


def orbit_ambiguity(board: OrbitBoard) -> List[int]:
    """
    Digit sets matching each orbit's target with its current fillable count.

    Args:
        board: Board with targets

    Returns:
        One count per orbit (0 when the target is unreachable)
    """
    if board.targets is None:
        raise ValueError("Board has no targets")
    table = combination_table()
    counts = []
    for i, target in enumerate(board.targets):
        fillable = board.fillable_in_orbit(i)
        if 0 <= target <= MAX_DIGIT_SUM:
            counts.append(int(table[fillable, target]))
        else:
            counts.append(0)
    return counts
