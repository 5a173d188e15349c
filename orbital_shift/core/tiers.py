"""
Difficulty tier catalog: center layout templates, blocked-cell counts
and target policy.

Templates are relative (q, r) offsets. Within a template, centers that
should share orbit cells sit at distance exactly 2; no center lies
inside another center's orbit.
"""
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from orbital_shift.core.types import Difficulty, Hex

Template = Tuple[Hex, ...]


@dataclass(frozen=True)
class TierPolicy:
    """
    Per-tier generation policy.

    Attributes:
        difficulty: The tier this policy describes
        templates: Candidate center layouts, one picked uniformly
        blocked_range: Inclusive (min, max) blocked-cell count, None for no blocked cells
        constrained_targets: Draw targets first and solve towards them (False: derive
            targets from a free assignment)
    """
    difficulty: Difficulty
    templates: Tuple[Template, ...]
    blocked_range: Optional[Tuple[int, int]]
    constrained_targets: bool

    @property
    def center_count(self) -> int:
        return len(self.templates[0])


TIER_POLICIES: Dict[Difficulty, TierPolicy] = {
    Difficulty.BEGINNER: TierPolicy(
        Difficulty.BEGINNER,
        templates=(
            # Single orbit
            ((0, 0),),
            ((0, 0),),
            ((0, 0),),
            ((0, 0),),
        ),
        blocked_range=None,
        constrained_targets=False,
    ),
    Difficulty.EASY: TierPolicy(
        Difficulty.EASY,
        templates=(
            ((0, 0), (2, 0), (4, 0)),
            ((0, 0), (0, 2), (0, 4)),
            ((0, 0), (2, 0), (-1, 3)),
            ((0, 0), (2, -2), (0, 3)),
        ),
        blocked_range=(2, 2),
        constrained_targets=True,
    ),
    Difficulty.MEDIUM: TierPolicy(
        Difficulty.MEDIUM,
        templates=(
            ((0, 0), (2, 0), (4, 0), (2, 2)),
            ((0, 0), (2, 0), (4, 0), (2, -2)),
            ((0, 0), (0, 2), (0, 4), (2, 2)),
            ((0, 0), (2, 0), (4, 0), (4, -2)),
        ),
        blocked_range=(2, 3),
        constrained_targets=True,
    ),
    Difficulty.HARD: TierPolicy(
        Difficulty.HARD,
        templates=(
            ((0, 0), (2, 0), (4, 0), (2, 2), (2, -2)),
            ((0, 0), (2, 0), (4, 0), (6, 0), (4, -2)),
            ((0, 0), (2, 0), (1, 2), (3, 2), (2, 4)),
            ((0, 0), (2, 0), (4, 0), (2, 2), (4, 2)),
        ),
        blocked_range=(3, 5),
        constrained_targets=True,
    ),
    Difficulty.EXTREME: TierPolicy(
        Difficulty.EXTREME,
        templates=(
            # Ring of six around an empty middle
            ((2, 0), (1, 2), (-1, 2), (-2, 0), (-1, -2), (1, -2)),
            ((0, 0), (2, 0), (4, 0), (1, 2), (3, 2), (5, 2)),
            ((0, 0), (2, 0), (4, 0), (1, 2), (3, 2), (2, 4)),
            ((0, 0), (2, 0), (1, 2), (3, 2), (0, 4), (2, 4)),
        ),
        blocked_range=(4, 6),
        constrained_targets=True,
    ),
    Difficulty.INSANE: TierPolicy(
        Difficulty.INSANE,
        templates=(
            # Flower: hub with six petals at distance 2
            ((0, 0), (2, 0), (0, 2), (-2, 2), (-2, 0), (0, -2), (2, -2)),
            # 4 + 3 rows
            ((0, 0), (2, 0), (4, 0), (6, 0), (0, 2), (2, 2), (4, 2)),
            # 3 + 2 + 2 triangle
            ((0, 0), (2, 0), (4, 0), (1, 2), (3, 2), (0, 4), (2, 4)),
            # 3 + 3 + 1 diamond
            ((0, 0), (2, 0), (4, 0), (0, 2), (2, 2), (4, 2), (2, 4)),
        ),
        blocked_range=(5, 7),
        constrained_targets=True,
    ),
}

# Target range per fillable-cell count. The ranges do not overlap, so a
# target alone tells how many cells of its orbit are blocked.
TARGET_RANGES: Dict[int, Tuple[int, int]] = {
    4: (6, 9),
    5: (10, 14),
    6: (15, 39),
}

# Tutorial steps: (seed, tier)
TUTORIAL_STEPS: Tuple[Tuple[int, Difficulty], ...] = (
    (42, Difficulty.BEGINNER),
    (137, Difficulty.EASY),
    (256, Difficulty.MEDIUM),
)

DAILY_DIFFICULTY = Difficulty.EXTREME


def get_tier_policy(difficulty) -> TierPolicy:
    """Look up the policy for a Difficulty or tier name."""
    return TIER_POLICIES[Difficulty.parse(difficulty)]


def target_range_for(fillable: int) -> Tuple[int, int]:
    """Inclusive target range for an orbit with `fillable` open cells (4 or fewer share the lowest band)."""
    if fillable <= 4:
        return TARGET_RANGES[4]
    if fillable == 5:
        return TARGET_RANGES[5]
    return TARGET_RANGES[6]
