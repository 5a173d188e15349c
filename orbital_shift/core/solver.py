"""
Exact backtracking solver for orbit digit assignments.

Two modes share one search:
- free: any assignment with distinct digits per orbit; targets are read
  off the result
- constrained: targets are drawn first from the range implied by each
  orbit's fillable count, and partial sums are pruned against the
  smallest/largest completions still possible

Open cells are assigned most-constrained first (cells shared by more
orbits come earlier); ties keep orbit order. Each cell tries digits in
its own shuffled order, so the solution depends on the random sequence.
"""
import logging
from typing import Dict, List, Optional, Sequence, Set, Tuple

from orbital_shift.core.tiers import target_range_for
from orbital_shift.core.types import Hex, SolveOutcome, SolveResult
from orbital_shift.utils.axial import orbit
from orbital_shift.utils.seeded_random import SeededRandom

logger = logging.getLogger(__name__)

DIGITS: Tuple[int, ...] = tuple(range(10))


def completion_bounds(used: Set[int], remaining: int, exclude: Optional[int] = None) -> Optional[Tuple[int, int]]:
    """
    Smallest and largest sum of `remaining` distinct digits not in `used`.

    Args:
        used: Digits already placed in the orbit
        remaining: Open cells of the orbit still to fill
        exclude: One more digit treated as used (the tentative placement)

    Returns:
        (min_sum, max_sum), or None when fewer than `remaining` digits are left
    """
    available = [d for d in DIGITS if d not in used and d != exclude]
    if len(available) < remaining:
        return None
    if remaining == 0:
        return 0, 0
    return sum(available[:remaining]), sum(available[-remaining:])


def draw_targets(rng: SeededRandom, fillable_counts: Sequence[int]) -> List[int]:
    """One target per orbit, drawn from the range for its fillable count."""
    targets = []
    for fillable in fillable_counts:
        low, high = target_range_for(fillable)
        targets.append(rng.next_int(low, high))
    return targets


class OrbitSolver:
    """
    Backtracking search over the open cells of a set of orbits.

    Attributes:
        centers: Center coordinates; orbit i belongs to centers[i]
        blocked: Cells excluded from every orbit
        positions: Open cells with their owning orbit indices, in search order
        fillable_counts: Open cells per orbit
        max_nodes: Search nodes allowed before giving up
    """

    def __init__(self, centers: Sequence[Hex], blocked: Sequence[Hex] = (), max_nodes: int = 100_000):
        self.centers: List[Hex] = list(centers)
        self.blocked: Set[Hex] = set(blocked)
        self.max_nodes = max_nodes

        center_set = set(self.centers)
        owners: Dict[Hex, List[int]] = {}
        self.fillable_counts: List[int] = []
        for ci, center in enumerate(self.centers):
            fillable = 0
            for cell in orbit(center, 1):
                if cell in center_set or cell in self.blocked:
                    continue
                owners.setdefault(cell, []).append(ci)
                fillable += 1
            self.fillable_counts.append(fillable)

        self.positions: List[Tuple[Hex, List[int]]] = sorted(
            owners.items(), key=lambda item: -len(item[1])
        )

        # Search state, reset per solve
        self._targets: Optional[List[int]] = None
        self._digit_orders: List[List[int]] = []
        self._assignment: List[Optional[int]] = []
        self._orbit_used: List[Set[int]] = []
        self._orbit_sum: List[int] = []
        self._orbit_remaining: List[int] = []
        self._nodes = 0
        self._limit_hit = False

    # =============================================================================
    # PUBLIC API
    # =============================================================================

    def solve_free(self, rng: SeededRandom) -> SolveResult:
        """
        Find any assignment with distinct digits per orbit and derive targets from it.

        Draws one digit shuffle per open cell.
        """
        return self._run(rng, targets=None)

    def solve_constrained(self, rng: SeededRandom, targets: Optional[Sequence[int]] = None) -> SolveResult:
        """
        Find an assignment whose orbit sums hit the targets.

        Args:
            rng: Random sequence (draws: one target per orbit unless given,
                then one digit shuffle per open cell)
            targets: Pre-chosen targets; drawn from the fillable-count ranges when None

        Returns:
            SolveResult; not solved when the search is exhausted or the node cap is hit
        """
        if targets is None:
            targets = draw_targets(rng, self.fillable_counts)
        elif len(targets) != len(self.centers):
            raise ValueError(f"Expected {len(self.centers)} targets, got {len(targets)}")
        return self._run(rng, targets=list(targets))

    # =============================================================================
    # SEARCH
    # =============================================================================

    def _reset(self, targets: Optional[List[int]]) -> None:
        n = len(self.centers)
        self._targets = targets
        self._assignment = [None] * len(self.positions)
        self._orbit_used = [set() for _ in range(n)]
        self._orbit_sum = [0] * n
        self._orbit_remaining = list(self.fillable_counts)
        self._nodes = 0
        self._limit_hit = False

    def _run(self, rng: SeededRandom, targets: Optional[List[int]]) -> SolveResult:
        self._reset(targets)
        self._digit_orders = [rng.shuffle(DIGITS) for _ in self.positions]

        if not self._backtrack(0):
            outcome = SolveOutcome.LIMIT_REACHED if self._limit_hit else SolveOutcome.NO_SOLUTION
            logger.debug("Solver gave up: %s after %d nodes (targets=%s)", outcome.value, self._nodes, targets)
            return SolveResult(outcome, targets=targets, nodes=self._nodes)

        assignment = {cell: digit for (cell, _), digit in zip(self.positions, self._assignment)}
        if targets is None:
            targets = list(self._orbit_sum)
        return SolveResult(SolveOutcome.SOLVED, targets=targets, assignment=assignment, nodes=self._nodes)

    def _backtrack(self, idx: int) -> bool:
        if idx == len(self.positions):
            return self._targets is None or self._orbit_sum == self._targets

        self._nodes += 1
        if self._nodes > self.max_nodes:
            self._limit_hit = True
            return False

        _, owners = self.positions[idx]
        for digit in self._digit_orders[idx]:
            if any(digit in self._orbit_used[oi] for oi in owners):
                continue
            if self._targets is not None and not self._feasible(owners, digit):
                continue

            self._place(idx, owners, digit)
            if self._backtrack(idx + 1):
                return True
            self._unplace(idx, owners, digit)

            if self._limit_hit:
                return False

        return False

    def _feasible(self, owners: List[int], digit: int) -> bool:
        """Whether every owning orbit can still reach its target after placing `digit`."""
        for oi in owners:
            new_sum = self._orbit_sum[oi] + digit
            remaining = self._orbit_remaining[oi] - 1
            target = self._targets[oi]

            if remaining == 0:
                if new_sum != target:
                    return False
                continue

            bounds = completion_bounds(self._orbit_used[oi], remaining, exclude=digit)
            if bounds is None:
                return False
            low, high = bounds
            if not (new_sum + low <= target <= new_sum + high):
                return False
        return True

    def _place(self, idx: int, owners: List[int], digit: int) -> None:
        self._assignment[idx] = digit
        for oi in owners:
            self._orbit_used[oi].add(digit)
            self._orbit_sum[oi] += digit
            self._orbit_remaining[oi] -= 1

    def _unplace(self, idx: int, owners: List[int], digit: int) -> None:
        self._assignment[idx] = None
        for oi in owners:
            self._orbit_used[oi].discard(digit)
            self._orbit_sum[oi] -= digit
            self._orbit_remaining[oi] += 1


def solve_orbits(
    rng: SeededRandom,
    centers: Sequence[Hex],
    blocked: Sequence[Hex] = (),
    constrained: bool = True,
    max_nodes: int = 100_000,
) -> SolveResult:
    """Convenience wrapper: build an OrbitSolver and run the requested mode."""
    solver = OrbitSolver(centers, blocked, max_nodes=max_nodes)
    if constrained:
        return solver.solve_constrained(rng)
    return solver.solve_free(rng)
