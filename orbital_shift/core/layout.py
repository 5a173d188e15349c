"""
Center layout and solution blocked-cell placement.
"""
import logging
from typing import Dict, List, Optional, Sequence

from orbital_shift.core.tiers import TierPolicy
from orbital_shift.core.types import Hex
from orbital_shift.utils.axial import orbit
from orbital_shift.utils.seeded_random import SeededRandom

logger = logging.getLogger(__name__)


def place_centers(rng: SeededRandom, policy: TierPolicy) -> List[Hex]:
    """
    Pick one of the tier's templates and translate it by a random offset.

    Args:
        rng: Random sequence (draws: template index, q offset, r offset)
        policy: Tier policy providing the template catalog

    Returns:
        Center coordinates, in template order
    """
    templates = policy.templates
    template = templates[rng.next_int(0, len(templates) - 1)]

    offset_q = rng.next_int(-1, 1)
    offset_r = rng.next_int(-1, 1)

    return [(q + offset_q, r + offset_r) for (q, r) in template]


def orbit_candidates(centers: Sequence[Hex]) -> List[Hex]:
    """All distinct orbit cells of `centers` that are not centers themselves, in orbit order."""
    center_set = set(centers)
    seen: Dict[Hex, None] = {}
    for center in centers:
        for cell in orbit(center, 1):
            if cell not in center_set:
                seen.setdefault(cell, None)
    return list(seen)


def place_solution_blocked(
    rng: SeededRandom,
    centers: Sequence[Hex],
    policy: TierPolicy,
    max_per_orbit: int = 2,
) -> List[Hex]:
    """
    Choose the blocked cells of the solved layout.

    Candidates are shuffled and accepted greedily until the tier's count
    is reached; a candidate is rejected when any orbit containing it
    already holds `max_per_orbit` blocked cells.

    Args:
        rng: Random sequence (draws: count when the range is not a single
            value, then one shuffle of the candidates)
        centers: Placed center coordinates
        policy: Tier policy providing the blocked-count range
        max_per_orbit: Blocked cells allowed per orbit

    Returns:
        Blocked coordinates in acceptance order (empty for tiers without blocked cells)
    """
    count = _draw_blocked_count(rng, policy)
    if not count:
        return []

    orbits = [set(orbit(center, 1)) for center in centers]
    candidates = rng.shuffle(orbit_candidates(centers))

    blocked: List[Hex] = []
    blocked_per_orbit = [0] * len(centers)
    for cell in candidates:
        if len(blocked) >= count:
            break

        owners = [i for i, cells in enumerate(orbits) if cell in cells]
        if any(blocked_per_orbit[i] >= max_per_orbit for i in owners):
            continue

        blocked.append(cell)
        for i in owners:
            blocked_per_orbit[i] += 1

    if len(blocked) < count:
        logger.debug("Placed %d of %d blocked cells (orbit cap %d)", len(blocked), count, max_per_orbit)
    return blocked


def _draw_blocked_count(rng: SeededRandom, policy: TierPolicy) -> Optional[int]:
    if policy.blocked_range is None:
        return None
    low, high = policy.blocked_range
    if low == high:
        return low
    return rng.next_int(low, high)
