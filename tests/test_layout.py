"""
Center placement and solution blocked-cell placement.
"""
import pytest

from orbital_shift.core.layout import orbit_candidates, place_centers, place_solution_blocked
from orbital_shift.core.tiers import TIER_POLICIES, get_tier_policy
from orbital_shift.core.types import Difficulty
from orbital_shift.utils.axial import distance, orbit


@pytest.mark.parametrize("difficulty", list(Difficulty))
def test_centers_are_a_translated_template(difficulty, make_rng):
    policy = TIER_POLICIES[difficulty]
    for seed in range(20):
        centers = place_centers(make_rng(seed), policy)
        matches = []
        for template in policy.templates:
            dq = centers[0][0] - template[0][0]
            dr = centers[0][1] - template[0][1]
            if [(q + dq, r + dr) for (q, r) in template] == centers:
                matches.append((dq, dr))
        assert matches, f"{centers} is not a translated template"
        assert all(-1 <= dq <= 1 and -1 <= dr <= 1 for dq, dr in matches)


@pytest.mark.parametrize("policy", list(TIER_POLICIES.values()), ids=lambda p: p.difficulty.value)
def test_templates_never_put_a_center_in_another_orbit(policy):
    for template in policy.templates:
        assert len(set(template)) == len(template)
        for a in template:
            for b in template:
                if a != b:
                    assert distance(a, b) >= 2


def test_orbit_candidates_exclude_centers_and_duplicates():
    centers = [(0, 0), (2, 0)]
    candidates = orbit_candidates(centers)
    assert len(candidates) == len(set(candidates)) == 11  # one shared cell
    assert not set(centers) & set(candidates)
    assert candidates[:6] == orbit((0, 0), 1)


def test_beginner_places_no_blocked_cells_and_draws_nothing(make_rng):
    rng = make_rng(1)
    policy = get_tier_policy("beginner")
    assert place_solution_blocked(rng, [(0, 0)], policy) == []
    assert rng.next_float() == make_rng(1).next_float()


@pytest.mark.parametrize("difficulty", [d for d in Difficulty if d != Difficulty.BEGINNER])
def test_blocked_cells_respect_count_and_orbit_cap(difficulty, make_rng):
    policy = TIER_POLICIES[difficulty]
    low, high = policy.blocked_range
    for seed in range(30):
        rng = make_rng(seed)
        centers = place_centers(rng, policy)
        blocked = place_solution_blocked(rng, centers, policy, max_per_orbit=2)

        assert len(blocked) == len(set(blocked))
        assert len(blocked) <= high
        assert not set(blocked) & set(centers)
        candidates = set(orbit_candidates(centers))
        assert set(blocked) <= candidates
        for center in centers:
            assert len(set(orbit(center, 1)) & set(blocked)) <= 2


def test_easy_tier_blocks_exactly_two(make_rng):
    policy = get_tier_policy(Difficulty.EASY)
    for seed in range(10):
        rng = make_rng(seed)
        centers = place_centers(rng, policy)
        assert len(place_solution_blocked(rng, centers, policy)) == 2


def test_cap_of_zero_blocks_nothing(make_rng):
    policy = get_tier_policy(Difficulty.HARD)
    rng = make_rng(4)
    centers = place_centers(rng, policy)
    assert place_solution_blocked(rng, centers, policy, max_per_orbit=0) == []


def test_placement_is_deterministic(make_rng):
    policy = get_tier_policy("insane")

    def run(seed):
        rng = make_rng(seed)
        centers = place_centers(rng, policy)
        return centers, place_solution_blocked(rng, centers, policy)

    assert run(2024) == run(2024)
