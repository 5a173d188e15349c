"""
Puzzle assembler:
- Same seed and tier always give the same puzzle
- Every tier yields a structurally valid, solvable, scrambled puzzle
- Exhausted retries fall back to the static puzzle
- Daily, free-play and tutorial entry points
"""
import datetime

import pytest

from orbital_shift.config import GeneratorConfig
from orbital_shift.core.board import OrbitBoard
from orbital_shift.core.generator import (
    FALLBACK_PUZZLE,
    PuzzleGenerator,
    daily_seed,
    generate_daily_puzzle,
    generate_daily_result,
    generate_free_play_puzzle,
    generate_puzzle,
    generate_tutorial_puzzle,
    tutorial_step,
)
from orbital_shift.core.layout import place_centers, place_solution_blocked
from orbital_shift.core.scrambler import unscramble
from orbital_shift.core.solver import solve_orbits
from orbital_shift.core.tiers import DAILY_DIFFICULTY, TIER_POLICIES, get_tier_policy, target_range_for
from orbital_shift.core.types import Center, Difficulty, Puzzle
from orbital_shift.utils.seeded_random import SeededRandom, date_to_seed

from conftest import plain_scramble


def _check_result(result):
    puzzle = result.puzzle
    centers = [c.coord for c in puzzle.centers]
    targets = [c.target for c in puzzle.centers]

    start = OrbitBoard(centers, puzzle.black_hexagons, targets)
    assert [e for e in start.validate_puzzle() if e.severity == "error"] == []

    solved = OrbitBoard(centers, result.solution_black_hexagons, targets)
    assert solved.validate_puzzle() == []
    assert solved.validate_assignment(result.solution_values) == []

    recovered = unscramble(centers, puzzle.black_hexagons, result.rotations)
    assert set(recovered) == set(result.solution_black_hexagons)
    return solved


@pytest.mark.parametrize("difficulty", list(Difficulty))
def test_every_tier_generates_valid_puzzles(difficulty):
    generated = 0
    for seed in range(6):
        result = generate_puzzle(seed, difficulty)
        assert result.difficulty == difficulty
        assert result.seed == seed
        solved = _check_result(result)
        if result.used_fallback:
            assert result.puzzle == FALLBACK_PUZZLE
            continue

        generated += 1
        assert len(result.puzzle.centers) == TIER_POLICIES[difficulty].center_count
        if TIER_POLICIES[difficulty].constrained_targets:
            for i, target in enumerate(solved.targets):
                low, high = target_range_for(solved.fillable_in_orbit(i))
                assert low <= target <= high

        if result.solution_black_hexagons:
            assert set(result.puzzle.black_hexagons) != set(result.solution_black_hexagons)
    assert generated > 0


def test_beginner_has_no_blocked_cells_and_full_orbit_target():
    for seed in range(10):
        puzzle = generate_puzzle(seed, Difficulty.BEGINNER).puzzle
        assert puzzle.black_hexagons == ()
        assert len(puzzle.centers) == 1
        assert 15 <= puzzle.centers[0].target <= 39


def test_generation_is_deterministic():
    for difficulty in (Difficulty.EASY, Difficulty.HARD):
        a = generate_puzzle(1234, difficulty)
        b = generate_puzzle(1234, difficulty)
        assert a.puzzle == b.puzzle
        assert a.solution_values == b.solution_values
        assert a.rotations == b.rotations


def test_different_seeds_differ():
    puzzles = {generate_puzzle(seed, Difficulty.MEDIUM).puzzle for seed in range(8)}
    assert len(puzzles) > 1


def test_generation_result_accepts_tier_names():
    assert generate_puzzle(7, "Hard").difficulty == Difficulty.HARD


def test_unknown_difficulty_raises():
    with pytest.raises(ValueError):
        generate_puzzle(1, "impossible")


def test_fallback_after_exhausted_retries():
    config = GeneratorConfig(max_retries=2, max_solver_nodes=1)
    result = generate_puzzle(99, Difficulty.EASY, config)
    assert result.used_fallback
    assert result.puzzle == FALLBACK_PUZZLE
    assert result.attempts == 2
    _check_result(result)


def test_generator_reads_environment(monkeypatch):
    monkeypatch.setenv("ORBITAL_SHIFT_MAX_RETRIES", "3")
    monkeypatch.setenv("ORBITAL_SHIFT_MAX_SOLVER_NODES", "1")
    generator = PuzzleGenerator()
    assert generator.config.max_retries == 3
    assert generate_puzzle(5, Difficulty.MEDIUM).used_fallback


def test_bad_environment_value(monkeypatch):
    monkeypatch.setenv("ORBITAL_SHIFT_MAX_RETRIES", "many")
    with pytest.raises(ValueError):
        GeneratorConfig.from_env()


# =============================================================================
# ENTRY POINTS
# =============================================================================

def test_daily_puzzle_is_stable_per_date():
    a = generate_daily_puzzle("2026-10-19")
    b = generate_daily_puzzle(datetime.date(2026, 10, 19))
    assert a == b
    assert isinstance(a, Puzzle)
    assert a == FALLBACK_PUZZLE or len(a.centers) == TIER_POLICIES[Difficulty.EXTREME].center_count


def test_daily_seed_matches_string_hash():
    assert daily_seed("2026-10-19") == date_to_seed("2026-10-19")
    assert daily_seed(datetime.date(2026, 10, 19)) == date_to_seed("2026-10-19")
    assert daily_seed("2026-10-19") != daily_seed("2026-10-20")
    assert daily_seed("2026-10-19") == 1162559499


def test_tutorial_progression():
    sizes = [len(generate_tutorial_puzzle(step).centers) for step in range(3)]
    assert sizes == [1, 3, 4]
    assert generate_tutorial_puzzle(1) == generate_tutorial_puzzle(1)
    assert tutorial_step(0) == (42, Difficulty.BEGINNER)


@pytest.mark.parametrize("step", [-1, 3, "1", True])
def test_tutorial_step_out_of_range(step):
    with pytest.raises(ValueError):
        generate_tutorial_puzzle(step)


def test_free_play_returns_valid_puzzle():
    puzzle = generate_free_play_puzzle("easy")
    board = OrbitBoard.from_puzzle(puzzle)
    assert [e for e in board.validate_puzzle() if e.severity == "error"] == []
    assert len(puzzle.centers) == 3


@pytest.mark.parametrize("date", ["2026-02-12", "2026-02-18"])
def test_daily_matches_plain_generation(date):
    # Same draws as the assembler, with a scramble that never checks the cap mid-way
    config = GeneratorConfig()
    policy = get_tier_policy(DAILY_DIFFICULTY)
    rng = SeededRandom(daily_seed(date))
    for _ in range(config.max_retries):
        centers = place_centers(rng, policy)
        blocked = place_solution_blocked(rng, centers, policy)
        solved = solve_orbits(rng, centers, blocked, max_nodes=config.daily_max_solver_nodes)
        if solved.solved:
            break
    assert solved.solved
    start = plain_scramble(rng, centers, blocked)
    assert OrbitBoard(centers, start).orbits_over_cap() == []

    expected = Puzzle(
        centers=tuple(Center(q, r, t) for (q, r), t in zip(centers, solved.targets)),
        black_hexagons=tuple(start),
    )
    assert generate_daily_puzzle(date, config) == expected


def test_daily_uses_its_own_node_cap():
    config = GeneratorConfig(max_retries=2, daily_max_solver_nodes=1)
    assert config.for_daily().max_solver_nodes == 1
    assert GeneratorConfig(max_solver_nodes=1).for_daily().max_solver_nodes == 2_000_000
    result = generate_daily_result("2026-10-19", config)
    assert result.used_fallback
    assert result.difficulty == DAILY_DIFFICULTY


def test_daily_node_cap_from_environment(monkeypatch):
    monkeypatch.setenv("ORBITAL_SHIFT_DAILY_MAX_SOLVER_NODES", "5000")
    assert GeneratorConfig.from_env().daily_max_solver_nodes == 5000
    monkeypatch.setenv("ORBITAL_SHIFT_DAILY_MAX_SOLVER_NODES", "0")
    with pytest.raises(ValueError):
        GeneratorConfig.from_env()


@pytest.mark.slow
@pytest.mark.parametrize("difficulty", list(Difficulty))
def test_totality_sweep(difficulty):
    for seed in range(1000):
        result = generate_puzzle(seed, difficulty, GeneratorConfig())
        _check_result(result)
