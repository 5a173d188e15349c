"""
Puzzle assembler and public entry points.

Each attempt runs: place centers -> place solution blocked cells ->
solve -> scramble. A failed solve (or a scramble with no distinct layout
within the blocked cap) starts a new attempt from fresh draws; once the retries
are used up the static fallback puzzle is returned, so generation never
fails from the caller's point of view.
"""
import datetime
import logging
import secrets
from typing import Optional, Tuple, Union

from orbital_shift.config import GeneratorConfig
from orbital_shift.core.layout import place_centers, place_solution_blocked
from orbital_shift.core.scrambler import scramble_blocked
from orbital_shift.core.solver import solve_orbits
from orbital_shift.core.tiers import DAILY_DIFFICULTY, TUTORIAL_STEPS, get_tier_policy
from orbital_shift.core.types import Center, Difficulty, GenerationResult, Puzzle
from orbital_shift.utils.axial import orbit
from orbital_shift.utils.seeded_random import SeededRandom, date_to_seed

logger = logging.getLogger(__name__)

# Known-valid single orbit: digits 0..5 around (0, 0)
FALLBACK_PUZZLE = Puzzle(centers=(Center(0, 0, 15),), black_hexagons=())
FALLBACK_VALUES = {cell: digit for digit, cell in enumerate(orbit((0, 0), 1))}


class PuzzleGenerator:
    """
    Retry loop around layout, solve and scramble.

    Attributes:
        config: Retry count, solver node cap, rotation range and blocked cap
    """

    def __init__(self, config: Optional[GeneratorConfig] = None):
        self.config = config if config is not None else GeneratorConfig.from_env()

    def generate(self, rng: SeededRandom, difficulty) -> GenerationResult:
        """
        Generate one puzzle for a tier from a random sequence.

        Args:
            rng: Random sequence; all randomness comes from it
            difficulty: Difficulty or tier name

        Returns:
            GenerationResult (the fallback puzzle when every attempt failed)

        Raises:
            ValueError: If the difficulty is unknown
        """
        policy = get_tier_policy(difficulty)
        config = self.config

        for attempt in range(1, config.max_retries + 1):
            centers = place_centers(rng, policy)
            solution_blocked = place_solution_blocked(
                rng, centers, policy, max_per_orbit=config.max_blocked_per_orbit
            )

            solved = solve_orbits(
                rng, centers, solution_blocked,
                constrained=policy.constrained_targets,
                max_nodes=config.max_solver_nodes,
            )
            if not solved.solved:
                logger.debug("%s attempt %d: %s", policy.difficulty.value, attempt, solved.outcome.value)
                continue

            scramble = scramble_blocked(rng, centers, solution_blocked, config)
            if solution_blocked and not scramble.usable:
                logger.debug("%s attempt %d: no distinct starting layout within the blocked cap", policy.difficulty.value, attempt)
                continue

            puzzle = Puzzle(
                centers=tuple(Center(q, r, t) for (q, r), t in zip(centers, solved.targets)),
                black_hexagons=tuple(scramble.black_hexagons),
            )
            logger.info("Generated %s puzzle (seed=%s, attempts=%d)", policy.difficulty.value, rng.seed, attempt)
            return GenerationResult(
                puzzle=puzzle,
                difficulty=policy.difficulty,
                seed=rng.seed,
                attempts=attempt,
                solution_black_hexagons=list(solution_blocked),
                solution_values=solved.assignment,
                rotations=scramble.rotations,
            )

        logger.warning(
            "No %s puzzle after %d attempts (seed=%s); using fallback",
            policy.difficulty.value, config.max_retries, rng.seed
        )
        return GenerationResult(
            puzzle=FALLBACK_PUZZLE,
            difficulty=policy.difficulty,
            seed=rng.seed,
            attempts=config.max_retries,
            used_fallback=True,
            solution_values=dict(FALLBACK_VALUES),
        )


# =============================================================================
# SEEDS
# =============================================================================

def daily_seed(date: Union[str, datetime.date]) -> int:
    """Seed for a calendar date (YYYY-MM-DD string or date)."""
    if isinstance(date, datetime.date):
        date = date.isoformat()
    return date_to_seed(date)


def random_seed() -> int:
    """32-bit seed from the OS entropy source."""
    return secrets.randbits(32)


def tutorial_step(step: int) -> Tuple[int, Difficulty]:
    """
    Fixed (seed, difficulty) of a tutorial step.

    Raises:
        ValueError: If the step does not exist
    """
    if isinstance(step, bool) or not isinstance(step, int) or not (0 <= step < len(TUTORIAL_STEPS)):
        raise ValueError(f"Tutorial step must be 0-{len(TUTORIAL_STEPS) - 1}, got {step!r}")
    return TUTORIAL_STEPS[step]


# =============================================================================
# ENTRY POINTS
# =============================================================================

def generate_puzzle(seed: int, difficulty, config: Optional[GeneratorConfig] = None) -> GenerationResult:
    """Generate from an explicit seed; same seed, tier and config give the same result."""
    return PuzzleGenerator(config).generate(SeededRandom(seed), difficulty)


def generate_daily_result(date: Union[str, datetime.date], config: Optional[GeneratorConfig] = None) -> GenerationResult:
    """Daily challenge with solution details; solves under the daily node cap."""
    config = config if config is not None else GeneratorConfig.from_env()
    return generate_puzzle(daily_seed(date), DAILY_DIFFICULTY, config.for_daily())


def generate_daily_puzzle(date: Union[str, datetime.date], config: Optional[GeneratorConfig] = None) -> Puzzle:
    """The daily challenge: deterministic per date, always the daily tier."""
    return generate_daily_result(date, config).puzzle


def generate_free_play_puzzle(difficulty, config: Optional[GeneratorConfig] = None) -> Puzzle:
    """A fresh, non-reproducible puzzle for the given tier."""
    return generate_puzzle(random_seed(), difficulty, config).puzzle


def generate_tutorial_puzzle(step: int, config: Optional[GeneratorConfig] = None) -> Puzzle:
    """The fixed puzzle for a tutorial step (0 = beginner, 1 = easy, 2 = medium)."""
    seed, difficulty = tutorial_step(step)
    return generate_puzzle(seed, difficulty, config).puzzle
