"""
Blocked-cell scrambler.

Moves the solved blocked layout to a starting layout using only orbit
rotations, the same move a player has. Undoing the recorded rotations
restores the solved layout, so every starting layout is solvable.
"""
import logging
from typing import List, Sequence, Tuple

from orbital_shift.config import DEFAULT_CONFIG, GeneratorConfig
from orbital_shift.core.board import OrbitBoard
from orbital_shift.core.commands import CommandHistory
from orbital_shift.core.types import Hex, ScrambleResult
from orbital_shift.utils.seeded_random import SeededRandom

logger = logging.getLogger(__name__)


def scramble_blocked(
    rng: SeededRandom,
    centers: Sequence[Hex],
    solution_blocked: Sequence[Hex],
    config: GeneratorConfig = DEFAULT_CONFIG,
) -> ScrambleResult:
    """
    Apply random single-step orbit rotations to the solved blocked layout.

    Draws the rotation count, then one center index per rotation, and
    applies every drawn rotation. Only the final layout is checked: if it
    equals the solved layout or leaves some orbit above the blocked cap,
    one more rotation is tried on each non-uniform orbit in turn (one
    step first) until the layout differs and respects the cap.

    Args:
        rng: Random sequence
        centers: Center coordinates
        solution_blocked: Blocked cells of the solved layout
        config: Rotation count range and blocked cap

    Returns:
        ScrambleResult with the starting layout, the applied rotations,
        whether it differs from the solved layout and whether it respects
        the cap. An empty solved layout is returned unchanged without drawing.
    """
    if not solution_blocked:
        return ScrambleResult([], [], distinct=False)

    board = OrbitBoard(centers, solution_blocked, max_blocked_per_orbit=config.max_blocked_per_orbit)
    # Room for every drawn rotation plus the settling one
    board.command_history = CommandHistory(max_history=config.max_rotations + 1)
    goal = set(board.blocked)

    rotation_count = rng.next_int(config.min_rotations, config.max_rotations)
    for _ in range(rotation_count):
        board.cmd_rotate_orbit(rng.next_int(0, len(centers) - 1), 1)

    if set(board.blocked) == goal or board.orbits_over_cap():
        _settle(board, goal)

    return ScrambleResult(
        black_hexagons=board.get_blocked_cells(),
        rotations=board.command_history.applied_rotations(),
        distinct=set(board.blocked) != goal,
        within_cap=not board.orbits_over_cap(),
    )


def _settle(board: OrbitBoard, goal: set) -> None:
    for index in range(len(board.centers)):
        if board.is_uniform(index):
            continue
        for steps in range(1, 6):
            board.cmd_rotate_orbit(index, steps)
            if not board.orbits_over_cap() and set(board.blocked) != goal:
                logger.debug("Settling rotation of orbit %d by %d", index, steps)
                return
            board.undo()
    logger.debug("No single rotation gives a distinct layout within the blocked cap")


def unscramble(centers: Sequence[Hex], start_blocked: Sequence[Hex],
               rotations: Sequence[Tuple[int, int]]) -> List[Hex]:
    """Undo `rotations` (last first) starting from `start_blocked`; returns the recovered layout."""
    board = OrbitBoard(centers, start_blocked)
    for index, steps in reversed(rotations):
        board.rotate_orbit(index, -steps)
    return board.get_blocked_cells()
