"""
Orbital Shift - Core Package
Layout, solver, scrambler, board rules and the puzzle assembler.
"""
from .types import CellRole, Center, Difficulty, GenerationResult, Puzzle, SolveOutcome, ValidationError
from .board import OrbitBoard
from .commands import BatchCommand, Command, CommandHistory, RotateOrbitCommand
from .solver import OrbitSolver
from .generator import (
    PuzzleGenerator,
    generate_puzzle,
    generate_daily_puzzle,
    generate_daily_result,
    generate_free_play_puzzle,
    generate_tutorial_puzzle,
)

__all__ = [
    'CellRole', 'Center', 'Difficulty', 'GenerationResult', 'Puzzle', 'SolveOutcome', 'ValidationError',
    'OrbitBoard', 'BatchCommand', 'Command', 'CommandHistory', 'RotateOrbitCommand', 'OrbitSolver',
    'PuzzleGenerator', 'generate_puzzle', 'generate_daily_puzzle', 'generate_daily_result',
    'generate_free_play_puzzle', 'generate_tutorial_puzzle',
]
