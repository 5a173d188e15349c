"""
Orbital Shift - hexagonal orbit-sum puzzle generator.
"""
from orbital_shift.core import (
    Center,
    Difficulty,
    Puzzle,
    generate_daily_puzzle,
    generate_free_play_puzzle,
    generate_tutorial_puzzle,
)

__version__ = "0.1.0"

__all__ = [
    'Center', 'Difficulty', 'Puzzle',
    'generate_daily_puzzle', 'generate_free_play_puzzle', 'generate_tutorial_puzzle',
]
