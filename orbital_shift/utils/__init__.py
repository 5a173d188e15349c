"""
Orbital Shift - Utilities Package
Axial coordinate helpers, coordinate keys and the seeded random sequence.
"""
from .axial import Hex, AXIAL_DIRECTIONS, neighbors, orbit, distance
from .coords import coordinate_to_string, string_to_coordinate
from .seeded_random import SeededRandom, date_to_seed

__all__ = [
    'Hex', 'AXIAL_DIRECTIONS', 'neighbors', 'orbit', 'distance',
    'coordinate_to_string', 'string_to_coordinate',
    'SeededRandom', 'date_to_seed',
]
