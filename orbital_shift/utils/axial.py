# orbital_shift/utils/axial.py
"""
Axial coordinate helpers for the orbit hex grid.

Axial convention:
- Every cell is addressed by (q, r); the implicit third axis is s = -q - r
- Neighbors are listed East, NE, NW, West, SW, SE

The neighbor order is load-bearing: orbit traversal, ring walking and
orbit rotation all follow it, so a rotation undone in the opposite
direction always restores the previous layout.

Reference: Red Blob Games hexagonal grid guide
https://www.redblobgames.com/grids/hexagons/
"""

from __future__ import annotations
from typing import List, Tuple

Hex = Tuple[int, int]

# Axial deltas, counter-clockwise starting East
AXIAL_DIRECTIONS: Tuple[Hex, ...] = (
    ( 1,  0),  # East
    ( 1, -1),  # Northeast
    ( 0, -1),  # Northwest
    (-1,  0),  # West
    (-1,  1),  # Southwest
    ( 0,  1),  # Southeast
)


def neighbors(q: int, r: int) -> List[Hex]:
    """Return the six neighbors of (q, r) in the fixed direction order."""
    return [(q + dq, r + dr) for dq, dr in AXIAL_DIRECTIONS]


def orbit(center: Hex, radius: int = 1) -> List[Hex]:
    """
    Return the ring of cells at exactly `radius` from `center`.

    Args:
        center: (q, r) of the ring center
        radius: Ring distance (0 returns the center itself)

    Returns:
        6 * radius coordinates starting at center + radius * East and
        walking in the same rotational sense as `neighbors`, so radius 1
        is identical to neighbors(center).

    Raises:
        ValueError: If radius is negative
    """
    if radius < 0:
        raise ValueError(f"Ring radius must be non-negative: {radius}")

    cq, cr = center
    if radius == 0:
        return [(cq, cr)]

    q = cq + AXIAL_DIRECTIONS[0][0] * radius
    r = cr + AXIAL_DIRECTIONS[0][1] * radius

    ring: List[Hex] = []
    for side in range(6):
        # Corner `side` to corner `side + 1` runs along direction side + 2
        dq, dr = AXIAL_DIRECTIONS[(side + 2) % 6]
        for _ in range(radius):
            ring.append((q, r))
            q += dq
            r += dr
    return ring


def distance(a: Hex, b: Hex) -> int:
    """Hex distance between two axial cells."""
    dq = a[0] - b[0]
    dr = a[1] - b[1]
    return (abs(dq) + abs(dq + dr) + abs(dr)) // 2
