"""
String keys for axial coordinates ("q,r"), used in JSON assignment files.
"""
from typing import Dict, Mapping, Tuple


def coordinate_to_string(q: int, r: int) -> str:
    """Convert coordinate tuple to string format used in JSON."""
    return f"{q},{r}"


def string_to_coordinate(coord_str: str) -> Tuple[int, int]:
    """Convert string coordinate back to tuple."""
    q, r = coord_str.split(',')
    return int(q), int(r)


def values_from_json(data: Mapping[str, int]) -> Dict[Tuple[int, int], int]:
    """Convert a {"q,r": digit} mapping to tuple keys."""
    return {string_to_coordinate(key): int(value) for key, value in data.items()}


def values_to_json(values: Mapping[Tuple[int, int], int]) -> Dict[str, int]:
    """Convert a {(q, r): digit} mapping to string keys, sorted by coordinate."""
    return {coordinate_to_string(q, r): values[(q, r)] for (q, r) in sorted(values)}
