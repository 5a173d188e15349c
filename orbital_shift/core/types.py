"""
Shared types for the Orbital Shift puzzle generator.
Separated to avoid circular imports between modules.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from orbital_shift.utils.axial import Hex


class Difficulty(Enum):
    """Difficulty tiers, easiest first."""
    BEGINNER = "beginner"
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXTREME = "extreme"
    INSANE = "insane"

    @classmethod
    def parse(cls, value: Any) -> 'Difficulty':
        """Accept a Difficulty or its (case-insensitive) name."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            names = ", ".join(d.value for d in cls)
            raise ValueError(f"Unknown difficulty {value!r} (expected one of: {names})") from None


class CellRole(Enum):
    """Derived role of a cell on an orbit board."""
    CENTER = "center"     # Numbered cell anchoring an orbit
    OPEN = "open"         # Fillable cell in at least one orbit
    BLOCKED = "blocked"   # Black hexagon, excluded from sums and uniqueness


class SolveOutcome(Enum):
    SOLVED = "solved"
    NO_SOLUTION = "no_solution"       # Search exhausted
    LIMIT_REACHED = "limit_reached"   # Node cap hit, treated as no solution


class ValidationError:
    """Represents a validation error with severity and description."""
    def __init__(self, severity: str, message: str, location: Optional[Tuple[int, int]] = None):
        self.severity = severity  # "error", "warning"
        self.message = message
        self.location = location

    def __str__(self):
        loc_str = f" at {self.location}" if self.location else ""
        return f"{self.severity.upper()}: {self.message}{loc_str}"

    def __repr__(self):
        return f"ValidationError({self.severity!r}, {self.message!r}, location={self.location!r})"


@dataclass(frozen=True)
class Center:
    """A numbered cell; `target` is the required sum of its orbit's open cells."""
    q: int
    r: int
    target: int

    @property
    def coord(self) -> Hex:
        return (self.q, self.r)

    def to_dict(self) -> Dict[str, int]:
        return {"q": self.q, "r": self.r, "target": self.target}


@dataclass(frozen=True)
class Puzzle:
    """
    A generated puzzle as handed to the play session.

    Attributes:
        centers: Centers with their targets
        black_hexagons: Starting (scrambled) blocked cells, in generation order
    """
    centers: Tuple[Center, ...]
    black_hexagons: Tuple[Hex, ...] = ()

    def to_dict(self) -> Dict[str, List[Dict[str, int]]]:
        return {
            "centers": [c.to_dict() for c in self.centers],
            "blackHexagons": [{"q": q, "r": r} for (q, r) in self.black_hexagons],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Puzzle':
        """
        Build a Puzzle from the {centers: [{q, r, target}], blackHexagons: [{q, r}]} shape.

        Raises:
            ValueError: If a required key is missing or not an integer
        """
        try:
            centers = tuple(
                Center(int(c["q"]), int(c["r"]), int(c["target"]))
                for c in data["centers"]
            )
            blocked = tuple(
                (int(h["q"]), int(h["r"]))
                for h in data.get("blackHexagons", []) or []
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Malformed puzzle data: {e}") from e
        return cls(centers, blocked)


@dataclass
class SolveResult:
    """Outcome of one solver run."""
    outcome: SolveOutcome
    targets: Optional[List[int]] = None
    assignment: Dict[Hex, int] = field(default_factory=dict)
    nodes: int = 0

    @property
    def solved(self) -> bool:
        return self.outcome == SolveOutcome.SOLVED


@dataclass
class ScrambleResult:
    """
    Starting blocked layout plus the rotations that produced it.

    `rotations` lists (center_index, steps) in the order applied; undoing
    them in reverse order restores the goal layout.
    """
    black_hexagons: List[Hex]
    rotations: List[Tuple[int, int]] = field(default_factory=list)
    distinct: bool = True
    within_cap: bool = True

    @property
    def usable(self) -> bool:
        return self.distinct and self.within_cap


@dataclass
class GenerationResult:
    """Everything the assembler produced for one request."""
    puzzle: Puzzle
    difficulty: Difficulty
    seed: Optional[int] = None
    attempts: int = 0
    used_fallback: bool = False
    solution_black_hexagons: List[Hex] = field(default_factory=list)
    solution_values: Dict[Hex, int] = field(default_factory=dict)
    rotations: List[Tuple[int, int]] = field(default_factory=list)
