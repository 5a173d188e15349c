"""
OrbitBoard - derived cell roles and rules for an Orbital Shift puzzle.

A board is rebuilt from a puzzle's centers and a blocked-cell layout;
nothing about cell roles is stored in the geometry itself. It provides
the rotation primitive shared by the scrambler and play sessions, and
validation of both puzzle structure and digit assignments.

Blocked cells are kept in an insertion-ordered dict so that rotations
(remove, then re-add at the end) produce a stable output order.
"""
import json
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

from orbital_shift.core.commands import BatchCommand, CommandHistory, RotateOrbitCommand
from orbital_shift.core.types import CellRole, Center, Hex, Puzzle, ValidationError
from orbital_shift.utils.axial import orbit
from orbital_shift.utils.coords import coordinate_to_string


def min_orbit_sum(fillable: int) -> int:
    """Smallest sum of `fillable` distinct digits (0 + 1 + ...)."""
    return fillable * (fillable - 1) // 2


def max_orbit_sum(fillable: int) -> int:
    """Largest sum of `fillable` distinct digits (9 + 8 + ...)."""
    return sum(range(9, 9 - fillable, -1))


class OrbitBoard:
    """
    Cell-role model for a set of orbits.

    Responsibilities:
        - Derive roles (center, open, blocked) for every orbit cell
        - Track which orbits each cell belongs to (cells may be shared)
        - Rotate an orbit's blocked/open pattern (undoable via commands)
        - Validate puzzle structure and player/solver digit assignments

    Attributes:
        centers: Center coordinates; orbit i belongs to centers[i]
        targets: Orbit targets, or None while they are not known yet
        orbits: Ring-1 cells of each center, in traversal order
        orbit_members: Orbit cell -> owning center indices (first owner first)
        blocked: Blocked cells (insertion-ordered)
        max_blocked_per_orbit: Cap checked by validate_puzzle
        command_history: Undo/redo stack of rotations
    """

    def __init__(
        self,
        centers: Sequence[Hex],
        blocked: Iterable[Hex] = (),
        targets: Optional[Sequence[int]] = None,
        max_blocked_per_orbit: int = 2,
    ):
        """
        Build a board.

        Args:
            centers: Center coordinates
            blocked: Blocked cells
            targets: Optional target per center
            max_blocked_per_orbit: Per-orbit blocked cap used by validation
        """
        if targets is not None and len(targets) != len(centers):
            raise ValueError(f"Got {len(targets)} targets for {len(centers)} centers")

        self.centers: List[Hex] = [(int(q), int(r)) for (q, r) in centers]
        self.targets: Optional[List[int]] = list(targets) if targets is not None else None
        self.max_blocked_per_orbit = max_blocked_per_orbit

        self._center_set: Set[Hex] = set(self.centers)
        self.orbits: List[List[Hex]] = [orbit(center, 1) for center in self.centers]

        self.orbit_members: Dict[Hex, List[int]] = {}
        for ci, cells in enumerate(self.orbits):
            for cell in cells:
                if cell in self._center_set:
                    continue
                self.orbit_members.setdefault(cell, []).append(ci)

        self.blocked: Dict[Hex, None] = {}
        for (q, r) in blocked:
            self.blocked.setdefault((int(q), int(r)), None)

        self.command_history: CommandHistory = CommandHistory(max_history=100)

    @classmethod
    def from_puzzle(cls, puzzle: Puzzle, blocked: Optional[Iterable[Hex]] = None,
                    max_blocked_per_orbit: int = 2) -> 'OrbitBoard':
        """Board for a puzzle; `blocked` overrides the puzzle's starting layout (e.g. the solution layout)."""
        return cls(
            [c.coord for c in puzzle.centers],
            puzzle.black_hexagons if blocked is None else blocked,
            [c.target for c in puzzle.centers],
            max_blocked_per_orbit=max_blocked_per_orbit,
        )

    def to_puzzle(self) -> Puzzle:
        """Snapshot as an immutable Puzzle (targets required)."""
        if self.targets is None:
            raise ValueError("Board has no targets")
        centers = tuple(Center(q, r, t) for (q, r), t in zip(self.centers, self.targets))
        return Puzzle(centers, tuple(self.blocked))

    # =============================================================================
    # CELL QUERIES
    # =============================================================================

    def cell_exists(self, q: int, r: int) -> bool:
        """True for centers and orbit cells."""
        return (q, r) in self._center_set or (q, r) in self.orbit_members

    def get_cell_role(self, q: int, r: int) -> Optional[CellRole]:
        """
        Get the derived role of a cell.

        Returns:
            CENTER, BLOCKED or OPEN; None for cells that are not on the board
        """
        if (q, r) in self._center_set:
            return CellRole.CENTER
        if (q, r) not in self.orbit_members:
            return None
        if (q, r) in self.blocked:
            return CellRole.BLOCKED
        return CellRole.OPEN

    def is_blocked(self, q: int, r: int) -> bool:
        return (q, r) in self.blocked

    def get_blocked_cells(self) -> List[Hex]:
        return list(self.blocked)

    def get_open_cells(self) -> List[Hex]:
        """Open cells in orbit order."""
        return [cell for cell in self.orbit_members if cell not in self.blocked]

    def get_orbit(self, index: int) -> List[Hex]:
        return list(self.orbits[index])

    def get_orbit_members(self, q: int, r: int) -> List[int]:
        """Indices of the orbits containing (q, r); empty for centers and off-board cells."""
        return list(self.orbit_members.get((q, r), []))

    def orbit_pattern(self, index: int) -> List[bool]:
        """Blocked flags of the orbit's cells, in traversal order."""
        return [cell in self.blocked for cell in self.orbits[index]]

    def blocked_in_orbit(self, index: int) -> int:
        return sum(self.orbit_pattern(index))

    def fillable_in_orbit(self, index: int) -> int:
        return sum(
            1 for cell in self.orbits[index]
            if cell not in self.blocked and cell not in self._center_set
        )

    def is_uniform(self, index: int) -> bool:
        """True when the orbit is all open or all blocked (rotation changes nothing)."""
        pattern = self.orbit_pattern(index)
        return all(pattern) or not any(pattern)

    def orbits_over_cap(self) -> List[int]:
        """Indices of orbits holding more blocked cells than the cap."""
        return [
            i for i in range(len(self.centers))
            if self.blocked_in_orbit(i) > self.max_blocked_per_orbit
        ]

    # =============================================================================
    # ROTATION
    # =============================================================================

    def rotate_orbit(self, index: int, steps: int = 1) -> bool:
        """
        Rotate an orbit's blocked/open pattern (direct method, use cmd_* for undo/redo).

        One step moves the flag at position i + 1 to position i, in the
        traversal order of `orbit()`. Negative steps rotate the other way.

        Args:
            index: Center index of the orbit
            steps: Positions to shift

        Returns:
            True if the orbit exists
        """
        if not (0 <= index < len(self.orbits)):
            return False

        cells = self.orbits[index]
        pattern = self.orbit_pattern(index)
        size = len(cells)
        rotated = [pattern[(i + steps) % size] for i in range(size)]

        for cell, is_blocked in zip(cells, rotated):
            if is_blocked:
                self.blocked.setdefault(cell, None)
            else:
                self.blocked.pop(cell, None)
        return True

    def cmd_rotate_orbit(self, index: int, steps: int = 1) -> bool:
        """Rotate using command system (for undo/redo)."""
        return self.command_history.execute_command(RotateOrbitCommand(index, steps), self)

    def cmd_rotate_orbits(self, rotations: Sequence[Tuple[int, int]], description: str = "Rotate orbits") -> bool:
        """Apply (index, steps) rotations as one undoable step; nothing changes if any index is unknown."""
        commands = [RotateOrbitCommand(index, steps) for index, steps in rotations]
        return self.command_history.execute_command(BatchCommand(commands, description), self)

    def undo(self) -> bool:
        """Undo the last rotation."""
        return self.command_history.undo(self)

    def redo(self) -> bool:
        """Redo the next rotation."""
        return self.command_history.redo(self)

    def can_undo(self) -> bool:
        return self.command_history.can_undo()

    def can_redo(self) -> bool:
        return self.command_history.can_redo()

    def reset(self) -> int:
        """Undo every rotation in history; returns how many were undone."""
        return self.command_history.undo_all(self)

    def clear_history(self) -> None:
        self.command_history.clear_history()

    # =============================================================================
    # DIGIT HELPERS
    # =============================================================================

    def get_orbit_sum(self, index: int, values: Mapping[Hex, int]) -> int:
        """Sum of the digits on the orbit's open cells (missing cells count as 0)."""
        return sum(
            values.get(cell, 0) for cell in self.orbits[index]
            if cell not in self.blocked and cell not in self._center_set
        )

    def get_available_digits(self, q: int, r: int, values: Mapping[Hex, int]) -> List[int]:
        """
        Digits that can go in (q, r) without repeating inside any of its orbits.

        Args:
            q, r: Cell coordinate
            values: Current digits by cell

        Returns:
            Sorted digits 0-9 not used by other open cells of the cell's orbits
        """
        used = set()
        for ci in self.orbit_members.get((q, r), []):
            for cell in self.orbits[ci]:
                if cell == (q, r) or cell in self.blocked:
                    continue
                if cell in values:
                    used.add(values[cell])
        return [d for d in range(10) if d not in used]

    # =============================================================================
    # VALIDATION
    # =============================================================================

    def validate_puzzle(self) -> List[ValidationError]:
        """
        Return a list[ValidationError]. Empty list == VALID.
        Rules (hard errors):
        - Centers are distinct and never blocked
        - Every blocked cell lies in some orbit
        - No orbit holds more than the blocked cap
        - Every orbit keeps at least one fillable cell
        Warnings:
        - Target cannot be reached with the orbit's current fillable count
        """
        errors: List[ValidationError] = []

        if not self.centers:
            errors.append(ValidationError("error", "Puzzle has no centers"))

        seen: Set[Hex] = set()
        for center in self.centers:
            if center in seen:
                errors.append(ValidationError("error", "Duplicate center", location=center))
            seen.add(center)
            if center in self.blocked:
                errors.append(ValidationError("error", "Center cell is blocked", location=center))

        for cell in self.blocked:
            if cell not in self.orbit_members and cell not in self._center_set:
                errors.append(ValidationError("error", "Blocked cell is not part of any orbit", location=cell))

        for i, center in enumerate(self.centers):
            blocked = self.blocked_in_orbit(i)
            if blocked > self.max_blocked_per_orbit:
                errors.append(ValidationError(
                    "error",
                    f"Orbit has {blocked} blocked cells (max {self.max_blocked_per_orbit})",
                    location=center
                ))

            fillable = self.fillable_in_orbit(i)
            if fillable == 0:
                errors.append(ValidationError("error", "Orbit has no fillable cell", location=center))
                continue

            if self.targets is not None:
                target = self.targets[i]
                low, high = min_orbit_sum(fillable), max_orbit_sum(fillable)
                if not (low <= target <= high):
                    errors.append(ValidationError(
                        "warning",
                        f"Target {target} unreachable with {fillable} open cells ({low}-{high})",
                        location=center
                    ))

        return errors

    def validate_assignment(self, values: Mapping[Hex, int]) -> List[ValidationError]:
        """
        Check a complete digit assignment against the current blocked layout.

        Rules:
        - Digits are integers 0-9 placed on open cells only
        - No digit repeats within an orbit
        - Every open cell is filled
        - Each orbit sums to its target (when targets are known)
        """
        errors: List[ValidationError] = []

        for cell, digit in values.items():
            role = self.get_cell_role(*cell)
            if role != CellRole.OPEN:
                where = role.value if role else "off-board"
                errors.append(ValidationError("error", f"Digit placed on {where} cell", location=cell))
            if isinstance(digit, bool) or not isinstance(digit, int) or not (0 <= digit <= 9):
                errors.append(ValidationError("error", f"Invalid digit {digit!r}", location=cell))

        for i, center in enumerate(self.centers):
            open_cells = [
                cell for cell in self.orbits[i]
                if cell not in self.blocked and cell not in self._center_set
            ]
            digits = [values[cell] for cell in open_cells if cell in values]

            if len(set(digits)) != len(digits):
                errors.append(ValidationError("error", "Duplicate digit in orbit", location=center))

            missing = len(open_cells) - len(digits)
            if missing:
                errors.append(ValidationError("error", f"Orbit has {missing} empty cells", location=center))
                continue

            if self.targets is not None and sum(digits) != self.targets[i]:
                errors.append(ValidationError(
                    "error",
                    f"Orbit sums to {sum(digits)}, target {self.targets[i]}",
                    location=center
                ))

        return errors

    def is_solved(self, values: Mapping[Hex, int]) -> bool:
        return not self.validate_assignment(values)

    def get_statistics(self) -> Dict:
        """
        Get board statistics.

        Returns:
            Dict with cell counts, shared-cell count, validation summary and history info
        """
        open_cells = self.get_open_cells()
        validation_errors = self.validate_puzzle()
        history_info = self.command_history.get_history_info()
        return {
            "centers": len(self.centers),
            "orbit_cells": len(self.orbit_members),
            "open_cells": len(open_cells),
            "blocked_cells": len(self.blocked),
            "shared_cells": sum(1 for owners in self.orbit_members.values() if len(owners) > 1),
            "errors": len([e for e in validation_errors if e.severity == "error"]),
            "warnings": len([e for e in validation_errors if e.severity == "warning"]),
            "can_undo": history_info["can_undo"],
            "can_redo": history_info["can_redo"],
        }

    def describe_orbit(self, index: int) -> str:
        """One-line summary, e.g. '2,0 target=7: 1,0 2,-1 [3,-1] ...' with blocked cells bracketed."""
        parts = []
        for cell in self.orbits[index]:
            key = coordinate_to_string(*cell)
            parts.append(f"[{key}]" if cell in self.blocked else key)
        target = self.targets[index] if self.targets is not None else "?"
        return f"{coordinate_to_string(*self.centers[index])} target={target}: {' '.join(parts)}"

    # =============================================================================
    # JSON IMPORT/EXPORT
    # =============================================================================

    @classmethod
    def from_json(cls, json_data: Dict, max_blocked_per_orbit: int = 2) -> 'OrbitBoard':
        """Create a board from {centers: [{q, r, target}], blackHexagons: [{q, r}]}."""
        return cls.from_puzzle(Puzzle.from_dict(json_data), max_blocked_per_orbit=max_blocked_per_orbit)

    def to_json(self) -> Dict:
        """Export the board in puzzle shape (targets required)."""
        return self.to_puzzle().to_dict()

    @classmethod
    def load_from_file(cls, filename: str) -> 'OrbitBoard':
        """Load a board from a JSON file."""
        with open(filename, 'r') as f:
            json_data = json.load(f)
        return cls.from_json(json_data)

    def save_json(self, filename: str) -> None:
        """Save board to JSON file."""
        with open(filename, 'w') as f:
            json.dump(self.to_json(), f, indent=2)
