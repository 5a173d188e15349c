"""
Reversible orbit rotations with undo/redo.

Every rotation applied through a CommandHistory can be taken back, and
the history can list the rotations currently in effect. The scrambler
relies on both: its starting layout is the solved layout plus the
listed rotations, and undoing them restores the solution.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

Rotation = Tuple[int, int]  # (center_index, steps)


class Command(ABC):
    """A board change that knows how to reverse itself."""

    @abstractmethod
    def execute(self, board) -> bool:
        """Apply to `board`. Returns False (and changes nothing) on failure."""
        pass

    @abstractmethod
    def undo(self, board) -> bool:
        """Reverse a previous successful execute."""
        pass

    @abstractmethod
    def get_description(self) -> str:
        pass

    @abstractmethod
    def rotations(self) -> List[Rotation]:
        """Orbit rotations this command applied, in order."""
        pass


class RotateOrbitCommand(Command):
    """Shift one orbit's blocked/open pattern by `steps` positions."""

    def __init__(self, center_index: int, steps: int = 1):
        self.center_index = center_index
        self.steps = steps
        self.applied = False

    def execute(self, board) -> bool:
        self.applied = board.rotate_orbit(self.center_index, self.steps)
        return self.applied

    def undo(self, board) -> bool:
        # Rotating back by the same amount restores the pattern exactly
        if not self.applied:
            return False
        return board.rotate_orbit(self.center_index, -self.steps)

    def get_description(self) -> str:
        return f"Rotate orbit {self.center_index} by {self.steps}"

    def rotations(self) -> List[Rotation]:
        return [(self.center_index, self.steps)] if self.applied else []


class BatchCommand(Command):
    """
    Several rotations applied and undone as one step.

    If any part fails, the parts already applied are rolled back and the
    batch reports failure.
    """

    def __init__(self, commands: List[Command], description: str):
        self.commands = commands
        self.description = description
        self._done: List[Command] = []

    def execute(self, board) -> bool:
        self._done = []
        for command in self.commands:
            if not command.execute(board):
                self._rollback(board)
                return False
            self._done.append(command)
        return True

    def undo(self, board) -> bool:
        ok = True
        for command in reversed(self._done):
            ok = command.undo(board) and ok
        return ok

    def _rollback(self, board) -> None:
        for command in reversed(self._done):
            command.undo(board)
        self._done = []

    def get_description(self) -> str:
        return self.description

    def rotations(self) -> List[Rotation]:
        return [rotation for command in self._done for rotation in command.rotations()]


class CommandHistory:
    """
    Linear undo/redo stack.

    Attributes:
        max_history: Oldest entries are dropped beyond this many
        history: Executed commands; entries after `current_index` are redoable
        current_index: Index of the last command in effect (-1 when none)
    """

    def __init__(self, max_history: int = 100):
        self.max_history = max_history
        self.history: List[Command] = []
        self.current_index = -1

    def execute_command(self, command: Command, board) -> bool:
        """Run `command`; on success it replaces any redoable entries."""
        if not command.execute(board):
            return False

        del self.history[self.current_index + 1:]
        self.history.append(command)
        if len(self.history) > self.max_history:
            del self.history[0]
        self.current_index = len(self.history) - 1
        return True

    def can_undo(self) -> bool:
        return self.current_index >= 0

    def can_redo(self) -> bool:
        return self.current_index + 1 < len(self.history)

    def undo(self, board) -> bool:
        if not self.can_undo():
            return False
        if not self.history[self.current_index].undo(board):
            return False
        self.current_index -= 1
        return True

    def undo_all(self, board) -> int:
        """Undo every command in effect; returns how many were undone."""
        undone = 0
        while self.can_undo() and self.undo(board):
            undone += 1
        return undone

    def redo(self, board) -> bool:
        if not self.can_redo():
            return False
        if not self.history[self.current_index + 1].execute(board):
            return False
        self.current_index += 1
        return True

    def applied_rotations(self) -> List[Rotation]:
        """All rotations currently in effect, oldest first."""
        return [
            rotation
            for command in self.history[:self.current_index + 1]
            for rotation in command.rotations()
        ]

    def get_undo_description(self) -> Optional[str]:
        if not self.can_undo():
            return None
        return self.history[self.current_index].get_description()

    def get_redo_description(self) -> Optional[str]:
        if not self.can_redo():
            return None
        return self.history[self.current_index + 1].get_description()

    def clear_history(self) -> None:
        self.history = []
        self.current_index = -1

    def get_history_info(self) -> Dict[str, Any]:
        return {
            "total_commands": len(self.history),
            "current_index": self.current_index,
            "can_undo": self.can_undo(),
            "can_redo": self.can_redo(),
            "undo_description": self.get_undo_description(),
            "redo_description": self.get_redo_description(),
        }
