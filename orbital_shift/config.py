"""
Generator configuration.

Defaults come from the environment (ORBITAL_SHIFT_* variables) when set,
otherwise from the values below.
"""
import os
from dataclasses import dataclass, fields, replace


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class GeneratorConfig:
    """
    Tunables for the puzzle assembler.

    Attributes:
        max_retries: Layout/solve attempts before the static fallback puzzle is used
        max_solver_nodes: Search nodes per solve attempt; exceeding it counts as no solution
        min_rotations: Fewest random orbit rotations applied by the scrambler
        max_rotations: Most random orbit rotations applied by the scrambler
        max_blocked_per_orbit: Blocked cells allowed in any single orbit
        daily_max_solver_nodes: Search nodes per solve attempt for the daily challenge
    """
    max_retries: int = 30
    max_solver_nodes: int = 100_000
    min_rotations: int = 3
    max_rotations: int = 8
    max_blocked_per_orbit: int = 2
    daily_max_solver_nodes: int = 2_000_000

    def __post_init__(self):
        if self.max_retries <= 0:
            raise ValueError(f"max_retries must be positive: {self.max_retries}")
        if self.max_solver_nodes <= 0:
            raise ValueError(f"max_solver_nodes must be positive: {self.max_solver_nodes}")
        if self.daily_max_solver_nodes <= 0:
            raise ValueError(f"daily_max_solver_nodes must be positive: {self.daily_max_solver_nodes}")
        if not (0 <= self.min_rotations <= self.max_rotations):
            raise ValueError(
                f"Rotation range must satisfy 0 <= min <= max: "
                f"[{self.min_rotations}, {self.max_rotations}]"
            )
        if not (0 <= self.max_blocked_per_orbit <= 5):
            raise ValueError(f"max_blocked_per_orbit must be in 0..5: {self.max_blocked_per_orbit}")

    @classmethod
    def from_env(cls) -> 'GeneratorConfig':
        """Build a config, letting ORBITAL_SHIFT_<FIELD> variables override defaults."""
        values = {}
        for f in fields(cls):
            values[f.name] = _env_int(f"ORBITAL_SHIFT_{f.name.upper()}", f.default)
        return cls(**values)

    def for_daily(self) -> 'GeneratorConfig':
        """This config with the daily challenge's solver node cap."""
        return replace(self, max_solver_nodes=self.daily_max_solver_nodes)


DEFAULT_CONFIG = GeneratorConfig()
