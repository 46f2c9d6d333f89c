"""
Domain models shared across the entire solver pipeline.

Every domain concept (SolverConfig, RunResult, BestSolution) lives here
so that solvers, reporting, and the dashboard all speak the same language.
Tours are plain ``tuple[int, ...]`` values: a permutation of ``0..N-1``
with node 0 at position 0.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from shotgun_tsp.errors import ConfigError

Tour = tuple[int, ...]


# -- hill-climb state ----------------------------------------------------
class ClimbState(str, enum.Enum):
    RUNNING = "running"
    CONVERGED = "converged"


# -- solver parameters ---------------------------------------------------
@dataclass(frozen=True, slots=True)
class SolverConfig:
    iteration_cap: int
    restart_count: int
    seed: int

    def __post_init__(self) -> None:
        for name in ("iteration_cap", "restart_count", "seed"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"{name} must be an integer, got {value!r}")
        if self.iteration_cap < 0:
            raise ConfigError(f"iteration_cap must be >= 0, got {self.iteration_cap}")
        if self.restart_count < 1:
            raise ConfigError(f"restart_count must be >= 1, got {self.restart_count}")
        if self.seed < 0:
            raise ConfigError(f"seed must be unsigned, got {self.seed}")


# -- one hill climb ------------------------------------------------------
@dataclass(slots=True)
class RunResult:
    tour: Tour
    length: float
    run_index: int = 0
    iterations: int = 0
    state: ClimbState = ClimbState.RUNNING
    history: list[float] = field(default_factory=list)

    @property
    def converged(self) -> bool:
        return self.state is ClimbState.CONVERGED

    def beats(self, other: RunResult | None) -> bool:
        """Strictly shorter wins; equal lengths go to the earlier run."""
        if other is None:
            return True
        if self.length != other.length:
            return self.length < other.length
        return self.run_index < other.run_index


# -- the answer ----------------------------------------------------------
@dataclass
class BestSolution:
    """Best tour across all restarts -- the thing every solver returns."""

    tour: Tour
    length: float
    run_index: int = 0
    solver_name: str = ""
    runs: list[RunResult] = field(default_factory=list)
    metadata: dict = field(default_factory=dict)

    @classmethod
    def from_run(cls, run: RunResult, **kwargs) -> BestSolution:
        return cls(tour=run.tour, length=run.length, run_index=run.run_index, **kwargs)

    @property
    def num_nodes(self) -> int:
        return len(self.tour)

    @property
    def num_runs(self) -> int:
        return len(self.runs)

    @property
    def converged_runs(self) -> int:
        return sum(1 for r in self.runs if r.converged)
