"""
Abstract solver interface.

Every solver (linear shotgun, parallel shotgun) inherits from
``BaseSolver`` so the pipeline can swap strategies without changing
calling code.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from shotgun_tsp.distance import DistanceModel
from shotgun_tsp.models import BestSolution, SolverConfig


class BaseSolver(ABC):
    """Contract that every TSP solver must satisfy."""

    name: str = "base"

    @abstractmethod
    def solve(
        self,
        distances: DistanceModel,
        config: SolverConfig,
    ) -> BestSolution:
        """Return the best tour found."""
        ...
