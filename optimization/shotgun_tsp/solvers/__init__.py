"""Shotgun 2-opt hill-climbing solvers for the TSP."""

from shotgun_tsp.solvers.base import BaseSolver
from shotgun_tsp.solvers.shotgun import ParallelShotgunSolver, ShotgunSolver

__all__ = [
    "BaseSolver",
    "ParallelShotgunSolver",
    "ShotgunSolver",
]
