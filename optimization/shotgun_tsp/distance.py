"""
Distance model and tour cost.

``DistanceModel`` wraps a read-only square ``numpy`` array of pairwise
travel costs.  The matrix need not be symmetric: ``cost(i, j)`` is the
cost of going from *i* to *j*.  Nothing mutates it after construction,
so every worker thread can read it without locking.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from shotgun_tsp.errors import MalformedInputError, ShapeError


class DistanceModel:
    """Immutable N x N cost matrix."""

    __slots__ = ("_matrix",)

    def __init__(self, matrix: Sequence[Sequence[float]] | np.ndarray) -> None:
        try:
            arr = np.array(matrix, dtype=float)  # always a private copy
        except ValueError as exc:
            raise ShapeError(f"Distance matrix is not a rectangular numeric array: {exc}") from exc
        if arr.ndim != 2 or arr.shape[0] == 0 or arr.shape[0] != arr.shape[1]:
            raise ShapeError(f"Distance matrix must be non-empty and square, got shape {arr.shape}")
        if not np.all(np.isfinite(arr)):
            raise MalformedInputError("Distance matrix contains non-finite values")
        if np.any(arr < 0):
            raise MalformedInputError("Distance matrix contains negative costs")
        arr.setflags(write=False)
        self._matrix = arr

    @property
    def matrix(self) -> np.ndarray:
        """Read-only view of the underlying array."""
        return self._matrix

    @property
    def size(self) -> int:
        return self._matrix.shape[0]

    def __len__(self) -> int:
        return self.size

    def cost(self, i: int, j: int) -> float:
        return float(self._matrix[i, j])

    @property
    def is_symmetric(self) -> bool:
        return bool(np.array_equal(self._matrix, self._matrix.T))

    def __repr__(self) -> str:
        kind = "symmetric" if self.is_symmetric else "asymmetric"
        return f"DistanceModel(n={self.size}, {kind})"


def tour_length(tour: Sequence[int] | np.ndarray, model: DistanceModel) -> float:
    """Cyclic tour length: every consecutive edge plus the closing edge."""
    nodes = np.asarray(tour, dtype=np.intp)
    if nodes.size == 0:
        return 0.0
    return float(model.matrix[nodes, np.roll(nodes, -1)].sum())


def edge_costs(tour: Sequence[int] | np.ndarray, model: DistanceModel) -> np.ndarray:
    """Cost of each edge ``tour[k] -> tour[k+1]``, closing edge last."""
    nodes = np.asarray(tour, dtype=np.intp)
    return model.matrix[nodes, np.roll(nodes, -1)]
