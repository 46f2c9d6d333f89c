"""
Shotgun hill climbing -- many independent restarts, keep the best.

Restart ``r`` draws its start tour from ``run_rng(seed, r)``, so the set of
runs depends only on the seed and the restart count, never on scheduling.
The reduction keeps the strictly shortest tour and breaks ties by the
lower restart index.  Together these make the linear and the parallel
solver return the same BestSolution for the same input.

Parallel model
--------------
  A fixed ``ThreadPoolExecutor`` splits the restarts into contiguous
  chunks, one per worker.  Each worker keeps a local best over its chunk
  and touches shared state exactly once: a lock-guarded
  compare-and-replace against the global best.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor

from shotgun_tsp.config import DEFAULT_WORKERS
from shotgun_tsp.distance import DistanceModel
from shotgun_tsp.errors import ConfigError
from shotgun_tsp.models import BestSolution, RunResult, SolverConfig
from shotgun_tsp.solvers.base import BaseSolver
from shotgun_tsp.solvers.hill_climb import hill_climb, run_rng

_log = logging.getLogger(__name__)


class ShotgunSolver(BaseSolver):
    """Run every restart in order on the calling thread."""

    name = "linear"

    def solve(
        self,
        distances: DistanceModel,
        config: SolverConfig,
    ) -> BestSolution:
        t0 = time.perf_counter()
        runs = self._climb_range(distances, config, range(config.restart_count))
        best: RunResult | None = None
        for run in runs:
            if run.beats(best):
                best = run
        return self._finish(best, runs, config, time.perf_counter() - t0)

    # -- shared helpers --------------------------------------------------

    @staticmethod
    def _climb_range(
        distances: DistanceModel,
        config: SolverConfig,
        indices: range,
    ) -> list[RunResult]:
        return [
            hill_climb(distances, config.iteration_cap, run_rng(config.seed, r), run_index=r)
            for r in indices
        ]

    def _finish(
        self,
        best: RunResult | None,
        runs: list[RunResult],
        config: SolverConfig,
        elapsed: float,
        **extra,
    ) -> BestSolution:
        if best is None:
            raise RuntimeError("shotgun produced no runs; restart_count must be >= 1")
        solution = BestSolution.from_run(best, solver_name=self.name, runs=runs)
        solution.metadata = {
            "iterations": config.iteration_cap,
            "restarts": config.restart_count,
            "seed": config.seed,
            "converged_runs": solution.converged_runs,
            "elapsed_s": round(elapsed, 4),
            **extra,
        }
        _log.info(
            "%s: best length %.6g from run %d of %d (%.2fs)",
            self.name, best.length, best.run_index, len(runs), elapsed,
        )
        return solution


# -- parallel ------------------------------------------------------------


class _SharedBest:
    """Global best guarded by a lock; the pair is swapped as one object."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._best: RunResult | None = None

    def offer(self, run: RunResult | None) -> bool:
        with self._lock:
            if run is not None and run.beats(self._best):
                self._best = run
                return True
            return False

    def get(self) -> RunResult | None:
        with self._lock:
            return self._best


def static_chunks(total: int, parts: int) -> list[range]:
    """Split ``range(total)`` into *parts* contiguous near-equal slices."""
    base, extra = divmod(total, parts)
    chunks: list[range] = []
    start = 0
    for p in range(parts):
        size = base + (1 if p < extra else 0)
        chunks.append(range(start, start + size))
        start += size
    return chunks


class ParallelShotgunSolver(ShotgunSolver):
    """
    Thread-pool shotgun.

    Parameters
    ----------
    workers : int
        Pool size.  Never more threads than restarts are started.
    """

    name = "parallel"

    def __init__(self, workers: int = DEFAULT_WORKERS) -> None:
        if workers < 1:
            raise ConfigError(f"workers must be >= 1, got {workers}")
        self.workers = workers

    def solve(
        self,
        distances: DistanceModel,
        config: SolverConfig,
    ) -> BestSolution:
        t0 = time.perf_counter()
        n_workers = min(self.workers, config.restart_count)
        shared = _SharedBest()

        with ThreadPoolExecutor(max_workers=n_workers, thread_name_prefix="shotgun") as pool:
            futures = [
                pool.submit(self._worker, distances, config, chunk, shared)
                for chunk in static_chunks(config.restart_count, n_workers)
            ]
            runs = [run for f in futures for run in f.result()]

        return self._finish(
            shared.get(), runs, config, time.perf_counter() - t0, workers=n_workers,
        )

    def _worker(
        self,
        distances: DistanceModel,
        config: SolverConfig,
        chunk: range,
        shared: _SharedBest,
    ) -> list[RunResult]:
        runs = self._climb_range(distances, config, chunk)
        local_best: RunResult | None = None
        for run in runs:
            if run.beats(local_best):
                local_best = run
        if shared.offer(local_best):
            _log.debug(
                "%s: runs %d-%d raised global best to %.6g",
                threading.current_thread().name, chunk.start, chunk.stop - 1, local_best.length,
            )
        return runs
