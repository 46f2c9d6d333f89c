"""
Linear vs parallel benchmark.

Solves every instance file twice -- once with the linear shotgun, once
with the thread-pool shotgun -- and tabulates wall-clock time, tour
length, speedup, and which strategy found the shorter tour.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from pathlib import Path

import pandas as pd

from shotgun_tsp.config import COMPARE_EPSILON, DEFAULT_WORKERS
from shotgun_tsp.data_loader import load_instance
from shotgun_tsp.solvers import ParallelShotgunSolver, ShotgunSolver

_log = logging.getLogger(__name__)

COLUMNS = [
    "File",
    "Cities",
    "Iterations",
    "Restarts",
    "Seed",
    "Time_Linear",
    "Tour_Linear",
    "Time_Parallel",
    "Tour_Parallel",
    "Speedup",
    "Quality",
]


def quality_label(linear: float, parallel: float, eps: float = COMPARE_EPSILON) -> str:
    diff = linear - parallel
    if diff > eps:
        return "Parallel better"
    if diff < -eps:
        return "Linear better"
    return "Equal"


def compare_strategies(
    paths: Iterable[str | Path],
    workers: int = DEFAULT_WORKERS,
) -> pd.DataFrame:
    """One row per instance file; columns as in ``COLUMNS``."""
    linear = ShotgunSolver()
    parallel = ParallelShotgunSolver(workers=workers)
    rows = []

    for path in paths:
        inst = load_instance(path)
        cfg = inst.config
        _log.info("benchmark: %s (%d cities)", inst.source, inst.distances.size)

        t0 = time.perf_counter()
        lin = linear.solve(inst.distances, cfg)
        t_lin = time.perf_counter() - t0

        t0 = time.perf_counter()
        par = parallel.solve(inst.distances, cfg)
        t_par = time.perf_counter() - t0

        rows.append(
            [
                inst.source,
                inst.distances.size,
                cfg.iteration_cap,
                cfg.restart_count,
                cfg.seed,
                round(t_lin, 4),
                lin.length,
                round(t_par, 4),
                par.length,
                round(t_lin / t_par, 2) if t_par > 0 else float("nan"),
                quality_label(lin.length, par.length),
            ]
        )

    return pd.DataFrame(rows, columns=COLUMNS)


def summarise_comparison(df: pd.DataFrame) -> dict:
    total_lin = float(df["Time_Linear"].sum())
    total_par = float(df["Time_Parallel"].sum())
    counts = df["Quality"].value_counts()
    return {
        "files": len(df),
        "total_linear_s": round(total_lin, 4),
        "total_parallel_s": round(total_par, 4),
        "overall_speedup": round(total_lin / total_par, 2) if total_par > 0 else None,
        "parallel_better": int(counts.get("Parallel better", 0)),
        "linear_better": int(counts.get("Linear better", 0)),
        "equal": int(counts.get("Equal", 0)),
    }
