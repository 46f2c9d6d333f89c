"""
Centralised configuration for the shotgun hill-climbing TSP solver.

Keeps every tuneable parameter and file path in one place so the rest of
the codebase stays clean.  Per-instance solver parameters (iteration cap,
restart count, seed) arrive on the input stream; the values below are
the fallbacks used by the Python API and the benchmark.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

_log = logging.getLogger(__name__)


def env_int(name: str, default: int, minimum: int = 1) -> int:
    """Integer from environment variable *name*; *default* when unset or invalid."""
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        _log.warning("%s=%r is not an integer; using %d", name, raw, default)
        return default
    if value < minimum:
        _log.warning("%s=%d is below %d; using %d", name, value, minimum, default)
        return default
    return value


# -- paths ---------------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parent.parent
RESULTS_DIR = Path(os.environ.get("SHOTGUN_TSP_RESULTS", PROJECT_ROOT / "results"))
CACHE_PATH = RESULTS_DIR / "solver_cache.pkl"

RESULTS_DIR.mkdir(parents=True, exist_ok=True)

# -- solver defaults -----------------------------------------------------
SEED: int = 42
DEFAULT_ITERATIONS: int = 1_000  # 2-opt passes per hill climb
DEFAULT_RESTARTS: int = 20

# thread-pool size for the parallel shotgun
DEFAULT_WORKERS: int = env_int("SHOTGUN_TSP_WORKERS", os.cpu_count() or 1)

# relative slack for the O(1) delta screen; acceptance always re-checks the
# full tour length, so this only decides which candidates get re-checked
IMPROVEMENT_TOLERANCE: float = 1e-9

# -- logging -------------------------------------------------------------
LOG_FORMAT = "%(levelname)s | %(message)s"

# -- benchmark -----------------------------------------------------------
COMPARE_EPSILON: float = 0.001  # tour-length gap below which results are "Equal"

# -- dashboard -----------------------------------------------------------
DASHBOARD_PORT: int = 8050
DASHBOARD_TRACES: int = 5  # convergence traces drawn for the best N runs
