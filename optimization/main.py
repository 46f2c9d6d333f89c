"""
main.py -- Entry point for the shotgun hill-climbing TSP solver.

Usage
-----
    python main.py < instance.in              Linear shotgun on stdin
    python main.py --input instance.in        Read the instance from a file
    python main.py --solver parallel          Thread-pool shotgun
    python main.py --solver parallel -w 8     ... with 8 worker threads
    python main.py --solver all               Linear then parallel, both cached
    python main.py --compare a.in b.in        Linear vs parallel benchmark
    python main.py --export                   Also write run CSVs to results/
    python main.py --dashboard                Launch the Dash dashboard
    python main.py --dashboard-only           Reload cached results, skip solving

Input
-----
  Line 1     : iterations restarts seed
  Lines 2..  : comma-separated N x N cost matrix

Pipeline
--------
  1. Load & validate the instance (fails fast, exit status 1)
  2. Run the selected solver
  3. Print the best tour and its length to stdout
  4. Optionally export CSVs, cache results, launch the dashboard
"""

from __future__ import annotations

import argparse
import logging
import pickle
import sys
from pathlib import Path

_SCRIPT_DIR = Path(__file__).resolve().parent
if str(_SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(_SCRIPT_DIR))

from shotgun_tsp.config import CACHE_PATH, DEFAULT_WORKERS, LOG_FORMAT, RESULTS_DIR
from shotgun_tsp.data_loader import load_instance
from shotgun_tsp.errors import InputError
from shotgun_tsp.reporting import (
    banner,
    export_comparison,
    export_runs,
    print_comparison,
    print_run_summary,
    print_solution,
)
from shotgun_tsp.solvers import ParallelShotgunSolver, ShotgunSolver

_log = logging.getLogger("shotgun_tsp")

SOLVERS = {
    "linear": ShotgunSolver,
    "parallel": ParallelShotgunSolver,
}

# "all" runs these in order and caches both for the strategy comparison view
_ALL_SOLVERS = ["linear", "parallel"]


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Shotgun 2-opt hill climbing for the TSP")
    ap.add_argument(
        "--input",
        "-i",
        default=None,
        help="Instance file (default: read stdin)",
    )
    ap.add_argument(
        "--solver",
        choices=list(SOLVERS.keys()) + ["all"],
        default="linear",
        help="Restart scheduling strategy, or 'all' to run both (default: linear)",
    )
    ap.add_argument(
        "--workers",
        "-w",
        type=int,
        default=DEFAULT_WORKERS,
        help=f"Worker threads for the parallel solver (default: {DEFAULT_WORKERS})",
    )
    ap.add_argument(
        "--compare",
        nargs="+",
        metavar="FILE",
        help="Benchmark linear vs parallel on each FILE and export a CSV",
    )
    ap.add_argument(
        "--export",
        action="store_true",
        help="Write run_details.csv and best_tour.csv to the results directory",
    )
    ap.add_argument(
        "--dashboard",
        action="store_true",
        help="Launch the interactive Plotly Dash dashboard after solving",
    )
    ap.add_argument(
        "--dashboard-only",
        action="store_true",
        help=(
            "Skip solver execution -- reload the last saved results and "
            "launch the dashboard immediately. Requires a prior run."
        ),
    )
    ap.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Debug logging and a per-run summary on stderr",
    )
    return ap.parse_args(argv)


# -- Persistence helpers -------------------------------------------------


def _save_cache(solver_data: dict[str, dict]) -> None:
    """Persist solver results to disk so the dashboard can reload later."""
    CACHE_PATH.parent.mkdir(parents=True, exist_ok=True)
    with open(CACHE_PATH, "wb") as f:
        pickle.dump(solver_data, f, protocol=pickle.HIGHEST_PROTOCOL)
    _log.info("Results cached -> %s", CACHE_PATH)


def _load_cache() -> dict[str, dict]:
    """Load previously saved solver results from disk."""
    if not CACHE_PATH.exists():
        raise FileNotFoundError(
            f"No cached results at {CACHE_PATH}. Run the solver first (without --dashboard-only)."
        )
    with open(CACHE_PATH, "rb") as f:
        data = pickle.load(f)
    _log.info("Loaded cached results for: %s", ", ".join(s.upper() for s in data))
    return data


def _launch_dashboard(solver_data: dict[str, dict]) -> None:
    from shotgun_tsp.dashboard.app import run_dashboard

    run_dashboard(solver_data=solver_data)


# -- Main ----------------------------------------------------------------


def run(args: argparse.Namespace) -> int:
    # -- fast path: reload cached results --------------------------------
    if args.dashboard_only:
        _launch_dashboard(_load_cache())
        return 0

    # -- benchmark mode --------------------------------------------------
    if args.compare:
        from shotgun_tsp.benchmark import compare_strategies, summarise_comparison

        df = compare_strategies(args.compare, workers=args.workers)
        print_comparison(df, summarise_comparison(df))
        export_comparison(df)
        return 0

    # -- step 1: data ----------------------------------------------------
    inst = load_instance(args.input)
    _log.info(
        "%s: %d cities, %r", inst.source, inst.distances.size, inst.config,
    )

    # -- steps 2-3: solve + output, per solver ---------------------------
    multi = args.solver == "all"
    solver_list = _ALL_SOLVERS if multi else [args.solver]
    solver_data: dict[str, dict] = {}

    for name in solver_list:
        solver_cls = SOLVERS[name]
        solver = solver_cls(workers=args.workers) if solver_cls is ParallelShotgunSolver else solver_cls()
        if multi:
            banner(f"MULTI-SOLVER RUN: {name.upper()}")
        solution = solver.solve(inst.distances, inst.config)

        print_solution(solution)
        if args.verbose:
            print_run_summary(solution)
        if args.export:
            banner(f"EXPORTING CSV FILES  [{name.upper()}]", file=sys.stderr)
            export_runs(solution, RESULTS_DIR / name if multi else None)

        solver_data[solver.name] = {
            "solution": solution,
            "distances": inst.distances.matrix,
            "source": inst.source,
        }

    # -- step 4: cache + dashboard ---------------------------------------
    _save_cache(solver_data)
    if args.dashboard:
        _launch_dashboard(solver_data)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
    )
    try:
        return run(args)
    except (InputError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
