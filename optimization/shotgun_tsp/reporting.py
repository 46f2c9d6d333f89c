"""
Console output and CSV export for solver results.

Exports
-------
  run_details.csv        -- one row per restart (length, moves, state)
  best_tour.csv          -- one row per tour position
  comparison_<ts>.csv    -- linear vs parallel benchmark, one row per file
"""

from __future__ import annotations

import csv
import sys
from datetime import datetime
from pathlib import Path
from typing import TextIO

import pandas as pd

from shotgun_tsp.config import RESULTS_DIR
from shotgun_tsp.models import BestSolution

# -- console helpers -----------------------------------------------------


def banner(title: str, width: int = 72, file: TextIO | None = None) -> None:
    out = file or sys.stdout
    print("\n" + "=" * width, file=out)
    print(f"  {title}", file=out)
    print("=" * width, file=out)


def format_length(length: float) -> str:
    """Six significant digits, no trailing zeros (``80`` not ``80.0``)."""
    return f"{length:g}"


def print_solution(solution: BestSolution, file: TextIO | None = None) -> None:
    """The two-line result: tour indices, then the tour length."""
    out = file or sys.stdout
    print("Best tour found: " + " ".join(str(v) for v in solution.tour), file=out)
    print(f"Tour length: {format_length(solution.length)}", file=out)


def print_run_summary(solution: BestSolution, file: TextIO | None = None) -> None:
    out = file or sys.stderr
    meta = solution.metadata

    banner(f"SHOTGUN HILL CLIMBING -- {solution.solver_name.upper()}", file=out)
    print(f"  Cities              : {solution.num_nodes}", file=out)
    print(f"  Restarts            : {solution.num_runs}", file=out)
    print(f"  Iteration cap       : {meta.get('iterations', '--')}", file=out)
    print(f"  Seed                : {meta.get('seed', '--')}", file=out)
    if "workers" in meta:
        print(f"  Worker threads      : {meta['workers']}", file=out)
    print(f"  Converged runs      : {solution.converged_runs}/{solution.num_runs}", file=out)
    print(f"  Elapsed             : {meta.get('elapsed_s', 0):.3f}s", file=out)
    print(f"  Best length         : {format_length(solution.length)}  (run {solution.run_index})", file=out)

    if solution.runs:
        lengths = [r.length for r in solution.runs]
        print(f"  Worst run length    : {format_length(max(lengths))}", file=out)
        print(f"  Mean run length     : {format_length(sum(lengths) / len(lengths))}", file=out)
    print("=" * 72, file=out)


# -- CSV exports ---------------------------------------------------------


def _csv(path: Path, header: list[str], rows) -> None:
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(header)
        w.writerows(rows)
    print(f"  [ok] {path.name}", file=sys.stderr)


def export_run_details(solution: BestSolution, path=None):
    path = path or RESULTS_DIR / "run_details.csv"
    rows = [
        [r.run_index, r.length, r.history[0] if r.history else "", r.iterations, r.state.value]
        for r in solution.runs
    ]
    _csv(path, ["Run", "Length", "Start_length", "Moves", "State"], rows)


def export_best_tour(solution: BestSolution, path=None):
    path = path or RESULTS_DIR / "best_tour.csv"
    _csv(path, ["Position", "Node"], list(enumerate(solution.tour)))


def export_runs(solution: BestSolution, directory: Path | None = None) -> None:
    directory = directory or RESULTS_DIR
    directory.mkdir(parents=True, exist_ok=True)
    export_run_details(solution, directory / "run_details.csv")
    export_best_tour(solution, directory / "best_tour.csv")


# -- benchmark report ----------------------------------------------------


def print_comparison(df: pd.DataFrame, summary: dict, file: TextIO | None = None) -> None:
    out = file or sys.stdout

    banner("LINEAR vs PARALLEL", file=out)
    for row in df.itertuples(index=False):
        print(f"\n  {row.File}", file=out)
        print(
            f"    {row.Cities} cities, {row.Iterations} iterations, "
            f"{row.Restarts} restarts, seed {row.Seed}",
            file=out,
        )
        print(f"    Linear   : {row.Time_Linear:8.3f}s  tour {format_length(row.Tour_Linear)}", file=out)
        print(f"    Parallel : {row.Time_Parallel:8.3f}s  tour {format_length(row.Tour_Parallel)}", file=out)
        speedup = f"{row.Speedup:.2f}x" if pd.notna(row.Speedup) else "N/A"
        print(f"    Speedup  : {speedup}   Quality: {row.Quality}", file=out)

    banner("FINAL REPORT", file=out)
    print(f"  Files processed     : {summary['files']}", file=out)
    print(f"  Total linear time   : {summary['total_linear_s']:.3f}s", file=out)
    print(f"  Total parallel time : {summary['total_parallel_s']:.3f}s", file=out)
    overall = summary["overall_speedup"]
    print(f"  Overall speedup     : {overall:.2f}x" if overall is not None else "  Overall speedup     : N/A", file=out)
    print(f"  Parallel better     : {summary['parallel_better']}", file=out)
    print(f"  Linear better       : {summary['linear_better']}", file=out)
    print(f"  Equal               : {summary['equal']}", file=out)
    print("=" * 72, file=out)


def export_comparison(df: pd.DataFrame, path: Path | None = None) -> Path:
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    path = path or RESULTS_DIR / f"comparison_results_{stamp}.csv"
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)
    print(f"  [ok] {path.name}", file=sys.stderr)
    return path
