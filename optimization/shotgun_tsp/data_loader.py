"""
Problem-instance loading, parsing, and validation.

An instance is a text stream: one parameter line
``iterationCap restartCount seed`` followed by a comma-separated cost
matrix, one row per line, until end of input.  Everything is validated
here, before any solving starts, and rejected with an ``InputError``
subclass naming what was wrong.
"""

from __future__ import annotations

import csv
import math
import sys
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from shotgun_tsp.distance import DistanceModel
from shotgun_tsp.errors import ConfigError, MalformedInputError, ShapeError
from shotgun_tsp.models import SolverConfig


@dataclass(slots=True)
class Instance:
    config: SolverConfig
    distances: DistanceModel
    source: str = "<stdin>"


# -- parameter line ------------------------------------------------------


def parse_params(line: str | None) -> SolverConfig:
    """Parse ``"iterations restarts seed"`` into a validated SolverConfig."""
    if line is None or not line.strip():
        raise ConfigError("Missing parameter line (expected: iterations restarts seed)")
    tokens = line.split()
    if len(tokens) != 3:
        raise ConfigError(f"Expected 3 integers on the parameter line, got {len(tokens)}: {line.strip()!r}")
    try:
        iterations, restarts, seed = (int(t) for t in tokens)
    except ValueError as exc:
        raise ConfigError(f"Non-integer value on the parameter line: {line.strip()!r}") from exc
    return SolverConfig(iteration_cap=iterations, restart_count=restarts, seed=seed)


# -- matrix --------------------------------------------------------------


def _parse_cell(raw: str, row: int, col: int) -> float:
    try:
        value = float(raw)
    except ValueError as exc:
        raise MalformedInputError(f"Row {row}, column {col}: {raw.strip()!r} is not a number") from exc
    if not math.isfinite(value) or value < 0:
        raise MalformedInputError(f"Row {row}, column {col}: cost must be finite and >= 0, got {raw.strip()!r}")
    return value


def parse_matrix(lines: Iterable[str], *, first_row: int = 1) -> list[list[float]]:
    """
    Parse CSV rows into a square list-of-lists.

    Trailing blank lines are dropped; a blank line inside the matrix counts
    as an empty row and fails the square check.
    """
    rows = [line.rstrip("\r\n") for line in lines]
    while rows and not rows[-1].strip():
        rows.pop()
    if not rows:
        raise ShapeError("Distance matrix is empty")

    matrix = [
        [_parse_cell(cell, r, c) for c, cell in enumerate(cells, start=1)] if any(s.strip() for s in cells) else []
        for r, cells in enumerate(csv.reader(rows), start=first_row)
    ]

    n = len(matrix)
    for r, row in enumerate(matrix, start=first_row):
        if len(row) != n:
            raise ShapeError(f"Distance matrix is not square: row {r} has {len(row)} values, expected {n}")
    return matrix


# -- loaders -------------------------------------------------------------


def read_instance(stream: TextIO, source: str = "<stdin>") -> Instance:
    """Parameter line first, then the matrix until end of stream."""
    config = parse_params(stream.readline())
    matrix = parse_matrix(stream, first_row=2)
    return Instance(config=config, distances=DistanceModel(matrix), source=source)


def load_instance(path: str | Path | None = None) -> Instance:
    """Load from *path*, or from stdin when *path* is ``None`` or ``"-"``."""
    if path is None or str(path) == "-":
        return read_instance(sys.stdin)
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        return read_instance(f, source=path.name)
