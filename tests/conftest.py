from __future__ import annotations

import os
import tempfile

# keep exports and the results cache out of the source tree
os.environ.setdefault("SHOTGUN_TSP_RESULTS", tempfile.mkdtemp(prefix="shotgun_tsp_results_"))

import numpy as np  # noqa: E402
import pytest  # noqa: E402

from shotgun_tsp.distance import DistanceModel  # noqa: E402

CLASSIC_4 = [
    [0, 10, 15, 20],
    [10, 0, 35, 25],
    [15, 35, 0, 30],
    [20, 25, 30, 0],
]


def instance_text(params: str, matrix) -> str:
    rows = [",".join(str(v) for v in row) for row in matrix]
    return "\n".join([params, *rows]) + "\n"


@pytest.fixture
def classic4() -> DistanceModel:
    return DistanceModel(CLASSIC_4)


@pytest.fixture
def symmetric12() -> DistanceModel:
    rng = np.random.default_rng(7)
    pts = rng.random((12, 2)) * 100
    diff = pts[:, None, :] - pts[None, :, :]
    return DistanceModel(np.sqrt((diff**2).sum(axis=-1)))


@pytest.fixture
def asymmetric10() -> DistanceModel:
    rng = np.random.default_rng(11)
    m = rng.integers(1, 100, size=(10, 10)).astype(float)
    np.fill_diagonal(m, 0.0)
    return DistanceModel(m)


@pytest.fixture
def classic4_file(tmp_path):
    path = tmp_path / "classic4.in"
    path.write_text(instance_text("100 5 42", CLASSIC_4))
    return path
