import threading

import pytest

from shotgun_tsp.distance import DistanceModel, tour_length
from shotgun_tsp.errors import ConfigError
from shotgun_tsp.models import RunResult, SolverConfig
from shotgun_tsp.solvers import ParallelShotgunSolver, ShotgunSolver
from shotgun_tsp.solvers.shotgun import _SharedBest, static_chunks

SOLVERS = [ShotgunSolver(), ParallelShotgunSolver(workers=3)]


@pytest.mark.parametrize("solver", SOLVERS, ids=lambda s: s.name)
def test_classic_instance_reaches_optimum(solver, classic4):
    best = solver.solve(classic4, SolverConfig(iteration_cap=100, restart_count=5, seed=42))
    assert best.length == 80
    assert best.tour in {(0, 1, 3, 2), (0, 2, 3, 1)}
    assert best.solver_name == solver.name
    assert best.num_runs == 5


@pytest.mark.parametrize("solver", SOLVERS, ids=lambda s: s.name)
@pytest.mark.parametrize("restarts", [1, 4])
def test_single_node(solver, restarts):
    best = solver.solve(DistanceModel([[0]]), SolverConfig(iteration_cap=7, restart_count=restarts, seed=1))
    assert best.tour == (0,)
    assert best.length == 0


def test_parallel_matches_linear(symmetric12):
    cfg = SolverConfig(iteration_cap=1_000, restart_count=8, seed=2024)
    lin = ShotgunSolver().solve(symmetric12, cfg)
    par = ParallelShotgunSolver(workers=3).solve(symmetric12, cfg)
    assert par.length == lin.length
    assert par.tour == lin.tour
    assert par.run_index == lin.run_index
    assert [r.length for r in par.runs] == [r.length for r in lin.runs]


@pytest.mark.parametrize("solver", SOLVERS, ids=lambda s: s.name)
def test_reproducible(solver, asymmetric10):
    cfg = SolverConfig(iteration_cap=500, restart_count=6, seed=5)
    a = solver.solve(asymmetric10, cfg)
    b = solver.solve(asymmetric10, cfg)
    assert (a.tour, a.length) == (b.tour, b.length)


def test_more_restarts_never_worse(asymmetric10):
    solver = ShotgunSolver()
    one = solver.solve(asymmetric10, SolverConfig(iteration_cap=500, restart_count=1, seed=3))
    many = solver.solve(asymmetric10, SolverConfig(iteration_cap=500, restart_count=6, seed=3))
    assert many.length <= one.length
    assert many.runs[0].tour == one.runs[0].tour


def test_best_is_minimum_of_runs(symmetric12):
    best = ParallelShotgunSolver(workers=4).solve(
        symmetric12, SolverConfig(iteration_cap=1_000, restart_count=10, seed=8),
    )
    assert best.length == min(r.length for r in best.runs)
    assert [r.run_index for r in best.runs] == list(range(10))
    assert sorted(best.tour) == list(range(12))
    assert best.length == pytest.approx(tour_length(best.tour, symmetric12))
    assert best.metadata["workers"] == 4
    assert best.metadata["restarts"] == 10


def test_pool_never_larger_than_restarts(classic4):
    best = ParallelShotgunSolver(workers=16).solve(classic4, SolverConfig(10, 2, 0))
    assert best.metadata["workers"] == 2


def test_rejects_empty_pool():
    with pytest.raises(ConfigError, match="workers must be >= 1"):
        ParallelShotgunSolver(workers=0)


def test_ties_go_to_earliest_run():
    first = RunResult(tour=(0, 1, 2), length=5.0, run_index=1)
    later = RunResult(tour=(0, 2, 1), length=5.0, run_index=4)
    assert first.beats(later)
    assert not later.beats(first)
    assert later.beats(None)
    assert RunResult(tour=(0, 2, 1), length=4.0, run_index=9).beats(first)


@pytest.mark.parametrize("total, parts", [(10, 3), (5, 5), (7, 1), (3, 2)])
def test_static_chunks_cover_every_restart(total, parts):
    chunks = static_chunks(total, parts)
    assert len(chunks) == parts
    assert [r for c in chunks for r in c] == list(range(total))
    sizes = [len(c) for c in chunks]
    assert max(sizes) - min(sizes) <= 1


def test_shared_best_under_contention():
    shared = _SharedBest()
    runs = [RunResult(tour=(0,), length=float(100 - i % 37), run_index=i) for i in range(400)]

    def offer_all(chunk):
        for run in chunk:
            shared.offer(run)

    threads = [threading.Thread(target=offer_all, args=(runs[k::8],)) for k in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    best = shared.get()
    assert best.length == 64.0
    assert best.run_index == 36  # first run with length 64
