import numpy as np
import pytest

from shotgun_tsp.distance import DistanceModel, tour_length
from shotgun_tsp.models import ClimbState
from shotgun_tsp.solvers.hill_climb import (
    first_improvement,
    hill_climb,
    is_two_opt_optimal,
    random_tour,
    run_rng,
    two_opt_swap,
)


def _naive_first_improvement(tour, distances):
    """Reference scan: full recomputation for every (i, j)."""
    length = tour_length(tour, distances)
    n = len(tour)
    for i in range(1, n - 1):
        for j in range(i + 1, n):
            cand = two_opt_swap(tour, i, j)
            cand_len = tour_length(cand, distances)
            if cand_len < length:
                return cand, cand_len
    return None


# -- random starts -------------------------------------------------------


def test_random_tour_is_anchored_permutation():
    tour = random_tour(50, run_rng(42, 0))
    assert tour[0] == 0
    assert sorted(tour) == list(range(50))
    assert all(isinstance(v, int) for v in tour)


def test_random_tour_reproducible_per_run():
    assert random_tour(30, run_rng(42, 3)) == random_tour(30, run_rng(42, 3))
    assert random_tour(30, run_rng(42, 3)) != random_tour(30, run_rng(42, 4))


@pytest.mark.parametrize("n, expected", [(1, (0,)), (2, (0, 1))])
def test_random_tour_tiny(n, expected):
    assert random_tour(n, run_rng(0, 0)) == expected


# -- 2-opt move ----------------------------------------------------------


def test_two_opt_swap_reverses_inclusive_segment():
    tour = (0, 1, 2, 3, 4)
    assert two_opt_swap(tour, 1, 3) == (0, 3, 2, 1, 4)
    assert two_opt_swap(tour, 1, 4) == (0, 4, 3, 2, 1)
    assert two_opt_swap(tour, 3, 4) == (0, 1, 2, 4, 3)
    assert tour == (0, 1, 2, 3, 4)


@pytest.mark.parametrize("fixture", ["symmetric12", "asymmetric10"])
def test_first_improvement_matches_full_recompute_scan(fixture, request):
    distances = request.getfixturevalue(fixture)
    for r in range(20):
        tour = random_tour(distances.size, run_rng(5, r))
        assert first_improvement(tour, distances) == _naive_first_improvement(tour, distances)


def test_first_improvement_picks_first_not_best():
    line = DistanceModel([[abs(a - b) for b in range(5)] for a in range(5)])
    tour = (0, 4, 1, 2, 3)
    assert tour_length(tour, line) == 12

    # (2, 4) would give 8, but (1, 2) is scanned first and already improves
    assert first_improvement(tour, line) == ((0, 1, 4, 2, 3), 10.0)
    assert tour_length(two_opt_swap(tour, 2, 4), line) == 8


@pytest.mark.parametrize("matrix", [[[0]], [[0, 3], [4, 0]]])
def test_first_improvement_empty_neighbourhood(matrix):
    m = DistanceModel(matrix)
    assert first_improvement(tuple(range(m.size)), m) is None


# -- the climb -----------------------------------------------------------


def test_hill_climb_from_known_start(classic4):
    run = hill_climb(classic4, 100, run_rng(0, 0), start=(0, 2, 1, 3))
    assert run.history == [95, 80]
    assert run.tour == (0, 2, 3, 1)
    assert run.length == 80
    assert run.iterations == 1
    assert run.state is ClimbState.CONVERGED


@pytest.mark.parametrize("fixture", ["symmetric12", "asymmetric10"])
def test_hill_climb_invariants(fixture, request):
    distances = request.getfixturevalue(fixture)
    for r in range(5):
        run = hill_climb(distances, 10_000, run_rng(1, r), run_index=r)
        assert sorted(run.tour) == list(range(distances.size))
        assert run.tour[0] == 0
        assert run.run_index == r
        assert all(b < a for a, b in zip(run.history, run.history[1:]))
        assert run.length == pytest.approx(tour_length(run.tour, distances))
        assert run.state is ClimbState.CONVERGED
        assert is_two_opt_optimal(run.tour, distances)


def test_hill_climb_respects_iteration_cap(symmetric12):
    rng_a, rng_b = run_rng(9, 0), run_rng(9, 0)
    capped = hill_climb(symmetric12, 1, rng_a)
    assert capped.iterations <= 1
    assert len(capped.history) == capped.iterations + 1

    frozen = hill_climb(symmetric12, 0, rng_b)
    assert frozen.iterations == 0
    assert frozen.state is ClimbState.RUNNING
    assert frozen.history == [frozen.length]


@pytest.mark.parametrize("matrix", [[[0]], [[0, 2], [7, 0]]])
@pytest.mark.parametrize("cap", [0, 10])
def test_tiny_instances_converge_immediately(matrix, cap):
    m = DistanceModel(matrix)
    run = hill_climb(m, cap, run_rng(3, 0))
    assert run.state is ClimbState.CONVERGED
    assert run.iterations == 0
    assert run.tour == tuple(range(m.size))


def test_hill_climb_is_deterministic(asymmetric10):
    a = hill_climb(asymmetric10, 500, run_rng(77, 2))
    b = hill_climb(asymmetric10, 500, run_rng(77, 2))
    assert (a.tour, a.length, a.history) == (b.tour, b.length, b.history)


def test_is_two_opt_optimal_detects_improvable(classic4):
    assert not is_two_opt_optimal((0, 1, 2, 3), classic4)
    assert is_two_opt_optimal((0, 1, 3, 2), classic4)


def test_run_rng_streams_differ():
    a = run_rng(42, 0).random(4)
    b = run_rng(42, 1).random(4)
    assert not np.array_equal(a, b)
