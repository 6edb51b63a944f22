from __future__ import annotations

import numpy as np
import pytest

from BoundTSP import BoundTSP, SOLVER_FAMILIES, SearchConfig, get_solver
from BoundTSP.instance import InstanceFileError
from BoundTSP.solvers import BruteForceSolver, PairwiseSwapSolver
from BoundTSP.solvers.base import compute_cycle_cost
from BoundTSP.solvers.heuristics import pairwise_swap
from BoundTSP.utils.taxonomy import AlgorithmFamily

from conftest import UNIT_SQUARE, random_coordinates


def test_registry_lists_every_solver():
    assert SOLVER_FAMILIES == {
        "mst_preorder": AlgorithmFamily.APPROXIMATION,
        "pairwise_swap": AlgorithmFamily.HEURISTIC,
        "branch_and_bound": AlgorithmFamily.EXACT,
        "brute_force": AlgorithmFamily.EXACT,
    }


def test_get_solver_passes_keyword_arguments():
    solver = get_solver("branch_and_bound", config=SearchConfig(refine=False))
    assert solver.config.refine is False
    assert get_solver("mst_preorder").name == "mst_preorder"


def test_get_solver_unknown_name():
    with pytest.raises(KeyError):
        get_solver("held_karp")


def test_brute_force_refuses_large_instances():
    with pytest.raises(ValueError):
        BruteForceSolver().solve(np.zeros((11, 11)))


def test_brute_force_counts_distinct_tours(unit_square):
    result = BruteForceSolver().solve(unit_square.matrix)
    # (4 - 1)! / 2
    assert result.metadata["tours_evaluated"] == 3
    assert result.cost == pytest.approx(4.0)


def test_pairwise_swap_solver_improves_identity(make_table):
    table = make_table(10, seed=8)
    result = PairwiseSwapSolver().solve(table.matrix)
    assert result.status == "complete"
    assert result.cost <= result.metadata["initial_cost"]
    assert sorted(result.path) == list(range(10))


def test_pairwise_swap_solver_with_initial_order(unit_square):
    result = PairwiseSwapSolver(initial_order=[0, 2, 1, 3]).solve(unit_square.matrix)
    assert result.path == [0, 1, 2, 3]
    assert result.metadata["swaps"] == 1


def test_solvers_are_callable(unit_square):
    result = get_solver("mst_preorder")(unit_square.matrix)
    assert result.cost == pytest.approx(4.0)


def test_pipeline_from_coordinates():
    result = BoundTSP().solve({"coordinates": UNIT_SQUARE})
    assert result.name == "branch_and_bound"
    assert result.cost == pytest.approx(4.0)
    assert result.metadata["seed_solver"] == "mst_preorder"
    assert result.metadata["mst_weight"] == pytest.approx(3.0)
    assert result.metadata["wallclock_total"] >= result.elapsed


def test_pipeline_from_distance_matrix():
    coords = random_coordinates(7, seed=21)
    diff = coords[:, None, :] - coords[None, :, :]
    matrix = np.linalg.norm(diff, axis=-1)
    result = BoundTSP(SearchConfig(progress_interval=10)).solve({"distance_matrix": matrix.tolist()})
    assert result.cost == pytest.approx(BruteForceSolver().solve(matrix).cost)


def test_pipeline_requires_data():
    with pytest.raises(ValueError):
        BoundTSP().solve({"coordinates": None})


def test_pipeline_solve_file(city_file):
    path = city_file(["0 0 0", "1 0 1", "2 1 1", "3 1 0"])
    result = BoundTSP().solve_file(path, 4)
    assert result.cost == pytest.approx(4.0)


def test_pipeline_solve_file_short(city_file):
    with pytest.raises(InstanceFileError):
        BoundTSP().solve_file(city_file(["0 0 0"]), 4)


def test_pairwise_swap_solver_rotates_initial_order(unit_square):
    result = PairwiseSwapSolver(initial_order=[2, 1, 3, 0]).solve(unit_square.matrix)
    assert result.path[0] == 0
    assert sorted(result.path) == [0, 1, 2, 3]
    assert result.cost == pytest.approx(4.0)


def test_pairwise_swap_solver_rejects_bad_order(unit_square):
    with pytest.raises(ValueError, match="permutation"):
        PairwiseSwapSolver(initial_order=[0, 1, 2, 9]).solve(unit_square.matrix)


def test_pairwise_swap_solver_zero_budget(unit_square):
    result = PairwiseSwapSolver(initial_order=[0, 2, 1, 3]).solve(unit_square.matrix, time_limit=0.0)
    assert result.status == "timeout"
    assert result.path == [0, 2, 1, 3]
    assert result.metadata["swaps"] == 0


def test_pairwise_swap_solver_checks_budget_between_passes(unit_square, monkeypatch):
    budgets = iter([1.0, 0.0])
    monkeypatch.setattr(pairwise_swap, "remaining_budget", lambda start, limit: next(budgets))
    result = PairwiseSwapSolver(initial_order=[0, 2, 1, 3]).solve(unit_square.matrix, time_limit=5.0)
    assert result.status == "timeout"
    assert result.metadata["improving_passes"] == 1
    assert result.path == [0, 1, 2, 3]


def test_pairwise_swap_solver_completes_within_budget(make_table):
    table = make_table(8, seed=6)
    result = PairwiseSwapSolver().solve(table.matrix, time_limit=60.0)
    assert result.status == "complete"
    assert result.cost <= result.metadata["initial_cost"]


@pytest.mark.parametrize("name", ["mst_preorder", "pairwise_swap", "branch_and_bound", "brute_force"])
def test_result_paths_are_open_tours(make_table, name):
    table = make_table(6, seed=4)
    result = get_solver(name).solve(table.matrix)
    assert result.path[0] == 0
    assert len(result.path) == 6 and sorted(result.path) == list(range(6))
    assert result.cost == pytest.approx(compute_cycle_cost(table.matrix, result.path))


def test_compute_cycle_cost_includes_return_leg(unit_square):
    assert compute_cycle_cost(unit_square.matrix, [0, 1, 2, 3]) == pytest.approx(4.0)
    assert compute_cycle_cost(unit_square.matrix, [0, 2]) == pytest.approx(2 * 2 ** 0.5)
