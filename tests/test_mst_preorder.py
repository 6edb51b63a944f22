from __future__ import annotations

import itertools

import networkx as nx
import pytest

from BoundTSP.graph import AdjacencyList
from BoundTSP.solvers.approx import (
    MSTPreorderSolver,
    minimum_spanning_tree,
    preorder_traversal,
    validate_spanning_tree,
)
from BoundTSP.solvers.exact import BruteForceSolver


def _brute_force_spanning_weight(table) -> float:
    n = len(table)
    pairs = list(itertools.combinations(range(n), 2))
    best = float("inf")
    for chosen in itertools.combinations(pairs, n - 1):
        graph_nx = nx.Graph()
        graph_nx.add_nodes_from(range(n))
        graph_nx.add_edges_from(chosen)
        if nx.is_tree(graph_nx):
            best = min(best, sum(table(a, b) for a, b in chosen))
    return best


@pytest.mark.parametrize("seed", range(5))
@pytest.mark.parametrize("n_cities", [2, 3, 5, 6])
def test_mst_is_a_minimum_spanning_tree(make_table, n_cities, seed):
    table = make_table(n_cities, seed)
    tree = minimum_spanning_tree(AdjacencyList.complete(table).by_weight())
    assert tree.edge_count() == n_cities - 1
    assert nx.is_connected(tree.to_networkx())
    validate_spanning_tree(tree)
    assert tree.total_weight() <= _brute_force_spanning_weight(table) + 1e-9


def test_mst_matches_networkx_on_larger_instance(make_table):
    table = make_table(40, seed=11)
    complete = AdjacencyList.complete(table)
    tree = minimum_spanning_tree(complete.by_weight())
    expected = nx.minimum_spanning_tree(complete.to_networkx()).size(weight="weight")
    assert tree.total_weight() == pytest.approx(expected)


def test_mst_requires_weight_ordering(unit_square):
    with pytest.raises(ValueError):
        minimum_spanning_tree(AdjacencyList.complete(unit_square).by_destination())


def test_validate_spanning_tree_rejects_forest():
    forest = AdjacencyList(4)
    forest.add_edge(0, 1, 1.0)
    forest.add_edge(2, 3, 1.0)
    with pytest.raises(ValueError, match="2 component"):
        validate_spanning_tree(forest)


def test_preorder_visits_lower_indices_first():
    tree = AdjacencyList(6)
    tree.add_edge(0, 4, 1.0)
    tree.add_edge(0, 2, 1.0)
    tree.add_edge(2, 5, 1.0)
    tree.add_edge(2, 1, 1.0)
    tree.add_edge(4, 3, 1.0)
    assert preorder_traversal(tree.by_destination()) == [0, 2, 1, 5, 4, 3]


def test_preorder_requires_destination_ordering():
    tree = AdjacencyList(2)
    tree.add_edge(0, 1, 1.0)
    with pytest.raises(ValueError):
        preorder_traversal(tree.by_weight())


@pytest.mark.parametrize("seed", range(5))
def test_preorder_is_a_permutation_starting_at_zero(make_table, seed):
    table = make_table(30, seed)
    tree = minimum_spanning_tree(AdjacencyList.complete(table).by_weight())
    order = preorder_traversal(tree.by_destination())
    assert order[0] == 0
    assert sorted(order) == list(range(30))


def test_unit_square_seed(unit_square):
    result = MSTPreorderSolver().solve(unit_square.matrix)
    assert result.status == "complete"
    assert result.path == [0, 1, 2, 3]
    assert result.cost == pytest.approx(4.0)
    assert result.metadata["mst_edges"] == 3
    assert result.metadata["mst_weight"] == pytest.approx(3.0)


@pytest.mark.parametrize("seed", range(4))
def test_seed_is_within_twice_optimal(make_table, seed):
    table = make_table(7, seed)
    approx = MSTPreorderSolver().solve(table.matrix)
    optimal = BruteForceSolver().solve(table.matrix)
    assert optimal.cost <= approx.cost + 1e-9
    assert approx.cost <= 2 * optimal.cost + 1e-9


def test_single_city_seed():
    result = MSTPreorderSolver().solve([[0.0]])
    assert result.path == [0]
    assert result.cost == 0.0
