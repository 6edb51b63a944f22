from __future__ import annotations

import heapq
import itertools
from typing import List, Tuple

import networkx as nx
import numpy as np

from BoundTSP.graph import AdjacencyList, Edge, EdgeOrder, EdgeView
from BoundTSP.instance import DistanceTable
from BoundTSP.solvers.base import (
    AlgorithmResult,
    BaseSolver,
    TimeLimitExpired,
    current_time,
    enforce_time_budget,
)
from BoundTSP.tour import Tour
from BoundTSP.utils.taxonomy import AlgorithmFamily


def minimum_spanning_tree(edges: EdgeView, start: int = 0) -> AdjacencyList:
    """Prim's algorithm over a weight-ordered complete graph, rooted at ``start``."""
    edges.require(EdgeOrder.WEIGHT)
    tree = AdjacencyList(len(edges))
    visited = [False] * len(edges)
    # sequence number breaks weight ties by insertion order
    sequence = itertools.count()
    candidate: List[Tuple[float, int, Edge]] = []

    visited[start] = True
    for edge in edges[start]:
        heapq.heappush(candidate, (edge.weight, next(sequence), edge))

    while candidate:
        _, _, (src, dest, weight) = heapq.heappop(candidate)
        if visited[dest]:
            continue
        visited[dest] = True
        tree.add_edge(src, dest, weight)
        for edge in edges[dest]:
            if not visited[edge.dest]:
                heapq.heappush(candidate, (edge.weight, next(sequence), edge))

    return tree


def validate_spanning_tree(tree: AdjacencyList) -> None:
    graph_nx = tree.to_networkx()
    if not nx.is_tree(graph_nx):
        raise ValueError(
            f"Expected a spanning tree over {len(tree)} cities, got {tree.edge_count()} edges "
            f"in {nx.number_connected_components(graph_nx)} component(s)."
        )


def preorder_traversal(edges: EdgeView, start: int = 0) -> List[int]:
    """Iterative depth-first preorder; lower-indexed neighbours are visited first."""
    edges.require(EdgeOrder.DESTINATION)
    result: List[int] = []
    visited = [False] * len(edges)
    stack = [start]

    while stack:
        city = stack.pop()
        if visited[city]:
            continue
        visited[city] = True
        result.append(city)
        # reversed push so that the smallest destination is popped next
        for edge in reversed(edges[city]):
            if not visited[edge.dest]:
                stack.append(edge.dest)

    return result


class MSTPreorderSolver(BaseSolver):
    """Classic 2-approximation: preorder walk of a minimum spanning tree."""

    name = "mst_preorder"
    family = AlgorithmFamily.APPROXIMATION

    def solve(self, graph: np.ndarray, time_limit: float | None = None) -> AlgorithmResult:
        start_time = current_time()
        distance = DistanceTable.from_matrix(graph)
        try:
            enforce_time_budget(start_time, time_limit)
            tree = minimum_spanning_tree(AdjacencyList.complete(distance).by_weight())
            validate_spanning_tree(tree)

            enforce_time_budget(start_time, time_limit)
            order = preorder_traversal(tree.by_destination())
        except TimeLimitExpired:
            return AlgorithmResult(
                name=self.name,
                path=None,
                cost=None,
                elapsed=current_time() - start_time,
                status="timeout",
                metadata={},
            )

        cost = Tour.from_order(order).full_cost(distance)
        return AlgorithmResult(
            name=self.name,
            path=order,
            cost=cost,
            elapsed=current_time() - start_time,
            status="complete",
            metadata={"mst_weight": tree.total_weight(), "mst_edges": tree.edge_count()},
        )


__all__ = [
    "MSTPreorderSolver",
    "minimum_spanning_tree",
    "preorder_traversal",
    "validate_spanning_tree",
]
