from __future__ import annotations

from enum import Enum
from typing import Iterator, List, NamedTuple, Sequence, Tuple

import networkx as nx

from BoundTSP.instance import DistanceTable


class Edge(NamedTuple):
    src: int
    dest: int
    weight: float


class EdgeOrder(str, Enum):
    DESTINATION = "destination"
    WEIGHT = "weight"


_SORT_KEYS = {
    EdgeOrder.DESTINATION: lambda edge: edge.dest,
    # stable sort: equal weights keep destination order
    EdgeOrder.WEIGHT: lambda edge: edge.weight,
}


class EdgeView:
    """Immutable per-city edge lists frozen in a single ordering."""

    def __init__(self, edges: Sequence[Sequence[Edge]], order: EdgeOrder):
        self.order = EdgeOrder(order)
        by_dest = [sorted(row, key=_SORT_KEYS[EdgeOrder.DESTINATION]) for row in edges]
        if self.order is EdgeOrder.WEIGHT:
            by_dest = [sorted(row, key=_SORT_KEYS[EdgeOrder.WEIGHT]) for row in by_dest]
        self._edges: Tuple[Tuple[Edge, ...], ...] = tuple(tuple(row) for row in by_dest)

    def require(self, order: EdgeOrder) -> EdgeView:
        if self.order is not order:
            raise ValueError(f"Expected edges ordered by {order.value}, got edges ordered by {self.order.value}.")
        return self

    def __getitem__(self, city: int) -> Tuple[Edge, ...]:
        return self._edges[city]

    def __len__(self) -> int:
        return len(self._edges)

    def __iter__(self) -> Iterator[Tuple[Edge, ...]]:
        return iter(self._edges)


class AdjacencyList:
    """Per-city lists of weighted edges.

    Each undirected edge is stored once in each endpoint's list, oriented away
    from that endpoint (``edge.src`` is always the owning city). Consumers
    never read the mutable lists directly; they take an ordered, immutable
    :class:`EdgeView` via :meth:`by_weight` or :meth:`by_destination`.
    """

    def __init__(self, size: int):
        self._edges: List[List[Edge]] = [[] for _ in range(size)]

    @classmethod
    def complete(cls, distance: DistanceTable) -> AdjacencyList:
        adjacency = cls(distance.size)
        for src in range(distance.size):
            for dest in range(distance.size):
                if src != dest:
                    adjacency._edges[src].append(Edge(src, dest, distance(src, dest)))
        return adjacency

    def add_edge(self, src: int, dest: int, weight: float) -> None:
        self._edges[src].append(Edge(src, dest, weight))
        self._edges[dest].append(Edge(dest, src, weight))

    def by_destination(self) -> EdgeView:
        return EdgeView(self._edges, EdgeOrder.DESTINATION)

    def by_weight(self) -> EdgeView:
        return EdgeView(self._edges, EdgeOrder.WEIGHT)

    def edge_count(self) -> int:
        return sum(len(row) for row in self._edges) // 2

    def total_weight(self) -> float:
        return sum(edge.weight for row in self._edges for edge in row) / 2.0

    def to_networkx(self) -> nx.Graph:
        graph_nx = nx.Graph()
        graph_nx.add_nodes_from(range(len(self._edges)))
        for row in self._edges:
            for src, dest, weight in row:
                graph_nx.add_edge(src, dest, weight=weight)
        return graph_nx

    def __len__(self) -> int:
        return len(self._edges)


__all__ = ["AdjacencyList", "Edge", "EdgeOrder", "EdgeView"]
