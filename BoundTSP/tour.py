"""Tour model shared by the approximation, local search and exact solvers."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, List, Sequence, Tuple

from BoundTSP.graph import EdgeOrder, EdgeView
from BoundTSP.instance import DistanceTable

logger = logging.getLogger(__name__)


class Tour:
    """Ordered sequence of distinct cities with O(1) membership queries.

    A tour built with :meth:`from_order` is complete and may be refined in
    place with :meth:`evolve`. A tour built with ``Tour(n_cities)`` starts
    empty and is grown and shrunk with :meth:`push` / :meth:`pop` (or the
    :meth:`extended` context manager) during search.
    """

    def __init__(self, n_cities: int):
        self._path: List[int] = []
        self._visited: List[bool] = [False] * n_cities

    @classmethod
    def from_order(cls, order: Sequence[int]) -> Tour:
        tour = cls(len(order))
        for city in order:
            tour.push(city)
        return tour

    def push(self, city: int) -> None:
        if self._visited[city]:
            raise ValueError(f"City {city} is already on the tour.")
        self._visited[city] = True
        self._path.append(city)

    def pop(self) -> int:
        if not self._path:
            raise IndexError("pop from an empty tour")
        city = self._path.pop()
        self._visited[city] = False
        return city

    @contextmanager
    def extended(self, city: int) -> Iterator[Tour]:
        """Push ``city`` for the duration of the block; it is popped on every exit path."""
        self.push(city)
        try:
            yield self
        finally:
            self.pop()

    @property
    def n_cities(self) -> int:
        return len(self._visited)

    @property
    def first(self) -> int:
        return self._path[0]

    @property
    def last(self) -> int:
        return self._path[-1]

    @property
    def cities(self) -> List[int]:
        return list(self._path)

    def is_visited(self, city: int) -> bool:
        return self._visited[city]

    def is_complete(self) -> bool:
        return len(self._path) == len(self._visited)

    def unvisited(self) -> Iterator[int]:
        return (city for city, seen in enumerate(self._visited) if not seen)

    def snapshot(self) -> Tuple[Tuple[int, ...], Tuple[bool, ...]]:
        return tuple(self._path), tuple(self._visited)

    def copy(self) -> Tour:
        clone = Tour(len(self._visited))
        clone._path = list(self._path)
        clone._visited = list(self._visited)
        return clone

    def __len__(self) -> int:
        return len(self._path)

    def __iter__(self) -> Iterator[int]:
        return iter(self._path)

    def __str__(self) -> str:
        return " ".join(map(str, self._path))

    def __repr__(self) -> str:
        return f"Tour([{', '.join(map(str, self._path))}], n_cities={len(self._visited)})"

    def full_cost(self, distance: DistanceTable) -> float:
        """Closed tour length, including the edge from the last city back to the first."""
        path = self._path
        cost = 0.0
        for i in range(len(path)):
            cost += distance(path[i], path[(i + 1) % len(path)])
        return cost

    def lower_bound(self, distance: DistanceTable, edges: EdgeView) -> float:
        """Cheap estimate of the cheapest closed tour that extends this one.

        Sums the exact cost of the visited prefix, half the cheapest edge
        leaving each end of the prefix toward an unvisited city, and for every
        unvisited city half of its two cheapest edges toward the prefix ends
        or other unvisited cities. ``edges`` must be ordered by weight so each
        scan can stop at the first qualifying entries.
        """
        edges.require(EdgeOrder.WEIGHT)
        path = self._path
        visited = self._visited
        if len(path) == len(visited):
            return self.full_cost(distance)

        lb = 0.0
        for i in range(len(path) - 1):
            lb += distance(path[i], path[i + 1])

        first, last = path[0], path[-1]

        # closing edge back to the first city
        for _, dest, weight in edges[first]:
            if not visited[dest]:
                lb += weight / 2.0
                break

        # next step out of the last city
        for _, dest, weight in edges[last]:
            if not visited[dest]:
                lb += weight / 2.0
                break

        for city, seen in enumerate(visited):
            if seen:
                continue
            count = 2
            for _, dest, weight in edges[city]:
                if dest == first or dest == last or not visited[dest]:
                    lb += weight / 2.0
                    count -= 1
                    if count == 0:
                        break

        return lb

    def evolve(self, distance: DistanceTable, keep_going: Callable[[], bool] | None = None) -> int:
        """First-improvement pairwise swap hill climbing; position 0 stays fixed.

        Returns the number of swaps kept. Stops after a full pass keeps none,
        or when ``keep_going`` returns False before another pass would start.
        """
        path = self._path
        current_cost = self.full_cost(distance)
        swaps = 0
        while True:
            updated = False
            for i in range(1, len(path)):
                for j in range(i + 1, len(path)):
                    path[i], path[j] = path[j], path[i]
                    new_cost = self.full_cost(distance)
                    if new_cost < current_cost:
                        updated = True
                        swaps += 1
                        current_cost = new_cost
                    else:
                        path[i], path[j] = path[j], path[i]
            if not updated:
                break
            logger.debug("## improved cost : %s", current_cost)
            logger.debug("## path : %s", self)
            if keep_going is not None and not keep_going():
                break
        return swaps


def anchored_order(order: Sequence[int], n_cities: int) -> List[int]:
    """Check that ``order`` is a permutation of ``range(n_cities)`` and rotate it to start at city 0."""
    order = list(order)
    if sorted(order) != list(range(n_cities)):
        raise ValueError(f"Initial order must be a permutation of cities 0..{n_cities - 1}, got {order}.")
    anchor = order.index(0)
    return order[anchor:] + order[:anchor]


__all__ = ["Tour", "anchored_order"]
