from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Type

import numpy as np

from BoundTSP.utils.taxonomy import AlgorithmFamily


@dataclass
class AlgorithmResult:
    """Container capturing the outcome of running a TSP solver.

    ``path`` is an open tour: each city appears exactly once, it starts at
    city 0, and the closing city is not repeated at the end. ``cost`` still
    counts the closing edge from ``path[-1]`` back to ``path[0]``.
    """

    name: str
    path: List[int] | None
    cost: float | None
    elapsed: float
    status: str
    metadata: Dict[str, Any] = field(default_factory=dict)


class TimeLimitExpired(Exception):
    """Raised when an algorithm exceeds the allotted wall clock budget."""


def current_time() -> float:
    return time.perf_counter()


def remaining_budget(start_time: float, time_limit: float | None) -> float:
    if time_limit is None:
        return float("inf")
    return time_limit - (current_time() - start_time)


def enforce_time_budget(start_time: float, time_limit: float | None) -> None:
    if time_limit is not None and remaining_budget(start_time, time_limit) <= 0:
        raise TimeLimitExpired("Time budget exhausted")


def compute_cycle_cost(dist_matrix: np.ndarray, cycle: Sequence[int]) -> float:
    """Cost of an open tour such as ``[0, 2, 1]``, including the return leg to its first city."""
    if not cycle:
        return float("inf")
    cost = 0.0
    for i in range(len(cycle)):
        a = cycle[i]
        b = cycle[(i + 1) % len(cycle)]
        cost += float(dist_matrix[a, b])
    return cost


@dataclass(frozen=True)
class SolverSpec:
    """Metadata describing a solver implementation."""

    name: str
    cls: Type["BaseSolver"]
    family: AlgorithmFamily


class BaseSolver:
    """Common interface for BoundTSP solvers."""

    name: str
    family: AlgorithmFamily

    def solve(self, graph: np.ndarray, time_limit: float | None = None) -> AlgorithmResult:  # noqa: D401
        """Solve a TSP instance represented as a distance matrix."""
        raise NotImplementedError

    def __call__(self, graph: np.ndarray, time_limit: float | None = None) -> AlgorithmResult:
        return self.solve(graph, time_limit=time_limit)


__all__ = [
    "AlgorithmResult",
    "AlgorithmFamily",
    "BaseSolver",
    "SolverSpec",
    "TimeLimitExpired",
    "compute_cycle_cost",
    "current_time",
    "enforce_time_budget",
    "remaining_budget",
]
