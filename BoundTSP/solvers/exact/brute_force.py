from __future__ import annotations

import itertools

import numpy as np

from BoundTSP.instance import as_distance_matrix
from BoundTSP.solvers.base import (
    AlgorithmResult,
    BaseSolver,
    TimeLimitExpired,
    compute_cycle_cost,
    current_time,
    enforce_time_budget,
)
from BoundTSP.utils.taxonomy import AlgorithmFamily


class BruteForceSolver(BaseSolver):
    """Enumerates every distinct closed tour anchored at city 0.

    Reversed tours are skipped by requiring the second city to be smaller
    than the last, leaving (n-1)!/2 candidates.
    """

    name = "brute_force"
    family = AlgorithmFamily.EXACT
    max_cities = 10

    def solve(self, graph: np.ndarray, time_limit: float | None = None) -> AlgorithmResult:
        dist_matrix = as_distance_matrix(graph)
        start_time = current_time()
        n = dist_matrix.shape[0]
        if n > self.max_cities:
            raise ValueError(f"Brute force is limited to {self.max_cities} cities, got {n}.")

        best_cost = float("inf")
        best_path = list(range(n))
        tours_evaluated = 0
        status = "complete"
        try:
            for perm in itertools.permutations(range(1, n)):
                if len(perm) > 1 and perm[0] > perm[-1]:
                    continue
                enforce_time_budget(start_time, time_limit)
                tours_evaluated += 1
                path = [0, *perm]
                cost = compute_cycle_cost(dist_matrix, path)
                if cost < best_cost:
                    best_cost = cost
                    best_path = path
        except TimeLimitExpired:
            status = "timeout"

        return AlgorithmResult(
            name=self.name,
            path=best_path,
            cost=best_cost if tours_evaluated else compute_cycle_cost(dist_matrix, best_path),
            elapsed=current_time() - start_time,
            status=status,
            metadata={"tours_evaluated": tours_evaluated},
        )


__all__ = ["BruteForceSolver"]
