from __future__ import annotations

from typing import Sequence

import numpy as np

from BoundTSP.instance import DistanceTable
from BoundTSP.solvers.base import AlgorithmResult, BaseSolver, current_time, remaining_budget
from BoundTSP.tour import Tour, anchored_order
from BoundTSP.utils.taxonomy import AlgorithmFamily


class PairwiseSwapSolver(BaseSolver):
    """Hill climbing by swapping pairs of cities, starting from a given or identity order.

    The time budget is checked between improvement passes; a pass that has
    started always runs to its end.
    """

    name = "pairwise_swap"
    family = AlgorithmFamily.HEURISTIC

    def __init__(self, initial_order: Sequence[int] | None = None):
        self.initial_order = list(initial_order) if initial_order is not None else None

    def solve(self, graph: np.ndarray, time_limit: float | None = None) -> AlgorithmResult:
        start_time = current_time()
        distance = DistanceTable.from_matrix(graph)
        if self.initial_order is None:
            order = list(range(distance.size))
        else:
            order = anchored_order(self.initial_order, distance.size)

        tour = Tour.from_order(order)
        initial_cost = tour.full_cost(distance)
        passes = 0
        stopped = False

        def keep_going() -> bool:
            nonlocal passes, stopped
            passes += 1
            stopped = remaining_budget(start_time, time_limit) <= 0
            return not stopped

        if remaining_budget(start_time, time_limit) <= 0:
            swaps, stopped = 0, True
        else:
            swaps = tour.evolve(distance, keep_going=keep_going)

        return AlgorithmResult(
            name=self.name,
            path=tour.cities,
            cost=tour.full_cost(distance),
            elapsed=current_time() - start_time,
            status="timeout" if stopped else "complete",
            metadata={"swaps": swaps, "improving_passes": passes, "initial_cost": initial_cost},
        )


__all__ = ["PairwiseSwapSolver"]
