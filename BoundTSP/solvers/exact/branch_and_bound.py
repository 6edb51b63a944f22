from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import List, Sequence, Tuple

import numpy as np

from BoundTSP.graph import AdjacencyList, EdgeView
from BoundTSP.instance import DistanceTable
from BoundTSP.solvers.approx.mst_preorder import minimum_spanning_tree, preorder_traversal
from BoundTSP.solvers.base import (
    AlgorithmResult,
    BaseSolver,
    TimeLimitExpired,
    current_time,
    enforce_time_budget,
)
from BoundTSP.tour import Tour, anchored_order
from BoundTSP.utils.taxonomy import AlgorithmFamily

logger = logging.getLogger(__name__)


@dataclass
class SearchConfig:
    """Knobs for the branch-and-bound search.

    Attributes:
        progress_interval: branch decisions between two progress reports.
        time_limit: wall clock budget in seconds, ``None`` to run to completion.
        refine: pass every improved incumbent through pairwise swap refinement.
    """

    progress_interval: int = 100_000
    time_limit: float | None = None
    refine: bool = True

    def __post_init__(self) -> None:
        if self.progress_interval <= 0:
            raise ValueError(f"progress_interval must be positive, got {self.progress_interval}.")
        if self.time_limit is not None and self.time_limit < 0:
            raise ValueError(f"time_limit must be non-negative, got {self.time_limit}.")


@dataclass
class SearchStats:
    """Counters accumulated over one search, plus a window reset at every progress report."""

    calls: int = 0
    prunes: int = 0
    branch_length: int = 0
    incumbent_updates: int = 0
    refinement_swaps: int = 0
    window_calls: int = 0
    window_prunes: int = 0
    window_branch_length: int = 0

    def record_branch(self, length: int) -> None:
        self.calls += 1
        self.window_calls += 1
        self.branch_length += length
        self.window_branch_length += length

    def record_prune(self) -> None:
        self.prunes += 1
        self.window_prunes += 1

    def reset_window(self) -> None:
        self.window_calls = 0
        self.window_prunes = 0
        self.window_branch_length = 0


@dataclass
class Incumbent:
    tour: Tour
    cost: float


def _report_progress(stats: SearchStats, incumbent: Incumbent, tour: Tour) -> None:
    window = max(stats.window_calls, 1)
    logger.info("")
    logger.info("branches : %d", stats.calls)
    logger.info("prune ratio : %.4f%%", stats.window_prunes / window * 100)
    logger.info("avg branch length : %.4f", stats.window_branch_length / window)
    logger.info("best cost : %s", incumbent.cost)
    logger.info("best path : %s", incumbent.tour)
    logger.info("temp path : %s", tour)


def _promote(
    tour: Tour,
    cost: float,
    incumbent: Incumbent,
    distance: DistanceTable,
    stats: SearchStats,
    config: SearchConfig,
) -> None:
    best = tour.copy()
    logger.info("")
    logger.info("# new path found : %s", cost)
    logger.info("# path : %s", best)
    if config.refine:
        stats.refinement_swaps += best.evolve(distance)
        cost = best.full_cost(distance)
        logger.info("# refined cost : %s", cost)
    incumbent.tour = best
    incumbent.cost = cost
    stats.incumbent_updates += 1


def branch_and_bound(
    tour: Tour,
    incumbent: Incumbent,
    distance: DistanceTable,
    edges: EdgeView,
    stats: SearchStats,
    config: SearchConfig,
    start_time: float,
) -> None:
    """Explore every completion of ``tour``, updating ``incumbent`` in place.

    ``tour`` is returned to the exact state it was passed in, on every exit
    path, so that the caller's sibling branches see the right visited set.
    """
    enforce_time_budget(start_time, config.time_limit)
    if stats.window_calls >= config.progress_interval:
        _report_progress(stats, incumbent, tour)
        stats.reset_window()

    if len(tour) == tour.n_cities - 1:
        last_city = next(tour.unvisited())
        with tour.extended(last_city):
            cost = tour.full_cost(distance)
            if cost < incumbent.cost:
                _promote(tour, cost, incumbent, distance, stats, config)
        return

    # most promising branches first
    branch_order: List[Tuple[float, int]] = []
    for next_city in list(tour.unvisited()):
        with tour.extended(next_city):
            branch_order.append((tour.lower_bound(distance, edges), next_city))
    branch_order.sort()

    for lower_bound, next_city in branch_order:
        stats.record_branch(len(tour))
        with tour.extended(next_city):
            if lower_bound < incumbent.cost:
                branch_and_bound(tour, incumbent, distance, edges, stats, config, start_time)
            else:
                stats.record_prune()


class BranchAndBoundSolver(BaseSolver):
    name = "branch_and_bound"
    family = AlgorithmFamily.EXACT

    def __init__(self, config: SearchConfig | None = None, initial_order: Sequence[int] | None = None):
        self.config = config or SearchConfig()
        self.initial_order = list(initial_order) if initial_order is not None else None

    def solve(self, graph: np.ndarray, time_limit: float | None = None) -> AlgorithmResult:
        distance = DistanceTable.from_matrix(graph)
        start_time = current_time()
        n = distance.size
        config = self.config
        if time_limit is not None:
            config = SearchConfig(
                progress_interval=config.progress_interval,
                time_limit=time_limit,
                refine=config.refine,
            )

        adjacency = AdjacencyList.complete(distance)
        edges = adjacency.by_weight()

        order = self.initial_order
        if order is None:
            order = preorder_traversal(minimum_spanning_tree(edges).by_destination())
        else:
            order = anchored_order(order, n)
        seed = Tour.from_order(order)
        incumbent = Incumbent(tour=seed, cost=seed.full_cost(distance))
        seed_cost = incumbent.cost

        stats = SearchStats()
        tour = Tour(n)
        tour.push(0)
        status = "complete"
        try:
            branch_and_bound(tour, incumbent, distance, edges, stats, config, start_time)
        except TimeLimitExpired:
            status = "timeout"

        totals = asdict(stats)
        for key in ("window_calls", "window_prunes", "window_branch_length"):
            totals.pop(key)
        return AlgorithmResult(
            name=self.name,
            path=incumbent.tour.cities,
            cost=incumbent.cost,
            elapsed=current_time() - start_time,
            status=status,
            metadata={"seed_path": list(order), "seed_cost": seed_cost, **totals},
        )


__all__ = [
    "BranchAndBoundSolver",
    "Incumbent",
    "SearchConfig",
    "SearchStats",
    "branch_and_bound",
]
