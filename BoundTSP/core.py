from __future__ import annotations

import logging
import pathlib
import time
from typing import Any, Dict

import numpy as np

from BoundTSP.instance import DistanceTable, coordinates_of, load_cities
from BoundTSP.solvers import AlgorithmResult, BranchAndBoundSolver, MSTPreorderSolver, SearchConfig

logger = logging.getLogger(__name__)


class BoundTSP:
    """End-to-end pipeline: distance matrix -> MST preorder seed -> branch-and-bound."""

    def __init__(self, config: SearchConfig | None = None):
        self.config = config or SearchConfig()

    def solve(self, problem_data: Dict[str, Any]) -> AlgorithmResult:
        start_time = time.perf_counter()
        dist_matrix = self._to_distance_matrix(problem_data)

        seed = MSTPreorderSolver().solve(dist_matrix)
        logger.info("initial tour : %s", " ".join(map(str, seed.path)))
        logger.info("initial cost : %s", seed.cost)

        solver = BranchAndBoundSolver(config=self.config, initial_order=seed.path)
        result = solver.solve(dist_matrix)
        metadata = dict(result.metadata)
        metadata.update(
            {
                "seed_solver": seed.name,
                "seed_elapsed": seed.elapsed,
                "mst_weight": seed.metadata.get("mst_weight"),
                "wallclock_total": time.perf_counter() - start_time,
            }
        )
        return AlgorithmResult(
            name=result.name,
            path=result.path,
            cost=result.cost,
            elapsed=result.elapsed,
            status=result.status,
            metadata=metadata,
        )

    def solve_file(self, path: str | pathlib.Path, n_cities: int) -> AlgorithmResult:
        cities = load_cities(path, n_cities)
        return self.solve({"coordinates": coordinates_of(cities)})

    def _to_distance_matrix(self, problem_data: Dict[str, Any]) -> np.ndarray:
        if "distance_matrix" in problem_data and problem_data["distance_matrix"] is not None:
            return DistanceTable.from_matrix(problem_data["distance_matrix"]).matrix
        if "coordinates" not in problem_data or problem_data["coordinates"] is None:
            raise ValueError("Problem data must contain either 'distance_matrix' or 'coordinates'.")
        return DistanceTable.from_coordinates(problem_data["coordinates"]).matrix


__all__ = ["BoundTSP"]
