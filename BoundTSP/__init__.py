from BoundTSP.core import BoundTSP
from BoundTSP.graph import AdjacencyList, Edge, EdgeOrder, EdgeView
from BoundTSP.instance import City, DistanceTable, InstanceFileError, load_cities, parse_cities
from BoundTSP.solvers import (
    AlgorithmResult,
    BaseSolver,
    SOLVER_FAMILIES,
    SOLVER_REGISTRY,
    SOLVER_SPECS,
    SearchConfig,
    SearchStats,
    get_solver,
)
from BoundTSP.tour import Tour
from BoundTSP.utils.taxonomy import AlgorithmFamily

__all__ = [
    "AdjacencyList",
    "AlgorithmFamily",
    "AlgorithmResult",
    "BaseSolver",
    "BoundTSP",
    "City",
    "DistanceTable",
    "Edge",
    "EdgeOrder",
    "EdgeView",
    "InstanceFileError",
    "SOLVER_FAMILIES",
    "SOLVER_REGISTRY",
    "SOLVER_SPECS",
    "SearchConfig",
    "SearchStats",
    "Tour",
    "get_solver",
    "load_cities",
    "parse_cities",
]
