from BoundTSP.solvers.exact.branch_and_bound import BranchAndBoundSolver, SearchConfig, SearchStats
from BoundTSP.solvers.exact.brute_force import BruteForceSolver

__all__ = [
    "BranchAndBoundSolver",
    "BruteForceSolver",
    "SearchConfig",
    "SearchStats",
]
