from BoundTSP.solvers.heuristics.pairwise_swap import PairwiseSwapSolver

__all__ = ["PairwiseSwapSolver"]
