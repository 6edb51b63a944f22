from BoundTSP.solvers.approx.mst_preorder import (
    MSTPreorderSolver,
    minimum_spanning_tree,
    preorder_traversal,
    validate_spanning_tree,
)

__all__ = [
    "MSTPreorderSolver",
    "minimum_spanning_tree",
    "preorder_traversal",
    "validate_spanning_tree",
]
