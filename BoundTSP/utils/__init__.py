from BoundTSP.utils.taxonomy import AlgorithmFamily

__all__ = ["AlgorithmFamily"]
