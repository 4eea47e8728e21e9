"""
Approximate shortest closed tours over 2-D points: nearest-neighbor
construction, 2-opt and simulated annealing.
"""

from .pipeline import AnnealingPipeline, run_pipeline, solve

__all__ = [
    "data",
    "evaluation",
    "pipeline",
    "AnnealingPipeline",
    "run_pipeline",
    "solve",
]
