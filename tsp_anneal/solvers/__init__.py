from .annealing import AnnealingConfig, acceptance_probability, simulated_annealing, swap_delta
from .base import (
    InvalidInputError,
    Point,
    PointSet,
    Solver,
    SolveResult,
    Tour,
    TourError,
    distance,
    distance_matrix,
    route_cost,
    tour_length,
    validate_tour,
)
from .heuristics import ConstructiveSolver, LocalSearchSolver, nearest_neighbor_tour, two_opt

__all__ = [
    "AnnealingConfig",
    "acceptance_probability",
    "simulated_annealing",
    "swap_delta",
    "InvalidInputError",
    "Point",
    "PointSet",
    "Solver",
    "SolveResult",
    "Tour",
    "TourError",
    "distance",
    "distance_matrix",
    "route_cost",
    "tour_length",
    "validate_tour",
    "ConstructiveSolver",
    "LocalSearchSolver",
    "nearest_neighbor_tour",
    "two_opt",
]
