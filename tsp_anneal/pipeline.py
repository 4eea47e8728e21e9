"""
Construct -> improve -> anneal pipeline.
"""

import logging
import random
import time
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from .solvers.annealing import AnnealingConfig, simulated_annealing
from .solvers.base import PointSet, Solver, Tour, check_origin, distance_matrix, tour_length, validate_tour
from .solvers.heuristics import nearest_neighbor_tour, two_opt

logger = logging.getLogger(__name__)


@dataclass
class StageReport:
    name: str
    length: float
    runtime: float


@dataclass
class PipelineReport:
    tour: Tour
    length: float
    stages: Dict[str, StageReport] = field(default_factory=dict)

    @property
    def runtime(self) -> float:
        return sum(s.runtime for s in self.stages.values())


def run_pipeline(
    points: PointSet,
    origin: int,
    config: Optional[AnnealingConfig] = None,
    rng: Optional[random.Random] = None,
) -> PipelineReport:
    check_origin(points, origin)
    n = len(points)
    matrix = distance_matrix(points)
    dist = matrix.tolist()
    report = PipelineReport(tour=[], length=0.0)

    def stage(name: str, fn) -> Tour:
        start = time.perf_counter()
        tour = fn()
        runtime = time.perf_counter() - start
        validate_tour(tour, n, origin)
        length = tour_length(tour, points)
        report.stages[name] = StageReport(name=name, length=length, runtime=runtime)
        logger.info("%s: length=%.4f (%.2fs)", name, length, runtime)
        return tour

    tour = stage("nearest_neighbor", lambda: nearest_neighbor_tour(points, origin, dist=matrix))
    tour = stage("two_opt", lambda: two_opt(tour, points, dist=dist))
    tour = stage("annealing", lambda: simulated_annealing(tour, points, config=config, rng=rng, dist=dist))
    report.tour = tour
    report.length = report.stages["annealing"].length
    return report


def solve(
    points: PointSet,
    origin: int,
    config: Optional[AnnealingConfig] = None,
    rng: Optional[random.Random] = None,
) -> Tuple[Tour, float]:
    report = run_pipeline(points, origin, config=config, rng=rng)
    return report.tour, report.length


class AnnealingPipeline(Solver):
    name = "annealing"

    def __init__(self, config: Optional[AnnealingConfig] = None, rng: Optional[random.Random] = None):
        self.config = config or AnnealingConfig()
        self.rng = rng

    def solve(self, points: PointSet, origin: int) -> Tour:
        tour, _ = solve(points, origin, config=self.config, rng=self.rng)
        return tour
