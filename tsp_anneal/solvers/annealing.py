"""
Simulated annealing over pairwise swaps of interior tour positions.
"""

import logging
import math
import random
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Sequence

from .base import PointSet, Tour, distance_matrix, route_cost

logger = logging.getLogger(__name__)


@dataclass
class AnnealingConfig:
    initial_temperature: float = 1000.0
    cooling_factor: float = 0.9999999
    min_temperature: float = 1.0
    max_iterations: Optional[int] = None
    random_seed: Optional[int] = None
    # Steps between progress logs and exact re-measures of the current length.
    log_interval: int = 1_000_000

    def __post_init__(self):
        if not 0.0 < self.cooling_factor < 1.0:
            raise ValueError(f"cooling_factor must be in (0, 1), got {self.cooling_factor}")
        if self.min_temperature <= 0.0:
            raise ValueError(f"min_temperature must be positive, got {self.min_temperature}")
        if self.initial_temperature < self.min_temperature:
            raise ValueError("initial_temperature must not be below min_temperature")
        if self.max_iterations is not None and self.max_iterations < 0:
            raise ValueError("max_iterations must be non-negative")
        if self.log_interval < 1:
            raise ValueError("log_interval must be at least 1")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnnealingConfig":
        known = set(asdict(cls()).keys())
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"unknown annealing options: {', '.join(sorted(unknown))}")
        return cls(**{k: v for k, v in data.items() if v is not None})

    @property
    def expected_iterations(self) -> int:
        steps = math.ceil(
            math.log(self.min_temperature / self.initial_temperature) / math.log(self.cooling_factor)
        )
        if self.max_iterations is not None:
            steps = min(steps, self.max_iterations)
        return max(0, steps)


def acceptance_probability(existing_length: float, new_length: float, temperature: float) -> float:
    """Metropolis criterion. Equal lengths give exp(0) == 1."""
    if temperature <= 0.0:
        raise ValueError(f"temperature must be positive, got {temperature}")
    if new_length < existing_length:
        return 1.0
    return math.exp((existing_length - new_length) / temperature)


def swap_delta(tour: Sequence[int], p: int, q: int, dist: Sequence[Sequence[float]]) -> float:
    """Length change from swapping interior positions ``p`` and ``q``."""
    if p == q:
        return 0.0
    if p > q:
        p, q = q, p

    def at(k: int) -> int:
        if k == p:
            return tour[q]
        if k == q:
            return tour[p]
        return tour[k]

    delta = 0.0
    # Edge k joins positions k and k + 1; at most four edges touch p or q.
    for k in {p - 1, p, q - 1, q}:
        delta += dist[at(k)][at(k + 1)] - dist[tour[k]][tour[k + 1]]
    return delta


def simulated_annealing(
    tour: Sequence[int],
    points: PointSet,
    config: Optional[AnnealingConfig] = None,
    rng: Optional[random.Random] = None,
    dist: Optional[Sequence[Sequence[float]]] = None,
) -> Tour:
    cfg = config or AnnealingConfig()
    rng = rng or random.Random(cfg.random_seed)
    current = list(tour)
    best = list(tour)
    n = len(current)
    if n - 2 < 2:
        # Fewer than two interior positions: every swap is a no-op.
        return best
    if dist is None:
        dist = distance_matrix(points).tolist()

    current_len = route_cost(current, dist)
    best_len = current_len
    start_len = current_len
    temperature = cfg.initial_temperature
    iterations = 0
    accepted = 0
    while temperature > cfg.min_temperature:
        if cfg.max_iterations is not None and iterations >= cfg.max_iterations:
            logger.info("annealing stopped at iteration cap %d (T=%.4f)", iterations, temperature)
            break
        p = rng.randint(1, n - 2)
        q = rng.randint(1, n - 2)
        candidate_len = current_len + swap_delta(current, p, q, dist)
        if rng.random() < acceptance_probability(current_len, candidate_len, temperature):
            current[p], current[q] = current[q], current[p]
            current_len = candidate_len
            accepted += 1
        if current_len < best_len:
            # Exact resync before touching best.
            current_len = route_cost(current, dist)
            if current_len < best_len:
                best = current[:]
                best_len = current_len
        temperature *= cfg.cooling_factor
        iterations += 1
        if iterations % cfg.log_interval == 0:
            current_len = route_cost(current, dist)
            logger.debug(
                "iter=%d T=%.4f current=%.4f best=%.4f accepted=%d",
                iterations,
                temperature,
                current_len,
                best_len,
                accepted,
            )
    logger.debug(
        "annealing done: %d iterations, %d accepted, %.4f -> %.4f",
        iterations,
        accepted,
        start_len,
        best_len,
    )
    return best
