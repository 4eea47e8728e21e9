import logging
from typing import Optional, Sequence

import numpy as np

from .base import PointSet, Solver, Tour, check_origin, distance_matrix, route_cost

logger = logging.getLogger(__name__)

# Delta filter for 2-opt moves, relative to the current tour length.
IMPROVEMENT_RTOL = 1e-12


def nearest_neighbor_tour(points: PointSet, origin: int, dist: Optional[np.ndarray] = None) -> Tour:
    """
    Greedy nearest-neighbor construction from ``origin``.

    Ties go to the lowest index. A point coincident with the current one
    (distance 0) is an ordinary candidate.
    """
    check_origin(points, origin)
    n = len(points)
    if dist is None:
        dist = distance_matrix(points)
    tour = [origin]
    visited = np.zeros(n, dtype=bool)
    visited[origin] = True
    current = origin
    for _ in range(n - 1):
        row = np.where(visited, np.inf, dist[current])
        # argmin returns the first minimal index.
        nxt = int(np.argmin(row))
        tour.append(nxt)
        visited[nxt] = True
        current = nxt
    tour.append(origin)
    return tour


def two_opt(tour: Sequence[int], points: PointSet, dist: Optional[Sequence[Sequence[float]]] = None) -> Tour:
    """
    First-improvement 2-opt.

    Reverses ``best[i..j]`` for interior positions ``1 <= i < j <= len - 2``;
    the first improving reversal is taken and the scan restarts from the
    beginning. Returns once a full scan finds nothing.

    The four-edge delta only pre-filters candidates; a move is taken when the
    recomputed route is strictly shorter, so the length strictly decreases
    and the scan terminates at any coordinate scale.
    """
    if dist is None:
        dist = distance_matrix(points).tolist()
    best = list(tour)
    best_len = route_cost(best, dist)
    n = len(best)
    moves = 0
    improved = True
    while improved:
        improved = False
        tol = IMPROVEMENT_RTOL * best_len
        for i in range(1, n - 2):
            a, b = best[i - 1], best[i]
            for j in range(i + 1, n - 1):
                c, d = best[j], best[j + 1]
                delta = dist[a][c] + dist[b][d] - dist[a][b] - dist[c][d]
                if delta >= -tol:
                    continue
                candidate = best[:i] + best[i : j + 1][::-1] + best[j + 1 :]
                candidate_len = route_cost(candidate, dist)
                if candidate_len < best_len:
                    best = candidate
                    best_len = candidate_len
                    improved = True
                    moves += 1
                    break
            if improved:
                break
    logger.debug("2-opt finished after %d improving moves", moves)
    return best


class ConstructiveSolver(Solver):
    name = "nearest_neighbor"

    def solve(self, points: PointSet, origin: int) -> Tour:
        return nearest_neighbor_tour(points, origin)


class LocalSearchSolver(Solver):
    name = "two_opt"

    def solve(self, points: PointSet, origin: int) -> Tour:
        dist = distance_matrix(points)
        base = nearest_neighbor_tour(points, origin, dist=dist)
        return two_opt(base, points, dist=dist.tolist())
