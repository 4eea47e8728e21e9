import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, List, NamedTuple, Optional, Sequence

import numpy as np


Tour = List[int]


class InvalidInputError(ValueError):
    """Raised when a point set or origin does not satisfy the solver's preconditions."""


class TourError(ValueError):
    """Raised when a tour breaks the closed-permutation invariant."""


class Point(NamedTuple):
    x: float
    y: float


class PointSet:
    """
    Immutable, index-addressed collection of 2-D points.

    Coordinates live in a read-only (n, 2) float array so phases can share it
    without copying.
    """

    def __init__(self, coords: np.ndarray):
        coords = np.array(coords, dtype=float)
        if coords.ndim != 2 or coords.shape[1] != 2:
            raise InvalidInputError(f"expected an (n, 2) coordinate array, got shape {coords.shape}")
        if coords.shape[0] < 1:
            raise InvalidInputError("point set must contain at least one point")
        if not np.isfinite(coords).all():
            bad = int(np.argwhere(~np.isfinite(coords))[0][0])
            raise InvalidInputError(f"point {bad} has a non-finite coordinate")
        coords.setflags(write=False)
        self.coords = coords

    @classmethod
    def from_iterable(cls, records: Iterable[Sequence[float]]) -> "PointSet":
        rows = []
        for idx, rec in enumerate(records):
            try:
                x, y = rec
                rows.append((float(x), float(y)))
            except (TypeError, ValueError) as exc:
                raise InvalidInputError(f"record {idx} is not an (x, y) pair: {rec!r}") from exc
        if not rows:
            raise InvalidInputError("point set must contain at least one point")
        return cls(np.array(rows, dtype=float))

    def __len__(self) -> int:
        return self.coords.shape[0]

    def __getitem__(self, idx: int) -> Point:
        x, y = self.coords[idx]
        return Point(float(x), float(y))

    def __iter__(self):
        for i in range(len(self)):
            yield self[i]

    def __repr__(self) -> str:
        return f"PointSet(n={len(self)})"


def distance(p1: Sequence[float], p2: Sequence[float]) -> float:
    return math.hypot(p1[0] - p2[0], p1[1] - p2[1])


def tour_length(tour: Sequence[int], points: PointSet) -> float:
    dist = 0.0
    for i in range(len(tour) - 1):
        dist += distance(points[tour[i]], points[tour[i + 1]])
    return float(dist)


def distance_matrix(points: PointSet) -> np.ndarray:
    diff = points.coords[:, None, :] - points.coords[None, :, :]
    return np.hypot(diff[..., 0], diff[..., 1])


def route_cost(tour: Sequence[int], dist: Sequence[Sequence[float]]) -> float:
    # dist[a][b]; the improvement loops pass nested lists.
    total = 0.0
    for i in range(len(tour) - 1):
        total += dist[tour[i]][tour[i + 1]]
    return total


def check_origin(points: PointSet, origin: int) -> None:
    if len(points) < 1:
        raise InvalidInputError("point set must contain at least one point")
    if not 0 <= origin < len(points):
        raise InvalidInputError(f"origin index {origin} out of range for {len(points)} points")


def validate_tour(tour: Sequence[int], n_points: int, origin: int) -> None:
    if len(tour) != n_points + 1:
        raise TourError(f"tour has {len(tour)} entries, expected {n_points + 1}")
    if tour[0] != origin or tour[-1] != origin:
        raise TourError(f"tour must start and end at origin {origin}, got {tour[0]}..{tour[-1]}")
    interior = sorted(tour[1:-1])
    expected = [i for i in range(n_points) if i != origin]
    if interior != expected:
        raise TourError("tour interior is not a permutation of the non-origin points")


class Solver(ABC):
    name: str = "base"

    @abstractmethod
    def solve(self, points: PointSet, origin: int) -> Tour:
        raise NotImplementedError


@dataclass
class SolveResult:
    tour: Tour
    length: float
    solver_name: str
    optimum: Optional[float] = None

    @property
    def gap(self) -> float:
        if self.optimum is None or math.isclose(self.optimum, 0.0):
            return float("inf")
        return (self.length - self.optimum) / self.optimum
