import random

import pytest

from tsp_anneal.solvers.annealing import AnnealingConfig
from tsp_anneal.solvers.base import PointSet


def random_points(seed: int, n: int, span: float = 100.0) -> PointSet:
    rng = random.Random(seed)
    records = [(0.0, 0.0)] + [(rng.uniform(-span, span), rng.uniform(-span, span)) for _ in range(n - 1)]
    return PointSet.from_iterable(records)


class ScriptedRandom(random.Random):
    """Random source that replays fixed swap positions and acceptance draws."""

    def __init__(self, positions, draws):
        super().__init__(0)
        self.positions = list(positions)
        self.draws = list(draws)

    def randint(self, a, b):
        value = self.positions.pop(0)
        assert a <= value <= b
        return value

    def random(self):
        return self.draws.pop(0)


@pytest.fixture
def triangle():
    return PointSet.from_iterable([(0, 0), (0, 3), (4, 0)])


@pytest.fixture
def collinear():
    return PointSet.from_iterable([(0, 0), (1, 0), (2, 0), (3, 0)])


@pytest.fixture
def fast_config():
    # About 230 annealing steps.
    return AnnealingConfig(initial_temperature=10.0, cooling_factor=0.99, random_seed=3)
