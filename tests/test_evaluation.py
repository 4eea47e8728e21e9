from pathlib import Path

import pytest

from tsp_anneal.data import Instance
from tsp_anneal.evaluation import Fitness, aggregate_fitness, evaluate_solver
from tsp_anneal.solvers.base import PointSet
from tsp_anneal.solvers.heuristics import ConstructiveSolver


def test_evaluate_solver_reports_gap():
    points = PointSet.from_iterable([(0, 0), (0, 3), (4, 0)])
    inst = Instance(name="tri", path=Path("tri.txt"), points=points, origin=0, optimum=10.0)
    fit = evaluate_solver(ConstructiveSolver(), inst)
    assert fit.length == pytest.approx(12.0)
    assert fit.gap == pytest.approx(0.2)
    assert fit.solver_name == "nearest_neighbor"
    assert fit.instance == "tri"
    assert fit.runtime >= 0.0


def test_aggregate_fitness_skips_unknown_gaps():
    fits = [
        Fitness(length=10.0, runtime=1.0, gap=0.1, solver_name="x", instance="a"),
        Fitness(length=20.0, runtime=3.0, gap=float("inf"), solver_name="x", instance="b"),
    ]
    agg = aggregate_fitness(fits)
    assert agg == {"length": 15.0, "gap": 0.1, "runtime": 2.0}


def test_aggregate_fitness_empty():
    assert aggregate_fitness([])["gap"] == float("inf")
