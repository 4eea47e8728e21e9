import time
from dataclasses import dataclass
from typing import Dict, List

from .data import Instance
from .solvers.base import SolveResult, Solver, tour_length, validate_tour


@dataclass
class Fitness:
    length: float
    runtime: float
    gap: float
    solver_name: str
    instance: str


def evaluate_solver(solver: Solver, instance: Instance) -> Fitness:
    start = time.perf_counter()
    tour = solver.solve(instance.points, instance.origin)
    runtime = time.perf_counter() - start
    validate_tour(tour, len(instance.points), instance.origin)
    result = SolveResult(
        tour=tour,
        length=tour_length(tour, instance.points),
        solver_name=solver.name,
        optimum=instance.optimum,
    )
    return Fitness(
        length=result.length,
        runtime=runtime,
        gap=result.gap,
        solver_name=solver.name,
        instance=instance.name,
    )


def aggregate_fitness(fitnesses: List[Fitness]) -> Dict[str, float]:
    if not fitnesses:
        return {"length": float("inf"), "gap": float("inf"), "runtime": float("inf")}
    length = sum(f.length for f in fitnesses) / len(fitnesses)
    gaps = [f.gap for f in fitnesses if f.gap != float("inf")]
    gap = sum(gaps) / len(gaps) if gaps else float("inf")
    runtime = sum(f.runtime for f in fitnesses) / len(fitnesses)
    return {"length": length, "gap": gap, "runtime": runtime}
