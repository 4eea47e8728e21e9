import logging
import random

from tsp_anneal.logging_config import setup_logging
from tsp_anneal.pipeline import run_pipeline
from tsp_anneal.solvers.annealing import AnnealingConfig
from tsp_anneal.solvers.base import PointSet


def main():
    setup_logging(logging.INFO)
    rng = random.Random(7)
    records = [(0.0, 0.0)] + [(rng.uniform(-50, 50), rng.uniform(-50, 50)) for _ in range(40)]
    points = PointSet.from_iterable(records)

    # A fast schedule: roughly 46k steps instead of the default ~69M.
    cfg = AnnealingConfig(initial_temperature=100.0, cooling_factor=0.9999, random_seed=7)
    report = run_pipeline(points, origin=0, config=cfg)
    for name, stage in report.stages.items():
        print(f"{name:<16} length={stage.length:10.2f} runtime={stage.runtime:6.2f}s")
    print(f"tour: {report.tour}")


if __name__ == "__main__":
    main()
