import argparse
import json
import logging
import random
from pathlib import Path
from typing import Dict, List

from tsp_anneal.data import load_points, load_tsplib_instances
from tsp_anneal.evaluation import Fitness, aggregate_fitness, evaluate_solver
from tsp_anneal.logging_config import setup_logging
from tsp_anneal.pipeline import AnnealingPipeline, run_pipeline
from tsp_anneal.solvers.annealing import AnnealingConfig
from tsp_anneal.solvers.base import InvalidInputError, Solver
from tsp_anneal.solvers.heuristics import ConstructiveSolver, LocalSearchSolver

logger = logging.getLogger(__name__)

SOLVERS = {
    ConstructiveSolver.name: ConstructiveSolver,
    LocalSearchSolver.name: LocalSearchSolver,
    AnnealingPipeline.name: AnnealingPipeline,
}


def build_config(args) -> AnnealingConfig:
    options: Dict = {}
    if args.config:
        options.update(json.loads(Path(args.config).read_text()))
    overrides = {
        "initial_temperature": args.initial_temperature,
        "cooling_factor": args.cooling_factor,
        "min_temperature": args.min_temperature,
        "max_iterations": args.max_iterations,
        "random_seed": args.seed,
    }
    options.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return AnnealingConfig.from_dict(options)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"invalid annealing options: {exc}") from exc


def build_solver(name: str, cfg: AnnealingConfig) -> Solver:
    if name == AnnealingPipeline.name:
        return AnnealingPipeline(cfg, rng=random.Random(cfg.random_seed))
    return SOLVERS[name]()


def solve(args) -> None:
    cfg = build_config(args)
    instance = load_points(Path(args.path), origin=args.origin)
    logger.info(
        "loaded %d points from %s, origin=%d, ~%d annealing steps",
        len(instance.points),
        instance.path,
        instance.origin,
        cfg.expected_iterations,
    )
    report = run_pipeline(instance.points, instance.origin, config=cfg)
    print("Shortest Route: " + str(report.tour))
    print("Distance: " + str(report.length))
    if args.output:
        out = Path(args.output)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(
            json.dumps(
                {
                    "instance": instance.name,
                    "origin": instance.origin,
                    "tour": report.tour,
                    "length": report.length,
                    "stages": {
                        name: {"length": s.length, "runtime": s.runtime} for name, s in report.stages.items()
                    },
                },
                indent=2,
            )
        )
        logger.info("wrote %s", out)


def bench(args) -> None:
    cfg = build_config(args)
    data_root = Path(args.data_root)
    instances = load_tsplib_instances(data_root, max_nodes=args.max_nodes, max_instances=args.max_instances)
    if not instances:
        raise InvalidInputError(
            f"No TSPLIB instances found in {data_root}. Place .tsp (and optional .opt.tour) files there."
        )
    logger.info("loaded %d instances from %s", len(instances), data_root)
    for name in args.solver:
        fitnesses: List[Fitness] = []
        for inst in instances:
            fit = evaluate_solver(build_solver(name, cfg), inst)
            fitnesses.append(fit)
            print(f"[{name}] {inst.name:<12} length={fit.length:12.2f} gap={fit.gap:8.2%} runtime={fit.runtime:7.2f}s")
        agg = aggregate_fitness(fitnesses)
        print(f"[{name}] mean length={agg['length']:.2f} gap={agg['gap']:.2%} runtime={agg['runtime']:.2f}s")


def _add_annealing_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", help="JSON file with annealing options")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--initial-temperature", type=float, default=None)
    parser.add_argument("--cooling-factor", type=float, default=None)
    parser.add_argument("--min-temperature", type=float, default=None)
    parser.add_argument("--max-iterations", type=int, default=None)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Nearest-neighbor + 2-opt + simulated annealing TSP solver")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    parser.add_argument("--log-file", default=None)
    subparsers = parser.add_subparsers(dest="command", required=True)

    solve_parser = subparsers.add_parser("solve", help="Solve one coordinate file or TSPLIB instance")
    solve_parser.add_argument("path")
    solve_parser.add_argument("--origin", type=int, default=None, help="origin index (default: the (0, 0) point)")
    solve_parser.add_argument("--output", default=None, help="write the result as JSON")
    _add_annealing_args(solve_parser)
    solve_parser.set_defaults(func=solve)

    bench_parser = subparsers.add_parser("bench", help="Compare solvers on a directory of TSPLIB instances")
    bench_parser.add_argument("--data-root", default="data/tsplib")
    bench_parser.add_argument("--solver", nargs="+", choices=sorted(SOLVERS), default=sorted(SOLVERS))
    bench_parser.add_argument("--max-nodes", type=int, default=None)
    bench_parser.add_argument("--max-instances", type=int, default=None)
    _add_annealing_args(bench_parser)
    bench_parser.set_defaults(func=bench)

    args = parser.parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO, log_file=args.log_file)
    try:
        args.func(args)
    except (InvalidInputError, FileNotFoundError) as exc:
        parser.error(str(exc))


if __name__ == "__main__":
    main()
