#!/bin/python
"""
Entry point for solving subset-sum instances with the genetic algorithm or
the particle swarm optimizer.

Items and target come from flags, the built-in demo instance, a random
generator, or, when none of those is given, interactive prompts.
"""
import argparse
import logging
import sys
from typing import Callable, List, Optional, Tuple

from Core.config import GAConfig, PSOConfig
from Core.errors import SubsetSumError
from Core.utils import parse_int, parse_int_list, parse_int_range, plot_fitness_history, setup_logging
from GA.GA import GeneticAlgorithm
from problems.SubsetSum import SubsetSumProblem, SubsetSumSpec, demo_problem, generate_random_subset_sum
from PSO.PSO import ParticleSwarmOptimization

SOLVERS = {
    "ga": GeneticAlgorithm,
    "pso": ParticleSwarmOptimization,
}


def prompt_instance(input_fn: Callable[[str], str] = input) -> Tuple[List[int], int]:
    """Ask for the item count, each item and the target sum, one prompt at a time."""
    count = parse_int(input_fn("Enter the number of integers: "), label="number of integers")
    items = [parse_int(input_fn(f"Enter integer {i + 1}: "), label=f"integer {i + 1}") for i in range(count)]
    target = parse_int(input_fn("Enter the target sum: "), label="target sum")
    return items, target


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Approximate subset sum with a genetic algorithm or particle swarm optimization."
    )
    parser.add_argument(
        "--algorithm",
        "-a",
        default="ga",
        choices=sorted(SOLVERS),
        help="Solver to run (default: ga)"
    )

    # Instance sources
    parser.add_argument("--items", type=str, default=None, help="Comma or space separated integers")
    parser.add_argument("--target", type=str, default=None, help="Target sum")
    parser.add_argument("--demo", action="store_true", help="Use the built-in 40-item instance (target 300)")
    parser.add_argument("--random-items", type=int, default=None,
                        help="Generate a random instance with this many items and a reachable target")
    parser.add_argument("--value-range", type=str, default="1:100",
                        help="Inclusive LO:HI range for random item values (default: 1:100)")

    # Solver parameters; unset values fall back to the solver defaults
    parser.add_argument("--population", "-p", type=int, default=None,
                        help=f"Population / swarm size (default: GA {GAConfig.population_size}, "
                             f"PSO {PSOConfig.swarm_size})")
    parser.add_argument("--iterations", "-i", type=int, default=None,
                        help=f"Generation / iteration budget (default: GA {GAConfig.max_generations}, "
                             f"PSO {PSOConfig.max_iterations})")
    parser.add_argument("--mutation-rate", type=float, default=GAConfig.mutation_rate,
                        help=f"GA per-bit mutation probability (default: {GAConfig.mutation_rate})")
    parser.add_argument("--omega", type=float, default=PSOConfig.inertia_weight,
                        help=f"PSO inertia weight (default: {PSOConfig.inertia_weight})")
    parser.add_argument("--c1", type=float, default=PSOConfig.c1,
                        help=f"PSO cognitive coefficient (default: {PSOConfig.c1})")
    parser.add_argument("--c2", type=float, default=PSOConfig.c2,
                        help=f"PSO social coefficient (default: {PSOConfig.c2})")
    parser.add_argument("--discretize-velocity", action="store_true",
                        help="PSO: store velocity rounded to integers after every update")

    parser.add_argument("--seed", "-s", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument("--verbose", "-v", action="count", default=0, help="Log every iteration")
    parser.add_argument("--log-dir", type=str, default=None, help="Also append logs to a file in this directory")
    parser.add_argument("--plot", type=str, default=None, help="Save the best-fitness trace to this image path")
    return parser


def load_problem(args, input_fn: Callable[[str], str] = input) -> SubsetSumProblem:
    if args.demo:
        return demo_problem()
    if args.random_items is not None:
        spec = SubsetSumSpec(
            n_items=args.random_items,
            value_range=parse_int_range(args.value_range, label="value range"),
            seed=args.seed,
        )
        problem, _ = generate_random_subset_sum(spec)
        return problem
    if args.items is None or args.target is None:
        items, target = prompt_instance(input_fn)
    else:
        items = parse_int_list(args.items)
        target = parse_int(args.target, label="target")
    return SubsetSumProblem(items, target)


def build_solver(args, problem: SubsetSumProblem):
    if args.algorithm == "ga":
        config = GAConfig(
            population_size=args.population if args.population is not None else GAConfig.population_size,
            mutation_rate=args.mutation_rate,
            max_generations=args.iterations if args.iterations is not None else GAConfig.max_generations,
            seed=args.seed,
        )
        return GeneticAlgorithm.from_config(problem, config, verbosity=args.verbose)
    config = PSOConfig(
        swarm_size=args.population if args.population is not None else PSOConfig.swarm_size,
        max_iterations=args.iterations if args.iterations is not None else PSOConfig.max_iterations,
        inertia_weight=args.omega,
        c1=args.c1,
        c2=args.c2,
        discretize_velocity=args.discretize_velocity,
        seed=args.seed,
    )
    return ParticleSwarmOptimization.from_config(problem, config, verbosity=args.verbose)


def main(argv: Optional[List[str]] = None, input_fn: Callable[[str], str] = input) -> int:
    """Parse command line arguments, run the selected solver and report its result."""
    args = build_parser().parse_args(argv)
    logger = setup_logging(args.algorithm, "subset_sum", log_dir=args.log_dir)
    # Route solver progress through the same handlers as the run summary.
    for name in ("Core", "GA", "PSO"):
        package_logger = logging.getLogger(name)
        package_logger.setLevel(logging.DEBUG if args.verbose >= 2 else logging.INFO)
        for handler in logger.handlers:
            if handler not in package_logger.handlers:
                package_logger.addHandler(handler)

    try:
        problem = load_problem(args, input_fn)
        solver = build_solver(args, problem)
    except SubsetSumError as exc:
        logger.error("Invalid run: %s", exc)
        return 2

    logger.info("Solving %r with %s", problem, args.algorithm)
    result = solver.solve()
    logger.info("Best solution: fitness = %s, subset sum = %d (target %d)",
                result.fitness, result.subset_sum, problem.target)
    logger.info("Subset: %s", " ".join(str(v) for v in result.subset))

    if args.plot:
        minimize = SOLVERS[args.algorithm].minimize
        path = plot_fitness_history(
            result.history,
            args.plot,
            title=f"{args.algorithm.upper()} best fitness",
            ylabel="Best fitness (lower is better)" if minimize else "Best fitness (higher is better)",
            target=0 if minimize else problem.target,
        )
        logger.info("Saved fitness plot to %s", path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
