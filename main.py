#!/usr/bin/env python3
"""
Genetic Solver - Main Entry Point

Searches for a target string with the genetic solver, using the Hamming
distance to the target as fitness.
"""

import argparse
import logging
import sys


def hamming_fitness(target: str):
    """Build a fitness function: mismatched plus missing characters."""
    def calc_fitness(genes: str) -> int:
        mismatches = sum(1 for expected, actual in zip(target, genes) if expected != actual)
        return mismatches + abs(len(target) - len(genes))
    return calc_fitness


def run_solve(args):
    """Search for the target string."""
    from genetic_solver import SolverConfig, get_best_genetically, print_best, default_strategies

    alphabet = args.alphabet or "".join(sorted(set(args.target)))
    missing = set(args.target) - set(alphabet)
    if missing:
        print(f"Error: target uses characters not in the alphabet: {''.join(sorted(missing))}")
        return 1

    try:
        config = SolverConfig(
            population_size=args.population,
            max_generations_without_improvement=args.max_generations,
            unit_of_meaning_size=args.unit_size,
            use_hill_climbing=args.hill_climbing,
            use_fast_search=args.fast,
            random_seed=args.seed,
            display_strategy_percentages=args.verbose,
        )
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    print("=" * 60)
    print("  Genetic Solver")
    print("=" * 60)
    print(f"Target: {args.target}")
    print(f"Alphabet: {alphabet}")
    print(f"Population: {config.population_size}")
    print(f"Hill climbing: {config.use_hill_climbing}")
    print("=" * 60)

    best = get_best_genetically(
        len(args.target),
        alphabet,
        hamming_fitness(args.target),
        config=config,
        strategies=default_strategies(),
        on_new_best=print_best,
    )

    if best.fitness_value == 0:
        print(f"\n✓ Solution found in generation {best.generation + 1}: {best.genes}")
        return 0

    print(f"\n✗ Best result: {best.genes} (fitness {best.fitness_value})")
    return 1


def run_strategies():
    """List the built-in child generation strategies."""
    from genetic_solver import default_strategies

    print("Available strategies:")
    print()
    for strategy in default_strategies():
        print(f"  {strategy.order_by}  {strategy.name:12s} - {type(strategy).__name__}")
    return 0


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Genetic Solver - Find a string by genetic search"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Search for a target string")
    solve_parser.add_argument("target", help="String to search for")
    solve_parser.add_argument(
        "-a", "--alphabet",
        default=None,
        help="Possible genes (default: characters of the target)"
    )
    solve_parser.add_argument(
        "-p", "--population",
        type=int,
        default=2048,
        help="Population size (default: 2048)"
    )
    solve_parser.add_argument(
        "-s", "--seed",
        type=int,
        default=0,
        help="Random seed, 0 for clock based (default: 0)"
    )
    solve_parser.add_argument(
        "-g", "--max-generations",
        type=int,
        default=16384,
        help="Generations to run without improvement (default: 16384)"
    )
    solve_parser.add_argument(
        "-u", "--unit-size",
        type=int,
        default=1,
        help="Genes in a unit of meaning (default: 1)"
    )
    solve_parser.add_argument(
        "--hill-climbing",
        action="store_true",
        help="Solve the target one unit of meaning at a time"
    )
    solve_parser.add_argument(
        "--fast",
        action="store_true",
        help="Keep only a few survivors per generation"
    )
    solve_parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log progress and strategy percentages"
    )

    # List strategies command
    subparsers.add_parser("strategies", help="List available strategies")

    args = parser.parse_args()

    if args.command == "solve":
        logging.basicConfig(
            level=logging.INFO if args.verbose else logging.WARNING,
            format="%(message)s",
        )
        return run_solve(args)
    elif args.command == "strategies":
        return run_strategies()

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
