"""Genetic algorithm search for strings that minimize a fitness function."""

from .candidate import FitnessResult, GeneSequence, UncomputedFitnessError, WORST_FITNESS
from .config import SolverConfig
from .population import PopulationPair, RetainedBests
from .registry import StrategyRegistry, StrategyEntry
from .solver import GeneticSolver, SearchState, get_best_genetically, print_best
from .strategies import (
    ChildGenerationStrategy,
    RandomGenes,
    Crossover,
    PointMutation,
    MutationMidUnitOfMeaning,
    default_strategies,
)

__all__ = [
    "FitnessResult",
    "GeneSequence",
    "UncomputedFitnessError",
    "WORST_FITNESS",
    "SolverConfig",
    "PopulationPair",
    "RetainedBests",
    "StrategyRegistry",
    "StrategyEntry",
    "GeneticSolver",
    "SearchState",
    "get_best_genetically",
    "print_best",
    # Strategies
    "ChildGenerationStrategy",
    "RandomGenes",
    "Crossover",
    "PointMutation",
    "MutationMidUnitOfMeaning",
    "default_strategies",
]
