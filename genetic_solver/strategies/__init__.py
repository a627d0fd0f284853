"""Child generation strategies."""

from typing import List

from .base import ChildGenerationStrategy, GeneGenerator, RandomInt
from .random_genes import RandomGenes
from .crossover import Crossover
from .mutation import PointMutation, MutationMidUnitOfMeaning


def default_strategies() -> List[ChildGenerationStrategy]:
    """Return one instance of every built-in strategy."""
    return [
        RandomGenes(),
        Crossover(),
        PointMutation(),
        MutationMidUnitOfMeaning(),
    ]


__all__ = [
    "ChildGenerationStrategy",
    "GeneGenerator",
    "RandomInt",
    "RandomGenes",
    "Crossover",
    "PointMutation",
    "MutationMidUnitOfMeaning",
    "default_strategies",
]
