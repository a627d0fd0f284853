"""Crossover child generation."""

from typing import Optional, Sequence

from .base import (
    ChildGenerationStrategy,
    GeneGenerator,
    RandomInt,
    fit_to_length,
    pick_parent,
    random_genes,
)
from ..batching import unit_bounds
from ..candidate import GeneSequence


class Crossover(ChildGenerationStrategy):
    """
    Single point crossover between two random parents.

    The cut point always falls on a unit of meaning boundary at or after the
    freeze boundary, so the frozen prefix comes from the first parent intact.
    Without parents the child is generated at random.
    """

    @property
    def name(self) -> str:
        return "crossover"

    @property
    def description(self) -> str:
        return "crossover"

    @property
    def order_by(self) -> int:
        return 1

    def generate(
        self,
        parents: Optional[Sequence[GeneSequence]],
        number_of_genes: int,
        get_random_gene: GeneGenerator,
        unit_size: int,
        mutation_rate: float,
        random_int: RandomInt,
        freeze_genes_up_to: int,
    ) -> GeneSequence:
        if not parents:
            return self._child(random_genes(number_of_genes, get_random_gene))

        first = fit_to_length(pick_parent(parents, random_int).genes, number_of_genes, get_random_gene)
        second = fit_to_length(pick_parent(parents, random_int).genes, number_of_genes, get_random_gene)

        cut_points = unit_bounds(number_of_genes, max(unit_size, 1), start=max(freeze_genes_up_to, 1))
        if not cut_points:
            # Nothing left to exchange, randomize the unfrozen tail instead
            freeze = min(max(freeze_genes_up_to, 0), number_of_genes)
            return self._child(first[:freeze] + random_genes(number_of_genes - freeze, get_random_gene))

        cut = cut_points[random_int(len(cut_points))]
        return self._child(first[:cut] + second[cut:])
