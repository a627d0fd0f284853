"""Pure random child generation."""

from typing import Optional, Sequence

from .base import (
    ChildGenerationStrategy,
    GeneGenerator,
    RandomInt,
    fit_to_length,
    pick_parent,
    random_genes,
)
from ..candidate import GeneSequence


class RandomGenes(ChildGenerationStrategy):
    """
    Generates every gene at random.

    When parents are available and genes are frozen, the frozen prefix is
    taken from a random parent so that only the unfrozen genes are randomized.
    """

    @property
    def name(self) -> str:
        return "random"

    @property
    def description(self) -> str:
        return "random"

    @property
    def order_by(self) -> int:
        return 0

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
        freeze = min(max(freeze_genes_up_to, 0), number_of_genes)
        if not parents or freeze == 0:
            return self._child(random_genes(number_of_genes, get_random_gene))

        parent = pick_parent(parents, random_int)
        prefix = fit_to_length(parent.genes, freeze, get_random_gene)
        return self._child(prefix + random_genes(number_of_genes - freeze, get_random_gene))
