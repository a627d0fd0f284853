"""Mutation based child generation."""

from typing import Optional, Sequence

from .base import (
    ChildGenerationStrategy,
    GeneGenerator,
    RandomInt,
    fit_to_length,
    pick_parent,
    random_genes,
)
from ..batching import in_sets_of
from ..candidate import GeneSequence

# Resolution used to turn the mutation rate into integer draws
_RATE_SCALE = 10000


class PointMutation(ChildGenerationStrategy):
    """
    Replaces individual genes of a random parent.

    One unfrozen gene always changes; every other unfrozen gene changes with
    probability ``mutation_rate``.
    """

    @property
    def name(self) -> str:
        return "mutate"

    @property
    def description(self) -> str:
        return "mutate"

    @property
    def order_by(self) -> int:
        return 2

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

        genes = fit_to_length(pick_parent(parents, random_int).genes, number_of_genes, get_random_gene)
        freeze = min(max(freeze_genes_up_to, 0), number_of_genes)
        mutable = number_of_genes - freeze
        if mutable == 0:
            return self._child(genes)

        forced = freeze + random_int(mutable)
        threshold = int(mutation_rate * _RATE_SCALE)
        for index in range(freeze, number_of_genes):
            if index == forced or random_int(_RATE_SCALE) < threshold:
                genes[index] = get_random_gene()
        return self._child(genes)


class MutationMidUnitOfMeaning(ChildGenerationStrategy):
    """
    Replaces one whole unit of meaning of a random parent with random genes.

    The unit named by the parent's ``unit_of_meaning_index_hint`` is preferred
    when it lies past the freeze boundary.
    """

    @property
    def name(self) -> str:
        return "mutate unit"

    @property
    def description(self) -> str:
        return "mutate unit"

    @property
    def order_by(self) -> int:
        return 3

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

        parent = pick_parent(parents, random_int)
        genes = fit_to_length(parent.genes, number_of_genes, get_random_gene)
        unit_size = max(unit_size, 1)
        units = list(in_sets_of(genes, unit_size))

        # first unit that starts at or after the freeze boundary
        first_mutable = -(-max(freeze_genes_up_to, 0) // unit_size)
        if first_mutable >= len(units):
            return self._child(genes)

        hint = parent.fitness.unit_of_meaning_index_hint if parent.fitness is not None else None
        if hint is not None and first_mutable <= hint < len(units):
            target = hint
        else:
            target = first_mutable + random_int(len(units) - first_mutable)

        units[target] = random_genes(len(units[target]), get_random_gene)
        return self._child([gene for unit in units for gene in unit])
