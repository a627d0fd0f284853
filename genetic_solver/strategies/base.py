"""Base child generation strategy interface."""

from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Sequence

from ..candidate import GeneSequence

GeneGenerator = Callable[[], str]
RandomInt = Callable[[int], int]


class ChildGenerationStrategy(ABC):
    """Abstract base class for all child generation strategies."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Stable identity used for provenance."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description used in progress output."""
        pass

    @property
    def order_by(self) -> int:
        """Registry ordering key, lower sorts first."""
        return 0

    @abstractmethod
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
        """
        Create a new child.

        Args:
            parents: Best known candidates, best first (may be empty or None)
            number_of_genes: Length of the child to produce
            get_random_gene: Returns one random symbol from the alphabet
            unit_size: Number of genes in a unit of meaning
            mutation_rate: Current sliding mutation intensity (0.0 to 1.0)
            random_int: Returns a random int in [0, n)
            freeze_genes_up_to: Genes before this index must not change

        Returns:
            A new candidate with uncomputed fitness
        """
        pass

    def _child(self, genes: List[str]) -> GeneSequence:
        return GeneSequence(genes="".join(genes), strategy=self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def random_genes(count: int, get_random_gene: GeneGenerator) -> List[str]:
    """Generate ``count`` random genes."""
    return [get_random_gene() for _ in range(count)]


def fit_to_length(
    genes: str,
    number_of_genes: int,
    get_random_gene: GeneGenerator,
) -> List[str]:
    """Truncate parent genes, or pad them with random genes, to the target length."""
    result = list(genes[:number_of_genes])
    if len(result) < number_of_genes:
        result.extend(random_genes(number_of_genes - len(result), get_random_gene))
    return result


def pick_parent(parents: Sequence[GeneSequence], random_int: RandomInt) -> GeneSequence:
    return parents[random_int(len(parents))]
