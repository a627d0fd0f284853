"""Candidate gene sequences and fitness results."""

from dataclasses import dataclass
from typing import Any, Optional, Tuple, Union

# Worst possible fitness value, used to seed "best ever" trackers
WORST_FITNESS = 2 ** 32 - 1


class UncomputedFitnessError(RuntimeError):
    """Raised when a candidate is compared before its fitness is evaluated."""


@dataclass(frozen=True)
class FitnessResult:
    """Result of a fitness evaluation (lower is better, 0 is optimal)."""
    value: int
    unique_key: Optional[str] = None
    unit_of_meaning_index_hint: Optional[int] = None

    def __post_init__(self):
        if self.value < 0:
            raise ValueError(f"Fitness must be non-negative, got {self.value}")

    @classmethod
    def coerce(cls, result: Union["FitnessResult", int]) -> "FitnessResult":
        """Wrap a plain integer returned by a fitness callback."""
        if isinstance(result, FitnessResult):
            return result
        return cls(value=int(result))


@dataclass
class GeneSequence:
    """A candidate solution: genes plus cached fitness and provenance."""
    genes: str
    strategy: Any = None
    fitness: Optional[FitnessResult] = None
    generation: int = 0

    @property
    def is_evaluated(self) -> bool:
        return self.fitness is not None

    @property
    def fitness_value(self) -> int:
        if self.fitness is None:
            raise UncomputedFitnessError(f"Fitness not computed for {self.genes!r}")
        return self.fitness.value

    @property
    def sort_key(self) -> Tuple[int, int]:
        """Ascending fitness, then prefer the more evolved candidate."""
        return self.fitness_value, -self.generation

    @property
    def duplicate_key(self) -> str:
        """Key used to detect duplicates in the retained-bests pool."""
        if self.fitness is not None and self.fitness.unique_key is not None:
            return self.fitness.unique_key
        return self.genes

    @property
    def description(self) -> str:
        return self.strategy.description if self.strategy is not None else "unknown"

    def clone(self) -> "GeneSequence":
        """Create a copy of this candidate."""
        return GeneSequence(
            genes=self.genes,
            strategy=self.strategy,
            fitness=self.fitness,
            generation=self.generation,
        )

    def __len__(self) -> int:
        return len(self.genes)

    def __repr__(self) -> str:
        fitness = self.fitness.value if self.fitness is not None else "?"
        return f"GeneSequence({self.genes!r}, fitness={fitness}, gen={self.generation})"


def sort_by_fitness(population) -> None:
    """Sort a list of candidates in place by fitness."""
    population.sort(key=lambda c: c.sort_key)
