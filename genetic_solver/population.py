"""Population buffers and the retained-bests pool."""

from dataclasses import dataclass, field
from typing import Iterable, List, Set

from .candidate import GeneSequence, sort_by_fitness


class PopulationPair:
    """
    Two equally sized candidate buffers used for generation N and N+1.

    ``swap`` exchanges the roles of the buffers without copying.
    """

    def __init__(self, current: List[GeneSequence], next_: List[GeneSequence]):
        if current is next_:
            raise ValueError("Population buffers must be distinct lists")
        if len(current) != len(next_):
            raise ValueError(
                f"Population buffers differ in size: {len(current)} != {len(next_)}"
            )
        self.current = current
        self.next = next_

    @classmethod
    def from_population(cls, population: List[GeneSequence]) -> "PopulationPair":
        """Create a pair whose spare buffer holds clones of ``population``."""
        return cls(population, [c.clone() for c in population])

    @property
    def capacity(self) -> int:
        return len(self.current)

    def swap(self) -> None:
        self.current, self.next = self.next, self.current

    def refill(self, population: List[GeneSequence]) -> None:
        """Replace both buffers' contents in place, keeping the list objects."""
        self.current[:] = population
        self.next[:] = [c.clone() for c in population]


@dataclass
class RetainedBests:
    """
    Fitness-sorted archive of the best distinct candidates seen so far.

    The pool keeps at least ``minimum_size`` entries, more when that many
    candidates tie with the current best.
    """
    minimum_size: int = 100
    items: List[GeneSequence] = field(default_factory=list)

    def __post_init__(self):
        sort_by_fitness(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __getitem__(self, index):
        return self.items[index]

    @property
    def best(self) -> GeneSequence:
        return self.items[0]

    def keys(self) -> Set[str]:
        return {c.duplicate_key for c in self.items}

    def threshold(self) -> int:
        """Fitness of the median-ranked entry; worse candidates are not kept."""
        return self.items[len(self.items) // 2].fitness_value

    def merge(self, candidates: Iterable[GeneSequence], generation: int) -> None:
        """Add clones of ``candidates`` stamped with ``generation``, then re-sort and trim."""
        for candidate in candidates:
            copy = candidate.clone()
            copy.generation = generation
            self.items.append(copy)
        sort_by_fitness(self.items)
        self.trim()

    def trim(self) -> None:
        if not self.items:
            return
        best_value = self.items[0].fitness_value
        tied = sum(1 for c in self.items if c.fitness_value == best_value)
        number_to_keep = max(self.minimum_size, tied)
        del self.items[number_to_keep:]

    def reset(self, candidates: Iterable[GeneSequence]) -> None:
        """Replace the pool contents and restore ordering."""
        self.items[:] = list(candidates)
        sort_by_fitness(self.items)
