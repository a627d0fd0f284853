"""Weighted registry of child generation strategies."""

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

import numpy as np

from .candidate import GeneSequence
from .strategies import ChildGenerationStrategy, RandomGenes

logger = logging.getLogger(__name__)


@dataclass
class StrategyEntry:
    """A strategy and its current selection weight (percent)."""
    weight: float
    strategy: ChildGenerationStrategy


class StrategyRegistry:
    """
    Ordered list of strategies whose weights always sum to 100.

    Strategies are sorted by ``order_by`` at construction; registration order
    breaks ties. An empty strategy list falls back to random generation so
    that a child can always be produced.
    """

    def __init__(
        self,
        strategies: Optional[Iterable[ChildGenerationStrategy]] = None,
        minimum_percentage: float = 2,
    ):
        strategies = list(strategies or [])
        if not strategies:
            logger.warning("No child generation strategies supplied, using random genes only")
            strategies = [RandomGenes()]

        ordered = sorted(strategies, key=lambda s: s.order_by)
        self.entries: List[StrategyEntry] = [
            StrategyEntry(100.0 / len(ordered), strategy) for strategy in ordered
        ]
        self.minimum_percentage = minimum_percentage
        self._cumulative = self._build_table()

        self.random_strategy = next(
            (s for s in ordered if isinstance(s, RandomGenes)), None
        ) or RandomGenes()

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    @property
    def strategies(self) -> List[ChildGenerationStrategy]:
        return [entry.strategy for entry in self.entries]

    @property
    def weights(self) -> List[float]:
        return [entry.weight for entry in self.entries]

    def _build_table(self) -> np.ndarray:
        return np.cumsum([entry.weight for entry in self.entries])

    def select(self, draw: float) -> ChildGenerationStrategy:
        """
        Pick the strategy owning ``draw`` (0 <= draw < 100).

        Each strategy owns a contiguous slice of the range equal to its weight,
        in registry order.
        """
        index = int(np.searchsorted(self._cumulative, draw, side="right"))
        return self.entries[min(index, len(self.entries) - 1)].strategy

    def update_weights(self, previous_bests: Sequence[GeneSequence]) -> None:
        """
        Recompute weights from the provenance of the retained candidates.

        Each strategy gets its share of the retained candidates, but never
        less than ``minimum_percentage``. Shares that would fall below the
        floor are pinned to it and the rest is split proportionally among
        the remaining strategies.
        """
        # provenance is matched by strategy object, not by name
        produced = Counter(id(c.strategy) for c in previous_bests if c.strategy is not None)
        counts = [produced[id(entry.strategy)] for entry in self.entries]

        count = len(self.entries)
        indices = range(count)
        floor = min(float(self.minimum_percentage), 100.0 / count)
        pinned = set()
        while True:
            free = 100.0 - floor * len(pinned)
            free_total = sum(counts[i] for i in indices if i not in pinned)
            newly_pinned = {
                i for i in indices
                if i not in pinned
                and (free_total == 0 or free * counts[i] / free_total < floor)
            }
            if not newly_pinned:
                break
            pinned |= newly_pinned

        if len(pinned) == count:
            weights = [100.0 / count] * count
        else:
            weights = [
                floor if i in pinned else free * counts[i] / free_total
                for i in indices
            ]

        for entry, weight in zip(self.entries, weights):
            entry.weight = weight
        self._cumulative = self._build_table()

    def describe(self) -> str:
        """Format the current percentages, e.g. ``% random 12.5 crossover 87.5``."""
        parts = [
            f"{entry.strategy.description} {round(entry.weight, 1)}"
            for entry in self.entries
        ]
        return "% " + " ".join(parts)
