"""Genetic search engine with optional hill climbing."""

import logging
import random
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Union

import numpy as np

from .candidate import (
    WORST_FITNESS,
    FitnessResult,
    GeneSequence,
    sort_by_fitness,
)
from .config import SolverConfig
from .population import PopulationPair, RetainedBests
from .registry import StrategyRegistry
from .strategies import ChildGenerationStrategy, GeneGenerator, MutationMidUnitOfMeaning

logger = logging.getLogger(__name__)

FitnessFunction = Callable[[str], Union[FitnessResult, int]]
# (generation, fitness, genes, strategy description)
DisplayCallback = Callable[[int, int, str, str], None]

# Improvement intervals the generation budget starts out averaging over
INITIAL_INTERVAL_COUNT = 20
BUDGET_MULTIPLIER = 1.5
# Hill climbing gives up when a round is this much worse than the best so far
REGRESSION_TOLERANCE = 1.05
MAX_ROUNDS_WITHOUT_IMPROVEMENT = 5


def print_best(generation: int, fitness: int, genes: str, how_created: str) -> None:
    """Observer that prints each new best candidate."""
    print(f"Generation {generation} fitness {fitness}: {genes}")


@dataclass
class SearchState:
    """Mutable state threaded through the generational loop."""
    population: PopulationPair
    previous_bests: RetainedBests
    generations_between_improvements: List[int] = field(default_factory=list)
    generation: int = 0
    # fitness of every sequence evaluated in the current round
    fitness_cache: Dict[str, FitnessResult] = field(default_factory=dict)


class GeneticSolver:
    """
    Genetic search for a string that minimizes a fitness function.

    Children are produced by a weighted set of strategies whose weights adapt
    to how many retained candidates each strategy produced. With hill climbing
    enabled the sequence is solved one unit of meaning at a time.
    """

    def __init__(
        self,
        config: Optional[SolverConfig] = None,
        strategies: Optional[Iterable[ChildGenerationStrategy]] = None,
        on_new_best: Optional[DisplayCallback] = None,
    ):
        """
        Initialize the solver.

        Args:
            config: Solver configuration
            strategies: Child generation strategies, random genes only if empty
            on_new_best: Called whenever a better candidate is found
        """
        self.config = config or SolverConfig()
        self.registry = StrategyRegistry(strategies, self.config.minimum_strategy_percentage)
        self.on_new_best = on_new_best

        self.random_seed = self.config.random_seed
        self.sliding_mutation_rate = self.config.mutation_rate
        self._random = random.Random(self.random_seed)

        self._unit_strategy = next(
            (s for s in self.registry.strategies if isinstance(s, MutationMidUnitOfMeaning)),
            None,
        ) or MutationMidUnitOfMeaning()

    def get_best_genetically(
        self,
        number_of_genes: int,
        possible_genes: str,
        calc_fitness: FitnessFunction,
    ) -> GeneSequence:
        """
        Search for the best sequence of ``number_of_genes`` symbols.

        Args:
            number_of_genes: Length of the sequence to find
            possible_genes: Alphabet the genes are drawn from
            calc_fitness: Returns the fitness of a sequence (0 = optimal)

        Returns:
            The best candidate found
        """
        if number_of_genes < 1:
            raise ValueError(f"number_of_genes must be positive, got {number_of_genes}")
        if not possible_genes:
            raise ValueError("possible_genes must not be empty")

        cfg = self.config
        self.random_seed = cfg.random_seed or (time.time_ns() & 0x7FFFFFFF) or 1
        logger.info("using random seed: %d", self.random_seed)
        self._random = random.Random(self.random_seed)
        self.sliding_mutation_rate = cfg.mutation_rate

        def get_random_gene() -> str:
            return possible_genes[self._random.randrange(len(possible_genes))]

        initial_length = (
            min(cfg.unit_of_meaning_size, number_of_genes) if cfg.use_hill_climbing else number_of_genes
        )
        population = [
            self.registry.random_strategy.generate(
                None, initial_length, get_random_gene, cfg.unit_of_meaning_size,
                self.sliding_mutation_rate, self._random.randrange, 0,
            )
            for _ in range(cfg.population_size)
        ]
        fitness_cache: Dict[str, FitnessResult] = {}
        self._calc_fitness(population[:1], calc_fitness, fitness_cache)

        state = SearchState(
            population=PopulationPair.from_population(population),
            previous_bests=RetainedBests(cfg.retained_minimum, [population[0].clone()]),
            generations_between_improvements=(
                [cfg.max_generations_without_improvement] * INITIAL_INTERVAL_COUNT
            ),
            fitness_cache=fitness_cache,
        )

        if cfg.use_hill_climbing:
            return self._hill_climb(number_of_genes, get_random_gene, state, calc_fitness)

        self._run_generations(0, number_of_genes, get_random_gene, state, calc_fitness)
        return state.previous_bests.best.clone()

    # ------------------------------------------------------------------
    # Hill climbing
    # ------------------------------------------------------------------

    def _round_lengths(self, number_of_genes: int) -> List[int]:
        unit = self.config.unit_of_meaning_size
        lengths = list(range(unit, number_of_genes + 1, unit))
        if not lengths or lengths[-1] != number_of_genes:
            lengths.append(number_of_genes)
        return lengths

    def _hill_climb(
        self,
        number_of_genes: int,
        get_random_gene: GeneGenerator,
        state: SearchState,
        calc_fitness: FitnessFunction,
    ) -> GeneSequence:
        """Grow the solved sequence one unit of meaning per round."""
        cfg = self.config
        lengths = self._round_lengths(number_of_genes)
        best_ever = GeneSequence(genes="", fitness=FitnessResult(WORST_FITNESS))
        failure_to_improve_count = 0

        for round_index, length in enumerate(lengths):
            previous_length = lengths[round_index - 1] if round_index else 0
            freeze = previous_length if cfg.only_permute_new_genes_while_hill_climbing else 0

            self._run_generations(freeze, length, get_random_gene, state, calc_fitness)

            incremental_best = state.previous_bests.best
            if incremental_best.fitness_value < best_ever.fitness_value:
                best_ever = incremental_best.clone()
                failure_to_improve_count = 0
            else:
                failure_to_improve_count += 1
                if (incremental_best.fitness_value > best_ever.fitness_value * REGRESSION_TOLERANCE
                        or failure_to_improve_count >= MAX_ROUNDS_WITHOUT_IMPROVEMENT):
                    logger.info(
                        "Fitness appears to be getting worse, returning best result: "
                        "fitness %d in generation %d",
                        best_ever.fitness_value, best_ever.generation,
                    )
                    return best_ever

            if round_index + 1 == len(lengths):
                break

            self._seed_next_round(
                lengths[round_index + 1], get_random_gene, state, calc_fitness, incremental_best
            )
            logger.info("> %d", round_index + 2)

        return best_ever

    def _seed_next_round(
        self,
        next_length: int,
        get_random_gene: GeneGenerator,
        state: SearchState,
        calc_fitness: FitnessFunction,
        incremental_best: GeneSequence,
    ) -> None:
        """Extend every retained candidate by a random unit and rebuild the population."""
        cfg = self.config
        parents = list(state.previous_bests)
        state.fitness_cache.clear()
        children = []
        for index in range(state.population.capacity):
            parent = parents[index % len(parents)]
            unit = self.registry.random_strategy.generate(
                None, max(next_length - len(parent), 0), get_random_gene,
                cfg.unit_of_meaning_size, self.sliding_mutation_rate, self._random.randrange, 0,
            )
            children.append(GeneSequence(
                genes=parent.genes + unit.genes,
                strategy=self._unit_strategy,
                generation=state.generation,
            ))

        self._calc_fitness(children, calc_fitness, state.fitness_cache)

        # children are sorted, so improvements come first and padding follows
        pool = []
        seen = set()
        for child in children:
            improved = child.fitness_value < incremental_best.fitness_value
            if not improved and len(pool) >= cfg.retained_minimum:
                break
            if child.duplicate_key in seen:
                continue
            seen.add(child.duplicate_key)
            pool.append(child.clone())

        state.population.refill(children)
        state.previous_bests.reset(pool)

        if state.previous_bests.best.fitness_value < incremental_best.fitness_value:
            self._display(state.generation, state.previous_bests.best)

    # ------------------------------------------------------------------
    # Generational loop
    # ------------------------------------------------------------------

    def _run_generations(
        self,
        freeze_genes_up_to: int,
        number_of_genes: int,
        get_random_gene: GeneGenerator,
        state: SearchState,
        calc_fitness: FitnessFunction,
    ) -> None:
        """
        Evolve ``state`` until an optimal candidate appears or the search stalls.

        The best candidates found are left in ``state.previous_bests``.
        """
        cfg = self.config
        population_size = state.population.capacity
        self.sliding_mutation_rate = cfg.mutation_rate

        fast_search_population_size = self._fast_search_population_size(population_size, number_of_genes)
        max_generations_without_improvement = max(
            1, int(np.mean(state.generations_between_improvements) * BUDGET_MULTIPLIER)
        )
        logger.info(
            "> max generations to run without improvement: %d", max_generations_without_improvement
        )
        max_generations_without_new_sequences = max_generations_without_improvement // 10
        generations_without_new_sequences = 0
        generations_since_improvement = 0

        while generations_since_improvement < max_generations_without_improvement:
            population = state.population.current
            previous_bests = state.previous_bests
            self._calc_fitness(population, calc_fitness, state.fitness_cache)
            first = population[0]

            new_sequences = self._select_survivors(
                population, previous_bests, fast_search_population_size
            )

            if new_sequences:
                generations_without_new_sequences = 0
                if new_sequences[0].fitness_value < previous_bests.best.fitness_value:
                    self._display(state.generation, new_sequences[0])
                    state.generations_between_improvements.append(generations_since_improvement)
                    generations_since_improvement = -1

                previous_bests.merge(new_sequences, state.generation)
                self.registry.update_weights(previous_bests.items)
                if cfg.display_strategy_percentages and state.generation % 100 == 0:
                    logger.info(self.registry.describe())

                self.sliding_mutation_rate = cfg.mutation_rate
            else:
                generations_without_new_sequences += 1
                if generations_without_new_sequences > max_generations_without_new_sequences:
                    logger.debug(
                        "No new sequences for %d generations, stopping",
                        generations_without_new_sequences,
                    )
                    break
                self.sliding_mutation_rate = max(self.sliding_mutation_rate - cfg.slide_rate, 0.0)

            if first.fitness_value == 0:
                break

            self._create_next_generation(freeze_genes_up_to, number_of_genes, get_random_gene, state)
            state.population.swap()
            generations_since_improvement += 1
            state.generation += 1

        state.generations_between_improvements.append(max(generations_since_improvement, 0))

    def _calc_fitness(
        self,
        population: List[GeneSequence],
        calc_fitness: FitnessFunction,
        computed: Dict[str, FitnessResult],
    ) -> None:
        """Evaluate every unevaluated candidate not already in ``computed``, then sort by fitness."""
        for candidate in population:
            if candidate.fitness is not None:
                continue
            result = computed.get(candidate.genes)
            if result is None:
                result = FitnessResult.coerce(calc_fitness(candidate.genes))
                computed[candidate.genes] = result
            candidate.fitness = result
        sort_by_fitness(population)

    def _fast_search_population_size(self, population_size: int, number_of_genes: int) -> int:
        """Number of top-ranked candidates fast search considers for survival."""
        return min(
            population_size,
            population_size // 10 + 4 * number_of_genes // self.config.unit_of_meaning_size,
        )

    def _select_survivors(
        self,
        population: List[GeneSequence],
        previous_bests: RetainedBests,
        fast_search_population_size: int,
    ) -> List[GeneSequence]:
        """Return new, previously unseen candidates at least as good as the median retained one."""
        cfg = self.config
        if cfg.use_fast_search:
            window = population[:fast_search_population_size]
            limit = cfg.max_improvements_per_round
        else:
            window = population
            limit = max(1, int((1 - self.sliding_mutation_rate) * len(population)))

        worst_fitness = previous_bests.threshold()
        previous_best_lookup = previous_bests.keys()
        new_sequences = []
        for candidate in window:
            if candidate.fitness_value > worst_fitness:
                break
            key = candidate.duplicate_key
            if key in previous_best_lookup:
                continue
            previous_best_lookup.add(key)
            new_sequences.append(candidate)
            if len(new_sequences) == limit:
                break
        return new_sequences

    def _create_next_generation(
        self,
        freeze_genes_up_to: int,
        number_of_genes: int,
        get_random_gene: GeneGenerator,
        state: SearchState,
    ) -> None:
        cfg = self.config
        population = state.population.current
        buffer = state.population.next
        elite_count = cfg.elite_count

        for index in range(elite_count):
            buffer[index] = population[index].clone()

        self._copy_previous_bests(state.previous_bests, population, elite_count)
        sort_by_fitness(population)
        parents = self._unique_parents(population)

        for index in range(elite_count, len(buffer)):
            strategy = self.registry.select(100 * self._random.random())
            buffer[index] = strategy.generate(
                parents,
                number_of_genes,
                get_random_gene,
                cfg.unit_of_meaning_size,
                self.sliding_mutation_rate,
                self._random.randrange,
                freeze_genes_up_to,
            )

    def _copy_previous_bests(
        self,
        previous_bests: RetainedBests,
        population: List[GeneSequence],
        elite_count: int,
    ) -> None:
        """Re-inject a random sample of retained candidates into the population tail."""
        sample = self._random.sample(previous_bests.items, min(elite_count, len(previous_bests)))
        last_position = len(population) - 1
        for offset, candidate in enumerate(sample):
            index = last_position - offset
            if index < elite_count:
                break
            population[index] = candidate.clone()

    def _unique_parents(self, population: List[GeneSequence]) -> List[GeneSequence]:
        parents = []
        unique = set()
        for candidate in population:
            if candidate.genes in unique:
                continue
            unique.add(candidate.genes)
            parents.append(candidate)
            if len(parents) == self.config.max_parents:
                break
        return parents

    def _display(self, generation: int, candidate: GeneSequence) -> None:
        if self.on_new_best is not None:
            self.on_new_best(
                1 + generation, candidate.fitness_value, candidate.genes, candidate.description
            )


def get_best_genetically(
    number_of_genes: int,
    possible_genes: str,
    calc_fitness: FitnessFunction,
    config: Optional[SolverConfig] = None,
    strategies: Optional[Iterable[ChildGenerationStrategy]] = None,
    on_new_best: Optional[DisplayCallback] = None,
) -> GeneSequence:
    """Convenience wrapper around :class:`GeneticSolver`."""
    solver = GeneticSolver(config=config, strategies=strategies, on_new_best=on_new_best)
    return solver.get_best_genetically(number_of_genes, possible_genes, calc_fitness)
