"""Tests for candidates and fitness results."""

import pytest
from genetic_solver.candidate import (
    FitnessResult,
    GeneSequence,
    UncomputedFitnessError,
    sort_by_fitness,
)
from genetic_solver.strategies import RandomGenes


class TestFitnessResult:
    """Tests for FitnessResult."""

    def test_coerce_int(self):
        result = FitnessResult.coerce(7)
        assert result.value == 7
        assert result.unique_key is None
        assert result.unit_of_meaning_index_hint is None

    def test_coerce_passthrough(self):
        original = FitnessResult(3, unique_key="k")
        assert FitnessResult.coerce(original) is original

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            FitnessResult(-1)


class TestGeneSequence:
    """Tests for GeneSequence."""

    def test_uncomputed_fitness_cannot_be_compared(self):
        candidate = GeneSequence("0101")
        assert not candidate.is_evaluated
        with pytest.raises(UncomputedFitnessError):
            candidate.sort_key

    def test_duplicate_key_prefers_unique_key(self):
        candidate = GeneSequence("0101", fitness=FitnessResult(1, unique_key="odd"))
        assert candidate.duplicate_key == "odd"

    def test_duplicate_key_falls_back_to_genes(self):
        candidate = GeneSequence("0101", fitness=FitnessResult(1))
        assert candidate.duplicate_key == "0101"

    def test_clone_is_independent(self):
        strategy = RandomGenes()
        candidate = GeneSequence("ab", strategy=strategy, fitness=FitnessResult(2), generation=4)
        copy = candidate.clone()
        copy.generation = 9

        assert copy.genes == "ab"
        assert copy.strategy is strategy
        assert copy.fitness == candidate.fitness
        assert candidate.generation == 4

    def test_description_from_strategy(self):
        assert GeneSequence("a", strategy=RandomGenes()).description == "random"
        assert GeneSequence("a").description == "unknown"


class TestSortByFitness:
    """Tests for fitness ordering."""

    def test_ascending_fitness(self):
        population = [
            GeneSequence("c", fitness=FitnessResult(3)),
            GeneSequence("a", fitness=FitnessResult(1)),
            GeneSequence("b", fitness=FitnessResult(2)),
        ]
        sort_by_fitness(population)
        assert [c.genes for c in population] == ["a", "b", "c"]

    def test_ties_prefer_later_generation(self):
        population = [
            GeneSequence("old", fitness=FitnessResult(1), generation=1),
            GeneSequence("new", fitness=FitnessResult(1), generation=5),
        ]
        sort_by_fitness(population)
        assert population[0].genes == "new"
