"""Tests for the strategy registry and adaptive weighting."""

import pytest
from genetic_solver.candidate import FitnessResult, GeneSequence
from genetic_solver.registry import StrategyRegistry
from genetic_solver.strategies import ChildGenerationStrategy, RandomGenes


class NamedStrategy(ChildGenerationStrategy):
    """Minimal strategy used to build registries."""

    def __init__(self, name: str, order_by: int = 0):
        self._name = name
        self._order_by = order_by

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._name

    @property
    def order_by(self) -> int:
        return self._order_by

    def generate(self, parents, number_of_genes, get_random_gene, unit_size,
                 mutation_rate, random_int, freeze_genes_up_to):
        return self._child(["0"] * number_of_genes)


def produced_by(strategy, count: int):
    return [GeneSequence(str(i), strategy=strategy, fitness=FitnessResult(1)) for i in range(count)]


class TestConstruction:
    """Tests for registry construction."""

    def test_empty_falls_back_to_random(self):
        registry = StrategyRegistry([])
        assert len(registry) == 1
        assert isinstance(registry.strategies[0], RandomGenes)
        assert registry.weights == [100.0]
        assert registry.random_strategy is registry.strategies[0]

    def test_none_falls_back_to_random(self):
        registry = StrategyRegistry(None)
        assert isinstance(registry.select(50.0), RandomGenes)

    def test_equal_initial_weights(self):
        registry = StrategyRegistry([NamedStrategy("a"), NamedStrategy("b"), NamedStrategy("c")])
        assert sum(registry.weights) == pytest.approx(100.0)
        assert registry.weights[0] == pytest.approx(100.0 / 3)

    def test_sorted_by_order_then_registration(self):
        registry = StrategyRegistry([
            NamedStrategy("late", 5),
            NamedStrategy("first", 1),
            NamedStrategy("second", 1),
        ])
        assert [s.name for s in registry.strategies] == ["first", "second", "late"]

    def test_random_strategy_created_when_missing(self):
        registry = StrategyRegistry([NamedStrategy("a")])
        assert isinstance(registry.random_strategy, RandomGenes)
        assert registry.random_strategy not in registry.strategies


class TestSelect:
    """Tests for weighted selection."""

    def test_contiguous_ranges_in_registry_order(self):
        strategies = [NamedStrategy(name) for name in "abcd"]
        registry = StrategyRegistry(strategies)

        assert registry.select(0.0) is strategies[0]
        assert registry.select(24.99) is strategies[0]
        assert registry.select(25.0) is strategies[1]
        assert registry.select(74.0) is strategies[2]
        assert registry.select(99.99) is strategies[3]

    def test_draw_at_upper_bound_is_clamped(self):
        strategies = [NamedStrategy("a"), NamedStrategy("b")]
        registry = StrategyRegistry(strategies)
        assert registry.select(100.0) is strategies[1]


class TestUpdateWeights:
    """Tests for adaptive weighting."""

    def test_weights_follow_provenance(self):
        a, b = NamedStrategy("a"), NamedStrategy("b")
        registry = StrategyRegistry([a, b], minimum_percentage=2)

        registry.update_weights(produced_by(a, 75) + produced_by(b, 25))

        assert registry.weights == pytest.approx([75.0, 25.0])

    def test_floor_applied_to_unused_strategies(self):
        a, b, c = NamedStrategy("a"), NamedStrategy("b"), NamedStrategy("c")
        registry = StrategyRegistry([a, b, c], minimum_percentage=2)

        registry.update_weights(produced_by(a, 100))

        assert registry.weights == pytest.approx([96.0, 2.0, 2.0])
        assert sum(registry.weights) == pytest.approx(100.0)

    def test_strategy_without_survivors_never_below_floor(self):
        a, b, c = NamedStrategy("a"), NamedStrategy("b"), NamedStrategy("c")
        registry = StrategyRegistry([a, b, c], minimum_percentage=2)

        for generation in range(100):
            retained = produced_by(a, 50 + generation) + produced_by(b, 1 + generation % 7)
            registry.update_weights(retained)
            assert registry.weights[2] >= 2.0
            assert min(registry.weights) >= 2.0 - 1e-9
            assert sum(registry.weights) == pytest.approx(100.0)

    def test_no_attributed_candidates_gives_equal_weights(self):
        registry = StrategyRegistry([NamedStrategy("a"), NamedStrategy("b")])
        registry.update_weights(produced_by(NamedStrategy("other"), 10))
        assert registry.weights == pytest.approx([50.0, 50.0])

    def test_floor_clamped_when_too_large(self):
        registry = StrategyRegistry(
            [NamedStrategy("a"), NamedStrategy("b"), NamedStrategy("c")], minimum_percentage=50
        )
        a = registry.strategies[0]
        registry.update_weights(produced_by(a, 10))
        assert registry.weights == pytest.approx([100.0 / 3] * 3)

    def test_selection_table_rebuilt(self):
        a, b = NamedStrategy("a"), NamedStrategy("b")
        registry = StrategyRegistry([a, b], minimum_percentage=2)
        registry.update_weights(produced_by(b, 10))

        assert registry.select(1.0) is a
        assert registry.select(3.0) is b

    def test_same_name_strategies_counted_separately(self):
        gentle, aggressive = NamedStrategy("mutate"), NamedStrategy("mutate")
        registry = StrategyRegistry([gentle, aggressive], minimum_percentage=2)

        registry.update_weights(produced_by(aggressive, 30) + produced_by(gentle, 10))

        assert registry.weights == pytest.approx([25.0, 75.0])

    def test_describe(self):
        registry = StrategyRegistry([NamedStrategy("a"), NamedStrategy("b")])
        assert registry.describe() == "% a 50.0 b 50.0"
