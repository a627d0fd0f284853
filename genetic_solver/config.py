"""Configuration for the genetic solver."""

from dataclasses import dataclass


@dataclass
class SolverConfig:
    """Configuration for the genetic solver."""
    population_size: int = 2048
    elite_fraction: float = 0.10
    max_generations_without_improvement: int = 16384
    mutation_rate: float = 0.25
    minimum_strategy_percentage: float = 2
    unit_of_meaning_size: int = 1
    use_hill_climbing: bool = False
    only_permute_new_genes_while_hill_climbing: bool = True
    use_fast_search: bool = False
    random_seed: int = 0  # 0 = derive from the clock
    display_strategy_percentages: bool = False
    max_parents: int = 50
    max_improvements_per_round: int = 5  # survivors kept per generation in fast search
    slide_rate: float = 0.001
    retained_minimum: int = 100

    def __post_init__(self):
        if self.population_size < 1:
            raise ValueError(f"population_size must be positive, got {self.population_size}")
        if not 0.0 <= self.elite_fraction < 1.0:
            raise ValueError(f"elite_fraction must be in [0, 1), got {self.elite_fraction}")
        if self.max_generations_without_improvement < 1:
            raise ValueError(
                "max_generations_without_improvement must be positive, "
                f"got {self.max_generations_without_improvement}"
            )
        if not 0.0 <= self.mutation_rate <= 1.0:
            raise ValueError(f"mutation_rate must be in [0, 1], got {self.mutation_rate}")
        if self.minimum_strategy_percentage < 0:
            raise ValueError(
                f"minimum_strategy_percentage must not be negative, got {self.minimum_strategy_percentage}"
            )
        if self.unit_of_meaning_size < 1:
            raise ValueError(f"unit_of_meaning_size must be positive, got {self.unit_of_meaning_size}")
        self.max_parents = max(1, self.max_parents)
        self.max_improvements_per_round = max(1, self.max_improvements_per_round)
        self.retained_minimum = max(1, self.retained_minimum)
        self.slide_rate = max(0.0, self.slide_rate)

    @property
    def elite_count(self) -> int:
        """Number of elites copied unchanged into each generation."""
        return min(int(self.population_size * self.elite_fraction), self.population_size - 1)
