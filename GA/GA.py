import logging
from typing import Optional

from Core.config import GA_MAX_GENERATIONS, GA_MUTATION_RATE, GA_POPULATION_SIZE, GAConfig
from Core.problem import Solution
from Core.search_algorithm import SearchAlgorithm
from GA.operators import BitStringOperator, GeneticOperator

logger = logging.getLogger(__name__)


class GeneticAlgorithm(SearchAlgorithm):
    """
    Generational genetic algorithm for subset sum.

    Fitness is ``|target - sum(subset)|``: lower is better and 0 is an exact
    match, which ends the run early. Every generation performs tournament
    selection, one-point crossover on adjacent pairs and per-bit mutation,
    then replaces the whole population with the offspring (no elitism).
    The result is the best candidate of the last generation computed.
    """
    minimize = True
    name = "ga"

    def __init__(self, problem, population_size: int = GA_POPULATION_SIZE,
                 mutation_rate: float = GA_MUTATION_RATE, max_iterations: int = GA_MAX_GENERATIONS,
                 seed: Optional[int] = None, verbosity: int = 0,
                 genetic_operator: Optional[GeneticOperator] = None):
        """
        Args:
            problem: A SubsetSumProblem.
            population_size (int): Number of candidates; must be even.
            mutation_rate (float): Per-bit flip probability in [0, 1].
            max_iterations (int): Generation budget.
            seed (int): Seed for the solver's random generator.
            verbosity (int): 1 or more logs every generation at INFO level.
            genetic_operator: Replacement for the default bit-string operators.
        """
        config = GAConfig(population_size=population_size, mutation_rate=mutation_rate,
                          max_generations=max_iterations, seed=seed).validate()
        super().__init__(problem, config.population_size, config.max_generations, seed=config.seed,
                         verbosity=verbosity)
        self.mutation_rate = float(config.mutation_rate)
        self.genetic_operator = genetic_operator or BitStringOperator(self.mutation_rate)

    @classmethod
    def from_config(cls, problem, config: GAConfig, **kwargs) -> "GeneticAlgorithm":
        return cls(problem, population_size=config.population_size, mutation_rate=config.mutation_rate,
                   max_iterations=config.max_generations, seed=config.seed, **kwargs)

    def step(self):
        """Produce the next generation and evaluate it."""
        parents = self.genetic_operator.select(self.population, self.rng)
        offspring = self.genetic_operator.crossover(parents, self.rng)
        self.genetic_operator.mutate(offspring, self.rng)

        self.population = [Solution(mask, self.problem) for mask in offspring]
        for sol in self.population:
            sol.evaluate()
        self._update_best_solution()
        self.iteration += 1

        if self.best_solution.fitness == 0:
            logger.info("Perfect solution found at generation %d", self.iteration)

    def should_stop(self) -> bool:
        return self.best_solution is not None and self.best_solution.fitness == 0
