import abc
import logging
from operator import attrgetter
from typing import Any, List, Optional

import numpy as np

from .best_tracker import find_best
from .problem import ProblemInterface, Solution
from .result import SolveResult

logger = logging.getLogger(__name__)


class SearchAlgorithm(abc.ABC):
    """
    Abstract base class for search algorithms.

    Subclasses implement `step()`; the shared `solve()` loop runs steps until the
    iteration budget is spent or `should_stop()` reports early termination, and
    records the best fitness of the population after every step.
    """
    # True when lower fitness is better for this solver.
    minimize: bool = True
    name: str = "search"

    def __init__(self, problem: ProblemInterface, population_size: int, max_iterations: int,
                 seed: Optional[int] = None, verbosity: int = 0):
        """
        Initializes the search algorithm.

        Args:
            problem: An object implementing ProblemInterface.
            population_size: The size of the population to maintain.
            max_iterations: Upper bound on the number of steps per solve.
            seed: Seed for the solver's random generator; None draws fresh entropy.
            verbosity: 1 or more logs every step at INFO level.
        """
        self.problem = problem
        self.population_size = population_size
        self.max_iterations = max_iterations
        self.seed = seed
        self.verbosity = verbosity
        self.rng = np.random.default_rng(seed)
        self.population: List[Any] = []
        self.best_solution: Optional[Solution] = None
        self.best_index: Optional[int] = None
        self.iteration = 0
        self.history: List[float] = []

    def _reset(self):
        """Re-seed the generator and clear per-run state."""
        self.rng = np.random.default_rng(self.seed)
        self.iteration = 0
        self.history = []
        self.population = []
        self.best_solution = None
        self.best_index = None

    def initialize(self):
        """
        Sets up the algorithm's initial state, including the population.
        Called by `solve()` before the first step.
        """
        self._reset()
        self.population = self.problem.get_initial_population(self.population_size, self.rng)
        for sol in self.population:
            sol.evaluate()
        self._update_best_solution()

    @abc.abstractmethod
    def step(self):
        """
        Performs a single step (iteration/generation) of the search algorithm.
        Must replace or update the population, refresh the best solution and
        advance `self.iteration`.
        """
        pass

    def should_stop(self) -> bool:
        """Early-termination hook checked after every step."""
        return False

    def solve(self) -> SolveResult:
        """Run a full search and return the best candidate of the final population."""
        self.initialize()
        logger.debug("%s: starting search over %d items with population %d",
                     self.name, self.problem.get_problem_info()["dimension"], self.population_size)
        while self.iteration < self.max_iterations:
            self.step()
            best_fitness = self.best_solution.fitness
            self.history.append(best_fitness)
            self._log_progress(best_fitness)
            if self.should_stop():
                break
        result = self._build_result()
        logger.info("%s finished after %d iterations: fitness=%s, subset sum=%d",
                    self.name, result.iterations, result.fitness, result.subset_sum)
        return result

    def _log_progress(self, best_fitness):
        level = logging.INFO if self.verbosity >= 1 else logging.DEBUG
        logger.log(level, "%s iteration %d: best fitness = %s", self.name, self.iteration, best_fitness)

    def _update_best_solution(self):
        """Points `best_solution` at the best member of the current population."""
        self.best_index, self.best_solution = find_best(
            self.population, key=attrgetter("fitness"), minimize=self.minimize)

    def _build_result(self) -> SolveResult:
        best = self.best_solution
        subset_sum = self.problem.subset_sum(best.representation)
        return SolveResult(
            algorithm=self.name,
            representation=[int(bit) for bit in best.representation],
            subset=self.problem.decode(best.representation),
            subset_sum=subset_sum,
            fitness=best.fitness,
            iterations=self.iteration,
            solved=subset_sum == self.problem.target,
            history=list(self.history),
        )
