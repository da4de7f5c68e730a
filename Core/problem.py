import abc
from typing import Any, Dict, List, Optional
import numpy as np


class Solution:
    """Represents a potential solution to the optimization problem."""

    def __init__(self, representation: Any, problem: 'ProblemInterface'):
        self.representation = representation
        self.problem = problem
        self.fitness: Optional[float] = None

    def evaluate(self):
        """Calculates and stores the fitness of this solution."""
        if self.fitness is None:
            self.fitness = self.problem.evaluate(self)
        return self.fitness

    def __eq__(self, other: object) -> bool:
        """Checks if two solutions are equal based on representation."""
        if not isinstance(other, Solution):
            return NotImplemented
        return np.array_equal(np.asarray(self.representation), np.asarray(other.representation))

    def __str__(self) -> str:
        bits = "".join(str(int(b)) for b in self.representation)
        return f"Solution({bits}, Fitness: {self.fitness})"


class ProblemInterface(abc.ABC):
    """
    Abstract base class defining the interface for an optimization problem.
    """

    @abc.abstractmethod
    def evaluate(self, solution: Solution) -> float:
        """
        Evaluates the fitness of a given solution. Lower values are better.

        Args:
            solution: The Solution object to evaluate.

        Returns:
            The fitness value.
        """
        pass

    @abc.abstractmethod
    def decode(self, representation: Any) -> List[Any]:
        """Maps an encoded representation back to the domain objects it selects."""
        pass

    @abc.abstractmethod
    def get_initial_solution(self, rng: Optional[np.random.Generator] = None) -> Solution:
        """
        Generates a single random initial solution.

        Args:
            rng: Generator to draw from. A fresh, unseeded one is used when omitted.

        Returns:
            A Solution object representing an initial state.
        """
        pass

    @abc.abstractmethod
    def get_problem_info(self) -> Dict[str, Any]:
        """
        Returns a dictionary containing essential information about the problem.
        Examples: 'dimension', 'lower_bounds', 'upper_bounds', 'problem_type'.
        """
        pass

    def get_initial_population(self, population_size: int,
                               rng: Optional[np.random.Generator] = None) -> List[Solution]:
        """
        Generates an initial population of solutions.
        Can be overridden by subclasses for more sophisticated initialization.

        Args:
            population_size: The number of solutions to generate.
            rng: Generator shared by every draw of the population.

        Returns:
            A list of Solution objects.
        """
        if rng is None:
            rng = np.random.default_rng()
        return [self.get_initial_solution(rng) for _ in range(population_size)]
