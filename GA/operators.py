from abc import ABC, abstractmethod
from typing import List, Sequence

import numpy as np

from Core.errors import InvalidConfiguration
from Core.problem import Solution


class GeneticOperator(ABC):
    """
    Abstract base class for population-wide genetic operators.

    Methods
    -------
    select(population, rng)
        Returns as many parents as there are members in the population.
    crossover(parents, rng)
        Recombines the parents into the same number of offspring bit arrays.
    mutate(offspring, rng)
        Mutates the offspring bit arrays in place.
    """
    @abstractmethod
    def select(self, population: Sequence[Solution], rng: np.random.Generator) -> List[Solution]: pass

    @abstractmethod
    def crossover(self, parents: Sequence[Solution], rng: np.random.Generator) -> List[np.ndarray]: pass

    @abstractmethod
    def mutate(self, offspring: List[np.ndarray], rng: np.random.Generator) -> List[np.ndarray]: pass


def one_point_crossover(parent1: np.ndarray, parent2: np.ndarray, point: int):
    """Swap the suffixes of two bit arrays starting at ``point``."""
    parent1 = np.asarray(parent1)
    parent2 = np.asarray(parent2)
    child1 = np.concatenate((parent1[:point], parent2[point:]))
    child2 = np.concatenate((parent2[:point], parent1[point:]))
    return child1, child2


class BitStringOperator(GeneticOperator):
    """Binary tournament, adjacent-pair one-point crossover and per-bit flip mutation."""

    def __init__(self, mutation_rate: float):
        self.mutation_rate = float(mutation_rate)

    def select(self, population, rng):
        # Two draws with replacement per slot; the first wins only on strictly lower fitness.
        size = len(population)
        draws = rng.integers(0, size, size=(size, 2))
        selected = []
        for first_idx, second_idx in draws:
            first, second = population[first_idx], population[second_idx]
            selected.append(first if first.fitness < second.fitness else second)
        return selected

    def crossover(self, parents, rng):
        if len(parents) % 2:
            raise InvalidConfiguration(f"pairwise crossover needs an even number of parents, got {len(parents)}")
        offspring = []
        for parent1, parent2 in zip(parents[0::2], parents[1::2]):
            length = len(parent1.representation)
            point = int(rng.integers(0, length))
            offspring.extend(one_point_crossover(parent1.representation, parent2.representation, point))
        return offspring

    def mutate(self, offspring, rng):
        for mask in offspring:
            flips = rng.random(mask.size) < self.mutation_rate
            mask[flips] = 1 - mask[flips]
        return offspring
