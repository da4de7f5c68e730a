"""
Run parameters for the genetic and particle-swarm solvers.

Defaults match the console programs: GA 100 candidates, 1% mutation,
1000 generations; PSO 20 particles, 100 iterations, c1 = c2 = 2.0,
inertia 0.5.
"""
import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .errors import InvalidConfiguration

GA_POPULATION_SIZE = 100
GA_MUTATION_RATE = 0.01
GA_MAX_GENERATIONS = 1000

PSO_SWARM_SIZE = 20
PSO_MAX_ITERATIONS = 100
PSO_INERTIA_WEIGHT = 0.5
PSO_C1 = 2.0
PSO_C2 = 2.0


def _is_int(value) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


def _require_positive_int(name: str, value) -> None:
    if not _is_int(value) or value <= 0:
        raise InvalidConfiguration(f"{name} must be a positive integer, got {value!r}")


def _require_positive_real(name: str, value) -> None:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidConfiguration(f"{name} must be a number, got {value!r}") from exc
    if not math.isfinite(number) or number <= 0.0:
        raise InvalidConfiguration(f"{name} must be a positive finite number, got {value!r}")


@dataclass
class GAConfig:
    population_size: int = GA_POPULATION_SIZE
    mutation_rate: float = GA_MUTATION_RATE
    max_generations: int = GA_MAX_GENERATIONS
    seed: Optional[int] = None

    def validate(self) -> "GAConfig":
        """Raise InvalidConfiguration unless every parameter can drive a run."""
        _require_positive_int("population_size", self.population_size)
        # Crossover consumes the selected candidates in adjacent pairs.
        if self.population_size % 2:
            raise InvalidConfiguration(
                f"population_size must be even for pairwise crossover, got {self.population_size}")
        try:
            rate = float(self.mutation_rate)
        except (TypeError, ValueError) as exc:
            raise InvalidConfiguration(f"mutation_rate must be a number, got {self.mutation_rate!r}") from exc
        if not 0.0 <= rate <= 1.0:
            raise InvalidConfiguration(f"mutation_rate must lie in [0, 1], got {self.mutation_rate!r}")
        _require_positive_int("max_generations", self.max_generations)
        return self


@dataclass
class PSOConfig:
    swarm_size: int = PSO_SWARM_SIZE
    max_iterations: int = PSO_MAX_ITERATIONS
    inertia_weight: float = PSO_INERTIA_WEIGHT
    c1: float = PSO_C1
    c2: float = PSO_C2
    discretize_velocity: bool = False
    seed: Optional[int] = None

    def validate(self) -> "PSOConfig":
        """Raise InvalidConfiguration unless every parameter can drive a run."""
        _require_positive_int("swarm_size", self.swarm_size)
        _require_positive_int("max_iterations", self.max_iterations)
        _require_positive_real("inertia_weight", self.inertia_weight)
        _require_positive_real("c1", self.c1)
        _require_positive_real("c2", self.c2)
        return self
