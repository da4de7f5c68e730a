import logging
from typing import Optional

import numpy as np

from Core.config import PSO_C1, PSO_C2, PSO_INERTIA_WEIGHT, PSO_MAX_ITERATIONS, PSO_SWARM_SIZE, PSOConfig
from Core.problem import Solution
from Core.search_algorithm import SearchAlgorithm

logger = logging.getLogger(__name__)


def round_half_up(values) -> np.ndarray:
    """Round to the nearest integer with halves going up (0.5 -> 1, -0.5 -> 0)."""
    return np.floor(np.asarray(values, dtype=float) + 0.5)


class Particle(Solution):
    """
    A swarm member over a bit-per-item position.

    Fitness is ``target - |target - sum(subset)|``: higher is better and equal to
    the target on an exact match. Fitness and personal-best fitness start at 0,
    so the first positive score counts as an improvement.
    """

    def __init__(self, position: np.ndarray, velocity: np.ndarray, problem):
        super().__init__(position, problem)
        self.velocity = velocity
        self.personal_best = position.copy()
        self.personal_best_fitness = 0
        self.fitness = 0

    @property
    def position(self) -> np.ndarray:
        return self.representation

    @position.setter
    def position(self, value: np.ndarray):
        self.representation = value

    def evaluate(self):
        """Recompute fitness from the current position."""
        self.fitness = self.problem.target - self.problem.deviation(self.representation)
        return self.fitness

    def update_personal_best(self) -> bool:
        if self.fitness > self.personal_best_fitness:
            self.personal_best = self.representation.copy()
            self.personal_best_fitness = self.fitness
            return True
        return False


class ParticleSwarmOptimization(SearchAlgorithm):
    """
    Particle Swarm Optimization applied directly to bit strings.

    The continuous inertia/cognitive/social velocity equation runs per bit and
    the position is discretized by parity: ``x = (x + round(v)) mod 2``, so an
    odd rounded velocity flips the bit and an even one keeps it. The global best
    is the particle with the highest current fitness, refreshed before the loop
    and after each sweep; the run always spends its full iteration budget.
    """
    minimize = False
    name = "pso"

    def __init__(self, problem, population_size: int = PSO_SWARM_SIZE, max_iterations: int = PSO_MAX_ITERATIONS,
                 omega: float = PSO_INERTIA_WEIGHT, c1: float = PSO_C1, c2: float = PSO_C2,
                 discretize_velocity: bool = False, seed: Optional[int] = None, verbosity: int = 0):
        """
        Initialize Particle Swarm Optimization.

        Args:
            problem: A SubsetSumProblem.
            population_size (int): Number of particles in the swarm
            max_iterations (int): Number of sweeps over the swarm
            omega (float): Inertia weight
            c1 (float): Cognitive coefficient (personal best influence)
            c2 (float): Social coefficient (global best influence)
            discretize_velocity (bool): Store velocity rounded to integers after each update
            seed (int): Seed for the solver's random generator
            verbosity (int): Verbosity level for logging
        """
        config = PSOConfig(swarm_size=population_size, max_iterations=max_iterations, inertia_weight=omega,
                           c1=c1, c2=c2, discretize_velocity=discretize_velocity, seed=seed).validate()
        super().__init__(problem, config.swarm_size, config.max_iterations, seed=config.seed, verbosity=verbosity)
        self.omega = float(config.inertia_weight)
        self.c1 = float(config.c1)
        self.c2 = float(config.c2)
        self.discretize_velocity = bool(config.discretize_velocity)

    @classmethod
    def from_config(cls, problem, config: PSOConfig, **kwargs) -> "ParticleSwarmOptimization":
        return cls(problem, population_size=config.swarm_size, max_iterations=config.max_iterations,
                   omega=config.inertia_weight, c1=config.c1, c2=config.c2,
                   discretize_velocity=config.discretize_velocity, seed=config.seed, **kwargs)

    @property
    def global_best(self) -> Optional[Particle]:
        return self.best_solution

    def initialize(self):
        """Initialize the swarm with random positions and random 0/1 velocities."""
        self._reset()
        dimension = self.problem.dimension
        for _ in range(self.population_size):
            position = self.problem.random_mask(self.rng)
            velocity = self.rng.integers(0, 2, size=dimension).astype(float)
            self.population.append(Particle(position, velocity, self.problem))
        self._update_best_solution()

    def step(self):
        """Perform one sweep over the swarm."""
        # The global best is a live reference: particles after it in the sweep
        # are pulled toward its already-moved position.
        global_best = self.global_best
        for particle in self.population:
            self._update_velocity(particle, global_best)
            self._update_position(particle)
            particle.evaluate()
            particle.update_personal_best()

        self._update_best_solution()
        self.iteration += 1

    def _update_velocity(self, particle: Particle, global_best: Particle):
        x = particle.position.astype(float)
        r1 = self.rng.random(x.size)
        r2 = self.rng.random(x.size)

        inertia = self.omega * particle.velocity
        cognitive = self.c1 * r1 * (particle.personal_best - x)
        social = self.c2 * r2 * (global_best.position - x)
        velocity = inertia + cognitive + social

        if self.discretize_velocity:
            velocity = round_half_up(velocity)
        particle.velocity = velocity

    def _update_position(self, particle: Particle):
        steps = round_half_up(particle.velocity).astype(np.int64)
        particle.position = np.mod(particle.position + steps, 2).astype(np.int8)

    def get_swarm_info(self):
        """Get information about the current swarm state."""
        return {
            'iteration': self.iteration,
            'global_best_index': self.best_index,
            'global_best_fitness': self.global_best.fitness if self.global_best is not None else None,
            'global_best_position': self.global_best.position.copy() if self.global_best is not None else None,
            'avg_personal_best_fitness': float(np.mean([p.personal_best_fitness for p in self.population]))
            if self.population else 0.0,
            'omega': self.omega,
            'c1': self.c1,
            'c2': self.c2,
            'discretize_velocity': self.discretize_velocity,
        }
