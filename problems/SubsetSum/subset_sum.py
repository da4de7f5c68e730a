from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple
import numpy as np

from Core.errors import InvalidConfiguration, MalformedInput
from Core.problem import ProblemInterface, Solution


def _is_integer(value: Any) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


class SubsetSumProblem(ProblemInterface):
    """Subset sum over a fixed item list; a candidate is one bit per item.

    Item order defines bit positions and duplicate values are independent
    slots. `evaluate` scores a candidate by its distance to the target,
    ``|target - sum|``, so lower is better and 0 is an exact hit.
    """

    def __init__(self, items: Iterable[int], target: int) -> None:
        values = list(items)
        if not values:
            raise InvalidConfiguration("items must contain at least one integer")
        for value in values:
            if not _is_integer(value):
                raise MalformedInput(f"item {value!r} is not an integer")
        if not _is_integer(target):
            raise MalformedInput(f"target {target!r} is not an integer")

        self._items: Tuple[int, ...] = tuple(int(v) for v in values)
        self._target = int(target)

    @property
    def items(self) -> Tuple[int, ...]:
        return self._items

    @property
    def target(self) -> int:
        return self._target

    @property
    def dimension(self) -> int:
        return len(self._items)

    # ---- ProblemInterface API ----
    def evaluate(self, solution: Solution) -> int:
        return self.deviation(solution.representation)

    def decode(self, representation: Iterable[int]) -> List[int]:
        mask = self._to_mask(representation)
        return [self._items[i] for i in np.flatnonzero(mask)]

    def get_initial_solution(self, rng: Optional[np.random.Generator] = None) -> Solution:
        return Solution(self.random_mask(rng), self)

    def get_problem_info(self) -> Dict[str, Any]:
        return {
            "dimension": self.dimension,
            "problem_type": "binary",
            "target": self._target,
            "items": list(self._items),
            "lower_bounds": np.zeros(self.dimension, dtype=int),
            "upper_bounds": np.ones(self.dimension, dtype=int),
            "sum_bounds": (sum(v for v in self._items if v < 0), sum(v for v in self._items if v > 0)),
        }

    # ---- Domain helpers ----
    def subset_sum(self, representation: Iterable[int]) -> int:
        # Exact for items of any magnitude.
        return sum(self.decode(representation))

    def deviation(self, representation: Iterable[int]) -> int:
        """Absolute distance between the candidate's subset sum and the target."""
        return abs(self._target - self.subset_sum(representation))

    def random_mask(self, rng: Optional[np.random.Generator] = None) -> np.ndarray:
        """Draw every bit independently and uniformly from {0, 1}."""
        if rng is None:
            rng = np.random.default_rng()
        return rng.integers(0, 2, size=self.dimension, dtype=np.int8)

    # ---- internal helpers ----
    def _to_mask(self, rep: Iterable[int]) -> np.ndarray:
        mask = np.asarray(rep if isinstance(rep, np.ndarray) else list(rep), dtype=np.int64)
        if mask.shape != (self.dimension,):
            raise ValueError("representation length mismatch with problem dimension")
        if np.any((mask != 0) & (mask != 1)):
            raise ValueError("representation must contain only 0/1 bits")
        return mask

    def __repr__(self) -> str:
        return f"SubsetSumProblem(items={list(self._items)}, target={self._target})"


@dataclass
class SubsetSumSpec:
    n_items: int
    value_range: Tuple[int, int] = (1, 100)
    seed: Optional[int] = None


def generate_random_subset_sum(spec: SubsetSumSpec) -> Tuple[SubsetSumProblem, dict]:
    """Draw a random instance whose target is the sum of a planted subset, so an exact answer exists."""
    if spec.n_items < 1:
        raise InvalidConfiguration(f"n_items must be positive, got {spec.n_items}")
    rng = np.random.default_rng(spec.seed)
    low, high = sorted(spec.value_range)
    bounds = np.iinfo(np.int64)
    if low < bounds.min or high >= bounds.max:
        raise InvalidConfiguration(f"value_range must lie within 64-bit integers, got {spec.value_range}")
    items = rng.integers(low, high + 1, size=spec.n_items).tolist()
    planted = rng.integers(0, 2, size=spec.n_items, dtype=np.int8)
    target = sum(value for value, bit in zip(items, planted) if bit)
    problem = SubsetSumProblem(items, target)
    info = {
        "planted_mask": planted.tolist(),
        "planted_subset": problem.decode(planted),
        "seed": spec.seed,
    }
    return problem, info


# Sample instance bundled with the swarm console program.
DEMO_ITEMS = [
    3, 34, 4, 12, 5, 2, 25, 31, 60, 91, 47, 73, 17, 53, 28, 39, 67, 80, 36, 50,
    15, 95, 44, 78, 20, 10, 13, 56, 89, 14, 38, 70, 9, 40, 22, 7, 76, 58, 49, 85,
]
DEMO_TARGET = 300


def demo_problem() -> SubsetSumProblem:
    return SubsetSumProblem(DEMO_ITEMS, DEMO_TARGET)
