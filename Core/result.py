from dataclasses import dataclass, field
from typing import List


@dataclass
class SolveResult:
    """Outcome of a single solver run, handed back to the calling shell."""
    algorithm: str
    representation: List[int]
    subset: List[int]
    subset_sum: int
    fitness: float
    iterations: int
    solved: bool
    history: List[float] = field(default_factory=list)

    def summary(self) -> str:
        return (f"[{self.algorithm}] fitness={self.fitness} sum={self.subset_sum} "
                f"iterations={self.iterations} solved={self.solved} subset={self.subset}")
