"""Subset-sum problem model and instance helpers."""

from .subset_sum import (
    DEMO_ITEMS,
    DEMO_TARGET,
    SubsetSumProblem,
    SubsetSumSpec,
    demo_problem,
    generate_random_subset_sum,
)

__all__ = [
    "DEMO_ITEMS",
    "DEMO_TARGET",
    "SubsetSumProblem",
    "SubsetSumSpec",
    "demo_problem",
    "generate_random_subset_sum",
]
