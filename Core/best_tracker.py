"""Stable extremum scan shared by the population-based solvers."""

from typing import Callable, Iterable, Tuple, TypeVar

T = TypeVar("T")


def find_best(items: Iterable[T], key: Callable[[T], float], *, minimize: bool = True) -> Tuple[int, T]:
    """
    Return ``(index, item)`` of the extremal element of ``items``.

    The first element seeds the extremum and a later element replaces it only
    when its key is strictly better, so ties resolve to the earliest element.

    Args:
        items: Collection to scan, in order.
        key: Maps an element to the value being compared (usually its fitness).
        minimize: True when lower values are better, False when higher are.

    Raises:
        ValueError: if ``items`` is empty.
    """
    best_index = -1
    best_item = None
    best_value = None
    for index, item in enumerate(items):
        value = key(item)
        if best_index < 0 or (value < best_value if minimize else value > best_value):
            best_index, best_item, best_value = index, item, value
    if best_index < 0:
        raise ValueError("cannot select the best element of an empty collection")
    return best_index, best_item
