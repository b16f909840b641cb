"""
underbar Arrays Module.

Operations that only make sense for ordered sequences.
"""

from __future__ import annotations

from typing import Any

from underbar.collections import contains, each, every, reduce, some
from underbar.shapes import is_sequence, strict_equal
from underbar.utils.errors import ZipArgumentError


# =============================================================================
# Access
# =============================================================================


def first(array: Any, n: int | None = None) -> Any:
    """
    Return the first element, or a list of the first n elements.

    Example:
        first([1, 2, 3]) -> 1
        first([1, 2, 3], 2) -> [1, 2]
        first([]) -> None
    """
    if n is None:
        return array[0] if len(array) else None
    return list(array[: max(0, n)])


def last(array: Any, n: int | None = None) -> Any:
    """
    Return the last element, or a list of the last n elements in order.

    Example:
        last([1, 2, 3]) -> 3
        last([1, 2, 3], 2) -> [2, 3]
    """
    if n is None:
        return array[-1] if len(array) else None
    return list(array[max(0, len(array) - n) :])


def index_of(array: Any, target: Any) -> int:
    """Find the first index holding target, -1 if not found."""
    found = -1

    def check(value: Any, index: int) -> None:
        nonlocal found
        if found == -1 and strict_equal(value, target):
            found = index

    each(array, check)
    return found


# =============================================================================
# Set-like Operations
# =============================================================================


def intersection(array: Any, *others: Any) -> list[Any]:
    """
    Values of array that appear in every other array.

    Order follows array; duplicates are collapsed.

    Example:
        intersection([1, 2, 3], [2, 3, 4]) -> [2, 3]
    """
    result: list[Any] = []
    for value in array:
        if contains(result, value):
            continue
        if every(others, lambda other: contains(other, value)):
            result.append(value)
    return result


def difference(array: Any, *others: Any) -> list[Any]:
    """
    Values of array absent from all of the other arrays.

    Order follows array; duplicates are collapsed.

    Example:
        difference([1, 2, 3], [2]) -> [1, 3]
    """
    result: list[Any] = []
    for value in array:
        if contains(result, value):
            continue
        if not some(others, lambda other: contains(other, value)):
            result.append(value)
    return result


# =============================================================================
# Combination
# =============================================================================


def zip(*arrays: Any) -> list[list[Any]]:
    """
    Group the elements of several arrays by index.

    The result is as long as the longest array; shorter arrays contribute
    None past their end.

    Example:
        zip([1, 2], [3, 4], [5, 6]) -> [[1, 3, 5], [2, 4, 6]]

    Raises:
        ZipArgumentError: If any argument is not a sequence
    """
    for position, array in enumerate(arrays):
        if not is_sequence(array):
            raise ZipArgumentError(
                f"Argument {position} is {type(array).__name__}, not a sequence",
                position=position,
            )

    longest = max((len(array) for array in arrays), default=0)
    return [
        [array[i] if i < len(array) else None for array in arrays]
        for i in range(longest)
    ]


def flatten(nested: Any, shallow: bool = False) -> list[Any]:
    """
    Flatten nested sequences into one list, depth-first.

    With shallow set only one level of nesting is removed.

    Example:
        flatten([1, [2, [3, [4]]]]) -> [1, 2, 3, 4]
        flatten([1, [2, [3]]], True) -> [1, 2, [3]]
    """

    def fold(flat: list[Any], value: Any) -> list[Any]:
        if is_sequence(value):
            flat.extend(value if shallow else flatten(value))
        else:
            flat.append(value)
        return flat

    return reduce(nested, fold, [])
