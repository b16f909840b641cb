"""
underbar Collections Module.

Generic operations over collections: ordered sequences or key-value
mappings. ``each`` is the only function that walks a collection; every
other operation here is built on top of it, or on ``reduce``.

Callbacks receive ``(value, key)`` (``each`` adds the collection itself)
and may declare fewer parameters than that.
"""

from __future__ import annotations

import random
from collections.abc import Callable
from typing import Any

from underbar.config import get_config
from underbar.random import random_shuffle
from underbar.shapes import get_field, is_mapping, shape_of, strict_equal
from underbar.utils.callbacks import adapt

# Marks an omitted accumulator, so that None, 0 and "" remain valid seeds
_MISSING = object()


def identity(value: Any) -> Any:
    """Return value unchanged."""
    return value


# =============================================================================
# Iteration
# =============================================================================


def each(collection: Any, iterator: Callable[..., Any]) -> None:
    """
    Call iterator(value, key, collection) for each entry of collection.

    Sequences are visited in index order with the index as key; mappings in
    their iteration order with the mapping key.
    """
    shape = shape_of(collection)
    callback = adapt(iterator, 3)
    for key, value in shape.entries(collection):
        callback(value, key, collection)


# =============================================================================
# Transformation
# =============================================================================


def map(collection: Any, iterator: Callable[..., Any]) -> list[Any] | dict[Any, Any]:
    """
    Apply iterator(value, key) to each entry, keeping the collection's shape.

    Example:
        map([1, 2, 3], lambda x: x * 2) -> [2, 4, 6]
        map({"a": 1, "b": 2}, lambda x: x * 2) -> {"a": 2, "b": 4}
    """
    shape = shape_of(collection)
    transform = adapt(iterator, 2)
    result = shape.empty()

    def collect(value: Any, key: Any) -> None:
        shape.put(result, key, transform(value, key))

    each(collection, collect)
    return result


def filter(collection: Any, predicate: Callable[..., Any]) -> list[Any] | dict[Any, Any]:
    """
    Keep the entries for which predicate(value, key) is truthy.

    Sequences are re-indexed in their original order; mappings keep their keys.
    """
    shape = shape_of(collection)
    test = adapt(predicate, 2)
    result = shape.empty()

    def collect(value: Any, key: Any) -> None:
        if test(value, key):
            shape.put(result, key, value)

    each(collection, collect)
    return result


def reject(collection: Any, predicate: Callable[..., Any]) -> list[Any] | dict[Any, Any]:
    """Keep the entries for which predicate(value, key) is falsy."""
    test = adapt(predicate, 2)
    return filter(collection, lambda value, key: not test(value, key))


def pluck(collection: Any, key: Any) -> list[Any] | dict[Any, Any]:
    """
    Extract one field from each record.

    Example:
        pluck([{"name": "moe"}, {"name": "curly"}], "name") -> ["moe", "curly"]
    """
    return map(collection, lambda record: get_field(record, key))


def invoke(
    collection: Any,
    method_or_function: str | Callable[..., Any],
    args: list[Any] | tuple[Any, ...] | None = None,
) -> list[Any] | dict[Any, Any]:
    """
    Call a method on, or a function with, each element.

    A string names a method resolved on each element (an attribute, or an
    item for mappings) and called with ``*args``. A callable is called as
    ``method_or_function(element, *args)``. A resolved value that is not
    callable is returned as-is.

    Example:
        invoke(["a", "b"], "upper") -> ["A", "B"]
        invoke([[3, 1], [2, 0]], sorted) -> [[1, 3], [0, 2]]
    """
    call_args = tuple(args) if isinstance(args, (list, tuple)) else ()

    if isinstance(method_or_function, str):
        name = method_or_function

        def call(element: Any) -> Any:
            target = _resolve_method(element, name)
            return target(*call_args) if callable(target) else target

    else:

        def call(element: Any) -> Any:
            if callable(method_or_function):
                return method_or_function(element, *call_args)
            return method_or_function

    return map(collection, call)


def _resolve_method(element: Any, name: str) -> Any:
    method = getattr(element, name, _MISSING)
    if method is not _MISSING:
        return method
    if is_mapping(element):
        return element.get(name)
    return None


# =============================================================================
# Aggregation
# =============================================================================


def reduce(collection: Any, iterator: Callable[[Any, Any], Any], accumulator: Any = _MISSING) -> Any:
    """
    Fold collection from the left with iterator(accumulator, value).

    When accumulator is omitted the first value seeds it and is not passed
    through iterator. An empty collection without a seed reduces to None.

    Example:
        reduce([1, 2, 3], lambda a, b: a + b) -> 6
        reduce([1, 2, 3], lambda a, b: a + b, 10) -> 16
    """
    step = adapt(iterator, 2)
    result = accumulator
    seeded = accumulator is not _MISSING

    def fold(value: Any) -> None:
        nonlocal result, seeded
        if not seeded:
            result = value
            seeded = True
        else:
            result = step(result, value)

    each(collection, fold)
    return None if result is _MISSING else result


def contains(collection: Any, target: Any) -> bool:
    """Return True if some value is strictly equal to target."""
    return reduce(
        collection,
        lambda found, value: found or strict_equal(value, target),
        False,
    )


def every(collection: Any, predicate: Callable[[Any], Any] | None = None) -> bool:
    """
    Return True if predicate(value) is truthy for every value.

    The predicate defaults to ``identity``. An empty collection passes.
    """
    test = predicate or identity
    return reduce(collection, lambda passed, value: passed and bool(test(value)), True)


def some(collection: Any, predicate: Callable[[Any], Any] | None = None) -> bool:
    """Return True if predicate(value) is truthy for at least one value."""
    test = predicate or identity
    return not every(collection, lambda value: not test(value))


# =============================================================================
# Ordering
# =============================================================================


def sort_by(collection: Any, criterion: str | int | Callable[..., Any]) -> list[Any]:
    """
    Return the collection's values stably sorted by a criterion.

    criterion is either a field name read from each value, or a function
    called as criterion(value, key). Values whose criterion is None sort
    last. Ties keep their original relative order.

    Example:
        sort_by([{"a": 3}, {"a": 1}, {"a": 2}], "a") -> [{"a": 1}, {"a": 2}, {"a": 3}]
    """
    shape = shape_of(collection)
    if callable(criterion):
        rank = adapt(criterion, 2)
    else:

        def rank(value: Any, key: Any) -> Any:
            return get_field(value, criterion)

    decorated = [
        (rank(value, key), position, value)
        for position, (key, value) in enumerate(shape.entries(collection))
    ]
    decorated.sort(key=_sort_key)
    return [value for _, _, value in decorated]


def _sort_key(entry: tuple[Any, int, Any]) -> tuple[bool, Any, int]:
    rank, position, _ = entry
    if rank is None:
        return (True, 0, position)
    return (False, rank, position)


# =============================================================================
# Distinct Values
# =============================================================================


def uniq(array: Any) -> list[Any]:
    """
    Return the first occurrence of each distinct value, in order.

    Example:
        uniq([1, 2, 2, 3, 1]) -> [1, 2, 3]
    """
    result: list[Any] = []

    def keep_first(value: Any) -> None:
        if not contains(result, value):
            result.append(value)

    each(array, keep_first)
    return result


def shuffle(array: Any, rng: random.Random | None = None) -> list[Any]:
    """
    Return a copy of array in a random order.

    When the values allow more than one distinguishable ordering, the
    result never matches the input order: the copy is re-shuffled until it
    differs. Otherwise a plain copy is returned.
    """
    source = shape_of(array).values(array)
    if not _has_distinct_orderings(source):
        return source

    generator = rng or get_config().rng
    while True:
        shuffled = random_shuffle(source, generator)
        if not _same_order(shuffled, source):
            return shuffled


def _has_distinct_orderings(values: list[Any]) -> bool:
    return any(not strict_equal(value, values[0]) for value in values[1:])


def _same_order(left: list[Any], right: list[Any]) -> bool:
    return all(strict_equal(a, b) for a, b in zip(left, right))
