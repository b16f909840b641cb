"""
underbar Objects Module.

Shallow merging of mappings. Both helpers mutate their first argument and
return it.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any, TypeVar

from underbar.collections import each

M = TypeVar("M", bound=MutableMapping[Any, Any])


def extend(target: M, *sources: Mapping[Any, Any]) -> M:
    """
    Copy every key of each source onto target, later sources winning.

    Example:
        extend({"a": 1}, {"a": 2, "b": 2}, {"b": 3}) -> {"a": 2, "b": 3}
    """

    def assign(value: Any, key: Any) -> None:
        target[key] = value

    for source in sources:
        each(source, assign)
    return target


def defaults(target: M, *sources: Mapping[Any, Any]) -> M:
    """
    Fill in keys missing from target, never overwriting one already present.

    Example:
        defaults({"a": 1}, {"a": 2, "b": 2}, {"b": 3}) -> {"a": 1, "b": 2}
    """

    def fill(value: Any, key: Any) -> None:
        if key not in target:
            target[key] = value

    for source in sources:
        each(source, fill)
    return target
