"""
Collection shapes.

Every collection operation distinguishes between two shapes of input: an
ordered sequence (addressed by index) and a key-value mapping. ``Shape``
is the tagged union over those two cases; it enumerates entries and builds
results of the same shape so that derived operations never inspect types
themselves.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from enum import Enum, auto
from typing import Any

import numpy as np

from underbar.utils.errors import CollectionShapeError

_TEXT_TYPES = (str, bytes, bytearray)


def is_sequence(value: Any) -> bool:
    """
    Return True if value is an array-shaped sequence.

    Lists, tuples, other ``Sequence`` implementations and numpy arrays of at
    least one dimension count. Strings and bytes do not.
    """
    if isinstance(value, np.ndarray):
        return value.ndim >= 1
    return isinstance(value, Sequence) and not isinstance(value, _TEXT_TYPES)


def is_mapping(value: Any) -> bool:
    """Return True if value is a key-value mapping."""
    return isinstance(value, Mapping)


class Shape(Enum):
    """The two shapes a collection can take."""

    SEQUENCE = auto()
    MAPPING = auto()

    def entries(self, collection: Any) -> Iterable[tuple[Any, Any]]:
        """Yield (key, value) pairs: (index, element) for sequences."""
        if self is Shape.SEQUENCE:
            return enumerate(collection)
        return list(collection.items())

    def values(self, collection: Any) -> list[Any]:
        """Return the collection's values in iteration order."""
        if self is Shape.SEQUENCE:
            return list(collection)
        return list(collection.values())

    def empty(self) -> list[Any] | dict[Any, Any]:
        """Create an empty result of this shape."""
        if self is Shape.SEQUENCE:
            return []
        return {}

    def put(self, result: Any, key: Any, value: Any) -> None:
        """
        Add an entry to a result built by ``empty``.

        Sequences ignore the key and append, which re-indexes the result.
        """
        if self is Shape.SEQUENCE:
            result.append(value)
        else:
            result[key] = value


def shape_of(collection: Any) -> Shape:
    """
    Classify a collection.

    Raises:
        CollectionShapeError: If collection is neither a sequence nor a mapping
    """
    if is_sequence(collection):
        return Shape.SEQUENCE
    if is_mapping(collection):
        return Shape.MAPPING
    raise CollectionShapeError(
        f"Expected a sequence or a mapping, got {type(collection).__name__}"
    )


def strict_equal(a: Any, b: Any) -> bool:
    """
    Identity, or equal values of exactly the same type.

    ``1``, ``1.0`` and ``True`` are distinct; two equal lists are not.
    """
    if a is b:
        return True
    if type(a) is not type(b):
        return False
    if isinstance(a, np.ndarray):
        return bool(np.array_equal(a, b))
    return bool(a == b)


def get_field(record: Any, key: Any) -> Any:
    """
    Read a field from a record, returning None when it is absent.

    Mappings are read by item, sequences by integer index, and anything
    else by attribute name.
    """
    if is_mapping(record):
        return record.get(key)
    if is_sequence(record) and isinstance(key, int):
        if -len(record) <= key < len(record):
            return record[key]
        return None
    if isinstance(key, str):
        return getattr(record, key, None)
    return None
