"""
underbar utilities package.

Error types and callback helpers shared by the collection and function modules.
"""

from underbar.utils.callbacks import adapt, call_with_arity, positional_arity
from underbar.utils.errors import (
    CollectionShapeError,
    MemoizeKeyError,
    SchedulerError,
    UnderbarError,
    ZipArgumentError,
)

__all__ = [
    # Errors
    "UnderbarError",
    "CollectionShapeError",
    "ZipArgumentError",
    "MemoizeKeyError",
    "SchedulerError",
    # Callbacks
    "adapt",
    "call_with_arity",
    "positional_arity",
]
