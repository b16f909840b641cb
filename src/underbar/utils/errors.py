"""
Error types raised by the underbar library.
"""

from typing import Optional


class UnderbarError(Exception):
    """Base exception for all underbar errors."""

    def __init__(self, message: str, operation: Optional[str] = None) -> None:
        self.message = message
        self.operation = operation
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.operation:
            return f"[{self.operation}] {self.message}"
        return self.message


class CollectionShapeError(UnderbarError, TypeError):
    """Raised when a value is neither a sequence nor a mapping."""

    pass


class ZipArgumentError(UnderbarError, TypeError):
    """
    Raised when zip receives an argument that is not a sequence.

    Attributes:
        position: 0-indexed position of the offending argument
    """

    def __init__(self, message: str, position: int) -> None:
        self.position = position
        super().__init__(message, operation="zip")


class MemoizeKeyError(UnderbarError, ValueError):
    """
    Raised when a memoized call's arguments cannot be turned into a cache key.

    This happens for cyclic structures and for mappings whose keys cannot
    be serialized. The original serialization error is chained as the cause.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message, operation="memoize")


class SchedulerError(UnderbarError, RuntimeError):
    """Raised when a scheduler cannot run a callback later."""

    pass
