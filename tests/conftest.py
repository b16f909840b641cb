"""
Pytest configuration and shared fixtures for underbar tests.
"""

from dataclasses import dataclass, field
from typing import Any

import pytest

from underbar.config import reset_config
from underbar.scheduling import ManualScheduler


@pytest.fixture(autouse=True)
def fresh_config():
    """Restore the default configuration around every test."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def clock():
    """A virtual clock scheduler starting at 0ms."""
    return ManualScheduler()


@dataclass
class Spy:
    """
    A callable that records every call it receives.

    Returns ``returns`` if set, else the number of calls so far.
    """

    returns: Any = None
    calls: list[tuple[tuple[Any, ...], dict[str, Any]]] = field(default_factory=list)

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        self.calls.append((args, kwargs))
        if self.returns is not None:
            return self.returns
        return len(self.calls)

    @property
    def call_count(self) -> int:
        return len(self.calls)

    @property
    def last_args(self) -> tuple[Any, ...]:
        return self.calls[-1][0]


@pytest.fixture
def spy_factory():
    """Factory fixture for creating call-recording spies."""

    def _create_spy(returns: Any = None) -> Spy:
        return Spy(returns=returns)

    return _create_spy
