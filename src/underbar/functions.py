"""
underbar Functions Module.

Function decorators: each factory takes a function and returns a wrapper
object with modified invocation semantics. Every wrapper owns its state
privately, so two wrappers around the same function never interact.
"""

from __future__ import annotations

import dataclasses
import functools
import json
import logging
import types
from collections.abc import Callable
from typing import Any

import numpy as np

from underbar.config import get_config
from underbar.scheduling import Scheduler
from underbar.utils.errors import MemoizeKeyError

logger = logging.getLogger(__name__)


def _name(func: Callable[..., Any]) -> str:
    return getattr(func, "__qualname__", None) or repr(func)


class _KeyEncoder:
    """
    JSON fallback for values in a cache key.

    Objects are encoded by their state: dataclass fields, or the instance
    ``__dict__``, tagged with the type. Values without state (functions,
    classes, slotted or empty objects) fall back to their ``repr``, which
    usually holds an address; ``opaque`` records that such a key is only
    valid while the argument stays alive.
    """

    def __init__(self) -> None:
        self.opaque = False

    def __call__(self, value: Any) -> Any:
        if isinstance(value, np.ndarray):
            return value.tolist()
        if isinstance(value, (set, frozenset)):
            items = (json.dumps(item, sort_keys=True, default=self) for item in value)
            return {"__set__": sorted(items)}

        kind = f"{type(value).__module__}.{type(value).__qualname__}"
        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            fields = {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
            return {"__type__": kind, **fields}
        state = getattr(value, "__dict__", None)
        if state and not callable(value) and not isinstance(value, types.ModuleType):
            return {"__type__": kind, **state}

        self.opaque = True
        return repr(value)


# =============================================================================
# Once
# =============================================================================


class Once:
    """
    Calls the wrapped function on first use only.

    Later calls return the first result whatever their arguments. If the
    first call raises, nothing is cached and the next call tries again.
    """

    def __init__(self, func: Callable[..., Any]) -> None:
        functools.update_wrapper(self, func)
        self._func = func
        self._called = False
        self._result: Any = None

    @property
    def called(self) -> bool:
        """Whether the wrapped function has run."""
        return self._called

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        if not self._called:
            self._result = self._func(*args, **kwargs)
            self._called = True
        return self._result

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        # Bind the receiver when used as a method
        if instance is None:
            return self
        return types.MethodType(self, instance)


def once(func: Callable[..., Any]) -> Once:
    """Return a wrapper that calls func at most once."""
    return Once(func)


# =============================================================================
# Memoize
# =============================================================================


class Memoized:
    """
    Caches results by argument list.

    The positional and keyword arguments are serialized to JSON (mapping
    keys sorted) so that structurally equal argument lists share a cache
    entry. Numpy arrays contribute their elements and other objects their
    state. Arguments keyed by ``repr`` are kept alive with the cached
    result so their address cannot be reused. The cache is unbounded.
    """

    def __init__(
        self,
        func: Callable[..., Any],
        hasher: Callable[..., Any] | None = None,
    ) -> None:
        functools.update_wrapper(self, func)
        self._func = func
        self._hasher = hasher
        self._cache: dict[Any, Any] = {}

    @property
    def cache_size(self) -> int:
        """Number of cached results."""
        return len(self._cache)

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        key, opaque = self._key(args, kwargs)
        if key in self._cache:
            return self._cache[key][0]

        logger.debug(f"Cache miss for {_name(self._func)}")
        result = self._func(*args, **kwargs)
        self._cache[key] = (result, (args, kwargs) if opaque else None)
        return result

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return types.MethodType(self, instance)

    def _key(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> tuple[Any, bool]:
        if self._hasher is not None:
            return self._hasher(*args, **kwargs), False
        encoder = _KeyEncoder()
        try:
            key = json.dumps([args, kwargs], sort_keys=True, default=encoder)
        except (TypeError, ValueError, RecursionError) as exc:
            raise MemoizeKeyError(
                f"Cannot build a cache key for {_name(self._func)}: {exc}"
            ) from exc
        return key, encoder.opaque


def memoize(func: Callable[..., Any], hasher: Callable[..., Any] | None = None) -> Memoized:
    """
    Return a caching wrapper around func.

    Args:
        func: Function whose results are cached
        hasher: Optional function computing the cache key from the call's
            arguments, replacing the JSON serialization

    Raises (from the wrapper):
        MemoizeKeyError: If the arguments cannot be serialized, e.g. cycles
    """
    return Memoized(func, hasher)


# =============================================================================
# Delay
# =============================================================================


def delay(
    func: Callable[..., Any],
    wait: float,
    *args: Any,
    scheduler: Scheduler | None = None,
) -> None:
    """
    Call func(*args) once, no earlier than wait milliseconds from now.

    Returns immediately. There is no way to cancel the call.

    Example:
        delay(print, 500, "a", "b")   # prints "a b" after 500ms
    """
    target = scheduler or get_config().scheduler
    target.call_later(wait, func, *args)


# =============================================================================
# Throttle
# =============================================================================


class Throttled:
    """
    Leading-edge throttle with a fixed cooldown.

    A call outside the cooldown runs the wrapped function immediately and
    starts a cooldown of ``wait`` milliseconds. Calls during the cooldown
    are dropped and return the last result. This behaves like a
    leading-edge debounce rather than a sliding-window throttle.
    """

    def __init__(self, func: Callable[..., Any], wait: float, scheduler: Scheduler) -> None:
        functools.update_wrapper(self, func)
        self._func = func
        self._wait = wait
        self._scheduler = scheduler
        self._cooling = False
        self._result: Any = None

    @property
    def cooling(self) -> bool:
        """Whether the wrapper is in its cooldown."""
        return self._cooling

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        if self._cooling:
            logger.debug(f"Dropped call to {_name(self._func)} during cooldown")
            return self._result
        return self._fire(args, kwargs)

    def _fire(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
        self._result = self._func(*args, **kwargs)
        self._cooling = True
        self._scheduler.call_later(self._wait, self._end_cooldown)
        return self._result

    def _end_cooldown(self) -> None:
        logger.debug(f"Cooldown over for {_name(self._func)}")
        self._cooling = False


class TrailingThrottled(Throttled):
    """
    Throttle that also runs the last call received during a cooldown.

    The queued call runs when the cooldown ends and starts a new cooldown.
    Each call made during a cooldown replaces the one queued before it.
    """

    def __init__(self, func: Callable[..., Any], wait: float, scheduler: Scheduler) -> None:
        super().__init__(func, wait, scheduler)
        self._queued: tuple[tuple[Any, ...], dict[str, Any]] | None = None

    @property
    def queued(self) -> bool:
        """Whether a call is waiting for the cooldown to end."""
        return self._queued is not None

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        if self._cooling:
            self._queued = (args, kwargs)
            return self._result
        return self._fire(args, kwargs)

    def _end_cooldown(self) -> None:
        super()._end_cooldown()
        if self._queued is not None:
            args, kwargs = self._queued
            self._queued = None
            self._fire(args, kwargs)


def throttle(
    func: Callable[..., Any],
    wait: float,
    scheduler: Scheduler | None = None,
) -> Throttled:
    """
    Return a wrapper that runs func at most once per wait milliseconds.

    Calls made during the cooldown are dropped, not queued.
    """
    return Throttled(func, wait, scheduler or get_config().scheduler)


def throttle_trailing(
    func: Callable[..., Any],
    wait: float,
    scheduler: Scheduler | None = None,
) -> TrailingThrottled:
    """
    Return a throttle that replays the last dropped call once the cooldown ends.
    """
    return TrailingThrottled(func, wait, scheduler or get_config().scheduler)
