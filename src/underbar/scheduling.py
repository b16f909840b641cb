"""
underbar Scheduling.

Provides the timer facility used by ``delay`` and the throttle wrappers.
The decorators only rely on the ``Scheduler`` protocol: "run this callback
no earlier than N milliseconds from now". Several implementations are
provided for threads, asyncio event loops and deterministic tests.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from underbar.utils.errors import SchedulerError

logger = logging.getLogger(__name__)

# How often a pending loop callback checks whether its loop has gone away
_HANDOFF_POLL_MS = 10


def _seconds(delay_ms: float) -> float:
    """Convert a delay in milliseconds to seconds, clamping negatives to zero."""
    return max(0.0, delay_ms) / 1000


def _describe(callback: Callable[..., Any]) -> str:
    return getattr(callback, "__qualname__", None) or repr(callback)


# =============================================================================
# Protocol
# =============================================================================


@runtime_checkable
class Scheduler(Protocol):
    """Minimal interface for deferred callback execution."""

    def call_later(self, delay_ms: float, callback: Callable[..., Any], *args: Any) -> None:
        """Run callback(*args) no earlier than delay_ms milliseconds from now."""
        ...


# =============================================================================
# Real-time Schedulers
# =============================================================================


class ThreadingScheduler:
    """Runs callbacks on daemon ``threading.Timer`` threads."""

    def call_later(self, delay_ms: float, callback: Callable[..., Any], *args: Any) -> None:
        timer = threading.Timer(_seconds(delay_ms), self._run, args=(callback, args))
        timer.daemon = True
        logger.debug(f"Timer thread scheduled {_describe(callback)} in {delay_ms}ms")
        timer.start()

    @staticmethod
    def _run(callback: Callable[..., Any], args: tuple[Any, ...]) -> None:
        # Nobody is left to receive the error on a timer thread
        try:
            callback(*args)
        except Exception:
            logger.exception(f"Scheduled callback {_describe(callback)} raised")


class EventLoopScheduler:
    """
    Runs callbacks through an asyncio event loop's ``call_later``.

    Without an explicit loop, the loop running in the calling thread is
    used at scheduling time.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay_ms: float, callback: Callable[..., Any], *args: Any) -> None:
        loop = self._loop if self._loop is not None else self._running_loop()
        logger.debug(f"Event loop scheduled {_describe(callback)} in {delay_ms}ms")
        loop.call_later(_seconds(delay_ms), callback, *args)

    @staticmethod
    def _running_loop() -> asyncio.AbstractEventLoop:
        try:
            return asyncio.get_running_loop()
        except RuntimeError as exc:
            raise SchedulerError(
                "No running event loop; pass one explicitly or schedule from a coroutine",
                operation="call_later",
            ) from exc


class _LoopHandoff:
    """
    A callback scheduled on an event loop that still runs if the loop stops.

    The loop runs it when due. A timer thread set for the same time runs it
    instead once the loop is no longer running, and checks back every
    ``_HANDOFF_POLL_MS`` while the loop is alive. Whichever side gets there
    first runs the callback; the other does nothing.
    """

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        callback: Callable[..., Any],
        args: tuple[Any, ...],
    ) -> None:
        self._loop = loop
        self._callback = callback
        self._args = args
        self._lock = threading.Lock()
        self._done = False

    def schedule(self, delay_ms: float) -> None:
        self._loop.call_later(_seconds(delay_ms), self._from_loop)
        self._arm(delay_ms)

    def _arm(self, delay_ms: float) -> None:
        timer = threading.Timer(_seconds(delay_ms), self._from_thread)
        timer.daemon = True
        timer.start()

    def _claim(self) -> bool:
        with self._lock:
            if self._done:
                return False
            self._done = True
            return True

    def _from_loop(self) -> None:
        if self._claim():
            self._callback(*self._args)

    def _from_thread(self) -> None:
        if self._done:
            return
        if self._loop.is_running() and not self._loop.is_closed():
            self._arm(_HANDOFF_POLL_MS)
            return
        if self._claim():
            logger.debug(f"Event loop gone, running {_describe(self._callback)} on a timer thread")
            ThreadingScheduler._run(self._callback, self._args)


class AutoScheduler:
    """
    Uses the running event loop when there is one, timer threads otherwise.

    A callback scheduled on a loop still runs, on a timer thread, if the
    loop stops or closes before it is due, so a throttle's cooldown always
    ends. This is the process default.
    """

    def __init__(self) -> None:
        self._threads = ThreadingScheduler()

    def call_later(self, delay_ms: float, callback: Callable[..., Any], *args: Any) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._threads.call_later(delay_ms, callback, *args)
            return
        logger.debug(f"Event loop scheduled {_describe(callback)} in {delay_ms}ms")
        _LoopHandoff(loop, callback, args).schedule(delay_ms)


# =============================================================================
# Virtual Clock
# =============================================================================


@dataclass(order=True)
class _PendingCall:
    due: float
    sequence: int
    callback: Callable[..., Any] = field(compare=False)
    args: tuple[Any, ...] = field(compare=False, default=())


class ManualScheduler:
    """
    A scheduler driven by a virtual clock.

    Nothing runs until ``advance`` moves the clock forward. Callbacks run in
    due-time order, and in scheduling order when due at the same time.

    Example:
        clock = ManualScheduler()
        clock.call_later(100, print, "done")
        clock.advance(99)   # nothing
        clock.advance(1)    # prints "done"
    """

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now = start_ms
        self._pending: list[_PendingCall] = []
        self._sequence = itertools.count()

    @property
    def now(self) -> float:
        """Current virtual time in milliseconds."""
        return self._now

    @property
    def pending(self) -> int:
        """Number of callbacks waiting to run."""
        return len(self._pending)

    def call_later(self, delay_ms: float, callback: Callable[..., Any], *args: Any) -> None:
        due = self._now + max(0.0, delay_ms)
        self._pending.append(_PendingCall(due, next(self._sequence), callback, args))
        self._pending.sort()

    def advance(self, ms: float) -> int:
        """
        Move the clock forward by ms and run every callback that falls due.

        Callbacks scheduled while advancing run too if they fall inside the
        window. Exceptions raised by callbacks propagate to the caller.

        Returns:
            The number of callbacks run
        """
        if ms < 0:
            raise ValueError(f"Cannot move the clock backwards by {ms}ms")

        target = self._now + ms
        ran = 0
        while self._pending and self._pending[0].due <= target:
            call = self._pending.pop(0)
            self._now = call.due
            call.callback(*call.args)
            ran += 1
        self._now = target
        return ran

    def run_all(self) -> int:
        """Advance until no callbacks are pending. Returns the number run."""
        ran = 0
        while self._pending:
            ran += self.advance(self._pending[0].due - self._now)
        return ran
