"""
Callback arity adaptation.

Collection operations hand their callbacks ``(value, key, collection)``.
Python callables reject surplus positional arguments, so each callback is
adapted to receive only as many leading arguments as it requires.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any

_POSITIONAL_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def positional_arity(func: Callable[..., Any]) -> int | None:
    """
    Return how many positional arguments func is given.

    Only required parameters count, so optional ones such as ``round``'s
    ``ndigits`` or ``str.split``'s ``sep`` never receive an index or key.
    A callable whose positional parameters are all optional takes one.
    Returns None when func takes ``*args``. Callables without an
    introspectable signature (some builtins and C types) count as taking
    a single argument.
    """
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return 1

    required = 0
    optional = 0
    for param in signature.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return None
        if param.kind in _POSITIONAL_KINDS:
            if param.default is inspect.Parameter.empty:
                required += 1
            else:
                optional += 1
    if required == 0 and optional:
        return 1
    return required


def adapt(func: Callable[..., Any], max_args: int) -> Callable[..., Any]:
    """
    Wrap func so that calling it with up to max_args positional arguments
    only forwards the ones it accepts.
    """
    arity = positional_arity(func)
    if arity is None or arity >= max_args:
        return func

    def adapted(*args: Any) -> Any:
        return func(*args[:arity])

    return adapted


def call_with_arity(func: Callable[..., Any], *args: Any) -> Any:
    """Call func with the leading args it accepts."""
    return adapt(func, len(args))(*args)
