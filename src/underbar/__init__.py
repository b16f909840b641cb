"""
underbar - A small functional-utility library.

Generic operations over sequences and mappings, a few array and object
helpers, and function decorators for memoization, one-shot invocation,
delayed and throttled calls. Everything is exported from this flat
namespace:

    import underbar as _

    _.map({"a": 1, "b": 2}, lambda x: x * 2)   # {"a": 2, "b": 4}
"""

from underbar.arrays import (
    difference,
    first,
    flatten,
    index_of,
    intersection,
    last,
    zip,
)
from underbar.collections import (
    contains,
    each,
    every,
    filter,
    identity,
    invoke,
    map,
    pluck,
    reduce,
    reject,
    shuffle,
    some,
    sort_by,
    uniq,
)
from underbar.config import UnderbarConfig, configure, configure_logging, get_config, reset_config
from underbar.functions import (
    Memoized,
    Once,
    Throttled,
    TrailingThrottled,
    delay,
    memoize,
    once,
    throttle,
    throttle_trailing,
)
from underbar.objects import defaults, extend
from underbar.random import set_seed
from underbar.scheduling import (
    AutoScheduler,
    EventLoopScheduler,
    ManualScheduler,
    Scheduler,
    ThreadingScheduler,
)
from underbar.shapes import Shape, shape_of
from underbar.utils.errors import (
    CollectionShapeError,
    MemoizeKeyError,
    SchedulerError,
    UnderbarError,
    ZipArgumentError,
)

__version__ = "0.1.0"
__all__ = [
    # Utility
    "identity",
    # Collections
    "each",
    "map",
    "filter",
    "reject",
    "reduce",
    "contains",
    "every",
    "some",
    "pluck",
    "invoke",
    "sort_by",
    "uniq",
    "shuffle",
    # Arrays
    "first",
    "last",
    "index_of",
    "intersection",
    "difference",
    "zip",
    "flatten",
    # Objects
    "extend",
    "defaults",
    # Functions
    "once",
    "memoize",
    "delay",
    "throttle",
    "throttle_trailing",
    "Once",
    "Memoized",
    "Throttled",
    "TrailingThrottled",
    # Collaborators
    "Scheduler",
    "AutoScheduler",
    "EventLoopScheduler",
    "ManualScheduler",
    "ThreadingScheduler",
    "set_seed",
    # Configuration
    "UnderbarConfig",
    "configure",
    "configure_logging",
    "get_config",
    "reset_config",
    # Shapes
    "Shape",
    "shape_of",
    # Errors
    "UnderbarError",
    "CollectionShapeError",
    "ZipArgumentError",
    "MemoizeKeyError",
    "SchedulerError",
]
