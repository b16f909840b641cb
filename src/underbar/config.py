"""
underbar Configuration.

Process-wide defaults for the collaborators the library consumes: the
scheduler used by ``delay`` and the throttles, and the random source used
by ``shuffle``. Nothing is read from the environment or from files.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field, fields, replace
from typing import Any

from underbar.random import get_rng
from underbar.scheduling import AutoScheduler, Scheduler

LOG_LEVELS = ("debug", "info", "warning", "error")
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@dataclass
class UnderbarConfig:
    """
    Defaults applied when an operation is not given a collaborator explicitly.

    Example:
        configure(scheduler=ManualScheduler())
        throttled = throttle(save, 100)   # cools down on the manual clock
    """

    scheduler: Scheduler = field(default_factory=AutoScheduler)
    rng: random.Random = field(default_factory=get_rng)


_config = UnderbarConfig()


def get_config() -> UnderbarConfig:
    """Return the active configuration."""
    return _config


def configure(**overrides: Any) -> UnderbarConfig:
    """
    Replace fields of the active configuration.

    Raises:
        TypeError: If an override does not name a configuration field
    """
    global _config

    known = {f.name for f in fields(UnderbarConfig)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise TypeError(f"Unknown configuration option(s): {', '.join(unknown)}")

    _config = replace(_config, **overrides)
    return _config


def reset_config() -> UnderbarConfig:
    """Restore the default configuration."""
    global _config
    _config = UnderbarConfig()
    return _config


def configure_logging(level: str = "info") -> None:
    """
    Send underbar's log records to stderr at the given level.

    The library never installs handlers on import; applications that want
    its debug output call this once.
    """
    if level.lower() not in LOG_LEVELS:
        raise ValueError(f"Unknown log level {level!r}; expected one of {', '.join(LOG_LEVELS)}")

    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    logging.getLogger("underbar").setLevel(getattr(logging, level.upper()))
