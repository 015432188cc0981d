"""Clock — источник текущего времени (точные или coarse-часы).

- exact: системные часы на каждый вызов
- coarse: кэш с фоновым обновлением и явным жизненным циклом
"""

from .source import (
    ClockAlreadyInitializedError,
    ClockNotInitializedError,
    ClockUpdater,
    CoarseClock,
    current_clock_mode,
    exact_now_nanoseconds,
    force_refresh,
    init_clock_from_config,
    init_coarse_clock,
    now_nanoseconds,
    shutdown_coarse_clock,
)

__all__ = [
    "ClockAlreadyInitializedError",
    "ClockNotInitializedError",
    "ClockUpdater",
    "CoarseClock",
    "current_clock_mode",
    "exact_now_nanoseconds",
    "force_refresh",
    "init_clock_from_config",
    "init_coarse_clock",
    "now_nanoseconds",
    "shutdown_coarse_clock",
]
