"""
fast_utc — быстрые UTC-метки времени фиксированной точности

Timestamp (u64 от эпохи), TimeDelta (i64) и TimeRange (ленивый диапазон)
в наносекундах или миллисекундах (FAST_UTC_PRECISION).
"""

from fast_utc.clock import (
    force_refresh,
    init_clock_from_config,
    init_coarse_clock,
    shutdown_coarse_clock,
)
from fast_utc.core.config import ClockMode, FastUtcConfig, Precision, load_config
from fast_utc.core.domain import (
    UNITS,
    TimeDelta,
    TimeRange,
    TimeRangeSpec,
    Timestamp,
)

__all__ = [
    # Value types
    "Timestamp",
    "TimeDelta",
    "TimeRange",
    "TimeRangeSpec",
    # Config
    "ClockMode",
    "FastUtcConfig",
    "Precision",
    "UNITS",
    "load_config",
    # Clock
    "force_refresh",
    "init_clock_from_config",
    "init_coarse_clock",
    "shutdown_coarse_clock",
]
