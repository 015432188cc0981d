"""
Domain models and value objects.

Contains the fixed-width time values: Timestamp, TimeDelta, TimeRange.
"""

from fast_utc.core.domain.time_delta import TimeDelta
from fast_utc.core.domain.time_range import TimeRange, TimeRangeSpec
from fast_utc.core.domain.timestamp import Timestamp
from fast_utc.core.domain.units import (
    ACTIVE_CONFIG,
    DATETIME_MAX_UTC,
    EPOCH,
    MILLISECOND_SCALE,
    NANOSECOND_SCALE,
    UNITS,
    UnitScale,
    scale_for,
)

__all__ = [
    # Units module
    "ACTIVE_CONFIG",
    "DATETIME_MAX_UTC",
    "EPOCH",
    "MILLISECOND_SCALE",
    "NANOSECOND_SCALE",
    "UNITS",
    "UnitScale",
    "scale_for",
    # Value types
    "Timestamp",
    "TimeDelta",
    # Range
    "TimeRange",
    "TimeRangeSpec",
]
