"""
TimeUnits — Централизованный модуль конверсии единиц времени

Единственный допустимый способ преобразований между:
- внутренними единицами (units) Timestamp/TimeDelta
- наносекундами / миллисекундами / секундами
- datetime.datetime / datetime.timedelta (граница с календарной библиотекой)

Точность (ns или ms) выбирается один раз при импорте модуля
(FAST_UTC_PRECISION) и дальше не меняется: UNITS является единственным
источником коэффициентов для всего пакета.

ЗАПРЕЩЕНО умножать/делить на коэффициенты единиц в обход этого модуля.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Final

from fast_utc.core.config import FastUtcConfig, Precision, load_config
from fast_utc.core.math.int_safeguards import div_trunc


# =============================================================================
# КОЭФФИЦИЕНТЫ
# =============================================================================

NANOS_PER_MICRO: Final[int] = 1_000
NANOS_PER_MILLI: Final[int] = 1_000_000
NANOS_PER_SECOND: Final[int] = 1_000_000_000
MICROS_PER_SECOND: Final[int] = 1_000_000
SECONDS_PER_MINUTE: Final[int] = 60
SECONDS_PER_HOUR: Final[int] = 60 * 60
SECONDS_PER_DAY: Final[int] = 24 * 60 * 60


# =============================================================================
# ГРАНИЦЫ КАЛЕНДАРНЫХ ТИПОВ
# =============================================================================

EPOCH: Final[datetime] = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Максимальный представимый момент календарного типа (UTC)
DATETIME_MAX_UTC: Final[datetime] = datetime.max.replace(tzinfo=timezone.utc)

_DATETIME_MAX_DELTA = DATETIME_MAX_UTC - EPOCH
DATETIME_MAX_EPOCH_SECONDS: Final[int] = (
    _DATETIME_MAX_DELTA.days * SECONDS_PER_DAY + _DATETIME_MAX_DELTA.seconds
)


def _timedelta_micros(td: timedelta) -> int:
    # Точный подсчёт без float: days/seconds/microseconds нормализованы timedelta
    return (td.days * SECONDS_PER_DAY + td.seconds) * MICROS_PER_SECOND + td.microseconds


TIMEDELTA_MAX_MICROS: Final[int] = _timedelta_micros(timedelta.max)
TIMEDELTA_MIN_MICROS: Final[int] = _timedelta_micros(timedelta.min)


# =============================================================================
# МАСШТАБ ЕДИНИЦ
# =============================================================================


@dataclass(frozen=True)
class UnitScale:
    """
    Коэффициенты пересчёта для выбранной точности.

    Одна и та же реализация выравнивания, диапазонов и конверсий
    работает с любым UnitScale; меняется только nanos_per_unit.
    """

    precision: Precision
    nanos_per_unit: int

    @property
    def per_millisecond(self) -> int:
        return NANOS_PER_MILLI // self.nanos_per_unit

    @property
    def per_second(self) -> int:
        return NANOS_PER_SECOND // self.nanos_per_unit

    @property
    def per_minute(self) -> int:
        return self.per_second * SECONDS_PER_MINUTE

    @property
    def per_hour(self) -> int:
        return self.per_second * SECONDS_PER_HOUR


NANOSECOND_SCALE: Final[UnitScale] = UnitScale(Precision.NANOSECOND, 1)
MILLISECOND_SCALE: Final[UnitScale] = UnitScale(Precision.MILLISECOND, NANOS_PER_MILLI)


def scale_for(precision: Precision) -> UnitScale:
    """
    Масштаб единиц для заданной точности.

    Args:
        precision: Precision.NANOSECOND или Precision.MILLISECOND

    Returns:
        Соответствующий UnitScale
    """
    if precision is Precision.MILLISECOND:
        return MILLISECOND_SCALE
    return NANOSECOND_SCALE


# Активная конфигурация: читается один раз при импорте
ACTIVE_CONFIG: Final[FastUtcConfig] = load_config()
UNITS: Final[UnitScale] = scale_for(ACTIVE_CONFIG.precision)


# =============================================================================
# БАЗОВЫЕ КОНВЕРТЕРЫ
# =============================================================================


def nanoseconds_to_units(nanoseconds: int, scale: UnitScale = UNITS) -> int:
    """
    Конверсия: наносекунды → units (усечение к нулю).

    Args:
        nanoseconds: Количество наносекунд (может быть отрицательным)
        scale: Масштаб единиц (default: активный)

    Returns:
        Количество units
    """
    return div_trunc(nanoseconds, scale.nanos_per_unit)


def units_to_nanoseconds(units: int, scale: UnitScale = UNITS) -> int:
    """Конверсия: units → наносекунды (точная)."""
    return units * scale.nanos_per_unit


def units_to_milliseconds(units: int, scale: UnitScale = UNITS) -> int:
    """Конверсия: units → миллисекунды (усечение к нулю)."""
    return div_trunc(units, scale.per_millisecond)


def units_to_seconds(units: int, scale: UnitScale = UNITS) -> int:
    """Конверсия: units → секунды (усечение к нулю)."""
    return div_trunc(units, scale.per_second)


# =============================================================================
# ГРАНИЦА С КАЛЕНДАРНОЙ БИБЛИОТЕКОЙ
# =============================================================================


def datetime_to_units(dt: datetime, scale: UnitScale = UNITS) -> int:
    """
    Конверсия: datetime → units от эпохи.

    Aware datetime приводится к UTC, naive интерпретируется как UTC.
    Точность ниже единицы усекается. Результат может быть отрицательным
    (момент до эпохи): решение о clamp принимает вызывающий тип.

    Args:
        dt: Календарный момент
        scale: Масштаб единиц (default: активный)

    Returns:
        Количество units от 1970-01-01T00:00:00Z
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    micros = _timedelta_micros(dt - EPOCH)
    return nanoseconds_to_units(micros * NANOS_PER_MICRO, scale)


def units_to_datetime(units: int, scale: UnitScale = UNITS) -> datetime:
    """
    Конверсия: units от эпохи → aware datetime (UTC).

    Если количество секунд не помещается в диапазон datetime, результат
    насыщается до DATETIME_MAX_UTC (а не вызывает ошибку).
    Точность ниже микросекунды усекается (ограничение datetime).

    Args:
        units: Неотрицательное количество units
        scale: Масштаб единиц (default: активный)

    Returns:
        Aware datetime в UTC
    """
    seconds, sub_units = divmod(units, scale.per_second)
    if seconds > DATETIME_MAX_EPOCH_SECONDS:
        return DATETIME_MAX_UTC
    micros = sub_units * scale.nanos_per_unit // NANOS_PER_MICRO
    return EPOCH + timedelta(seconds=seconds, microseconds=micros)


def timedelta_to_units(td: timedelta, scale: UnitScale = UNITS) -> int:
    """
    Конверсия: timedelta → units (усечение к нулю, без проверки диапазона).

    Args:
        td: Календарная длительность
        scale: Масштаб единиц (default: активный)

    Returns:
        Количество units (знаковое, неограниченное)
    """
    return nanoseconds_to_units(_timedelta_micros(td) * NANOS_PER_MICRO, scale)


def units_to_timedelta(units: int, scale: UnitScale = UNITS) -> timedelta:
    """
    Конверсия: units → timedelta.

    Усечение к нулю до микросекунд. Значения за пределами timedelta
    насыщаются до timedelta.max / timedelta.min.

    Args:
        units: Знаковое количество units
        scale: Масштаб единиц (default: активный)

    Returns:
        timedelta
    """
    micros = div_trunc(units * scale.nanos_per_unit, NANOS_PER_MICRO)
    if micros > TIMEDELTA_MAX_MICROS:
        return timedelta.max
    if micros < TIMEDELTA_MIN_MICROS:
        return timedelta.min
    return timedelta(microseconds=micros)
