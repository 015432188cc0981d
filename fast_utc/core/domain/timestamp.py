"""
Timestamp — Быстрый UTC-момент фиксированной точности

Одно беззнаковое 64-битное целое: количество единиц (ns или ms) от
1970-01-01T00:00:00Z. Без календарной декомпозиции на горячем пути:
сравнение и арифметика сводятся к операциям над одним int.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Значение никогда не отрицательно: всё, что ушло бы ниже эпохи,
   прижимается к нулю (clamp), а не заворачивается
2. Именованные конструкторы насыщаются до U64_MAX при переполнении
3. Timestamp ± TimeDelta считается в неограниченном домене, затем clamp
4. Timestamp - Timestamp → точная знаковая разница (TimeDelta)
5. Конверсия в datetime насыщается до datetime.max; из datetime до
   эпохи прижимается к нулю (асимметрия намеренная)

ВЫРАВНИВАНИЕ:
    aligned = anchor + floor((t - anchor) / |freq|) * |freq|
    Деление к минус бесконечности, чтобы моменты до anchor выравнивались
    вниз. Нулевая freq → ZeroDivisionError (ошибка вызывающего кода).
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from pydantic_core import core_schema

from fast_utc.clock.source import now_nanoseconds
from fast_utc.core.domain.serialization import (
    int_backed_core_schema,
    pack_word,
    unpack_word,
)
from fast_utc.core.domain.time_delta import TimeDelta
from fast_utc.core.domain.units import (
    UNITS,
    datetime_to_units,
    nanoseconds_to_units,
    units_to_datetime,
    units_to_nanoseconds,
)
from fast_utc.core.math.int_safeguards import (
    U64_MAX,
    clamp_u64,
    fits_u64,
    validate_int,
    wrap_i64,
)


@dataclass(frozen=True, order=True, slots=True, repr=False)
class Timestamp:
    """
    UTC-момент в активных единицах.

    Прямой конструктор принимает готовое значение units в [0, U64_MAX];
    именованные конструкторы (from_*) прижимают результат к этому диапазону.
    """

    units: int

    def __post_init__(self) -> None:
        validate_int(self.units, "units")
        if not fits_u64(self.units):
            raise ValueError(f"Timestamp units out of u64 range: {self.units}")

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def zero(cls) -> "Timestamp":
        """Эпоха, 1970-01-01 00:00:00 UTC."""
        return cls(0)

    @classmethod
    def max_value(cls) -> "Timestamp":
        return cls(U64_MAX)

    @classmethod
    def now(cls) -> "Timestamp":
        """
        Текущий момент из активного источника времени.

        В режиме coarse значение отстаёт от системных часов не более
        чем на период фонового обновления.
        """
        return cls.from_nanoseconds(now_nanoseconds())

    @staticmethod
    def fetch_utc_now() -> datetime:
        """Текущий момент активного источника как aware datetime."""
        return Timestamp.now().to_datetime()

    @classmethod
    def from_units(cls, units: int) -> "Timestamp":
        return cls(clamp_u64(units))

    @classmethod
    def from_seconds(cls, seconds: int) -> "Timestamp":
        return cls(clamp_u64(seconds * UNITS.per_second))

    @classmethod
    def from_milliseconds(cls, milliseconds: int) -> "Timestamp":
        return cls(clamp_u64(milliseconds * UNITS.per_millisecond))

    @classmethod
    def from_nanoseconds(cls, nanoseconds: int) -> "Timestamp":
        return cls(clamp_u64(nanoseconds_to_units(nanoseconds)))

    @classmethod
    def from_datetime(cls, dt: datetime) -> "Timestamp":
        """
        Конверсия из datetime.

        Naive datetime интерпретируется как UTC. Моменты до эпохи
        прижимаются к нулю.

        Args:
            dt: Календарный момент

        Returns:
            Timestamp
        """
        return cls(clamp_u64(datetime_to_units(dt)))

    @classmethod
    def from_bytes(cls, data: bytes) -> "Timestamp":
        """Восстановление из 8 байт little-endian (u64)."""
        return cls(unpack_word(data, signed=False))

    # -------------------------------------------------------------------------
    # Конверсии
    # -------------------------------------------------------------------------

    def as_seconds(self) -> int:
        return self.units // UNITS.per_second

    def as_milliseconds(self) -> int:
        return self.units // UNITS.per_millisecond

    def as_nanoseconds(self) -> int:
        """При миллисекундной точности насыщается до U64_MAX."""
        return clamp_u64(units_to_nanoseconds(self.units))

    def to_datetime(self) -> datetime:
        """Aware datetime (UTC); за пределами datetime.max насыщается."""
        return units_to_datetime(self.units)

    def to_bytes(self) -> bytes:
        return pack_word(self.units, signed=False)

    def is_zero(self) -> bool:
        return self.units == 0

    # -------------------------------------------------------------------------
    # Выравнивание
    # -------------------------------------------------------------------------

    def align_to(self, freq: TimeDelta) -> "Timestamp":
        """Выравнивание на частоту относительно эпохи."""
        return self.align_to_anchored(Timestamp.zero(), freq)

    def align_to_anchored(self, anchor: "Timestamp", freq: TimeDelta) -> "Timestamp":
        """
        Выравнивание на частоту относительно anchor.

        Возвращает наибольший момент a <= self, достижимый из anchor
        целым (в том числе отрицательным) числом шагов freq. Сетка для
        freq и -freq одна и та же.

        Args:
            anchor: Опорный момент сетки
            freq: Шаг сетки (ненулевой, знак не важен)

        Returns:
            Выровненный Timestamp, прижатый к нулю при необходимости

        Raises:
            ZeroDivisionError: Если freq нулевая

        Examples:
            >>> t = Timestamp.from_seconds(19 * 3600 + 32 * 60 + 51)
            >>> t.align_to(TimeDelta.from_minutes(5)) == Timestamp.from_seconds(19 * 3600 + 30 * 60)
            True
        """
        step = abs(freq.units)
        offset = self.units - anchor.units
        return Timestamp(clamp_u64(anchor.units + (offset // step) * step))

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def __add__(self, other: object) -> "Timestamp":
        if not isinstance(other, TimeDelta):
            return NotImplemented
        return Timestamp(clamp_u64(self.units + other.units))

    __radd__ = __add__

    def __sub__(self, other: object) -> Any:
        """
        - Timestamp - TimeDelta → Timestamp (clamp к нулю)
        - Timestamp - Timestamp → TimeDelta (точная знаковая разница)
        """
        if isinstance(other, TimeDelta):
            return Timestamp(clamp_u64(self.units - other.units))
        if isinstance(other, Timestamp):
            return TimeDelta(wrap_i64(self.units - other.units))
        return NotImplemented

    # -------------------------------------------------------------------------
    # Представление
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        return str(self.to_datetime())

    def __repr__(self) -> str:
        return f"Timestamp({self.units})"

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> core_schema.CoreSchema:
        return int_backed_core_schema(
            cls,
            minimum=0,
            maximum=U64_MAX,
            from_int=cls,
            python_alternatives=[
                core_schema.no_info_after_validator_function(
                    cls.from_datetime, core_schema.datetime_schema(strict=True)
                )
            ],
        )
