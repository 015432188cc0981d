"""
TimeDelta — Знаковая длительность фиксированной точности

Одно знаковое 64-битное целое в активных единицах (ns или ms).
Положительное значение означает "позже", отрицательное "раньше".

Арифметика повторяет нативную i64: при переполнении значение
заворачивается (two's complement). Для явной проверки переполнения
есть checked_add / checked_sub / checked_mul. Деление усекается к нулю,
деление на ноль вызывает ZeroDivisionError.

Конверсия из timedelta: если количество единиц не помещается в i64,
результат равен НУЛЮ (не ошибка и не насыщение до максимума).
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Optional

from pydantic_core import core_schema

from fast_utc.core.domain.serialization import (
    int_backed_core_schema,
    pack_word,
    unpack_word,
)
from fast_utc.core.domain.units import (
    UNITS,
    nanoseconds_to_units,
    timedelta_to_units,
    units_to_milliseconds,
    units_to_nanoseconds,
    units_to_seconds,
    units_to_timedelta,
)
from fast_utc.core.math.int_safeguards import (
    I64_MAX,
    I64_MIN,
    checked_i64,
    div_trunc,
    fits_i64,
    rem_trunc,
    validate_int,
    wrap_i64,
)


@dataclass(frozen=True, order=True, slots=True, repr=False)
class TimeDelta:
    """
    Длительность в активных единицах.

    Прямой конструктор принимает уже готовое значение units и требует,
    чтобы оно было в i64; именованные конструкторы заворачивают результат.
    """

    units: int

    def __post_init__(self) -> None:
        validate_int(self.units, "units")
        if not fits_i64(self.units):
            raise ValueError(f"TimeDelta units out of i64 range: {self.units}")

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def zero(cls) -> "TimeDelta":
        return cls(0)

    @classmethod
    def from_units(cls, units: int) -> "TimeDelta":
        return cls(wrap_i64(units))

    @classmethod
    def from_hours(cls, hours: int) -> "TimeDelta":
        return cls(wrap_i64(hours * UNITS.per_hour))

    @classmethod
    def from_minutes(cls, minutes: int) -> "TimeDelta":
        return cls(wrap_i64(minutes * UNITS.per_minute))

    @classmethod
    def from_seconds(cls, seconds: int) -> "TimeDelta":
        return cls(wrap_i64(seconds * UNITS.per_second))

    @classmethod
    def from_milliseconds(cls, milliseconds: int) -> "TimeDelta":
        return cls(wrap_i64(milliseconds * UNITS.per_millisecond))

    @classmethod
    def from_nanoseconds(cls, nanoseconds: int) -> "TimeDelta":
        """При миллисекундной точности усекается к нулю."""
        return cls(wrap_i64(nanoseconds_to_units(nanoseconds)))

    @classmethod
    def from_timedelta(cls, td: timedelta) -> "TimeDelta":
        """
        Конверсия из datetime.timedelta.

        Точность ниже единицы усекается к нулю. Длительность, не
        помещающаяся в i64, превращается в нулевую.

        Args:
            td: Календарная длительность

        Returns:
            TimeDelta (или TimeDelta.zero() при переполнении)
        """
        units = timedelta_to_units(td)
        if not fits_i64(units):
            return cls(0)
        return cls(units)

    @classmethod
    def from_bytes(cls, data: bytes) -> "TimeDelta":
        """Восстановление из 8 байт little-endian (i64)."""
        return cls(unpack_word(data, signed=True))

    # -------------------------------------------------------------------------
    # Конверсии
    # -------------------------------------------------------------------------

    def as_milliseconds(self) -> int:
        return units_to_milliseconds(self.units)

    def as_nanoseconds(self) -> int:
        return wrap_i64(units_to_nanoseconds(self.units))

    def as_seconds(self) -> int:
        return units_to_seconds(self.units)

    def to_timedelta(self) -> timedelta:
        """Конверсия в timedelta; за пределами диапазона насыщается."""
        return units_to_timedelta(self.units)

    def to_bytes(self) -> bytes:
        return pack_word(self.units, signed=True)

    # -------------------------------------------------------------------------
    # Предикаты
    # -------------------------------------------------------------------------

    def is_zero(self) -> bool:
        return self.units == 0

    def is_positive(self) -> bool:
        return self.units > 0

    def is_negative(self) -> bool:
        return self.units < 0

    # -------------------------------------------------------------------------
    # Арифметика (wrap-around i64)
    # -------------------------------------------------------------------------

    def __add__(self, other: object) -> "TimeDelta":
        if not isinstance(other, TimeDelta):
            return NotImplemented
        return TimeDelta(wrap_i64(self.units + other.units))

    def __sub__(self, other: object) -> "TimeDelta":
        if not isinstance(other, TimeDelta):
            return NotImplemented
        return TimeDelta(wrap_i64(self.units - other.units))

    def __neg__(self) -> "TimeDelta":
        return TimeDelta(wrap_i64(-self.units))

    def __abs__(self) -> "TimeDelta":
        return TimeDelta(wrap_i64(abs(self.units)))

    def __mul__(self, factor: object) -> "TimeDelta":
        if isinstance(factor, bool) or not isinstance(factor, int):
            return NotImplemented
        return TimeDelta(wrap_i64(self.units * factor))

    __rmul__ = __mul__

    def __truediv__(self, other: object) -> Any:
        """
        Деление с усечением к нулю.

        - TimeDelta / int → TimeDelta (укороченная длительность)
        - TimeDelta / TimeDelta → int (сколько раз other укладывается в self)

        Raises:
            ZeroDivisionError: При делении на ноль
        """
        if isinstance(other, TimeDelta):
            return wrap_i64(div_trunc(self.units, other.units))
        if isinstance(other, bool) or not isinstance(other, int):
            return NotImplemented
        return TimeDelta(wrap_i64(div_trunc(self.units, other)))

    def __mod__(self, other: object) -> "TimeDelta":
        """Остаток от выравнивания на other (знак делимого)."""
        if not isinstance(other, TimeDelta):
            return NotImplemented
        return TimeDelta(rem_trunc(self.units, other.units))

    def checked_add(self, other: "TimeDelta") -> Optional["TimeDelta"]:
        """Сложение; None при переполнении i64."""
        units = checked_i64(self.units + other.units)
        return None if units is None else TimeDelta(units)

    def checked_sub(self, other: "TimeDelta") -> Optional["TimeDelta"]:
        """Вычитание; None при переполнении i64."""
        units = checked_i64(self.units - other.units)
        return None if units is None else TimeDelta(units)

    def checked_mul(self, factor: int) -> Optional["TimeDelta"]:
        """Умножение на целое; None при переполнении i64."""
        units = checked_i64(self.units * factor)
        return None if units is None else TimeDelta(units)

    # -------------------------------------------------------------------------
    # Представление
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        return str(self.to_timedelta())

    def __repr__(self) -> str:
        return f"TimeDelta({self.units})"

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> core_schema.CoreSchema:
        return int_backed_core_schema(
            cls,
            minimum=I64_MIN,
            maximum=I64_MAX,
            from_int=cls,
            python_alternatives=[
                core_schema.no_info_after_validator_function(
                    cls.from_timedelta, core_schema.timedelta_schema(strict=True)
                )
            ],
        )
