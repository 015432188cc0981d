"""
Тесты для TimeDelta

Проверяет:
1. Конструкторы единиц и их согласованность
2. Арифметику с wrap-around i64 и checked-варианты
3. Деление и остаток с усечением к нулю
4. Предикаты
5. Конверсию timedelta (clamp к нулю при переполнении)
6. Представление
"""

from datetime import timedelta

import pytest

from fast_utc.core.domain import time_delta as time_delta_module
from fast_utc.core.domain.time_delta import TimeDelta
from fast_utc.core.domain.units import (
    MILLISECOND_SCALE,
    NANOSECOND_SCALE,
    UNITS,
    nanoseconds_to_units,
    timedelta_to_units,
)
from fast_utc.core.math.int_safeguards import I64_MAX, I64_MIN, fits_i64


# =============================================================================
# КОНСТРУКТОРЫ
# =============================================================================


class TestConstructors:
    """Тесты конструкторов"""

    def test_zero(self) -> None:
        assert TimeDelta.zero().units == 0
        assert TimeDelta.zero().is_zero()

    def test_unit_constructors_agree(self) -> None:
        """Один час во всех единицах"""
        hour = TimeDelta.from_hours(1)
        assert hour == TimeDelta.from_minutes(60)
        assert hour == TimeDelta.from_seconds(3600)
        assert hour == TimeDelta.from_milliseconds(3_600_000)
        assert hour == TimeDelta.from_nanoseconds(3_600_000_000_000)

    def test_negative_values(self) -> None:
        assert TimeDelta.from_seconds(-5).is_negative()
        assert TimeDelta.from_seconds(-5).as_seconds() == -5

    def test_from_units_wraps(self) -> None:
        assert TimeDelta.from_units(I64_MAX + 1).units == I64_MIN

    def test_direct_construction_out_of_range(self) -> None:
        with pytest.raises(ValueError, match="out of i64 range"):
            TimeDelta(I64_MAX + 1)

    def test_direct_construction_rejects_float(self) -> None:
        with pytest.raises(TypeError):
            TimeDelta(1.5)  # type: ignore[arg-type]

    def test_unit_constructor_overflow_wraps(self) -> None:
        """Переполнение конструктора — ответственность вызывающего (wrap)"""
        huge = I64_MAX // UNITS.per_hour + 1
        assert TimeDelta.from_hours(huge).is_negative()

    def test_from_nanoseconds_truncates_toward_zero(self) -> None:
        """В миллисекундах остаток ниже единицы отбрасывается к нулю"""
        assert nanoseconds_to_units(1_999_999, MILLISECOND_SCALE) == 1
        assert nanoseconds_to_units(-1_999_999, MILLISECOND_SCALE) == -1
        assert nanoseconds_to_units(-1_999_999, NANOSECOND_SCALE) == -1_999_999
        assert TimeDelta.from_nanoseconds(-1_999_999).units == nanoseconds_to_units(-1_999_999)

    def test_from_nanoseconds_at_millisecond_scale(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(
            time_delta_module,
            "nanoseconds_to_units",
            lambda ns: nanoseconds_to_units(ns, MILLISECOND_SCALE),
        )
        assert TimeDelta.from_nanoseconds(1_999_999).units == 1
        assert TimeDelta.from_nanoseconds(-1_999_999).units == -1


# =============================================================================
# АРИФМЕТИКА
# =============================================================================


class TestArithmetic:
    """Тесты арифметики"""

    def test_add_sub(self) -> None:
        a = TimeDelta.from_seconds(10)
        b = TimeDelta.from_seconds(3)
        assert a + b == TimeDelta.from_seconds(13)
        assert a - b == TimeDelta.from_seconds(7)
        assert b - a == TimeDelta.from_seconds(-7)

    def test_neg_abs(self) -> None:
        d = TimeDelta.from_seconds(4)
        assert -d == TimeDelta.from_seconds(-4)
        assert abs(-d) == d

    def test_mul_both_sides(self) -> None:
        d = TimeDelta.from_minutes(5)
        assert d * 3 == TimeDelta.from_minutes(15)
        assert 3 * d == TimeDelta.from_minutes(15)
        assert d * -2 == TimeDelta.from_minutes(-10)

    def test_mul_rejects_float(self) -> None:
        with pytest.raises(TypeError):
            TimeDelta.from_seconds(1) * 1.5  # type: ignore[operator]

    def test_add_rejects_int(self) -> None:
        with pytest.raises(TypeError):
            TimeDelta.from_seconds(1) + 1  # type: ignore[operator]

    def test_add_wraps(self) -> None:
        """Нативная семантика: I64_MAX + 1 → I64_MIN"""
        assert TimeDelta(I64_MAX) + TimeDelta(1) == TimeDelta(I64_MIN)
        assert TimeDelta(I64_MIN) - TimeDelta(1) == TimeDelta(I64_MAX)

    def test_checked_ops(self) -> None:
        assert TimeDelta(1).checked_add(TimeDelta(2)) == TimeDelta(3)
        assert TimeDelta(I64_MAX).checked_add(TimeDelta(1)) is None
        assert TimeDelta(I64_MIN).checked_sub(TimeDelta(1)) is None
        assert TimeDelta(5).checked_sub(TimeDelta(7)) == TimeDelta(-2)
        assert TimeDelta(I64_MAX).checked_mul(2) is None
        assert TimeDelta(21).checked_mul(2) == TimeDelta(42)


class TestDivision:
    """Тесты деления и остатка"""

    def test_div_by_int_truncates(self) -> None:
        assert TimeDelta(7) / 2 == TimeDelta(3)
        assert TimeDelta(-7) / 2 == TimeDelta(-3)

    def test_div_by_delta_ratio(self) -> None:
        """Сколько раз delta укладывается в другую"""
        assert TimeDelta.from_hours(1) / TimeDelta.from_minutes(7) == 8
        assert TimeDelta(-7) / TimeDelta(2) == -3
        assert isinstance(TimeDelta(7) / TimeDelta(2), int)

    def test_remainder_sign_of_dividend(self) -> None:
        assert TimeDelta(7) % TimeDelta(3) == TimeDelta(1)
        assert TimeDelta(-7) % TimeDelta(3) == TimeDelta(-1)
        assert TimeDelta.from_minutes(62) % TimeDelta.from_minutes(5) == TimeDelta.from_minutes(2)

    def test_division_identity(self) -> None:
        """Инвариант: (a / b) * b + a % b == a"""
        a = TimeDelta.from_seconds(-1234)
        b = TimeDelta.from_seconds(100)
        assert b * (a / b) + a % b == a

    def test_min_div_minus_one_wraps(self) -> None:
        assert TimeDelta(I64_MIN) / -1 == TimeDelta(I64_MIN)

    def test_zero_divisor_raises(self) -> None:
        """Деление на ноль — ошибка вызывающего кода"""
        with pytest.raises(ZeroDivisionError):
            TimeDelta(1) / 0
        with pytest.raises(ZeroDivisionError):
            TimeDelta(1) / TimeDelta.zero()
        with pytest.raises(ZeroDivisionError):
            TimeDelta(1) % TimeDelta.zero()


# =============================================================================
# ПРЕДИКАТЫ И СРАВНЕНИЯ
# =============================================================================


class TestPredicates:
    """Тесты предикатов и порядка"""

    def test_predicates(self) -> None:
        assert TimeDelta(1).is_positive()
        assert not TimeDelta(1).is_negative()
        assert TimeDelta(-1).is_negative()
        assert not TimeDelta(0).is_positive()
        assert not TimeDelta(0).is_negative()

    def test_ordering(self) -> None:
        assert TimeDelta(-1) < TimeDelta(0) < TimeDelta(1)
        assert sorted([TimeDelta(3), TimeDelta(-2), TimeDelta(1)]) == [
            TimeDelta(-2),
            TimeDelta(1),
            TimeDelta(3),
        ]

    def test_hashable(self) -> None:
        assert len({TimeDelta(1), TimeDelta(1), TimeDelta(2)}) == 2


# =============================================================================
# КОНВЕРСИИ
# =============================================================================


class TestTimedeltaConversion:
    """Тесты конверсии с datetime.timedelta"""

    def test_from_timedelta(self) -> None:
        assert TimeDelta.from_timedelta(timedelta(milliseconds=123456)) == TimeDelta.from_milliseconds(123456)
        assert TimeDelta.from_timedelta(timedelta(hours=-2)) == TimeDelta.from_hours(-2)

    def test_from_timedelta_truncates_toward_zero(self) -> None:
        assert TimeDelta.from_timedelta(timedelta(microseconds=-1500)) == TimeDelta.from_nanoseconds(-1_500_000)

    def test_to_timedelta(self) -> None:
        assert TimeDelta.from_minutes(90).to_timedelta() == timedelta(hours=1, minutes=30)
        assert TimeDelta.from_milliseconds(-1).to_timedelta() == timedelta(milliseconds=-1)

    def test_roundtrip_calendar_first(self) -> None:
        td = timedelta(days=3, seconds=7, microseconds=125000)
        assert TimeDelta.from_timedelta(td).to_timedelta() == td

    def test_i64_overflow_depends_on_scale(self) -> None:
        """Одна и та же длительность переполняет i64 в ns, но не в ms"""
        for td in (timedelta(days=200_000), timedelta(days=-200_000), timedelta.max):
            assert not fits_i64(timedelta_to_units(td, NANOSECOND_SCALE))
            assert fits_i64(timedelta_to_units(td, MILLISECOND_SCALE))

    def test_overflow_to_zero_at_nanosecond_scale(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """При наносекундах timedelta.max не помещается в i64 и даёт ноль"""
        monkeypatch.setattr(
            time_delta_module,
            "timedelta_to_units",
            lambda td: timedelta_to_units(td, NANOSECOND_SCALE),
        )
        assert TimeDelta.from_timedelta(timedelta(days=200_000)) == TimeDelta.zero()
        assert TimeDelta.from_timedelta(timedelta(days=-200_000)) == TimeDelta.zero()
        assert TimeDelta.from_timedelta(timedelta.max) == TimeDelta.zero()
        assert TimeDelta.from_timedelta(timedelta(days=1)).units == 86_400 * 10**9

    def test_in_range_timedelta_kept_in_both_scales(self) -> None:
        td = timedelta(days=100_000)
        assert fits_i64(timedelta_to_units(td, NANOSECOND_SCALE))
        assert TimeDelta.from_timedelta(td).as_seconds() == 100_000 * 86_400

    def test_unit_accessors(self) -> None:
        d = TimeDelta.from_milliseconds(-2_500)
        assert d.as_milliseconds() == -2_500
        assert d.as_seconds() == -2
        assert d.as_nanoseconds() == -2_500_000_000


class TestRepresentation:
    """Тесты представления"""

    def test_repr_raw_integer(self) -> None:
        assert repr(TimeDelta(123)) == "TimeDelta(123)"

    def test_str_calendar(self) -> None:
        assert str(TimeDelta.from_seconds(90)) == "0:01:30"
        assert str(TimeDelta.from_hours(-1)) == "-1 day, 23:00:00"
