"""
Integer Safeguards — Fixed-Width Integer Primitives

Python int не ограничен по разрядности, поэтому семантика 64-битных
значений эмулируется явно:
- Знаковый домен i64 с wrap-around (two's complement), как у нативной арифметики
- Беззнаковый домен u64 с clamp/saturate на границах
- Целочисленное деление и остаток с усечением к нулю
- Checked-операции, возвращающие None при переполнении

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. wrap_i64 всегда возвращает значение в [I64_MIN, I64_MAX]
2. clamp_u64 всегда возвращает значение в [0, U64_MAX]
3. div_trunc / rem_trunc: a == div_trunc(a, b) * b + rem_trunc(a, b)
4. Деление на ноль не маскируется: ZeroDivisionError пропагирует
"""

from typing import Final, Optional

# =============================================================================
# ГРАНИЦЫ 64-БИТНЫХ ДОМЕНОВ
# =============================================================================

I64_MIN: Final[int] = -(1 << 63)
I64_MAX: Final[int] = (1 << 63) - 1
U64_MAX: Final[int] = (1 << 64) - 1

# Ширина сериализованного значения (байты)
WORD_BYTES: Final[int] = 8


# =============================================================================
# ЗНАКОВЫЙ ДОМЕН (i64)
# =============================================================================


def fits_i64(value: int) -> bool:
    """Проверка, помещается ли значение в i64 без переполнения."""
    return I64_MIN <= value <= I64_MAX


def wrap_i64(value: int) -> int:
    """
    Приведение к i64 с wrap-around (two's complement).

    Повторяет поведение нативной знаковой арифметики фиксированной ширины:
    значения вне диапазона "заворачиваются", а не насыщаются.

    Args:
        value: Произвольное целое

    Returns:
        Значение в [I64_MIN, I64_MAX]

    Examples:
        >>> wrap_i64(I64_MAX + 1) == I64_MIN
        True
        >>> wrap_i64(-1)
        -1
    """
    value &= U64_MAX
    if value > I64_MAX:
        value -= 1 << 64
    return value


def checked_i64(value: int) -> Optional[int]:
    """
    Checked-вариант: значение, если оно в i64, иначе None.

    Args:
        value: Результат операции в неограниченном домене

    Returns:
        value или None при переполнении
    """
    if fits_i64(value):
        return value
    return None


# =============================================================================
# БЕЗЗНАКОВЫЙ ДОМЕН (u64)
# =============================================================================


def fits_u64(value: int) -> bool:
    """Проверка, помещается ли значение в u64."""
    return 0 <= value <= U64_MAX


def clamp_u64(value: int) -> int:
    """
    Ограничение значения диапазоном [0, U64_MAX].

    Отрицательные значения прижимаются к нулю, слишком большие
    насыщаются до U64_MAX. Wrap-around никогда не происходит.

    Examples:
        >>> clamp_u64(-5)
        0
        >>> clamp_u64(U64_MAX + 10) == U64_MAX
        True
    """
    if value < 0:
        return 0
    if value > U64_MAX:
        return U64_MAX
    return value


# =============================================================================
# ДЕЛЕНИЕ С УСЕЧЕНИЕМ К НУЛЮ
# =============================================================================


def div_trunc(numerator: int, denominator: int) -> int:
    """
    Целочисленное деление с усечением к нулю.

    Оператор // в Python округляет к минус бесконечности; здесь нужна
    семантика нативного целочисленного деления (-7 / 2 == -3).

    Args:
        numerator: Делимое
        denominator: Делитель

    Returns:
        Частное, усечённое к нулю

    Raises:
        ZeroDivisionError: Если denominator == 0

    Examples:
        >>> div_trunc(7, 2)
        3
        >>> div_trunc(-7, 2)
        -3
    """
    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        return -quotient
    return quotient


def rem_trunc(numerator: int, denominator: int) -> int:
    """
    Остаток, согласованный с div_trunc (знак делимого).

    Examples:
        >>> rem_trunc(7, 3)
        1
        >>> rem_trunc(-7, 3)
        -1
    """
    return numerator - div_trunc(numerator, denominator) * denominator


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_int(value: object, name: str) -> int:
    """
    Валидация, что значение является int (bool отклоняется).

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        value без изменений

    Raises:
        TypeError: Если value не int
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    return value


def validate_word(data: bytes, name: str) -> bytes:
    """
    Валидация длины сериализованного 64-битного слова.

    Raises:
        ValueError: Если длина не равна WORD_BYTES
    """
    if len(data) != WORD_BYTES:
        raise ValueError(f"{name} must be exactly {WORD_BYTES} bytes, got {len(data)}")
    return data
