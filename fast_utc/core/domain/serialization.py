"""
Serialization — Сериализация значений с единственным целочисленным полем

Timestamp и TimeDelta сериализуются как одно 64-битное целое:
- pydantic: поле модели валидируется из int (и из самого типа / datetime /
  timedelta в Python-режиме), сериализуется в int
- бинарный формат: 8 байт, little-endian (u64 для Timestamp, i64 для TimeDelta)

Схема хранения: "signed/unsigned 64-bit integer, unit = активная точность".
"""

from typing import Any, Callable, Sequence

from pydantic_core import core_schema

from fast_utc.core.math.int_safeguards import WORD_BYTES, validate_word


# =============================================================================
# БИНАРНЫЙ ФОРМАТ
# =============================================================================


def pack_word(value: int, signed: bool) -> bytes:
    """
    Упаковка 64-битного целого в 8 байт little-endian.

    Raises:
        OverflowError: Если value не помещается в 64 бита
    """
    return value.to_bytes(WORD_BYTES, "little", signed=signed)


def unpack_word(data: bytes, signed: bool) -> int:
    """
    Распаковка 8 байт little-endian в целое.

    Raises:
        ValueError: Если длина data не равна 8
    """
    validate_word(data, "data")
    return int.from_bytes(data, "little", signed=signed)


# =============================================================================
# PYDANTIC
# =============================================================================


def int_backed_core_schema(
    cls: type,
    *,
    minimum: int,
    maximum: int,
    from_int: Callable[[int], Any],
    python_alternatives: Sequence[core_schema.CoreSchema] = (),
) -> core_schema.CoreSchema:
    """
    Core schema для типа-обёртки над одним целым.

    JSON: только целое в [minimum, maximum].
    Python: экземпляр cls, альтернативы (например, datetime) или целое.
    Сериализация всегда в целое (атрибут units).

    Args:
        cls: Тип-обёртка
        minimum: Нижняя граница целого
        maximum: Верхняя граница целого
        from_int: Конструктор из целого
        python_alternatives: Дополнительные схемы для Python-режима

    Returns:
        CoreSchema для __get_pydantic_core_schema__
    """
    int_schema = core_schema.no_info_after_validator_function(
        from_int,
        core_schema.int_schema(ge=minimum, le=maximum, strict=True),
    )
    python_schema = core_schema.union_schema(
        [core_schema.is_instance_schema(cls), *python_alternatives, int_schema]
    )
    return core_schema.json_or_python_schema(
        json_schema=int_schema,
        python_schema=python_schema,
        serialization=core_schema.plain_serializer_function_ser_schema(
            lambda value: value.units,
            return_schema=core_schema.int_schema(),
        ),
    )
