"""
JSON Schema Contract Validators

Модуль для валидации сериализованных значений fast_utc согласно
формальным JSON Schema контрактам. Использует библиотеку jsonschema.

Схемы (fast_utc/core/contracts/schema/):
- timestamp.json:  u64, units от эпохи
- time_delta.json: i64, units
- time_range.json: объект TimeRangeSpec

Валидаторы создаются один раз на контракт и переиспользуются.
"""

import json
from pathlib import Path
from typing import Any, Dict, Final, Optional, Union

import jsonschema
from jsonschema import Draft202012Validator

from fast_utc.core.domain.time_delta import TimeDelta
from fast_utc.core.domain.time_range import TimeRangeSpec
from fast_utc.core.domain.timestamp import Timestamp


TIMESTAMP_CONTRACT: Final[str] = "timestamp"
TIME_DELTA_CONTRACT: Final[str] = "time_delta"
TIME_RANGE_CONTRACT: Final[str] = "time_range"

CONTRACTS: Final = (TIMESTAMP_CONTRACT, TIME_DELTA_CONTRACT, TIME_RANGE_CONTRACT)


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы поставляются вместе с пакетом в каталоге schema/ рядом с модулем.
    """

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка и meta-валидация схемы (с кэшированием).

        Args:
            schema_name: Имя схемы без расширения (например, 'timestamp')

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-валидацию
        """
        cached = self._schemas.get(schema_name)
        if cached is not None:
            return cached

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        schema = json.loads(schema_path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATOR
# =============================================================================


class ContractValidator:
    """Валидатор одного контракта."""

    def __init__(self, schema_name: str, loader: Optional[SchemaLoader] = None):
        self.schema_name = schema_name
        self._validator = Draft202012Validator((loader or _SCHEMA_LOADER).load_schema(schema_name))

    def validate(self, data: Any) -> None:
        """
        Raises:
            jsonschema.ValidationError: Если данные не соответствуют схеме
        """
        self._validator.validate(data)

    def is_valid(self, data: Any) -> bool:
        return self._validator.is_valid(data)


_VALIDATORS: Dict[str, ContractValidator] = {}


def get_validator(schema_name: str) -> ContractValidator:
    """Общий валидатор контракта из поставляемых схем."""
    validator = _VALIDATORS.get(schema_name)
    if validator is None:
        validator = ContractValidator(schema_name)
        _VALIDATORS[schema_name] = validator
    return validator


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_timestamp(data: Any) -> None:
    """Валидация сериализованного Timestamp (целое)."""
    get_validator(TIMESTAMP_CONTRACT).validate(data)


def validate_time_delta(data: Any) -> None:
    """Валидация сериализованного TimeDelta (целое)."""
    get_validator(TIME_DELTA_CONTRACT).validate(data)


def validate_time_range(data: Dict[str, Any]) -> None:
    """Валидация сериализованного TimeRangeSpec (объект)."""
    get_validator(TIME_RANGE_CONTRACT).validate(data)


def validate_value(value: Union[Timestamp, TimeDelta, TimeRangeSpec]) -> None:
    """
    Сериализация значения и проверка по его контракту.

    Raises:
        TypeError: Для типа без контракта
        jsonschema.ValidationError: Если сериализованная форма не проходит схему
    """
    if isinstance(value, Timestamp):
        validate_timestamp(value.units)
    elif isinstance(value, TimeDelta):
        validate_time_delta(value.units)
    elif isinstance(value, TimeRangeSpec):
        validate_time_range(value.model_dump(mode="json"))
    else:
        raise TypeError(f"No contract for {type(value).__name__}")
