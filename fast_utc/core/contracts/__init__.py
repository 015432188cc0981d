"""
Contract Validation Module

Модуль для валидации сериализованных значений fast_utc по JSON Schema.
"""

from .validators import (
    CONTRACTS,
    TIME_DELTA_CONTRACT,
    TIME_RANGE_CONTRACT,
    TIMESTAMP_CONTRACT,
    ContractValidator,
    SchemaLoader,
    get_validator,
    validate_time_delta,
    validate_time_range,
    validate_timestamp,
    validate_value,
)

__all__ = [
    # Contract names
    "CONTRACTS",
    "TIMESTAMP_CONTRACT",
    "TIME_DELTA_CONTRACT",
    "TIME_RANGE_CONTRACT",
    # Classes
    "SchemaLoader",
    "ContractValidator",
    # Functions
    "get_validator",
    "validate_timestamp",
    "validate_time_delta",
    "validate_time_range",
    "validate_value",
]
