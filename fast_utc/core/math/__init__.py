"""
Core math modules для fast_utc

Примитивы целочисленной арифметики фиксированной ширины.
"""

from fast_utc.core.math.int_safeguards import (
    # Bounds
    I64_MAX,
    I64_MIN,
    U64_MAX,
    WORD_BYTES,
    # Signed domain
    checked_i64,
    fits_i64,
    wrap_i64,
    # Unsigned domain
    clamp_u64,
    fits_u64,
    # Truncating division
    div_trunc,
    rem_trunc,
    # Validation
    validate_int,
    validate_word,
)

__all__ = [
    # Bounds
    "I64_MAX",
    "I64_MIN",
    "U64_MAX",
    "WORD_BYTES",
    # Signed domain
    "checked_i64",
    "fits_i64",
    "wrap_i64",
    # Unsigned domain
    "clamp_u64",
    "fits_u64",
    # Truncating division
    "div_trunc",
    "rem_trunc",
    # Validation
    "validate_int",
    "validate_word",
]
