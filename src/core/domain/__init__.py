"""
Domain models and value objects.

Contains the error model (Failure, Signal), numeric kind descriptors and
floating-point format parameters.
"""

from src.core.domain.formats import (
    BINARY16,
    BINARY32,
    BINARY64,
    DECIMAL32,
    DECIMAL64,
    DECIMAL128,
    BinaryFormat,
    DecimalFormat,
)
from src.core.domain.kinds import (
    CHAR,
    DEC32,
    DEC64,
    DEC128,
    FLOAT16,
    FLOAT32,
    FLOAT64,
    FP_LITERAL,
    INT8,
    INT16,
    INT32,
    INT64,
    INT128,
    INT_LITERAL,
    INTN,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
    UINT128,
    UINTN,
    UNCHECKED_INT8,
    UNCHECKED_INT16,
    UNCHECKED_INT32,
    UNCHECKED_INT64,
    UNCHECKED_INT128,
    UNCHECKED_UINT8,
    UNCHECKED_UINT16,
    UNCHECKED_UINT32,
    UNCHECKED_UINT64,
    UNCHECKED_UINT128,
    Family,
    NumericKind,
    RoundingMode,
    all_kinds,
    checked_of,
    complement_of,
    kind_by_name,
    kind_from_descriptor,
    unchecked_of,
)
from src.core.domain.outcome import (
    Failure,
    IllegalArgument,
    NumericError,
    NumericOverflow,
    Outcome,
    Signal,
    UnsupportedOperation,
    illegal_argument,
    is_failure,
    is_overflow,
    overflow,
    unsupported,
    unwrap,
)

__all__ = [
    # Error model
    "Signal",
    "Failure",
    "Outcome",
    "NumericError",
    "NumericOverflow",
    "IllegalArgument",
    "UnsupportedOperation",
    "overflow",
    "illegal_argument",
    "unsupported",
    "is_failure",
    "is_overflow",
    "unwrap",
    # Kinds: types
    "Family",
    "RoundingMode",
    "NumericKind",
    # Kinds: registry
    "kind_by_name",
    "all_kinds",
    "complement_of",
    "unchecked_of",
    "checked_of",
    "kind_from_descriptor",
    # Kinds: fixed width and 128-bit
    "INT8",
    "INT16",
    "INT32",
    "INT64",
    "INT128",
    "UINT8",
    "UINT16",
    "UINT32",
    "UINT64",
    "UINT128",
    "UNCHECKED_INT8",
    "UNCHECKED_INT16",
    "UNCHECKED_INT32",
    "UNCHECKED_INT64",
    "UNCHECKED_INT128",
    "UNCHECKED_UINT8",
    "UNCHECKED_UINT16",
    "UNCHECKED_UINT32",
    "UNCHECKED_UINT64",
    "UNCHECKED_UINT128",
    # Kinds: unbounded, literals, floats, code point
    "INTN",
    "UINTN",
    "INT_LITERAL",
    "FP_LITERAL",
    "FLOAT16",
    "FLOAT32",
    "FLOAT64",
    "DEC32",
    "DEC64",
    "DEC128",
    "CHAR",
    # Formats
    "BinaryFormat",
    "DecimalFormat",
    "BINARY16",
    "BINARY32",
    "BINARY64",
    "DECIMAL32",
    "DECIMAL64",
    "DECIMAL128",
]
