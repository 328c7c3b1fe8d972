"""
Core math modules числового ядра

Word/bit примитивы, double-word core, промоушен результатов, IEEE битовая
раскладка и DPD кодек.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    apply_binary,
    apply_unary,
    ensure_finite,
    is_valid_float,
    round_integral,
    safe_atanh,
    safe_cbrt,
    safe_log,
)

# Double-word core
from src.core.math.longlong import (
    MAX_VALUE,
    MIN_VALUE,
    ONE,
    UNSIGNED_MAX_VALUE,
    ZERO,
    LongLong,
)

# Promotion
from src.core.math.promotion import (
    IntResult,
    Narrow,
    Wide,
    add_words,
    mul_words,
    narrow,
    sub_words,
    to_longlong,
)

__all__ = [
    # Numerical Safeguards
    "is_valid_float",
    "ensure_finite",
    "apply_unary",
    "apply_binary",
    "safe_log",
    "safe_cbrt",
    "safe_atanh",
    "round_integral",
    # Double-word core
    "LongLong",
    "ZERO",
    "ONE",
    "MAX_VALUE",
    "MIN_VALUE",
    "UNSIGNED_MAX_VALUE",
    # Promotion
    "IntResult",
    "Narrow",
    "Wide",
    "add_words",
    "sub_words",
    "mul_words",
    "narrow",
    "to_longlong",
]
