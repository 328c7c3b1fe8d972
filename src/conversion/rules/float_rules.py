"""
Float Rules — конверсии из binary и decimal float

- float → целое: нефинитный источник → Overflow; иначе усечение к нулю
  и общий закон диапазона
- binary → binary, decimal → binary: одно точное округление в формат
- binary → decimal: через кратчайший round-trip текст источника
- decimal → decimal: округление контекстом цели
- float → FPLiteral: точное значение; нефинитный источник → Overflow

Конечное значение, которое не помещается в целевой float формат, → Overflow.
"""

import decimal
from typing import Any, Dict

from src.conversion.rules.integer_rules import Rule, convert_int
from src.conversion.rules.targets import binary_from_exact, binary_from_float, decimal_from_exact
from src.core.domain.kinds import FP_LITERAL, Family, NumericKind
from src.core.domain.outcome import Failure, overflow
from src.numbers.literals import FPLiteral

_INTEGER_TARGETS = (Family.FIXED_INT, Family.INT128, Family.BIGINT, Family.CODE_POINT)


def _integral(value: Any) -> int | Failure:
    """Целая часть конечного значения (усечение к нулю)."""
    if not value.is_finite():
        return overflow(f"non-finite {value.kind.name} to integer")
    return int(value.value)


def _shortest_decimal(value: Any) -> decimal.Decimal:
    """Decimal по кратчайшему round-trip тексту binary float (decimal float как есть)."""
    if isinstance(value.value, decimal.Decimal):
        return value.value
    return decimal.Decimal(value.to_string())


def _exact_decimal(value: Any) -> decimal.Decimal:
    """Точное значение float как Decimal (binary float раскрывается без округления)."""
    return decimal.Decimal(value.value)


def _to_integer(value: Any, target: NumericKind, check: bool) -> Any:
    integral = _integral(value)
    if isinstance(integral, Failure):
        return integral
    return convert_int(integral, target, check)


def _to_literal(value: Any, target: NumericKind, check: bool) -> Any:
    if target != FP_LITERAL:
        return _to_integer(value, target, check)
    if not value.is_finite():
        return overflow(f"non-finite {value.kind.name} to {target.name}")
    return FPLiteral(_exact_decimal(value))


def binary_to_binary(value: Any, target: NumericKind, check: bool) -> Any:
    return binary_from_float(value.value, target)


def binary_to_decimal(value: Any, target: NumericKind, check: bool) -> Any:
    return decimal_from_exact(_shortest_decimal(value), target)


def decimal_to_binary(value: Any, target: NumericKind, check: bool) -> Any:
    return binary_from_exact(value.value, target)


def decimal_to_decimal(value: Any, target: NumericKind, check: bool) -> Any:
    return decimal_from_exact(value.value, target)


BINARY_RULES: Dict[Family, Rule] = {
    **{family: _to_integer for family in _INTEGER_TARGETS},
    Family.LITERAL: _to_literal,
    Family.BINARY_FLOAT: binary_to_binary,
    Family.DECIMAL_FLOAT: binary_to_decimal,
}

DECIMAL_RULES: Dict[Family, Rule] = {
    **{family: _to_integer for family in _INTEGER_TARGETS},
    Family.LITERAL: _to_literal,
    Family.BINARY_FLOAT: decimal_to_binary,
    Family.DECIMAL_FLOAT: decimal_to_decimal,
}
