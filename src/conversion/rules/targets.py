"""
Targets — построение значений целевого kind из точного числа

Каждое правило конверсии сводит источник к точному Python-числу (int,
Fraction-совместимое Decimal или float) и передаёт его сюда. Здесь
применяется общий закон диапазона:

- check=True: значение вне диапазона цели → Failure(OVERFLOW)
- check=False: значение по модулю 2^width цели, по знаковости цели

Для binary float цели — одно точное округление в формат; конечное значение,
дающее ±Infinity, → Failure(OVERFLOW).
"""

import decimal
import math
from fractions import Fraction
from typing import Any

from src.core.domain.formats import BINARY_FORMATS
from src.core.domain.kinds import CODE_POINT_MAX, INT_LITERAL, UINTN, NumericKind
from src.core.domain.outcome import Failure, overflow
from src.core.math.ieee_bits import round_exact
from src.numbers.bigint import BigInt
from src.numbers.binary_float import BinaryFloat
from src.numbers.char import Char
from src.numbers.decimal_float import DecimalFloat
from src.numbers.fixed import FixedInt
from src.numbers.literals import FPLiteral, IntLiteral
from src.numbers.wide import WideInt

# Маска unchecked конверсии в кодовую точку (20 бит)
CODE_POINT_MASK = 0xFFFFF


def _out_of_range(value: Any, target: NumericKind) -> Failure:
    return overflow(f"{value} is out of range for {target.name}")


def fixed_from_int(value: int, target: NumericKind, check: bool) -> FixedInt | Failure:
    if check and not target.contains(value):
        return _out_of_range(value, target)
    return FixedInt.wrap(target, value)


def wide_from_int(value: int, target: NumericKind, check: bool) -> WideInt | Failure:
    if check and not target.contains(value):
        return _out_of_range(value, target)
    return WideInt.wrap(target, value)


def bigint_from_int(value: int, target: NumericKind, check: bool) -> BigInt | Failure:
    """IntN принимает любое значение; UIntN — только неотрицательное (маскировать нечем)."""
    if target == UINTN and value < 0:
        return _out_of_range(value, target)
    return BigInt(target, value)


def char_from_int(value: int, target: NumericKind, check: bool) -> Char | Failure:
    """
    Кодовая точка из целого.

    Значение в [0, 0x10FFFF] проходит без изменений; вне диапазона —
    Overflow при проверке, иначе маска 20 бит.
    """
    if 0 <= value <= CODE_POINT_MAX:
        return Char(value)
    if check:
        return _out_of_range(value, target)
    return Char(value & CODE_POINT_MASK)


def literal_from_int(value: int, target: NumericKind, check: bool) -> IntLiteral | FPLiteral:
    if target == INT_LITERAL:
        return IntLiteral(value)
    return FPLiteral(decimal.Decimal(value))


def _signed_zero(value: decimal.Decimal, target: NumericKind) -> BinaryFloat:
    return BinaryFloat(target, -0.0 if value.is_signed() else 0.0)


def binary_from_exact(value: int | decimal.Decimal, target: NumericKind) -> BinaryFloat | Failure:
    """
    Binary float из точного конечного значения с одним округлением.

    ±Infinity и NaN (Decimal) переносятся как есть. Порядок Decimal
    проверяется до точного рационального представления: значение заведомо
    вне формата → Overflow, заведомо меньше половины наименьшего
    субнормального → ±0.
    """
    fmt = BINARY_FORMATS[target.bits]
    if isinstance(value, decimal.Decimal):
        if not value.is_finite():
            return BinaryFloat(target, math.nan if value.is_nan() else float(value))
        if value.is_zero() or value.adjusted() < fmt.min_decimal_exponent:
            return _signed_zero(value, target)
        if value.adjusted() > fmt.max_decimal_exponent:
            return overflow(f"{value} is too large for {target.name}")
    rounded = round_exact(Fraction(value), fmt)
    if math.isinf(rounded):
        return overflow(f"{value} is too large for {target.name}")
    if isinstance(value, decimal.Decimal) and rounded == 0.0:
        return _signed_zero(value, target)
    return BinaryFloat(target, rounded)


def binary_from_float(value: float, target: NumericKind) -> BinaryFloat | Failure:
    """Binary float из binary float: конечное значение округляется один раз."""
    if not math.isfinite(value):
        return BinaryFloat(target, value)
    rounded = round_exact(Fraction(value), BINARY_FORMATS[target.bits])
    if math.isinf(rounded):
        return overflow(f"{value} is too large for {target.name}")
    return BinaryFloat(target, rounded)


def decimal_from_exact(value: int | decimal.Decimal, target: NumericKind) -> DecimalFloat | Failure:
    return DecimalFloat.of(target, value)
