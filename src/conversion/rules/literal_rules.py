"""
Literal Rules — сужение литералов до конкретного kind

Литерал уже разобран при построении; сужение — чистая функция его значения:
один и тот же литерал всегда даёт одно и то же значение или одну и ту же
ошибку. Литералы всегда проверяются по диапазону (если не задан truncate).

- IntLiteral → любой kind: как целочисленный источник
- FPLiteral → целое: только целое значение; дробное → UnsupportedOperation;
  порядок проверяется до развёртывания 10^exp
- FPLiteral → float: одно точное округление; конечное значение,
  не помещающееся в формат, → Overflow
"""

import decimal
import math
from typing import Any, Dict, Final

from src.conversion.rules.integer_rules import Rule, convert_int
from src.conversion.rules.targets import binary_from_exact, decimal_from_exact
from src.core.domain.kinds import FP_LITERAL, Family, NumericKind
from src.core.domain.outcome import overflow, unsupported
from src.numbers.literals import MAX_SHIFT_COUNT, FPLiteral, IntLiteral

# Ширина, по модулю которой берётся вычет огромного значения
WIDE_BITS: Final[int] = 128

# Порядок, начиная с которого значение не помещается ни в один kind фиксированной ширины
WIDE_DIGITS: Final[int] = 39

# Наибольшее число десятичных цифр значения неограниченного kind
MAX_INTEGER_DIGITS: Final[int] = math.floor(MAX_SHIFT_COUNT * math.log10(2))


def _residue(value: decimal.Decimal) -> int:
    """
    Представитель значения по модулю 2^128 без развёртывания 10^exp.

    Неотрицательный представитель сдвинут на 2^128, чтобы оставаться вне
    диапазона кодовых точек, как и само значение.
    """
    modulus = 1 << WIDE_BITS
    sign, digits, exponent = value.as_tuple()
    coefficient = int("".join(map(str, digits)))
    if exponent < 0:
        coefficient //= 10 ** -exponent
        exponent = 0
    residue = coefficient * pow(10, exponent, modulus) % modulus
    return -residue if sign else residue + modulus


def integral_to_int(value: decimal.Decimal, target: NumericKind, check: bool) -> Any:
    """
    Целое Decimal значение → целочисленный kind.

    Порядок значения проверяется до развёртывания в int: для цели фиксированной
    ширины значение с порядком от WIDE_DIGITS заведомо вне диапазона
    (Overflow при проверке, иначе вычет по модулю 2^128, согласованный с
    маской любой ширины до 128 бит); для неограниченной цели порядок от
    MAX_INTEGER_DIGITS → Overflow.

    Examples:
        >>> integral_to_int(decimal.Decimal("1e999999999"), INT8, check=True).signal
        <Signal.OVERFLOW: 'OVERFLOW'>
        >>> integral_to_int(decimal.Decimal("1e999999999"), INT8, check=False).value
        0
    """
    if value.is_zero() or value.adjusted() < WIDE_DIGITS:
        return convert_int(int(value), target, check)
    if target.bits is None:
        if value.adjusted() >= MAX_INTEGER_DIGITS:
            return overflow(f"{value} is too large for {target.name}")
        return convert_int(int(value), target, check)
    if check:
        return overflow(f"{value} is out of range for {target.name}")
    return convert_int(_residue(value), target, check)


def fp_literal_rule(value: FPLiteral, target: NumericKind, check: bool) -> Any:
    family = target.family
    if family == Family.BINARY_FLOAT:
        return binary_from_exact(value.value, target)
    if family == Family.DECIMAL_FLOAT:
        return decimal_from_exact(value.value, target)
    if target == FP_LITERAL:
        return value
    if value.value != value.value.to_integral_value():
        return unsupported(f"{value.text} is not integral")
    return integral_to_int(value.value, target, check)


def literal_rule(value: IntLiteral | FPLiteral, target: NumericKind, check: bool) -> Any:
    """
    Правило литерального источника.

    Examples:
        >>> literal_rule(IntLiteral(2 ** 127), INT128, check=True).signal
        <Signal.OVERFLOW: 'OVERFLOW'>
    """
    if isinstance(value, FPLiteral):
        return fp_literal_rule(value, target, check)
    return convert_int(value.value, target, check)


RULES: Dict[Family, Rule] = {family: literal_rule for family in Family}
