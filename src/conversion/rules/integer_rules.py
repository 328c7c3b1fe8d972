"""
Integer Rules — конверсии из целочисленных источников

Источники: FixedInt, WideInt, BigInt и Char. Значение источника точно
извлекается как Python int; дальше действует общий закон диапазона целевого
kind. Расширение всегда точно; сужение проверяется или маскируется.
"""

from typing import Any, Callable, Dict

from src.conversion.rules.targets import (
    bigint_from_int,
    binary_from_exact,
    char_from_int,
    decimal_from_exact,
    fixed_from_int,
    literal_from_int,
    wide_from_int,
)
from src.core.domain.kinds import Family, NumericKind

Rule = Callable[[Any, NumericKind, bool], Any]


def convert_int(value: int, target: NumericKind, check: bool) -> Any:
    """
    Точное целое → значение целевого kind.

    Args:
        value: Точное значение источника
        target: Целевой kind
        check: Проверять диапазон (иначе маскировать)

    Returns:
        Значение целевого kind или Failure

    Examples:
        >>> convert_int(300, UINT8, check=True).signal
        <Signal.OVERFLOW: 'OVERFLOW'>
        >>> convert_int(300, UINT8, check=False).value
        44
    """
    family = target.family
    if family == Family.FIXED_INT:
        return fixed_from_int(value, target, check)
    if family == Family.INT128:
        return wide_from_int(value, target, check)
    if family == Family.BIGINT:
        return bigint_from_int(value, target, check)
    if family == Family.CODE_POINT:
        return char_from_int(value, target, check)
    if family == Family.LITERAL:
        return literal_from_int(value, target, check)
    if family == Family.BINARY_FLOAT:
        return binary_from_exact(value, target)
    return decimal_from_exact(value, target)


def integer_rule(value: Any, target: NumericKind, check: bool) -> Any:
    """Правило целочисленного источника: извлечение int и общий закон."""
    return convert_int(value.to_int(), target, check)


INTEGER_SOURCES = (Family.FIXED_INT, Family.INT128, Family.BIGINT, Family.CODE_POINT)

RULES: Dict[Family, Rule] = {family: integer_rule for family in Family}
