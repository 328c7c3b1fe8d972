"""
Promotion — расширение 64-битной арифметики до double-word

Арифметика над одним машинным словом, которая при 64-битном переполнении
продвигает результат в LongLong вместо потери битов. Результат — явный
tagged union:

    IntResult = Narrow(value) | Wide(LongLong) | Failure

Narrow — результат помещается в одно слово при заданной знаковости.
Wide — результат требует двух слов.
Failure — результат не помещается даже в 128 бит (для add/sub/mul двух
64-битных слов не возникает; возможен в narrow_result для неограниченных
значений).

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Narrow возвращается iff точный результат помещается в 64 бита
2. to_longlong(result) всегда равен точному результату
"""

from dataclasses import dataclass
from typing import Union

from src.core.domain.outcome import Failure, overflow
from src.core.math.longlong import (
    SIGNED_MAX,
    SIGNED_MIN,
    UNSIGNED_MAX,
    LongLong,
)
from src.core.math.word_bits import (
    MASK64,
    signed_add_overflows,
    signed_sub_overflows,
    to_long,
    unsigned_add_carries,
    unsigned_sub_borrows,
)


@dataclass(frozen=True)
class Narrow:
    """Результат, помещающийся в одно 64-битное слово."""

    value: int


@dataclass(frozen=True)
class Wide:
    """Результат, требующий двух слов."""

    value: LongLong


IntResult = Union[Narrow, Wide, Failure]


def _word(value: int, signed: bool) -> int:
    return to_long(value) if signed else value & MASK64


def add_words(a: int, b: int, signed: bool) -> IntResult:
    """
    Сложение двух 64-битных слов с продвижением.

    Args:
        a, b: Слова (signed long или unsigned паттерн по signed)
        signed: Знаковость операции
    """
    a, b = _word(a, signed), _word(b, signed)
    if signed:
        result = to_long(a + b)
        if not signed_add_overflows(a, b, result, 64):
            return Narrow(result)
    else:
        result = (a + b) & MASK64
        if not unsigned_add_carries(a, b, result, 64):
            return Narrow(result)
    return Wide(LongLong.from_int(a + b))


def sub_words(a: int, b: int, signed: bool) -> IntResult:
    """
    Вычитание двух 64-битных слов с продвижением.

    Беззнаковое вычитание с заёмом даёт отрицательный результат, который
    не представим как unsigned → Failure(OVERFLOW).
    """
    a, b = _word(a, signed), _word(b, signed)
    if signed:
        result = to_long(a - b)
        if not signed_sub_overflows(a, b, result, 64):
            return Narrow(result)
        return Wide(LongLong.from_int(a - b))

    result = (a - b) & MASK64
    if unsigned_sub_borrows(a, b, result, 64):
        return overflow("unsigned word sub")
    return Narrow(result)


def mul_words(a: int, b: int, signed: bool) -> IntResult:
    """Умножение двух 64-битных слов с продвижением (произведение ≤ 128 бит)."""
    a, b = _word(a, signed), _word(b, signed)
    return narrow_result(a * b, signed)


def narrow_result(value: int, signed: bool) -> IntResult:
    """
    Классификация точного результата: Narrow, Wide или Failure.

    Returns:
        Narrow если значение помещается в слово, Wide если в два слова,
        иначе Failure(OVERFLOW)
    """
    if signed:
        if -(1 << 63) <= value < (1 << 63):
            return Narrow(value)
        if SIGNED_MIN <= value <= SIGNED_MAX:
            return Wide(LongLong.from_int(value))
    else:
        if 0 <= value <= MASK64:
            return Narrow(value)
        if 0 <= value <= UNSIGNED_MAX:
            return Wide(LongLong.from_int(value))
    return overflow("result exceeds 128 bits")


def narrow(value: LongLong, signed: bool) -> IntResult:
    """Свернуть double-word в Narrow, если он помещается в одно слово."""
    if value.is_small(signed):
        return Narrow(value.low_long if signed else value.low)
    return Wide(value)


def to_longlong(result: IntResult, signed: bool) -> LongLong:
    """
    Развернуть Narrow/Wide в LongLong.

    Raises:
        NumericOverflow: Для Failure
    """
    if isinstance(result, Failure):
        result.raise_error()
    if isinstance(result, Wide):
        return result.value
    return LongLong.from_long(result.value, signed)
