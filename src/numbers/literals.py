"""
Literals — числовые литералы IntLiteral и FPLiteral

Литерал хранит разобранное неограниченное значение и исходный текст.
Если литерал построен из значения (результат арифметики), текст вычисляется
из значения при первом запросе и кэшируется; повторно не вычисляется.

Синтаксис:
- IntLiteral: [+-] десятичные цифры, либо префикс 0x / 0o / 0b;
  '_' допускается между цифрами (1_000_000, 0xFF_FF)
- FPLiteral: [+-] цифры [. цифры] [e|E [+-] цифры]

Некорректный текст → Failure(ILLEGAL_ARGUMENT), никогда не ноль по умолчанию.

Сужение литерала до конкретного kind — чистая функция (см.
src.conversion): одинаковый литерал → одинаковое значение или ошибка.
"""

import decimal
import re
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any, Final

from src.core.domain.formats import fp_literal_context
from src.core.domain.kinds import FP_LITERAL, INT_LITERAL, NumericKind
from src.core.domain.outcome import Failure, illegal_argument, overflow
from src.core.math.word_bits import trunc_divmod
from src.numbers.base import IntegerOperators, NumericOperators

# =============================================================================
# СИНТАКСИС
# =============================================================================

_INT_LITERAL_RE: Final[re.Pattern] = re.compile(
    r"""
    (?P<sign>[+-])?
    (?:
        0[xX](?P<hex>[0-9a-fA-F](?:_*[0-9a-fA-F])*)
      | 0[oO](?P<oct>[0-7](?:_*[0-7])*)
      | 0[bB](?P<bin>[01](?:_*[01])*)
      | (?P<dec>[0-9](?:_*[0-9])*)
    )
    """,
    re.VERBOSE,
)

_FP_LITERAL_RE: Final[re.Pattern] = re.compile(
    r"[+-]?[0-9](?:_*[0-9])*(?:\.[0-9](?:_*[0-9])*)?(?:[eE][+-]?[0-9]+)?"
)

_RADIX: Final[dict[str, int]] = {"hex": 16, "oct": 8, "bin": 2, "dec": 10}

# Максимальный счётчик сдвига литерала
MAX_SHIFT_COUNT: Final[int] = (1 << 31) - 1


def parse_int_literal(text: str) -> "IntLiteral | Failure":
    """
    Разбор текста целочисленного литерала.

    Args:
        text: Исходный текст

    Returns:
        IntLiteral с сохранённым текстом или Failure(ILLEGAL_ARGUMENT)

    Examples:
        >>> parse_int_literal("-1_000").value
        -1000
        >>> parse_int_literal("0xFF").value
        255
        >>> parse_int_literal("12a").signal
        <Signal.ILLEGAL_ARGUMENT: 'ILLEGAL_ARGUMENT'>
    """
    match = _INT_LITERAL_RE.fullmatch(text)
    if match is None:
        return illegal_argument(f'Invalid number "{text}"')
    for group, radix in _RADIX.items():
        digits = match.group(group)
        if digits is not None:
            value = int(digits.replace("_", ""), radix)
            break
    if match.group("sign") == "-":
        value = -value
    return IntLiteral(value, text)


def parse_fp_literal(text: str) -> "FPLiteral | Failure":
    """
    Разбор текста floating-литерала.

    Returns:
        FPLiteral с сохранённым текстом или Failure(ILLEGAL_ARGUMENT)

    Examples:
        >>> parse_fp_literal("1.5e3").value
        Decimal('1.5E+3')
        >>> parse_fp_literal("1.5.3").signal
        <Signal.ILLEGAL_ARGUMENT: 'ILLEGAL_ARGUMENT'>
    """
    if _FP_LITERAL_RE.fullmatch(text) is None:
        return illegal_argument(f'Invalid number "{text}"')
    return FPLiteral(decimal.Decimal(text.replace("_", "")), text)


# =============================================================================
# INT LITERAL
# =============================================================================


@dataclass(frozen=True, repr=False)
class IntLiteral(IntegerOperators):
    """
    Целочисленный литерал: неограниченное значение + исходный текст.

    Attributes:
        value: Значение
        source_text: Исходный текст (None для результатов арифметики)
    """

    value: int
    source_text: str | None = field(default=None, compare=False)

    @property
    def kind(self) -> NumericKind:
        return INT_LITERAL

    @cached_property
    def text(self) -> str:
        """Текст литерала: исходный или вычисленный один раз из значения."""
        if self.source_text is not None:
            return self.source_text
        return str(self.value)

    def to_int(self) -> int:
        return self.value

    def to_string(self) -> str:
        return self.text

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"IntLiteral({self.text})"

    def _operand(self, other: Any) -> "IntLiteral | Failure":
        if isinstance(other, IntLiteral):
            return other
        if isinstance(other, int) and not isinstance(other, bool):
            return IntLiteral(other)
        return self._mismatch(other)

    def _binary(self, other: Any, op: Any) -> "IntLiteral | Failure":
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        return IntLiteral(op(self.value, operand.value))

    def _shift_count(self, count: Any) -> int | Failure:
        count = count.value if isinstance(count, IntLiteral) else count
        if count > MAX_SHIFT_COUNT:
            return overflow(f"Shift count too large: {count}")
        if count < 0:
            return illegal_argument(f"Negative shift count: {count}")
        return count

    # ----- Арифметика -----

    def add(self, other: Any) -> "IntLiteral | Failure":
        return self._binary(other, lambda a, b: a + b)

    def sub(self, other: Any) -> "IntLiteral | Failure":
        return self._binary(other, lambda a, b: a - b)

    def mul(self, other: Any) -> "IntLiteral | Failure":
        return self._binary(other, lambda a, b: a * b)

    def div(self, other: Any) -> "IntLiteral | Failure":
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        if operand.value == 0:
            return overflow("IntLiteral division by zero")
        return IntLiteral(self.value // operand.value)

    def mod(self, other: Any) -> "IntLiteral | Failure":
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        if operand.value == 0:
            return overflow("IntLiteral modulo by zero")
        return IntLiteral(self.value % operand.value)

    def divrem(self, other: Any) -> "tuple[IntLiteral, IntLiteral] | Failure":
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        if operand.value == 0:
            return overflow("IntLiteral division by zero")
        quotient, remainder = trunc_divmod(self.value, operand.value)
        return IntLiteral(quotient), IntLiteral(remainder)

    def neg(self) -> "IntLiteral":
        return IntLiteral(-self.value)

    def abs(self) -> "IntLiteral":
        return IntLiteral(abs(self.value))

    def compare(self, other: Any) -> int | Failure:
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        return (self.value > operand.value) - (self.value < operand.value)

    # ----- Побитовые операции -----

    def and_(self, other: Any) -> "IntLiteral | Failure":
        return self._binary(other, lambda a, b: a & b)

    def or_(self, other: Any) -> "IntLiteral | Failure":
        return self._binary(other, lambda a, b: a | b)

    def xor(self, other: Any) -> "IntLiteral | Failure":
        return self._binary(other, lambda a, b: a ^ b)

    def not_(self) -> "IntLiteral":
        return IntLiteral(~self.value)

    def shl(self, count: Any) -> "IntLiteral | Failure":
        """Сдвиг влево; счётчик больше 2^31 - 1 → Overflow."""
        count = self._shift_count(count)
        if isinstance(count, Failure):
            return count
        return IntLiteral(self.value << count)

    def shr(self, count: Any) -> "IntLiteral | Failure":
        count = self._shift_count(count)
        if isinstance(count, Failure):
            return count
        return IntLiteral(self.value >> count)

    def ushr(self, count: Any) -> "IntLiteral | Failure":
        """Логический сдвиг: для отрицательных значений совпадает с арифметическим."""
        return self.shr(count)


# =============================================================================
# FP LITERAL
# =============================================================================


@dataclass(frozen=True, repr=False)
class FPLiteral(NumericOperators):
    """
    Floating-литерал: точное десятичное значение + исходный текст.

    Attributes:
        value: Значение (decimal.Decimal, всегда конечное)
        source_text: Исходный текст (None для результатов арифметики)
    """

    value: decimal.Decimal
    source_text: str | None = field(default=None, compare=False)

    _NATIVE_OPERANDS = (int, decimal.Decimal)

    @property
    def kind(self) -> NumericKind:
        return FP_LITERAL

    @cached_property
    def text(self) -> str:
        if self.source_text is not None:
            return self.source_text
        return str(self.value)

    def to_string(self) -> str:
        return self.text

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"FPLiteral({self.text})"

    def _operand(self, other: Any) -> "FPLiteral | Failure":
        if isinstance(other, FPLiteral):
            return other
        if isinstance(other, IntLiteral):
            return FPLiteral(decimal.Decimal(other.value))
        if isinstance(other, (int, decimal.Decimal)) and not isinstance(other, bool):
            return FPLiteral(decimal.Decimal(other))
        return self._mismatch(other)

    def _binary(self, other: Any, op: Any) -> "FPLiteral | Failure":
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        return FPLiteral(op(fp_literal_context(), self.value, operand.value))

    def add(self, other: Any) -> "FPLiteral | Failure":
        return self._binary(other, decimal.Context.add)

    def sub(self, other: Any) -> "FPLiteral | Failure":
        return self._binary(other, decimal.Context.subtract)

    def mul(self, other: Any) -> "FPLiteral | Failure":
        return self._binary(other, decimal.Context.multiply)

    def div(self, other: Any) -> "FPLiteral | Failure":
        """Деление; деление на ноль → Overflow."""
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        if operand.value.is_zero():
            return overflow("FPLiteral division by zero")
        return FPLiteral(fp_literal_context().divide(self.value, operand.value))

    def mod(self, other: Any) -> "FPLiteral | Failure":
        """Остаток со знаком делимого; модуль по нулю → Overflow."""
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        if operand.value.is_zero():
            return overflow("FPLiteral modulo by zero")
        return FPLiteral(fp_literal_context().remainder(self.value, operand.value))

    def neg(self) -> "FPLiteral":
        return FPLiteral(self.value.copy_negate())

    def abs(self) -> "FPLiteral":
        return FPLiteral(self.value.copy_abs())

    def compare(self, other: Any) -> int | Failure:
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        return (self.value > operand.value) - (self.value < operand.value)

    def __truediv__(self, other: Any) -> Any:
        return self.__floordiv__(other)
