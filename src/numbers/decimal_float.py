"""
DecimalFloat — IEEE-754-2008 decimal32/64/128

Значение хранится decimal.Decimal, округлённым контекстом формата
(prec, Emin/Emax, clamp=1). Арифметика выполняется в новом контексте
формата на каждый вызов; ловушки контекста отключены, ядро само решает,
что считать Overflow.

Функции exp, ln, log10, sqrt, pow, scale_by_pow, next_up/next_down и round
вычисляются в decimal нативно; остальные трансцендентные функции — через
binary64 с округлением результата до формата.

Политика ошибок:
- div/mod на ноль → Failure(OVERFLOW)
- mod с отрицательным делителем → Failure(ILLEGAL_ARGUMENT); результат mod
  всегда неотрицателен
- переполнение exp/pow/scale_by_pow → Failure(OVERFLOW); add/sub/mul дают ±Infinity

Битовое кодирование — DPD (см. src.core.math.declets).

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. value всегда представимо в формате kind (clamp=1)
2. from_bytes(to_bytes(v)) == v, включая quantum, ±Infinity, NaN и sNaN
3. Порядковые сравнения с NaN не поднимают InvalidOperation
"""

import decimal
import math
from dataclasses import dataclass
from typing import Any, Callable, Sequence

from src.core.domain.formats import DECIMAL_FORMATS, DecimalFormat
from src.core.domain.kinds import DEC32, DEC64, DEC128, Family, NumericKind, RoundingMode
from src.core.domain.outcome import Failure, illegal_argument, overflow, unsupported
from src.core.math import declets
from src.core.math.numerical_safeguards import apply_binary, apply_unary, safe_atanh, safe_cbrt
from src.core.math.word_bits import (
    pattern_from_bits,
    pattern_from_bytes,
    pattern_to_bits,
    pattern_to_bytes,
)
from src.numbers.floats import FloatOperators

_NAN = decimal.Decimal("NaN")
_ONE = decimal.Decimal(1)


def _remainder_context(
    dividend: decimal.Decimal, divisor: decimal.Decimal, fmt: DecimalFormat
) -> decimal.Context:
    """
    Контекст точного остатка.

    Точности формата не хватает, когда целая часть частного длиннее prec
    (decimal даёт DivisionImpossible); остаток конечных операндов точен
    при prec, покрывающей цифры делимого до младшей экспоненты операндов.
    """
    if not (dividend.is_finite() and divisor.is_finite()) or dividend.is_zero():
        return fmt.context()
    lowest = min(dividend.as_tuple().exponent, divisor.as_tuple().exponent)
    return decimal.Context(
        prec=max(fmt.precision, dividend.adjusted() - lowest + 2),
        Emin=decimal.MIN_EMIN,
        Emax=decimal.MAX_EMAX,
        flags=[],
        traps=[],
    )


@dataclass(frozen=True, repr=False)
class DecimalFloat(FloatOperators):
    """
    Значение decimal float kind.

    Attributes:
        kind: DEC32, DEC64 или DEC128
        value: Значение, округлённое контекстом формата
    """

    kind: NumericKind
    value: decimal.Decimal

    _NATIVE_OPERANDS = (int, decimal.Decimal)

    def __post_init__(self) -> None:
        if self.kind.family != Family.DECIMAL_FLOAT:
            raise ValueError(f"DecimalFloat requires a decimal_float kind, got {self.kind.name}")
        object.__setattr__(self, "value", self.format.context().create_decimal(self.value))

    # =========================================================================
    # КОНСТРУКТОРЫ
    # =========================================================================

    @classmethod
    def of(cls, kind: NumericKind, value: int | decimal.Decimal) -> "DecimalFloat | Failure":
        """
        Значение kind из int или Decimal с округлением до формата.

        Конечное значение вне диапазона формата → Overflow.

        Examples:
            >>> DecimalFloat.of(DEC32, decimal.Decimal("1.23456789")).value
            Decimal('1.234568')
            >>> DecimalFloat.of(DEC32, 10 ** 200).signal
            <Signal.OVERFLOW: 'OVERFLOW'>
        """
        context = DECIMAL_FORMATS[kind.bits].context()
        rounded = context.create_decimal(value)
        if context.flags[decimal.Overflow]:
            return overflow(f"{value} is too large for {kind.name}")
        return cls(kind, rounded)

    @classmethod
    def infinity(cls, kind: NumericKind, negative: bool = False) -> "DecimalFloat":
        return cls(kind, decimal.Decimal("-Infinity" if negative else "Infinity"))

    @classmethod
    def nan(cls, kind: NumericKind, signaling: bool = False) -> "DecimalFloat":
        return cls(kind, decimal.Decimal("sNaN" if signaling else "NaN"))

    @classmethod
    def from_pattern(cls, kind: NumericKind, pattern: int) -> "DecimalFloat":
        return cls(kind, declets.decode(pattern, DECIMAL_FORMATS[kind.bits]))

    @classmethod
    def from_bytes(cls, kind: NumericKind, data: bytes) -> "DecimalFloat | Failure":
        """Значение из DPD big-endian байтов (ровно k/8); иначе IllegalArgument."""
        pattern = pattern_from_bytes(data, kind.bits)
        if isinstance(pattern, Failure):
            return pattern
        return cls.from_pattern(kind, pattern)

    @classmethod
    def from_bits(cls, kind: NumericKind, bits: Sequence[int]) -> "DecimalFloat | Failure":
        pattern = pattern_from_bits(bits, kind.bits)
        if isinstance(pattern, Failure):
            return pattern
        return cls.from_pattern(kind, pattern)

    @classmethod
    def parse(cls, kind: NumericKind, text: str) -> "DecimalFloat | Failure":
        """Разбор floating-литерала и конверсия в kind."""
        from src.numbers.literals import parse_fp_literal

        literal = parse_fp_literal(text)
        if isinstance(literal, Failure):
            return literal
        return literal.convert_to(kind)

    # =========================================================================
    # ПРЕДСТАВЛЕНИЯ
    # =========================================================================

    @property
    def format(self) -> DecimalFormat:
        return DECIMAL_FORMATS[self.kind.bits]

    @property
    def pattern(self) -> int:
        return declets.encode(self.value, self.format)

    def to_bytes(self) -> bytes:
        return pattern_to_bytes(self.pattern, self.kind.bits)

    def to_bits(self) -> tuple[int, ...]:
        return pattern_to_bits(self.pattern, self.kind.bits)

    def to_string(self) -> str:
        """
        Канонический текст: инженерная нотация без хвостовых нулей.

        Examples:
            >>> dec64("1.50").to_string()
            '1.5'
            >>> dec64("15E+6").to_string()
            '15E+6'
        """
        if self.value.is_nan():
            return "sNaN" if self.value.is_snan() else "NaN"
        if self.value.is_infinite():
            return "-Infinity" if self.value.is_signed() else "Infinity"
        if self.value.is_zero():
            return "-0" if self.value.is_signed() else "0"
        return self.format.context().normalize(self.value).to_eng_string()

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"{self.kind.name}({self.to_string()})"

    # Равенство и хэш по DPD паттерну (quantum и знак нуля различаются)
    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, DecimalFloat):
            return NotImplemented
        return self.kind == other.kind and self.pattern == other.pattern

    def __hash__(self) -> int:
        return hash((self.kind.name, self.pattern))

    def split(self) -> tuple[int, int, int] | Failure:
        """
        Разложение на (sign, coefficient, exponent): value = (-1)^sign * coefficient * 10^exponent.

        Для ±Infinity и NaN → Failure(UNSUPPORTED_OPERATION).
        """
        if not self.value.is_finite():
            return unsupported(f"{self.kind.name} split of a non-finite value")
        sign, digits, exponent = self.value.as_tuple()
        return sign, int("".join(map(str, digits))), exponent

    # ----- Классификация -----

    def is_finite(self) -> bool:
        return self.value.is_finite()

    def is_infinite(self) -> bool:
        return self.value.is_infinite()

    def is_nan(self) -> bool:
        return self.value.is_nan()

    def is_signaling_nan(self) -> bool:
        return self.value.is_snan()

    def signum(self) -> "DecimalFloat":
        if self.is_nan() or self.value.is_zero():
            return self
        return DecimalFloat(self.kind, _ONE.copy_sign(self.value))

    # =========================================================================
    # ВСПОМОГАТЕЛЬНЫЕ
    # =========================================================================

    def _operand(self, other: Any) -> "DecimalFloat | Failure":
        if isinstance(other, DecimalFloat):
            if other.kind != self.kind:
                return self._mismatch(other)
            return other
        if isinstance(other, (int, decimal.Decimal)) and not isinstance(other, bool):
            return DecimalFloat.of(self.kind, other)
        return self._mismatch(other)

    def _binary(
        self, other: Any, op: Callable[[decimal.Context, Any, Any], decimal.Decimal]
    ) -> "DecimalFloat | Failure":
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        return DecimalFloat(self.kind, op(self.format.context(), self.value, operand.value))

    def _bounded(self, op: Callable[[decimal.Context], decimal.Decimal], what: str) -> "DecimalFloat | Failure":
        context = self.format.context()
        result = op(context)
        if context.flags[decimal.Overflow]:
            return overflow(f"{self.kind.name} {what} overflow")
        return DecimalFloat(self.kind, result)

    def _via_float(self, fn: Callable[[float], float]) -> "DecimalFloat | Failure":
        if self.is_nan():
            return DecimalFloat(self.kind, _NAN)
        result = apply_unary(fn, float(self.value))
        if isinstance(result, Failure):
            return result
        return DecimalFloat(self.kind, self.format.context().create_decimal_from_float(result))

    # =========================================================================
    # АРИФМЕТИКА
    # =========================================================================

    def add(self, other: Any) -> "DecimalFloat | Failure":
        return self._binary(other, decimal.Context.add)

    def sub(self, other: Any) -> "DecimalFloat | Failure":
        return self._binary(other, decimal.Context.subtract)

    def mul(self, other: Any) -> "DecimalFloat | Failure":
        return self._binary(other, decimal.Context.multiply)

    def div(self, other: Any) -> "DecimalFloat | Failure":
        """Деление; делитель ±0 → Overflow."""
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        if operand.value.is_zero():
            return overflow(f"{self.kind.name} division by zero")
        return DecimalFloat(self.kind, self.format.context().divide(self.value, operand.value))

    def mod(self, other: Any) -> "DecimalFloat | Failure":
        """
        Неотрицательный остаток по положительному модулю.

        Модуль ±0 → Overflow; отрицательный модуль → IllegalArgument.

        Examples:
            >>> dec64("-7").mod(3).value
            Decimal('2')
        """
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        if operand.value.is_zero():
            return overflow(f"{self.kind.name} modulo by zero")
        if operand.value.is_signed() and not operand.value.is_nan():
            return illegal_argument("Modulus is negative")
        context = _remainder_context(self.value, operand.value, self.format)
        remainder = context.remainder(self.value, operand.value)
        if remainder.is_signed() and not remainder.is_nan() and not remainder.is_zero():
            remainder = context.add(remainder, operand.value)
        return DecimalFloat(self.kind, remainder)

    def neg(self) -> "DecimalFloat":
        return DecimalFloat(self.kind, self.value.copy_negate())

    def abs(self) -> "DecimalFloat":
        return DecimalFloat(self.kind, self.value.copy_abs())

    def compare(self, other: Any) -> int | Failure:
        """Порядок -1/0/1; сравнение с NaN → IllegalArgument."""
        return self._order(other)

    def pow(self, other: Any) -> "DecimalFloat | Failure":
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        return self._bounded(lambda context: context.power(self.value, operand.value), "pow")

    def scale_by_pow(self, n: int) -> "DecimalFloat | Failure":
        """value * 10^n без промежуточного округления."""
        limit = 2 * (self.format.emax + self.format.precision)
        count = decimal.Decimal(max(-limit, min(limit, n)))
        return self._bounded(lambda context: context.scaleb(self.value, count), "scale_by_pow")

    def atan2(self, other: Any) -> "DecimalFloat | Failure":
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        if self.is_nan() or operand.is_nan():
            return DecimalFloat(self.kind, _NAN)
        result = apply_binary(math.atan2, float(self.value), float(operand.value))
        if isinstance(result, Failure):
            return result
        return DecimalFloat(self.kind, self.format.context().create_decimal_from_float(result))

    # =========================================================================
    # ТРАНСЦЕНДЕНТНЫЕ ФУНКЦИИ
    # =========================================================================

    def exp(self) -> "DecimalFloat | Failure":
        return self._bounded(lambda context: context.exp(self.value), "exp")

    def log(self) -> "DecimalFloat":
        return DecimalFloat(self.kind, self.format.context().ln(self.value))

    def log10(self) -> "DecimalFloat":
        return DecimalFloat(self.kind, self.format.context().log10(self.value))

    def log2(self) -> "DecimalFloat":
        context = self.format.context()
        context.prec += 3
        return DecimalFloat(self.kind, context.divide(context.ln(self.value), context.ln(2)))

    def sqrt(self) -> "DecimalFloat":
        return DecimalFloat(self.kind, self.format.context().sqrt(self.value))

    def cbrt(self) -> "DecimalFloat | Failure":
        return self._via_float(safe_cbrt)

    def sin(self) -> "DecimalFloat | Failure":
        return self._via_float(math.sin)

    def cos(self) -> "DecimalFloat | Failure":
        return self._via_float(math.cos)

    def tan(self) -> "DecimalFloat | Failure":
        return self._via_float(math.tan)

    def asin(self) -> "DecimalFloat | Failure":
        return self._via_float(math.asin)

    def acos(self) -> "DecimalFloat | Failure":
        return self._via_float(math.acos)

    def atan(self) -> "DecimalFloat | Failure":
        return self._via_float(math.atan)

    def sinh(self) -> "DecimalFloat | Failure":
        return self._via_float(math.sinh)

    def cosh(self) -> "DecimalFloat | Failure":
        return self._via_float(math.cosh)

    def tanh(self) -> "DecimalFloat | Failure":
        return self._via_float(math.tanh)

    def asinh(self) -> "DecimalFloat | Failure":
        return self._via_float(math.asinh)

    def acosh(self) -> "DecimalFloat | Failure":
        return self._via_float(math.acosh)

    def atanh(self) -> "DecimalFloat | Failure":
        return self._via_float(safe_atanh)

    def deg2rad(self) -> "DecimalFloat | Failure":
        return self._via_float(math.radians)

    def rad2deg(self) -> "DecimalFloat | Failure":
        return self._via_float(math.degrees)

    # =========================================================================
    # ОКРУГЛЕНИЕ И СОСЕДИ
    # =========================================================================

    def next_up(self) -> "DecimalFloat":
        return DecimalFloat(self.kind, self.format.context().next_plus(self.value))

    def next_down(self) -> "DecimalFloat":
        return DecimalFloat(self.kind, self.format.context().next_minus(self.value))

    def round(self, mode: RoundingMode = RoundingMode.TIES_TO_EVEN) -> "DecimalFloat":
        """
        Округление до целого значения в заданном режиме.

        Examples:
            >>> dec64("2.5").round(RoundingMode.TIES_TO_AWAY).value
            Decimal('3')
        """
        context = self.format.context(mode.decimal_rounding)
        return DecimalFloat(self.kind, context.to_integral_value(self.value))

    def floor(self) -> "DecimalFloat":
        return self.round(RoundingMode.TOWARD_NEGATIVE)

    def ceil(self) -> "DecimalFloat":
        return self.round(RoundingMode.TOWARD_POSITIVE)


def dec32(value: int | str | decimal.Decimal) -> "DecimalFloat | Failure":
    return DecimalFloat.of(DEC32, decimal.Decimal(value))


def dec64(value: int | str | decimal.Decimal) -> "DecimalFloat | Failure":
    return DecimalFloat.of(DEC64, decimal.Decimal(value))


def dec128(value: int | str | decimal.Decimal) -> "DecimalFloat | Failure":
    return DecimalFloat.of(DEC128, decimal.Decimal(value))
