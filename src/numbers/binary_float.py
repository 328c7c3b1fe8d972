"""
BinaryFloat — IEEE-754 binary16/32/64

Значение хранится Python float, уже округлённым до ширины формата: каждая
операция вычисляется в double и округляется до формата (для 16/32 бит
двойное округление add/sub/mul/div/sqrt безвредно, т.к. 53 >= 2p + 2).

Политика ошибок:
- div/mod на ноль (включая -0.0) → Failure(OVERFLOW), а не IEEE бесконечность
- переполнение арифметики — IEEE ±Infinity
- переполнение функций math (exp, pow, scale_by_pow) → Failure(OVERFLOW)
- ошибка области (sqrt(-1), asin(2)) → NaN
- mod — остаток со знаком делимого (fmod)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. value всегда представимо в формате kind
2. from_bits(to_bits(v)) побитово равно v (включая -0.0)
3. to_string даёт кратчайший текст, восстанавливающий значение
"""

import math
from dataclasses import dataclass
from typing import Any, Callable, Sequence

from src.core.domain.formats import BINARY_FORMATS, BinaryFormat
from src.core.domain.kinds import FLOAT16, FLOAT32, FLOAT64, Family, NumericKind, RoundingMode
from src.core.domain.outcome import Failure, overflow
from src.core.math import ieee_bits
from src.core.math.numerical_safeguards import (
    apply_binary,
    apply_unary,
    ensure_finite,
    round_integral,
    safe_atanh,
    safe_cbrt,
    safe_log,
)
from src.core.math.word_bits import (
    pattern_from_bits,
    pattern_from_bytes,
    pattern_to_bits,
    pattern_to_bytes,
)
from src.numbers.floats import FloatOperators


@dataclass(frozen=True, repr=False)
class BinaryFloat(FloatOperators):
    """
    Значение binary float kind.

    Attributes:
        kind: FLOAT16, FLOAT32 или FLOAT64
        value: Значение, округлённое до формата
    """

    kind: NumericKind
    value: float

    _NATIVE_OPERANDS = (int, float)

    def __post_init__(self) -> None:
        if self.kind.family != Family.BINARY_FLOAT:
            raise ValueError(f"BinaryFloat requires a binary_float kind, got {self.kind.name}")
        object.__setattr__(
            self, "value", ieee_bits.round_to_format(float(self.value), self.format)
        )

    # =========================================================================
    # КОНСТРУКТОРЫ
    # =========================================================================

    @classmethod
    def of(cls, kind: NumericKind, value: float) -> "BinaryFloat | Failure":
        """
        Значение kind из Python-числа.

        Конечное значение, которое не помещается в формат, → Overflow;
        NaN и ±Infinity принимаются как есть.

        Examples:
            >>> BinaryFloat.of(FLOAT16, 65504.0).value
            65504.0
            >>> BinaryFloat.of(FLOAT16, 1e6).signal
            <Signal.OVERFLOW: 'OVERFLOW'>
        """
        try:
            number = float(value)
        except OverflowError:
            return overflow(f"{value} is too large for {kind.name}")
        if not ieee_bits.fits_format(number, BINARY_FORMATS[kind.bits]):
            return overflow(f"{value} is too large for {kind.name}")
        return cls(kind, number)

    @classmethod
    def infinity(cls, kind: NumericKind, negative: bool = False) -> "BinaryFloat":
        return cls(kind, -math.inf if negative else math.inf)

    @classmethod
    def nan(cls, kind: NumericKind) -> "BinaryFloat":
        return cls(kind, math.nan)

    @classmethod
    def from_pattern(cls, kind: NumericKind, pattern: int) -> "BinaryFloat":
        return cls(kind, ieee_bits.bits_to_float(pattern, BINARY_FORMATS[kind.bits]))

    @classmethod
    def from_bytes(cls, kind: NumericKind, data: bytes) -> "BinaryFloat | Failure":
        """Значение из big-endian байтов (ровно width/8); иначе IllegalArgument."""
        pattern = pattern_from_bytes(data, kind.bits)
        if isinstance(pattern, Failure):
            return pattern
        return cls.from_pattern(kind, pattern)

    @classmethod
    def from_bits(cls, kind: NumericKind, bits: Sequence[int]) -> "BinaryFloat | Failure":
        """Значение из последовательности битов (старший первым)."""
        pattern = pattern_from_bits(bits, kind.bits)
        if isinstance(pattern, Failure):
            return pattern
        return cls.from_pattern(kind, pattern)

    @classmethod
    def parse(cls, kind: NumericKind, text: str) -> "BinaryFloat | Failure":
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
    def format(self) -> BinaryFormat:
        return BINARY_FORMATS[self.kind.bits]

    @property
    def pattern(self) -> int:
        return ieee_bits.float_to_bits(self.value, self.format)

    def to_bytes(self) -> bytes:
        return pattern_to_bytes(self.pattern, self.kind.bits)

    def to_bits(self) -> tuple[int, ...]:
        return pattern_to_bits(self.pattern, self.kind.bits)

    def to_string(self) -> str:
        return ieee_bits.shortest_repr(self.value, self.format)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"{self.kind.name}({self.to_string()})"

    def split(self) -> tuple[int, int, int]:
        """(sign, mantissa, exponent) по битовой раскладке формата."""
        return ieee_bits.split(self.value, self.format)

    # ----- Классификация -----

    def is_finite(self) -> bool:
        return math.isfinite(self.value)

    def is_infinite(self) -> bool:
        return math.isinf(self.value)

    def is_nan(self) -> bool:
        return math.isnan(self.value)

    def signum(self) -> "BinaryFloat":
        """-1, +1, ±0 (знак нуля сохраняется) или NaN."""
        if self.is_nan() or self.value == 0.0:
            return self
        return BinaryFloat(self.kind, math.copysign(1.0, self.value))

    # =========================================================================
    # ВСПОМОГАТЕЛЬНЫЕ
    # =========================================================================

    def _operand(self, other: Any) -> "BinaryFloat | Failure":
        if isinstance(other, BinaryFloat):
            if other.kind != self.kind:
                return self._mismatch(other)
            return other
        if isinstance(other, (int, float)) and not isinstance(other, bool):
            return BinaryFloat.of(self.kind, other)
        return self._mismatch(other)

    def _wrap(self, result: float | Failure) -> "BinaryFloat | Failure":
        if isinstance(result, Failure):
            return result
        return BinaryFloat(self.kind, result)

    def _bounded(self, result: float | Failure, what: str) -> "BinaryFloat | Failure":
        """Результат функции math; конечный double вне формата → Overflow."""
        if isinstance(result, Failure):
            return result
        if not ieee_bits.fits_format(result, self.format):
            return overflow(f"{self.kind.name} {what} overflow")
        return BinaryFloat(self.kind, result)

    def _unary(self, fn: Callable[[float], float]) -> "BinaryFloat | Failure":
        return self._bounded(apply_unary(fn, self.value), fn.__name__)

    def _binary(self, other: Any, op: Callable[[float, float], float]) -> "BinaryFloat | Failure":
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        return self._wrap(apply_binary(op, self.value, operand.value))

    # =========================================================================
    # АРИФМЕТИКА
    # =========================================================================

    def add(self, other: Any) -> "BinaryFloat | Failure":
        return self._binary(other, lambda a, b: a + b)

    def sub(self, other: Any) -> "BinaryFloat | Failure":
        return self._binary(other, lambda a, b: a - b)

    def mul(self, other: Any) -> "BinaryFloat | Failure":
        return self._binary(other, lambda a, b: a * b)

    def div(self, other: Any) -> "BinaryFloat | Failure":
        """Деление; делитель ±0 → Overflow."""
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        if operand.value == 0.0:
            return overflow(f"{self.kind.name} division by zero")
        return BinaryFloat(self.kind, self.value / operand.value)

    def mod(self, other: Any) -> "BinaryFloat | Failure":
        """Остаток fmod (знак делимого); делитель ±0 → Overflow."""
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        if operand.value == 0.0:
            return overflow(f"{self.kind.name} modulo by zero")
        return self._wrap(apply_binary(math.fmod, self.value, operand.value))

    def neg(self) -> "BinaryFloat":
        return BinaryFloat(self.kind, -self.value)

    def abs(self) -> "BinaryFloat":
        return BinaryFloat(self.kind, math.fabs(self.value))

    def compare(self, other: Any) -> int | Failure:
        """Порядок -1/0/1; сравнение с NaN → IllegalArgument."""
        return self._order(other)

    def pow(self, other: Any) -> "BinaryFloat | Failure":
        """
        value ** other.

        pow(±0, y < 0) по IEEE: ±Infinity для нечётного целого y (знак
        основания), иначе +Infinity.
        """
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        base, exponent = self.value, operand.value
        if base == 0.0 and exponent < 0.0:
            odd = exponent.is_integer() and exponent % 2.0 == 1.0
            return BinaryFloat(self.kind, math.copysign(math.inf, base) if odd else math.inf)
        return self._bounded(apply_binary(math.pow, base, exponent), "pow")

    def atan2(self, other: Any) -> "BinaryFloat | Failure":
        """atan2(self, other): угол точки (other, self)."""
        return self._binary(other, math.atan2)

    def scale_by_pow(self, n: int) -> "BinaryFloat | Failure":
        """value * 2^n без промежуточного округления."""
        return self._bounded(apply_binary(math.ldexp, self.value, n), "scale_by_pow")

    # =========================================================================
    # ТРАНСЦЕНДЕНТНЫЕ ФУНКЦИИ
    # =========================================================================

    def exp(self) -> "BinaryFloat | Failure":
        return self._unary(math.exp)

    def log(self) -> "BinaryFloat":
        return BinaryFloat(self.kind, safe_log(math.log, self.value))

    def log2(self) -> "BinaryFloat":
        return BinaryFloat(self.kind, safe_log(math.log2, self.value))

    def log10(self) -> "BinaryFloat":
        return BinaryFloat(self.kind, safe_log(math.log10, self.value))

    def sqrt(self) -> "BinaryFloat | Failure":
        return self._unary(math.sqrt)

    def cbrt(self) -> "BinaryFloat":
        return BinaryFloat(self.kind, safe_cbrt(self.value))

    def sin(self) -> "BinaryFloat | Failure":
        return self._unary(math.sin)

    def cos(self) -> "BinaryFloat | Failure":
        return self._unary(math.cos)

    def tan(self) -> "BinaryFloat | Failure":
        return self._unary(math.tan)

    def asin(self) -> "BinaryFloat | Failure":
        return self._unary(math.asin)

    def acos(self) -> "BinaryFloat | Failure":
        return self._unary(math.acos)

    def atan(self) -> "BinaryFloat | Failure":
        return self._unary(math.atan)

    def sinh(self) -> "BinaryFloat | Failure":
        return self._unary(math.sinh)

    def cosh(self) -> "BinaryFloat | Failure":
        return self._unary(math.cosh)

    def tanh(self) -> "BinaryFloat | Failure":
        return self._unary(math.tanh)

    def asinh(self) -> "BinaryFloat | Failure":
        return self._unary(math.asinh)

    def acosh(self) -> "BinaryFloat | Failure":
        return self._unary(math.acosh)

    def atanh(self) -> "BinaryFloat":
        return BinaryFloat(self.kind, safe_atanh(self.value))

    def deg2rad(self) -> "BinaryFloat | Failure":
        return self._unary(math.radians)

    def rad2deg(self) -> "BinaryFloat | Failure":
        return self._unary(math.degrees)

    # =========================================================================
    # ОКРУГЛЕНИЕ И СОСЕДИ
    # =========================================================================

    def next_up(self) -> "BinaryFloat":
        return BinaryFloat(self.kind, ieee_bits.next_up(self.value, self.format))

    def next_down(self) -> "BinaryFloat":
        return BinaryFloat(self.kind, ieee_bits.next_down(self.value, self.format))

    def round(self, mode: RoundingMode = RoundingMode.TIES_TO_EVEN) -> "BinaryFloat":
        """
        Округление до целого значения в заданном режиме.

        Examples:
            >>> float64(2.5).round(RoundingMode.TIES_TO_AWAY).value
            3.0
        """
        return BinaryFloat(self.kind, round_integral(self.value, mode))

    def floor(self) -> "BinaryFloat":
        return self.round(RoundingMode.TOWARD_NEGATIVE)

    def ceil(self) -> "BinaryFloat":
        return self.round(RoundingMode.TOWARD_POSITIVE)

    def to_finite(self) -> float | Failure:
        """Конечное значение или Overflow (для конверсий)."""
        return ensure_finite(self.value, self.kind.name)


def float16(value: float) -> "BinaryFloat | Failure":
    return BinaryFloat.of(FLOAT16, value)


def float32(value: float) -> "BinaryFloat | Failure":
    return BinaryFloat.of(FLOAT32, value)


def float64(value: float) -> "BinaryFloat | Failure":
    return BinaryFloat.of(FLOAT64, value)
