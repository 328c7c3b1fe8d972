"""
WideInt — 128-битные целые Int128 / UInt128

Тонкая обёртка над LongLong: каждый оператор маршрутизируется через
double-word core. Checked kind транслирует Overflow ядра в Failure(OVERFLOW);
unchecked kind игнорирует переполнение и берёт результат по модулю 2^128.

Для одно-словных операндов add/sub/mul идут через promotion (Narrow/Wide),
иначе — через двухсловные операции LongLong.

Byte-кодирование: две big-endian половины по 8 байт, старшая первой.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Checked результат вне 128-битного диапазона → Failure(OVERFLOW)
2. Unchecked результат всегда по модулю 2^128
3. negate UInt128 → Failure(UNSUPPORTED_OPERATION)
"""

from dataclasses import dataclass
from typing import Any, Sequence

from src.core.domain.kinds import Family, NumericKind, complement_of, unchecked_of
from src.core.domain.outcome import Failure, illegal_argument, overflow, unsupported
from src.core.math import word_bits
from src.core.math.longlong import BITS, MASK128, LongLong
from src.core.math.promotion import add_words, mul_words, sub_words, to_longlong
from src.numbers.base import IntegerOperators


@dataclass(frozen=True, repr=False)
class WideInt(IntegerOperators):
    """
    Значение 128-битного kind.

    Attributes:
        kind: Kind семейства INT128
        ll: Double-word представление
    """

    kind: NumericKind
    ll: LongLong

    def __post_init__(self) -> None:
        if self.kind.family != Family.INT128:
            raise ValueError(f"WideInt requires an int128 kind, got {self.kind.name}")

    # =========================================================================
    # КОНСТРУКТОРЫ
    # =========================================================================

    @classmethod
    def of(cls, kind: NumericKind, value: int) -> "WideInt | Failure":
        """
        Значение kind из Python int.

        Checked kind: значение вне диапазона → Failure(OVERFLOW);
        unchecked kind: по модулю 2^128.
        """
        if kind.checked and not kind.contains(value):
            return overflow(f"{value} is out of range for {kind.name}")
        return cls(kind, LongLong.from_int(value))

    @classmethod
    def wrap(cls, kind: NumericKind, value: int) -> "WideInt":
        return cls(kind, LongLong.from_int(value))

    @classmethod
    def from_bytes(cls, kind: NumericKind, data: bytes) -> "WideInt | Failure":
        """Ровно 16 байт: две big-endian половины, старшая первой."""
        ll = LongLong.from_bytes(bytes(data))
        if isinstance(ll, Failure):
            return ll
        return cls(kind, ll)

    @classmethod
    def from_bits(cls, kind: NumericKind, bits: Sequence[int]) -> "WideInt | Failure":
        """Ровно 128 бит, старший первым."""
        pattern = word_bits.pattern_from_bits(bits, BITS)
        if isinstance(pattern, Failure):
            return pattern
        return cls(kind, LongLong.from_int(pattern))

    @classmethod
    def parse(cls, kind: NumericKind, text: str) -> "WideInt | Failure":
        """Значение из текста литерала; вне диапазона → Overflow."""
        from src.numbers.literals import parse_int_literal

        literal = parse_int_literal(text)
        if isinstance(literal, Failure):
            return literal
        if not kind.contains(literal.value):
            return overflow(f"{text} is out of range for {kind.name}")
        return cls.wrap(kind, literal.value)

    # =========================================================================
    # СВОЙСТВА
    # =========================================================================

    @property
    def signed(self) -> bool:
        return self.kind.signed

    @property
    def pattern(self) -> int:
        return self.ll.to_unsigned_int()

    def to_int(self) -> int:
        return self.ll.to_int() if self.signed else self.ll.to_unsigned_int()

    def is_small(self) -> bool:
        """Значение помещается в одно 64-битное слово."""
        return self.ll.is_small(self.signed)

    def to_string(self) -> str:
        return self.ll.to_string(self.signed)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"{self.kind.name}({self.to_string()})"

    def to_bytes(self) -> bytes:
        return self.ll.to_bytes()

    def to_bits(self) -> tuple[int, ...]:
        return word_bits.pattern_to_bits(self.pattern, BITS)

    # =========================================================================
    # ВСПОМОГАТЕЛЬНЫЕ
    # =========================================================================

    def _operand(self, other: Any) -> "WideInt | Failure":
        if isinstance(other, WideInt):
            if other.kind != self.kind:
                return self._mismatch(other)
            return other
        if isinstance(other, int) and not isinstance(other, bool):
            return WideInt.of(self.kind, other)
        return self._mismatch(other)

    def _finish(self, result: "LongLong | Failure", exact: int) -> "WideInt | Failure":
        """
        Результат операции ядра по политике kind.

        Args:
            result: Результат LongLong-операции (или Failure ядра)
            exact: Точный результат, используется unchecked kind при Failure
        """
        if isinstance(result, Failure):
            if self.kind.checked:
                return overflow(f"{self.kind.name}: {result.reason}")
            return WideInt.wrap(self.kind, exact)
        return WideInt(self.kind, result)

    def _small_words(self, operand: "WideInt") -> tuple[int, int] | None:
        if self.is_small() and operand.is_small():
            if self.signed:
                return self.ll.low_long, operand.ll.low_long
            return self.ll.low, operand.ll.low
        return None

    # =========================================================================
    # АРИФМЕТИКА
    # =========================================================================

    def add(self, other: Any) -> "WideInt | Failure":
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        words = self._small_words(operand)
        if words is not None:
            return WideInt(self.kind, to_longlong(add_words(*words, self.signed), self.signed))
        if self.signed:
            result = self.ll.add(operand.ll)
        else:
            result = self.ll.add_unsigned(operand.ll)
        return self._finish(result, self.to_int() + operand.to_int())

    def sub(self, other: Any) -> "WideInt | Failure":
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        words = self._small_words(operand)
        if words is not None and self.signed:
            return WideInt(self.kind, to_longlong(sub_words(*words, True), True))
        if self.signed:
            result = self.ll.sub(operand.ll)
        else:
            result = self.ll.sub_unsigned(operand.ll)
        return self._finish(result, self.to_int() - operand.to_int())

    def mul(self, other: Any) -> "WideInt | Failure":
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        words = self._small_words(operand)
        if words is not None:
            product = mul_words(*words, self.signed)
            if not isinstance(product, Failure):
                return WideInt(self.kind, to_longlong(product, self.signed))
        if self.signed:
            result = self.ll.mul(operand.ll)
        else:
            result = self.ll.mul_unsigned(operand.ll)
        return self._finish(result, self.to_int() * operand.to_int())

    def div(self, other: Any) -> "WideInt | Failure":
        """Деление с округлением вниз; деление на ноль → Overflow (обе политики)."""
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        if operand.ll == LongLong(0, 0):
            return overflow(f"{self.kind.name} division by zero")
        if self.signed:
            result = self.ll.div(operand.ll)
        else:
            result = self.ll.div_unsigned(operand.ll)
        return self._finish(result, self.to_int() // operand.to_int())

    def mod(self, other: Any) -> "WideInt | Failure":
        """Floored modulo; модуль по нулю → Overflow."""
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        if self.signed:
            result = self.ll.mod(operand.ll)
        else:
            result = self.ll.mod_unsigned(operand.ll)
        if isinstance(result, Failure):
            return overflow(f"{self.kind.name} modulo by zero")
        return WideInt(self.kind, result)

    def divrem(self, other: Any) -> "tuple[WideInt, WideInt] | Failure":
        """Деление с усечением: (quotient, remainder со знаком делимого)."""
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        if operand.ll == LongLong(0, 0):
            return overflow(f"{self.kind.name} division by zero")
        if self.signed:
            result = self.ll.divrem(operand.ll)
        else:
            result = self.ll.divrem_unsigned(operand.ll)
        if isinstance(result, Failure):
            if self.kind.checked:
                return overflow(f"{self.kind.name} divrem")
            # MIN / -1: частное оборачивается в MIN, остаток 0
            return WideInt(self.kind, self.ll), WideInt.wrap(self.kind, 0)
        quotient, remainder = result
        return WideInt(self.kind, quotient), WideInt(self.kind, remainder)

    def neg(self) -> "WideInt | Failure":
        """Отрицание; UInt128 → UnsupportedOperation, checked MIN → Overflow."""
        if not self.signed:
            return unsupported(f"{self.kind.name} has no negation")
        return self._finish(self.ll.neg(), -self.to_int())

    def abs(self) -> "WideInt | Failure":
        if not self.signed or self.ll.signum() >= 0:
            return self
        return self.neg()

    def next(self) -> "WideInt | Failure":
        return self._finish(self.ll.next(self.signed), self.to_int() + 1)

    def prev(self) -> "WideInt | Failure":
        return self._finish(self.ll.prev(self.signed), self.to_int() - 1)

    def compare(self, other: Any) -> int | Failure:
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        if self.signed:
            return self.ll.compare(operand.ll)
        return self.ll.compare_unsigned(operand.ll)

    # =========================================================================
    # ПОБИТОВЫЕ ОПЕРАЦИИ
    # =========================================================================

    def _with_pattern(self, pattern: int) -> "WideInt":
        return WideInt(self.kind, LongLong.from_int(pattern & MASK128))

    def and_(self, other: Any) -> "WideInt | Failure":
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        return WideInt(self.kind, self.ll.and_(operand.ll))

    def or_(self, other: Any) -> "WideInt | Failure":
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        return WideInt(self.kind, self.ll.or_(operand.ll))

    def xor(self, other: Any) -> "WideInt | Failure":
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        return WideInt(self.kind, self.ll.xor(operand.ll))

    def not_(self) -> "WideInt":
        return WideInt(self.kind, self.ll.complement())

    def shl(self, count: int) -> "WideInt":
        """Сдвиг влево; count вне 0..127 → 0."""
        return WideInt(self.kind, self.ll.shl(count))

    def shr(self, count: int) -> "WideInt":
        """Сдвиг вправо: арифметический для Int128, логический для UInt128."""
        if self.signed:
            return WideInt(self.kind, self.ll.shr(count))
        return WideInt(self.kind, self.ll.ushr(count))

    def ushr(self, count: int) -> "WideInt":
        return WideInt(self.kind, self.ll.ushr(count))

    def rotate_left(self, count: int) -> "WideInt":
        return self._with_pattern(word_bits.rotate_left(self.pattern, count, BITS))

    def rotate_right(self, count: int) -> "WideInt":
        return self._with_pattern(word_bits.rotate_right(self.pattern, count, BITS))

    def reverse_bits(self) -> "WideInt":
        return self._with_pattern(word_bits.reverse_bits(self.pattern, BITS))

    def reverse_bytes(self) -> "WideInt":
        return self._with_pattern(word_bits.reverse_bytes(self.pattern, BITS))

    def bit_count(self) -> int:
        return word_bits.bit_count(self.pattern, BITS)

    def leading_zero_count(self) -> int:
        return word_bits.leading_zero_count(self.pattern, BITS)

    def trailing_zero_count(self) -> int:
        return word_bits.trailing_zero_count(self.pattern, BITS)

    def leftmost_bit(self) -> "WideInt":
        return self._with_pattern(word_bits.leftmost_bit(self.pattern, BITS))

    def rightmost_bit(self) -> "WideInt":
        return self._with_pattern(word_bits.rightmost_bit(self.pattern, BITS))

    def truncate(self, count: int) -> "WideInt | Failure":
        """Оставить младшие count бит (0..128)."""
        if not 0 <= count <= BITS:
            return illegal_argument(f"Invalid bit count for {self.kind.name}: {count}")
        return self._with_pattern(self.pattern & word_bits.mask(count))

    def retain_ms_bits(self, count: int) -> "WideInt | Failure":
        if not 0 <= count <= BITS:
            return illegal_argument(f"Invalid bit count for {self.kind.name}: {count}")
        return self._with_pattern(self.pattern & ~word_bits.mask(BITS - count))

    def magnitude(self) -> "WideInt":
        """Модуль как UInt128 той же политики."""
        if not self.signed:
            return self
        return WideInt.wrap(complement_of(self.kind), abs(self.to_int()))

    def digit_count(self) -> int:
        return len(str(abs(self.to_int())))

    def steps_to(self, other: Any) -> int | Failure:
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        return operand.to_int() - self.to_int()

    def to_unchecked(self) -> "WideInt":
        return WideInt(unchecked_of(self.kind), self.ll)
