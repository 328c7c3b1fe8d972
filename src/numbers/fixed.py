"""
FixedInt — целые фиксированной ширины 8/16/32/64

Единая абстракция, параметризованная kind: ширина, знаковость, checked-политика.
Значение хранится нормализованным: в диапазоне [min, max] kind.

Checked-политика:
- add/sub: two's-complement тест переноса со сдвигом 64 - width
- mul: быстрый отказ по модулю операндов, иначе обратное деление / min-max
- neg/next/prev/abs: сравнение с границами kind
- результат вне диапазона → Failure(OVERFLOW)

Unchecked-политика: та же поверхность операций, результат по модулю 2^width,
Overflow не возвращается никогда (кроме деления на ноль).

Общее для обеих политик:
- div/mod/divrem на ноль → Failure(OVERFLOW)
- div/mod знаковых kind — floored (знак mod совпадает со знаком делителя);
  divrem — усечение к нулю
- negate unsigned kind → Failure(UNSUPPORTED_OPERATION)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Значение, маскированное до ширины, декодируется обратно в то же значение
2. Checked-арифметика никогда не возвращает значение вне [min, max]
3. Unchecked-арифметика никогда не возвращает Overflow
4. Кэш малых значений строится один раз при импорте и не мутирует
"""

from dataclasses import dataclass
from typing import Any, Final, Sequence

from src.core.domain.kinds import (
    INT8,
    UINT8,
    UNCHECKED_INT8,
    UNCHECKED_UINT8,
    Family,
    NumericKind,
    complement_of,
    unchecked_of,
)
from src.core.domain.outcome import Failure, illegal_argument, overflow, unsupported
from src.core.math import word_bits
from src.core.math.promotion import mul_words, to_longlong
from src.core.math.word_bits import (
    from_pattern,
    mask,
    mul_check_shift,
    signed_add_overflows,
    signed_sub_overflows,
    to_long,
    to_pattern,
    trunc_divmod,
    unsigned_add_carries,
    unsigned_sub_borrows,
)
from src.numbers.base import IntegerOperators


@dataclass(frozen=True, repr=False)
class FixedInt(IntegerOperators):
    """
    Значение целого kind фиксированной ширины.

    Attributes:
        kind: Kind семейства FIXED_INT
        value: Значение в диапазоне kind
    """

    kind: NumericKind
    value: int

    def __post_init__(self) -> None:
        if self.kind.family != Family.FIXED_INT:
            raise ValueError(f"FixedInt requires a fixed_int kind, got {self.kind.name}")
        if not self.kind.contains(self.value):
            raise ValueError(f"{self.value} is out of range for {self.kind.name}")

    # =========================================================================
    # КОНСТРУКТОРЫ
    # =========================================================================

    @classmethod
    def of(cls, kind: NumericKind, value: int) -> "FixedInt | Failure":
        """
        Значение kind из Python int.

        Checked kind: значение вне диапазона → Failure(OVERFLOW).
        Unchecked kind: значение берётся по модулю 2^width.

        Examples:
            >>> FixedInt.of(INT8, 127).value
            127
            >>> FixedInt.of(INT8, 128).signal
            <Signal.OVERFLOW: 'OVERFLOW'>
            >>> FixedInt.of(UNCHECKED_INT8, 128).value
            -128
        """
        if not kind.contains(value):
            if kind.checked:
                return overflow(f"{value} is out of range for {kind.name}")
            value = word_bits.wrap(value, kind.bits, kind.signed)
        cache = _SMALL_VALUES.get(kind.name)
        if cache is not None:
            return cache[value - kind.min_value]
        return cls(kind, value)

    @classmethod
    def wrap(cls, kind: NumericKind, value: int) -> "FixedInt":
        """Значение по модулю 2^width, интерпретированное по знаковости kind."""
        value = word_bits.wrap(value, kind.bits, kind.signed)
        cache = _SMALL_VALUES.get(kind.name)
        if cache is not None:
            return cache[value - kind.min_value]
        return cls(kind, value)

    @classmethod
    def from_pattern(cls, kind: NumericKind, pattern: int) -> "FixedInt":
        """Значение по битовому паттерну ширины kind."""
        return cls.wrap(kind, from_pattern(pattern, kind.bits, kind.signed))

    @classmethod
    def from_bytes(cls, kind: NumericKind, data: bytes) -> "FixedInt | Failure":
        """
        Значение из big-endian последовательности ровно width/8 байт.

        Returns:
            Значение или Failure(ILLEGAL_ARGUMENT) при неверной длине
        """
        pattern = word_bits.pattern_from_bytes(data, kind.bits)
        if isinstance(pattern, Failure):
            return pattern
        return cls.from_pattern(kind, pattern)

    @classmethod
    def from_bits(cls, kind: NumericKind, bits: Sequence[int]) -> "FixedInt | Failure":
        """Значение из последовательности ровно width бит (старший первым)."""
        pattern = word_bits.pattern_from_bits(bits, kind.bits)
        if isinstance(pattern, Failure):
            return pattern
        return cls.from_pattern(kind, pattern)

    @classmethod
    def parse(cls, kind: NumericKind, text: str) -> "FixedInt | Failure":
        """
        Значение из текста целочисленного литерала.

        Текст вне диапазона kind → Failure(OVERFLOW) независимо от политики:
        литерал всегда проверяется.
        """
        from src.numbers.literals import parse_int_literal

        literal = parse_int_literal(text)
        if isinstance(literal, Failure):
            return literal
        if not kind.contains(literal.value):
            return overflow(f"{text} is out of range for {kind.name}")
        return cls.of(kind, literal.value)

    # =========================================================================
    # СВОЙСТВА
    # =========================================================================

    @property
    def bits(self) -> int:
        return self.kind.bits

    @property
    def pattern(self) -> int:
        """Битовый паттерн значения (two's complement для отрицательных)."""
        return to_pattern(self.value, self.kind.bits)

    def to_int(self) -> int:
        return self.value

    def to_string(self) -> str:
        return str(self.value)

    def __str__(self) -> str:
        return str(self.value)

    def __repr__(self) -> str:
        return f"{self.kind.name}({self.value})"

    def to_bytes(self) -> bytes:
        """Big-endian, ровно width/8 байт."""
        return word_bits.pattern_to_bytes(self.pattern, self.kind.bits)

    def to_bits(self) -> tuple[int, ...]:
        """Ровно width бит, старший первым."""
        return word_bits.pattern_to_bits(self.pattern, self.kind.bits)

    # =========================================================================
    # ВСПОМОГАТЕЛЬНЫЕ
    # =========================================================================

    def _operand(self, other: Any) -> "FixedInt | Failure":
        if isinstance(other, FixedInt):
            if other.kind != self.kind:
                return self._mismatch(other)
            return other
        if isinstance(other, int) and not isinstance(other, bool):
            return FixedInt.of(self.kind, other)
        return self._mismatch(other)

    def _result(self, value: int, what: str) -> "FixedInt | Failure":
        """Результат операции по политике kind."""
        if self.kind.checked and not self.kind.contains(value):
            return overflow(f"{self.kind.name} {what}")
        return FixedInt.wrap(self.kind, value)

    def _with_pattern(self, pattern: int) -> "FixedInt":
        return FixedInt.from_pattern(self.kind, pattern)

    # =========================================================================
    # АРИФМЕТИКА
    # =========================================================================

    def add(self, other: Any) -> "FixedInt | Failure":
        """Сложение; checked → Overflow на границе ширины."""
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        a, b = self.value, operand.value
        if self.kind.checked and self._add_overflows(a, b):
            return overflow(f"{self.kind.name} add")
        return FixedInt.wrap(self.kind, a + b)

    def sub(self, other: Any) -> "FixedInt | Failure":
        """Вычитание; checked → Overflow на границе ширины."""
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        a, b = self.value, operand.value
        if self.kind.checked and self._sub_overflows(a, b):
            return overflow(f"{self.kind.name} sub")
        return FixedInt.wrap(self.kind, a - b)

    def mul(self, other: Any) -> "FixedInt | Failure":
        """Умножение; checked → Overflow если произведение вне диапазона."""
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        a, b = self.value, operand.value
        if self.kind.checked and self._mul_overflows(a, b):
            return overflow(f"{self.kind.name} mul")
        return FixedInt.wrap(self.kind, a * b)

    def div(self, other: Any) -> "FixedInt | Failure":
        """Деление с округлением вниз; деление на ноль → Overflow."""
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        if operand.value == 0:
            return overflow(f"{self.kind.name} division by zero")
        return self._result(self.value // operand.value, "div")

    def mod(self, other: Any) -> "FixedInt | Failure":
        """Floored modulo: знак результата совпадает со знаком делителя."""
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        if operand.value == 0:
            return overflow(f"{self.kind.name} modulo by zero")
        return FixedInt.wrap(self.kind, self.value % operand.value)

    def divrem(self, other: Any) -> "tuple[FixedInt, FixedInt] | Failure":
        """Деление с усечением к нулю: (quotient, remainder со знаком делимого)."""
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        if operand.value == 0:
            return overflow(f"{self.kind.name} division by zero")
        quotient, remainder = trunc_divmod(self.value, operand.value)
        quotient_value = self._result(quotient, "divrem")
        if isinstance(quotient_value, Failure):
            return quotient_value
        return quotient_value, FixedInt.wrap(self.kind, remainder)

    def neg(self) -> "FixedInt | Failure":
        """Отрицание; unsigned → UnsupportedOperation, checked MIN → Overflow."""
        if not self.kind.signed:
            return unsupported(f"{self.kind.name} has no negation")
        return self._result(-self.value, "neg")

    def abs(self) -> "FixedInt | Failure":
        """Модуль; checked MIN → Overflow, unchecked MIN остаётся MIN."""
        if self.value >= 0:
            return self
        return self._result(-self.value, "abs")

    def next(self) -> "FixedInt | Failure":
        """Инкремент; checked MAX → Overflow."""
        return self._result(self.value + 1, "next")

    def prev(self) -> "FixedInt | Failure":
        """Декремент; checked MIN → Overflow."""
        return self._result(self.value - 1, "prev")

    def compare(self, other: Any) -> int | Failure:
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        return (self.value > operand.value) - (self.value < operand.value)

    def widening_mul(self, other: Any) -> Any:
        """
        Полное произведение как 128-битное значение (Int128 / UInt128).

        Никогда не переполняется: произведение двух ≤64-битных значений
        помещается в 128 бит.
        """
        from src.core.domain.kinds import INT128, UINT128
        from src.numbers.wide import WideInt

        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        signed = self.kind.signed
        product = mul_words(to_pattern(self.value, 64), to_pattern(operand.value, 64), signed)
        return WideInt(INT128 if signed else UINT128, to_longlong(product, signed))

    # ----- Тесты переполнения -----

    def _add_overflows(self, a: int, b: int) -> bool:
        width = self.kind.bits
        if self.kind.signed:
            return signed_add_overflows(a, b, to_long(a + b), width)
        return unsigned_add_carries(a, b, (a + b) & mask(width), width)

    def _sub_overflows(self, a: int, b: int) -> bool:
        width = self.kind.bits
        if self.kind.signed:
            return signed_sub_overflows(a, b, to_long(a - b), width)
        return unsigned_sub_borrows(a, b, (a - b) & mask(width), width)

    def _mul_overflows(self, a: int, b: int) -> bool:
        kind = self.kind
        if (abs(a) | abs(b)) >> mul_check_shift(kind.bits, kind.signed) == 0:
            return False
        if not kind.signed:
            return a * b > kind.max_value
        # произведение в нативном 64-битном слове
        product = to_long(a * b)
        if b != 0 and trunc_divmod(product, b)[0] != a:
            return True
        if a == kind.min_value and b == -1:
            return True
        return not kind.contains(product)

    # =========================================================================
    # ПОБИТОВЫЕ ОПЕРАЦИИ
    # =========================================================================

    def and_(self, other: Any) -> "FixedInt | Failure":
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        return self._with_pattern(self.pattern & operand.pattern)

    def or_(self, other: Any) -> "FixedInt | Failure":
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        return self._with_pattern(self.pattern | operand.pattern)

    def xor(self, other: Any) -> "FixedInt | Failure":
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        return self._with_pattern(self.pattern ^ operand.pattern)

    def not_(self) -> "FixedInt":
        return self._with_pattern(~self.pattern)

    def shl(self, count: int) -> "FixedInt":
        """Сдвиг влево без проверки переполнения; count вне 0..width-1 → 0."""
        if not 0 <= count < self.kind.bits:
            return FixedInt.wrap(self.kind, 0)
        return self._with_pattern(self.pattern << count)

    def shr(self, count: int) -> "FixedInt":
        """Арифметический сдвиг вправо (знаковый для signed); count вне 0..width-1 → 0."""
        if not 0 <= count < self.kind.bits:
            return FixedInt.wrap(self.kind, 0)
        return FixedInt.wrap(self.kind, self.value >> count)

    def ushr(self, count: int) -> "FixedInt":
        """Логический сдвиг вправо (заполнение нулями); count вне 0..width-1 → 0."""
        if not 0 <= count < self.kind.bits:
            return FixedInt.wrap(self.kind, 0)
        return self._with_pattern(self.pattern >> count)

    def rotate_left(self, count: int) -> "FixedInt":
        return self._with_pattern(word_bits.rotate_left(self.pattern, count, self.kind.bits))

    def rotate_right(self, count: int) -> "FixedInt":
        return self._with_pattern(word_bits.rotate_right(self.pattern, count, self.kind.bits))

    def reverse_bits(self) -> "FixedInt":
        return self._with_pattern(word_bits.reverse_bits(self.pattern, self.kind.bits))

    def reverse_bytes(self) -> "FixedInt":
        return self._with_pattern(word_bits.reverse_bytes(self.pattern, self.kind.bits))

    def bit_count(self) -> int:
        return word_bits.bit_count(self.pattern, self.kind.bits)

    def leading_zero_count(self) -> int:
        return word_bits.leading_zero_count(self.pattern, self.kind.bits)

    def trailing_zero_count(self) -> int:
        return word_bits.trailing_zero_count(self.pattern, self.kind.bits)

    def leftmost_bit(self) -> "FixedInt":
        """Значение, в котором оставлен только старший установленный бит."""
        return self._with_pattern(word_bits.leftmost_bit(self.pattern, self.kind.bits))

    def rightmost_bit(self) -> "FixedInt":
        """Значение, в котором оставлен только младший установленный бит."""
        return self._with_pattern(word_bits.rightmost_bit(self.pattern, self.kind.bits))

    def truncate(self, count: int) -> "FixedInt | Failure":
        """
        Оставить младшие count бит в пределах той же ширины.

        Returns:
            Значение или Failure(ILLEGAL_ARGUMENT) если count вне 0..width
        """
        if not 0 <= count <= self.kind.bits:
            return illegal_argument(f"Invalid bit count for {self.kind.name}: {count}")
        return self._with_pattern(self.pattern & mask(count))

    def retain_ms_bits(self, count: int) -> "FixedInt | Failure":
        """Оставить старшие count бит (остальные обнуляются)."""
        width = self.kind.bits
        if not 0 <= count <= width:
            return illegal_argument(f"Invalid bit count for {self.kind.name}: {count}")
        return self._with_pattern(self.pattern & ~mask(width - count))

    def magnitude(self) -> "FixedInt":
        """Модуль как значение комплементарного unsigned kind (Int8 → UInt8)."""
        if not self.kind.signed:
            return self
        return FixedInt.of(complement_of(self.kind), abs(self.value))

    def digit_count(self) -> int:
        """Количество десятичных цифр модуля."""
        return len(str(abs(self.value)))

    def steps_to(self, other: Any) -> int | Failure:
        """Количество шагов next() от self до other (отрицательно, если other меньше)."""
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        return operand.value - self.value

    def to_unchecked(self) -> "FixedInt":
        """То же значение в unchecked-варианте kind."""
        return FixedInt.of(unchecked_of(self.kind), self.value)


# =============================================================================
# КЭШ МАЛЫХ ЗНАЧЕНИЙ
# =============================================================================

# Kind, для которых все значения заранее построены как singleton
SMALL_VALUE_KINDS: Final[tuple[NumericKind, ...]] = (UINT8, UNCHECKED_UINT8, INT8, UNCHECKED_INT8)

_SMALL_VALUES: Final[dict[str, tuple[FixedInt, ...]]] = {
    kind.name: tuple(FixedInt(kind, v) for v in range(kind.min_value, kind.max_value + 1))
    for kind in SMALL_VALUE_KINDS
}
