"""
BigInt — целые произвольной точности IntN / UIntN

IntN не переполняется никогда: полный набор операций (арифметика, сдвиги,
побитовые операции, neg, complement) определён на неограниченных целых.

UIntN ограничен только снизу: результат меньше нуля → Failure(OVERFLOW),
negate/complement → Failure(UNSUPPORTED_OPERATION).

Деление/модуль на ноль → Failure(OVERFLOW). div/mod — floored пара,
divrem — усечение к нулю.
"""

from dataclasses import dataclass
from typing import Any

from src.core.domain.kinds import INTN, UINTN, Family, NumericKind
from src.core.domain.outcome import Failure, illegal_argument, overflow, unsupported
from src.core.math.word_bits import trunc_divmod
from src.numbers.base import IntegerOperators


@dataclass(frozen=True, repr=False)
class BigInt(IntegerOperators):
    """
    Значение неограниченного целого kind.

    Attributes:
        kind: INTN или UINTN
        value: Значение (неотрицательное для UIntN)
    """

    kind: NumericKind
    value: int

    def __post_init__(self) -> None:
        if self.kind.family != Family.BIGINT:
            raise ValueError(f"BigInt requires a bigint kind, got {self.kind.name}")
        if not self.kind.contains(self.value):
            raise ValueError(f"{self.value} is out of range for {self.kind.name}")

    @classmethod
    def of(cls, kind: NumericKind, value: int) -> "BigInt | Failure":
        """Значение kind; отрицательное значение для UIntN → Overflow."""
        if not kind.contains(value):
            return overflow(f"{value} is out of range for {kind.name}")
        return cls(kind, value)

    @classmethod
    def from_bytes(cls, kind: NumericKind, data: bytes) -> "BigInt | Failure":
        """
        Значение из big-endian two's complement (IntN) или величины (UIntN).

        Пустая последовательность → Failure(ILLEGAL_ARGUMENT).
        """
        if len(data) == 0:
            return illegal_argument("Invalid byte count: 0")
        return cls(kind, int.from_bytes(bytes(data), "big", signed=kind.signed))

    @classmethod
    def parse(cls, kind: NumericKind, text: str) -> "BigInt | Failure":
        from src.numbers.literals import parse_int_literal

        literal = parse_int_literal(text)
        if isinstance(literal, Failure):
            return literal
        return cls.of(kind, literal.value)

    # ----- Свойства -----

    def to_int(self) -> int:
        return self.value

    def to_string(self) -> str:
        return str(self.value)

    def __str__(self) -> str:
        return str(self.value)

    def __repr__(self) -> str:
        return f"{self.kind.name}({self.value})"

    def to_bytes(self) -> bytes:
        """Минимальное big-endian представление (two's complement для IntN)."""
        if self.kind.signed:
            length = self.bit_length() // 8 + 1
        else:
            length = max(1, (self.value.bit_length() + 7) // 8)
        return self.value.to_bytes(length, "big", signed=self.kind.signed)

    def bit_length(self) -> int:
        """Биты величины без знака."""
        return self.value.bit_length() if self.value >= 0 else (~self.value).bit_length()

    def bit_count(self) -> int:
        """Population count величины."""
        return bin(abs(self.value)).count("1")

    def trailing_zero_count(self) -> int:
        if self.value == 0:
            return 0
        return (self.value & -self.value).bit_length() - 1

    def leftmost_bit(self) -> "BigInt":
        if self.value == 0:
            return self
        return BigInt(self.kind, 1 << (abs(self.value).bit_length() - 1))

    def rightmost_bit(self) -> "BigInt":
        return BigInt(self.kind, abs(self.value) & -abs(self.value))

    def digit_count(self) -> int:
        return len(str(abs(self.value)))

    # ----- Вспомогательные -----

    def _operand(self, other: Any) -> "BigInt | Failure":
        if isinstance(other, BigInt):
            if other.kind != self.kind:
                return self._mismatch(other)
            return other
        if isinstance(other, int) and not isinstance(other, bool):
            return BigInt.of(self.kind, other)
        return self._mismatch(other)

    def _binary(self, other: Any, op: Any, what: str) -> "BigInt | Failure":
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        return self._result(op(self.value, operand.value), what)

    def _result(self, value: int, what: str) -> "BigInt | Failure":
        if not self.kind.contains(value):
            return overflow(f"{self.kind.name} {what}")
        return BigInt(self.kind, value)

    # ----- Арифметика -----

    def add(self, other: Any) -> "BigInt | Failure":
        return self._binary(other, lambda a, b: a + b, "add")

    def sub(self, other: Any) -> "BigInt | Failure":
        """Вычитание; для UIntN результат меньше нуля → Overflow."""
        return self._binary(other, lambda a, b: a - b, "sub")

    def mul(self, other: Any) -> "BigInt | Failure":
        return self._binary(other, lambda a, b: a * b, "mul")

    def div(self, other: Any) -> "BigInt | Failure":
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        if operand.value == 0:
            return overflow(f"{self.kind.name} division by zero")
        return BigInt(self.kind, self.value // operand.value)

    def mod(self, other: Any) -> "BigInt | Failure":
        """Floored modulo: знак результата совпадает со знаком делителя."""
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        if operand.value == 0:
            return overflow(f"{self.kind.name} modulo by zero")
        return BigInt(self.kind, self.value % operand.value)

    def divrem(self, other: Any) -> "tuple[BigInt, BigInt] | Failure":
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        if operand.value == 0:
            return overflow(f"{self.kind.name} division by zero")
        quotient, remainder = trunc_divmod(self.value, operand.value)
        return BigInt(self.kind, quotient), BigInt(self.kind, remainder)

    def neg(self) -> "BigInt | Failure":
        if not self.kind.signed:
            return unsupported(f"{self.kind.name} has no negation")
        return BigInt(self.kind, -self.value)

    def abs(self) -> "BigInt":
        return BigInt(self.kind, abs(self.value))

    def next(self) -> "BigInt":
        return BigInt(self.kind, self.value + 1)

    def prev(self) -> "BigInt | Failure":
        return self._result(self.value - 1, "prev")

    def compare(self, other: Any) -> int | Failure:
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        return (self.value > operand.value) - (self.value < operand.value)

    # ----- Побитовые операции -----

    def and_(self, other: Any) -> "BigInt | Failure":
        return self._binary(other, lambda a, b: a & b, "and")

    def or_(self, other: Any) -> "BigInt | Failure":
        return self._binary(other, lambda a, b: a | b, "or")

    def xor(self, other: Any) -> "BigInt | Failure":
        return self._binary(other, lambda a, b: a ^ b, "xor")

    def not_(self) -> "BigInt | Failure":
        """Complement (-v - 1); для UIntN → UnsupportedOperation."""
        if not self.kind.signed:
            return unsupported(f"{self.kind.name} has no complement")
        return BigInt(self.kind, ~self.value)

    def shl(self, count: int) -> "BigInt | Failure":
        if count < 0:
            return illegal_argument(f"Negative shift count: {count}")
        return BigInt(self.kind, self.value << count)

    def shr(self, count: int) -> "BigInt | Failure":
        """Арифметический сдвиг вправо (floor деление на 2^count)."""
        if count < 0:
            return illegal_argument(f"Negative shift count: {count}")
        return BigInt(self.kind, self.value >> count)

    def ushr(self, count: int) -> "BigInt | Failure":
        """Логический сдвиг вправо; определён только для неотрицательных значений."""
        if self.value < 0:
            return unsupported(f"{self.kind.name} logical shift of a negative value")
        return self.shr(count)


def intn(value: int) -> BigInt:
    """Значение IntN."""
    return BigInt(INTN, value)


def uintn(value: int) -> "BigInt | Failure":
    """Значение UIntN; отрицательное → Overflow."""
    return BigInt.of(UINTN, value)
