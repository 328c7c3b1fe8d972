"""
LongLong — 128-битное целое из двух 64-битных слов

Double-word integer core: основа 128-битного слоя (Int128/UInt128) и
расширения 64-битных операций при переполнении (см. promotion).

Представление: (low, high) — два 64-битных паттерна. Для знаковых операций
пара трактуется как two's complement, для беззнаковых — как величина.
Одна и та же пара используется обоими способами: знаковость задаёт операция
(add / add_unsigned и т.д.), а не значение.

Арифметика:
- add/sub: bit-trick тесты — знаковое переполнение старшего слова и
  беззнаковый перенос младшего слова, перенос распространяется в старшее
- mul: fast path для одно-словных операндов, иначе неограниченное
  промежуточное произведение с проверкой bit length (127 / 128)
- div/mod: floored семантика; divrem: усечение к нулю
- деление или остаток на ноль → Overflow

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Overflow возвращается ровно тогда, когда точный результат выходит за
   128-битный signed/unsigned диапазон операции
2. low и high всегда нормализованы в [0, 2^64)
3. Сдвиг на величину вне 0..127 даёт ZERO
"""

from dataclasses import dataclass
from typing import Final

from src.core.domain.outcome import Failure, illegal_argument, overflow
from src.core.math.word_bits import LONG_MAX, LONG_MIN, MASK64, to_long, trunc_divmod

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

BITS: Final[int] = 128
MASK128: Final[int] = (1 << 128) - 1

# Диапазоны 128-битных значений
SIGNED_MIN: Final[int] = -(1 << 127)
SIGNED_MAX: Final[int] = (1 << 127) - 1
UNSIGNED_MAX: Final[int] = MASK128

# Максимальная bit length произведения (без учёта знака для signed)
SIGNED_PRODUCT_BITS: Final[int] = 127
UNSIGNED_PRODUCT_BITS: Final[int] = 128


def signed_bit_length(value: int) -> int:
    """
    Bit length без знакового бита (как BigInteger.bitLength).

    Examples:
        >>> signed_bit_length(-(1 << 127))
        127
        >>> signed_bit_length(1 << 127)
        128
    """
    return value.bit_length() if value >= 0 else (~value).bit_length()


# =============================================================================
# LONGLONG
# =============================================================================


@dataclass(frozen=True)
class LongLong:
    """
    128-битное значение как пара 64-битных паттернов.

    Attributes:
        low: Младшее слово (нормализуется в [0, 2^64))
        high: Старшее слово (нормализуется в [0, 2^64))
    """

    low: int
    high: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "low", self.low & MASK64)
        object.__setattr__(self, "high", self.high & MASK64)

    # ----- Конструкторы -----

    @classmethod
    def from_int(cls, value: int) -> "LongLong":
        """Младшие 128 бит значения (two's complement для отрицательных)."""
        return cls(value & MASK64, (value >> 64) & MASK64)

    @classmethod
    def from_long(cls, value: int, signed: bool = True) -> "LongLong":
        """
        Расширение одного 64-битного слова.

        Args:
            value: Слово (signed long или unsigned паттерн)
            signed: Знаковое расширение старшего слова
        """
        if signed and to_long(value) < 0:
            return cls(value, MASK64)
        return cls(value, 0)

    @classmethod
    def from_bytes(cls, data: bytes) -> "LongLong | Failure":
        """16 байт big-endian: старшая половина первой."""
        if len(data) != 16:
            return illegal_argument(f"Invalid byte count: {len(data)}")
        return cls(int.from_bytes(data[8:], "big"), int.from_bytes(data[:8], "big"))

    # ----- Представления -----

    @property
    def low_long(self) -> int:
        """Младшее слово как signed long."""
        return to_long(self.low)

    @property
    def high_long(self) -> int:
        """Старшее слово как signed long."""
        return to_long(self.high)

    def to_int(self) -> int:
        """Знаковая интерпретация (two's complement)."""
        return (self.high_long << 64) | self.low

    def to_unsigned_int(self) -> int:
        """Беззнаковая интерпретация."""
        return (self.high << 64) | self.low

    def to_bytes(self) -> bytes:
        """16 байт big-endian: старшая половина первой."""
        return self.high.to_bytes(8, "big") + self.low.to_bytes(8, "big")

    def to_string(self, signed: bool = True) -> str:
        return str(self.to_int() if signed else self.to_unsigned_int())

    def __str__(self) -> str:
        return self.to_string()

    def is_small(self, signed: bool) -> bool:
        """
        Помещается ли значение в одно 64-битное слово без потерь.

        signed: high — знаковое расширение low (0 или все единицы)
        unsigned: high == 0
        """
        if signed:
            return self.high_long == (self.low_long >> 63)
        return self.high == 0

    def signum(self) -> int:
        high = self.high_long
        if high < 0:
            return -1
        return 0 if high == 0 and self.low == 0 else 1

    # ----- Сравнение -----

    def compare(self, other: "LongLong") -> int:
        """Знаковое сравнение: старшие слова как signed, младшие как unsigned."""
        h1, h2 = self.high_long, other.high_long
        if h1 != h2:
            return -1 if h1 < h2 else 1
        if self.low != other.low:
            return -1 if self.low < other.low else 1
        return 0

    def compare_unsigned(self, other: "LongLong") -> int:
        """Беззнаковое сравнение обоих слов."""
        if self.high != other.high:
            return -1 if self.high < other.high else 1
        if self.low != other.low:
            return -1 if self.low < other.low else 1
        return 0

    # ----- Сложение и вычитание -----

    def add(self, other: "LongLong") -> "LongLong | Failure":
        """Знаковое сложение."""
        l1L, l1H = self.low_long, self.high_long
        l2L, l2H = other.low_long, other.high_long

        lrL = to_long(l1L + l2L)
        lrH = to_long(l1H + l2H)

        high_overflow = ((l1H ^ lrH) & (l2H ^ lrH)) < 0
        carry_overflow = False
        if ((l1L & l2L) | ((l1L | l2L) & ~lrL)) < 0:
            carry_overflow = lrH == LONG_MAX
            lrH += 1

        # Отрицательное переполнение старшего слова, компенсированное переносом
        if high_overflow != carry_overflow:
            return overflow("Int128 add")
        return LongLong(lrL, lrH)

    def add_unsigned(self, other: "LongLong") -> "LongLong | Failure":
        """Беззнаковое сложение."""
        l1L, l1H = self.low_long, self.high_long
        l2L, l2H = other.low_long, other.high_long

        lrL = to_long(l1L + l2L)
        lrH = to_long(l1H + l2H)

        if ((l1H & l2H) | ((l1H | l2H) & ~lrH)) < 0:
            return overflow("UInt128 add")
        if ((l1L & l2L) | ((l1L | l2L) & ~lrL)) < 0:
            if lrH == -1:
                return overflow("UInt128 add")
            lrH += 1
        return LongLong(lrL, lrH)

    def sub(self, other: "LongLong") -> "LongLong | Failure":
        """Знаковое вычитание."""
        l1L, l1H = self.low_long, self.high_long
        l2L, l2H = other.low_long, other.high_long

        lrL = to_long(l1L - l2L)
        lrH = to_long(l1H - l2H)

        high_overflow = ((l1H ^ l2H) & (l1H ^ lrH)) < 0
        borrow_overflow = False
        if ((~l1L & l2L) | ((~l1L | l2L) & lrL)) < 0:
            borrow_overflow = lrH == LONG_MIN
            lrH -= 1

        if high_overflow != borrow_overflow:
            return overflow("Int128 sub")
        return LongLong(lrL, lrH)

    def sub_unsigned(self, other: "LongLong") -> "LongLong | Failure":
        """Беззнаковое вычитание."""
        l1L, l1H = self.low_long, self.high_long
        l2L, l2H = other.low_long, other.high_long

        lrL = to_long(l1L - l2L)
        lrH = to_long(l1H - l2H)

        if ((~l1H & l2H) | ((~l1H | l2H) & lrH)) < 0:
            return overflow("UInt128 sub")
        if ((~l1L & l2L) | ((~l1L | l2L) & lrL)) < 0:
            if lrH == 0:
                return overflow("UInt128 sub")
            lrH -= 1
        return LongLong(lrL, lrH)

    # ----- Умножение -----

    def mul(self, other: "LongLong") -> "LongLong | Failure":
        """Знаковое умножение."""
        if self.is_small(True) and other.is_small(True):
            # |product| <= 2^126: всегда помещается
            return LongLong.from_int(self.low_long * other.low_long)

        product = self.to_int() * other.to_int()
        if signed_bit_length(product) > SIGNED_PRODUCT_BITS:
            return overflow("Int128 mul")
        return LongLong.from_int(product)

    def mul_unsigned(self, other: "LongLong") -> "LongLong | Failure":
        """Беззнаковое умножение."""
        if self.high == 0 and other.high == 0:
            return LongLong.from_int(self.low * other.low)

        product = self.to_unsigned_int() * other.to_unsigned_int()
        if product.bit_length() > UNSIGNED_PRODUCT_BITS:
            return overflow("UInt128 mul")
        return LongLong.from_int(product)

    # ----- Деление -----

    def _signed_operands(self, other: "LongLong") -> "tuple[int, int] | Failure":
        if other.low == 0 and other.high == 0:
            return overflow("Int128 division by zero")
        if self.is_small(True) and other.is_small(True):
            return self.low_long, other.low_long
        return self.to_int(), other.to_int()

    def _unsigned_operands(self, other: "LongLong") -> "tuple[int, int] | Failure":
        if other.low == 0 and other.high == 0:
            return overflow("UInt128 division by zero")
        if self.high == 0 and other.high == 0:
            return self.low, other.low
        return self.to_unsigned_int(), other.to_unsigned_int()

    def div(self, other: "LongLong") -> "LongLong | Failure":
        """Знаковое деление с округлением вниз (floor)."""
        operands = self._signed_operands(other)
        if isinstance(operands, Failure):
            return operands
        dividend, divisor = operands
        quotient = dividend // divisor
        if quotient > SIGNED_MAX:
            # MIN_VALUE / -1
            return overflow("Int128 div")
        return LongLong.from_int(quotient)

    def mod(self, other: "LongLong") -> "LongLong | Failure":
        """Знаковый floored modulo: знак результата совпадает со знаком делителя."""
        operands = self._signed_operands(other)
        if isinstance(operands, Failure):
            return operands
        dividend, divisor = operands
        return LongLong.from_int(dividend % divisor)

    def divrem(self, other: "LongLong") -> "tuple[LongLong, LongLong] | Failure":
        """Знаковое деление с усечением: (quotient, remainder со знаком делимого)."""
        operands = self._signed_operands(other)
        if isinstance(operands, Failure):
            return operands
        quotient, remainder = trunc_divmod(*operands)
        if quotient > SIGNED_MAX:
            return overflow("Int128 divrem")
        return LongLong.from_int(quotient), LongLong.from_int(remainder)

    def div_unsigned(self, other: "LongLong") -> "LongLong | Failure":
        operands = self._unsigned_operands(other)
        if isinstance(operands, Failure):
            return operands
        dividend, divisor = operands
        return LongLong.from_int(dividend // divisor)

    def mod_unsigned(self, other: "LongLong") -> "LongLong | Failure":
        operands = self._unsigned_operands(other)
        if isinstance(operands, Failure):
            return operands
        dividend, divisor = operands
        return LongLong.from_int(dividend % divisor)

    def divrem_unsigned(self, other: "LongLong") -> "tuple[LongLong, LongLong] | Failure":
        operands = self._unsigned_operands(other)
        if isinstance(operands, Failure):
            return operands
        quotient, remainder = divmod(*operands)
        return LongLong.from_int(quotient), LongLong.from_int(remainder)

    # ----- Унарные операции -----

    def complement(self) -> "LongLong":
        return LongLong(~self.low, ~self.high)

    def neg(self) -> "LongLong | Failure":
        """Знаковое отрицание; MIN_VALUE → Overflow."""
        if self == MIN_VALUE:
            return overflow("Int128 neg")
        return self.complement().next(True)

    def next(self, signed: bool) -> "LongLong | Failure":
        """Инкремент; Overflow на MAX_VALUE (signed) или всех единицах (unsigned)."""
        if self == (MAX_VALUE if signed else UNSIGNED_MAX_VALUE):
            return overflow("Int128 next" if signed else "UInt128 next")
        if self.low == MASK64:
            return LongLong(0, self.high + 1)
        return LongLong(self.low + 1, self.high)

    def prev(self, signed: bool) -> "LongLong | Failure":
        """Декремент; Overflow на MIN_VALUE (signed) или нуле (unsigned)."""
        if self == (MIN_VALUE if signed else ZERO):
            return overflow("Int128 prev" if signed else "UInt128 prev")
        if self.low == 0:
            return LongLong(MASK64, self.high - 1)
        return LongLong(self.low - 1, self.high)

    # ----- Побитовые операции -----

    def and_(self, other: "LongLong") -> "LongLong":
        return LongLong(self.low & other.low, self.high & other.high)

    def or_(self, other: "LongLong") -> "LongLong":
        return LongLong(self.low | other.low, self.high | other.high)

    def xor(self, other: "LongLong") -> "LongLong":
        return LongLong(self.low ^ other.low, self.high ^ other.high)

    def shl(self, count: int) -> "LongLong":
        """Сдвиг влево; count вне 0..127 → ZERO."""
        if count < 0 or count >= BITS:
            return ZERO
        if count == 0:
            return self
        if count < 64:
            return LongLong(self.low << count, (self.high << count) | (self.low >> (64 - count)))
        return LongLong(0, self.low << (count - 64))

    def shr(self, count: int) -> "LongLong":
        """Арифметический сдвиг вправо (заполнение знаком); count вне 0..127 → ZERO."""
        if count < 0 or count >= BITS:
            return ZERO
        if count == 0:
            return self
        high = self.high_long
        if count < 64:
            return LongLong((self.low >> count) | (self.high << (64 - count)), high >> count)
        return LongLong(high >> (count - 64), -1 if high < 0 else 0)

    def ushr(self, count: int) -> "LongLong":
        """Логический сдвиг вправо (заполнение нулями); count вне 0..127 → ZERO."""
        if count < 0 or count >= BITS:
            return ZERO
        if count == 0:
            return self
        if count < 64:
            return LongLong((self.low >> count) | (self.high << (64 - count)), self.high >> count)
        return LongLong(self.high >> (count - 64), 0)


# =============================================================================
# ЗНАЧЕНИЯ-КОНСТАНТЫ
# =============================================================================

ZERO: Final[LongLong] = LongLong(0, 0)
ONE: Final[LongLong] = LongLong(1, 0)
MAX_VALUE: Final[LongLong] = LongLong(MASK64, LONG_MAX)
MIN_VALUE: Final[LongLong] = LongLong(0, LONG_MIN)
UNSIGNED_MAX_VALUE: Final[LongLong] = LongLong(MASK64, MASK64)
