"""
Word Bits — битовые примитивы машинного слова

Операции над битовыми паттернами фиксированной ширины (8..128 бит):
маскирование, знаковое расширение, тесты переноса/переполнения в стиле
нативного 64-битного слова, rotate/reverse/popcount, byte/bit кодирование.

Паттерн — неотрицательный int в [0, 2^width); значение — int в диапазоне
kind с учётом знаковости. to_pattern/from_pattern переводят между ними.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. from_pattern(to_pattern(v, w), w, signed) == v для любого v в диапазоне
2. Тесты переполнения срабатывают ровно на границе объявленной ширины
3. Byte-кодирование big-endian, ровно width/8 байт
"""

from typing import Final, Sequence

from src.core.domain.outcome import Failure, illegal_argument

# =============================================================================
# КОНСТАНТЫ СЛОВА
# =============================================================================

# Ширина нативного машинного слова
WORD_BITS: Final[int] = 64

MASK64: Final[int] = (1 << 64) - 1

LONG_MIN: Final[int] = -(1 << 63)
LONG_MAX: Final[int] = (1 << 63) - 1


# =============================================================================
# МАСКИ И ЗНАК
# =============================================================================


def mask(width: int) -> int:
    """Маска младших width бит."""
    return (1 << width) - 1


def to_pattern(value: int, width: int) -> int:
    """
    Битовый паттерн значения (two's complement для отрицательных).

    Examples:
        >>> to_pattern(-1, 8)
        255
        >>> to_pattern(300, 8)
        44
    """
    return value & mask(width)


def from_pattern(pattern: int, width: int, signed: bool) -> int:
    """
    Интерпретация паттерна как значения (знаковое расширение для signed).

    Examples:
        >>> from_pattern(255, 8, True)
        -1
        >>> from_pattern(255, 8, False)
        255
    """
    pattern &= mask(width)
    if signed and pattern >> (width - 1):
        return pattern - (1 << width)
    return pattern


def wrap(value: int, width: int, signed: bool) -> int:
    """Значение по модулю 2^width, интерпретированное по знаковости."""
    return from_pattern(value & mask(width), width, signed)


def to_long(value: int) -> int:
    """Интерпретация младших 64 бит как знакового long."""
    return from_pattern(value, WORD_BITS, True)


def sign_bit_set(value: int, shift: int) -> bool:
    """
    Тест знака после сдвига влево в нативном 64-битном слове.

    (value << shift) < 0 как long: бит (63 - shift) установлен.
    """
    return to_long(value << shift) < 0


# =============================================================================
# ТЕСТЫ ПЕРЕНОСА И ПЕРЕПОЛНЕНИЯ
# =============================================================================


def add_check_shift(width: int) -> int:
    """Сдвиг, переносящий старший бит ширины в знаковый бит 64-битного слова."""
    return WORD_BITS - width


def signed_add_overflows(a: int, b: int, result: int, width: int) -> bool:
    """
    Знаковое переполнение сложения: ((a ^ r) & (b ^ r)) << (64 - width) < 0.

    Args:
        a, b: Операнды (значения в диапазоне signed kind)
        result: Точная или 64-битная сумма a + b
        width: Объявленная ширина
    """
    return sign_bit_set((a ^ result) & (b ^ result), add_check_shift(width))


def signed_sub_overflows(a: int, b: int, result: int, width: int) -> bool:
    """Знаковое переполнение вычитания: ((a ^ b) & (a ^ r)) << (64 - width) < 0."""
    return sign_bit_set((a ^ b) & (a ^ result), add_check_shift(width))


def unsigned_add_carries(a: int, b: int, result: int, width: int) -> bool:
    """
    Беззнаковый перенос сложения: ((a & b) | ((a | b) & ~r)) старший бит ширины.

    result — сумма, усечённая до ширины (или до 64 бит).
    """
    return sign_bit_set((a & b) | ((a | b) & ~result), add_check_shift(width))


def unsigned_sub_borrows(a: int, b: int, result: int, width: int) -> bool:
    """Беззнаковый заём вычитания: ((~a & b) | ((~a | b) & r)) старший бит ширины."""
    return sign_bit_set((~a & b) | ((~a | b) & result), add_check_shift(width))


def mul_check_shift(width: int, signed: bool) -> int:
    """
    Сдвиг быстрого отказа от проверки умножения.

    Если (|a| | |b|) >> shift == 0, произведение гарантированно помещается.
    """
    return width // 2 - 1 if signed else width // 2


# =============================================================================
# ДЕЛЕНИЕ
# =============================================================================


def trunc_divmod(a: int, b: int) -> tuple[int, int]:
    """
    Деление с усечением к нулю (семантика нативного деления).

    Returns:
        (quotient, remainder), remainder имеет знак делимого

    Examples:
        >>> trunc_divmod(-7, 2)
        (-3, -1)
    """
    q = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        q = -q
    return q, a - q * b


# =============================================================================
# БИТОВЫЕ ОПЕРАЦИИ НАД ПАТТЕРНОМ
# =============================================================================


def rotate_left(pattern: int, count: int, width: int) -> int:
    """Циклический сдвиг влево; count берётся по модулю width."""
    count %= width
    pattern &= mask(width)
    return ((pattern << count) | (pattern >> (width - count))) & mask(width)


def rotate_right(pattern: int, count: int, width: int) -> int:
    """Циклический сдвиг вправо; count берётся по модулю width."""
    return rotate_left(pattern, width - count % width, width)


def reverse_bits(pattern: int, width: int) -> int:
    """Обратный порядок бит в пределах ширины."""
    return int(format(pattern & mask(width), f"0{width}b")[::-1], 2)


def reverse_bytes(pattern: int, width: int) -> int:
    """Обратный порядок байт в пределах ширины."""
    return int.from_bytes((pattern & mask(width)).to_bytes(width // 8, "big"), "little")


def bit_count(pattern: int, width: int) -> int:
    """Population count."""
    return bin(pattern & mask(width)).count("1")


def leading_zero_count(pattern: int, width: int) -> int:
    return width - (pattern & mask(width)).bit_length()


def trailing_zero_count(pattern: int, width: int) -> int:
    """Количество младших нулевых бит (width для нуля)."""
    pattern &= mask(width)
    if pattern == 0:
        return width
    return (pattern & -pattern).bit_length() - 1


def leftmost_bit(pattern: int, width: int) -> int:
    """Паттерн, содержащий только старший установленный бит (0 для нуля)."""
    pattern &= mask(width)
    if pattern == 0:
        return 0
    return 1 << (pattern.bit_length() - 1)


def rightmost_bit(pattern: int, width: int) -> int:
    """Паттерн, содержащий только младший установленный бит (0 для нуля)."""
    pattern &= mask(width)
    return pattern & -pattern


# =============================================================================
# BYTE / BIT КОДИРОВАНИЕ
# =============================================================================


def pattern_to_bytes(pattern: int, width: int) -> bytes:
    """Big-endian кодирование ровно width/8 байт."""
    return (pattern & mask(width)).to_bytes(width // 8, "big")


def pattern_from_bytes(data: bytes, width: int) -> int | Failure:
    """
    Декодирование big-endian паттерна.

    Returns:
        Паттерн или Failure(ILLEGAL_ARGUMENT) при длине != width/8
    """
    if len(data) != width // 8:
        return illegal_argument(f"Invalid byte count: {len(data)}")
    return int.from_bytes(bytes(data), "big")


def pattern_to_bits(pattern: int, width: int) -> tuple[int, ...]:
    """Последовательность ровно width бит, старший бит первым."""
    return tuple(int(ch) for ch in format(pattern & mask(width), f"0{width}b"))


def pattern_from_bits(bits: Sequence[int], width: int) -> int | Failure:
    """
    Декодирование последовательности бит (старший первым).

    Returns:
        Паттерн или Failure(ILLEGAL_ARGUMENT) при длине != width
        или элементе не из {0, 1}
    """
    if len(bits) != width:
        return illegal_argument(f"Invalid bit count: {len(bits)}")
    pattern = 0
    for bit in bits:
        if bit not in (0, 1):
            return illegal_argument(f"Invalid bit value: {bit!r}")
        pattern = (pattern << 1) | int(bit)
    return pattern
