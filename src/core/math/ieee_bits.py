"""
IEEE Bits — битовая раскладка binary16/32/64

Преобразования float ↔ битовый паттерн формата, округление double до
ширины формата, nextUp/nextDown по паттерну, split на (sign, mantissa,
exponent) и кратчайший round-trip текст.

Используется struct ('e', 'f', 'd'): упаковка выполняет IEEE округление
к ближайшему; переполнение ширины поднимает OverflowError.
"""

import math
import struct
from fractions import Fraction

from src.core.domain.formats import BinaryFormat


def float_to_bits(value: float, fmt: BinaryFormat) -> int:
    """Битовый паттерн значения (значение уже представимо в формате)."""
    return int.from_bytes(struct.pack(">" + fmt.struct_code, value), "big")


def bits_to_float(pattern: int, fmt: BinaryFormat) -> float:
    """Значение по битовому паттерну формата."""
    data = (pattern & ((1 << fmt.width) - 1)).to_bytes(fmt.width // 8, "big")
    return struct.unpack(">" + fmt.struct_code, data)[0]


def fits_format(value: float, fmt: BinaryFormat) -> bool:
    """Округление конечного значения до формата не даёт бесконечность."""
    if not math.isfinite(value) or fmt.width == 64:
        return True
    try:
        struct.pack(">" + fmt.struct_code, value)
    except OverflowError:
        return False
    return True


def round_to_format(value: float, fmt: BinaryFormat) -> float:
    """
    Округление double до ширины формата (ties-to-even).

    Переполнение даёт ±Infinity, как в IEEE арифметике.
    """
    if fmt.width == 64 or not math.isfinite(value):
        return value
    try:
        return struct.unpack(">" + fmt.struct_code, struct.pack(">" + fmt.struct_code, value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def next_up(value: float, fmt: BinaryFormat) -> float:
    """Следующее представимое значение в сторону +Infinity."""
    if math.isnan(value) or value == math.inf:
        return value
    if value == 0.0:
        # наименьшее положительное субнормальное (и для -0.0)
        return bits_to_float(1, fmt)
    pattern = float_to_bits(value, fmt)
    pattern = pattern + 1 if value > 0 else pattern - 1
    return bits_to_float(pattern, fmt)


def next_down(value: float, fmt: BinaryFormat) -> float:
    """Следующее представимое значение в сторону -Infinity."""
    return -next_up(-value, fmt)


def split(value: float, fmt: BinaryFormat) -> tuple[int, int, int]:
    """
    Разложение на (sign, mantissa, exponent).

    sign — знаковый бит (0/1), mantissa — хранимые биты значащей части,
    exponent — несмещённая экспонента поля (min_exponent - 1 для нуля и
    субнормальных, max_exponent + 1 для Infinity/NaN).
    """
    pattern = float_to_bits(value, fmt)
    sign = pattern >> (fmt.width - 1)
    mantissa = pattern & ((1 << fmt.mantissa_bits) - 1)
    field = (pattern >> fmt.mantissa_bits) & ((1 << fmt.exponent_bits) - 1)
    return sign, mantissa, field - fmt.bias


def shortest_repr(value: float, fmt: BinaryFormat) -> str:
    """
    Кратчайший десятичный текст, однозначно восстанавливающий значение формата.

    Examples:
        >>> shortest_repr(0.1, BINARY64)
        '0.1'
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if fmt.width == 64:
        return repr(value)
    for digits in range(1, fmt.repr_digits + 1):
        text = f"{value:.{digits}g}"
        if round_to_format(float(text), fmt) == value:
            return repr(float(text))
    return repr(value)


def round_exact(value: Fraction, fmt: BinaryFormat) -> float:
    """
    Точное рациональное значение → ближайшее значение формата (ties-to-even).

    Одно округление прямо в точность формата, без промежуточного double;
    переполнение даёт ±Infinity, малые значения — субнормальные или ±0.

    Examples:
        >>> round_exact(Fraction(1, 3), BINARY64) == 1 / 3
        True
        >>> round_exact(Fraction(2 ** 24 + 1), BINARY32)
        16777216.0
    """
    if value == 0:
        return 0.0
    sign = -1.0 if value < 0 else 1.0
    magnitude = abs(value)
    exponent = magnitude.numerator.bit_length() - magnitude.denominator.bit_length()
    if magnitude < Fraction(2) ** exponent:
        exponent -= 1
    shift = max(exponent, fmt.min_exponent) - fmt.mantissa_bits
    scaled = magnitude / Fraction(2) ** shift
    mantissa, remainder = divmod(scaled.numerator, scaled.denominator)
    twice = 2 * remainder
    if twice > scaled.denominator or (twice == scaled.denominator and mantissa & 1):
        mantissa += 1
    if mantissa and shift + mantissa.bit_length() - 1 > fmt.max_exponent:
        return math.copysign(math.inf, sign)
    return sign * math.ldexp(mantissa, shift)
