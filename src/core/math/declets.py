"""
Declets — IEEE-754-2008 Densely Packed Decimal кодирование

Кодирование decimal32/64/128 значений в битовые паттерны и обратно:

    sign (1) | combination G0..G4 (5) | exponent continuation (w) | trailing (t)

Trailing significand — последовательность declet: 10 бит на 3 десятичные
цифры (IEEE 754-2008, 3.5.2, таблицы 3.3 и 3.4). Старшая цифра coefficient
и два старших бита экспоненты кодируются в combination field.

Специальные значения (по G0..G4):
- 11110 → ±Infinity
- 11111 → NaN; следующий бит отличает signaling NaN

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. decode(encode(v)) == v (с точностью до quantum) для любого v формата
2. Каждый из 1024 declet декодируется (24 неканонических — в те же цифры)
3. Кодируемое значение уже округлено контекстом формата (clamp=1)
"""

import decimal
from typing import Final

from src.core.domain.formats import DecimalFormat

# =============================================================================
# DECLET ТАБЛИЦЫ
# =============================================================================


def digits_to_declet(d1: int, d2: int, d3: int) -> int:
    """
    Три десятичные цифры → declet (IEEE 754-2008, таблица 3.4).

    Args:
        d1: Старшая цифра
        d2: Средняя цифра
        d3: Младшая цифра

    Examples:
        >>> digits_to_declet(0, 0, 5)
        5
        >>> digits_to_declet(9, 9, 9)
        255
    """
    key = (d1 & 0b1000) >> 1 | (d2 & 0b1000) >> 2 | (d3 & 0b1000) >> 3
    if key == 0b000:
        return (d1 & 0b111) << 7 | (d2 & 0b111) << 4 | d3 & 0b111
    if key == 0b001:
        return 0b0000001000 | (d1 & 0b111) << 7 | (d2 & 0b111) << 4 | d3 & 0b001
    if key == 0b010:
        return 0b0000001010 | (d1 & 0b111) << 7 | (d3 & 0b110 | d2 & 0b001) << 4 | d3 & 0b001
    if key == 0b011:
        return 0b0001001110 | (d1 & 0b111) << 7 | (d2 & 0b001) << 4 | d3 & 0b001
    if key == 0b100:
        return 0b0000001100 | (d3 & 0b110 | d1 & 0b001) << 7 | (d2 & 0b111) << 4 | d3 & 0b001
    if key == 0b101:
        return 0b0000101110 | (d2 & 0b110 | d1 & 0b001) << 7 | (d2 & 0b001) << 4 | d3 & 0b001
    if key == 0b110:
        return 0b0000001110 | (d3 & 0b110 | d1 & 0b001) << 7 | (d2 & 0b001) << 4 | d3 & 0b001
    return 0b0001101110 | (d1 & 0b001) << 7 | (d2 & 0b001) << 4 | d3 & 0b001


def declet_to_digits(declet: int) -> tuple[int, int, int]:
    """
    Declet → три десятичные цифры (IEEE 754-2008, таблица 3.3).

    Ключ разбора — биты b6 b7 b8 b3 b4 (b0 — старший бит declet).
    """
    key = (declet & 0b1110) << 1 | (declet & 0b1100000) >> 5
    hi3 = (declet >> 7) & 0b111
    mid3 = (declet >> 4) & 0b111
    b2 = (declet >> 7) & 1
    b5 = (declet >> 4) & 1
    b9 = declet & 1
    b01 = (declet >> 7) & 0b110
    b34 = (declet >> 4) & 0b110

    if key < 0b10000:
        return hi3, mid3, declet & 0b111
    if key < 0b10100:
        return hi3, mid3, 8 + b9
    if key < 0b11000:
        return hi3, 8 + b5, b34 + b9
    if key < 0b11100:
        return 8 + b2, mid3, b01 + b9
    if key == 0b11100:
        return 8 + b2, 8 + b5, b01 + b9
    if key == 0b11101:
        return 8 + b2, b01 + b5, 8 + b9
    if key == 0b11110:
        return hi3, 8 + b5, 8 + b9
    return 8 + b2, 8 + b5, 8 + b9


# Таблицы строятся один раз при импорте
_DECLET_FOR_INT: Final[tuple[int, ...]] = tuple(
    digits_to_declet(n // 100, (n // 10) % 10, n % 10) for n in range(1000)
)
_INT_FOR_DECLET: Final[tuple[int, ...]] = tuple(
    d1 * 100 + d2 * 10 + d3 for d1, d2, d3 in (declet_to_digits(v) for v in range(1024))
)


def int_to_declet(value: int) -> int:
    """Три младшие десятичные цифры значения → declet."""
    return _DECLET_FOR_INT[value % 1000]


def declet_to_int(declet: int) -> int:
    """Declet → значение 0..999."""
    return _INT_FOR_DECLET[declet & 0x3FF]


# =============================================================================
# КОМБИНАЦИОННОЕ ПОЛЕ
# =============================================================================

G_INFINITY: Final[int] = 0b11110
G_NAN: Final[int] = 0b11111


def _pack_trailing(value: int, fmt: DecimalFormat) -> int:
    trailing = 0
    for i in range(fmt.declet_count):
        trailing |= int_to_declet(value) << (10 * i)
        value //= 1000
    return trailing


def _unpack_trailing(trailing: int, fmt: DecimalFormat) -> int:
    value = 0
    for i in reversed(range(fmt.declet_count)):
        value = value * 1000 + declet_to_int(trailing >> (10 * i))
    return value


def combination_field(pattern: int, fmt: DecimalFormat) -> int:
    """Биты G0..G4 (сразу после знакового бита)."""
    return (pattern >> (fmt.k - 6)) & 0b11111


# =============================================================================
# ENCODE / DECODE
# =============================================================================


def encode(value: decimal.Decimal, fmt: DecimalFormat) -> int:
    """
    Decimal → битовый паттерн формата.

    Args:
        value: Значение, уже округлённое контекстом формата
        fmt: Формат (DECIMAL32 / DECIMAL64 / DECIMAL128)

    Returns:
        Паттерн ширины fmt.k
    """
    sign, digits, exponent = value.as_tuple()
    t = fmt.trailing_bits
    w = fmt.exponent_continuation_bits
    result = sign << (fmt.k - 1)

    if exponent == "F":
        return result | G_INFINITY << (fmt.k - 6)
    if exponent in ("n", "N"):
        payload = int("".join(map(str, digits))) if digits else 0
        signaling = 1 if exponent == "N" else 0
        return (
            result
            | G_NAN << (fmt.k - 6)
            | signaling << (fmt.k - 7)
            | _pack_trailing(payload, fmt)
        )

    coefficient = int("".join(map(str, digits)))
    biased = exponent + fmt.bias
    scale = 10 ** (fmt.precision - 1)
    msd, trailing = divmod(coefficient, scale)

    if msd < 8:
        g = (biased >> w) << 3 | msd
    else:
        g = 0b11000 | (biased >> w) << 1 | (msd & 1)

    return (
        result
        | g << (fmt.k - 6)
        | (biased & ((1 << w) - 1)) << t
        | _pack_trailing(trailing, fmt)
    )


def decode(pattern: int, fmt: DecimalFormat) -> decimal.Decimal:
    """
    Битовый паттерн формата → Decimal.

    Args:
        pattern: Паттерн ширины fmt.k
        fmt: Формат

    Returns:
        Значение (включая ±Infinity, NaN, sNaN)
    """
    t = fmt.trailing_bits
    w = fmt.exponent_continuation_bits
    sign = (pattern >> (fmt.k - 1)) & 1
    g = combination_field(pattern, fmt)
    trailing = pattern & ((1 << t) - 1)

    if g == G_INFINITY:
        return decimal.Decimal((sign, (0,), "F"))
    if g == G_NAN:
        signaling = (pattern >> (fmt.k - 7)) & 1
        payload = _unpack_trailing(trailing, fmt)
        digits = tuple(int(ch) for ch in str(payload)) if payload else ()
        return decimal.Decimal((sign, digits, "N" if signaling else "n"))

    continuation = (pattern >> t) & ((1 << w) - 1)
    if g >> 3 == 0b11:
        biased = ((g >> 1) & 0b11) << w | continuation
        msd = 8 + (g & 1)
    else:
        biased = (g >> 3) << w | continuation
        msd = g & 0b111

    coefficient = msd * 10 ** (fmt.precision - 1) + _unpack_trailing(trailing, fmt)
    digits = tuple(int(ch) for ch in str(coefficient))
    return decimal.Decimal((sign, digits, biased - fmt.bias))
