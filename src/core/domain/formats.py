"""
Formats — параметры форматов плавающей точки

Статическая конфигурация binary (IEEE-754 binary16/32/64) и decimal
(IEEE-754-2008 decimal32/64/128, DPD-кодирование) форматов.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. 1 + 5 + exponent_continuation_bits + trailing_bits == k для decimal
2. 1 + exponent_bits + (precision - 1) == width для binary
3. decimal.Context создаётся на каждый вызов (контексты мутабельны)
"""

import decimal
import math
from dataclasses import dataclass
from typing import Final

# =============================================================================
# BINARY FORMATS
# =============================================================================


@dataclass(frozen=True)
class BinaryFormat:
    """
    Параметры IEEE-754 binary формата.

    Attributes:
        width: Ширина в битах
        precision: Биты значащей части, включая скрытый бит
        exponent_bits: Биты экспоненты
        struct_code: Код формата для struct ('e', 'f', 'd')
        repr_digits: Максимум значащих цифр для round-trip текста
    """

    width: int
    precision: int
    exponent_bits: int
    struct_code: str
    repr_digits: int

    @property
    def bias(self) -> int:
        return (1 << (self.exponent_bits - 1)) - 1

    @property
    def mantissa_bits(self) -> int:
        """Биты хранимой (trailing) значащей части."""
        return self.precision - 1

    @property
    def max_exponent(self) -> int:
        """Максимальная несмещённая экспонента конечного числа."""
        return self.bias

    @property
    def min_exponent(self) -> int:
        """Минимальная несмещённая экспонента нормализованного числа."""
        return 1 - self.bias

    @property
    def max_finite(self) -> float:
        return (2.0 - 2.0 ** -self.mantissa_bits) * 2.0 ** self.max_exponent

    @property
    def max_decimal_exponent(self) -> int:
        """
        Наибольший десятичный порядок (Decimal.adjusted) конечного значения.

        Значение с большим порядком не меньше 10^(max_decimal_exponent + 1)
        и всегда переполняет формат.
        """
        return math.floor((self.max_exponent + 1) * math.log10(2))

    @property
    def min_decimal_exponent(self) -> int:
        """
        Наименьший десятичный порядок значения, не округляемого к нулю.

        Значение с меньшим порядком меньше половины наименьшего
        субнормального числа и округляется к ±0.
        """
        return math.floor((self.min_exponent - self.mantissa_bits - 1) * math.log10(2))


BINARY16: Final[BinaryFormat] = BinaryFormat(
    width=16, precision=11, exponent_bits=5, struct_code="e", repr_digits=5
)
BINARY32: Final[BinaryFormat] = BinaryFormat(
    width=32, precision=24, exponent_bits=8, struct_code="f", repr_digits=9
)
BINARY64: Final[BinaryFormat] = BinaryFormat(
    width=64, precision=53, exponent_bits=11, struct_code="d", repr_digits=17
)

BINARY_FORMATS: Final[dict[int, BinaryFormat]] = {
    16: BINARY16,
    32: BINARY32,
    64: BINARY64,
}


# =============================================================================
# DECIMAL FORMATS
# =============================================================================


@dataclass(frozen=True)
class DecimalFormat:
    """
    Параметры IEEE-754-2008 decimal формата (DPD).

    Attributes:
        k: Ширина в битах (32, 64, 128)
        precision: Количество десятичных цифр coefficient (p)
        emax: Максимальная adjusted экспонента
        bias: Смещение экспоненты для кодирования
        exponent_continuation_bits: Биты продолжения экспоненты (w)
        trailing_bits: Биты trailing significand (t), кратно 10
    """

    k: int
    precision: int
    emax: int
    bias: int
    exponent_continuation_bits: int
    trailing_bits: int

    @property
    def emin(self) -> int:
        return 1 - self.emax

    @property
    def declet_count(self) -> int:
        return self.trailing_bits // 10

    @property
    def max_biased_exponent(self) -> int:
        return 3 * (1 << self.exponent_continuation_bits) - 1

    def context(self, rounding: str = decimal.ROUND_HALF_EVEN) -> decimal.Context:
        """
        Новый decimal.Context формата.

        Ловушки отключены: переполнение даёт ±Infinity, недопустимая
        операция даёт NaN; ядро само решает, что считать Overflow.
        """
        return decimal.Context(
            prec=self.precision,
            rounding=rounding,
            Emin=self.emin,
            Emax=self.emax,
            capitals=1,
            clamp=1,
            flags=[],
            traps=[],
        )


DECIMAL32: Final[DecimalFormat] = DecimalFormat(
    k=32, precision=7, emax=96, bias=101, exponent_continuation_bits=6, trailing_bits=20
)
DECIMAL64: Final[DecimalFormat] = DecimalFormat(
    k=64, precision=16, emax=384, bias=398, exponent_continuation_bits=8, trailing_bits=50
)
DECIMAL128: Final[DecimalFormat] = DecimalFormat(
    k=128,
    precision=34,
    emax=6144,
    bias=6176,
    exponent_continuation_bits=12,
    trailing_bits=110,
)

DECIMAL_FORMATS: Final[dict[int, DecimalFormat]] = {
    32: DECIMAL32,
    64: DECIMAL64,
    128: DECIMAL128,
}


# =============================================================================
# LITERAL ARITHMETIC
# =============================================================================

# Точность промежуточной арифметики floating-литералов (div требует конечной)
FP_LITERAL_PRECISION: Final[int] = 100


def fp_literal_context() -> decimal.Context:
    """Контекст арифметики FPLiteral: без ограничений экспоненты, без ловушек."""
    return decimal.Context(
        prec=FP_LITERAL_PRECISION,
        rounding=decimal.ROUND_HALF_EVEN,
        Emin=decimal.MIN_EMIN,
        Emax=decimal.MAX_EMAX,
        flags=[],
        traps=[],
    )
