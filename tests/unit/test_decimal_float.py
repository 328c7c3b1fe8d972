"""
Тесты для IEEE-754-2008 decimal float (Dec32 / Dec64 / Dec128)

Проверяет:
1. Округление до точности формата и Overflow конструктора
2. DPD кодирование известных значений, сохранение quantum и sNaN
3. Арифметику: деление на ноль → Overflow, неотрицательный mod
4. exp / pow / scale_by_pow переполнение → Overflow
5. Канонический текст, split, next_up / round
6. Сравнения с NaN без InvalidOperation
"""

from decimal import Decimal

import pytest

from src.core.domain.kinds import DEC32, DEC64, DEC128, RoundingMode
from src.core.domain.outcome import Failure, Signal
from src.numbers.decimal_float import DecimalFloat, dec32, dec64, dec128


def _assert_signal(result, signal: Signal) -> None:
    assert isinstance(result, Failure)
    assert result.signal == signal


# =============================================================================
# КОНСТРУКТОРЫ
# =============================================================================


class TestConstruction:
    """Тесты для конструкторов DecimalFloat"""

    def test_rounded_to_precision(self) -> None:
        """Coefficient округляется до точности формата."""
        assert dec32("1.23456789").value == Decimal("1.234568")
        assert dec64("0.1").value == Decimal("0.1")
        assert len(dec128(Decimal(1) / Decimal(3)).value.as_tuple().digits) <= 34

    def test_overflow(self) -> None:
        """Конечное значение вне диапазона → Overflow."""
        _assert_signal(dec32(10**200), Signal.OVERFLOW)
        _assert_signal(dec64("1E+385"), Signal.OVERFLOW)
        assert dec128("1E+6144").is_finite()

    def test_special_values(self) -> None:
        """Бесконечности и NaN."""
        assert DecimalFloat.infinity(DEC64, negative=True).value == Decimal("-Infinity")
        assert DecimalFloat.nan(DEC64).is_nan()
        assert DecimalFloat.nan(DEC64, signaling=True).is_signaling_nan()

    def test_parse(self) -> None:
        """Текст литерала → значение формата."""
        assert DecimalFloat.parse(DEC64, "1.25").value == Decimal("1.25")
        _assert_signal(DecimalFloat.parse(DEC32, "1e200"), Signal.OVERFLOW)
        _assert_signal(DecimalFloat.parse(DEC32, "x"), Signal.ILLEGAL_ARGUMENT)


# =============================================================================
# КОДИРОВАНИЕ
# =============================================================================


class TestEncoding:
    """Тесты для DPD кодирования"""

    def test_known_patterns(self) -> None:
        """Известные паттерны единицы."""
        assert dec32(1).pattern == 0x22500001
        assert dec64(1).pattern == 0x2238000000000001
        assert dec128(1).pattern == 0x22080000000000000000000000000001

    def test_special_patterns(self) -> None:
        """Infinity, NaN, sNaN и знак."""
        assert DecimalFloat.infinity(DEC64).pattern == 0x7800000000000000
        assert DecimalFloat.infinity(DEC32, negative=True).pattern == 0xF8000000
        assert DecimalFloat.nan(DEC64).pattern == 0x7C00000000000000
        assert DecimalFloat.nan(DEC64, signaling=True).pattern == 0x7E00000000000000

    def test_quantum_preserved(self) -> None:
        """from_bytes(to_bytes(v)) сохраняет quantum."""
        value = dec64("1.50")
        decoded = DecimalFloat.from_bytes(DEC64, value.to_bytes())
        assert decoded.value.as_tuple() == Decimal("1.50").as_tuple()

    def test_round_trip_extremes(self) -> None:
        """Граничные значения форматов."""
        for text in ("9.999999E+96", "-1E-101", "0E-101", "1234567"):
            value = dec32(text)
            decoded = DecimalFloat.from_bytes(DEC32, value.to_bytes())
            assert decoded.value.as_tuple() == value.value.as_tuple()

    def test_signaling_nan_round_trip(self) -> None:
        """sNaN сохраняется через байты."""
        value = DecimalFloat.nan(DEC128, signaling=True)
        decoded = DecimalFloat.from_bytes(DEC128, value.to_bytes())
        assert decoded.is_signaling_nan()

    def test_signaling_nan_equality_and_hash(self) -> None:
        """sNaN хэшируется и равен себе после байтов; тихий NaN с ним не равен."""
        value = DecimalFloat.nan(DEC64, signaling=True)
        decoded = DecimalFloat.from_bytes(DEC64, value.to_bytes())
        assert decoded == value
        assert hash(decoded) == hash(value)
        assert value != DecimalFloat.nan(DEC64)
        assert len({value, decoded}) == 1

    def test_bits(self) -> None:
        """Биты, старший первым."""
        bits = dec32(1).to_bits()
        assert len(bits) == 32
        assert DecimalFloat.from_bits(DEC32, bits).value == Decimal(1)

    def test_wrong_length(self) -> None:
        """Неверная длина → IllegalArgument."""
        _assert_signal(DecimalFloat.from_bytes(DEC64, bytes(4)), Signal.ILLEGAL_ARGUMENT)


# =============================================================================
# АРИФМЕТИКА
# =============================================================================


class TestArithmetic:
    """Тесты для арифметики DecimalFloat"""

    def test_exact_decimal(self) -> None:
        """0.1 + 0.2 == 0.3 точно."""
        assert dec64("0.1").add(Decimal("0.2")).value == Decimal("0.3")

    def test_division_rounds(self) -> None:
        """Деление округляется до точности формата."""
        assert dec64(1).div(3).value == Decimal("0.3333333333333333")

    def test_division_by_zero(self) -> None:
        """Делитель ±0 → Overflow."""
        _assert_signal(dec64(1).div(0), Signal.OVERFLOW)
        _assert_signal(dec64(1).mod(Decimal("-0")), Signal.OVERFLOW)

    def test_add_overflow_is_infinity(self) -> None:
        """Переполнение add → Infinity."""
        big = dec32("9.999999E+96")
        assert big.add(big).is_infinite()

    def test_mod_non_negative(self) -> None:
        """mod всегда неотрицателен."""
        assert dec64(-7).mod(3).value == Decimal(2)
        assert dec64(7).mod(3).value == Decimal(1)
        assert dec64("-7.5").mod(2).value == Decimal("0.5")

    def test_mod_negative_modulus(self) -> None:
        """Отрицательный модуль → IllegalArgument."""
        result = dec64(7).mod(-3)
        _assert_signal(result, Signal.ILLEGAL_ARGUMENT)
        assert result.reason == "Modulus is negative"

    def test_mod_large_quotient(self) -> None:
        """Остаток точен при частном длиннее точности формата."""
        assert dec64("1E+300").mod(7).value == Decimal(1)

    def test_kind_mismatch(self) -> None:
        """Операнд другого kind → UnsupportedOperation."""
        _assert_signal(dec64(1).add(dec32(1)), Signal.UNSUPPORTED_OPERATION)

    def test_neg_abs_signum(self) -> None:
        """neg / abs / signum."""
        assert dec64("1.5").neg().value == Decimal("-1.5")
        assert dec64("-1.5").abs().value == Decimal("1.5")
        assert dec64("-42").signum().value == Decimal(-1)


# =============================================================================
# ФУНКЦИИ
# =============================================================================


class TestFunctions:
    """Тесты для функций DecimalFloat"""

    def test_exp(self) -> None:
        """exp; переполнение формата → Overflow."""
        assert dec64(0).exp().value == Decimal(1)
        _assert_signal(dec32(1000).exp(), Signal.OVERFLOW)

    def test_pow(self) -> None:
        """pow; переполнение → Overflow."""
        assert dec64(2).pow(10).value == Decimal(1024)
        _assert_signal(dec32(10).pow(200), Signal.OVERFLOW)

    def test_scale_by_pow(self) -> None:
        """value * 10^n; огромный счётчик → Overflow."""
        assert dec64("1.5").scale_by_pow(3).value == Decimal(1500)
        _assert_signal(dec64(1).scale_by_pow(10**9), Signal.OVERFLOW)
        assert dec64(1).scale_by_pow(-(10**9)).value.is_zero()

    def test_logarithms(self) -> None:
        """ln / log10 / log2 нативно в decimal."""
        assert dec64(1000).log10().value == Decimal(3)
        assert dec64(8).log2().value == Decimal(3)
        assert dec64(0).log().value == Decimal("-Infinity")
        assert dec64(-1).log().is_nan()

    def test_sqrt(self) -> None:
        """sqrt; отрицательный аргумент → NaN."""
        assert dec64(16).sqrt().value == Decimal(4)
        assert dec64(-1).sqrt().is_nan()

    def test_via_binary64(self) -> None:
        """Остальные функции вычисляются через binary64."""
        assert float(dec64(0).sin().value) == 0.0
        assert float(dec64(1).atan().value) == pytest.approx(0.7853981633974483)
        assert dec64(2).asin().is_nan()
        assert DecimalFloat.nan(DEC64).cos().is_nan()


# =============================================================================
# ТЕКСТ, SPLIT, ОКРУГЛЕНИЕ
# =============================================================================


class TestTextAndRounding:
    """Тесты для текста, split и округления"""

    def test_to_string(self) -> None:
        """Канонический текст без хвостовых нулей."""
        assert dec64("1.50").to_string() == "1.5"
        assert dec64("15E+6").to_string() == "15E+6"
        assert dec64("-0").to_string() == "-0"
        assert DecimalFloat.nan(DEC64, signaling=True).to_string() == "sNaN"
        assert DecimalFloat.infinity(DEC64).to_string() == "Infinity"
        assert repr(dec32("2.5")) == "Dec32(2.5)"

    def test_split(self) -> None:
        """(sign, coefficient, exponent); нефинитное → UnsupportedOperation."""
        assert dec64("-1.50").split() == (1, 150, -2)
        _assert_signal(DecimalFloat.infinity(DEC64).split(), Signal.UNSUPPORTED_OPERATION)

    def test_next_up_down(self) -> None:
        """Соседние значения в точности формата."""
        assert dec32(1).next_up().value == Decimal("1.000001")
        assert dec32(1).next_down().value == Decimal("0.9999999")

    @pytest.mark.parametrize(
        "mode,expected",
        [
            (RoundingMode.TIES_TO_EVEN, Decimal(-2)),
            (RoundingMode.TIES_TO_AWAY, Decimal(-3)),
            (RoundingMode.TOWARD_ZERO, Decimal(-2)),
            (RoundingMode.TOWARD_POSITIVE, Decimal(-2)),
            (RoundingMode.TOWARD_NEGATIVE, Decimal(-3)),
        ],
    )
    def test_round_modes(self, mode: RoundingMode, expected: Decimal) -> None:
        """-2.5 во всех пяти режимах."""
        assert dec64("-2.5").round(mode).value == expected

    def test_floor_ceil(self) -> None:
        """floor / ceil."""
        assert dec64("2.1").floor().value == Decimal(2)
        assert dec64("2.1").ceil().value == Decimal(3)


# =============================================================================
# СРАВНЕНИЕ
# =============================================================================


class TestComparison:
    """Тесты для сравнения DecimalFloat"""

    def test_nan_relations_false(self) -> None:
        """Сравнение с NaN ложно и не поднимает InvalidOperation."""
        nan = DecimalFloat.nan(DEC64)
        assert not nan < dec64(1)
        assert not dec64(1) >= nan

    def test_compare_nan_is_illegal(self) -> None:
        """compare с NaN → IllegalArgument."""
        _assert_signal(DecimalFloat.nan(DEC64).compare(1), Signal.ILLEGAL_ARGUMENT)

    def test_compare_ignores_quantum(self) -> None:
        """1.50 и 1.5 равны по порядку."""
        assert dec64("1.50").compare(dec64("1.5")) == 0
        assert dec64(-1).compare(0) == -1

    def test_equality_by_pattern(self) -> None:
        """== и hash различают quantum и kind, в отличие от compare."""
        assert len({dec64(1), dec64(1)}) == 1
        assert dec64("1.50") != dec64("1.5")
        assert dec64(1) != dec32(1)
        assert dec64(1).__eq__(1) is NotImplemented

    def test_operators(self) -> None:
        """Операторы разворачивают результат."""
        assert (dec64(1) / 4).value == Decimal("0.25")
        assert (dec64(1) + Decimal("0.5")).value == Decimal("1.5")
        assert float(dec64("2.5")) == 2.5
