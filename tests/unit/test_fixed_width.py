"""
Тесты для целых фиксированной ширины (FixedInt)

Проверяет:
1. Checked-политику: Overflow ровно при выходе за [min, max]
2. Unchecked-политику: результат по модулю 2^width, без Overflow
3. Деление: floored div/mod, divrem с усечением, деление на ноль
4. negate unsigned → UnsupportedOperation
5. Кэш малых значений (singleton для 8-битных kind)
6. Byte/bit кодирование и побитовые операции
7. Python-операторы поверх именованных операций
"""

import pytest

from src.core.domain.kinds import (
    INT8,
    INT16,
    INT64,
    INT128,
    UINT8,
    UINT16,
    UINT64,
    UINT128,
    UNCHECKED_INT8,
    UNCHECKED_INT64,
    UNCHECKED_UINT8,
    UNCHECKED_UINT16,
)
from src.core.domain.outcome import (
    Failure,
    IllegalArgument,
    NumericOverflow,
    Signal,
    UnsupportedOperation,
)
from src.numbers.fixed import SMALL_VALUE_KINDS, FixedInt
from src.numbers.wide import WideInt

INT8_SAMPLE = range(-128, 128, 9)
UINT8_SAMPLE = range(0, 256, 13)


def int8(value: int) -> FixedInt:
    return FixedInt.of(INT8, value)


def uint8(value: int) -> FixedInt:
    return FixedInt.of(UINT8, value)


def _assert_overflow(result) -> None:
    assert isinstance(result, Failure)
    assert result.signal == Signal.OVERFLOW


# =============================================================================
# КОНСТРУКТОРЫ
# =============================================================================


class TestConstruction:
    """Тесты для конструкторов FixedInt"""

    def test_of_checked_out_of_range(self) -> None:
        """Checked kind: значение вне диапазона → Overflow."""
        _assert_overflow(FixedInt.of(INT8, 128))
        _assert_overflow(FixedInt.of(UINT8, -1))

    def test_of_unchecked_wraps(self) -> None:
        """Unchecked kind: значение по модулю 2^width."""
        assert FixedInt.of(UNCHECKED_INT8, 128).value == -128
        assert FixedInt.of(UNCHECKED_UINT8, -1).value == 255

    def test_direct_construction_validates(self) -> None:
        """Прямой конструктор отклоняет значение вне диапазона и чужой kind."""
        with pytest.raises(ValueError):
            FixedInt(INT8, 200)
        with pytest.raises(ValueError):
            FixedInt(INT128, 0)

    def test_parse(self) -> None:
        """Текст литерала; вне диапазона → Overflow даже для unchecked."""
        assert FixedInt.parse(INT8, "-128").value == -128
        _assert_overflow(FixedInt.parse(UNCHECKED_INT8, "200"))
        assert FixedInt.parse(INT8, "12x").signal == Signal.ILLEGAL_ARGUMENT

    def test_repr(self) -> None:
        """repr содержит имя kind."""
        assert repr(int8(-5)) == "Int8(-5)"
        assert str(uint8(7)) == "7"


# =============================================================================
# CHECKED-ПОЛИТИКА
# =============================================================================


class TestCheckedArithmetic:
    """Тесты для checked-арифметики"""

    def test_int8_add_overflow(self) -> None:
        """Int8: 120 + 10 → Overflow."""
        _assert_overflow(int8(120).add(10))

    def test_int64_min_negate(self) -> None:
        """Int64 MIN negate → Overflow."""
        _assert_overflow(FixedInt.of(INT64, INT64.min_value).neg())

    def test_add_sub_law(self) -> None:
        """Checked add/sub: значение iff точный результат в диапазоне."""
        for a in INT8_SAMPLE:
            for b in INT8_SAMPLE:
                for op, exact in (("add", a + b), ("sub", a - b)):
                    result = getattr(int8(a), op)(b)
                    if INT8.contains(exact):
                        assert result.value == exact
                    else:
                        _assert_overflow(result)

    def test_mul_law(self) -> None:
        """Checked mul: значение iff произведение в диапазоне."""
        for a in INT8_SAMPLE:
            for b in INT8_SAMPLE:
                result = int8(a).mul(b)
                if INT8.contains(a * b):
                    assert result.value == a * b
                else:
                    _assert_overflow(result)

    def test_unsigned_law(self) -> None:
        """UInt8: add/sub/mul совпадают с точной арифметикой в диапазоне."""
        for a in UINT8_SAMPLE:
            for b in UINT8_SAMPLE:
                for op, exact in (("add", a + b), ("sub", a - b), ("mul", a * b)):
                    result = getattr(uint8(a), op)(b)
                    if UINT8.contains(exact):
                        assert result.value == exact
                    else:
                        _assert_overflow(result)

    def test_int64_mul_overflow(self) -> None:
        """Int64: произведение, выходящее за 64 бита, детектируется."""
        big = FixedInt.of(INT64, 2**32)
        _assert_overflow(big.mul(2**32))
        assert big.mul(2**30).value == 2**62
        _assert_overflow(FixedInt.of(INT64, INT64.min_value).mul(-1))

    def test_uint64_mul_overflow(self) -> None:
        """UInt64: произведение > MAX → Overflow."""
        _assert_overflow(FixedInt.of(UINT64, 2**32).mul(2**32))
        assert FixedInt.of(UINT64, 2**32).mul(2**31).value == 2**63

    def test_next_prev_bounds(self) -> None:
        """next/prev на границах → Overflow."""
        _assert_overflow(int8(127).next())
        _assert_overflow(uint8(0).prev())
        assert int8(-1).next().value == 0

    def test_abs(self) -> None:
        """abs(MIN) → Overflow для checked."""
        _assert_overflow(int8(-128).abs())
        assert int8(-5).abs().value == 5


# =============================================================================
# UNCHECKED-ПОЛИТИКА
# =============================================================================


class TestUncheckedArithmetic:
    """Тесты для unchecked-арифметики"""

    def test_uint8_add_wraps(self) -> None:
        """UncheckedUInt8: 250 + 10 → 4."""
        assert FixedInt.of(UNCHECKED_UINT8, 250).add(10).value == 4

    def test_never_overflows(self) -> None:
        """Unchecked add/sub/mul: всегда значение по модулю 2^8."""
        for a in INT8_SAMPLE:
            for b in INT8_SAMPLE:
                x = FixedInt.of(UNCHECKED_INT8, a)
                for op, exact in (("add", a + b), ("sub", a - b), ("mul", a * b)):
                    result = getattr(x, op)(b)
                    assert not isinstance(result, Failure)
                    assert (result.value - exact) % 256 == 0

    def test_min_edge_cases(self) -> None:
        """Unchecked MIN: neg, abs и div на -1 возвращают MIN."""
        minimum = FixedInt.of(UNCHECKED_INT64, INT64.min_value)
        assert minimum.neg() == minimum
        assert minimum.abs() == minimum
        assert minimum.div(-1) == minimum

    def test_unsigned_sub_wraps(self) -> None:
        """UncheckedUInt16: 0 - 1 → 65535."""
        assert FixedInt.of(UNCHECKED_UINT16, 0).sub(1).value == 65535

    def test_to_unchecked(self) -> None:
        """to_unchecked сохраняет значение."""
        assert int8(-3).to_unchecked() == FixedInt.of(UNCHECKED_INT8, -3)


# =============================================================================
# ДЕЛЕНИЕ
# =============================================================================


class TestDivision:
    """Тесты для div / mod / divrem"""

    def test_floored(self) -> None:
        """div/mod — floored, знак mod совпадает со знаком делителя."""
        assert int8(-7).div(2).value == -4
        assert int8(-7).mod(2).value == 1
        assert int8(7).mod(-2).value == -1

    def test_division_identity(self) -> None:
        """a == div(a, b) * b + mod(a, b) для ненулевых b."""
        for a in INT8_SAMPLE:
            for b in (-7, -2, -1, 3, 100):
                q = int8(a).div(b)
                if isinstance(q, Failure):
                    continue
                assert q.value * b + int8(a).mod(b).value == a

    def test_divrem_truncates(self) -> None:
        """divrem: частное к нулю, остаток со знаком делимого."""
        quotient, remainder = int8(-7).divrem(2)
        assert (quotient.value, remainder.value) == (-3, -1)

    def test_division_by_zero(self) -> None:
        """Деление на ноль → Overflow для обеих политик."""
        for value in (int8(5), FixedInt.of(UNCHECKED_UINT8, 5)):
            _assert_overflow(value.div(0))
            _assert_overflow(value.mod(0))
            _assert_overflow(value.divrem(0))

    def test_min_div_minus_one(self) -> None:
        """Checked MIN / -1 → Overflow."""
        _assert_overflow(int8(-128).div(-1))
        _assert_overflow(int8(-128).divrem(-1))


# =============================================================================
# НЕПОДДЕРЖИВАЕМЫЕ ОПЕРАЦИИ И СМЕШЕНИЕ KIND
# =============================================================================


class TestUnsupported:
    """Тесты для UnsupportedOperation"""

    def test_unsigned_negate(self) -> None:
        """negate UInt8 / UncheckedUInt8 → UnsupportedOperation."""
        for kind in (UINT8, UNCHECKED_UINT8, UINT16):
            result = FixedInt.of(kind, 1).neg()
            assert result.signal == Signal.UNSUPPORTED_OPERATION

    def test_kind_mismatch(self) -> None:
        """Операнд другого kind → UnsupportedOperation."""
        assert int8(1).add(uint8(1)).signal == Signal.UNSUPPORTED_OPERATION
        with pytest.raises(UnsupportedOperation):
            int8(1) + uint8(1)


# =============================================================================
# КЭШ МАЛЫХ ЗНАЧЕНИЙ
# =============================================================================


class TestSmallValueCache:
    """Тесты для кэша малых значений"""

    def test_identity(self) -> None:
        """Одно и то же значение 8-битного kind — один объект."""
        for kind in SMALL_VALUE_KINDS:
            assert FixedInt.of(kind, 5) is FixedInt.of(kind, 5)

    def test_results_come_from_cache(self) -> None:
        """Результаты арифметики тоже берутся из кэша."""
        assert uint8(2).add(3) is uint8(5)
        assert FixedInt.from_bytes(INT8, b"\xff") is int8(-1)

    def test_cache_covers_full_range(self) -> None:
        """Кэш покрывает весь диапазон kind."""
        assert int8(-128).value == -128
        assert uint8(255).value == 255

    def test_wider_kinds_equal_by_value(self) -> None:
        """Более широкие kind сравниваются по значению."""
        assert FixedInt.of(INT16, 1000) == FixedInt.of(INT16, 1000)


# =============================================================================
# КОДИРОВАНИЕ
# =============================================================================


class TestEncoding:
    """Тесты для byte/bit кодирования"""

    def test_bytes_big_endian(self) -> None:
        """Big-endian, ровно width/8 байт, two's complement."""
        assert FixedInt.of(INT16, -2).to_bytes() == b"\xff\xfe"
        assert FixedInt.from_bytes(INT16, b"\xff\xfe").value == -2
        assert FixedInt.from_bytes(UINT16, b"\xff\xfe").value == 0xFFFE

    def test_round_trip_int64(self) -> None:
        """Граничные значения Int64 кодируются без потерь."""
        for value in (INT64.min_value, -1, 0, INT64.max_value):
            encoded = FixedInt.of(INT64, value)
            assert FixedInt.from_bytes(INT64, encoded.to_bytes()) == encoded
            assert FixedInt.from_bits(INT64, encoded.to_bits()) == encoded

    def test_wrong_length(self) -> None:
        """Неверная длина → IllegalArgument."""
        assert FixedInt.from_bytes(INT16, b"\x00").signal == Signal.ILLEGAL_ARGUMENT
        assert FixedInt.from_bits(INT8, [1] * 7).signal == Signal.ILLEGAL_ARGUMENT

    def test_bits_msb_first(self) -> None:
        """Биты, старший первым."""
        assert int8(-1).to_bits() == (1,) * 8
        assert uint8(1).to_bits() == (0,) * 7 + (1,)


# =============================================================================
# ПОБИТОВЫЕ ОПЕРАЦИИ
# =============================================================================


class TestBitOperations:
    """Тесты для побитовых операций"""

    def test_logic(self) -> None:
        """and/or/xor/not над паттерном."""
        assert uint8(0b1100).and_(0b1010).value == 0b1000
        assert uint8(0b1100).or_(0b1010).value == 0b1110
        assert uint8(0b1100).xor(0b1010).value == 0b0110
        assert int8(0).not_().value == -1

    def test_shifts(self) -> None:
        """shl/shr/ushr; счётчик вне 0..width-1 → 0."""
        assert int8(1).shl(7).value == -128
        assert int8(-128).shr(1).value == -64
        assert int8(-128).ushr(1).value == 64
        assert int8(1).shl(8).value == 0
        assert int8(-1).shr(-1).value == 0

    def test_rotate_reverse(self) -> None:
        """Ротация и обращение бит/байт."""
        assert uint8(0b10000001).rotate_left(1).value == 0b11
        assert uint8(0b11).rotate_right(1).value == 0b10000001
        assert uint8(1).reverse_bits().value == 0x80
        assert FixedInt.of(UINT16, 0x1234).reverse_bytes().value == 0x3412

    def test_counts(self) -> None:
        """Подсчёт бит и нулей."""
        assert int8(-1).bit_count() == 8
        assert uint8(1).leading_zero_count() == 7
        assert uint8(8).trailing_zero_count() == 3
        assert uint8(0b0110).leftmost_bit().value == 0b0100
        assert uint8(0b0110).rightmost_bit().value == 0b0010

    def test_truncate_and_retain(self) -> None:
        """Младшие / старшие count бит; count вне 0..width → IllegalArgument."""
        assert uint8(0xFF).truncate(4).value == 0x0F
        assert uint8(0xFF).retain_ms_bits(4).value == 0xF0
        assert uint8(0xFF).truncate(9).signal == Signal.ILLEGAL_ARGUMENT

    def test_magnitude(self) -> None:
        """Модуль MIN как значение комплементарного unsigned kind."""
        magnitude = int8(-128).magnitude()
        assert magnitude.kind == UINT8
        assert magnitude.value == 128

    def test_digit_count_and_steps(self) -> None:
        """Количество цифр и шагов между значениями."""
        assert int8(-100).digit_count() == 3
        assert int8(-3).steps_to(4) == 7


# =============================================================================
# WIDENING MUL
# =============================================================================


class TestWideningMul:
    """Тесты для widening_mul"""

    def test_signed_full_product(self) -> None:
        """Int64 MAX * MAX как Int128, без Overflow."""
        value = FixedInt.of(INT64, INT64.max_value)
        product = value.widening_mul(value)
        assert isinstance(product, WideInt)
        assert product.kind == INT128
        assert product.to_int() == INT64.max_value**2

    def test_unsigned_full_product(self) -> None:
        """UInt64 MAX * MAX как UInt128."""
        value = FixedInt.of(UINT64, UINT64.max_value)
        product = value.widening_mul(value)
        assert product.kind == UINT128
        assert product.to_int() == UINT64.max_value**2

    def test_negative_product(self) -> None:
        """Знак сохраняется."""
        assert int8(-100).widening_mul(100).to_int() == -10000


# =============================================================================
# ОПЕРАТОРЫ
# =============================================================================


class TestOperators:
    """Тесты для Python-операторов"""

    def test_arithmetic(self) -> None:
        """+, -, *, //, % разворачивают результат."""
        assert int8(100) + 27 == int8(127)
        assert 5 + int8(3) == int8(8)
        assert 10 - int8(3) == int8(7)
        assert int8(-7) // 2 == int8(-4)
        assert int8(-7) % 2 == int8(1)
        assert -int8(5) == int8(-5)

    def test_overflow_raises(self) -> None:
        """Failure разворачивается в исключение своего signal."""
        with pytest.raises(NumericOverflow):
            int8(100) + 28
        with pytest.raises(NumericOverflow):
            int8(1) // 0
        with pytest.raises(UnsupportedOperation):
            -uint8(1)

    def test_comparison(self) -> None:
        """Сравнение с тем же kind и с int."""
        assert int8(3) < 5
        assert int8(3) >= int8(3)
        assert uint8(200) > uint8(100)

    def test_comparison_with_int_outside_kind(self) -> None:
        """Порядок с int вне диапазона kind — по точному значению, без Overflow."""
        assert int8(5) < 300
        assert int8(5) > -1000
        assert uint8(1) > -1
        assert not uint8(255) >= 256
        assert WideInt.of(INT128, 5) < 2**200
        assert WideInt.of(UINT128, 0) > -(2**200)

    def test_equality_with_int_is_not_implemented(self) -> None:
        """== с int не сужает значение: FixedInt не равен int."""
        assert int8(5).__eq__(5) is NotImplemented
        assert int8(5) != 5

    def test_bitwise_and_index(self) -> None:
        """Побитовые операторы и __index__."""
        assert (uint8(0b1100) & 0b1010) == uint8(0b1000)
        assert (int8(1) << 3) == int8(8)
        assert ~int8(0) == int8(-1)
        assert [10, 20, 30][int8(1)] == 20
        assert int(uint8(42)) == 42

    def test_bool_operand_rejected(self) -> None:
        """bool не принимается как операнд."""
        with pytest.raises(TypeError):
            int8(1) + True

    def test_illegal_argument_is_value_error(self) -> None:
        """IllegalArgument совместим с ValueError."""
        with pytest.raises(ValueError):
            FixedInt.from_bytes(INT8, b"").raise_error()
        assert issubclass(IllegalArgument, ValueError)
