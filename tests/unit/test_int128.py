"""
Тесты для 128-битных целых (WideInt)

Проверяет:
1. Маршрутизацию через LongLong и promotion (одно- и двухсловные операнды)
2. Checked-политику: Overflow за пределами 128 бит
3. Unchecked-варианты: результат по модулю 2^128
4. Деление, negate UInt128, сдвиги (арифметический / логический)
5. Byte-кодирование двумя big-endian половинами
"""

import random

import pytest

from src.core.domain.kinds import INT128, UINT128, UNCHECKED_INT128, UNCHECKED_UINT128, UINT64
from src.core.domain.outcome import Failure, NumericOverflow, Signal
from src.core.math.longlong import LongLong
from src.numbers.wide import WideInt

INT128_MIN = INT128.min_value
INT128_MAX = INT128.max_value
UINT128_MAX = UINT128.max_value


def int128(value: int) -> WideInt:
    return WideInt.of(INT128, value)


def uint128(value: int) -> WideInt:
    return WideInt.of(UINT128, value)


def _assert_overflow(result) -> None:
    assert isinstance(result, Failure)
    assert result.signal == Signal.OVERFLOW


class TestConstruction:
    """Тесты для конструкторов WideInt"""

    def test_of_range(self) -> None:
        """Checked: вне диапазона → Overflow; unchecked: по модулю."""
        _assert_overflow(WideInt.of(INT128, INT128_MAX + 1))
        _assert_overflow(WideInt.of(UINT128, -1))
        assert WideInt.of(UNCHECKED_UINT128, -1).to_int() == UINT128_MAX
        assert WideInt.of(UNCHECKED_INT128, INT128_MAX + 1).to_int() == INT128_MIN

    def test_wrong_family(self) -> None:
        """WideInt требует kind семейства int128."""
        with pytest.raises(ValueError):
            WideInt(UINT64, LongLong(0, 0))

    def test_parse(self) -> None:
        """Текст литерала; 2^127 → Overflow для Int128."""
        assert WideInt.parse(INT128, str(INT128_MIN)).to_int() == INT128_MIN
        _assert_overflow(WideInt.parse(INT128, str(2**127)))
        assert WideInt.parse(UINT128, str(2**127)).to_int() == 2**127

    def test_repr_and_str(self) -> None:
        """Строковое представление по знаковости kind."""
        assert str(uint128(UINT128_MAX)) == str(UINT128_MAX)
        assert repr(int128(-1)) == "Int128(-1)"

    def test_is_small(self) -> None:
        """Одно-словное значение."""
        assert int128(-(2**63)).is_small()
        assert not int128(2**63).is_small()


class TestArithmetic:
    """Тесты для арифметики Int128 / UInt128"""

    def test_small_operands_promote(self) -> None:
        """Одно-словные операнды продвигаются без потерь."""
        assert int128(2**63 - 1).add(1).to_int() == 2**63
        assert int128(-(2**63)).sub(1).to_int() == -(2**63) - 1
        assert uint128(2**64 - 1).mul(2**64 - 1).to_int() == (2**64 - 1) ** 2

    def test_overflow_at_128_bits(self) -> None:
        """Checked: Overflow на границе 128 бит."""
        _assert_overflow(int128(INT128_MAX).add(1))
        _assert_overflow(int128(INT128_MIN).sub(1))
        _assert_overflow(uint128(UINT128_MAX).add(1))
        _assert_overflow(uint128(0).sub(1))
        _assert_overflow(int128(2**64).mul(2**63))

    def test_reference_equivalence(self) -> None:
        """Checked add/sub/mul совпадают с неограниченной арифметикой."""
        rng = random.Random(128)
        for _ in range(1000):
            a = rng.randint(INT128_MIN, INT128_MAX) >> rng.randint(0, 120)
            b = rng.randint(INT128_MIN, INT128_MAX) >> rng.randint(0, 120)
            for op, exact in (("add", a + b), ("sub", a - b), ("mul", a * b)):
                result = getattr(int128(a), op)(b)
                if INT128.contains(exact):
                    assert result.to_int() == exact
                else:
                    _assert_overflow(result)

    def test_unchecked_wraps(self) -> None:
        """Unchecked: результат по модулю 2^128, без Overflow."""
        maximum = WideInt.of(UNCHECKED_INT128, INT128_MAX)
        assert maximum.add(1).to_int() == INT128_MIN
        assert WideInt.of(UNCHECKED_UINT128, 0).sub(1).to_int() == UINT128_MAX
        square = WideInt.of(UNCHECKED_UINT128, 2**100).mul(2**100)
        assert square.to_int() == (2**200) % (2**128)

    def test_neg(self) -> None:
        """negate: MIN → Overflow; UInt128 → UnsupportedOperation."""
        assert int128(5).neg().to_int() == -5
        _assert_overflow(int128(INT128_MIN).neg())
        assert uint128(1).neg().signal == Signal.UNSUPPORTED_OPERATION
        assert WideInt.of(UNCHECKED_INT128, INT128_MIN).neg().to_int() == INT128_MIN

    def test_abs_next_prev(self) -> None:
        """abs / next / prev с границами."""
        assert int128(-(2**100)).abs().to_int() == 2**100
        _assert_overflow(int128(INT128_MAX).next())
        _assert_overflow(uint128(0).prev())
        assert uint128(2**64 - 1).next().to_int() == 2**64


class TestDivision:
    """Тесты для деления Int128 / UInt128"""

    def test_floored(self) -> None:
        """div/mod — floored."""
        assert int128(-(2**100) - 1).div(2).to_int() == (-(2**100) - 1) // 2
        assert int128(-7).mod(2).to_int() == 1

    def test_divrem(self) -> None:
        """divrem с усечением к нулю."""
        quotient, remainder = int128(-7).divrem(2)
        assert (quotient.to_int(), remainder.to_int()) == (-3, -1)

    def test_by_zero(self) -> None:
        """Деление на ноль → Overflow для обеих политик."""
        for value in (int128(1), WideInt.of(UNCHECKED_UINT128, 1)):
            _assert_overflow(value.div(0))
            _assert_overflow(value.mod(0))
            _assert_overflow(value.divrem(0))

    def test_min_div_minus_one(self) -> None:
        """MIN / -1: checked → Overflow, unchecked → MIN."""
        _assert_overflow(int128(INT128_MIN).div(-1))
        unchecked = WideInt.of(UNCHECKED_INT128, INT128_MIN)
        assert unchecked.div(-1).to_int() == INT128_MIN
        quotient, remainder = unchecked.divrem(-1)
        assert (quotient.to_int(), remainder.to_int()) == (INT128_MIN, 0)

    def test_unsigned_large(self) -> None:
        """Беззнаковое деление значений выше 2^127."""
        assert uint128(UINT128_MAX).div(2).to_int() == UINT128_MAX // 2
        assert uint128(UINT128_MAX).mod(2**64).to_int() == 2**64 - 1


class TestBitsAndEncoding:
    """Тесты для сдвигов, побитовых операций и кодирования"""

    def test_shr_by_signedness(self) -> None:
        """shr: арифметический для Int128, логический для UInt128."""
        assert int128(INT128_MIN).shr(127).to_int() == -1
        assert uint128(2**127).shr(127).to_int() == 1
        assert int128(-1).ushr(127).to_int() == 1

    def test_shift_out_of_range(self) -> None:
        """Счётчик вне 0..127 → 0."""
        assert int128(1).shl(128).to_int() == 0
        assert int128(-1).shr(200).to_int() == 0

    def test_logic(self) -> None:
        """and/or/xor/not."""
        assert uint128(2**100 | 1).and_(1).to_int() == 1
        assert int128(0).not_().to_int() == -1
        assert uint128(0).not_().to_int() == UINT128_MAX

    def test_bytes_halves(self) -> None:
        """16 байт, старшая половина первой."""
        value = uint128((1 << 64) | 2)
        data = value.to_bytes()
        assert data == bytes(7) + b"\x01" + bytes(7) + b"\x02"
        assert WideInt.from_bytes(UINT128, data) == value

    def test_bytes_wrong_length(self) -> None:
        """Неверная длина → IllegalArgument."""
        assert WideInt.from_bytes(INT128, bytes(8)).signal == Signal.ILLEGAL_ARGUMENT

    def test_bits_round_trip(self) -> None:
        """128 бит, старший первым."""
        value = int128(INT128_MIN + 12345)
        bits = value.to_bits()
        assert len(bits) == 128 and bits[0] == 1
        assert WideInt.from_bits(INT128, bits) == value

    def test_counts(self) -> None:
        """Подсчёт бит на ширине 128."""
        assert uint128(1).leading_zero_count() == 127
        assert uint128(0).trailing_zero_count() == 128
        assert int128(-1).bit_count() == 128

    def test_magnitude(self) -> None:
        """Модуль MIN как UInt128."""
        magnitude = int128(INT128_MIN).magnitude()
        assert magnitude.kind == UINT128
        assert magnitude.to_int() == 2**127


class TestOperators:
    """Тесты для Python-операторов WideInt"""

    def test_arithmetic(self) -> None:
        """Операторы разворачивают результат."""
        assert (int128(2**100) * 4).to_int() == 2**102
        assert (3 - int128(5)).to_int() == -2
        assert int128(-1) < int128(0)
        assert uint128(UINT128_MAX) > uint128(0)

    def test_overflow_raises(self) -> None:
        """Overflow → NumericOverflow."""
        with pytest.raises(NumericOverflow):
            int128(INT128_MAX) + 1
