"""
Тесты для продвижения 64-битной арифметики в double-word

Проверяет:
1. Narrow iff точный результат помещается в 64 бита
2. to_longlong всегда восстанавливает точный результат
3. Беззнаковое вычитание с заёмом → Overflow
4. narrow_result / narrow для граничных значений
"""

import pytest

from src.core.domain.outcome import Failure, NumericOverflow, Signal
from src.core.math.longlong import LongLong
from src.core.math.promotion import (
    Narrow,
    Wide,
    add_words,
    mul_words,
    narrow,
    narrow_result,
    sub_words,
    to_longlong,
)
from src.core.math.word_bits import LONG_MAX, LONG_MIN, MASK64

SAMPLES = (0, 1, -1, 2, LONG_MAX, LONG_MIN, LONG_MAX // 3, LONG_MIN + 7, 1 << 40)


class TestAddSubWords:
    """Тесты для add_words / sub_words"""

    def test_narrow_add(self) -> None:
        """Сумма в пределах слова → Narrow."""
        assert add_words(2, 3, True) == Narrow(5)
        assert add_words(-2, 1, True) == Narrow(-1)

    def test_signed_add_promotes(self) -> None:
        """LONG_MAX + 1 → Wide с точным значением."""
        result = add_words(LONG_MAX, 1, True)
        assert isinstance(result, Wide)
        assert result.value.to_int() == LONG_MAX + 1

    def test_unsigned_add_promotes(self) -> None:
        """Беззнаковый перенос → Wide."""
        result = add_words(MASK64, 1, False)
        assert isinstance(result, Wide)
        assert result.value == LongLong(0, 1)

    def test_exact_signed(self) -> None:
        """to_longlong(add/sub) равен точному результату для всех пар."""
        for a in SAMPLES:
            for b in SAMPLES:
                assert to_longlong(add_words(a, b, True), True).to_int() == a + b
                assert to_longlong(sub_words(a, b, True), True).to_int() == a - b

    def test_narrow_iff_fits(self) -> None:
        """Narrow возвращается ровно когда результат помещается в слово."""
        for a in SAMPLES:
            for b in SAMPLES:
                fits = LONG_MIN <= a + b <= LONG_MAX
                assert isinstance(add_words(a, b, True), Narrow) == fits

    def test_unsigned_sub_borrow(self) -> None:
        """Беззнаковое вычитание с заёмом → Overflow."""
        result = sub_words(1, 2, False)
        assert isinstance(result, Failure)
        assert result.signal == Signal.OVERFLOW
        assert sub_words(2, 1, False) == Narrow(1)


class TestMulWords:
    """Тесты для mul_words"""

    def test_signed_product(self) -> None:
        """LONG_MIN * LONG_MIN помещается в 128 бит."""
        result = mul_words(LONG_MIN, LONG_MIN, True)
        assert isinstance(result, Wide)
        assert result.value.to_int() == LONG_MIN * LONG_MIN

    def test_unsigned_product(self) -> None:
        """MASK64 * MASK64 — беззнаковое произведение."""
        result = mul_words(MASK64, MASK64, False)
        assert to_longlong(result, False).to_unsigned_int() == MASK64 * MASK64

    def test_unsigned_operand_interpretation(self) -> None:
        """Отрицательное слово трактуется как беззнаковый паттерн."""
        assert to_longlong(mul_words(-1, 1, False), False).to_unsigned_int() == MASK64


class TestNarrowing:
    """Тесты для narrow_result / narrow / to_longlong"""

    def test_narrow_result_classes(self) -> None:
        """Narrow / Wide / Failure по величине значения."""
        assert narrow_result(LONG_MAX, True) == Narrow(LONG_MAX)
        assert isinstance(narrow_result(LONG_MAX + 1, True), Wide)
        assert isinstance(narrow_result(1 << 127, True), Failure)
        assert isinstance(narrow_result(1 << 127, False), Wide)
        assert isinstance(narrow_result(-1, False), Failure)

    def test_narrow_folds_small(self) -> None:
        """Double-word, помещающийся в слово, сворачивается в Narrow."""
        assert narrow(LongLong.from_int(-3), True) == Narrow(-3)
        assert narrow(LongLong.from_int(MASK64), False) == Narrow(MASK64)
        assert isinstance(narrow(LongLong.from_int(MASK64), True), Wide)

    def test_to_longlong_failure_raises(self) -> None:
        """to_longlong на Failure поднимает NumericOverflow."""
        with pytest.raises(NumericOverflow):
            to_longlong(narrow_result(1 << 130, False), False)
