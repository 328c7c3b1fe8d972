"""
Общий слой операторов плавающей точки

Сравнения плавающих значений следуют IEEE: любое сравнение с NaN ложно.
Оператор '/' — деление (div), как и '//'.
"""

import operator
from typing import Any, Callable

from src.core.domain.outcome import Failure, illegal_argument
from src.numbers.base import NumericOperators


class FloatOperators(NumericOperators):
    """
    Операторы binary- и decimal-float значений.

    Подкласс хранит value и реализует is_nan().
    """

    def _order(self, other: Any) -> int | Failure:
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return operand
        if self.is_nan() or operand.is_nan():
            return illegal_argument("NaN is unordered")
        return (self.value > operand.value) - (self.value < operand.value)

    def _relation(self, other: Any, relation: Callable[[Any, Any], bool]) -> Any:
        if not self._accepts(other):
            return NotImplemented
        operand = self._operand(other)
        if isinstance(operand, Failure):
            return NotImplemented
        if self.is_nan() or operand.is_nan():
            return False
        return relation(self.value, operand.value)

    def __truediv__(self, other: Any) -> Any:
        return self.__floordiv__(other)

    def __lt__(self, other: Any) -> Any:
        return self._relation(other, operator.lt)

    def __le__(self, other: Any) -> Any:
        return self._relation(other, operator.le)

    def __gt__(self, other: Any) -> Any:
        return self._relation(other, operator.gt)

    def __ge__(self, other: Any) -> Any:
        return self._relation(other, operator.ge)

    def __float__(self) -> float:
        return float(self.value)
