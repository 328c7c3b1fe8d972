"""
Базовые Python-операторы числовых значений

Именованные операции значений (add, sub, mul, div, mod, neg, ...) возвращают
значение или Failure. Python-операторы — тонкий слой поверх них: разворачивают
результат через unwrap() и поднимают NumericOverflow / IllegalArgument /
UnsupportedOperation.

Операнд оператора — значение того же класса или нативное Python-число
(int; для float-семейств также float/Decimal), приводимое через _operand().
"""

from typing import Any

from src.core.domain.kinds import NumericKind
from src.core.domain.outcome import Failure, unsupported, unwrap


class NumericOperators:
    """
    Общий слой операторов.

    Подкласс реализует add, sub, mul, div, mod, neg, compare и _operand().
    """

    # Нативные типы, принимаемые как операнды операторов
    _NATIVE_OPERANDS: tuple[type, ...] = (int,)

    kind: NumericKind

    def _accepts(self, other: Any) -> bool:
        if isinstance(other, bool):
            return False
        return isinstance(other, type(self)) or isinstance(other, self._NATIVE_OPERANDS)

    def _operand(self, other: Any) -> Any:
        raise NotImplementedError

    def _mismatch(self, other: Any) -> Failure:
        other_kind = getattr(other, "kind", type(other).__name__)
        return unsupported(f"{self.kind} does not combine with {other_kind}")

    def _reflected(self, other: Any) -> Any:
        return unwrap(self._operand(other))

    def convert_to(self, target: NumericKind, truncate: bool = False) -> Any:
        """
        Конверсия в целевой kind по общему протоколу.

        Args:
            target: Целевой kind
            truncate: Маскирование вместо проверки диапазона

        Returns:
            Значение целевого kind или Failure
        """
        from src.conversion.protocol import convert

        return convert(self, target, truncate=truncate)

    # ----- Арифметика -----

    def __add__(self, other: Any) -> Any:
        if not self._accepts(other):
            return NotImplemented
        return unwrap(self.add(other))

    def __radd__(self, other: Any) -> Any:
        if not self._accepts(other):
            return NotImplemented
        return unwrap(self._reflected(other).add(self))

    def __sub__(self, other: Any) -> Any:
        if not self._accepts(other):
            return NotImplemented
        return unwrap(self.sub(other))

    def __rsub__(self, other: Any) -> Any:
        if not self._accepts(other):
            return NotImplemented
        return unwrap(self._reflected(other).sub(self))

    def __mul__(self, other: Any) -> Any:
        if not self._accepts(other):
            return NotImplemented
        return unwrap(self.mul(other))

    def __rmul__(self, other: Any) -> Any:
        if not self._accepts(other):
            return NotImplemented
        return unwrap(self._reflected(other).mul(self))

    def __floordiv__(self, other: Any) -> Any:
        if not self._accepts(other):
            return NotImplemented
        return unwrap(self.div(other))

    def __mod__(self, other: Any) -> Any:
        if not self._accepts(other):
            return NotImplemented
        return unwrap(self.mod(other))

    def __neg__(self) -> Any:
        return unwrap(self.neg())

    def __abs__(self) -> Any:
        return unwrap(self.abs())

    # ----- Сравнение -----

    def _ordered(self, other: Any) -> int | None:
        if not self._accepts(other):
            return None
        return unwrap(self.compare(other))

    def __lt__(self, other: Any) -> Any:
        order = self._ordered(other)
        return NotImplemented if order is None else order < 0

    def __le__(self, other: Any) -> Any:
        order = self._ordered(other)
        return NotImplemented if order is None else order <= 0

    def __gt__(self, other: Any) -> Any:
        order = self._ordered(other)
        return NotImplemented if order is None else order > 0

    def __ge__(self, other: Any) -> Any:
        order = self._ordered(other)
        return NotImplemented if order is None else order >= 0


class IntegerOperators(NumericOperators):
    """Операторы целочисленных семейств: побитовые операции и сдвиги."""

    def _ordered(self, other: Any) -> int | None:
        """Порядок; с нативным int сравнивается точное значение, без сужения к kind."""
        if isinstance(other, int) and not isinstance(other, bool):
            value = self.to_int()
            return (value > other) - (value < other)
        return super()._ordered(other)

    def __and__(self, other: Any) -> Any:
        if not self._accepts(other):
            return NotImplemented
        return unwrap(self.and_(other))

    def __or__(self, other: Any) -> Any:
        if not self._accepts(other):
            return NotImplemented
        return unwrap(self.or_(other))

    def __xor__(self, other: Any) -> Any:
        if not self._accepts(other):
            return NotImplemented
        return unwrap(self.xor(other))

    def __invert__(self) -> Any:
        return unwrap(self.not_())

    def __lshift__(self, count: int) -> Any:
        if not isinstance(count, int) or isinstance(count, bool):
            return NotImplemented
        return unwrap(self.shl(count))

    def __rshift__(self, count: int) -> Any:
        if not isinstance(count, int) or isinstance(count, bool):
            return NotImplemented
        return unwrap(self.shr(count))

    def __int__(self) -> int:
        return self.to_int()

    def __index__(self) -> int:
        return self.to_int()
