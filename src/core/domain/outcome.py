"""
Outcome — модель ошибок числового ядра

Каждая операция числового ядра возвращает ровно одно из:
- значение ожидаемого kind
- Failure(OVERFLOW) — результат не помещается в диапазон kind,
  деление/остаток на ноль, нефинитный результат конверсии
- Failure(ILLEGAL_ARGUMENT) — некорректный текст литерала или длина
  byte/bit последовательности не совпадает с шириной kind
- Failure(UNSUPPORTED_OPERATION) — операция не имеет смысла для kind
  (например, negate для unsigned)

Failure — tagged result, а не sentinel: сравнение выполняется по тегу
(signal), никогда по identity.

Python-операторы (+, -, *, //, %, ...) разворачивают результат через unwrap()
и поднимают соответствующее исключение.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Частичных результатов нет: либо значение, либо Failure
2. Ошибка определяется только по signal, не по identity объекта
3. Каждый signal однозначно отображается в класс исключения
"""

from dataclasses import dataclass
from enum import Enum
from typing import NoReturn, TypeVar, Union

T = TypeVar("T")


# =============================================================================
# SIGNALS
# =============================================================================


class Signal(str, Enum):
    """Тег ошибки числовой операции."""

    OVERFLOW = "OVERFLOW"
    ILLEGAL_ARGUMENT = "ILLEGAL_ARGUMENT"
    UNSUPPORTED_OPERATION = "UNSUPPORTED_OPERATION"


# =============================================================================
# EXCEPTIONS
# =============================================================================


class NumericError(Exception):
    """Базовое исключение числового ядра."""

    signal: Signal = Signal.OVERFLOW


class NumericOverflow(NumericError, ArithmeticError):
    """Результат не представим в целевом kind (включая деление на ноль)."""

    signal = Signal.OVERFLOW


class IllegalArgument(NumericError, ValueError):
    """Некорректный текст литерала или длина byte/bit последовательности."""

    signal = Signal.ILLEGAL_ARGUMENT


class UnsupportedOperation(NumericError, TypeError):
    """Операция не имеет смысла для данного kind."""

    signal = Signal.UNSUPPORTED_OPERATION


_EXCEPTIONS: dict[Signal, type[NumericError]] = {
    Signal.OVERFLOW: NumericOverflow,
    Signal.ILLEGAL_ARGUMENT: IllegalArgument,
    Signal.UNSUPPORTED_OPERATION: UnsupportedOperation,
}


# =============================================================================
# FAILURE RESULT
# =============================================================================


@dataclass(frozen=True)
class Failure:
    """
    Tagged error result числовой операции.

    Attributes:
        signal: Тег ошибки
        reason: Человекочитаемое описание (не участвует в классификации)
    """

    signal: Signal
    reason: str = ""

    def to_exception(self) -> NumericError:
        """Исключение, соответствующее signal."""
        exc_type = _EXCEPTIONS[self.signal]
        return exc_type(self.reason or self.signal.value)

    def raise_error(self) -> NoReturn:
        """Поднять исключение, соответствующее signal."""
        raise self.to_exception()


Outcome = Union[T, Failure]


def overflow(reason: str = "") -> Failure:
    """Failure с тегом OVERFLOW."""
    return Failure(Signal.OVERFLOW, reason)


def illegal_argument(reason: str = "") -> Failure:
    """Failure с тегом ILLEGAL_ARGUMENT."""
    return Failure(Signal.ILLEGAL_ARGUMENT, reason)


def unsupported(reason: str = "") -> Failure:
    """Failure с тегом UNSUPPORTED_OPERATION."""
    return Failure(Signal.UNSUPPORTED_OPERATION, reason)


def is_failure(result: object) -> bool:
    """True если результат операции — Failure (любой signal)."""
    return isinstance(result, Failure)


def is_overflow(result: object) -> bool:
    """True если результат операции — Failure(OVERFLOW)."""
    return isinstance(result, Failure) and result.signal == Signal.OVERFLOW


def unwrap(result: "Outcome[T]") -> T:
    """
    Развернуть результат операции.

    Args:
        result: Значение или Failure

    Returns:
        Значение, если результат не Failure

    Raises:
        NumericOverflow / IllegalArgument / UnsupportedOperation:
            по signal, если результат — Failure

    Examples:
        >>> unwrap(5)
        5
        >>> unwrap(overflow("Int8"))
        Traceback (most recent call last):
        ...
        src.core.domain.outcome.NumericOverflow: Int8
    """
    if isinstance(result, Failure):
        result.raise_error()
    return result
