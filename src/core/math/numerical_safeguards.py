"""
Numerical Safeguards — безопасные примитивы плавающей точки

Модуль приводит функции math к IEEE-754 семантике значений ядра:
- Ошибка области определения (ValueError) → NaN (IEEE invalid operation)
- Переполнение (OverflowError) → Failure(OVERFLOW)
- log/log2/log10 от нуля → -Infinity, от отрицательного → NaN
- Проверка конечности результата конверсии

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Исключения math никогда не выходят наружу из операций над значениями
2. Нефинитный результат конверсии всегда Failure(OVERFLOW)
3. Все операции детерминированы и воспроизводимы
"""

import decimal
import math
from typing import Callable, Final

from src.core.domain.kinds import RoundingMode
from src.core.domain.outcome import Failure, overflow

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# log2(10), множитель log2 через log10
LOG2_10: Final[float] = math.log2(10.0)

NAN: Final[float] = math.nan
INF: Final[float] = math.inf


# =============================================================================
# NaN/Inf ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение валидное (finite), False если NaN или Inf
    """
    return math.isfinite(value)


def ensure_finite(value: float, what: str) -> float | Failure:
    """
    Конечное значение или Failure(OVERFLOW).

    Args:
        value: Результат конверсии
        what: Описание конверсии для reason

    Examples:
        >>> ensure_finite(1.5, "Float32")
        1.5
        >>> ensure_finite(float("inf"), "Float32").signal
        <Signal.OVERFLOW: 'OVERFLOW'>
    """
    if is_valid_float(value):
        return value
    return overflow(f"non-finite result converting to {what}")


# =============================================================================
# БЕЗОПАСНОЕ ПРИМЕНЕНИЕ math
# =============================================================================


def apply_unary(fn: Callable[[float], float], value: float) -> float | Failure:
    """
    Применение унарной функции math с IEEE семантикой ошибок.

    Args:
        fn: Функция math (exp, sin, ...)
        value: Аргумент

    Returns:
        Результат; NaN при ошибке области; Failure(OVERFLOW) при переполнении
    """
    if math.isnan(value):
        return NAN
    try:
        return fn(value)
    except ValueError:
        return NAN
    except OverflowError:
        return overflow(f"{getattr(fn, '__name__', 'function')} overflow")


def apply_binary(fn: Callable[[float, float], float], a: float, b: float) -> float | Failure:
    """Применение бинарной функции math (pow, atan2, fmod) с IEEE семантикой."""
    try:
        return fn(a, b)
    except ValueError:
        return NAN
    except OverflowError:
        return overflow(f"{getattr(fn, '__name__', 'function')} overflow")


def safe_log(fn: Callable[[float], float], value: float) -> float:
    """
    Логарифм с IEEE граничными случаями.

    log(±0) = -Infinity, log(x < 0) = NaN, log(+Infinity) = +Infinity.
    """
    if math.isnan(value) or value < 0:
        return NAN
    if value == 0.0:
        return -INF
    if value == INF:
        return INF
    return fn(value)


def safe_cbrt(value: float) -> float:
    """Кубический корень с сохранением знака; точные кубы дают точный корень."""
    if not math.isfinite(value) or value == 0.0:
        return value
    return math.cbrt(value)


def safe_atanh(value: float) -> float:
    """atanh с IEEE граничными случаями: ±1 → ±Infinity, |x| > 1 → NaN."""
    if math.isnan(value) or abs(value) > 1.0:
        return NAN
    if abs(value) == 1.0:
        return math.copysign(INF, value)
    return math.atanh(value)


# =============================================================================
# ОКРУГЛЕНИЕ
# =============================================================================


def round_integral(value: float, mode: RoundingMode) -> float:
    """
    Округление до целого в заданном режиме.

    Args:
        value: Исходное значение (NaN/Infinity возвращаются без изменений)
        mode: Режим округления

    Examples:
        >>> round_integral(2.5, RoundingMode.TIES_TO_EVEN)
        2.0
        >>> round_integral(2.5, RoundingMode.TIES_TO_AWAY)
        3.0
        >>> round_integral(-2.5, RoundingMode.TOWARD_POSITIVE)
        -2.0
    """
    if not is_valid_float(value):
        return value
    rounded = decimal.Decimal(value).to_integral_value(rounding=mode.decimal_rounding)
    return math.copysign(float(rounded), value) if rounded == 0 else float(rounded)
