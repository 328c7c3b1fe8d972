"""
Conversion Protocol — единая таблица конверсий между kind

Любая конверсия value → target проходит через одну таблицу правил,
ключ которой — (семейство источника, семейство цели).

Закон диапазона:
- проверка диапазона действует, когда источник checked (литералы, IntN,
  UIntN, float и Char всегда checked) и truncate не задан
- без проверки значение берётся по модулю 2^width цели и интерпретируется
  по знаковости цели
- расширение всегда точно и никогда не отказывает

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Конверсия — чистая функция (value, target, truncate)
2. Результат — значение целевого kind или Failure, без частичных результатов
3. Таблица строится один раз при импорте и не мутирует
"""

import logging
from typing import Any, Dict, Final, Tuple

from src.conversion.rules import float_rules, integer_rules, literal_rules
from src.conversion.rules.integer_rules import Rule
from src.core.domain.kinds import Family, NumericKind
from src.core.domain.outcome import Failure, unsupported

logger = logging.getLogger(__name__)


# =============================================================================
# ТАБЛИЦА ПРАВИЛ
# =============================================================================


def _build_rules() -> Dict[Tuple[Family, Family], Rule]:
    by_source: Dict[Family, Dict[Family, Rule]] = {
        **{family: integer_rules.RULES for family in integer_rules.INTEGER_SOURCES},
        Family.LITERAL: literal_rules.RULES,
        Family.BINARY_FLOAT: float_rules.BINARY_RULES,
        Family.DECIMAL_FLOAT: float_rules.DECIMAL_RULES,
    }
    return {
        (source, target): rule
        for source, rules in by_source.items()
        for target, rule in rules.items()
    }


_RULES: Final[Dict[Tuple[Family, Family], Rule]] = _build_rules()


def rule_for(source: NumericKind, target: NumericKind) -> Rule | None:
    """Правило конверсии для пары kind (None, если пара не поддерживается)."""
    return _RULES.get((source.family, target.family))


def range_checked(source: NumericKind, truncate: bool) -> bool:
    """Проверяется ли диапазон цели для источника данного kind."""
    return source.checked and not truncate


# =============================================================================
# PUBLIC API
# =============================================================================


def convert(value: Any, target: NumericKind, *, truncate: bool = False) -> Any:
    """
    Конверсия значения в целевой kind.

    Args:
        value: Значение любого числового kind (или Char)
        target: Целевой kind
        truncate: Маскировать значение до ширины цели вместо проверки

    Returns:
        Значение целевого kind или Failure

    Examples:
        >>> convert(FixedInt.of(UINT64, 2 ** 64 - 1), INT128).to_int()
        18446744073709551615
        >>> convert(FixedInt.of(INT16, 300), INT8).signal
        <Signal.OVERFLOW: 'OVERFLOW'>
        >>> convert(FixedInt.of(INT16, 300), INT8, truncate=True).value
        44
    """
    source = value.kind
    rule = rule_for(source, target)
    if rule is None:
        result: Any = unsupported(f"No conversion from {source.name} to {target.name}")
    else:
        result = rule(value, target, range_checked(source, truncate))
    if isinstance(result, Failure):
        logger.debug(
            "Conversion %s -> %s failed: %s (%s)",
            source.name,
            target.name,
            result.signal.value,
            result.reason,
        )
    return result
