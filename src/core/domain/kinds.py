"""
NumericKind — реестр числовых kind

Статические дескрипторы всех числовых kind ядра: family, ширина, знаковость,
checked-политика. Таблица регистрации проверяется JSON Schema контрактом
(contracts/schema/numeric_kind.json) один раз при импорте модуля; после
этого реестр только читается.

Комплементарные пары (Int8 ↔ UInt8, ..., Int128 ↔ UInt128) задаются
статической таблицей, а не ссылками между объектами.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Реестр строится ровно один раз и не мутирует
2. Каждый fixed/int128 kind имеет комплементарный kind той же ширины и политики
3. Каждый fixed/int128 kind имеет checked- и unchecked-вариант
"""

import decimal
import logging
from enum import Enum
from typing import Any, Dict, Final

from pydantic import BaseModel, Field, field_validator

from src.core.contracts.validators import validate_kind_table

logger = logging.getLogger(__name__)


# =============================================================================
# ENUMS
# =============================================================================


class Family(str, Enum):
    """Семейство числовых kind — определяет набор правил арифметики."""

    FIXED_INT = "fixed_int"
    INT128 = "int128"
    BIGINT = "bigint"
    LITERAL = "literal"
    BINARY_FLOAT = "binary_float"
    DECIMAL_FLOAT = "decimal_float"
    CODE_POINT = "code_point"


class RoundingMode(str, Enum):
    """Направление округления для операции round (IEEE-754)."""

    TIES_TO_EVEN = "TiesToEven"
    TIES_TO_AWAY = "TiesToAway"
    TOWARD_POSITIVE = "TowardPositive"
    TOWARD_ZERO = "TowardZero"
    TOWARD_NEGATIVE = "TowardNegative"

    @property
    def decimal_rounding(self) -> str:
        """Соответствующая константа decimal.ROUND_*."""
        return _DECIMAL_ROUNDING[self]


_DECIMAL_ROUNDING: Final[Dict[RoundingMode, str]] = {
    RoundingMode.TIES_TO_EVEN: decimal.ROUND_HALF_EVEN,
    RoundingMode.TIES_TO_AWAY: decimal.ROUND_HALF_UP,
    RoundingMode.TOWARD_POSITIVE: decimal.ROUND_CEILING,
    RoundingMode.TOWARD_ZERO: decimal.ROUND_DOWN,
    RoundingMode.TOWARD_NEGATIVE: decimal.ROUND_FLOOR,
}

# Семейства с целыми значениями
INTEGER_FAMILIES: Final[frozenset] = frozenset({Family.FIXED_INT, Family.INT128, Family.BIGINT})

# Семейства с фиксированной шириной и комплементарной парой
BOUNDED_INTEGER_FAMILIES: Final[frozenset] = frozenset({Family.FIXED_INT, Family.INT128})

FLOAT_FAMILIES: Final[frozenset] = frozenset({Family.BINARY_FLOAT, Family.DECIMAL_FLOAT})

# Максимальный Unicode code point
CODE_POINT_MAX: Final[int] = 0x10FFFF

UNCHECKED_PREFIX: Final[str] = "Unchecked"
INT_LITERAL_NAME: Final[str] = "IntLiteral"
FP_LITERAL_NAME: Final[str] = "FPLiteral"


# =============================================================================
# NUMERIC KIND MODEL
# =============================================================================


class NumericKind(BaseModel):
    """
    Статический дескриптор числового kind.

    Immutable модель (frozen=True); hashable, используется как ключ таблиц.
    """

    name: str = Field(..., min_length=1, description="Имя kind (например, 'Int8')")
    family: Family = Field(..., description="Семейство kind")
    bits: int | None = Field(None, description="Ширина в битах (None для неограниченных)")
    signed: bool = Field(..., description="Знаковость")
    checked: bool = Field(True, description="True: переполнение → Overflow; False: wrap")

    model_config = {"frozen": True}

    @field_validator("bits")
    @classmethod
    def validate_bits_positive(cls, v: int | None) -> int | None:
        """Ширина, если задана, положительна"""
        if v is not None and v <= 0:
            raise ValueError(f"bits must be positive, got {v}")
        return v

    @property
    def is_integer(self) -> bool:
        """Значения kind — целые (включая IntLiteral)."""
        return self.family in INTEGER_FAMILIES or self.name == INT_LITERAL_NAME

    @property
    def is_bounded_integer(self) -> bool:
        return self.family in BOUNDED_INTEGER_FAMILIES

    @property
    def is_float(self) -> bool:
        return self.family in FLOAT_FAMILIES

    @property
    def byte_count(self) -> int | None:
        """Длина byte-кодирования (None если фиксированной ширины нет)."""
        if self.bits is None or self.family == Family.CODE_POINT:
            return None
        return self.bits // 8

    @property
    def min_value(self) -> int | None:
        """Минимальное значение целочисленного kind (None если не ограничен)."""
        if self.is_bounded_integer:
            return -(1 << (self.bits - 1)) if self.signed else 0
        if self.family == Family.CODE_POINT:
            return 0
        if self.family == Family.BIGINT and not self.signed:
            return 0
        return None

    @property
    def max_value(self) -> int | None:
        """Максимальное значение целочисленного kind (None если не ограничен)."""
        if self.is_bounded_integer:
            return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1
        if self.family == Family.CODE_POINT:
            return CODE_POINT_MAX
        return None

    def contains(self, value: int) -> bool:
        """Проверка, что целое значение лежит в диапазоне kind."""
        low = self.min_value
        high = self.max_value
        return (low is None or value >= low) and (high is None or value <= high)

    def __str__(self) -> str:
        return self.name


# =============================================================================
# REGISTRATION TABLE
# =============================================================================


def _build_registration_table() -> list[Dict[str, Any]]:
    table: list[Dict[str, Any]] = []

    for bits, family in ((8, Family.FIXED_INT), (16, Family.FIXED_INT), (32, Family.FIXED_INT),
                         (64, Family.FIXED_INT), (128, Family.INT128)):
        for checked in (True, False):
            prefix = "" if checked else UNCHECKED_PREFIX
            for signed in (True, False):
                base = "Int" if signed else "UInt"
                table.append(
                    {
                        "name": f"{prefix}{base}{bits}",
                        "family": family.value,
                        "bits": bits,
                        "signed": signed,
                        "checked": checked,
                    }
                )

    table += [
        {"name": "IntN", "family": "bigint", "bits": None, "signed": True, "checked": True},
        {"name": "UIntN", "family": "bigint", "bits": None, "signed": False, "checked": True},
        {"name": INT_LITERAL_NAME, "family": "literal", "bits": None, "signed": True, "checked": True},
        {"name": FP_LITERAL_NAME, "family": "literal", "bits": None, "signed": True, "checked": True},
        {"name": "Float16", "family": "binary_float", "bits": 16, "signed": True, "checked": True},
        {"name": "Float32", "family": "binary_float", "bits": 32, "signed": True, "checked": True},
        {"name": "Float64", "family": "binary_float", "bits": 64, "signed": True, "checked": True},
        {"name": "Dec32", "family": "decimal_float", "bits": 32, "signed": True, "checked": True},
        {"name": "Dec64", "family": "decimal_float", "bits": 64, "signed": True, "checked": True},
        {"name": "Dec128", "family": "decimal_float", "bits": 128, "signed": True, "checked": True},
        {"name": "Char", "family": "code_point", "bits": 21, "signed": False, "checked": True},
    ]
    return table


def _build_registry(table: list[Dict[str, Any]]) -> Dict[str, NumericKind]:
    validate_kind_table(table)
    registry = {descriptor["name"]: NumericKind(**descriptor) for descriptor in table}
    logger.debug("Registered %d numeric kinds", len(registry))
    return registry


def _build_complements(registry: Dict[str, NumericKind]) -> Dict[str, str]:
    pairs: Dict[str, str] = {}
    for name, kind in registry.items():
        if not kind.is_bounded_integer:
            continue
        if kind.signed:
            twin = name.replace("Int", "UInt", 1)
        else:
            twin = name.replace("UInt", "Int", 1)
        pairs[name] = twin
    return pairs


_KIND_TABLE: Final[list[Dict[str, Any]]] = _build_registration_table()
_REGISTRY: Final[Dict[str, NumericKind]] = _build_registry(_KIND_TABLE)
_COMPLEMENTS: Final[Dict[str, str]] = _build_complements(_REGISTRY)


# =============================================================================
# LOOKUP API
# =============================================================================


def kind_by_name(name: str) -> NumericKind:
    """
    Поиск kind по имени.

    Raises:
        ValueError: Если kind с таким именем не зарегистрирован
    """
    try:
        return _REGISTRY[name]
    except KeyError:
        raise ValueError(f"Unknown numeric kind: {name!r}") from None


def all_kinds() -> tuple[NumericKind, ...]:
    """Все зарегистрированные kind в порядке регистрации."""
    return tuple(_REGISTRY.values())


def complement_of(kind: NumericKind) -> NumericKind:
    """
    Комплементарный kind той же ширины и политики (Int8 ↔ UInt8).

    Raises:
        ValueError: Для kind без комплементарной пары
    """
    twin = _COMPLEMENTS.get(kind.name)
    if twin is None:
        raise ValueError(f"Kind {kind.name} has no complementary kind")
    return _REGISTRY[twin]


def unchecked_of(kind: NumericKind) -> NumericKind:
    """Unchecked-вариант bounded integer kind (сам kind, если уже unchecked)."""
    if not kind.is_bounded_integer:
        raise ValueError(f"Kind {kind.name} has no unchecked variant")
    if not kind.checked:
        return kind
    return _REGISTRY[UNCHECKED_PREFIX + kind.name]


def checked_of(kind: NumericKind) -> NumericKind:
    """Checked-вариант kind (сам kind, если уже checked)."""
    if kind.checked:
        return kind
    return _REGISTRY[kind.name[len(UNCHECKED_PREFIX):]]


def kind_from_descriptor(data: Dict[str, Any]) -> NumericKind:
    """
    Разрешение внешнего дескриптора в зарегистрированный kind.

    Дескриптор проверяется JSON Schema контрактом и должен совпадать
    с зарегистрированным kind того же имени.

    Args:
        data: Дескриптор (name, family, bits, signed, checked)

    Returns:
        Зарегистрированный NumericKind

    Raises:
        ValueError: Дескриптор не проходит схему, kind неизвестен,
            или дескриптор расходится с реестром
    """
    validate_kind_table([data])
    kind = kind_by_name(data["name"])
    if kind != NumericKind(**data):
        raise ValueError(f"Descriptor for {kind.name} does not match the registered kind")
    return kind


# =============================================================================
# WELL-KNOWN KINDS
# =============================================================================

INT8: Final[NumericKind] = _REGISTRY["Int8"]
INT16: Final[NumericKind] = _REGISTRY["Int16"]
INT32: Final[NumericKind] = _REGISTRY["Int32"]
INT64: Final[NumericKind] = _REGISTRY["Int64"]
UINT8: Final[NumericKind] = _REGISTRY["UInt8"]
UINT16: Final[NumericKind] = _REGISTRY["UInt16"]
UINT32: Final[NumericKind] = _REGISTRY["UInt32"]
UINT64: Final[NumericKind] = _REGISTRY["UInt64"]
INT128: Final[NumericKind] = _REGISTRY["Int128"]
UINT128: Final[NumericKind] = _REGISTRY["UInt128"]

UNCHECKED_INT8: Final[NumericKind] = _REGISTRY["UncheckedInt8"]
UNCHECKED_INT16: Final[NumericKind] = _REGISTRY["UncheckedInt16"]
UNCHECKED_INT32: Final[NumericKind] = _REGISTRY["UncheckedInt32"]
UNCHECKED_INT64: Final[NumericKind] = _REGISTRY["UncheckedInt64"]
UNCHECKED_UINT8: Final[NumericKind] = _REGISTRY["UncheckedUInt8"]
UNCHECKED_UINT16: Final[NumericKind] = _REGISTRY["UncheckedUInt16"]
UNCHECKED_UINT32: Final[NumericKind] = _REGISTRY["UncheckedUInt32"]
UNCHECKED_UINT64: Final[NumericKind] = _REGISTRY["UncheckedUInt64"]
UNCHECKED_INT128: Final[NumericKind] = _REGISTRY["UncheckedInt128"]
UNCHECKED_UINT128: Final[NumericKind] = _REGISTRY["UncheckedUInt128"]

INTN: Final[NumericKind] = _REGISTRY["IntN"]
UINTN: Final[NumericKind] = _REGISTRY["UIntN"]
INT_LITERAL: Final[NumericKind] = _REGISTRY[INT_LITERAL_NAME]
FP_LITERAL: Final[NumericKind] = _REGISTRY[FP_LITERAL_NAME]

FLOAT16: Final[NumericKind] = _REGISTRY["Float16"]
FLOAT32: Final[NumericKind] = _REGISTRY["Float32"]
FLOAT64: Final[NumericKind] = _REGISTRY["Float64"]
DEC32: Final[NumericKind] = _REGISTRY["Dec32"]
DEC64: Final[NumericKind] = _REGISTRY["Dec64"]
DEC128: Final[NumericKind] = _REGISTRY["Dec128"]

CHAR: Final[NumericKind] = _REGISTRY["Char"]
