"""
Contract Validation Module

Модуль для валидации JSON контрактов числового ядра.
"""

from .validators import (
    ContractValidator,
    NumericKindValidator,
    SchemaLoader,
    validate_kind_table,
    validate_numeric_kind,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "NumericKindValidator",
    # Functions
    "validate_numeric_kind",
    "validate_kind_table",
]
