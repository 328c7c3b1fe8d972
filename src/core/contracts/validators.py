"""
JSON Schema Contract Validators

Модуль для валидации дескрипторов числовых kind согласно формальным
JSON Schema контрактам. Использует библиотеку jsonschema (Draft 2020-12).

Схемы:
- numeric_kind.json (дескриптор NumericKind: family, bits, signed, checked)

Таблица регистрации kind проверяется один раз при старте (см.
src.core.domain.kinds); внешние дескрипторы проверяются в
kind_from_descriptor().
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

logger = logging.getLogger(__name__)


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Автоматически находит схемы в contracts/schema/ относительно корня проекта.
    """

    def __init__(self):
        # Определяем корень проекта (4 уровня вверх от этого файла)
        self._schema_dir = Path(__file__).parent.parent.parent.parent / "contracts" / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'numeric_kind')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-validation
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Валидируем саму схему (meta-validation)
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        logger.debug("Loaded JSON schema %s from %s", schema_name, schema_path)
        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        """
        Инициализация валидатора.

        Args:
            schema_name: Имя схемы для валидации
        """
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация данных против схемы.

        Args:
            data: Данные для валидации (dict)

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        """
        Проверка валидности данных без exception.

        Args:
            data: Данные для проверки (dict)

        Returns:
            True если данные валидны, False иначе
        """
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        """
        Итератор по всем ошибкам валидации.

        Args:
            data: Данные для проверки (dict)

        Yields:
            ValidationError объекты для каждой найденной ошибки
        """
        return self.validator.iter_errors(data)


class NumericKindValidator(ContractValidator):
    """Валидатор для numeric_kind контракта."""

    def __init__(self):
        super().__init__("numeric_kind")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_numeric_kind(data: Dict[str, Any]) -> None:
    """
    Валидация дескриптора numeric kind.

    Args:
        data: Дескриптор (dict с name, family, bits, signed, checked)

    Raises:
        ValidationError: Если дескриптор не соответствует схеме
    """
    NumericKindValidator().validate(data)


def validate_kind_table(table: Iterable[Dict[str, Any]]) -> None:
    """
    Валидация таблицы регистрации kind целиком.

    Args:
        table: Дескрипторы kind

    Raises:
        ValueError: Первый невалидный дескриптор (с именем kind в сообщении)
    """
    validator = NumericKindValidator()
    for descriptor in table:
        try:
            validator.validate(descriptor)
        except ValidationError as e:
            raise ValueError(
                f"Invalid numeric kind descriptor {descriptor.get('name')!r}: {e.message}"
            ) from e
