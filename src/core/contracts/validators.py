"""
JSON Schema Contract Validators

Модуль для валидации конфигурационных файлов asserter'а согласно формальным
JSON Schema контрактам. Использует библиотеку jsonschema (Draft 2020-12).

Схемы (src/core/contracts/schema/):
- asserter_config.json (поддерживаемые опции интеграции)
- validation_profile.json (payment/fee профиль)
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator, ValidationError


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы лежат в каталоге schema/ рядом с этим модулем.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'asserter_config')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            json.JSONDecodeError: Если файл не является валидным JSON
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
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        """Проверка валидности данных без exception."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        """Итератор по всем ошибкам валидации."""
        return self.validator.iter_errors(data)


class AsserterConfigValidator(ContractValidator):
    """Валидатор для asserter_config контракта."""

    def __init__(self):
        super().__init__("asserter_config")


class ValidationProfileValidator(ContractValidator):
    """Валидатор для validation_profile контракта."""

    def __init__(self):
        super().__init__("validation_profile")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_asserter_config(data: Dict[str, Any]) -> None:
    """
    Валидация asserter_config данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    AsserterConfigValidator().validate(data)


def validate_validation_profile(data: Dict[str, Any]) -> None:
    """
    Валидация validation_profile данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    ValidationProfileValidator().validate(data)


__all__ = [
    "SchemaLoader",
    "ContractValidator",
    "AsserterConfigValidator",
    "ValidationProfileValidator",
    "ValidationError",
    "validate_asserter_config",
    "validate_validation_profile",
]
