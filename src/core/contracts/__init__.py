"""
Contract Validation Module

Модуль для валидации JSON контрактов конфигурации asserter'а.
"""

from .validators import (
    AsserterConfigValidator,
    ContractValidator,
    SchemaLoader,
    ValidationProfileValidator,
    validate_asserter_config,
    validate_validation_profile,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "AsserterConfigValidator",
    "ValidationProfileValidator",
    # Functions
    "validate_asserter_config",
    "validate_validation_profile",
]
