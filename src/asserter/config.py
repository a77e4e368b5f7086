"""
Asserter configuration — поддерживаемые опции интеграции и validation profile

AsserterConfig строится один раз при старте процесса (в коде или из JSON
файла) и после этого только читается. Ошибки конфигурации поднимаются
при построении:
- pydantic.ValidationError — при создании модели в коде
- jsonschema.ValidationError — при загрузке файла, не соответствующего контракту
"""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from src.core.contracts import validate_asserter_config, validate_validation_profile
from src.core.domain import BlockIdentifier, ErrorDescriptor, OperationStatus
from src.core.errors import AsserterError

from .block import block_identifier
from .error import error


logger = logging.getLogger(__name__)


# =============================================================================
# VALIDATION PROFILE
# =============================================================================


class ChainType(str, Enum):
    """Модель учёта балансов"""

    ACCOUNT = "account"
    UTXO = "utxo"


class OperationRule(BaseModel):
    """
    Агрегатное правило для операций одного типа.

    count == -1 — количество не проверяется.
    should_balance — сумма amount'ов обязана быть равна нулю.
    """

    count: int = Field(-1, ge=-1, description="Требуемое количество операций (-1 = любое)")
    should_balance: bool = Field(False, description="Сумма должна быть равна нулю")

    model_config = {"frozen": True}


class OperationValidation(BaseModel):
    """Имя типа операции и правило для него."""

    name: str = Field("", description="Operation.Type, к которому применяется правило")
    operation: OperationRule = Field(default_factory=OperationRule)

    model_config = {"frozen": True}


class ValidationProfile(BaseModel):
    """
    Payment/fee профиль для агрегатных проверок Asserter.operations().

    Проверки count/balance применяются только для account-модели.
    """

    enabled: bool = Field(False, description="Включены ли агрегатные проверки")
    related_ops_exists: bool = Field(
        False, description="Хотя бы одна операция обязана иметь related_operations"
    )
    chain_type: ChainType = Field(ChainType.ACCOUNT, description="account | utxo")
    payment: OperationValidation = Field(default_factory=OperationValidation)
    fee: OperationValidation = Field(default_factory=OperationValidation)

    model_config = {"frozen": True}


# =============================================================================
# ASSERTER CONFIG
# =============================================================================


class AsserterConfig(BaseModel):
    """
    Поддерживаемые опции интеграции.

    allowed_timestamp_start_index по умолчанию — высота genesis + 1
    (или 0 без genesis), см. Asserter.
    """

    genesis_block_identifier: BlockIdentifier | None = Field(
        None, description="Genesis блок (проверки parent пропускаются на его высоте)"
    )
    allowed_operation_types: tuple[str, ...] = Field(..., description="Допустимые Operation.Type")
    allowed_operation_statuses: tuple[OperationStatus, ...] = Field(
        ..., description="Допустимые Operation.Status"
    )
    allowed_errors: tuple[ErrorDescriptor, ...] = Field(
        default_factory=tuple, description="Каталог ошибок"
    )
    allowed_timestamp_start_index: int | None = Field(
        None, description="Высота, начиная с которой проверяется timestamp"
    )
    strict: bool = Field(True, description="Отклонять неизвестные типы/статусы/коды")
    validation: ValidationProfile = Field(default_factory=ValidationProfile)

    model_config = {"frozen": True}

    @field_validator("genesis_block_identifier")
    @classmethod
    def validate_genesis(cls, v: BlockIdentifier | None) -> BlockIdentifier | None:
        """Genesis (если задан) — валидный BlockIdentifier"""
        if v is None:
            return v
        try:
            block_identifier(v)
        except AsserterError as err:
            raise ValueError(f"genesis block identifier is invalid: {err}")
        return v

    @field_validator("allowed_operation_types")
    @classmethod
    def validate_operation_types(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Непустой список непустых уникальных типов"""
        if not v:
            raise ValueError("allowed_operation_types cannot be empty")
        for op_type in v:
            if not op_type:
                raise ValueError("allowed_operation_types cannot contain an empty type")
        if len(set(v)) != len(v):
            raise ValueError(f"allowed_operation_types contains duplicates: {v}")
        return v

    @field_validator("allowed_operation_statuses")
    @classmethod
    def validate_operation_statuses(
        cls, v: tuple[OperationStatus, ...]
    ) -> tuple[OperationStatus, ...]:
        """Непустой список непустых уникальных статусов"""
        if not v:
            raise ValueError("allowed_operation_statuses cannot be empty")
        seen: set[str] = set()
        for status in v:
            if not status.status:
                raise ValueError("allowed_operation_statuses cannot contain an empty status")
            if status.status in seen:
                raise ValueError(f"operation status {status.status} is duplicated")
            seen.add(status.status)
        return v

    @field_validator("allowed_errors")
    @classmethod
    def validate_errors(cls, v: tuple[ErrorDescriptor, ...]) -> tuple[ErrorDescriptor, ...]:
        """Структурно валидные ошибки с уникальными кодами"""
        seen: set[int] = set()
        for descriptor in v:
            try:
                error(descriptor)
            except AsserterError as err:
                raise ValueError(f"error {descriptor.code} is invalid: {err}")
            if descriptor.code in seen:
                raise ValueError(f"error code {descriptor.code} is duplicated")
            seen.add(descriptor.code)
        return v

    @field_validator("allowed_timestamp_start_index")
    @classmethod
    def validate_timestamp_start_index(cls, v: int | None) -> int | None:
        if v is not None and v < 0:
            raise ValueError(f"allowed_timestamp_start_index {v} must be >= 0")
        return v


# =============================================================================
# LOADING
# =============================================================================


def _read_json(path: str | Path) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_validation_profile(path: str | Path) -> ValidationProfile:
    """
    Загрузка validation profile из JSON файла.

    Raises:
        jsonschema.ValidationError: Файл не соответствует контракту
        pydantic.ValidationError: Значения не проходят проверки модели
    """
    data = _read_json(path)
    validate_validation_profile(data)
    profile = ValidationProfile.model_validate(data)
    logger.debug(
        "Validation profile loaded: path=%s, enabled=%s, chain_type=%s",
        path,
        profile.enabled,
        profile.chain_type.value,
    )
    return profile


def load_asserter_config(path: str | Path) -> AsserterConfig:
    """
    Загрузка AsserterConfig из JSON файла.

    Вложенный объект "validation" (если есть) проверяется контрактом
    validation_profile.

    Raises:
        jsonschema.ValidationError: Файл не соответствует контракту
        pydantic.ValidationError: Значения не проходят проверки модели
    """
    data = _read_json(path)
    validate_asserter_config(data)
    if "validation" in data:
        validate_validation_profile(data["validation"])

    config = AsserterConfig.model_validate(data)
    logger.debug(
        "Asserter config loaded: path=%s, operation_types=%d, operation_statuses=%d, "
        "errors=%d, strict=%s",
        path,
        len(config.allowed_operation_types),
        len(config.allowed_operation_statuses),
        len(config.allowed_errors),
        config.strict,
    )
    return config
