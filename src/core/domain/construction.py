"""
Construction — ответы Construction API

Модели для транзакций, которые ещё не отправлены в сеть: ключи, подписи,
payloads и ответы эндпоинтов /construction/*.

Байтовые поля на проводе кодируются hex-строкой (hex_bytes); модели
декодируют их в bytes и кодируют обратно при сериализации.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_serializer, field_validator

from .account import AccountIdentifier
from .amount import Amount
from .operation import Operation
from .transaction import TransactionIdentifier


# =============================================================================
# ENUMS
# =============================================================================


class CurveType(str, Enum):
    """Поддерживаемые эллиптические кривые"""

    SECP256K1 = "secp256k1"
    SECP256R1 = "secp256r1"
    EDWARDS25519 = "edwards25519"
    TWEEDLE = "tweedle"
    PALLAS = "pallas"


class SignatureType(str, Enum):
    """Поддерживаемые схемы подписи"""

    ECDSA = "ecdsa"
    ECDSA_RECOVERY = "ecdsa_recovery"
    ED25519 = "ed25519"
    SCHNORR_1 = "schnorr_1"
    SCHNORR_POSEIDON = "schnorr_poseidon"


# =============================================================================
# HEX BYTES
# =============================================================================


class _HexBytesModel(BaseModel):
    """Базовая модель с полем hex_bytes."""

    hex_bytes: bytes = Field(b"", description="Байты (hex на проводе)")

    model_config = {"frozen": True}

    @field_validator("hex_bytes", mode="before")
    @classmethod
    def decode_hex(cls, v: Any) -> Any:
        """Декодирование hex-строки с провода"""
        if isinstance(v, str):
            return bytes.fromhex(v)
        return v

    @field_serializer("hex_bytes")
    def encode_hex(self, v: bytes) -> str:
        return v.hex()


# =============================================================================
# KEYS AND SIGNATURES
# =============================================================================


class PublicKey(_HexBytesModel):
    """Публичный ключ и кривая."""

    curve_type: str = Field(..., description="Кривая (см. CurveType)")


class SigningPayload(_HexBytesModel):
    """Payload, который должен подписать аккаунт."""

    account_identifier: AccountIdentifier | None = Field(None, description="Подписант")
    signature_type: str | None = Field(None, description="Запрошенная схема подписи")


class Signature(_HexBytesModel):
    """Подпись payload."""

    signing_payload: SigningPayload | None = Field(..., description="Подписанный payload")
    public_key: PublicKey | None = Field(..., description="Ключ подписанта")
    signature_type: str = Field(..., description="Схема подписи (см. SignatureType)")


# =============================================================================
# RESPONSES
# =============================================================================


class ConstructionPreprocessResponse(BaseModel):
    """Ответ /construction/preprocess."""

    options: dict[str, Any] | None = Field(None, description="Опции для /construction/metadata")
    required_public_keys: list[AccountIdentifier | None] | None = Field(
        None, description="Аккаунты, чьи ключи нужны для metadata"
    )

    model_config = {"frozen": True}


class ConstructionMetadataResponse(BaseModel):
    """Ответ /construction/metadata."""

    metadata: dict[str, Any] | None = Field(..., description="Метаданные для payloads")
    suggested_fee: list[Amount | None] | None = Field(None, description="Предлагаемая комиссия")

    model_config = {"frozen": True}


class TransactionIdentifierResponse(BaseModel):
    """Ответ /construction/hash и /construction/submit."""

    transaction_identifier: TransactionIdentifier | None = Field(
        ..., description="Идентификатор транзакции"
    )
    metadata: dict[str, Any] | None = Field(None, description="Дополнительные данные")

    model_config = {"frozen": True}


class ConstructionCombineResponse(BaseModel):
    """Ответ /construction/combine."""

    signed_transaction: str = Field(..., description="Подписанная транзакция")

    model_config = {"frozen": True}


class ConstructionDeriveResponse(BaseModel):
    """Ответ /construction/derive."""

    account_identifier: AccountIdentifier | None = Field(..., description="Выведенный аккаунт")
    metadata: dict[str, Any] | None = Field(None, description="Дополнительные данные")

    model_config = {"frozen": True}


class ConstructionParseResponse(BaseModel):
    """Ответ /construction/parse."""

    operations: list[Operation | None] = Field(
        default_factory=list, description="Операции разобранной транзакции"
    )
    account_identifier_signers: list[AccountIdentifier | None] | None = Field(
        None, description="Подписанты (только для подписанных транзакций)"
    )
    metadata: dict[str, Any] | None = Field(None, description="Дополнительные данные")

    model_config = {"frozen": True}


class ConstructionPayloadsResponse(BaseModel):
    """Ответ /construction/payloads."""

    unsigned_transaction: str = Field(..., description="Неподписанная транзакция")
    payloads: list[SigningPayload | None] = Field(
        default_factory=list, description="Payloads для подписи"
    )

    model_config = {"frozen": True}
