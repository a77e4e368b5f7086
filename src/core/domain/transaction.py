"""
Transaction — транзакции, связанные транзакции и сетевые идентификаторы
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from .operation import Operation


# =============================================================================
# ENUMS
# =============================================================================


class Direction(str, Enum):
    """
    Направление связи между транзакциями.

    FORWARD — связанная транзакция следует за текущей (например, cross-shard),
    BACKWARD — предшествует ей.
    """

    FORWARD = "forward"
    BACKWARD = "backward"


# =============================================================================
# NETWORK
# =============================================================================


class SubNetworkIdentifier(BaseModel):
    """Шард или подсеть."""

    network: str = Field(..., description="Имя подсети")
    metadata: dict[str, Any] | None = Field(None, description="Дополнительные данные")

    model_config = {"frozen": True}


class NetworkIdentifier(BaseModel):
    """Идентификатор сети (blockchain + network)."""

    blockchain: str = Field(..., description="Имя блокчейна (например, 'bitcoin')")
    network: str = Field(..., description="Имя сети (например, 'mainnet')")
    sub_network_identifier: SubNetworkIdentifier | None = Field(
        None, description="Подсеть (опционально)"
    )

    model_config = {"frozen": True}


# =============================================================================
# TRANSACTION
# =============================================================================


class TransactionIdentifier(BaseModel):
    """Идентификатор транзакции."""

    hash: str = Field(..., description="Хеш транзакции")

    model_config = {"frozen": True}


class RelatedTransaction(BaseModel):
    """
    Ссылка на связанную транзакцию.

    direction хранится как сырая строка: допустимость проверяет asserter.
    """

    network_identifier: NetworkIdentifier | None = Field(
        None, description="Сеть связанной транзакции (если отличается)"
    )
    transaction_identifier: TransactionIdentifier | None = Field(
        ..., description="Идентификатор связанной транзакции"
    )
    direction: str = Field(..., description="forward | backward")

    model_config = {"frozen": True}


class Transaction(BaseModel):
    """Транзакция: упорядоченный список операций."""

    transaction_identifier: TransactionIdentifier | None = Field(
        ..., description="Идентификатор транзакции"
    )
    operations: list[Operation | None] = Field(
        default_factory=list, description="Операции в порядке индексов"
    )
    related_transactions: list[RelatedTransaction] | None = Field(
        None, description="Связанные транзакции"
    )
    metadata: dict[str, Any] | None = Field(None, description="Дополнительные данные")

    model_config = {"frozen": True}
