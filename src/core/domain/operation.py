"""
Operation — модель низкоуровневой операции транзакции

Операция — минимальная единица изменения баланса. Внутри транзакции
operation_identifier.index совпадает с позицией операции (0, 1, 2, ...),
а related_operations ссылаются только на операции с меньшим индексом.
Оба инварианта проверяет asserter.
"""

from typing import Any

from pydantic import BaseModel, Field

from .account import AccountIdentifier
from .amount import Amount, CoinChange


class OperationIdentifier(BaseModel):
    """
    Идентификатор операции внутри транзакции.

    network_index — позиция операции в сетевом представлении (если отличается).
    """

    index: int = Field(..., description="Позиция операции в транзакции")
    network_index: int | None = Field(None, description="Позиция в сети (опционально)")

    model_config = {"frozen": True}


class Operation(BaseModel):
    """Операция: тип, статус, аккаунт, сумма, изменение coin."""

    operation_identifier: OperationIdentifier | None = Field(
        ..., description="Идентификатор операции"
    )
    related_operations: list[OperationIdentifier] | None = Field(
        None, description="Связанные операции (только с меньшим индексом)"
    )
    type: str = Field(..., description="Тип операции (например, 'TRANSFER', 'FEE')")
    status: str | None = Field(None, description="Статус (пусто в construction)")
    account: AccountIdentifier | None = Field(None, description="Аккаунт")
    amount: Amount | None = Field(None, description="Изменение баланса")
    coin_change: CoinChange | None = Field(None, description="Изменение coin (UTXO)")
    metadata: dict[str, Any] | None = Field(None, description="Дополнительные данные")

    model_config = {"frozen": True}
