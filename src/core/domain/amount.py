"""
Amount — денежные величины и изменения UTXO

Immutable Pydantic модели Currency, Amount, CoinIdentifier, CoinChange.

Модели проверяют только типы. Значение Amount.value хранится как строка
(base-10 integer произвольной точности), его корректность проверяет asserter.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class CoinAction(str, Enum):
    """Действие над coin в UTXO-модели"""

    COIN_CREATED = "coin_created"
    COIN_SPENT = "coin_spent"


# =============================================================================
# MODELS
# =============================================================================


class Currency(BaseModel):
    """
    Валюта: символ и количество десятичных знаков.

    Identity — равенство значений (symbol, decimals, metadata).
    """

    symbol: str = Field(..., description="Символ валюты (например, 'BTC')")
    decimals: int = Field(..., description="Число десятичных знаков (value / 10^decimals)")
    metadata: dict[str, Any] | None = Field(None, description="Дополнительные данные")

    model_config = {"frozen": True}


class Amount(BaseModel):
    """
    Величина в минимальных единицах валюты.

    value — строка с base-10 integer, может быть отрицательной ("-1500").
    """

    value: str = Field(..., description="Целое число в минимальных единицах")
    currency: Currency | None = Field(None, description="Валюта")
    metadata: dict[str, Any] | None = Field(None, description="Дополнительные данные")

    model_config = {"frozen": True}


class CoinIdentifier(BaseModel):
    """Уникальный идентификатор coin (обычно tx_hash:index)."""

    identifier: str = Field(..., description="Идентификатор coin")

    model_config = {"frozen": True}


class CoinChange(BaseModel):
    """
    Изменение coin в операции.

    coin_action хранится как сырая строка: допустимость значения проверяет
    asserter (см. CoinAction).
    """

    coin_identifier: CoinIdentifier | None = Field(None, description="Идентификатор coin")
    coin_action: str = Field(..., description="coin_created | coin_spent")

    model_config = {"frozen": True}
