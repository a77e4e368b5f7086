"""
Account — идентификаторы аккаунтов

Все поля AccountIdentifier (включая metadata) участвуют в его уникальности.
"""

from typing import Any

from pydantic import BaseModel, Field


class SubAccountIdentifier(BaseModel):
    """Sub-account (например, staking или vesting баланс)."""

    address: str = Field(..., description="Адрес sub-account")
    metadata: dict[str, Any] | None = Field(None, description="Дополнительные данные")

    model_config = {"frozen": True}


class AccountIdentifier(BaseModel):
    """Идентификатор аккаунта в сети."""

    address: str = Field(..., description="Адрес (public key, username, ...)")
    sub_account: SubAccountIdentifier | None = Field(None, description="Sub-account")
    metadata: dict[str, Any] | None = Field(None, description="Дополнительные данные")

    model_config = {"frozen": True}
