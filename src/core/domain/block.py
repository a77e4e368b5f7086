"""
Block — блоки и идентификаторы блоков

timestamp — миллисекунды с Unix epoch (UTC).
"""

from typing import Any

from pydantic import BaseModel, Field

from .transaction import Transaction


class BlockIdentifier(BaseModel):
    """Идентификатор блока: высота и хеш."""

    index: int = Field(..., description="Высота блока")
    hash: str = Field(..., description="Хеш блока")

    model_config = {"frozen": True}


class PartialBlockIdentifier(BaseModel):
    """Частичный идентификатор блока (для запросов): оба поля опциональны."""

    index: int | None = Field(None, description="Высота блока")
    hash: str | None = Field(None, description="Хеш блока")

    model_config = {"frozen": True}


class Block(BaseModel):
    """Блок: идентификаторы, timestamp и транзакции."""

    block_identifier: BlockIdentifier | None = Field(..., description="Идентификатор блока")
    parent_block_identifier: BlockIdentifier | None = Field(
        ..., description="Идентификатор родительского блока"
    )
    timestamp: int = Field(..., description="Время блока (UTC, миллисекунды)")
    transactions: list[Transaction | None] = Field(
        default_factory=list, description="Транзакции блока"
    )
    metadata: dict[str, Any] | None = Field(None, description="Дополнительные данные")

    model_config = {"frozen": True}
