"""
Каталожные записи: описания ошибок и статусов операций

Оба типа приходят из /network/options интеграции и сверяются asserter'ом.
"""

from typing import Any

from pydantic import BaseModel, Field


class ErrorDescriptor(BaseModel):
    """
    Ошибка, возвращаемая интеграцией.

    code + message + retriable должны точно совпадать с записью каталога.
    """

    code: int = Field(..., description="Код ошибки")
    message: str = Field(..., description="Каноническое сообщение")
    description: str | None = Field(None, description="Развёрнутое описание")
    retriable: bool = Field(False, description="Можно ли повторить запрос")
    details: dict[str, Any] | None = Field(None, description="Контекст конкретного вхождения")

    model_config = {"frozen": True}


class OperationStatus(BaseModel):
    """Допустимый статус операции и признак её успешности."""

    status: str = Field(..., description="Статус (например, 'SUCCESS')")
    successful: bool = Field(..., description="Изменяет ли операция баланс")

    model_config = {"frozen": True}
