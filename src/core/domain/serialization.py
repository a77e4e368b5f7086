"""
Canonical serialization — текстовое представление и хеш структур

print_struct: компактный JSON для диагностических сообщений.
hash_struct: SHA-256 от JSON с отсортированными ключами.

Две структуры считаются идентичными, если совпадают их hash_struct.
Поля со значением None не сериализуются, поэтому явный None и
отсутствующее поле дают одинаковый хеш.
"""

import hashlib
import json
from typing import Any

from pydantic import BaseModel


def _to_primitive(value: Any) -> Any:
    """Приведение моделей (в т.ч. вложенных в list/dict) к JSON-примитивам."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", exclude_none=True)
    if isinstance(value, (list, tuple)):
        return [_to_primitive(v) for v in value]
    if isinstance(value, dict):
        return {k: _to_primitive(v) for k, v in value.items()}
    return value


def print_struct(value: Any) -> str:
    """
    Компактное JSON-представление для сообщений об ошибках.

    Args:
        value: Модель, список моделей или примитив

    Returns:
        JSON строка (или repr для несериализуемых значений)
    """
    try:
        return json.dumps(_to_primitive(value), separators=(",", ":"))
    except (TypeError, ValueError):
        return repr(value)


def hash_struct(value: Any) -> str:
    """
    Канонический хеш структуры.

    Args:
        value: Модель, список моделей или примитив

    Returns:
        SHA-256 hex digest JSON с отсортированными ключами
    """
    canonical = json.dumps(_to_primitive(value), sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
