"""
Amounts — разбор денежных величин произвольной точности

Значения Amount.value — строки с base-10 integer. Python int имеет
произвольную точность, но int() слишком либерален (пробелы, '_', юникодные
цифры), поэтому строка сначала проверяется строгим шаблоном.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Допустимо только [+-]?[0-9]+ без пробелов
2. Никаких float на пути разбора (точность не теряется)
"""

import re
from typing import Final

from src.core.domain.amount import Amount


# Строгий base-10 integer с необязательным знаком
_BIG_INT_PATTERN: Final[re.Pattern[str]] = re.compile(r"[+-]?[0-9]+")


def parse_big_int(value: str | None) -> int | None:
    """
    Разбор base-10 integer.

    Args:
        value: Строка (например, "-1500")

    Returns:
        int или None, если строка не является целым числом

    Examples:
        >>> parse_big_int("-1500")
        -1500
        >>> parse_big_int("1.5") is None
        True
    """
    if value is None or not _BIG_INT_PATTERN.fullmatch(value):
        return None
    return int(value, 10)


def big_int(value: str) -> int:
    """
    Разбор base-10 integer с исключением.

    Raises:
        ValueError: Если строка не является целым числом
    """
    parsed = parse_big_int(value)
    if parsed is None:
        raise ValueError(f"{value!r} is not an integer")
    return parsed


def amount_value(amount: Amount | None) -> int:
    """
    Целочисленное значение Amount.

    Raises:
        ValueError: Если amount отсутствует или value не является целым числом
    """
    if amount is None:
        raise ValueError("amount value cannot be nil")
    return big_int(amount.value)


def sign(value: int) -> int:
    """Знак числа: -1, 0 или 1."""
    return (value > 0) - (value < 0)
