"""
Core math modules

Арифметика денежных величин произвольной точности.
"""

from src.core.math.amounts import (
    amount_value,
    big_int,
    parse_big_int,
    sign,
)

__all__ = [
    "parse_big_int",
    "big_int",
    "amount_value",
    "sign",
]
