"""
Parser — Operation Pattern Matcher

Декларативное сопоставление списка операций с описаниями (greedy,
first-fit, без backtracking).
"""

from src.parser.match_operations import (
    AccountDescription,
    AmountDescription,
    AmountSign,
    Descriptions,
    Match,
    MetadataDescription,
    OperationDescription,
    equal_addresses,
    equal_amounts,
    match_operations,
    opposite_amounts,
    opposite_or_zero_amounts,
)

__all__ = [
    "AmountSign",
    "MetadataDescription",
    "AccountDescription",
    "AmountDescription",
    "OperationDescription",
    "Descriptions",
    "Match",
    "match_operations",
    "equal_amounts",
    "equal_addresses",
    "opposite_amounts",
    "opposite_or_zero_amounts",
]
