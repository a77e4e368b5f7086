"""
Тесты для разбора денежных величин

Проверяемые инварианты:
1. Только строгий base-10 integer (без пробелов, '_', точки)
2. Произвольная точность (значения больше int64)
3. amount_value/big_int поднимают ValueError
"""

import pytest

from src.core.domain import Amount, Currency
from src.core.math import amount_value, big_int, parse_big_int, sign


class TestParseBigInt:
    """parse_big_int"""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("0", 0),
            ("1000", 1000),
            ("-1000", -1000),
            ("+7", 7),
            ("007", 7),
        ],
    )
    def test_valid(self, value, expected):
        assert parse_big_int(value) == expected

    @pytest.mark.parametrize(
        "value",
        ["", "1.5", "1e5", " 1", "1 ", "1_000", "abc", "-", "0x10", "١٢"],
    )
    def test_invalid(self, value):
        assert parse_big_int(value) is None

    def test_none(self):
        assert parse_big_int(None) is None

    def test_arbitrary_precision(self):
        """Значения за пределами int64 не теряют точность"""
        huge = "123456789012345678901234567890123456789"
        assert parse_big_int(huge) == 123456789012345678901234567890123456789
        assert parse_big_int("-" + huge) == -123456789012345678901234567890123456789


class TestBigInt:
    def test_valid(self):
        assert big_int("-5") == -5

    def test_invalid_raises(self):
        with pytest.raises(ValueError):
            big_int("1.0")


class TestAmountValue:
    """amount_value"""

    def test_value(self):
        amount = Amount(value="-1500", currency=Currency(symbol="BTC", decimals=8))
        assert amount_value(amount) == -1500

    def test_none_amount(self):
        with pytest.raises(ValueError):
            amount_value(None)

    def test_invalid_value(self):
        with pytest.raises(ValueError):
            amount_value(Amount(value="ten"))


class TestSign:
    def test_sign(self):
        assert sign(-10) == -1
        assert sign(0) == 0
        assert sign(10**30) == 1
