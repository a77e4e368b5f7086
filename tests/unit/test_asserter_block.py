"""
Тесты для stateless validators (src.asserter.block, src.asserter.error)

Проверяемые инварианты:
1. Идентификаторы: непустые хеши/адреса, неотрицательные индексы
2. Amount: строгий integer, валидная валюта
3. Операция: индекс совпадает с позицией
4. Coin change: идентификатор и действие
5. Timestamp: MIN_UNIX_EPOCH <= t <= MAX_UNIX_EPOCH
"""

import pytest

from src.asserter import (
    MAX_UNIX_EPOCH,
    MIN_UNIX_EPOCH,
    account_identifier,
    amount,
    block_identifier,
    coin_change,
    currency,
    direction,
    duplicate_related_transaction,
    error,
    network_identifier,
    operation_identifier,
    partial_block_identifier,
    timestamp,
    transaction_identifier,
)
from src.core.domain import (
    AccountIdentifier,
    Amount,
    BlockIdentifier,
    CoinChange,
    CoinIdentifier,
    Currency,
    ErrorDescriptor,
    NetworkIdentifier,
    OperationIdentifier,
    PartialBlockIdentifier,
    RelatedTransaction,
    SubAccountIdentifier,
    SubNetworkIdentifier,
    TransactionIdentifier,
)
from src.core.errors import AsserterError, ErrorKind


def assert_kind(kind, fn, *args):
    with pytest.raises(AsserterError) as exc_info:
        fn(*args)
    assert exc_info.value.kind is kind


# =============================================================================
# ТЕСТЫ: Amount / Currency
# =============================================================================


class TestAmount:
    """amount() и currency()"""

    def test_valid(self, btc):
        amount(Amount(value="1000", currency=btc))
        amount(Amount(value="-1000", currency=btc))
        amount(Amount(value="0", currency=btc))

    def test_missing(self, btc):
        assert_kind(ErrorKind.AMOUNT_VALUE_MISSING, amount, None)
        assert_kind(ErrorKind.AMOUNT_VALUE_MISSING, amount, Amount(value="", currency=btc))

    def test_not_int(self, btc):
        assert_kind(ErrorKind.AMOUNT_IS_NOT_INT, amount, Amount(value="1.5", currency=btc))
        assert_kind(ErrorKind.AMOUNT_IS_NOT_INT, amount, Amount(value="1,000", currency=btc))

    def test_currency_missing(self):
        assert_kind(ErrorKind.AMOUNT_CURRENCY_IS_NIL, amount, Amount(value="1"))

    def test_currency_symbol_empty(self):
        assert_kind(ErrorKind.AMOUNT_CURRENCY_SYMBOL_EMPTY, currency, Currency(symbol="", decimals=8))

    def test_currency_negative_decimals(self):
        assert_kind(
            ErrorKind.AMOUNT_CURRENCY_HAS_NEG_DECIMALS,
            currency,
            Currency(symbol="BTC", decimals=-1),
        )

    def test_zero_decimals_valid(self):
        currency(Currency(symbol="XRP", decimals=0))


# =============================================================================
# ТЕСТЫ: Identifiers
# =============================================================================


class TestIdentifiers:
    """Идентификаторы операций, аккаунтов, блоков, транзакций, сетей"""

    def test_operation_identifier_valid(self):
        operation_identifier(OperationIdentifier(index=2), 2)
        operation_identifier(OperationIdentifier(index=0, network_index=0), 0)

    def test_operation_identifier_missing(self):
        assert_kind(ErrorKind.OPERATION_IDENTIFIER_INDEX_IS_NIL, operation_identifier, None, 0)

    def test_operation_identifier_out_of_order(self):
        with pytest.raises(AsserterError) as exc_info:
            operation_identifier(OperationIdentifier(index=1), 0)

        assert exc_info.value.kind is ErrorKind.OPERATION_IDENTIFIER_INDEX_OUT_OF_ORDER
        assert exc_info.value.fields == {"expected": 0, "actual": 1}

    def test_operation_identifier_negative_network_index(self):
        assert_kind(
            ErrorKind.OPERATION_IDENTIFIER_NETWORK_INDEX_INVALID,
            operation_identifier,
            OperationIdentifier(index=0, network_index=-1),
            0,
        )

    def test_account_identifier(self):
        account_identifier(AccountIdentifier(address="acct1"))
        account_identifier(
            AccountIdentifier(address="acct1", sub_account=SubAccountIdentifier(address="s"))
        )

        assert_kind(ErrorKind.ACCOUNT_IS_NIL, account_identifier, None)
        assert_kind(ErrorKind.ACCOUNT_ADDR_MISSING, account_identifier, AccountIdentifier(address=""))
        assert_kind(
            ErrorKind.ACCOUNT_SUB_ACCOUNT_ADDR_MISSING,
            account_identifier,
            AccountIdentifier(address="acct1", sub_account=SubAccountIdentifier(address="")),
        )

    def test_block_identifier(self):
        block_identifier(BlockIdentifier(index=0, hash="genesis"))

        assert_kind(ErrorKind.BLOCK_IDENTIFIER_IS_NIL, block_identifier, None)
        assert_kind(
            ErrorKind.BLOCK_IDENTIFIER_HASH_MISSING,
            block_identifier,
            BlockIdentifier(index=1, hash=""),
        )
        assert_kind(
            ErrorKind.BLOCK_IDENTIFIER_INDEX_IS_NEG,
            block_identifier,
            BlockIdentifier(index=-1, hash="block"),
        )

    def test_partial_block_identifier(self):
        partial_block_identifier(PartialBlockIdentifier())
        partial_block_identifier(PartialBlockIdentifier(index=5))
        partial_block_identifier(PartialBlockIdentifier(hash="block 5"))

        assert_kind(ErrorKind.PARTIAL_BLOCK_IDENTIFIER_IS_NIL, partial_block_identifier, None)
        assert_kind(
            ErrorKind.PARTIAL_BLOCK_IDENTIFIER_HASH_IS_EMPTY,
            partial_block_identifier,
            PartialBlockIdentifier(hash=""),
        )
        assert_kind(
            ErrorKind.PARTIAL_BLOCK_IDENTIFIER_INDEX_IS_NEGATIVE,
            partial_block_identifier,
            PartialBlockIdentifier(index=-1),
        )

    def test_transaction_identifier(self):
        transaction_identifier(TransactionIdentifier(hash="tx1"))

        assert_kind(ErrorKind.TX_IDENTIFIER_IS_NIL, transaction_identifier, None)
        assert_kind(
            ErrorKind.TX_IDENTIFIER_HASH_MISSING,
            transaction_identifier,
            TransactionIdentifier(hash=""),
        )

    def test_network_identifier(self):
        network_identifier(NetworkIdentifier(blockchain="bitcoin", network="mainnet"))

        assert_kind(ErrorKind.NETWORK_IDENTIFIER_IS_NIL, network_identifier, None)
        assert_kind(
            ErrorKind.NETWORK_IDENTIFIER_BLOCKCHAIN_MISSING,
            network_identifier,
            NetworkIdentifier(blockchain="", network="mainnet"),
        )
        assert_kind(
            ErrorKind.NETWORK_IDENTIFIER_NETWORK_MISSING,
            network_identifier,
            NetworkIdentifier(blockchain="bitcoin", network=""),
        )
        assert_kind(
            ErrorKind.SUB_NETWORK_IDENTIFIER_INVALID,
            network_identifier,
            NetworkIdentifier(
                blockchain="bitcoin",
                network="mainnet",
                sub_network_identifier=SubNetworkIdentifier(network=""),
            ),
        )


# =============================================================================
# ТЕСТЫ: Coins / related transactions
# =============================================================================


class TestCoinChange:
    def test_valid(self):
        coin_change(
            CoinChange(
                coin_identifier=CoinIdentifier(identifier="tx:0"), coin_action="coin_created"
            )
        )
        coin_change(
            CoinChange(coin_identifier=CoinIdentifier(identifier="tx:0"), coin_action="coin_spent")
        )

    def test_missing(self):
        assert_kind(ErrorKind.COIN_CHANGE_IS_NIL, coin_change, None)

    def test_identifier_missing(self):
        assert_kind(
            ErrorKind.COIN_IDENTIFIER_IS_NIL,
            coin_change,
            CoinChange(coin_action="coin_spent"),
        )

    def test_identifier_empty(self):
        assert_kind(
            ErrorKind.COIN_IDENTIFIER_NOT_SET,
            coin_change,
            CoinChange(coin_identifier=CoinIdentifier(identifier=""), coin_action="coin_spent"),
        )

    def test_invalid_action(self):
        assert_kind(
            ErrorKind.COIN_ACTION_INVALID,
            coin_change,
            CoinChange(coin_identifier=CoinIdentifier(identifier="tx:0"), coin_action="burned"),
        )


class TestRelatedTransactions:
    def test_direction(self):
        direction("forward")
        direction("backward")
        assert_kind(ErrorKind.INVALID_DIRECTION, direction, "sideways")

    def test_duplicate_found(self):
        first = RelatedTransaction(
            transaction_identifier=TransactionIdentifier(hash="tx1"), direction="forward"
        )
        second = RelatedTransaction(
            transaction_identifier=TransactionIdentifier(hash="tx2"), direction="forward"
        )
        duplicate = RelatedTransaction(
            transaction_identifier=TransactionIdentifier(hash="tx1"), direction="forward"
        )

        assert duplicate_related_transaction([first, second, duplicate]) is duplicate

    def test_no_duplicate(self):
        forward = RelatedTransaction(
            transaction_identifier=TransactionIdentifier(hash="tx1"), direction="forward"
        )
        backward = RelatedTransaction(
            transaction_identifier=TransactionIdentifier(hash="tx1"), direction="backward"
        )

        assert duplicate_related_transaction([forward, backward]) is None
        assert duplicate_related_transaction(None) is None


# =============================================================================
# ТЕСТЫ: Timestamp
# =============================================================================


class TestTimestamp:
    """Границы включительны"""

    def test_bounds_inclusive(self):
        timestamp(MIN_UNIX_EPOCH)
        timestamp(MAX_UNIX_EPOCH)
        timestamp(946713600000)

    def test_before_min(self):
        assert_kind(ErrorKind.TIMESTAMP_BEFORE_MIN, timestamp, 946713599999)

    def test_after_max(self):
        assert_kind(ErrorKind.TIMESTAMP_AFTER_MAX, timestamp, 2209017600001)

    def test_seconds_rejected(self):
        """Timestamp в секундах вместо миллисекунд"""
        assert_kind(ErrorKind.TIMESTAMP_BEFORE_MIN, timestamp, 1600000000)


# =============================================================================
# ТЕСТЫ: Error descriptor
# =============================================================================


class TestErrorStructure:
    def test_valid(self):
        error(ErrorDescriptor(code=0, message="ok"))

    def test_missing(self):
        assert_kind(ErrorKind.ERROR_IS_NIL, error, None)

    def test_negative_code(self):
        assert_kind(ErrorKind.ERROR_CODE_IS_NEG, error, ErrorDescriptor(code=-1, message="m"))

    def test_empty_message(self):
        assert_kind(ErrorKind.ERROR_MESSAGE_MISSING, error, ErrorDescriptor(code=1, message=""))
