"""
Stateless validators — идентификаторы, суммы, timestamp

Функции этого модуля не зависят от конфигурации asserter'а. Каждая
возвращает None или поднимает AsserterError с конкретным ErrorKind.

Проверки, зависящие от каталогов (типы и статусы операций, коды ошибок,
genesis, validation profile), находятся в Asserter (src.asserter.asserter).
"""

from typing import Final, Sequence

from src.core.domain import (
    AccountIdentifier,
    Amount,
    BlockIdentifier,
    CoinAction,
    CoinChange,
    CoinIdentifier,
    Currency,
    Direction,
    NetworkIdentifier,
    OperationIdentifier,
    PartialBlockIdentifier,
    RelatedTransaction,
    TransactionIdentifier,
    hash_struct,
    print_struct,
)
from src.core.errors import AsserterError, ErrorKind
from src.core.math import parse_big_int


# =============================================================================
# CONSTANTS
# =============================================================================

# 01/01/2000 00:00:00 UTC в миллисекундах
MIN_UNIX_EPOCH: Final[int] = 946713600000

# 01/01/2040 00:00:00 UTC в миллисекундах
MAX_UNIX_EPOCH: Final[int] = 2209017600000


# =============================================================================
# AMOUNTS
# =============================================================================


def currency(value: Currency | None) -> None:
    """
    Проверка Currency.

    Raises:
        AsserterError: AMOUNT_CURRENCY_IS_NIL, AMOUNT_CURRENCY_SYMBOL_EMPTY,
            AMOUNT_CURRENCY_HAS_NEG_DECIMALS
    """
    if value is None:
        raise AsserterError(ErrorKind.AMOUNT_CURRENCY_IS_NIL)

    if not value.symbol:
        raise AsserterError(ErrorKind.AMOUNT_CURRENCY_SYMBOL_EMPTY)

    if value.decimals < 0:
        raise AsserterError(
            ErrorKind.AMOUNT_CURRENCY_HAS_NEG_DECIMALS, decimals=value.decimals
        )


def amount(value: Amount | None) -> None:
    """
    Проверка Amount: целочисленное значение и валидная валюта.

    Raises:
        AsserterError: AMOUNT_VALUE_MISSING, AMOUNT_IS_NOT_INT или ошибка currency()
    """
    if value is None or not value.value:
        raise AsserterError(ErrorKind.AMOUNT_VALUE_MISSING)

    if parse_big_int(value.value) is None:
        raise AsserterError(
            ErrorKind.AMOUNT_IS_NOT_INT, f"value {value.value!r}", value=value.value
        )

    currency(value.currency)


# =============================================================================
# IDENTIFIERS
# =============================================================================


def operation_identifier(identifier: OperationIdentifier | None, index: int) -> None:
    """
    Проверка OperationIdentifier.

    Индекс операции обязан совпадать с её позицией в транзакции,
    network_index (если задан) неотрицателен.

    Args:
        identifier: Идентификатор операции
        index: Ожидаемый индекс (позиция в списке операций)
    """
    if identifier is None:
        raise AsserterError(ErrorKind.OPERATION_IDENTIFIER_INDEX_IS_NIL)

    if identifier.index != index:
        raise AsserterError(
            ErrorKind.OPERATION_IDENTIFIER_INDEX_OUT_OF_ORDER,
            f"expected identifier index {index} but got {identifier.index}",
            expected=index,
            actual=identifier.index,
        )

    if identifier.network_index is not None and identifier.network_index < 0:
        raise AsserterError(
            ErrorKind.OPERATION_IDENTIFIER_NETWORK_INDEX_INVALID,
            network_index=identifier.network_index,
        )


def account_identifier(account: AccountIdentifier | None) -> None:
    """Проверка AccountIdentifier: адрес и адрес sub-account (если есть)."""
    if account is None:
        raise AsserterError(ErrorKind.ACCOUNT_IS_NIL)

    if not account.address:
        raise AsserterError(ErrorKind.ACCOUNT_ADDR_MISSING)

    if account.sub_account is None:
        return

    if not account.sub_account.address:
        raise AsserterError(ErrorKind.ACCOUNT_SUB_ACCOUNT_ADDR_MISSING)


def block_identifier(identifier: BlockIdentifier | None) -> None:
    """Проверка BlockIdentifier: непустой хеш, неотрицательная высота."""
    if identifier is None:
        raise AsserterError(ErrorKind.BLOCK_IDENTIFIER_IS_NIL)

    if not identifier.hash:
        raise AsserterError(ErrorKind.BLOCK_IDENTIFIER_HASH_MISSING)

    if identifier.index < 0:
        raise AsserterError(ErrorKind.BLOCK_IDENTIFIER_INDEX_IS_NEG, index=identifier.index)


def partial_block_identifier(identifier: PartialBlockIdentifier | None) -> None:
    """Проверка PartialBlockIdentifier: заданные поля непусты / неотрицательны."""
    if identifier is None:
        raise AsserterError(ErrorKind.PARTIAL_BLOCK_IDENTIFIER_IS_NIL)

    if identifier.hash is not None and not identifier.hash:
        raise AsserterError(ErrorKind.PARTIAL_BLOCK_IDENTIFIER_HASH_IS_EMPTY)

    if identifier.index is not None and identifier.index < 0:
        raise AsserterError(
            ErrorKind.PARTIAL_BLOCK_IDENTIFIER_INDEX_IS_NEGATIVE, index=identifier.index
        )


def transaction_identifier(identifier: TransactionIdentifier | None) -> None:
    """Проверка TransactionIdentifier: непустой хеш."""
    if identifier is None:
        raise AsserterError(ErrorKind.TX_IDENTIFIER_IS_NIL)

    if not identifier.hash:
        raise AsserterError(ErrorKind.TX_IDENTIFIER_HASH_MISSING)


def network_identifier(identifier: NetworkIdentifier | None) -> None:
    """Проверка NetworkIdentifier (и SubNetworkIdentifier, если задан)."""
    if identifier is None:
        raise AsserterError(ErrorKind.NETWORK_IDENTIFIER_IS_NIL)

    if not identifier.blockchain:
        raise AsserterError(ErrorKind.NETWORK_IDENTIFIER_BLOCKCHAIN_MISSING)

    if not identifier.network:
        raise AsserterError(ErrorKind.NETWORK_IDENTIFIER_NETWORK_MISSING)

    sub_network = identifier.sub_network_identifier
    if sub_network is not None and not sub_network.network:
        raise AsserterError(ErrorKind.SUB_NETWORK_IDENTIFIER_INVALID)


# =============================================================================
# COINS
# =============================================================================


def coin_identifier(identifier: CoinIdentifier | None) -> None:
    if identifier is None:
        raise AsserterError(ErrorKind.COIN_IDENTIFIER_IS_NIL)

    if not identifier.identifier:
        raise AsserterError(ErrorKind.COIN_IDENTIFIER_NOT_SET)


def coin_action(action: str) -> None:
    if action not in (CoinAction.COIN_CREATED.value, CoinAction.COIN_SPENT.value):
        raise AsserterError(ErrorKind.COIN_ACTION_INVALID, f"coin action {action!r}")


def coin_change(change: CoinChange | None) -> None:
    """Проверка CoinChange: идентификатор coin и действие."""
    if change is None:
        raise AsserterError(ErrorKind.COIN_CHANGE_IS_NIL)

    try:
        coin_identifier(change.coin_identifier)
    except AsserterError as err:
        raise err.wrap(
            f"coin identifier {print_struct(change.coin_identifier)} is invalid"
        )

    try:
        coin_action(change.coin_action)
    except AsserterError as err:
        raise err.wrap(f"coin action {change.coin_action!r} is invalid")


# =============================================================================
# RELATED TRANSACTIONS
# =============================================================================


def direction(value: str) -> None:
    """Направление связи: только forward или backward."""
    if value not in (Direction.FORWARD.value, Direction.BACKWARD.value):
        raise AsserterError(ErrorKind.INVALID_DIRECTION, f"direction {value!r}")


def duplicate_related_transaction(
    items: Sequence[RelatedTransaction] | None,
) -> RelatedTransaction | None:
    """
    Поиск первой структурно повторяющейся связанной транзакции.

    Returns:
        Первый дубликат (по hash_struct) или None
    """
    seen: set[str] = set()
    for item in items or ():
        key = hash_struct(item)
        if key in seen:
            return item
        seen.add(key)
    return None


# =============================================================================
# TIMESTAMP
# =============================================================================


def timestamp(value: int) -> None:
    """
    Проверка timestamp блока (миллисекунды).

    Допустимо только MIN_UNIX_EPOCH <= value <= MAX_UNIX_EPOCH: значения
    в секундах или sentinel-значения интеграций отклоняются.
    """
    if value < MIN_UNIX_EPOCH:
        raise AsserterError(ErrorKind.TIMESTAMP_BEFORE_MIN, f"timestamp {value}", timestamp=value)

    if value > MAX_UNIX_EPOCH:
        raise AsserterError(ErrorKind.TIMESTAMP_AFTER_MAX, f"timestamp {value}", timestamp=value)
