"""
Общие fixtures: конфигурация asserter'а и фабрики DTO.
"""

import pytest

from src.asserter import Asserter, AsserterConfig
from src.core.domain import (
    AccountIdentifier,
    Amount,
    Block,
    BlockIdentifier,
    Currency,
    ErrorDescriptor,
    Operation,
    OperationIdentifier,
    OperationStatus,
    Transaction,
    TransactionIdentifier,
)


VALID_TIMESTAMP = 1600000000000


@pytest.fixture
def btc():
    return Currency(symbol="BTC", decimals=8)


@pytest.fixture
def asserter_config():
    """Конфигурация интеграции: genesis на высоте 0, strict mode."""
    return AsserterConfig(
        genesis_block_identifier=BlockIdentifier(index=0, hash="block 0"),
        allowed_operation_types=["PAYMENT", "FEE", "INPUT", "OUTPUT"],
        allowed_operation_statuses=[
            OperationStatus(status="SUCCESS", successful=True),
            OperationStatus(status="FAILURE", successful=False),
        ],
        allowed_errors=[
            ErrorDescriptor(code=12, message="Invalid account format", retriable=True),
            ErrorDescriptor(code=14, message="Node is unavailable", retriable=False),
        ],
    )


@pytest.fixture
def asserter(asserter_config):
    return Asserter(asserter_config)


@pytest.fixture
def make_operation(btc):
    """Фабрика операций с валидными значениями по умолчанию."""

    def _make(
        index,
        op_type="PAYMENT",
        status="SUCCESS",
        value="1000",
        address="acct1",
        related=None,
        **kwargs,
    ):
        return Operation(
            operation_identifier=OperationIdentifier(index=index),
            related_operations=(
                [OperationIdentifier(index=i) for i in related] if related is not None else None
            ),
            type=op_type,
            status=status,
            account=AccountIdentifier(address=address) if address is not None else None,
            amount=Amount(value=value, currency=btc) if value is not None else None,
            **kwargs,
        )

    return _make


@pytest.fixture
def make_block(make_operation):
    """Фабрика блоков с одной валидной транзакцией."""

    def _make(index=100, parent_index=None, block_hash=None, parent_hash=None, **kwargs):
        parent_index = index - 1 if parent_index is None else parent_index
        kwargs.setdefault("timestamp", VALID_TIMESTAMP)
        kwargs.setdefault(
            "transactions",
            [
                Transaction(
                    transaction_identifier=TransactionIdentifier(hash="tx1"),
                    operations=[make_operation(0)],
                )
            ],
        )
        return Block(
            block_identifier=BlockIdentifier(
                index=index, hash=block_hash if block_hash is not None else f"block {index}"
            ),
            parent_block_identifier=BlockIdentifier(
                index=parent_index,
                hash=parent_hash if parent_hash is not None else f"block {parent_index}",
            ),
            **kwargs,
        )

    return _make
