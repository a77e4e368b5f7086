"""
Asserter — Validation Engine

Stateless validators (block, construction, error) и сконфигурированный
Asserter (каталоги типов/статусов/ошибок, genesis, validation profile).
"""

from src.asserter.asserter import Asserter
from src.asserter.block import (
    MAX_UNIX_EPOCH,
    MIN_UNIX_EPOCH,
    account_identifier,
    amount,
    block_identifier,
    coin_action,
    coin_change,
    coin_identifier,
    currency,
    direction,
    duplicate_related_transaction,
    network_identifier,
    operation_identifier,
    partial_block_identifier,
    timestamp,
    transaction_identifier,
)
from src.asserter.config import (
    AsserterConfig,
    ChainType,
    OperationRule,
    OperationValidation,
    ValidationProfile,
    load_asserter_config,
    load_validation_profile,
)
from src.asserter.construction import (
    account_array,
    assert_unique_amounts,
    bytes_array_zero,
    construction_combine_response,
    construction_derive_response,
    construction_metadata_response,
    construction_payloads_response,
    construction_preprocess_response,
    curve_type,
    public_key,
    signature_type,
    signatures,
    signing_payload,
    transaction_identifier_response,
)
from src.asserter.error import error

__all__ = [
    # Engine
    "Asserter",
    # Config
    "AsserterConfig",
    "ChainType",
    "OperationRule",
    "OperationValidation",
    "ValidationProfile",
    "load_asserter_config",
    "load_validation_profile",
    # Block
    "MIN_UNIX_EPOCH",
    "MAX_UNIX_EPOCH",
    "currency",
    "amount",
    "operation_identifier",
    "account_identifier",
    "block_identifier",
    "partial_block_identifier",
    "transaction_identifier",
    "network_identifier",
    "coin_identifier",
    "coin_action",
    "coin_change",
    "direction",
    "duplicate_related_transaction",
    "timestamp",
    # Error
    "error",
    # Construction
    "bytes_array_zero",
    "account_array",
    "assert_unique_amounts",
    "construction_preprocess_response",
    "construction_metadata_response",
    "transaction_identifier_response",
    "construction_combine_response",
    "construction_derive_response",
    "construction_payloads_response",
    "curve_type",
    "signature_type",
    "public_key",
    "signing_payload",
    "signatures",
]
