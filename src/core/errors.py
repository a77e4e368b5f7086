"""
Errors — закрытая таксономия ошибок conformance engine

Каждый нарушенный инвариант представлен ровно одним членом ErrorKind.
Значение члена — каноническое сообщение об ошибке (уникальное, @unique),
поэтому идентичность ошибки определяется через `err.kind is ErrorKind.X`,
а не через сравнение строк.

Иерархия исключений:
- ConformanceError — базовый класс (kind, detail, fields, контекст)
- AsserterError    — Validation Engine (src.asserter)
- ParserError      — Operation Pattern Matcher (src.parser)

Распространение строго fail-fast: первая ошибка поднимается сразу и по мере
раскрутки стека дополняется позиционным контекстом через wrap().
"""

from enum import Enum, unique
from types import MappingProxyType
from typing import Any, Mapping


# =============================================================================
# ENUMS
# =============================================================================


class ErrorCategory(str, Enum):
    """Сущность, которую охраняет инвариант"""

    IDENTITY = "identity"
    AMOUNT = "amount"
    ORDERING = "ordering"
    AGGREGATE = "aggregate"
    BLOCK = "block"
    CATALOG = "catalog"
    CONSTRUCTION = "construction"
    MATCHER = "matcher"


@unique
class ErrorKind(str, Enum):
    """Один член на каждый инвариант. Значение — каноническое сообщение."""

    # --- identity ---
    ACCOUNT_IS_NIL = "Account is nil"
    ACCOUNT_ADDR_MISSING = "Account.Address is missing"
    ACCOUNT_SUB_ACCOUNT_ADDR_MISSING = "Account.SubAccount.Address is missing"
    OPERATION_IS_NIL = "Operation is nil"
    OPERATION_IDENTIFIER_INDEX_IS_NIL = "Operation.OperationIdentifier.Index is invalid"
    OPERATION_IDENTIFIER_NETWORK_INDEX_INVALID = (
        "Operation.OperationIdentifier.NetworkIndex is invalid"
    )
    BLOCK_IDENTIFIER_IS_NIL = "BlockIdentifier is nil"
    BLOCK_IDENTIFIER_HASH_MISSING = "BlockIdentifier.Hash is missing"
    BLOCK_IDENTIFIER_INDEX_IS_NEG = "BlockIdentifier.Index is negative"
    PARTIAL_BLOCK_IDENTIFIER_IS_NIL = "PartialBlockIdentifier is nil"
    PARTIAL_BLOCK_IDENTIFIER_HASH_IS_EMPTY = "PartialBlockIdentifier hash is empty"
    PARTIAL_BLOCK_IDENTIFIER_INDEX_IS_NEGATIVE = "PartialBlockIdentifier index is negative"
    TX_IS_NIL = "Transaction is nil"
    TX_IDENTIFIER_IS_NIL = "TransactionIdentifier is nil"
    TX_IDENTIFIER_HASH_MISSING = "TransactionIdentifier.Hash is missing"
    NETWORK_IDENTIFIER_IS_NIL = "NetworkIdentifier is nil"
    NETWORK_IDENTIFIER_BLOCKCHAIN_MISSING = "NetworkIdentifier.Blockchain is missing"
    NETWORK_IDENTIFIER_NETWORK_MISSING = "NetworkIdentifier.Network is missing"
    SUB_NETWORK_IDENTIFIER_INVALID = "NetworkIdentifier.SubNetworkIdentifier.Network is missing"
    COIN_CHANGE_IS_NIL = "coin change cannot be nil"
    COIN_IDENTIFIER_IS_NIL = "coin identifier cannot be nil"
    COIN_IDENTIFIER_NOT_SET = "coin identifier cannot be empty"
    COIN_ACTION_INVALID = "not a valid coin action"
    DUPLICATE_RELATED_TRANSACTION = "duplicate related transaction"
    INVALID_DIRECTION = "invalid direction (must be 'forward' or 'backward')"

    # --- amount ---
    AMOUNT_VALUE_MISSING = "Amount.Value is missing"
    AMOUNT_IS_NOT_INT = "Amount.Value is not an integer"
    AMOUNT_CURRENCY_IS_NIL = "Amount.Currency is nil"
    AMOUNT_CURRENCY_SYMBOL_EMPTY = "Amount.Currency.Symbol is empty"
    AMOUNT_CURRENCY_HAS_NEG_DECIMALS = "Amount.Currency.Decimals must be >= 0"
    DUPLICATE_CURRENCY = "currency is used multiple times"

    # --- ordering ---
    OPERATION_IDENTIFIER_INDEX_OUT_OF_ORDER = "Operation.OperationIdentifier.Index is out of order"
    RELATED_OPERATION_INDEX_OUT_OF_ORDER = (
        "related operation has index greater than operation"
    )
    RELATED_OPERATION_INDEX_DUPLICATE = "found duplicate related operation index"

    # --- aggregate ---
    PAYMENT_COUNT_MISMATCH = "payment count doesn't match"
    PAYMENT_AMOUNT_NOT_BALANCING = "payment amount doesn't balance"
    FEE_COUNT_MISMATCH = "fee count doesn't match"
    FEE_AMOUNT_NOT_BALANCING = "fee amount doesn't balance"
    FEE_AMOUNT_NOT_NEGATIVE = "fee amount is not negative"
    RELATED_OPERATION_IN_FEE_NOT_ALLOWED = "fee operation shouldn't contain related operation"
    RELATED_OPERATION_MISSING = "related operations key is missing"

    # --- block ---
    BLOCK_IS_NIL = "Block is nil"
    BLOCK_HASH_EQUALS_PARENT_BLOCK_HASH = "BlockIdentifier.Hash == ParentBlockIdentifier.Hash"
    BLOCK_INDEX_PRECEDES_PARENT_BLOCK_INDEX = (
        "BlockIdentifier.Index <= ParentBlockIdentifier.Index"
    )
    TIMESTAMP_BEFORE_MIN = "timestamp is before 01/01/2000"
    TIMESTAMP_AFTER_MAX = "timestamp is after 01/01/2040"

    # --- catalog ---
    OPERATION_STATUS_MISSING = "Operation.Status is missing"
    OPERATION_STATUS_INVALID = "Operation.Status is invalid"
    OPERATION_STATUS_NOT_EMPTY_FOR_CONSTRUCTION = (
        "Operation.Status must be empty for construction"
    )
    OPERATION_TYPE_INVALID = "Operation.Type is invalid"
    ERROR_IS_NIL = "Error is nil"
    ERROR_CODE_IS_NEG = "Error.Code is negative"
    ERROR_MESSAGE_MISSING = "Error.Message is missing"
    ERROR_UNEXPECTED_CODE = "Error.Code unexpected"
    ERROR_MESSAGE_MISMATCH = "Error.Message does not match message from /network/options"
    ERROR_RETRIABLE_MISMATCH = "Error.Retriable mismatch"

    # --- construction ---
    NO_OPERATIONS_FOR_CONSTRUCTION = "operations cannot be empty for construction"
    ACCOUNT_ARRAY_EMPTY = "account array is empty"
    ACCOUNT_ARRAY_DUPLICATE_ACCOUNT = "account array contains a duplicate account"
    CONSTRUCTION_PREPROCESS_RESPONSE_IS_NIL = "ConstructionPreprocessResponse cannot be nil"
    CONSTRUCTION_METADATA_RESPONSE_IS_NIL = "ConstructionMetadataResponse cannot be nil"
    CONSTRUCTION_METADATA_RESPONSE_METADATA_MISSING = "Metadata is nil"
    TX_IDENTIFIER_RESPONSE_IS_NIL = "TransactionIdentifierResponse cannot be nil"
    CONSTRUCTION_COMBINE_RESPONSE_IS_NIL = "construction combine response cannot be nil"
    SIGNED_TX_EMPTY = "signed transaction cannot be empty"
    CONSTRUCTION_DERIVE_RESPONSE_IS_NIL = "construction derive response cannot be nil"
    CONSTRUCTION_PARSE_RESPONSE_IS_NIL = "construction parse response cannot be nil"
    CONSTRUCTION_PARSE_RESPONSE_OPERATIONS_EMPTY = "operations cannot be empty"
    CONSTRUCTION_PARSE_RESPONSE_SIGNERS_EMPTY_ON_SIGNED_TX = (
        "signers cannot be empty on signed transaction"
    )
    CONSTRUCTION_PARSE_RESPONSE_SIGNERS_NON_EMPTY_ON_UNSIGNED_TX = (
        "signers should be empty for unsigned txs"
    )
    CONSTRUCTION_PAYLOADS_RESPONSE_IS_NIL = "construction payloads response cannot be nil"
    CONSTRUCTION_PAYLOADS_RESPONSE_UNSIGNED_TX_EMPTY = "unsigned transaction cannot be empty"
    CONSTRUCTION_PAYLOADS_RESPONSE_PAYLOADS_EMPTY = "signing payloads cannot be empty"
    PUBLIC_KEY_IS_NIL = "PublicKey cannot be nil"
    PUBLIC_KEY_BYTES_EMPTY = "public key bytes cannot be empty"
    PUBLIC_KEY_BYTES_ZERO = "public key bytes cannot be 0"
    CURVE_TYPE_NOT_SUPPORTED = "not a supported CurveType"
    SIGNING_PAYLOAD_IS_NIL = "signing payload cannot be nil"
    SIGNING_PAYLOAD_BYTES_EMPTY = "signing payload bytes cannot be empty"
    SIGNING_PAYLOAD_BYTES_ZERO = "signing payload bytes cannot be 0"
    SIGNATURES_EMPTY = "signatures cannot be empty"
    SIGNATURES_RETURNED_SIG_MISMATCH = (
        "requested signature type does not match returned signature type"
    )
    SIGNATURE_BYTES_EMPTY = "signature bytes cannot be empty"
    SIGNATURE_BYTES_ZERO = "signature bytes cannot be 0"
    SIGNATURE_TYPE_NOT_SUPPORTED = "not a supported SignatureType"

    # --- matcher ---
    MATCH_OPERATIONS_NO_OPERATIONS = "unable to match anything to zero operations"
    MATCH_OPERATIONS_DESCRIPTIONS_MISSING = "no descriptions to match"
    MATCH_OPERATIONS_MATCH_NOT_FOUND = "unable to find match for operation"
    MATCH_OPERATIONS_DESCRIPTION_NOT_MATCHED = "could not find operation to match description"
    MATCH_AMOUNT_INVALID = "unable to parse operation amount"
    MATCH_INDEX_OUT_OF_RANGE = "match index out of range"
    MATCH_INDEX_GROUP_EMPTY = "match index refers to an empty match group"
    ACCOUNT_MATCH_ACCOUNT_MISSING = "account is missing"
    ACCOUNT_MATCH_SUB_ACCOUNT_MISSING = "SubAccountIdentifier is missing"
    ACCOUNT_MATCH_SUB_ACCOUNT_POPULATED = "SubAccount is populated"
    ACCOUNT_MATCH_UNEXPECTED_SUB_ACCOUNT_ADDR = "unexpected SubAccountIdentifier.Address"
    AMOUNT_MATCH_AMOUNT_MISSING = "amount is missing"
    AMOUNT_MATCH_AMOUNT_POPULATED = "amount is populated"
    AMOUNT_MATCH_UNEXPECTED_SIGN = "unexpected amount sign"
    AMOUNT_MATCH_UNEXPECTED_CURRENCY = "unexpected currency"
    METADATA_MATCH_KEY_NOT_FOUND = "key is not present in metadata"
    METADATA_MATCH_KEY_VALUE_MISMATCH = "unexpected value associated with key"
    COIN_ACTION_MATCH_COIN_CHANGE_IS_NIL = "coin change is nil"
    COIN_ACTION_MATCH_UNEXPECTED_COIN_ACTION = "unexpected coin action"
    EQUAL_AMOUNTS_NO_OPERATIONS = "cannot check equality of 0 operations"
    EQUAL_AMOUNTS_NOT_EQUAL = "amounts are not equal"
    OPPOSITE_AMOUNTS_GROUP_SIZE_INVALID = "cannot check opposites of a group that is not a pair"
    OPPOSITE_AMOUNTS_SAME_SIGN = "operations have the same sign"
    OPPOSITE_AMOUNTS_ABS_VAL_MISMATCH = "operation absolute values are not equal"
    EQUAL_ADDRESSES_TOO_FEW_OPERATIONS = "cannot check address equality of <=1 operations"
    EQUAL_ADDRESSES_ACCOUNT_IS_NIL = "account is nil"
    EQUAL_ADDRESSES_ADDR_MISMATCH = "addresses are not equal"

    @property
    def category(self) -> ErrorCategory:
        """Категория инварианта"""
        return _KIND_CATEGORY[self]


_CATEGORIES: dict[ErrorCategory, tuple[ErrorKind, ...]] = {
    ErrorCategory.IDENTITY: (
        ErrorKind.ACCOUNT_IS_NIL,
        ErrorKind.ACCOUNT_ADDR_MISSING,
        ErrorKind.ACCOUNT_SUB_ACCOUNT_ADDR_MISSING,
        ErrorKind.OPERATION_IS_NIL,
        ErrorKind.OPERATION_IDENTIFIER_INDEX_IS_NIL,
        ErrorKind.OPERATION_IDENTIFIER_NETWORK_INDEX_INVALID,
        ErrorKind.BLOCK_IDENTIFIER_IS_NIL,
        ErrorKind.BLOCK_IDENTIFIER_HASH_MISSING,
        ErrorKind.BLOCK_IDENTIFIER_INDEX_IS_NEG,
        ErrorKind.PARTIAL_BLOCK_IDENTIFIER_IS_NIL,
        ErrorKind.PARTIAL_BLOCK_IDENTIFIER_HASH_IS_EMPTY,
        ErrorKind.PARTIAL_BLOCK_IDENTIFIER_INDEX_IS_NEGATIVE,
        ErrorKind.TX_IS_NIL,
        ErrorKind.TX_IDENTIFIER_IS_NIL,
        ErrorKind.TX_IDENTIFIER_HASH_MISSING,
        ErrorKind.NETWORK_IDENTIFIER_IS_NIL,
        ErrorKind.NETWORK_IDENTIFIER_BLOCKCHAIN_MISSING,
        ErrorKind.NETWORK_IDENTIFIER_NETWORK_MISSING,
        ErrorKind.SUB_NETWORK_IDENTIFIER_INVALID,
        ErrorKind.COIN_CHANGE_IS_NIL,
        ErrorKind.COIN_IDENTIFIER_IS_NIL,
        ErrorKind.COIN_IDENTIFIER_NOT_SET,
        ErrorKind.COIN_ACTION_INVALID,
        ErrorKind.DUPLICATE_RELATED_TRANSACTION,
        ErrorKind.INVALID_DIRECTION,
    ),
    ErrorCategory.AMOUNT: (
        ErrorKind.AMOUNT_VALUE_MISSING,
        ErrorKind.AMOUNT_IS_NOT_INT,
        ErrorKind.AMOUNT_CURRENCY_IS_NIL,
        ErrorKind.AMOUNT_CURRENCY_SYMBOL_EMPTY,
        ErrorKind.AMOUNT_CURRENCY_HAS_NEG_DECIMALS,
        ErrorKind.DUPLICATE_CURRENCY,
    ),
    ErrorCategory.ORDERING: (
        ErrorKind.OPERATION_IDENTIFIER_INDEX_OUT_OF_ORDER,
        ErrorKind.RELATED_OPERATION_INDEX_OUT_OF_ORDER,
        ErrorKind.RELATED_OPERATION_INDEX_DUPLICATE,
    ),
    ErrorCategory.AGGREGATE: (
        ErrorKind.PAYMENT_COUNT_MISMATCH,
        ErrorKind.PAYMENT_AMOUNT_NOT_BALANCING,
        ErrorKind.FEE_COUNT_MISMATCH,
        ErrorKind.FEE_AMOUNT_NOT_BALANCING,
        ErrorKind.FEE_AMOUNT_NOT_NEGATIVE,
        ErrorKind.RELATED_OPERATION_IN_FEE_NOT_ALLOWED,
        ErrorKind.RELATED_OPERATION_MISSING,
    ),
    ErrorCategory.BLOCK: (
        ErrorKind.BLOCK_IS_NIL,
        ErrorKind.BLOCK_HASH_EQUALS_PARENT_BLOCK_HASH,
        ErrorKind.BLOCK_INDEX_PRECEDES_PARENT_BLOCK_INDEX,
        ErrorKind.TIMESTAMP_BEFORE_MIN,
        ErrorKind.TIMESTAMP_AFTER_MAX,
    ),
    ErrorCategory.CATALOG: (
        ErrorKind.OPERATION_STATUS_MISSING,
        ErrorKind.OPERATION_STATUS_INVALID,
        ErrorKind.OPERATION_STATUS_NOT_EMPTY_FOR_CONSTRUCTION,
        ErrorKind.OPERATION_TYPE_INVALID,
        ErrorKind.ERROR_IS_NIL,
        ErrorKind.ERROR_CODE_IS_NEG,
        ErrorKind.ERROR_MESSAGE_MISSING,
        ErrorKind.ERROR_UNEXPECTED_CODE,
        ErrorKind.ERROR_MESSAGE_MISMATCH,
        ErrorKind.ERROR_RETRIABLE_MISMATCH,
    ),
    ErrorCategory.CONSTRUCTION: (
        ErrorKind.NO_OPERATIONS_FOR_CONSTRUCTION,
        ErrorKind.ACCOUNT_ARRAY_EMPTY,
        ErrorKind.ACCOUNT_ARRAY_DUPLICATE_ACCOUNT,
        ErrorKind.CONSTRUCTION_PREPROCESS_RESPONSE_IS_NIL,
        ErrorKind.CONSTRUCTION_METADATA_RESPONSE_IS_NIL,
        ErrorKind.CONSTRUCTION_METADATA_RESPONSE_METADATA_MISSING,
        ErrorKind.TX_IDENTIFIER_RESPONSE_IS_NIL,
        ErrorKind.CONSTRUCTION_COMBINE_RESPONSE_IS_NIL,
        ErrorKind.SIGNED_TX_EMPTY,
        ErrorKind.CONSTRUCTION_DERIVE_RESPONSE_IS_NIL,
        ErrorKind.CONSTRUCTION_PARSE_RESPONSE_IS_NIL,
        ErrorKind.CONSTRUCTION_PARSE_RESPONSE_OPERATIONS_EMPTY,
        ErrorKind.CONSTRUCTION_PARSE_RESPONSE_SIGNERS_EMPTY_ON_SIGNED_TX,
        ErrorKind.CONSTRUCTION_PARSE_RESPONSE_SIGNERS_NON_EMPTY_ON_UNSIGNED_TX,
        ErrorKind.CONSTRUCTION_PAYLOADS_RESPONSE_IS_NIL,
        ErrorKind.CONSTRUCTION_PAYLOADS_RESPONSE_UNSIGNED_TX_EMPTY,
        ErrorKind.CONSTRUCTION_PAYLOADS_RESPONSE_PAYLOADS_EMPTY,
        ErrorKind.PUBLIC_KEY_IS_NIL,
        ErrorKind.PUBLIC_KEY_BYTES_EMPTY,
        ErrorKind.PUBLIC_KEY_BYTES_ZERO,
        ErrorKind.CURVE_TYPE_NOT_SUPPORTED,
        ErrorKind.SIGNING_PAYLOAD_IS_NIL,
        ErrorKind.SIGNING_PAYLOAD_BYTES_EMPTY,
        ErrorKind.SIGNING_PAYLOAD_BYTES_ZERO,
        ErrorKind.SIGNATURES_EMPTY,
        ErrorKind.SIGNATURES_RETURNED_SIG_MISMATCH,
        ErrorKind.SIGNATURE_BYTES_EMPTY,
        ErrorKind.SIGNATURE_BYTES_ZERO,
        ErrorKind.SIGNATURE_TYPE_NOT_SUPPORTED,
    ),
    ErrorCategory.MATCHER: (
        ErrorKind.MATCH_OPERATIONS_NO_OPERATIONS,
        ErrorKind.MATCH_OPERATIONS_DESCRIPTIONS_MISSING,
        ErrorKind.MATCH_OPERATIONS_MATCH_NOT_FOUND,
        ErrorKind.MATCH_OPERATIONS_DESCRIPTION_NOT_MATCHED,
        ErrorKind.MATCH_AMOUNT_INVALID,
        ErrorKind.MATCH_INDEX_OUT_OF_RANGE,
        ErrorKind.MATCH_INDEX_GROUP_EMPTY,
        ErrorKind.ACCOUNT_MATCH_ACCOUNT_MISSING,
        ErrorKind.ACCOUNT_MATCH_SUB_ACCOUNT_MISSING,
        ErrorKind.ACCOUNT_MATCH_SUB_ACCOUNT_POPULATED,
        ErrorKind.ACCOUNT_MATCH_UNEXPECTED_SUB_ACCOUNT_ADDR,
        ErrorKind.AMOUNT_MATCH_AMOUNT_MISSING,
        ErrorKind.AMOUNT_MATCH_AMOUNT_POPULATED,
        ErrorKind.AMOUNT_MATCH_UNEXPECTED_SIGN,
        ErrorKind.AMOUNT_MATCH_UNEXPECTED_CURRENCY,
        ErrorKind.METADATA_MATCH_KEY_NOT_FOUND,
        ErrorKind.METADATA_MATCH_KEY_VALUE_MISMATCH,
        ErrorKind.COIN_ACTION_MATCH_COIN_CHANGE_IS_NIL,
        ErrorKind.COIN_ACTION_MATCH_UNEXPECTED_COIN_ACTION,
        ErrorKind.EQUAL_AMOUNTS_NO_OPERATIONS,
        ErrorKind.EQUAL_AMOUNTS_NOT_EQUAL,
        ErrorKind.OPPOSITE_AMOUNTS_GROUP_SIZE_INVALID,
        ErrorKind.OPPOSITE_AMOUNTS_SAME_SIGN,
        ErrorKind.OPPOSITE_AMOUNTS_ABS_VAL_MISMATCH,
        ErrorKind.EQUAL_ADDRESSES_TOO_FEW_OPERATIONS,
        ErrorKind.EQUAL_ADDRESSES_ACCOUNT_IS_NIL,
        ErrorKind.EQUAL_ADDRESSES_ADDR_MISMATCH,
    ),
}

_KIND_CATEGORY: Mapping[ErrorKind, ErrorCategory] = MappingProxyType(
    {kind: category for category, kinds in _CATEGORIES.items() for kind in kinds}
)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class ConformanceError(Exception):
    """
    Базовое исключение conformance engine.

    Attributes:
        kind: Нарушенный инвариант
        detail: Уточнение (значения, индексы), может быть пустым
        fields: Диагностическая нагрузка варианта (index, expected, actual, ...)
        context: Позиционный контекст, от внешнего к внутреннему
    """

    def __init__(self, kind: ErrorKind, detail: str = "", **fields: Any):
        self.kind = kind
        self.detail = detail
        self.fields = fields
        self.context: list[str] = []
        super().__init__(kind.value)

    @property
    def category(self) -> ErrorCategory:
        return self.kind.category

    def wrap(self, message: str) -> "ConformanceError":
        """
        Добавление позиционного контекста при раскрутке стека.

        Возвращает тот же объект, поэтому kind сохраняется:
            raise err.wrap(f"operation {index} is invalid")
        """
        self.context.insert(0, message)
        return self

    def __str__(self) -> str:
        parts = list(self.context)
        if self.detail:
            parts.append(self.detail)
        parts.append(self.kind.value)
        return ": ".join(parts)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.kind.name}, {str(self)!r})"


class AsserterError(ConformanceError):
    """Нарушение инварианта, обнаруженное Validation Engine."""


class ParserError(ConformanceError):
    """Нарушение, обнаруженное Operation Pattern Matcher."""
