"""
Domain models and value objects.

Immutable DTO блоков, транзакций и операций, а также каноническая
сериализация для сравнения составных идентификаторов.
"""

from src.core.domain.account import AccountIdentifier, SubAccountIdentifier
from src.core.domain.amount import (
    Amount,
    CoinAction,
    CoinChange,
    CoinIdentifier,
    Currency,
)
from src.core.domain.block import Block, BlockIdentifier, PartialBlockIdentifier
from src.core.domain.construction import (
    ConstructionCombineResponse,
    ConstructionDeriveResponse,
    ConstructionMetadataResponse,
    ConstructionParseResponse,
    ConstructionPayloadsResponse,
    ConstructionPreprocessResponse,
    CurveType,
    PublicKey,
    Signature,
    SignatureType,
    SigningPayload,
    TransactionIdentifierResponse,
)
from src.core.domain.error import ErrorDescriptor, OperationStatus
from src.core.domain.operation import Operation, OperationIdentifier
from src.core.domain.serialization import hash_struct, print_struct
from src.core.domain.transaction import (
    Direction,
    NetworkIdentifier,
    RelatedTransaction,
    SubNetworkIdentifier,
    Transaction,
    TransactionIdentifier,
)

__all__ = [
    # Amounts
    "Currency",
    "Amount",
    "CoinAction",
    "CoinIdentifier",
    "CoinChange",
    # Accounts
    "AccountIdentifier",
    "SubAccountIdentifier",
    # Operations
    "Operation",
    "OperationIdentifier",
    # Transactions
    "Transaction",
    "TransactionIdentifier",
    "RelatedTransaction",
    "Direction",
    "NetworkIdentifier",
    "SubNetworkIdentifier",
    # Blocks
    "Block",
    "BlockIdentifier",
    "PartialBlockIdentifier",
    # Catalog
    "ErrorDescriptor",
    "OperationStatus",
    # Construction
    "CurveType",
    "SignatureType",
    "PublicKey",
    "SigningPayload",
    "Signature",
    "ConstructionPreprocessResponse",
    "ConstructionMetadataResponse",
    "TransactionIdentifierResponse",
    "ConstructionCombineResponse",
    "ConstructionDeriveResponse",
    "ConstructionParseResponse",
    "ConstructionPayloadsResponse",
    # Serialization
    "print_struct",
    "hash_struct",
]
