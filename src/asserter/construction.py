"""
Construction API validators

Проверки ответов /construction/* для транзакций, которые ещё не отправлены
в сеть. ConstructionParseResponse зависит от каталогов и проверяется
в Asserter.construction_parse_response().
"""

from typing import Sequence

from src.core.domain import (
    AccountIdentifier,
    Amount,
    ConstructionCombineResponse,
    ConstructionDeriveResponse,
    ConstructionMetadataResponse,
    ConstructionPayloadsResponse,
    ConstructionPreprocessResponse,
    CurveType,
    PublicKey,
    Signature,
    SignatureType,
    SigningPayload,
    TransactionIdentifierResponse,
    hash_struct,
    print_struct,
)
from src.core.errors import AsserterError, ErrorKind

from .block import account_identifier, amount, transaction_identifier


_CURVE_TYPES = frozenset(c.value for c in CurveType)
_SIGNATURE_TYPES = frozenset(s.value for s in SignatureType)


# =============================================================================
# HELPERS
# =============================================================================


def bytes_array_zero(value: bytes) -> bool:
    """True, если все байты нулевые."""
    return all(b == 0 for b in value)


def account_array(name: str, accounts: Sequence[AccountIdentifier | None]) -> None:
    """
    Проверка массива аккаунтов: непустой, каждый валиден, без повторов.

    Args:
        name: Имя массива для диагностики (например, "signers")
        accounts: Аккаунты
    """
    if not accounts:
        raise AsserterError(ErrorKind.ACCOUNT_ARRAY_EMPTY, f"{name} is empty", name=name)

    seen: set[str] = set()
    for account in accounts:
        try:
            account_identifier(account)
        except AsserterError as err:
            raise err.wrap(f"{name} account identifier {print_struct(account)} is invalid")

        key = hash_struct(account)
        if key in seen:
            raise AsserterError(
                ErrorKind.ACCOUNT_ARRAY_DUPLICATE_ACCOUNT,
                f"{name} contains duplicate account {print_struct(account)}",
                name=name,
            )
        seen.add(key)


def assert_unique_amounts(amounts: Sequence[Amount | None] | None) -> None:
    """Каждая сумма валидна, валюты не повторяются."""
    seen: set[str] = set()
    for value in amounts or ():
        try:
            amount(value)
        except AsserterError as err:
            raise err.wrap(f"amount {print_struct(value)} is invalid")

        key = hash_struct(value.currency)
        if key in seen:
            raise AsserterError(
                ErrorKind.DUPLICATE_CURRENCY,
                f"currency {print_struct(value.currency)}",
            )
        seen.add(key)


# =============================================================================
# RESPONSES
# =============================================================================


def construction_preprocess_response(response: ConstructionPreprocessResponse | None) -> None:
    """Все required_public_keys — валидные AccountIdentifier."""
    if response is None:
        raise AsserterError(ErrorKind.CONSTRUCTION_PREPROCESS_RESPONSE_IS_NIL)

    for account in response.required_public_keys or ():
        try:
            account_identifier(account)
        except AsserterError as err:
            raise err.wrap(f"account identifier {print_struct(account)} is invalid")


def construction_metadata_response(response: ConstructionMetadataResponse | None) -> None:
    """metadata задана, suggested_fee без повторяющихся валют."""
    if response is None:
        raise AsserterError(ErrorKind.CONSTRUCTION_METADATA_RESPONSE_IS_NIL)

    if response.metadata is None:
        raise AsserterError(ErrorKind.CONSTRUCTION_METADATA_RESPONSE_METADATA_MISSING)

    try:
        assert_unique_amounts(response.suggested_fee)
    except AsserterError as err:
        raise err.wrap(f"suggested fee {print_struct(response.suggested_fee)} is invalid")


def transaction_identifier_response(response: TransactionIdentifierResponse | None) -> None:
    if response is None:
        raise AsserterError(ErrorKind.TX_IDENTIFIER_RESPONSE_IS_NIL)

    try:
        transaction_identifier(response.transaction_identifier)
    except AsserterError as err:
        raise err.wrap(
            f"transaction identifier {print_struct(response.transaction_identifier)} is invalid"
        )


def construction_combine_response(response: ConstructionCombineResponse | None) -> None:
    if response is None:
        raise AsserterError(ErrorKind.CONSTRUCTION_COMBINE_RESPONSE_IS_NIL)

    if not response.signed_transaction:
        raise AsserterError(ErrorKind.SIGNED_TX_EMPTY)


def construction_derive_response(response: ConstructionDeriveResponse | None) -> None:
    if response is None:
        raise AsserterError(ErrorKind.CONSTRUCTION_DERIVE_RESPONSE_IS_NIL)

    try:
        account_identifier(response.account_identifier)
    except AsserterError as err:
        raise err.wrap(
            f"account identifier {print_struct(response.account_identifier)} is invalid"
        )


def construction_payloads_response(response: ConstructionPayloadsResponse | None) -> None:
    """Неподписанная транзакция и хотя бы один валидный payload."""
    if response is None:
        raise AsserterError(ErrorKind.CONSTRUCTION_PAYLOADS_RESPONSE_IS_NIL)

    if not response.unsigned_transaction:
        raise AsserterError(ErrorKind.CONSTRUCTION_PAYLOADS_RESPONSE_UNSIGNED_TX_EMPTY)

    if not response.payloads:
        raise AsserterError(ErrorKind.CONSTRUCTION_PAYLOADS_RESPONSE_PAYLOADS_EMPTY)

    for payload in response.payloads:
        try:
            signing_payload(payload)
        except AsserterError as err:
            raise err.wrap(f"signing payload {print_struct(payload)} is invalid")


# =============================================================================
# KEYS AND SIGNATURES
# =============================================================================


def curve_type(curve: str) -> None:
    if curve not in _CURVE_TYPES:
        raise AsserterError(ErrorKind.CURVE_TYPE_NOT_SUPPORTED, f"curve type {curve!r}")


def signature_type(signature: str) -> None:
    if signature not in _SIGNATURE_TYPES:
        raise AsserterError(
            ErrorKind.SIGNATURE_TYPE_NOT_SUPPORTED, f"signature type {signature!r}"
        )


def public_key(key: PublicKey | None) -> None:
    """Непустые, ненулевые байты и поддерживаемая кривая."""
    if key is None:
        raise AsserterError(ErrorKind.PUBLIC_KEY_IS_NIL)

    if not key.hex_bytes:
        raise AsserterError(ErrorKind.PUBLIC_KEY_BYTES_EMPTY)

    if bytes_array_zero(key.hex_bytes):
        raise AsserterError(ErrorKind.PUBLIC_KEY_BYTES_ZERO)

    try:
        curve_type(key.curve_type)
    except AsserterError as err:
        raise err.wrap(f"public key curve type {key.curve_type!r} is invalid")


def signing_payload(payload: SigningPayload | None) -> None:
    """
    Проверка SigningPayload.

    signature_type опционален; если задан, должен поддерживаться.
    """
    if payload is None:
        raise AsserterError(ErrorKind.SIGNING_PAYLOAD_IS_NIL)

    try:
        account_identifier(payload.account_identifier)
    except AsserterError as err:
        raise err.wrap(
            f"account identifier {print_struct(payload.account_identifier)} is invalid"
        )

    if not payload.hex_bytes:
        raise AsserterError(ErrorKind.SIGNING_PAYLOAD_BYTES_EMPTY)

    if bytes_array_zero(payload.hex_bytes):
        raise AsserterError(ErrorKind.SIGNING_PAYLOAD_BYTES_ZERO)

    if not payload.signature_type:
        return

    try:
        signature_type(payload.signature_type)
    except AsserterError as err:
        raise err.wrap(f"signature type {payload.signature_type!r} is invalid")


def signatures(items: Sequence[Signature] | None) -> None:
    """
    Проверка подписей.

    Тип возвращённой подписи обязан совпадать с запрошенным в payload
    (если он был запрошен).
    """
    if not items:
        raise AsserterError(ErrorKind.SIGNATURES_EMPTY)

    for item in items:
        try:
            signing_payload(item.signing_payload)
        except AsserterError as err:
            raise err.wrap(f"signing payload {print_struct(item.signing_payload)} is invalid")

        try:
            public_key(item.public_key)
        except AsserterError as err:
            raise err.wrap(f"public key {print_struct(item.public_key)} is invalid")

        try:
            signature_type(item.signature_type)
        except AsserterError as err:
            raise err.wrap(f"signature type {item.signature_type!r} is invalid")

        requested = item.signing_payload.signature_type
        if requested and requested != item.signature_type:
            raise AsserterError(
                ErrorKind.SIGNATURES_RETURNED_SIG_MISMATCH,
                f"requested {requested} but got {item.signature_type}",
                expected=requested,
                actual=item.signature_type,
            )

        if not item.hex_bytes:
            raise AsserterError(ErrorKind.SIGNATURE_BYTES_EMPTY)

        if bytes_array_zero(item.hex_bytes):
            raise AsserterError(ErrorKind.SIGNATURE_BYTES_ZERO)
