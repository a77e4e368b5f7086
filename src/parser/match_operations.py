"""
Match Operations — сопоставление операций с описаниями

Алгоритм (один проход слева направо, O(operations × descriptions)):
1. Для каждой операции описания просматриваются по порядку
2. Описание с уже найденной операцией пропускается, если не allow_repeats
3. Операция присоединяется к первому подходящему описанию (first-fit)
4. Не найдено описание и err_unmatched → ошибка с позицией операции
5. Обязательное (не optional) описание без операций → ошибка
6. Групповые ограничения: equal amounts → equal addresses →
   opposite amounts → opposite-or-zero amounts

Matcher жадный и не делает backtracking: порядок операций и точность
описаний — ответственность вызывающего кода.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping, Sequence

from src.core.domain import (
    AccountIdentifier,
    Amount,
    CoinChange,
    Currency,
    Operation,
    SubAccountIdentifier,
    hash_struct,
    print_struct,
)
from src.core.errors import ErrorKind, ParserError
from src.core.math import amount_value, parse_big_int, sign


# =============================================================================
# AMOUNT SIGN
# =============================================================================


class AmountSign(int, Enum):
    """Требуемый знак суммы"""

    ANY = 0
    NEGATIVE = 1
    POSITIVE = 2
    POSITIVE_OR_ZERO = 3
    NEGATIVE_OR_ZERO = 4

    def matches(self, amount: Amount | None) -> bool:
        """
        Удовлетворяет ли сумма знаку.

        ANY — всегда True; для остальных отсутствующая или нечисловая
        сумма не подходит.
        """
        if self is AmountSign.ANY:
            return True

        value = parse_big_int(amount.value) if amount is not None else None
        if value is None:
            return False

        return sign(value) in _ALLOWED_SIGNS[self]

    def __str__(self) -> str:
        return _SIGN_NAMES[self]


_ALLOWED_SIGNS: Mapping[AmountSign, frozenset[int]] = {
    AmountSign.NEGATIVE: frozenset({-1}),
    AmountSign.POSITIVE: frozenset({1}),
    AmountSign.POSITIVE_OR_ZERO: frozenset({0, 1}),
    AmountSign.NEGATIVE_OR_ZERO: frozenset({-1, 0}),
}

_SIGN_NAMES: Mapping[AmountSign, str] = {
    AmountSign.ANY: "any",
    AmountSign.NEGATIVE: "negative",
    AmountSign.POSITIVE: "positive",
    AmountSign.POSITIVE_OR_ZERO: "positive or zero",
    AmountSign.NEGATIVE_OR_ZERO: "negative or zero",
}


# =============================================================================
# DESCRIPTIONS
# =============================================================================


@dataclass(frozen=True)
class MetadataDescription:
    """Ключ обязан присутствовать, type(value) is value_kind."""

    key: str
    value_kind: type


@dataclass(frozen=True)
class AccountDescription:
    """Требования к AccountIdentifier операции."""

    exists: bool = False
    sub_account_exists: bool = False
    sub_account_optional: bool = False
    sub_account_address: str = ""
    sub_account_metadata_keys: Sequence[MetadataDescription] = ()


@dataclass(frozen=True)
class AmountDescription:
    """Требования к Amount операции (currency=None — любая)."""

    exists: bool = False
    sign: AmountSign = AmountSign.ANY
    currency: Currency | None = None


@dataclass(frozen=True)
class OperationDescription:
    """
    Описание желаемой операции.

    Незаполненные поля (None, "", пустой список) не ограничивают операцию.
    """

    account: AccountDescription | None = None
    amount: AmountDescription | None = None
    metadata: Sequence[MetadataDescription] = ()
    type: str = ""
    allow_repeats: bool = False
    optional: bool = False
    coin_action: str = ""


@dataclass(frozen=True)
class Descriptions:
    """
    Набор описаний и групповых ограничений.

    Группы задаются индексами в operation_descriptions. Группы opposite_*
    обязаны содержать ровно два индекса.
    """

    operation_descriptions: Sequence[OperationDescription] = ()
    equal_amounts: Sequence[Sequence[int]] = ()
    opposite_amounts: Sequence[Sequence[int]] = ()
    opposite_or_zero_amounts: Sequence[Sequence[int]] = ()
    equal_addresses: Sequence[Sequence[int]] = ()
    err_unmatched: bool = False


@dataclass
class Match:
    """
    Операции, сопоставленные одному описанию, и их разобранные суммы.

    amounts имеет ту же длину, что и operations; None — у операции нет суммы.
    """

    operations: list[Operation] = field(default_factory=list)
    amounts: list[int | None] = field(default_factory=list)

    def first(self) -> tuple[Operation | None, int | None]:
        """Первая операция и её сумма (для описаний без allow_repeats)."""
        if self.operations:
            return self.operations[0], self.amounts[0]
        return None, None


# =============================================================================
# FIELD MATCHERS
# =============================================================================


def metadata_match(
    requirements: Sequence[MetadataDescription],
    metadata: Mapping[str, Any] | None,
) -> None:
    if not requirements:
        return

    metadata = metadata or {}
    for req in requirements:
        if req.key not in metadata:
            raise ParserError(
                ErrorKind.METADATA_MATCH_KEY_NOT_FOUND,
                f"key {req.key!r} not present in metadata {print_struct(metadata)}",
                key=req.key,
            )

        value = metadata[req.key]
        if type(value) is not req.value_kind:
            raise ParserError(
                ErrorKind.METADATA_MATCH_KEY_VALUE_MISMATCH,
                f"value {value!r} of key {req.key!r} is not {req.value_kind.__name__}",
                key=req.key,
                expected=req.value_kind.__name__,
                actual=type(value).__name__,
            )


def _verify_sub_account_address(address: str, sub_account: SubAccountIdentifier) -> None:
    if address and sub_account.address != address:
        raise ParserError(
            ErrorKind.ACCOUNT_MATCH_UNEXPECTED_SUB_ACCOUNT_ADDR,
            f"expected sub account address {address} but got {sub_account.address}",
            expected=address,
            actual=sub_account.address,
        )


def account_match(req: AccountDescription | None, account: AccountIdentifier | None) -> None:
    """
    Проверка AccountIdentifier против описания.

    sub_account_optional: sub-account может отсутствовать; если он есть,
    проверяется только адрес.
    """
    if req is None:
        return

    if account is None:
        if req.exists:
            raise ParserError(ErrorKind.ACCOUNT_MATCH_ACCOUNT_MISSING)
        return

    if req.sub_account_optional:
        if account.sub_account is not None:
            _verify_sub_account_address(req.sub_account_address, account.sub_account)
        return

    if account.sub_account is None:
        if req.sub_account_exists:
            raise ParserError(ErrorKind.ACCOUNT_MATCH_SUB_ACCOUNT_MISSING)
        return

    if not req.sub_account_exists:
        raise ParserError(
            ErrorKind.ACCOUNT_MATCH_SUB_ACCOUNT_POPULATED,
            f"sub account {print_struct(account.sub_account)}",
        )

    _verify_sub_account_address(req.sub_account_address, account.sub_account)

    try:
        metadata_match(req.sub_account_metadata_keys, account.sub_account.metadata)
    except ParserError as err:
        raise err.wrap("sub account metadata keys mismatch")


def amount_match(req: AmountDescription | None, amount: Amount | None) -> None:
    """Существование, знак и (если задана) валюта суммы."""
    if req is None:
        return

    if amount is None:
        if req.exists:
            raise ParserError(ErrorKind.AMOUNT_MATCH_AMOUNT_MISSING)
        return

    if not req.exists:
        raise ParserError(
            ErrorKind.AMOUNT_MATCH_AMOUNT_POPULATED, f"amount {print_struct(amount)}"
        )

    if not req.sign.matches(amount):
        raise ParserError(
            ErrorKind.AMOUNT_MATCH_UNEXPECTED_SIGN,
            f"expected {req.sign!s} but got {amount.value}",
            expected=str(req.sign),
            actual=amount.value,
        )

    if req.currency is None:
        return

    if amount.currency is None or hash_struct(amount.currency) != hash_struct(req.currency):
        raise ParserError(
            ErrorKind.AMOUNT_MATCH_UNEXPECTED_CURRENCY,
            f"expected {print_struct(req.currency)} but got {print_struct(amount.currency)}",
        )


def coin_action_match(required: str, coin_change: CoinChange | None) -> None:
    if not required:
        return

    if coin_change is None:
        raise ParserError(
            ErrorKind.COIN_ACTION_MATCH_COIN_CHANGE_IS_NIL, f"expected {required}"
        )

    if coin_change.coin_action != required:
        raise ParserError(
            ErrorKind.COIN_ACTION_MATCH_UNEXPECTED_COIN_ACTION,
            f"expected {required} but got {coin_change.coin_action}",
            expected=required,
            actual=coin_change.coin_action,
        )


def _operation_match(
    operation: Operation,
    descriptions: Sequence[OperationDescription],
    matches: list[Match],
) -> bool:
    """Присоединение операции к первому подходящему описанию."""
    for i, des in enumerate(descriptions):
        if matches[i].operations and not des.allow_repeats:
            continue

        if des.type and des.type != operation.type:
            continue

        try:
            account_match(des.account, operation.account)
            amount_match(des.amount, operation.amount)
            metadata_match(des.metadata, operation.metadata)
            coin_action_match(des.coin_action, operation.coin_change)
        except ParserError:
            continue

        value = None
        if operation.amount is not None:
            try:
                value = amount_value(operation.amount)
            except ValueError:
                continue

        matches[i].operations.append(operation)
        matches[i].amounts.append(value)
        return True

    return False


# =============================================================================
# GROUP CONSTRAINTS
# =============================================================================


def _value(operation: Operation) -> int:
    try:
        return amount_value(operation.amount)
    except ValueError as e:
        raise ParserError(
            ErrorKind.MATCH_AMOUNT_INVALID,
            f"{print_struct(operation.amount)}: {e}",
        )


def equal_amounts(operations: Sequence[Operation]) -> None:
    """Все операции имеют одинаковую сумму."""
    if not operations:
        raise ParserError(ErrorKind.EQUAL_AMOUNTS_NO_OPERATIONS)

    base = _value(operations[0])
    for op in operations[1:]:
        value = _value(op)
        if value != base:
            raise ParserError(
                ErrorKind.EQUAL_AMOUNTS_NOT_EQUAL,
                f"{value} is not equal to {base}",
                expected=base,
                actual=value,
            )


def equal_addresses(operations: Sequence[Operation]) -> None:
    """Больше одной операции, у всех задан аккаунт с одинаковым адресом."""
    if len(operations) <= 1:
        raise ParserError(
            ErrorKind.EQUAL_ADDRESSES_TOO_FEW_OPERATIONS, f"got {len(operations)} operations"
        )

    base = ""
    for op in operations:
        if op.account is None:
            raise ParserError(ErrorKind.EQUAL_ADDRESSES_ACCOUNT_IS_NIL)

        if not base:
            base = op.account.address
            continue

        if op.account.address != base:
            raise ParserError(
                ErrorKind.EQUAL_ADDRESSES_ADDR_MISMATCH,
                f"{op.account.address} is not equal to {base}",
                expected=base,
                actual=op.account.address,
            )


def opposite_amounts(a: Operation, b: Operation) -> None:
    """Противоположные знаки, равные абсолютные значения."""
    a_val = _value(a)
    b_val = _value(b)

    if sign(a_val) == sign(b_val):
        raise ParserError(
            ErrorKind.OPPOSITE_AMOUNTS_SAME_SIGN, f"{a_val} and {b_val} have the same sign"
        )

    if abs(a_val) != abs(b_val):
        raise ParserError(
            ErrorKind.OPPOSITE_AMOUNTS_ABS_VAL_MISMATCH,
            f"{a_val} and {b_val} have different absolute values",
        )


def opposite_or_zero_amounts(a: Operation, b: Operation) -> None:
    """Как opposite_amounts, но две нулевые суммы тоже допустимы."""
    if _value(a) == 0 and _value(b) == 0:
        return
    opposite_amounts(a, b)


def _group_operations(matches: Sequence[Match], indices: Sequence[int]) -> list[Operation]:
    operations: list[Operation] = []
    for idx in indices:
        if not 0 <= idx < len(matches):
            raise ParserError(
                ErrorKind.MATCH_INDEX_OUT_OF_RANGE,
                f"index {idx} with {len(matches)} descriptions",
                index=idx,
            )
        if not matches[idx].operations:
            raise ParserError(ErrorKind.MATCH_INDEX_GROUP_EMPTY, f"description {idx}", index=idx)
        operations.extend(matches[idx].operations)
    return operations


def _check_groups(
    groups: Sequence[Sequence[int]],
    matches: Sequence[Match],
    check: Callable[[Sequence[Operation]], None],
) -> None:
    for indices in groups:
        operations = _group_operations(matches, indices)
        try:
            check(operations)
        except ParserError as err:
            raise err.wrap(f"group {list(indices)}")


def _compare_opposite_groups(
    groups: Sequence[Sequence[int]],
    matches: Sequence[Match],
    compare: Callable[[Operation, Operation], None],
) -> None:
    for indices in groups:
        if len(indices) != 2:
            raise ParserError(
                ErrorKind.OPPOSITE_AMOUNTS_GROUP_SIZE_INVALID,
                f"group {list(indices)} has {len(indices)} indices",
            )

        pair: list[Operation] = []
        for idx in indices:
            operations = _group_operations(matches, (idx,))
            try:
                equal_amounts(operations)
            except ParserError as err:
                raise err.wrap(f"amounts of description {idx} are not equal")
            pair.append(operations[0])

        try:
            compare(pair[0], pair[1])
        except ParserError as err:
            raise err.wrap(f"group {list(indices)}")


def _comparison_match(descriptions: Descriptions, matches: Sequence[Match]) -> None:
    try:
        _check_groups(descriptions.equal_amounts, matches, equal_amounts)
    except ParserError as err:
        raise err.wrap("operation amounts are not equal")

    try:
        _check_groups(descriptions.equal_addresses, matches, equal_addresses)
    except ParserError as err:
        raise err.wrap("operation addresses are not equal")

    try:
        _compare_opposite_groups(descriptions.opposite_amounts, matches, opposite_amounts)
    except ParserError as err:
        raise err.wrap("operation amounts are not opposite")

    try:
        _compare_opposite_groups(
            descriptions.opposite_or_zero_amounts, matches, opposite_or_zero_amounts
        )
    except ParserError as err:
        raise err.wrap("operation amounts are not opposite and not zero")


# =============================================================================
# MATCH OPERATIONS
# =============================================================================


def match_operations(descriptions: Descriptions, operations: Sequence[Operation]) -> list[Match]:
    """
    Сопоставление операций с описаниями.

    Args:
        descriptions: Описания и групповые ограничения
        operations: Операции транзакции

    Returns:
        Список Match в порядке operation_descriptions (пустой Match для
        несопоставленных optional описаний)

    Raises:
        ParserError: Первое нарушенное условие
    """
    if not operations:
        raise ParserError(ErrorKind.MATCH_OPERATIONS_NO_OPERATIONS)

    op_descriptions = descriptions.operation_descriptions
    if not op_descriptions:
        raise ParserError(ErrorKind.MATCH_OPERATIONS_DESCRIPTIONS_MISSING)

    matches = [Match() for _ in op_descriptions]

    for i, op in enumerate(operations):
        if not _operation_match(op, op_descriptions, matches) and descriptions.err_unmatched:
            raise ParserError(
                ErrorKind.MATCH_OPERATIONS_MATCH_NOT_FOUND,
                f"at index {i}: {print_struct(op)}",
                index=i,
            )

    for i, match in enumerate(matches):
        if not match.operations and not op_descriptions[i].optional:
            raise ParserError(
                ErrorKind.MATCH_OPERATIONS_DESCRIPTION_NOT_MATCHED,
                f"description {i}",
                index=i,
            )

    _comparison_match(descriptions, matches)
    return matches
