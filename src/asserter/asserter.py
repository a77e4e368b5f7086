"""
Asserter — Validation Engine

Проверяет граф Block → Transaction → Operation на соответствие инвариантам
data API и поднимает первый нарушенный (fail-fast, depth-first,
left-to-right).

Конфигурация (каталоги типов/статусов/ошибок, genesis, timestamp start
index, validation profile, strict/lenient) передаётся явно и замораживается
в __init__: lookup-таблицы — frozenset / MappingProxyType. Экземпляр можно
разделять между потоками без блокировок; несколько Asserter с разными
профилями сосуществуют независимо.
"""

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Sequence

from src.core.domain import (
    Block,
    BlockIdentifier,
    ConstructionParseResponse,
    ErrorDescriptor,
    Operation,
    RelatedTransaction,
    Transaction,
    print_struct,
)
from src.core.errors import AsserterError, ErrorKind
from src.core.math import big_int

from . import block as checks
from .config import AsserterConfig, ChainType, ValidationProfile, load_asserter_config
from .construction import account_array
from .error import error as error_structure


logger = logging.getLogger(__name__)


class Asserter:
    """
    Validation Engine с замороженной конфигурацией.

    Порядок проверок Block:
    1. block_identifier и parent_block_identifier
    2. hash/index монотонность (кроме высоты genesis)
    3. timestamp (strict mode, начиная с timestamp_start_index)
    4. каждая транзакция → операции → related transactions
    """

    def __init__(self, config: AsserterConfig):
        """
        Args:
            config: Поддерживаемые опции интеграции (см. AsserterConfig)
        """
        self._config = config
        self._operation_types: frozenset[str] = frozenset(config.allowed_operation_types)
        self._operation_status_map: Mapping[str, bool] = MappingProxyType(
            {s.status: s.successful for s in config.allowed_operation_statuses}
        )
        self._error_type_map: Mapping[int, ErrorDescriptor] = MappingProxyType(
            {e.code: e for e in config.allowed_errors}
        )
        self._genesis_block = config.genesis_block_identifier

        if config.allowed_timestamp_start_index is not None:
            self._timestamp_start_index = config.allowed_timestamp_start_index
        elif self._genesis_block is not None:
            self._timestamp_start_index = self._genesis_block.index + 1
        else:
            self._timestamp_start_index = 0

        logger.debug(
            "Asserter initialized: operation_types=%d, operation_statuses=%d, errors=%d, "
            "genesis_index=%s, timestamp_start_index=%d, strict=%s, validations_enabled=%s",
            len(self._operation_types),
            len(self._operation_status_map),
            len(self._error_type_map),
            self._genesis_block.index if self._genesis_block is not None else None,
            self._timestamp_start_index,
            config.strict,
            config.validation.enabled,
        )

    @classmethod
    def from_file(cls, path: str | Path) -> "Asserter":
        """Asserter из JSON файла конфигурации (см. load_asserter_config)."""
        return cls(load_asserter_config(path))

    # =========================================================================
    # CONFIGURATION (read-only)
    # =========================================================================

    @property
    def config(self) -> AsserterConfig:
        return self._config

    @property
    def strict(self) -> bool:
        return self._config.strict

    @property
    def genesis_block(self) -> BlockIdentifier | None:
        return self._genesis_block

    @property
    def timestamp_start_index(self) -> int:
        return self._timestamp_start_index

    @property
    def validations(self) -> ValidationProfile:
        return self._config.validation

    # =========================================================================
    # OPERATIONS
    # =========================================================================

    def operation_status(self, status: str | None, construction: bool) -> None:
        """
        Проверка Operation.Status.

        Правила асимметричны:
        - construction: статус обязан быть пустым (пустой — валиден)
        - иначе: пустой статус — ошибка; неизвестный статус — ошибка
          только в strict mode
        """
        if not status:
            if construction:
                return
            raise AsserterError(ErrorKind.OPERATION_STATUS_MISSING)

        if construction:
            raise AsserterError(
                ErrorKind.OPERATION_STATUS_NOT_EMPTY_FOR_CONSTRUCTION,
                f"operation status {status!r}",
                status=status,
            )

        if self.strict and status not in self._operation_status_map:
            raise AsserterError(
                ErrorKind.OPERATION_STATUS_INVALID,
                f"operation status {status!r}",
                status=status,
            )

    def operation_type(self, op_type: str) -> None:
        """Тип непустой и (strict mode) присутствует в каталоге."""
        if not op_type or (self.strict and op_type not in self._operation_types):
            raise AsserterError(
                ErrorKind.OPERATION_TYPE_INVALID,
                f"operation type {op_type!r}",
                type=op_type,
            )

    def operation_successful(self, operation: Operation) -> bool:
        """
        Признак успешности операции по каталогу статусов.

        Raises:
            AsserterError: Если статус отсутствует или (strict mode) неизвестен
        """
        self.operation_status(operation.status, False)
        return self._operation_status_map.get(operation.status, False)

    def operation(self, operation: Operation | None, index: int, construction: bool) -> None:
        """
        Проверка одной операции.

        identifier → type → status; если задан amount — account и amount;
        если при этом задан coin_change — coin_change.

        Args:
            operation: Операция
            index: Ожидаемый индекс (позиция в транзакции)
            construction: Контекст construction API
        """
        if operation is None:
            raise AsserterError(ErrorKind.OPERATION_IS_NIL, index=index)

        try:
            checks.operation_identifier(operation.operation_identifier, index)
        except AsserterError as err:
            raise err.wrap(
                f"operation identifier {print_struct(operation.operation_identifier)} "
                f"is invalid in operation {index}"
            )

        try:
            self.operation_type(operation.type)
        except AsserterError as err:
            raise err.wrap(f"operation type {operation.type!r} is invalid in operation {index}")

        try:
            self.operation_status(operation.status, construction)
        except AsserterError as err:
            raise err.wrap(
                f"operation status {operation.status!r} is invalid in operation {index}"
            )

        if operation.amount is None:
            return

        try:
            checks.account_identifier(operation.account)
        except AsserterError as err:
            raise err.wrap(
                f"operation account identifier {print_struct(operation.account)} "
                f"is invalid in operation {index}"
            )

        try:
            checks.amount(operation.amount)
        except AsserterError as err:
            raise err.wrap(
                f"operation amount {print_struct(operation.amount)} is invalid in operation {index}"
            )

        if operation.coin_change is None:
            return

        try:
            checks.coin_change(operation.coin_change)
        except AsserterError as err:
            raise err.wrap(
                f"operation coin change {print_struct(operation.coin_change)} "
                f"is invalid in operation {index}"
            )

    def operations(self, operations: Sequence[Operation | None], construction: bool) -> None:
        """
        Проверка списка операций транзакции.

        1. Каждая операция валидна, её индекс равен позиции в списке
        2. related_operations ссылаются только назад и без повторов
        3. Payment/fee профиль (если включён): fee без related_operations и
           со строго отрицательной суммой; count/balance для account-модели
        4. related_ops_exists: хотя бы одна связь в списке
        """
        if not operations and construction:
            raise AsserterError(ErrorKind.NO_OPERATIONS_FOR_CONSTRUCTION)

        validations = self.validations
        payment_total = 0
        fee_total = 0
        payment_count = 0
        fee_count = 0
        related_ops_exists = False

        for i, op in enumerate(operations):
            try:
                self.operation(op, i, construction)
            except AsserterError as err:
                raise err.wrap(f"operation {print_struct(op)} is invalid")

            if validations.enabled:
                if op.type == validations.payment.name:
                    payment_total += self._operation_value(op, i)
                    payment_count += 1

                if op.type == validations.fee.name:
                    if op.related_operations is not None:
                        raise AsserterError(
                            ErrorKind.RELATED_OPERATION_IN_FEE_NOT_ALLOWED,
                            f"operation {print_struct(op)} is invalid with operation index {i}",
                            index=i,
                        )

                    value = self._operation_value(op, i)
                    if value >= 0:
                        raise AsserterError(
                            ErrorKind.FEE_AMOUNT_NOT_NEGATIVE,
                            f"operation {print_struct(op)} is invalid with operation index {i}",
                            index=i,
                            value=value,
                        )

                    fee_total += value
                    fee_count += 1

            op_index = op.operation_identifier.index
            related_indexes: set[int] = set()
            for related in op.related_operations or ():
                related_ops_exists = True
                if related.index >= op_index:
                    raise AsserterError(
                        ErrorKind.RELATED_OPERATION_INDEX_OUT_OF_ORDER,
                        f"related operation index {related.index} >= operation index {op_index}",
                        index=op_index,
                        related_index=related.index,
                    )

                if related.index in related_indexes:
                    raise AsserterError(
                        ErrorKind.RELATED_OPERATION_INDEX_DUPLICATE,
                        f"related operation index {related.index} found for operation index "
                        f"{op_index}",
                        index=op_index,
                        related_index=related.index,
                    )
                related_indexes.add(related.index)

        if not related_ops_exists and validations.enabled and validations.related_ops_exists:
            raise AsserterError(ErrorKind.RELATED_OPERATION_MISSING)

        if validations.enabled and validations.chain_type == ChainType.ACCOUNT:
            self.validate_payment_and_fee(payment_total, payment_count, fee_total, fee_count)

    def validate_payment_and_fee(
        self,
        payment_total: int,
        payment_count: int,
        fee_total: int,
        fee_count: int,
    ) -> None:
        """Агрегатные count/balance проверки account-модели."""
        payment = self.validations.payment.operation
        fee = self.validations.fee.operation

        if payment.count != -1 and payment.count != payment_count:
            raise AsserterError(
                ErrorKind.PAYMENT_COUNT_MISMATCH,
                f"expected {payment.count} payment operations but got {payment_count}",
                expected=payment.count,
                actual=payment_count,
            )

        if payment.should_balance and payment_total != 0:
            raise AsserterError(
                ErrorKind.PAYMENT_AMOUNT_NOT_BALANCING,
                f"payment total {payment_total}",
                total=payment_total,
            )

        if fee.count != -1 and fee.count != fee_count:
            raise AsserterError(
                ErrorKind.FEE_COUNT_MISMATCH,
                f"expected {fee.count} fee operations but got {fee_count}",
                expected=fee.count,
                actual=fee_count,
            )

        if fee.should_balance and fee_total != 0:
            raise AsserterError(
                ErrorKind.FEE_AMOUNT_NOT_BALANCING,
                f"fee total {fee_total}",
                total=fee_total,
            )

    @staticmethod
    def _operation_value(op: Operation, index: int) -> int:
        # Payment и fee операции обязаны нести сумму
        try:
            checks.amount(op.amount)
        except AsserterError as err:
            raise err.wrap(f"operation {index} of type {op.type!r} requires an amount")
        return big_int(op.amount.value)

    # =========================================================================
    # TRANSACTIONS
    # =========================================================================

    def direction(self, value: str) -> None:
        checks.direction(value)

    def related_transactions(self, items: Sequence[RelatedTransaction] | None) -> None:
        """
        Проверка связанных транзакций.

        Первый структурный дубликат отклоняется; для каждой записи —
        network identifier (если задан), transaction identifier, direction.
        """
        duplicate = checks.duplicate_related_transaction(items)
        if duplicate is not None:
            raise AsserterError(
                ErrorKind.DUPLICATE_RELATED_TRANSACTION,
                f"related transaction {print_struct(duplicate)}",
            )

        for i, related in enumerate(items or ()):
            if related.network_identifier is not None:
                try:
                    checks.network_identifier(related.network_identifier)
                except AsserterError as err:
                    raise err.wrap(
                        f"network identifier {print_struct(related.network_identifier)} "
                        f"is invalid in related transaction at index {i}"
                    )

            try:
                checks.transaction_identifier(related.transaction_identifier)
            except AsserterError as err:
                raise err.wrap(
                    f"invalid transaction identifier "
                    f"{print_struct(related.transaction_identifier)} "
                    f"in related transaction at index {i}"
                )

            try:
                self.direction(related.direction)
            except AsserterError as err:
                raise err.wrap(
                    f"invalid direction {related.direction!r} in related transaction at index {i}"
                )

    def transaction(self, transaction: Transaction | None) -> None:
        """Identifier, операции (не construction) и связанные транзакции."""
        if transaction is None:
            raise AsserterError(ErrorKind.TX_IS_NIL)

        try:
            checks.transaction_identifier(transaction.transaction_identifier)
        except AsserterError as err:
            raise err.wrap(
                f"transaction identifier {print_struct(transaction.transaction_identifier)} "
                f"is invalid"
            )

        tx_hash = transaction.transaction_identifier.hash

        try:
            self.operations(transaction.operations, False)
        except AsserterError as err:
            raise err.wrap(f"invalid operation in transaction {tx_hash}")

        try:
            self.related_transactions(transaction.related_transactions)
        except AsserterError as err:
            raise err.wrap(f"invalid related transaction in transaction {tx_hash}")

    # =========================================================================
    # BLOCKS
    # =========================================================================

    def block(self, block: Block | None) -> None:
        """
        Проверка блока.

        Монотонность hash/index пропускается только на высоте genesis.
        Timestamp проверяется в strict mode начиная с timestamp_start_index.
        """
        if block is None:
            raise AsserterError(ErrorKind.BLOCK_IS_NIL)

        try:
            checks.block_identifier(block.block_identifier)
        except AsserterError as err:
            raise err.wrap(
                f"block identifier {print_struct(block.block_identifier)} is invalid"
            )

        try:
            checks.block_identifier(block.parent_block_identifier)
        except AsserterError as err:
            raise err.wrap(
                f"parent block identifier {print_struct(block.parent_block_identifier)} "
                f"is invalid"
            )

        current = block.block_identifier
        parent = block.parent_block_identifier

        if self._genesis_block is None or self._genesis_block.index != current.index:
            if current.hash == parent.hash:
                raise AsserterError(
                    ErrorKind.BLOCK_HASH_EQUALS_PARENT_BLOCK_HASH,
                    f"block {current.index} hash {current.hash}",
                    hash=current.hash,
                )

            if current.index <= parent.index:
                raise AsserterError(
                    ErrorKind.BLOCK_INDEX_PRECEDES_PARENT_BLOCK_INDEX,
                    f"block index {current.index} <= parent index {parent.index}",
                    index=current.index,
                    parent_index=parent.index,
                )

        if self.strict and self._timestamp_start_index <= current.index:
            try:
                checks.timestamp(block.timestamp)
            except AsserterError as err:
                raise err.wrap(f"timestamp {block.timestamp} of block {current.index} is invalid")

        for transaction in block.transactions:
            try:
                self.transaction(transaction)
            except AsserterError as err:
                raise err.wrap(f"transaction is invalid in block {current.index}")

    # =========================================================================
    # ERRORS
    # =========================================================================

    def error(self, err: ErrorDescriptor | None) -> None:
        """
        Проверка ошибки интеграции по каталогу.

        Структурная проверка всегда; сверка кода, сообщения и retriable —
        только в strict mode.
        """
        error_structure(err)

        if not self.strict:
            return

        expected = self._error_type_map.get(err.code)
        if expected is None:
            raise AsserterError(ErrorKind.ERROR_UNEXPECTED_CODE, f"code {err.code}", code=err.code)

        if expected.message != err.message:
            raise AsserterError(
                ErrorKind.ERROR_MESSAGE_MISMATCH,
                f"expected {expected.message!r} actual {err.message!r}",
                code=err.code,
                expected=expected.message,
                actual=err.message,
            )

        if expected.retriable != err.retriable:
            raise AsserterError(
                ErrorKind.ERROR_RETRIABLE_MISMATCH,
                f"code {err.code} expected retriable={expected.retriable} "
                f"actual retriable={err.retriable}",
                code=err.code,
                expected=expected.retriable,
                actual=err.retriable,
            )

    # =========================================================================
    # CONSTRUCTION
    # =========================================================================

    def construction_parse_response(
        self,
        response: ConstructionParseResponse | None,
        signed: bool,
    ) -> None:
        """
        Проверка ответа /construction/parse.

        Операции проверяются в construction-контексте; подписанты обязаны
        присутствовать ровно тогда, когда транзакция подписана.
        """
        if response is None:
            raise AsserterError(ErrorKind.CONSTRUCTION_PARSE_RESPONSE_IS_NIL)

        if not response.operations:
            raise AsserterError(ErrorKind.CONSTRUCTION_PARSE_RESPONSE_OPERATIONS_EMPTY)

        try:
            self.operations(response.operations, True)
        except AsserterError as err:
            raise err.wrap("construction parse operations are invalid")

        signers = response.account_identifier_signers or []

        if signed and not signers:
            raise AsserterError(ErrorKind.CONSTRUCTION_PARSE_RESPONSE_SIGNERS_EMPTY_ON_SIGNED_TX)

        if not signed and signers:
            raise AsserterError(
                ErrorKind.CONSTRUCTION_PARSE_RESPONSE_SIGNERS_NON_EMPTY_ON_UNSIGNED_TX
            )

        if signers:
            account_array("signers", signers)
