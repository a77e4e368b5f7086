"""
Тесты для таксономии ошибок

Проверяемые инварианты:
1. Каждый ErrorKind принадлежит ровно одной ErrorCategory
2. Значения ErrorKind уникальны (каноническое сообщение)
3. wrap() сохраняет kind и добавляет контекст снаружи внутрь
4. Идентичность ошибки — через kind, а не через строку
"""

import pytest

from src.core.errors import (
    AsserterError,
    ConformanceError,
    ErrorCategory,
    ErrorKind,
    ParserError,
)


class TestErrorKind:
    """Закрытая таксономия"""

    def test_every_kind_has_category(self):
        """У каждого варианта есть категория"""
        for kind in ErrorKind:
            assert isinstance(kind.category, ErrorCategory)

    def test_values_are_unique(self):
        values = [kind.value for kind in ErrorKind]
        assert len(values) == len(set(values))

    def test_categories_by_entity(self):
        """Категория соответствует охраняемой сущности"""
        assert ErrorKind.ACCOUNT_IS_NIL.category is ErrorCategory.IDENTITY
        assert ErrorKind.AMOUNT_IS_NOT_INT.category is ErrorCategory.AMOUNT
        assert ErrorKind.RELATED_OPERATION_INDEX_OUT_OF_ORDER.category is ErrorCategory.ORDERING
        assert ErrorKind.FEE_AMOUNT_NOT_NEGATIVE.category is ErrorCategory.AGGREGATE
        assert ErrorKind.TIMESTAMP_BEFORE_MIN.category is ErrorCategory.BLOCK
        assert ErrorKind.ERROR_UNEXPECTED_CODE.category is ErrorCategory.CATALOG
        assert ErrorKind.SIGNATURES_EMPTY.category is ErrorCategory.CONSTRUCTION
        assert ErrorKind.OPPOSITE_AMOUNTS_SAME_SIGN.category is ErrorCategory.MATCHER

    def test_every_category_used(self):
        used = {kind.category for kind in ErrorKind}
        assert used == set(ErrorCategory)


class TestConformanceError:
    """Поведение исключений"""

    def test_str_without_detail(self):
        err = AsserterError(ErrorKind.BLOCK_IS_NIL)
        assert str(err) == ErrorKind.BLOCK_IS_NIL.value

    def test_str_with_detail_and_context(self):
        err = AsserterError(ErrorKind.AMOUNT_IS_NOT_INT, "value 'abc'", value="abc")
        err.wrap("amount is invalid in operation 1")
        err.wrap("operation is invalid")

        assert str(err) == (
            "operation is invalid: amount is invalid in operation 1: "
            "value 'abc': Amount.Value is not an integer"
        )
        assert err.fields == {"value": "abc"}

    def test_wrap_returns_same_object(self):
        """wrap() не меняет kind и возвращает тот же объект"""
        err = ParserError(ErrorKind.MATCH_OPERATIONS_MATCH_NOT_FOUND, index=3)
        wrapped = err.wrap("outer")

        assert wrapped is err
        assert wrapped.kind is ErrorKind.MATCH_OPERATIONS_MATCH_NOT_FOUND
        assert wrapped.context == ["outer"]

    def test_raise_wrapped(self):
        def inner():
            raise AsserterError(ErrorKind.TX_IS_NIL)

        with pytest.raises(AsserterError) as exc_info:
            try:
                inner()
            except AsserterError as err:
                raise err.wrap("transaction is invalid in block 5")

        assert exc_info.value.kind is ErrorKind.TX_IS_NIL
        assert exc_info.value.category is ErrorCategory.IDENTITY
        assert "block 5" in str(exc_info.value)

    def test_hierarchy(self):
        assert issubclass(AsserterError, ConformanceError)
        assert issubclass(ParserError, ConformanceError)
        assert not issubclass(ParserError, AsserterError)

    def test_repr_contains_kind_name(self):
        err = AsserterError(ErrorKind.ERROR_IS_NIL)
        assert "ERROR_IS_NIL" in repr(err)
