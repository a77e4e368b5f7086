"""
Tests for JSON Schema Contract Validators

Тестирование JSON Schema контрактов конфигурации:
- Валидность самих схем
- Валидация правильных данных
- Детекция нарушений required полей
- Детекция нарушений типов и constraints (min/enum/uniqueItems)
"""

import pytest
from jsonschema import Draft202012Validator, ValidationError

from src.core.contracts import (
    AsserterConfigValidator,
    SchemaLoader,
    ValidationProfileValidator,
    validate_asserter_config,
    validate_validation_profile,
)


# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def valid_asserter_config():
    """Валидный asserter_config для тестирования."""
    return {
        "genesis_block_identifier": {"index": 0, "hash": "block 0"},
        "allowed_operation_types": ["PAYMENT", "FEE"],
        "allowed_operation_statuses": [{"status": "SUCCESS", "successful": True}],
        "allowed_errors": [{"code": 1, "message": "Node is unavailable", "retriable": True}],
        "allowed_timestamp_start_index": None,
        "strict": False,
    }


@pytest.fixture
def valid_validation_profile():
    """Валидный validation_profile для тестирования."""
    return {
        "enabled": True,
        "related_ops_exists": True,
        "chain_type": "utxo",
        "payment": {"name": "PAYMENT", "operation": {"count": -1, "should_balance": True}},
        "fee": {"name": "FEE", "operation": {"count": 1, "should_balance": False}},
    }


# =============================================================================
# ТЕСТЫ: Schema loader
# =============================================================================


class TestSchemaLoader:
    """Загрузка и meta-validation схем"""

    @pytest.mark.parametrize("name", ["asserter_config", "validation_profile"])
    def test_schema_is_valid(self, name):
        schema = SchemaLoader().load_schema(name)
        Draft202012Validator.check_schema(schema)

    def test_schema_cached(self):
        loader = SchemaLoader()
        assert loader.load_schema("asserter_config") is loader.load_schema("asserter_config")

    def test_missing_schema(self):
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("market_state")

    def test_missing_directory(self, tmp_path):
        with pytest.raises(RuntimeError):
            SchemaLoader(tmp_path / "absent")

    def test_invalid_schema(self, tmp_path):
        (tmp_path / "broken.json").write_text('{"type": 5}', encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON Schema"):
            SchemaLoader(tmp_path).load_schema("broken")


# =============================================================================
# ТЕСТЫ: asserter_config
# =============================================================================


class TestAsserterConfigContract:
    def test_valid(self, valid_asserter_config):
        validate_asserter_config(valid_asserter_config)

    def test_minimal(self):
        validate_asserter_config(
            {
                "allowed_operation_types": ["PAYMENT"],
                "allowed_operation_statuses": [{"status": "SUCCESS", "successful": True}],
            }
        )

    @pytest.mark.parametrize("field", ["allowed_operation_types", "allowed_operation_statuses"])
    def test_required(self, valid_asserter_config, field):
        del valid_asserter_config[field]
        with pytest.raises(ValidationError):
            validate_asserter_config(valid_asserter_config)

    def test_duplicate_types(self, valid_asserter_config):
        valid_asserter_config["allowed_operation_types"] = ["PAYMENT", "PAYMENT"]
        assert not AsserterConfigValidator().is_valid(valid_asserter_config)

    def test_negative_error_code(self, valid_asserter_config):
        valid_asserter_config["allowed_errors"][0]["code"] = -1
        with pytest.raises(ValidationError):
            validate_asserter_config(valid_asserter_config)

    def test_negative_genesis_index(self, valid_asserter_config):
        valid_asserter_config["genesis_block_identifier"]["index"] = -1
        with pytest.raises(ValidationError):
            validate_asserter_config(valid_asserter_config)

    def test_wrong_type(self, valid_asserter_config):
        valid_asserter_config["strict"] = "yes"
        with pytest.raises(ValidationError):
            validate_asserter_config(valid_asserter_config)

    def test_iter_errors(self, valid_asserter_config):
        valid_asserter_config["strict"] = "yes"
        valid_asserter_config["allowed_operation_types"] = []
        errors = list(AsserterConfigValidator().iter_errors(valid_asserter_config))
        assert len(errors) == 2


# =============================================================================
# ТЕСТЫ: validation_profile
# =============================================================================


class TestValidationProfileContract:
    def test_valid(self, valid_validation_profile):
        validate_validation_profile(valid_validation_profile)

    def test_only_enabled(self):
        validate_validation_profile({"enabled": False})

    def test_unknown_chain_type(self, valid_validation_profile):
        valid_validation_profile["chain_type"] = "ledger"
        with pytest.raises(ValidationError):
            validate_validation_profile(valid_validation_profile)

    def test_count_below_any(self, valid_validation_profile):
        valid_validation_profile["fee"]["operation"]["count"] = -2
        assert not ValidationProfileValidator().is_valid(valid_validation_profile)

    def test_rule_requires_operation(self, valid_validation_profile):
        del valid_validation_profile["payment"]["operation"]
        with pytest.raises(ValidationError):
            validate_validation_profile(valid_validation_profile)
