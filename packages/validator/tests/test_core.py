"""Tests for validator creation, results and top-level dispatch."""

import copy

import pytest

from schemata_validator import (
    MISSING,
    NodeKind,
    SchemaConfigurationError,
    ValidationResult,
    Validator,
    ValidatorOptions,
    create_validator,
)


class TestValidationResult:
    """Test the result type."""

    def test_success(self):
        result = ValidationResult.ok()
        assert result.success is True
        assert result.message is None
        assert bool(result) is True
        assert result.describe() == "The submitted value is valid."

    def test_failure(self):
        result = ValidationResult.fail("Nope.")
        assert result.success is False
        assert bool(result) is False
        assert result.describe() == "Nope."

    def test_default_failure_message(self):
        assert ValidationResult.fail().message == "The submitted value is invalid."

    def test_message_present_iff_failure(self):
        with pytest.raises(ValueError):
            ValidationResult(success=False)
        with pytest.raises(ValueError):
            ValidationResult(success=True, message="fine")

    def test_immutable(self):
        with pytest.raises(AttributeError):
            ValidationResult.ok().success = False


class TestCreateValidator:
    """Test create_validator and its options."""

    def test_returns_validator(self):
        validator = create_validator({"name": {"type": "string"}})
        assert isinstance(validator, Validator)
        assert validator.root.kind is NodeKind.OBJECT
        assert validator.options == ValidatorOptions()

    @pytest.mark.parametrize("options", [
        ValidatorOptions(strict_arrays=True),
        {"strict_arrays": True},
        {"strictArrays": True},
    ])
    def test_option_forms(self, options):
        assert create_validator([{"type": "any"}], options).options.strict_arrays is True

    def test_keyword_options(self):
        validator = create_validator([{"type": "any"}], ValidatorOptions(strict_arrays=True), vague_errors=True)
        assert validator.options == ValidatorOptions(strict_arrays=True, vague_errors=True)

    def test_unknown_option(self):
        with pytest.raises(TypeError):
            create_validator({"type": "any"}, {"strictArray": True})

    def test_malformed_schema_raises_at_creation(self):
        with pytest.raises(SchemaConfigurationError):
            create_validator({"type": "date"})

    def test_empty_object_schema(self):
        """Test that an empty object schema accepts only mappings."""
        validator = create_validator({})
        assert validator.validate({"anything": 1})[0]
        assert validator.validate("{;}")[0].message == "The submitted value is invalid."


class TestDispatch:
    """Test validation of each root kind."""

    def test_field_root(self):
        assert create_validator({"type": "number", "min": 1}).validate(2)[0]

    def test_object_root(self):
        validator = create_validator({"name": {"type": "string", "required": True}})
        assert validator.validate({"name": "Ann"})[0]
        assert not validator.validate([])[0]
        assert validator.validate(None)[0].message == "The submitted value is invalid."
        assert validator.validate(MISSING)[0].message == "The submitted value is invalid."

    def test_first_failing_key_wins(self):
        validator = create_validator({
            "first": {"type": "string", "required": True},
            "second": {"type": "number", "required": True},
        })
        result, _ = validator.validate({"second": "x"})
        assert result.message == "The first field must be set and not null."

    def test_extra_keys_are_kept(self):
        validator = create_validator({"name": {"type": "string"}})
        result, parsed = validator.validate({"name": "Ann", "extra": True})
        assert result
        assert parsed == {"name": "Ann", "extra": True}

    def test_input_is_not_mutated(self):
        validator = create_validator({"groups": [{"members": [{"type": "number"}]}]})
        payload = {"groups": [{"members": "[1, 2]"}, {"members": [3]}]}
        snapshot = copy.deepcopy(payload)

        result, parsed = validator.validate(payload)

        assert result
        assert payload == snapshot
        assert parsed == {"groups": [{"members": [1, 2]}, {"members": [3]}]}
        assert parsed["groups"][1] is payload["groups"][1]

    def test_validator_is_reusable(self):
        validator = create_validator({"type": "string", "min_length": 2})
        first = validator.validate("a")
        second = validator.validate("a")
        assert first == second
        assert validator.validate("ab")[0]

    def test_repr(self):
        assert "object" in repr(create_validator({"a": {"type": "any"}}))
