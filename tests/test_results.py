"""Tests for ValidationError and ValidationResult."""

from __future__ import annotations

import dataclasses

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from hypothesis.stateful import RuleBasedStateMachine, invariant, rule

from fluent_rules.results import ValidationError, ValidationResult

from .conftest import field_names, messages, validation_errors

# =============================================================================
# ValidationError Unit Tests
# =============================================================================


class TestValidationErrorUnit:
    """Unit tests for ValidationError dataclass."""

    def test_validation_error_creation(self) -> None:
        """Test creating a ValidationError."""
        error = ValidationError(field="email", message="must be a valid email address")

        assert error.field == "email"
        assert error.message == "must be a valid email address"

    def test_validation_error_equality(self) -> None:
        """Test that two identical errors are equal."""
        assert ValidationError("test", "error") == ValidationError("test", "error")

    def test_validation_error_is_immutable(self) -> None:
        """Test that errors cannot be changed after creation."""
        error = ValidationError("name", "must not be empty")

        with pytest.raises(dataclasses.FrozenInstanceError):
            error.message = "changed"  # type: ignore[misc]

    def test_validation_error_str(self) -> None:
        """Test the 'field: message' rendering."""
        error = ValidationError("name", "must not be empty")

        assert str(error) == "name: must not be empty"

    def test_validation_error_repr(self) -> None:
        """Test string representation."""
        repr_str = repr(ValidationError(field="x", message="y"))

        assert "ValidationError" in repr_str
        assert "x" in repr_str
        assert "y" in repr_str


# =============================================================================
# ValidationResult Unit Tests
# =============================================================================


class TestValidationResultUnit:
    """Unit tests for ValidationResult."""

    def test_new_result_is_valid(self, validation_result: ValidationResult) -> None:
        """Test that a new result is empty and valid."""
        assert validation_result.is_valid is True
        assert validation_result.errors == []
        assert validation_result.error_count == 0

    def test_add_error_sets_invalid(self, validation_result: ValidationResult) -> None:
        """Test that add_error makes the result invalid."""
        validation_result.add_error(ValidationError("field", "message"))

        assert validation_result.is_valid is False
        assert validation_result.errors == [ValidationError("field", "message")]

    def test_add_errors_keeps_order(self, validation_result: ValidationResult) -> None:
        """Test add_errors appends in iteration order."""
        validation_result.add_error(ValidationError("a", "1"))
        validation_result.add_errors([ValidationError("b", "2"), ValidationError("a", "3")])

        assert [(e.field, e.message) for e in validation_result.errors] == [
            ("a", "1"),
            ("b", "2"),
            ("a", "3"),
        ]

    def test_add_errors_empty(self, validation_result: ValidationResult) -> None:
        """Test adding no errors keeps the result valid."""
        validation_result.add_errors([])

        assert validation_result.is_valid

    def test_duplicates_are_preserved(self, validation_result: ValidationResult) -> None:
        """Test that identical errors are not deduplicated."""
        validation_result.add_error(ValidationError("name", "dup"))
        validation_result.add_error(ValidationError("name", "dup"))

        assert validation_result.error_count == 2
        assert validation_result.errors_by_property() == {"name": ["dup", "dup"]}

    def test_errors_by_property_groups(self, validation_result: ValidationResult) -> None:
        """Test grouping keeps first-seen field order and message order."""
        validation_result.add_errors(
            [
                ValidationError("password", "too short"),
                ValidationError("email", "invalid"),
                ValidationError("password", "needs a digit"),
            ]
        )

        grouped = validation_result.errors_by_property()

        assert list(grouped) == ["password", "email"]
        assert grouped["password"] == ["too short", "needs a digit"]
        assert grouped["email"] == ["invalid"]

    def test_errors_by_property_reflects_later_errors(
        self, validation_result: ValidationResult
    ) -> None:
        """Test grouping is recomputed, never cached."""
        validation_result.add_error(ValidationError("a", "1"))
        first = validation_result.errors_by_property()
        validation_result.add_error(ValidationError("b", "2"))

        assert first == {"a": ["1"]}
        assert validation_result.errors_by_property() == {"a": ["1"], "b": ["2"]}

    def test_errors_by_property_empty(self, validation_result: ValidationResult) -> None:
        """Test grouping an empty result."""
        assert validation_result.errors_by_property() == {}

    def test_first_error_for(self, validation_result: ValidationResult) -> None:
        """Test first_error_for returns the earliest message for a field."""
        validation_result.add_errors(
            [
                ValidationError("name", "must not be empty"),
                ValidationError("email", "invalid"),
                ValidationError("name", "too short"),
            ]
        )

        assert validation_result.first_error_for("name") == "must not be empty"
        assert validation_result.first_error_for("email") == "invalid"
        assert validation_result.first_error_for("age") is None

    def test_fields(self, validation_result: ValidationResult) -> None:
        """Test fields lists distinct field names in first-seen order."""
        validation_result.add_errors(
            [ValidationError("b", "1"), ValidationError("a", "2"), ValidationError("b", "3")]
        )

        assert validation_result.fields == ["b", "a"]

    def test_valid_result_is_truthy(self, validation_result: ValidationResult) -> None:
        """Test that an empty result is not falsy."""
        assert validation_result

    def test_merge_returns_self_for_chaining(self) -> None:
        """Test that merge extends in place and returns self."""
        result1 = ValidationResult()
        result2 = ValidationResult([ValidationError("a", "1")])
        result3 = ValidationResult([ValidationError("b", "2")])

        final = result1.merge(result2).merge(result3)

        assert final is result1
        assert [e.field for e in result1.errors] == ["a", "b"]
        assert not result1.is_valid


# =============================================================================
# ValidationError Property-Based Tests
# =============================================================================


class TestValidationErrorProperties:
    """Property-based tests for ValidationError."""

    @given(field=field_names, message=messages)
    @settings(max_examples=100)
    def test_validation_error_str_contains_parts(self, field: str, message: str) -> None:
        """str(error) is always 'field: message'."""
        assert str(ValidationError(field, message)) == f"{field}: {message}"


# =============================================================================
# ValidationResult Property-Based Tests
# =============================================================================


class TestValidationResultProperties:
    """Property-based tests for ValidationResult."""

    @given(errors=st.lists(validation_errors, max_size=20))
    @settings(max_examples=100)
    def test_is_valid_iff_no_errors(self, errors: list[ValidationError]) -> None:
        """is_valid holds exactly when no errors were added."""
        result = ValidationResult()
        result.add_errors(errors)

        assert result.is_valid == (len(errors) == 0)

    @given(errors=st.lists(validation_errors, max_size=20))
    @settings(max_examples=100)
    def test_grouping_preserves_per_field_sequences(self, errors: list[ValidationError]) -> None:
        """Each group equals the field's messages in original order."""
        result = ValidationResult()
        result.add_errors(errors)

        grouped = result.errors_by_property()

        assert sum(len(v) for v in grouped.values()) == len(errors)
        for field, group in grouped.items():
            assert group == [e.message for e in errors if e.field == field]
        assert list(grouped) == list(dict.fromkeys(e.field for e in errors))

    @given(
        errors=st.lists(validation_errors, max_size=20),
        field=st.sampled_from(["name", "email", "age", "password", "missing"]),
    )
    @settings(max_examples=100)
    def test_first_error_for_is_earliest(self, errors: list[ValidationError], field: str) -> None:
        """first_error_for is None iff the field is absent, else the earliest message."""
        result = ValidationResult()
        result.add_errors(errors)

        matching = [e.message for e in errors if e.field == field]
        if matching:
            assert result.first_error_for(field) == matching[0]
        else:
            assert result.first_error_for(field) is None

    @given(
        count1=st.integers(min_value=0, max_value=5),
        count2=st.integers(min_value=0, max_value=5),
    )
    @settings(max_examples=50)
    def test_merge_errors_accumulate(self, count1: int, count2: int) -> None:
        """Merged errors = both error lists, in order."""
        result1 = ValidationResult([ValidationError(f"r1_{i}", "m") for i in range(count1)])
        result2 = ValidationResult([ValidationError(f"r2_{i}", "m") for i in range(count2)])
        expected = result1.errors + result2.errors

        result1.merge(result2)

        assert result1.errors == expected


# =============================================================================
# ValidationResult Stateful Test
# =============================================================================


class ValidationResultStateMachine(RuleBasedStateMachine):
    """Stateful test for ValidationResult state transitions."""

    def __init__(self) -> None:
        super().__init__()
        self.result = ValidationResult()
        self.expected: list[ValidationError] = []

    @rule(
        field=st.text(
            min_size=1, max_size=20, alphabet=st.characters(whitelist_categories=("L", "N"))
        ),
        message=st.text(min_size=1, max_size=50),
    )
    def add_error(self, field: str, message: str) -> None:
        """Add an error to the result."""
        error = ValidationError(field, message)
        self.result.add_error(error)
        self.expected.append(error)

        assert not self.result.is_valid

    @rule(errors=st.lists(validation_errors, max_size=3))
    def add_errors(self, errors: list[ValidationError]) -> None:
        """Add a batch of errors."""
        self.result.add_errors(errors)
        self.expected.extend(errors)

    @invariant()
    def errors_match(self) -> None:
        """The error sequence always matches what was added."""
        assert self.result.errors == self.expected

    @invariant()
    def validity_consistent(self) -> None:
        """is_valid is consistent with the error count."""
        assert self.result.is_valid == (not self.expected)


# Create the test class for pytest
TestValidationResultStateful = ValidationResultStateMachine.TestCase
