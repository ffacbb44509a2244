"""Shared fixtures and Hypothesis strategies for tests."""

from __future__ import annotations

from dataclasses import dataclass

import pytest
from hypothesis import strategies as st

from fluent_rules import RuleBuilder, ValidatorBuilder
from fluent_rules.events import ValidationEvent, ValidationEventType, ValidationObserver
from fluent_rules.results import ValidationError, ValidationResult
from fluent_rules.validators import BaseValidator, Validator

# -----------------------------------------------------------------------------
# Hypothesis Strategies
# -----------------------------------------------------------------------------

# Strategy for valid field names (letters and numbers only)
field_names = st.text(
    min_size=1,
    max_size=50,
    alphabet=st.characters(whitelist_categories=("L", "N")),
)

# Strategy for messages
messages = st.text(min_size=1, max_size=200)

# Strategy for validation errors
validation_errors = st.builds(
    ValidationError,
    field=st.sampled_from(["name", "email", "age", "password"]),
    message=st.sampled_from(["must not be empty", "is too short", "is invalid"]),
)

# Strategy for numbers accepted by the numeric checks
numbers = st.one_of(
    st.integers(min_value=-(2**31), max_value=2**31 - 1),
    st.floats(allow_nan=False, allow_infinity=False, width=32),
)


# -----------------------------------------------------------------------------
# Test Record Classes
# -----------------------------------------------------------------------------


@dataclass
class User:
    """Record used across validator tests."""

    name: str = "John Doe"
    email: str = "john.doe@example.com"
    age: int = 25
    password: str = "SecurePass123"


@dataclass
class Contact:
    """Record with fields that depend on each other."""

    phone_number: str = "1234567890"
    alt_phone_number: str = "0000000000"
    country_code: str = "DE"
    tax_number: str = "DE123456789"


# -----------------------------------------------------------------------------
# Test Validator / Observer Classes
# -----------------------------------------------------------------------------


class FailingValidator(BaseValidator[User]):
    """Hand-written validator that always fails with a configurable error."""

    def __init__(
        self, name: str = "failing", error_field: str = "test", error_msg: str = "Failed"
    ) -> None:
        self._name = name
        self._error_field = error_field
        self._error_msg = error_msg

    @property
    def name(self) -> str:
        return self._name

    def validate(self, item: User) -> ValidationResult:
        result = ValidationResult()
        result.add_error(ValidationError(self._error_field, self._error_msg))
        return result


class RecordingObserver:
    """Observer that records all events for testing."""

    def __init__(self) -> None:
        self.events: list[ValidationEvent] = []

    def on_event(self, event: ValidationEvent) -> None:
        self.events.append(event)

    @property
    def event_types(self) -> list[ValidationEventType]:
        return [e.event_type for e in self.events]


def build_user_validator(*observers: ValidationObserver) -> Validator[User]:
    """Build the validator used by the user scenarios."""
    builder = ValidatorBuilder[User]("user")
    for observer in observers:
        builder.observe(observer)
    return (
        builder.rule_for(
            "name",
            lambda u: u.name,
            RuleBuilder[str]("name").not_empty().min_length(2).max_length(50),
        )
        .rule_for(
            "email",
            lambda u: u.email,
            RuleBuilder[str]("email").not_empty().email(),
        )
        .rule_for(
            "age",
            lambda u: u.age,
            RuleBuilder[int]("age").greater_than_or_equal(18).less_than_or_equal(120),
        )
        .rule_for(
            "password",
            lambda u: u.password,
            RuleBuilder[str]("password")
            .not_empty()
            .min_length(8)
            .must(lambda p: any(c.isupper() for c in p), "must contain at least one uppercase letter")
            .must(lambda p: any(c.islower() for c in p), "must contain at least one lowercase letter")
            .must(lambda p: any(c.isdigit() for c in p), "must contain at least one digit"),
        )
        .build()
    )


# -----------------------------------------------------------------------------
# Pytest Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def validation_result() -> ValidationResult:
    """Create a fresh empty ValidationResult."""
    return ValidationResult()


@pytest.fixture
def user_validator() -> Validator[User]:
    """Create the user validator without observers."""
    return build_user_validator()


@pytest.fixture
def recording_observer() -> RecordingObserver:
    """Create a RecordingObserver instance."""
    return RecordingObserver()
