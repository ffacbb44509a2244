"""Whole-object validators.

Provides the abstract validator base class, the fluent ValidatorBuilder that
composes per-field rules and cross-field checks, the compiled Validator it
produces, and the ``validate`` entrypoint.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

from fluent_rules.events import (
    ObservableMixin,
    ValidationEvent,
    ValidationEventType,
    ValidationObserver,
    notify_all,
)
from fluent_rules.exceptions import BuilderConsumedError
from fluent_rules.results import ValidationError, ValidationResult
from fluent_rules.rules import FieldRule, RuleBuilder

if TYPE_CHECKING:
    from fluent_rules.protocols import ValidatorProtocol

__all__ = ["BaseValidator", "Validator", "ValidatorBuilder", "validate"]

T = TypeVar("T")
V = TypeVar("V")

AttachedRule = Callable[[T], list[ValidationError]]


class BaseValidator(ABC, Generic[T]):
    """Abstract base class for validators.

    Generic over T, the type of object being validated. Compiled
    validators derive from it; subclass it directly for hand-written
    validators that can be included in a ValidatorBuilder.

    Example:
        from fluent_rules import BaseValidator, ValidationError, ValidationResult

        class AddressValidator(BaseValidator[Address]):
            @property
            def name(self) -> str:
                return "address"

            def validate(self, item: Address) -> ValidationResult:
                result = ValidationResult()
                if not item.city:
                    result.add_error(ValidationError("city", "must not be empty"))
                return result
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of this validator for error reporting and identification."""
        ...

    @abstractmethod
    def validate(self, item: T) -> ValidationResult:
        """Validate an item.

        Args:
            item: Object to validate.

        Returns:
            ValidationResult containing any errors.
        """
        ...

    def __call__(self, item: T) -> ValidationResult:
        return self.validate(item)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


@dataclass(frozen=True)
class _PropertyRule(Generic[T, V]):
    """A FieldRule applied to the value an accessor extracts."""

    accessor: Callable[[T], V]
    rule: FieldRule[V]

    def __call__(self, instance: T) -> list[ValidationError]:
        return self.rule(self.accessor(instance))


@dataclass(frozen=True)
class _CrossFieldRule(Generic[T, V]):
    """A predicate over the whole instance and one extracted field value."""

    field_name: str
    accessor: Callable[[T], V]
    predicate: Callable[[T, V], bool]
    message: str

    def __call__(self, instance: T) -> list[ValidationError]:
        if self.predicate(instance, self.accessor(instance)):
            return []
        return [ValidationError(field=self.field_name, message=self.message)]


@dataclass(frozen=True)
class _IncludedValidator(Generic[T]):
    """Another validator whose errors are merged in place."""

    validator: ValidatorProtocol[T]

    def __call__(self, instance: T) -> list[ValidationError]:
        return list(self.validator.validate(instance).errors)


class Validator(BaseValidator[T], Generic[T]):
    """Compiled validator produced by ValidatorBuilder.build().

    Runs every attached rule against an instance, in attachment order,
    and collects all errors into a fresh ValidationResult. There is no
    short-circuit: a failing field never skips later rules.

    The validator is immutable after construction and keeps no state
    between calls, so it can be reused across instances and threads.
    Observers given at build time receive VALIDATION_STARTED, one
    ERROR_ADDED per error, and VALIDATION_COMPLETED events.
    """

    def __init__(
        self,
        rules: Iterable[AttachedRule[T]] = (),
        *,
        name: str = "validator",
        observers: Iterable[ValidationObserver] = (),
    ) -> None:
        """Initialize the compiled validator.

        Args:
            rules: Attached rules, each mapping an instance to a list of errors.
            name: Name of this validator.
            observers: Observers notified on every validation.
        """
        self._rules: tuple[AttachedRule[T], ...] = tuple(rules)
        self._name = name
        self._observers: tuple[ValidationObserver, ...] = tuple(observers)

    @property
    def name(self) -> str:
        """Name of this validator."""
        return self._name

    @property
    def observers(self) -> tuple[ValidationObserver, ...]:
        """Observers frozen into this validator."""
        return self._observers

    def validate(self, item: T) -> ValidationResult:
        """Run all attached rules and combine their errors.

        Args:
            item: Object to validate.

        Returns:
            A new ValidationResult with errors in attachment order.
        """
        observers = self._observers
        if observers:
            start_time = time.perf_counter()
            notify_all(
                observers,
                ValidationEvent(
                    event_type=ValidationEventType.VALIDATION_STARTED,
                    source=self,
                    data={
                        "item": item,
                        "validator_name": self._name,
                        "rule_count": len(self._rules),
                    },
                ),
            )

        result = ValidationResult()
        for rule in self._rules:
            errors = rule(item)
            result.add_errors(errors)
            if observers:
                for error in errors:
                    notify_all(
                        observers,
                        ValidationEvent(
                            event_type=ValidationEventType.ERROR_ADDED,
                            source=self,
                            data={"field": error.field, "message": error.message},
                        ),
                    )

        if observers:
            notify_all(
                observers,
                ValidationEvent(
                    event_type=ValidationEventType.VALIDATION_COMPLETED,
                    source=self,
                    data={
                        "item": item,
                        "validator_name": self._name,
                        "is_valid": result.is_valid,
                        "error_count": result.error_count,
                        "result": result,
                        "duration_ms": (time.perf_counter() - start_time) * 1000,
                    },
                ),
            )

        return result

    def __len__(self) -> int:
        """Return the number of attached rules."""
        return len(self._rules)

    def __repr__(self) -> str:
        return f"Validator(name={self._name!r}, rules={len(self._rules)})"


class ValidatorBuilder(ObservableMixin, Generic[T]):
    """Fluent builder for whole-object validators.

    Attaches per-field rules (through a field accessor) and cross-field
    checks in order, then compiles them into an immutable Validator.
    ``build()`` consumes the builder; using it afterwards raises
    BuilderConsumedError.

    Example:
        from fluent_rules import RuleBuilder, ValidatorBuilder, validate

        validator = (
            ValidatorBuilder[User]("user")
            .rule_for("name", lambda u: u.name,
                      RuleBuilder[str]("name").not_empty().min_length(2))
            .rule_for("age", lambda u: u.age,
                      RuleBuilder[int]("age").greater_than_or_equal(18))
            .must("alt_phone", lambda u: u.alt_phone,
                  lambda u, alt: alt != u.phone, "must differ from phone")
            .build()
        )

        result = validate(user, validator)
    """

    def __init__(self, name: str = "validator") -> None:
        """Initialize the builder.

        Args:
            name: Name for the resulting Validator.
        """
        super().__init__()
        self._rules: list[AttachedRule[T]] = []
        self._name = name
        self._consumed = False

    def _ensure_open(self) -> None:
        if self._consumed:
            raise BuilderConsumedError(self)

    def _check_observers_mutable(self) -> None:
        self._ensure_open()

    def rule_for(
        self,
        field_name: str,
        accessor: Callable[[T], V],
        rule: RuleBuilder[V] | FieldRule[V],
    ) -> ValidatorBuilder[T]:
        """Attach a field rule applied to ``accessor(instance)``.

        A RuleBuilder is built (and consumed) immediately. Errors are
        tagged with the property name the rule was created with;
        ``field_name`` only labels the attachment and is not used for
        tagging.

        Args:
            field_name: Name of the field being validated.
            accessor: Callable extracting the field value from an instance.
            rule: A RuleBuilder or an already built FieldRule.

        Returns:
            Self for method chaining.
        """
        self._ensure_open()
        if not callable(accessor):
            raise TypeError(
                f"accessor for {field_name!r} must be callable, got {type(accessor).__name__}"
            )
        field_rule = rule.build() if isinstance(rule, RuleBuilder) else rule
        self._rules.append(_PropertyRule(accessor=accessor, rule=field_rule))
        return self

    def must(
        self,
        field_name: str,
        accessor: Callable[[T], V],
        predicate: Callable[[T, V], bool],
        message: str,
    ) -> ValidatorBuilder[T]:
        """Attach a cross-field check.

        The predicate receives the whole instance and the value extracted
        by ``accessor``. When it returns a falsy value, exactly one error
        ``(field_name, message)`` is produced.

        Example:
            .must("tax_number", lambda c: c.tax_number,
                  lambda c, tax: is_valid_tax_number(tax, c.country_code),
                  "is not valid for the specified country")

        Returns:
            Self for method chaining.
        """
        self._ensure_open()
        if not callable(accessor):
            raise TypeError(
                f"accessor for {field_name!r} must be callable, got {type(accessor).__name__}"
            )
        if not callable(predicate):
            raise TypeError(
                f"predicate for {field_name!r} must be callable, got {type(predicate).__name__}"
            )
        self._rules.append(
            _CrossFieldRule(
                field_name=field_name,
                accessor=accessor,
                predicate=predicate,
                message=message,
            )
        )
        return self

    def include(self, validator: ValidatorProtocol[T]) -> ValidatorBuilder[T]:
        """Attach another validator; its errors are merged at this position.

        Args:
            validator: Any object satisfying ValidatorProtocol for T.

        Returns:
            Self for method chaining.
        """
        self._ensure_open()
        self._rules.append(_IncludedValidator(validator))
        return self

    def with_name(self, name: str) -> ValidatorBuilder[T]:
        """Set the name for the resulting Validator.

        Returns:
            Self for method chaining.
        """
        self._ensure_open()
        self._name = name
        return self

    def observe(self, observer: ValidationObserver) -> ValidatorBuilder[T]:
        """Register an observer for the resulting Validator.

        Returns:
            Self for method chaining.
        """
        self.add_observer(observer)
        return self

    @property
    def rule_count(self) -> int:
        """Number of rules attached so far."""
        return len(self._rules)

    def build(self) -> Validator[T]:
        """Compile the attached rules into a Validator and consume the builder.

        Returns:
            An immutable Validator. An empty builder yields a validator
            that accepts every instance.

        Raises:
            BuilderConsumedError: If the builder was already built.
        """
        self._ensure_open()
        self._consumed = True
        return Validator(self._rules, name=self._name, observers=self.observers)

    def __repr__(self) -> str:
        return f"ValidatorBuilder(name={self._name!r}, rules={len(self._rules)})"


def validate(instance: T, validator: ValidatorProtocol[T]) -> ValidationResult:
    """Validate ``instance`` with any validator.

    Args:
        instance: Object to validate.
        validator: Compiled Validator, BaseValidator subclass, or any object
            satisfying ValidatorProtocol.

    Returns:
        The ValidationResult produced by the validator.
    """
    return validator.validate(instance)
