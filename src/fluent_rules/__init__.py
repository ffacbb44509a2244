"""Fluent, declarative validation rules for arbitrary Python objects."""

from fluent_rules.events import (
    ObservableMixin,
    ValidationEvent,
    ValidationEventType,
    ValidationObserver,
)
from fluent_rules.exceptions import BuilderConsumedError, FluentRulesError
from fluent_rules.protocols import ValidatorProtocol
from fluent_rules.report import ErrorEntry, ValidationReport
from fluent_rules.results import ValidationError, ValidationResult
from fluent_rules.rich_observers import ErrorTallyObserver, RichResultObserver
from fluent_rules.rules import Check, FieldRule, RuleBuilder
from fluent_rules.validators import (
    BaseValidator,
    Validator,
    ValidatorBuilder,
    validate,
)

__all__ = [
    # Validation results
    "ValidationError",
    "ValidationResult",
    # Field rules
    "Check",
    "FieldRule",
    "RuleBuilder",
    # Validators
    "BaseValidator",
    "Validator",
    "ValidatorBuilder",
    "ValidatorProtocol",
    "validate",
    # Errors
    "FluentRulesError",
    "BuilderConsumedError",
    # Reports
    "ErrorEntry",
    "ValidationReport",
    # Observer pattern
    "ObservableMixin",
    "ValidationEvent",
    "ValidationEventType",
    "ValidationObserver",
    # Rich observers
    "ErrorTallyObserver",
    "RichResultObserver",
]

__version__ = "0.1.0"
