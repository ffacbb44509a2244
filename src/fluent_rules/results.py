"""Validation result containers.

An ordered, append-only collection of field-tagged validation errors with
grouping and lookup helpers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from fluent_rules.report import ValidationReport

__all__ = ["ValidationError", "ValidationResult"]


@dataclass(frozen=True)
class ValidationError:
    """A single validation error."""

    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


@dataclass
class ValidationResult:
    """Result of validation with error aggregation.

    Errors are kept in the exact order they were added. Duplicates are
    preserved. ``is_valid`` is derived from the error list, so a result is
    valid if and only if it holds no errors.

    Example:
        result = ValidationResult()
        result.add_error(ValidationError("name", "must not be empty"))
        result.add_error(ValidationError("name", "must be at least 2 characters long"))

        result.is_valid                  # False
        result.first_error_for("name")   # "must not be empty"
        result.errors_by_property()      # {"name": ["must not be empty", ...]}
    """

    errors: list[ValidationError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """True when no errors have been recorded."""
        return not self.errors

    @property
    def error_count(self) -> int:
        """Number of recorded errors."""
        return len(self.errors)

    @property
    def fields(self) -> list[str]:
        """Distinct field names with errors, in first-seen order."""
        return list(dict.fromkeys(error.field for error in self.errors))

    def add_error(self, error: ValidationError) -> None:
        """Append a single error."""
        self.errors.append(error)

    def add_errors(self, errors: Iterable[ValidationError]) -> None:
        """Append several errors, keeping their order."""
        self.errors.extend(errors)

    def errors_by_property(self) -> dict[str, list[str]]:
        """Group error messages by field name.

        Groups appear in the order their field was first seen; messages
        within a group keep the order they were added. The mapping is
        rebuilt on every call.

        Returns:
            Mapping of field name to the ordered list of its messages.
        """
        grouped: dict[str, list[str]] = {}
        for error in self.errors:
            grouped.setdefault(error.field, []).append(error.message)
        return grouped

    def first_error_for(self, field: str) -> str | None:
        """Return the earliest message recorded for ``field``, or None."""
        for error in self.errors:
            if error.field == field:
                return error.message
        return None

    def merge(self, other: ValidationResult) -> ValidationResult:
        """Merge another validation result into this one.

        This method mutates the current instance in-place by extending
        its errors list with errors from the other result.

        Args:
            other: Another ValidationResult to merge into this one.

        Returns:
            Self, for method chaining (e.g., result.merge(a).merge(b)).
        """
        self.errors.extend(other.errors)
        return self

    def to_report(self, validator_name: str | None = None) -> ValidationReport:
        """Snapshot this result as a serializable pydantic report."""
        from fluent_rules.report import ValidationReport

        return ValidationReport.from_result(self, validator_name=validator_name)
