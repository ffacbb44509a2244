"""Serializable validation reports.

Provides Pydantic models that snapshot a ValidationResult for export
(JSON, dicts for DataFrames, API responses).
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from fluent_rules.results import ValidationResult

__all__ = ["ErrorEntry", "ValidationReport"]


class ErrorEntry(BaseModel):
    """One validation error in a report.

    Attributes:
        field: Name of the field the error belongs to.
        message: The error message.
    """

    model_config = ConfigDict(frozen=True)

    field: str
    message: str


class ValidationReport(BaseModel):
    """Point-in-time snapshot of a validation run.

    Attributes:
        validator_name: Name of the validator that produced the result, if known.
        is_valid: Whether the validated instance had no errors.
        error_count: Number of errors.
        errors: All errors in the order they were produced.
        errors_by_property: Messages grouped by field, in first-seen field order.
        created_at: ISO format timestamp of when the report was created.
    """

    validator_name: str | None = None
    is_valid: bool
    error_count: int = 0
    errors: list[ErrorEntry] = Field(default_factory=list)
    errors_by_property: dict[str, list[str]] = Field(default_factory=dict)
    created_at: str = Field(default_factory=lambda: datetime.now().isoformat())

    @classmethod
    def from_result(
        cls,
        result: ValidationResult,
        validator_name: str | None = None,
    ) -> ValidationReport:
        """Build a report from a ValidationResult.

        Args:
            result: The result to snapshot.
            validator_name: Optional name of the validator that produced it.

        Returns:
            A new ValidationReport. Later changes to ``result`` are not reflected.
        """
        return cls(
            validator_name=validator_name,
            is_valid=result.is_valid,
            error_count=result.error_count,
            errors=[ErrorEntry(field=e.field, message=e.message) for e in result.errors],
            errors_by_property=result.errors_by_property(),
        )

    def audit_rows(self, source: str | None = None) -> list[dict[str, str]]:
        """Flatten the errors into one dict per error.

        Args:
            source: Optional source identifier added to each row.

        Returns:
            List of dicts suitable for pd.DataFrame() or csv.DictWriter.
        """
        rows: list[dict[str, str]] = []
        for entry in self.errors:
            row = entry.model_dump()
            if self.validator_name:
                row["validator"] = self.validator_name
            if source:
                row["source"] = source
            rows.append(row)
        return rows
