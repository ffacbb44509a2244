"""Exceptions raised on misuse of the rule and validator builders.

Validation failures are never raised: they are collected as
``ValidationError`` entries on a ``ValidationResult``. The exceptions here
signal programmer errors while a validator is being assembled.
"""

from __future__ import annotations

__all__ = ["FluentRulesError", "BuilderConsumedError"]


class FluentRulesError(RuntimeError):
    """Base class for errors raised by fluent_rules."""


class BuilderConsumedError(FluentRulesError):
    """Raised when a builder is used after ``build()`` was called on it."""

    def __init__(self, builder: object) -> None:
        self.builder = builder
        super().__init__(
            f"{type(builder).__name__} has already been built and can no longer be modified"
        )
