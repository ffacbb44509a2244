"""Per-field rule builder.

A RuleBuilder collects an ordered list of independent checks for the value
of one field and compiles them into a FieldRule. Every check runs against
the same value, unconditionally and in attachment order; each failing check
contributes one error tagged with the builder's property name.
"""

from __future__ import annotations

import math
import numbers
import re
from collections.abc import Callable, Sized
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Generic, SupportsFloat, TypeVar

from fluent_rules.exceptions import BuilderConsumedError
from fluent_rules.results import ValidationError

__all__ = ["Check", "EMAIL_PATTERN", "FieldRule", "RuleBuilder"]

V = TypeVar("V")
X = TypeVar("X")
SizedT = TypeVar("SizedT", bound=Sized)
NumberT = TypeVar("NumberT", bound=SupportsFloat)

Check = Callable[[V], str | None]
"""A single check: returns an error message, or None when the value passes."""

# Syntactic check only, not RFC 5322. Always used with fullmatch().
EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")


def _format_bound(value: float) -> str:
    """Render a numeric bound for a default message (``18``, ``0.5``, ``0.0000001``)."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")


def _comparable(value: SupportsFloat) -> Any:
    """Return ``value`` in a form that compares exactly against a float bound.

    Integers, fractions and decimals compare with floats natively, without
    the overflow ``float()`` raises for very large values. Other numeric
    types go through ``float()``.
    """
    if isinstance(value, Decimal):
        return math.nan if value.is_nan() else value
    if isinstance(value, numbers.Real):
        return value
    return float(value)


@dataclass(frozen=True)
class FieldRule(Generic[V]):
    """Compiled, immutable rule for one field.

    Calling it runs every check against the value and returns the produced
    errors in check order. It holds no per-call state, so one instance can
    be shared freely between validators and threads.

    Attributes:
        property_name: Field name attached to every produced error.
        checks: The checks, in attachment order.
    """

    property_name: str
    checks: tuple[Check[V], ...] = ()

    def __call__(self, value: V) -> list[ValidationError]:
        errors: list[ValidationError] = []
        for check in self.checks:
            message = check(value)
            if message is not None:
                errors.append(ValidationError(field=self.property_name, message=message))
        return errors

    def __repr__(self) -> str:
        return f"FieldRule(property_name={self.property_name!r}, checks={len(self.checks)})"


class RuleBuilder(Generic[V]):
    """Fluent builder for the checks of a single field.

    Generic over V, the type of the field value. Built-in checks are
    restricted to suitable value types through their ``self`` annotation,
    so a type checker rejects, for example, ``greater_than`` on a
    ``RuleBuilder[str]``.

    Every method returns the builder itself for chaining. ``build()``
    consumes the builder; using it afterwards raises BuilderConsumedError.

    Example:
        from fluent_rules import RuleBuilder

        name_rule = (
            RuleBuilder[str].for_property("name")
            .not_empty()
            .length(2, 50)
            .build()
        )

        name_rule("")    # [ValidationError("name", "must not be empty"),
                         #  ValidationError("name", "must be at least 2 characters long")]
        name_rule("Jo")  # []
    """

    def __init__(self, property_name: str) -> None:
        """Initialize the builder.

        Args:
            property_name: Field name attached to every error the rule produces.
        """
        self._property_name = property_name
        self._checks: list[Check[V]] = []
        self._consumed = False

    @classmethod
    def for_property(cls, property_name: str) -> RuleBuilder[V]:
        """Start an empty builder for ``property_name``."""
        return cls(property_name)

    @property
    def property_name(self) -> str:
        """Field name this builder tags its errors with."""
        return self._property_name

    @property
    def check_count(self) -> int:
        """Number of checks attached so far."""
        return len(self._checks)

    def _ensure_open(self) -> None:
        if self._consumed:
            raise BuilderConsumedError(self)

    def rule(self, check: Check[V]) -> RuleBuilder[V]:
        """Add an arbitrary check.

        Args:
            check: Callable returning an error message for a failing value,
                or None when the value passes.

        Returns:
            Self for method chaining.
        """
        self._ensure_open()
        if not callable(check):
            raise TypeError(f"check must be callable, got {type(check).__name__}")
        self._checks.append(check)
        return self

    # -------------------------------------------------------------------------
    # String checks
    # -------------------------------------------------------------------------

    def not_empty(self: RuleBuilder[str], message: str | None = None) -> RuleBuilder[str]:
        """Fail when the value is empty or only whitespace.

        The value is stripped before testing. Length checks do not strip,
        so ``"   "`` fails ``not_empty`` but passes ``min_length(2)``.

        Args:
            message: Error message. Defaults to "must not be empty".
        """
        msg = message if message is not None else "must not be empty"

        def check(value: str) -> str | None:
            return msg if not value.strip() else None

        return self.rule(check)

    def min_length(
        self: RuleBuilder[SizedT], min_length: int, message: str | None = None
    ) -> RuleBuilder[SizedT]:
        """Fail when ``len(value)`` is below ``min_length``.

        Args:
            min_length: Smallest accepted length.
            message: Error message. Defaults to
                "must be at least {min_length} characters long".
        """
        msg = message if message is not None else f"must be at least {min_length} characters long"

        def check(value: SizedT) -> str | None:
            return msg if len(value) < min_length else None

        return self.rule(check)

    def max_length(
        self: RuleBuilder[SizedT], max_length: int, message: str | None = None
    ) -> RuleBuilder[SizedT]:
        """Fail when ``len(value)`` is above ``max_length``.

        Args:
            max_length: Largest accepted length.
            message: Error message. Defaults to
                "must be at most {max_length} characters long".
        """
        msg = message if message is not None else f"must be at most {max_length} characters long"

        def check(value: SizedT) -> str | None:
            return msg if len(value) > max_length else None

        return self.rule(check)

    def length(
        self: RuleBuilder[SizedT],
        min_length: int,
        max_length: int,
        min_message: str | None = None,
        max_message: str | None = None,
    ) -> RuleBuilder[SizedT]:
        """Add ``min_length`` then ``max_length`` as two independent checks."""
        return self.min_length(min_length, min_message).max_length(max_length, max_message)

    def email(self: RuleBuilder[str], message: str | None = None) -> RuleBuilder[str]:
        """Fail unless the whole value looks like ``local@domain.tld``.

        Args:
            message: Error message. Defaults to "must be a valid email address".
        """
        return self.matches(
            EMAIL_PATTERN,
            message if message is not None else "must be a valid email address",
        )

    def matches(
        self: RuleBuilder[str], pattern: str | re.Pattern[str], message: str | None = None
    ) -> RuleBuilder[str]:
        """Fail unless the whole value matches ``pattern``.

        Args:
            pattern: Regular expression, as a string or compiled pattern.
            message: Error message. Defaults to "is not in the correct format".
        """
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        msg = message if message is not None else "is not in the correct format"

        def check(value: str) -> str | None:
            return msg if regex.fullmatch(value) is None else None

        return self.rule(check)

    # -------------------------------------------------------------------------
    # Presence
    # -------------------------------------------------------------------------

    def not_null(self: RuleBuilder[X | None], message: str | None = None) -> RuleBuilder[X | None]:
        """Fail when the value is None.

        Args:
            message: Error message. Defaults to "must not be null".
        """
        msg = message if message is not None else "must not be null"

        def check(value: X | None) -> str | None:
            return msg if value is None else None

        return self.rule(check)

    # -------------------------------------------------------------------------
    # Numeric comparisons
    # -------------------------------------------------------------------------
    # Bounds are converted to float; values compare against them exactly.

    def greater_than(
        self: RuleBuilder[NumberT], bound: SupportsFloat, message: str | None = None
    ) -> RuleBuilder[NumberT]:
        """Fail when the value is less than or equal to ``bound``."""
        limit = float(bound)
        msg = message if message is not None else f"must be greater than {_format_bound(limit)}"

        def check(value: NumberT) -> str | None:
            return msg if _comparable(value) <= limit else None

        return self.rule(check)

    def greater_than_or_equal(
        self: RuleBuilder[NumberT], bound: SupportsFloat, message: str | None = None
    ) -> RuleBuilder[NumberT]:
        """Fail when the value is less than ``bound``."""
        limit = float(bound)
        msg = (
            message
            if message is not None
            else f"must be greater than or equal to {_format_bound(limit)}"
        )

        def check(value: NumberT) -> str | None:
            return msg if _comparable(value) < limit else None

        return self.rule(check)

    def less_than(
        self: RuleBuilder[NumberT], bound: SupportsFloat, message: str | None = None
    ) -> RuleBuilder[NumberT]:
        """Fail when the value is greater than or equal to ``bound``."""
        limit = float(bound)
        msg = message if message is not None else f"must be less than {_format_bound(limit)}"

        def check(value: NumberT) -> str | None:
            return msg if _comparable(value) >= limit else None

        return self.rule(check)

    def less_than_or_equal(
        self: RuleBuilder[NumberT], bound: SupportsFloat, message: str | None = None
    ) -> RuleBuilder[NumberT]:
        """Fail when the value is greater than ``bound``."""
        limit = float(bound)
        msg = (
            message
            if message is not None
            else f"must be less than or equal to {_format_bound(limit)}"
        )

        def check(value: NumberT) -> str | None:
            return msg if _comparable(value) > limit else None

        return self.rule(check)

    def inclusive_between(
        self: RuleBuilder[NumberT],
        low: SupportsFloat,
        high: SupportsFloat,
        message: str | None = None,
    ) -> RuleBuilder[NumberT]:
        """Fail when the value is below ``low`` or above ``high``.

        An inverted range (``low > high``) is accepted and fails every value.
        """
        lower = float(low)
        upper = float(high)
        msg = (
            message
            if message is not None
            else f"must be between {_format_bound(lower)} and {_format_bound(upper)}"
        )

        def check(value: NumberT) -> str | None:
            number = _comparable(value)
            return msg if number < lower or number > upper else None

        return self.rule(check)

    # -------------------------------------------------------------------------
    # Custom predicates
    # -------------------------------------------------------------------------

    def must(self, predicate: Callable[[V], bool], message: str) -> RuleBuilder[V]:
        """Fail with ``message`` when ``predicate(value)`` is falsy.

        Example:
            RuleBuilder[str]("password").must(
                lambda p: any(c.isdigit() for c in p),
                "must contain at least one digit",
            )
        """
        if not callable(predicate):
            raise TypeError(f"predicate must be callable, got {type(predicate).__name__}")

        def check(value: V) -> str | None:
            return None if predicate(value) else message

        return self.rule(check)

    def build(self) -> FieldRule[V]:
        """Compile the checks into a FieldRule and consume the builder.

        Returns:
            An immutable FieldRule. An empty builder yields a rule that
            never produces errors.

        Raises:
            BuilderConsumedError: If the builder was already built.
        """
        self._ensure_open()
        self._consumed = True
        return FieldRule(property_name=self._property_name, checks=tuple(self._checks))

    def __repr__(self) -> str:
        state = "built" if self._consumed else "open"
        return (
            f"RuleBuilder(property_name={self._property_name!r}, "
            f"checks={len(self._checks)}, state={state})"
        )
