"""Rich-based observers for validation output.

Provides Rich console UI components that print validation outcomes and
tally recurring errors across many validations.

Requires the 'rich' package: pip install fluent-rules[rich]
"""

from __future__ import annotations

from threading import Lock
from typing import TYPE_CHECKING

from fluent_rules.events import (
    ValidationEvent,
    ValidationEventType,
    ValidationObserver,
)

if TYPE_CHECKING:
    from rich.console import Console
    from rich.panel import Panel

    from fluent_rules.results import ValidationResult

__all__ = ["RichResultObserver", "ErrorTallyObserver"]


def _rank(counts: dict[tuple[str, str], int], limit: int) -> list[tuple[tuple[str, str], int]]:
    """Most frequent entries first; ties keep first-seen order."""
    return sorted(counts.items(), key=lambda x: x[1], reverse=True)[:limit]


class RichResultObserver(ValidationObserver):
    """Print every completed validation to a Rich console.

    Passing instances get a single line; failing instances get a table
    with one row per field, listing its messages in order.

    Example:
        from rich.console import Console

        validator = (
            ValidatorBuilder[User]("user")
            .observe(RichResultObserver(Console()))
            .rule_for(...)
            .build()
        )
        validator.validate(user)  # Result is printed

    Requires:
        pip install rich
    """

    def __init__(self, console: Console | None = None, *, show_valid: bool = True) -> None:
        """Initialize the observer.

        Args:
            console: Rich Console instance. If None, creates a new one.
            show_valid: Whether to print a line for passing instances.
        """
        # Import Rich components here to make them optional
        from rich.console import Console

        self._console = console or Console()
        self._show_valid = show_valid

    def on_event(self, event: ValidationEvent) -> None:
        """Print the result carried by VALIDATION_COMPLETED events.

        Args:
            event: The validation event to handle.
        """
        if event.event_type != ValidationEventType.VALIDATION_COMPLETED:
            return

        name = event.data.get("validator_name", "validator")
        result: ValidationResult | None = event.data.get("result")

        if event.data.get("is_valid", False):
            if self._show_valid:
                self._console.print(f"[green]✓[/] [bold]{name}[/]: validation passed")
            return

        error_count = event.data.get("error_count", 0)
        self._console.print(
            f"[red]✗[/] [bold]{name}[/]: validation failed with {error_count} error(s)"
        )
        if result is not None:
            self._console.print(self._build_errors_table(result))

    def _build_errors_table(self, result: ValidationResult) -> Panel:
        """Build the per-field errors table.

        Args:
            result: The failed validation result.

        Returns:
            Rich Panel containing the errors table.
        """
        from rich.panel import Panel
        from rich.table import Table

        table = Table(show_header=True, header_style="bold magenta", expand=True)
        table.add_column("Field", style="cyan", width=20)
        table.add_column("Errors", style="yellow")

        for field, messages in result.errors_by_property().items():
            table.add_row(field, "\n".join(messages))

        return Panel(table, border_style="red")


class ErrorTallyObserver(ValidationObserver):
    """Count errors across many validations and show the most common ones.

    Useful when one compiled validator checks a batch of records: attach
    the observer, validate the batch, then print the summary.
    Counters are guarded by a lock, so the observer can be shared by a
    validator used from several threads.

    Example:
        tally = ErrorTallyObserver()
        validator = ValidatorBuilder[User]().observe(tally).rule_for(...).build()

        for user in users:
            validator.validate(user)

        tally.print_summary()

    Requires:
        pip install rich
    """

    def __init__(self, console: Console | None = None, top_errors_count: int = 10) -> None:
        """Initialize the tally observer.

        Args:
            console: Rich Console instance. If None, creates a new one.
            top_errors_count: Number of top errors to display.
        """
        from rich.console import Console

        self._console = console or Console()
        self._top_errors_count = top_errors_count
        self._total = 0
        self._valid = 0
        self._error_counts: dict[tuple[str, str], int] = {}
        self._lock = Lock()

    @property
    def total(self) -> int:
        """Number of completed validations seen."""
        return self._total

    @property
    def valid(self) -> int:
        """Number of completed validations that passed."""
        return self._valid

    @property
    def failed(self) -> int:
        """Number of completed validations that failed."""
        with self._lock:
            return self._total - self._valid

    def on_event(self, event: ValidationEvent) -> None:
        """Update counters from ERROR_ADDED and VALIDATION_COMPLETED events.

        Args:
            event: The validation event to handle.
        """
        if event.event_type == ValidationEventType.ERROR_ADDED:
            key = (event.data.get("field", ""), event.data.get("message", ""))
            with self._lock:
                self._error_counts[key] = self._error_counts.get(key, 0) + 1

        elif event.event_type == ValidationEventType.VALIDATION_COMPLETED:
            with self._lock:
                self._total += 1
                if event.data.get("is_valid", False):
                    self._valid += 1

    def top_errors(self, n: int | None = None) -> list[tuple[tuple[str, str], int]]:
        """Get the most frequent (field, message) pairs with their counts.

        Args:
            n: Number of entries. Defaults to ``top_errors_count``.

        Returns:
            List of ((field, message), count), most frequent first. Ties
            keep the order in which the errors were first seen.
        """
        limit = self._top_errors_count if n is None else n
        with self._lock:
            counts = dict(self._error_counts)
        return _rank(counts, limit)

    def reset(self) -> None:
        """Clear all counters."""
        with self._lock:
            self._total = 0
            self._valid = 0
            self._error_counts.clear()

    def print_summary(self) -> None:
        """Print the statistics panel and the top errors table."""
        self._console.print(self._build_stats_panel())
        self._console.print(self._build_errors_table())

    def _build_stats_panel(self) -> Panel:
        """Build the statistics panel.

        Returns:
            Rich Panel containing statistics.
        """
        from rich.panel import Panel
        from rich.text import Text

        with self._lock:
            total, valid = self._total, self._valid
        rate = (valid / total * 100) if total > 0 else 0

        text = Text()
        text.append(f"Total: {total:,}  ", style="bold")
        text.append(f"Valid: {valid:,}  ", style="green")
        text.append(f"Failed: {total - valid:,}  ", style="red")
        text.append(f"Success Rate: {rate:.1f}%", style="bold cyan")

        return Panel(text, title="[bold]Statistics[/]", border_style="blue")

    def _build_errors_table(self) -> Panel:
        """Build the top errors table.

        Returns:
            Rich Panel containing the errors table.
        """
        from rich.panel import Panel
        from rich.table import Table

        table = Table(
            title="Top Errors",
            show_header=True,
            header_style="bold magenta",
            expand=True,
        )
        table.add_column("Field", style="cyan", width=20)
        table.add_column("Error", style="yellow")
        table.add_column("Count", justify="right", style="red", width=10)
        table.add_column("%", justify="right", width=8)

        with self._lock:
            counts = dict(self._error_counts)
        total_errors = sum(counts.values())
        top = _rank(counts, self._top_errors_count)

        for (field, msg), count in top:
            pct = (count / total_errors * 100) if total_errors > 0 else 0
            display_msg = msg[:50] + "..." if len(msg) > 50 else msg
            table.add_row(field, display_msg, f"{count:,}", f"{pct:.1f}%")

        if not top:
            table.add_row("-", "No errors", "-", "-")

        return Panel(table, border_style="red")
