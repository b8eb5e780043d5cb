"""
Message reporting protocol for decoupling console output from resolver logic.

The resolver never prints directly: warnings about ambiguous source roots,
name collisions or dependency cycles, and informational notes about the index
cache, all go through a `Reporter`. This keeps the core testable and lets the
caller decide whether output is shown at all (the `quiet` switch).
"""

from typing import Protocol

from rich.console import Console
from rich.markup import escape


class Reporter(Protocol):
    """
    Protocol for user-visible messages.

    Implementations can render to a terminal (Rich), record messages for
    inspection (tests) or discard them.
    """

    def info(self, message: str) -> None:
        """Report an informational message."""

    def warning(self, message: str) -> None:
        """Report a non-fatal problem the user should know about."""

    def error(self, message: str) -> None:
        """Report a failure that aborted the current operation."""


class RichReporter:
    """
    Rich implementation of Reporter.

    Messages are written to stderr so that command output on stdout (resolved
    artifact lists, verdicts) stays machine readable.
    """

    def __init__(self, console: Console | None = None, quiet: bool = False) -> None:
        """
        Args:
            console: Optional console to write to. If None, a stderr console
                is created.
            quiet: If True, suppresses info and warning messages. Errors are
                always shown.
        """
        self.console = console if console is not None else Console(stderr=True)
        self.quiet = quiet

    def info(self, message: str) -> None:
        if self.quiet:
            return
        self.console.print(f"[cyan]ℹ[/cyan] {escape(message)}")

    def warning(self, message: str) -> None:
        if self.quiet:
            return
        self.console.print(f"[yellow]⚠ Warning:[/yellow] {escape(message)}")

    def error(self, message: str) -> None:
        self.console.print(f"[bold red]✖ Error:[/bold red] {escape(message)}")


class NoOpReporter:
    """No-op implementation of Reporter; every message is dropped."""

    def info(self, message: str) -> None:
        """No-op: does nothing."""

    def warning(self, message: str) -> None:
        """No-op: does nothing."""

    def error(self, message: str) -> None:
        """No-op: does nothing."""


class MockReporter:
    """
    Mock implementation of Reporter for testing.

    Attributes (for test inspection):
        infos: Informational messages, in the order they were reported.
        warnings: Warning messages, in the order they were reported.
        errors: Error messages, in the order they were reported.
    """

    def __init__(self) -> None:
        self.infos: list[str] = []
        self.warnings: list[str] = []
        self.errors: list[str] = []

    def info(self, message: str) -> None:
        self.infos.append(message)

    def warning(self, message: str) -> None:
        self.warnings.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)
