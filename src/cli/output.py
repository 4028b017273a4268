"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output.
Messages go to stderr so that HTML written to stdout can be piped into
other tools. Supports verbosity levels and the --no-color flag.
"""

from contextlib import contextmanager
from typing import Iterator

from rich.console import Console
from rich.live import Live
from rich.spinner import Spinner

from src.content_review.models import ChangeReport

from .models import TransformSummary


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance writing to stderr

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Operation completed")
        >>> with handler.spinner("Comparing..."):
        ...     pass
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.console = Console(
            stderr=True,
            force_terminal=not no_color,
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        """Display success message in green.

        Args:
            message: Success message to display
        """
        self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        """Display error message in red.

        Args:
            message: Error message to display
        """
        self.console.print(f"[red]✗[/red] {message}", style="red")

    def warning(self, message: str) -> None:
        """Display warning message in yellow.

        Args:
            message: Warning message to display
        """
        self.console.print(f"[yellow]⚠[/yellow] {message}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1).

        Args:
            message: Info message to display
        """
        if self.verbosity >= 1:
            self.console.print(message)

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2).

        Args:
            message: Debug message to display
        """
        if self.verbosity >= 2:
            self.console.print(f"[dim]{message}[/dim]")

    def print(self, message: str) -> None:
        """Display message without formatting.

        Args:
            message: Message to display
        """
        self.console.print(message)

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Display spinner while a long document is processed.

        Args:
            message: Message to display with spinner

        Yields:
            None
        """
        spinner = Spinner("dots", text=message)
        with Live(spinner, console=self.console, refresh_per_second=10, transient=True):
            yield

    def print_change_summary(self, report: ChangeReport) -> None:
        """Display change detection summary with color coding.

        Args:
            report: Result of the change detection run
        """
        self.console.print("\n[bold]Review Summary:[/bold]")

        if report.change_count > 0:
            self.console.print(f"  [blue]●[/blue] Changed: {report.change_count} block(s)")

        unchanged = report.exact_matches + report.fuzzy_matches
        if unchanged > 0:
            self.console.print(
                f"  [dim]─[/dim] Unchanged: {unchanged} block(s) "
                f"({report.fuzzy_matches} reworded)"
            )

        if report.protected_blocks > 0:
            self.console.print(f"  [yellow]⊘[/yellow] Protected: {report.protected_blocks} block(s)")

        if report.change_count == 0:
            self.console.print("\n[green]No content changes detected[/green]")
        else:
            self.console.print(
                f"\n[blue]{report.change_count} change(s) highlighted for review[/blue]"
            )

    def print_transform_summary(self, action: str, summary: TransformSummary) -> None:
        """Display the result of a normalize/strip/prepare run.

        Args:
            action: Past-tense description of what was done
            summary: Sizes and paths of the transformation
        """
        target = summary.destination or "stdout"
        self.success(f"{action} {summary.source} -> {target}")
        if summary.highlights_removed:
            self.info(f"  Removed {summary.highlights_removed} highlight container(s)")
        self.info(f"  {summary.input_length} -> {summary.output_length} characters")
