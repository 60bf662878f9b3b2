"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output:
colored status messages, spinners, workflow plan tables, task summaries and
rendered tables of contents. Supports verbosity levels and --no-color flag.
"""

from contextlib import contextmanager
from typing import Iterator, List, Optional

from rich.console import Console
from rich.live import Live
from rich.markdown import Markdown
from rich.spinner import Spinner
from rich.table import Table

from ..workflows.models import PlanStatus, WorkflowPlan
from ..workflows.task_queue import TaskResult

# Color and wording of each plan status
STATUS_STYLES = {
    PlanStatus.NEW: ("green", "new"),
    PlanStatus.CHANGED: ("blue", "changed"),
    PlanStatus.NO_CHANGE: ("dim", "no change"),
    PlanStatus.ALREADY_EXISTS: ("yellow", "already exists"),
    PlanStatus.BLOCKED: ("red", "blocked"),
    PlanStatus.BORROWED: ("cyan", "borrowed"),
    PlanStatus.LABEL: ("dim", ""),
    PlanStatus.DELETE: ("red", "delete"),
}


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Published 3 page(s)")
        >>> with handler.spinner("Planning..."):
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
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        """Display success message in green."""
        self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        """Display error message in red."""
        self.console.print(f"[red]✗[/red] {message}", style="red")

    def warning(self, message: str) -> None:
        """Display warning message in yellow."""
        self.console.print(f"[yellow]⚠[/yellow] {message}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(message)

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.console.print(f"[dim]{message}[/dim]")

    def print(self, message: str) -> None:
        """Display message without markup processing."""
        self.console.print(message, markup=False)

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Display spinner while a single operation runs.

        Args:
            message: Message to display with spinner

        Yields:
            None
        """
        spinner = Spinner("dots", text=message)
        with Live(spinner, console=self.console, refresh_per_second=10, transient=True):
            yield

    def print_markdown(self, markdown: str) -> None:
        """Display Markdown text formatted for the terminal."""
        self.console.print(Markdown(markdown))

    def print_plan(self, plan: WorkflowPlan) -> None:
        """Display a workflow plan as a table, one row per planned line.

        Args:
            plan: Plan to display
        """
        table = Table(title=f"{plan.action.capitalize()}: {plan.source_identity}")
        table.add_column("Page")
        table.add_column("Target")
        table.add_column("Status")

        for line in plan.lines:
            style, text = STATUS_STYLES[line.status]
            label = "  " * line.depth + line.label
            target = line.target_identity or ""
            table.add_row(
                label,
                target,
                f"[{style}]{text}[/{style}]" if text else "",
            )
        self.console.print(table)

    def print_plan_summary(self, plan: WorkflowPlan, dry_run: bool = False) -> None:
        """Display how many planned lines fall under each status.

        Args:
            plan: Planned workflow
            dry_run: Whether tasks will not be run
        """
        heading = "Dry Run - Planned Changes" if dry_run else "Planned Changes"
        self.console.print(f"\n[bold]{heading}:[/bold]")
        for status, (style, text) in STATUS_STYLES.items():
            count = plan.count(status)
            if count > 0 and text:
                self.console.print(f"  [{style}]•[/{style}] {text.capitalize()}: {count} page(s)")

        if not plan.tasks:
            self.console.print("\n[yellow]Nothing to do[/yellow]")

    def print_task_summary(self, results: List[TaskResult], action: Optional[str] = None) -> None:
        """Display the outcome of running workflow tasks.

        Args:
            results: Task results in the order the tasks ran
            action: Workflow name for the closing line
        """
        succeeded = [result for result in results if result.success]
        failed = [result for result in results if not result.success]

        self.console.print("\n[bold]Task Summary:[/bold]")
        if succeeded:
            self.console.print(f"  [green]✓[/green] Applied: {len(succeeded)} task(s)")
        if failed:
            self.console.print(f"  [red]✗[/red] Failed: {len(failed)} task(s)")
            for result in failed:
                self.console.print(
                    f"    • {result.task.target_identity}: {result.error}", markup=False
                )

        label = action.capitalize() if action else "Workflow"
        if not results:
            self.console.print("\n[yellow]No tasks were run[/yellow]")
        elif failed:
            self.console.print(f"\n[red]{label} completed with failures[/red]")
        else:
            self.console.print(f"\n[green]{label} completed successfully[/green]")
