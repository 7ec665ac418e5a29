# Thumper Console Output
# Rich-based console output for user-friendly display

from __future__ import annotations

from typing import IO, TYPE_CHECKING

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.panel import Panel

if TYPE_CHECKING:
    from thumper.sync.engine import SyncResult
    from thumper.sync.task import TaskOutcome


class Console:
    """
    Console output manager using Rich.

    Provides formatted output for sync operations.
    """

    def __init__(self, *, colored: bool | None = None, file: IO[str] | None = None):
        """
        Initialize console.

        Args:
            colored: Force colored output on or off. None auto-detects a terminal.
            file: Stream to write to instead of stdout.
        """
        if colored is None:
            self._console = RichConsole(file=file, highlight=False)
        else:
            self._console = RichConsole(file=file, force_terminal=colored, no_color=not colored, highlight=False)

    def print(self, *args, **kwargs) -> None:
        """Print to console."""
        self._console.print(*args, **kwargs)

    def print_error(self, message: str) -> None:
        """Print error message."""
        self._console.print(f"[red]Error:[/red] {escape(message)}", soft_wrap=True)

    def print_cause(self, message: str) -> None:
        """Print one link of an error's cause chain."""
        self._console.print(f"  [dim]Caused by:[/dim] {escape(message)}", soft_wrap=True)

    def print_warning(self, message: str) -> None:
        """Print warning message."""
        self._console.print(f"[yellow]Warning:[/yellow] {escape(message)}", soft_wrap=True)

    def print_success(self, message: str) -> None:
        """Print success message."""
        self._console.print(f"[green]{escape(message)}[/green]", soft_wrap=True)

    def print_info(self, message: str) -> None:
        """Print info message."""
        self._console.print(f"[blue]{escape(message)}[/blue]", soft_wrap=True)

    def print_outcome(self, outcome: TaskOutcome) -> None:
        """Print a single task outcome as "<remote>: <event>"."""
        self._console.print(f"{escape(outcome.remote)}: {outcome.event.value}", soft_wrap=True)

    def print_sync_result(self, result: SyncResult, *, dry_run: bool = False) -> None:
        """
        Print sync result summary.

        Args:
            result: Sync result to display.
            dry_run: Whether this was a dry run (changes wording).
        """
        status_text = "Dry run completed" if dry_run else "Sync completed"
        put_verb = "would upload" if dry_run else "uploaded"
        delete_verb = "would delete" if dry_run else "deleted"

        self._console.print()
        self._console.print(
            Panel(
                f"[green]{status_text}[/green]\n"
                f"Files: {len(result.uploaded_paths)} {put_verb}, "
                f"{len(result.unchanged_paths)} unchanged, "
                f"{len(result.deleted_paths)} {delete_verb}",
                title="Summary",
                border_style="green" if result.changed else "blue",
            )
        )


def create_console(*, colored: bool | None = None, file: IO[str] | None = None) -> Console:
    """
    Create a console instance.

    Args:
        colored: Force colored output on or off. None auto-detects a terminal.
        file: Stream to write to instead of stdout.

    Returns:
        Console instance.
    """
    return Console(colored=colored, file=file)
