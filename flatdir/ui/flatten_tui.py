"""Terminal User Interface for flatdir.

This module provides the FlattenTUI class, a Rich-based interface that asks
for the destination name, shows notices raised during a run, tracks progress
and displays the final summary.

Example:
    from flatdir.ui import FlattenTUI

    tui = FlattenTUI()
    name = tui.prompt_destination_name()
    tui.notify(NoticeLevel.WARNING, "Must select at least two files/dirs in order to flatten!")
    tui.display_flatten_summary(summary, dry_run=False)
"""

import logging
from pathlib import Path
from typing import Callable, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.prompt import Prompt
from rich.table import Table

from flatdir.models import FlattenSummary, NoticeLevel

logger = logging.getLogger(__name__)


class FlattenTUI:
    """Rich-based Terminal User Interface for flatten runs.

    Provides the interactive pieces the flatten workflow calls into:
    - Destination name prompt
    - Notifier for errors and warnings
    - Progress tracking while files are moved
    - Summary display with statistics, skipped files and errors

    Args:
        console: Optional Rich Console instance for output. If None, creates
            a new Console. Pass a custom Console for testing (e.g., with
            StringIO file for output capture).

    Attributes:
        console: The Rich Console instance used for all output.
    """

    NOTICE_TITLE = "Flatten"
    PROMPT_TITLE = "Flattened dir name (leave blank to flatten into first selected dir)"

    _LEVEL_STYLES = {
        NoticeLevel.ERROR: "red",
        NoticeLevel.WARNING: "yellow",
        NoticeLevel.INFO: "cyan",
    }

    def __init__(self, console: Optional[Console] = None) -> None:
        """Initialize FlattenTUI with optional custom console.

        Args:
            console: Optional Rich Console for output. Defaults to new Console().
        """
        self.console = console or Console()

    def prompt_destination_name(self) -> Optional[str]:
        """Ask the user for the name of the directory to flatten into.

        Returns:
            The stripped name, an empty string when the user wants the first
            selected directory to be the destination, or None if the prompt
            was aborted with Ctrl+C or end of input.
        """
        try:
            answer = Prompt.ask(self.PROMPT_TITLE, default="", show_default=False, console=self.console)
        except (KeyboardInterrupt, EOFError):
            self.console.print()
            return None
        return answer.strip()

    def notify(self, level: NoticeLevel, message: str) -> None:
        """Show a notice to the user.

        Printing problems are logged and never raised to the caller.

        Args:
            level: Severity of the notice.
            message: Human-readable message.
        """
        log_level = {
            NoticeLevel.ERROR: logging.ERROR,
            NoticeLevel.WARNING: logging.WARNING,
        }.get(level, logging.INFO)
        logger.log(log_level, message)

        style = self._LEVEL_STYLES.get(level, "white")
        try:
            self.console.print(
                f"[bold {style}]{self.NOTICE_TITLE} {level.value}:[/bold {style}] {escape(message)}",
                highlight=False,
            )
        except Exception as e:
            logger.debug(f"Failed to display notice: {e}")

    def create_progress_callback(
        self, destination_name: str
    ) -> tuple[Progress, Callable[[Path], None]]:
        """Create a progress display and a callback advancing it per file.

        The number of files is not known up front, so the bar pulses and a
        running count is shown instead of a percentage.

        Args:
            destination_name: Name of the destination directory (for display).

        Returns:
            tuple[Progress, Callable[[Path], None]]: The Progress instance,
            which the caller MUST use as a context manager, and a callback to
            invoke with each handled file path.

        Example:
            progress, callback = tui.create_progress_callback("merged")
            with progress:
                ops = FileOperations(progress_callback=callback)
                ops.flatten_sources(destination, sources)
        """
        progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=self.console,
            transient=True,
        )
        task_id = progress.add_task(f"Flattening into {escape(destination_name)}...", total=None)

        def callback(path: Path) -> None:
            progress.update(task_id, advance=1, description=f"Flattening {escape(path.name)}")

        return progress, callback

    def display_flatten_summary(self, summary: FlattenSummary, dry_run: bool) -> None:
        """Display final statistics after a flatten run.

        Args:
            summary: FlattenSummary with aggregated statistics.
            dry_run: If True, displays "[DRY RUN]" indicator.
        """
        title = "Flatten Summary"
        if dry_run:
            title += " [yellow][DRY RUN][/yellow]"

        header_panel = Panel(title, border_style="green" if not dry_run else "yellow")
        self.console.print(header_panel)

        table = Table(show_header=True, header_style="bold")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")

        table.add_row("Destination", escape(str(summary.destination)) if summary.destination else "-")
        table.add_row("Sources", f"{summary.total_sources:,}")
        table.add_row("Files moved", f"{summary.files_moved:,}")
        table.add_row("Files skipped (name exists)", f"{summary.files_skipped:,}")
        table.add_row("Folders removed", f"{summary.folders_removed:,}")
        table.add_row("Truncated branches", f"{summary.truncated_branches:,}")
        table.add_row("Duration", self._format_duration(summary.duration_seconds))

        self.console.print(table)

        if summary.errors:
            self._display_errors(summary.errors)

    def display_skipped_files(self, skipped: List[Path]) -> None:
        """List files left in place because their name was already taken.

        Args:
            skipped: Source paths that were not moved.
        """
        if not skipped:
            return

        max_display = 10
        lines = [f"- {escape(str(path))}" for path in skipped[:max_display]]
        remaining = len(skipped) - max_display
        if remaining > 0:
            lines.append(f"\n... and {remaining} more")

        self.console.print(
            Panel(
                "\n".join(lines),
                title=f"Skipped, name exists in destination ({len(skipped)})",
                border_style="yellow",
            )
        )

    def _display_errors(self, errors: List[str]) -> None:
        """Display error messages in a separate panel.

        Args:
            errors: List of error messages to display.
        """
        max_display = 10
        displayed_errors = errors[:max_display]
        remaining = len(errors) - max_display

        error_text = "\n".join(f"- {escape(e)}" for e in displayed_errors)
        if remaining > 0:
            error_text += f"\n\n... and {remaining} more errors"

        error_panel = Panel(
            error_text,
            title=f"Errors ({len(errors)})",
            border_style="red",
        )
        self.console.print(error_panel)

    def _format_duration(self, seconds: float) -> str:
        """Convert seconds to human-readable duration.

        Args:
            seconds: Duration in seconds.

        Returns:
            Formatted duration string (e.g., "5m 23s").
        """
        if seconds < 0:
            seconds = 0
        minutes = int(seconds // 60)
        secs = int(seconds % 60)
        return f"{minutes}m {secs}s"
