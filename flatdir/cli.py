"""
flatdir - CLI Interface.

A command-line interface for flattening selected directories into a single
destination directory. Files are moved, never overwritten; source directories
left empty are removed.

Usage Examples:
    # Flatten two directories into a new directory "merged"
    python -m flatdir flatten dir1 dir2 --dest merged

    # Flatten into the first selected directory (prompted name left blank)
    python -m flatdir flatten photos/ photos-2019/ photos-2020/

    # Read the selection from a file manager's selection file
    python -m flatdir flatten --selection-file ~/.cache/selection --dest merged

    # Preview without touching anything, with a run log
    python -m flatdir flatten dir1 dir2 --dest merged --dry-run --log-file flatten.log
"""

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from flatdir.operations import FileOperations
from flatdir.orchestration import FlattenOrchestrator
from flatdir.models import FlattenSummary
from flatdir.ui import ArgumentSelection, FileSelection, FlattenTUI

__version__ = "0.1.0"

# Exit codes
EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130

# Initialize Typer app
app = typer.Typer(
    name="flatdir",
    help="Directory Flattening Tool - Move nested files into one directory.",
    add_completion=False,
    no_args_is_help=True,
)

# Rich console for consistent output formatting
console = Console()


def version_callback(value: bool) -> None:
    """Display version information and exit."""
    if value:
        console.print(f"flatdir v{__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route library logging through Rich; DEBUG when verbose, else WARNING."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def validate_max_depth(value: int) -> int:
    """
    Validate the recursion depth bound.

    Raises:
        typer.BadParameter: If value is out of range.
    """
    if not 1 <= value <= 1000:
        raise typer.BadParameter("Max depth must be between 1 and 1000")
    return value


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Directory Flattening Tool - Move nested files into one directory."""
    pass


@app.command()
def flatten(
    paths: Optional[List[Path]] = typer.Argument(
        None,
        help="Selected files and directories to flatten.",
        exists=False,  # Missing paths are reported by the resolver
    ),
    dest: Optional[str] = typer.Option(
        None,
        "--dest",
        "-d",
        help=(
            "Name of the directory to flatten into. Pass an empty string to "
            "use the first selected directory. Prompted for if omitted."
        ),
    ),
    selection_file: Optional[Path] = typer.Option(
        None,
        "--selection-file",
        "-s",
        help="Read the selection (one path per line) from this file and clear it on success.",
    ),
    max_depth: int = typer.Option(
        FileOperations.MAX_DEPTH,
        "--max-depth",
        "-m",
        help="Stop descending below this many directory levels.",
        callback=validate_max_depth,
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-n",
        help="Simulate the flatten without making changes.",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        "-l",
        help="Path for log file output.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-V",
        help="Enable verbose output.",
    ),
) -> None:
    """
    Flatten the selected entries into a single directory.

    Every file below the selected directories is moved directly into the
    destination. Files whose name already exists there are left in place.
    Source directories emptied by the move are removed.
    """
    configure_logging(verbose)

    if paths and selection_file:
        console.print(
            "[red]Error:[/red] Give either PATHS or --selection-file, not both."
        )
        raise typer.Exit(EXIT_USAGE)

    if selection_file is not None:
        selection_source = FileSelection(selection_file)
    else:
        selection_source = ArgumentSelection(paths or [])

    if dry_run:
        console.print("[yellow][DRY RUN MODE][/yellow] No files will be modified.\n")

    try:
        orchestrator = FlattenOrchestrator(
            selection_source=selection_source,
            tui=FlattenTUI(console=console),
            dry_run=dry_run,
            verbose=verbose,
            max_depth=max_depth,
            log_file_path=log_file,
        )

        summary = orchestrator.run(destination_name=dest)

    except KeyboardInterrupt:
        console.print("\n[yellow]Flatten interrupted by user.[/yellow]")
        raise typer.Exit(EXIT_INTERRUPTED)

    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(EXIT_ERROR)

    raise typer.Exit(exit_code_for(summary))


def exit_code_for(summary: FlattenSummary) -> int:
    """Map a flatten summary to the process exit code."""
    if summary.interrupted:
        return EXIT_INTERRUPTED
    if summary.errors:
        return EXIT_ERROR
    if summary.aborted:
        return EXIT_USAGE
    return EXIT_OK


if __name__ == "__main__":
    app()
