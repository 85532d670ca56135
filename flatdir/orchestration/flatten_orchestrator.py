"""FlattenOrchestrator for coordinating a complete flatten run.

This module provides the FlattenOrchestrator class. It asks for the
destination name, reads the current selection, resolves the destination and
sources, flattens every source and clears the selection once everything has
succeeded. User-facing messages go through FlattenTUI; the optional run log is
written by FlattenLogger.

Example:
    from flatdir.orchestration import FlattenOrchestrator
    from flatdir.ui import ArgumentSelection

    orchestrator = FlattenOrchestrator(
        selection_source=ArgumentSelection([Path("dir1"), Path("dir2")]),
        dry_run=False,
    )
    summary = orchestrator.run(destination_name="merged")
"""

import sys
import time
from contextlib import ExitStack
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from rich.markup import escape

from flatdir.exceptions import FlattenError, SelectionError, TooFewSelectionsError
from flatdir.models import FlattenOperation, FlattenSummary, NoticeLevel, PathEntry
from flatdir.operations import FileOperations, PathResolver
from flatdir.orchestration.flatten_logger import FlattenLogger
from flatdir.ui import FlattenTUI


class FlattenOrchestrator:
    """Orchestrates the flatten workflow.

    The workflow runs in five phases:
    1. Destination - prompt for a name unless one was given
    2. Selection - read the selected paths, at least two are required
    3. Resolution - create the named destination or promote the first
       selected directory, and order the sources
    4. Execution - flatten each source into the destination
    5. Summary - clear the selection on full success, display and log totals

    User-input problems stop the run before anything on disk changes and are
    shown as warnings. Hard errors stop the run where they happen and are
    shown as errors; completed moves are not rolled back.

    Attributes:
        selection_source: Object with ``get_selected()`` and ``clear()``.
        dry_run: Whether to simulate operations without making changes.
        verbose: Whether to display verbose output.
        max_depth: Depth past which branches are not flattened.
        log_file_path: Optional path for the run log file.
        base_dir: Directory a relative destination name is created in.
    """

    MIN_SELECTIONS = 2

    def __init__(
        self,
        selection_source,
        tui: Optional[FlattenTUI] = None,
        dry_run: bool = False,
        verbose: bool = False,
        max_depth: int = FileOperations.MAX_DEPTH,
        log_file_path: Optional[Path] = None,
        base_dir: Optional[Path] = None,
    ) -> None:
        """Initialize the FlattenOrchestrator.

        Args:
            selection_source: Supplies the selected paths and clears them.
            tui: FlattenTUI used for the prompt, notices and summary.
                Defaults to a new FlattenTUI().
            dry_run: If True, simulate operations without making changes.
            verbose: If True, display additional details during execution.
            max_depth: Recursion depth past which a branch is truncated.
            log_file_path: If given, a run log is written to this path.
            base_dir: Directory relative destination names are resolved
                against. Defaults to the current working directory.

        Raises:
            ValueError: If max_depth is negative.
        """
        if max_depth < 0:
            raise ValueError(f"max_depth must not be negative, got {max_depth}")

        self.selection_source = selection_source
        self.dry_run = dry_run
        self.verbose = verbose
        self.max_depth = max_depth
        self.log_file_path = log_file_path
        self.base_dir = base_dir

        self._tui = tui or FlattenTUI()
        self._resolver = PathResolver()

    def run(self, destination_name: Optional[str] = None) -> FlattenSummary:
        """Execute the flatten workflow.

        Args:
            destination_name: Name of the directory to flatten into. An empty
                string flattens into the first selected directory. If None,
                the user is prompted.

        Returns:
            FlattenSummary with totals, errors and how the run ended.
        """
        start_time = time.time()

        # Phase 1: Destination name
        if destination_name is None:
            destination_name = self._tui.prompt_destination_name()
            if destination_name is None:
                return FlattenSummary(interrupted=True, duration_seconds=time.time() - start_time)

        # Phase 2: Selection
        try:
            selections = self.selection_source.get_selected()
            if len(selections) < self.MIN_SELECTIONS:
                raise TooFewSelectionsError(
                    "Must select at least two files/dirs in order to flatten!"
                )
        except SelectionError as e:
            return self._abort(str(e), start_time)
        except OSError as e:
            return self._fail(f"Failed to read selection: {e}", start_time)

        # Phase 3: Resolution
        file_ops = FileOperations(
            dry_run=self.dry_run,
            max_depth=self.max_depth,
            notify=self._tui.notify,
        )
        try:
            destination: Optional[PathEntry] = None
            if destination_name:
                destination = file_ops.ensure_directory(self._destination_path(destination_name))
            destination, sources = self._resolver.resolve(destination, selections)
        except SelectionError as e:
            return self._abort(str(e), start_time)
        except FlattenError as e:
            return self._fail(str(e), start_time)

        # Phases 4 & 5, with a run log if requested
        with ExitStack() as stack:
            run_log: Optional[FlattenLogger] = None
            if self.log_file_path is not None:
                try:
                    run_log = stack.enter_context(
                        FlattenLogger(log_file_path=self.log_file_path, dry_run=self.dry_run)
                    )
                except OSError as e:
                    print(f"Warning: Could not create log file: {e}", file=sys.stderr)

            if run_log is not None:
                run_log.log_header()
                run_log.log_resolution(destination, sources)

            summary = self._execute_flatten(file_ops, destination, sources, run_log, start_time)

            if run_log is not None:
                run_log.log_summary(summary)
                if self.verbose:
                    self._tui.console.print(f"[dim]Log file: {escape(str(run_log.get_log_path()))}[/dim]")

        return summary

    def _execute_flatten(
        self,
        file_ops: FileOperations,
        destination: PathEntry,
        sources: List[PathEntry],
        run_log: Optional[FlattenLogger],
        start_time: float,
    ) -> FlattenSummary:
        """Flatten all sources, clear the selection on success and report.

        Args:
            file_ops: Configured FileOperations instance.
            destination: Directory receiving the files.
            sources: Top-level entries in processing order.
            run_log: Optional FlattenLogger for the run log.
            start_time: Workflow start, for the duration.

        Returns:
            FlattenSummary for the run.
        """
        operation = FlattenOperation(
            destination=destination,
            sources=list(sources),
            dry_run=self.dry_run,
            timestamp=datetime.now(),
        )
        interrupted = False

        if self.verbose:
            self._tui.console.print(
                f"[dim]Flattening {len(sources)} source(s) into {escape(str(destination.path))}[/dim]"
            )

        progress, callback = self._tui.create_progress_callback(destination.name or str(destination.path))
        file_ops.progress_callback = callback

        try:
            with progress:
                file_ops.flatten_sources(destination, sources, operation)
        except FlattenError as e:
            operation.errors.append(str(e))
            self._tui.notify(NoticeLevel.ERROR, str(e))
        except KeyboardInterrupt:
            interrupted = True
            self._tui.notify(NoticeLevel.WARNING, "Flatten interrupted by user, stopping.")

        if run_log is not None:
            run_log.log_flatten_operation(operation)

        summary = self._aggregate_summary(operation, time.time() - start_time)
        summary.interrupted = interrupted

        if summary.succeeded and not self.dry_run:
            self.selection_source.clear()

        self._tui.display_flatten_summary(summary, self.dry_run)
        if operation.skipped_files:
            self._tui.display_skipped_files(operation.skipped_files)

        return summary

    def _aggregate_summary(self, operation: FlattenOperation, duration: float) -> FlattenSummary:
        """Build the workflow summary from a flatten operation."""
        return FlattenSummary(
            destination=operation.destination.path,
            total_sources=len(operation.sources),
            files_moved=operation.files_moved,
            files_skipped=operation.files_skipped,
            folders_removed=operation.folders_removed,
            truncated_branches=len(operation.truncated_paths),
            errors=list(operation.errors),
            duration_seconds=duration,
        )

    def _destination_path(self, destination_name: str) -> Path:
        """Resolve a destination name against base_dir, if one is set."""
        path = Path(destination_name).expanduser()
        if self.base_dir is not None and not path.is_absolute():
            path = self.base_dir / path
        return path

    def _abort(self, message: str, start_time: float) -> FlattenSummary:
        """Stop on a user-input problem: warn, change nothing."""
        self._tui.notify(NoticeLevel.WARNING, message)
        return FlattenSummary(aborted=True, duration_seconds=time.time() - start_time)

    def _fail(self, message: str, start_time: float) -> FlattenSummary:
        """Stop on a hard error raised before flattening started."""
        self._tui.notify(NoticeLevel.ERROR, message)
        return FlattenSummary(errors=[message], duration_seconds=time.time() - start_time)
