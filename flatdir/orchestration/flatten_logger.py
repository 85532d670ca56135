"""FlattenLogger for writing a structured report of a flatten run.

This module provides the FlattenLogger class that writes a plain-text log
file with a header, the resolved destination and sources, per-run flatten
results and a closing summary.
"""

import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional, TextIO

from flatdir.models import FlattenOperation, FlattenSummary, PathEntry


class FlattenLogger:
    """Logger for flatten runs with structured output format.

    Usage:
        with FlattenLogger(dry_run=True) as logger:
            logger.log_header()
            logger.log_resolution(destination, sources)
            # ... perform flatten ...
            logger.log_flatten_operation(operation)
            logger.log_summary(summary)

    Attributes:
        SEPARATOR: The 65-character separator line used between sections.
    """

    SEPARATOR = "=" * 65

    def __init__(
        self,
        log_file_path: Optional[Path] = None,
        dry_run: bool = False,
    ) -> None:
        """Initialize the FlattenLogger.

        Args:
            log_file_path: Optional path for the log file. If not provided,
                generates a timestamped filename in the current directory.
            dry_run: Whether this is a dry run (no actual changes made).

        Raises:
            OSError: If the log file path is not writable.
        """
        self._dry_run = dry_run
        self._start_timestamp = datetime.now()
        self._file_handle: Optional[TextIO] = None

        if log_file_path is None:
            timestamp_str = self._start_timestamp.strftime("%Y-%m-%d_%H-%M-%S")
            self._log_file_path = Path.cwd() / f"flatten_log_{timestamp_str}.log"
        else:
            self._log_file_path = Path(log_file_path)

        self._validate_path()

    def _validate_path(self) -> None:
        """Validate that the log file path is writable.

        Raises:
            OSError: If the parent directory doesn't exist or is not writable.
        """
        parent = self._log_file_path.parent
        if not parent.exists():
            raise OSError(f"Parent directory does not exist: {parent}")
        if not parent.is_dir():
            raise OSError(f"Parent path is not a directory: {parent}")
        try:
            test_file = parent / f".flatdir_test_{id(self)}"
            test_file.touch()
            test_file.unlink()
        except PermissionError:
            raise OSError(f"Permission denied: cannot write to {parent}")

    def __enter__(self) -> "FlattenLogger":
        """Open the log file for writing.

        Raises:
            OSError: If the file cannot be opened for writing.
        """
        try:
            self._file_handle = open(self._log_file_path, "w", encoding="utf-8")
        except OSError as e:
            raise OSError(f"Cannot open log file for writing: {e}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Close the log file, even if an exception occurred."""
        if self._file_handle is not None:
            try:
                self._file_handle.close()
            except OSError as e:
                print(f"Warning: Error closing log file: {e}", file=sys.stderr)
            finally:
                self._file_handle = None

    def get_log_path(self) -> Path:
        """Get the path to the log file."""
        return self._log_file_path

    def log_header(self) -> None:
        """Write the title, timestamp, and mode (LIVE or DRY RUN)."""
        self._write_separator()
        self._write_line("flatdir - Flatten Log")
        self._write_separator()
        self._write_line(f"Timestamp: {self._format_timestamp(self._start_timestamp)}")
        mode = "DRY RUN" if self._dry_run else "LIVE"
        self._write_line(f"Mode: {mode}")
        self._write_line("")

    def log_resolution(self, destination: PathEntry, sources: List[PathEntry]) -> None:
        """Write the resolved destination and the sources to flatten.

        Args:
            destination: Directory receiving the files.
            sources: Top-level entries in processing order.
        """
        self._write_separator()
        self._write_line("RESOLUTION")
        self._write_separator()
        self._write_line(f"Destination: {destination.path}")
        self._write_line(f"Sources: {len(sources)}")
        for source in sources:
            kind = "dir " if source.is_dir and not source.is_symlink else "file"
            self._write_line(f"- [{kind}] {source.path}", indent=2)
        self._write_line("")

    def log_flatten_operation(self, operation: FlattenOperation) -> None:
        """Write the results of a flatten run.

        Args:
            operation: The FlattenOperation with statistics.
        """
        self._write_separator()
        self._write_line("FLATTEN PHASE")
        self._write_separator()
        self._write_line(
            f"[{self._format_timestamp(operation.timestamp)}] "
            f"Flattening into: {operation.destination.path}"
        )
        self._write_line(f"Files moved: {operation.files_moved}", indent=2)
        self._write_line(f"Files skipped (name exists): {operation.files_skipped}", indent=2)
        self._write_line(f"Empty folders removed: {operation.folders_removed}", indent=2)
        self._write_line(f"Folders kept (not empty): {operation.folders_kept}", indent=2)

        for path in operation.skipped_files:
            self._write_line(f"! Skipped: {path}", indent=4)

        for path in operation.truncated_paths:
            self._write_line(f"! Max depth reached, not flattened: {path}", indent=4)

        if operation.errors:
            self._write_line("Errors:", indent=2)
            for error in operation.errors:
                self._write_line(f"- {error}", indent=4)

        self._write_line(f"[{self._format_timestamp(datetime.now())}] Completed flatten")
        self._write_line("")

    def log_summary(self, summary: FlattenSummary) -> None:
        """Write the summary section to the log file.

        Args:
            summary: The FlattenSummary object with aggregated statistics.
        """
        self._write_separator()
        self._write_line("SUMMARY")
        self._write_separator()
        self._write_line(f"Destination: {summary.destination}")
        self._write_line(f"Sources flattened: {summary.total_sources}")
        self._write_line(f"Files moved: {summary.files_moved:,}")
        self._write_line(f"Files skipped (name exists): {summary.files_skipped:,}")
        self._write_line(f"Empty folders removed: {summary.folders_removed}")
        self._write_line(f"Truncated branches: {summary.truncated_branches}")

        if summary.errors:
            self._write_line(f"Total errors: {len(summary.errors)}")
            self._write_line("Errors:")
            for error in summary.errors:
                self._write_line(f"  - {error}")

        self._write_line(f"Duration: {self._format_duration(summary.duration_seconds)}")
        self._write_line("")
        self._write_line(f"Log file: {self._log_file_path}")
        self._write_separator()

    def _format_duration(self, seconds: float) -> str:
        """Format duration like "5m 23s", "1h 5m 30s", or "45s"."""
        total_seconds = int(seconds)

        if total_seconds < 60:
            return f"{total_seconds}s"

        hours = total_seconds // 3600
        minutes = (total_seconds % 3600) // 60
        secs = total_seconds % 60

        if hours > 0:
            return f"{hours}h {minutes}m {secs}s"
        else:
            return f"{minutes}m {secs}s"

    def _format_timestamp(self, dt: datetime) -> str:
        return dt.strftime("%Y-%m-%d %H:%M:%S")

    def _write_separator(self) -> None:
        self._write_line(self.SEPARATOR)

    def _write_line(self, text: str, indent: int = 0) -> None:
        """Write a line to the log file with optional indentation.

        Args:
            text: The text to write.
            indent: Number of spaces to indent the line.
        """
        if self._file_handle is None:
            print(
                f"Warning: Attempted to write to closed log file: {text}",
                file=sys.stderr,
            )
            return

        try:
            self._file_handle.write(" " * indent + text + "\n")
        except OSError as e:
            print(f"Warning: Error writing to log file: {e}", file=sys.stderr)
