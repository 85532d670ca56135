"""
File operations module for the directory flattening tool.

This module contains the FileOperations class: destination creation, the
depth-bounded recursive flatten walk, non-clobbering moves and removal of
source directories left empty by the walk.
"""

import errno
import logging
import os
import shutil
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Set

from flatdir.exceptions import (
    CreateError,
    DeleteError,
    MoveError,
    ReadDirError,
)
from flatdir.models import FlattenOperation, NoticeLevel, PathEntry
from flatdir.operations.path_resolver import stat_entry

# Configure module logger
logger = logging.getLogger(__name__)

# errno values rmdir reports for a directory that still has entries
_NOT_EMPTY_ERRNOS = (errno.ENOTEMPTY, errno.EEXIST)


class FileOperations:
    """
    Moves every file below a set of sources directly into one destination.

    Files are moved with a non-clobbering move: a name already taken in the
    destination leaves the source file where it is. Directories are walked
    depth-first and removed once their last child has been moved out. The
    walk stops descending below ``max_depth``. All operations support
    dry-run mode.
    """

    # Deepest level the walk descends to below a top-level source
    MAX_DEPTH = 10

    def __init__(
        self,
        dry_run: bool = False,
        max_depth: int = MAX_DEPTH,
        notify: Optional[Callable[[NoticeLevel, str], None]] = None,
        progress_callback: Optional[Callable[[Path], None]] = None,
    ) -> None:
        """
        Create a FileOperations instance.

        Parameters:
            dry_run (bool): If True, simulate operations without making filesystem changes.
            max_depth (int): Recursion depth past which a branch is truncated.
            notify (Optional[Callable[[NoticeLevel, str], None]]): Receives notices such as depth-exceeded branches.
            progress_callback (Optional[Callable[[Path], None]]): Called with each file path after it has been handled.
        """
        self.dry_run = dry_run
        self.max_depth = max_depth
        self._notify = notify
        self.progress_callback = progress_callback
        # Names claimed in the destination during a dry run
        self._planned_names: Set[str] = set()

    def ensure_directory(self, path: Path) -> PathEntry:
        """
        Create ``path`` and any missing parents, then snapshot it.

        Relative paths are resolved against the current working directory,
        ``..`` segments included. An existing directory is not an error.

        Raises:
            CreateError: If the directory cannot be created or a non-directory is in the way.
            StatError: If the created directory cannot be stat'ed.
        """
        path = Path(os.path.abspath(path))

        if self.dry_run:
            logger.debug(f"[DRY RUN] Would create directory: {path}")
            if path.is_dir():
                return stat_entry(path)
            if os.path.lexists(path):
                raise CreateError(f"Failed to create destination '{path}': File exists", path=path)
            return PathEntry(path=path, is_dir=True)

        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CreateError(
                f"Failed to create destination '{path}' (errno {e.errno}): {e.strerror or e}",
                path=path,
                cause=e,
            ) from e

        logger.debug(f"Destination ready: {path}")
        return stat_entry(path)

    def flatten_sources(
        self,
        destination: PathEntry,
        sources: Sequence[PathEntry],
        operation: Optional[FlattenOperation] = None,
    ) -> FlattenOperation:
        """
        Flatten every source into ``destination``, in order.

        The first hard error propagates and leaves the remaining sources
        untouched; work already done is not rolled back.

        Parameters:
            destination (PathEntry): Directory receiving the files.
            sources (Sequence[PathEntry]): Top-level entries, each walked from depth 0.
            operation (Optional[FlattenOperation]): Accumulator to fill; a new one is created if omitted. Passing one keeps partial results available when an error propagates.

        Returns:
            FlattenOperation: Counters and paths gathered during the run.
        """
        if operation is None:
            operation = FlattenOperation(
                destination=destination,
                sources=list(sources),
                dry_run=self.dry_run,
                timestamp=datetime.now(),
            )
        self._planned_names.clear()

        for source in sources:
            self.flatten(destination, source, 0, operation)

        return operation

    def flatten(
        self,
        destination: PathEntry,
        source: PathEntry,
        depth: int = 0,
        operation: Optional[FlattenOperation] = None,
    ) -> bool:
        """
        Flatten one entry into ``destination``.

        Files are moved; directories are walked child by child at
        ``depth + 1`` and then removed if nothing is left in them. A branch
        deeper than ``max_depth`` is reported and left alone without failing
        the run.

        Parameters:
            destination (PathEntry): Directory receiving the files.
            source (PathEntry): File or directory to flatten.
            depth (int): Recursion depth of ``source``; top-level sources are 0.
            operation (Optional[FlattenOperation]): Accumulator for counters; a throwaway one is used if omitted.

        Returns:
            bool: True if ``source`` is gone from its original location afterwards (or would be, in dry-run mode).

        Raises:
            MoveError: If a file cannot be moved for a reason other than a name collision.
            ReadDirError: If a directory cannot be listed.
            DeleteError: If an emptied directory cannot be removed.
        """
        if operation is None:
            operation = FlattenOperation(
                destination=destination,
                sources=[source],
                dry_run=self.dry_run,
                timestamp=datetime.now(),
            )

        if depth > self.max_depth:
            message = (
                f"Max recursion depth reached, not going any deeper: {source.path}"
            )
            operation.truncated_paths.append(source.path)
            self._send_notice(NoticeLevel.ERROR, message)
            return False

        if source.same_entry(destination):
            logger.debug(f"Skipping destination directory itself: {source.path}")
            return False

        if not source.is_dir or source.is_symlink:
            return self._move_file(destination, source, operation)

        vacated = True
        for child in self._list_children(source):
            if not self.flatten(destination, child, depth + 1, operation):
                vacated = False

        if self.dry_run:
            if vacated:
                operation.folders_removed += 1
                logger.debug(f"[DRY RUN] Would remove emptied directory: {source.path}")
            else:
                operation.folders_kept += 1
            return vacated

        return self.remove_if_empty(source, operation)

    def remove_if_empty(
        self,
        directory: PathEntry,
        operation: Optional[FlattenOperation] = None,
    ) -> bool:
        """
        Delete ``directory`` if it holds no entries.

        Emptiness is left to ``os.rmdir``, which refuses non-empty
        directories. A directory that still holds a file skipped because of a
        name collision is kept intact and is not an error.

        Dry runs never reach this method; ``flatten`` decides removal from
        the simulated moves instead.

        Returns:
            bool: True if the directory was removed.

        Raises:
            DeleteError: If removal fails for any reason other than the directory being non-empty.
        """
        try:
            os.rmdir(directory.path)
        except OSError as e:
            if e.errno in _NOT_EMPTY_ERRNOS:
                logger.debug(f"Keeping non-empty directory: {directory.path}")
                if operation is not None:
                    operation.folders_kept += 1
                return False
            raise DeleteError(
                f"Failed to delete source directory '{directory.path}' "
                f"(errno {e.errno}): {e.strerror or e}",
                path=directory.path,
                cause=e,
            ) from e

        if operation is not None:
            operation.folders_removed += 1
        logger.debug(f"Removed empty directory: {directory.path}")
        return True

    def _move_file(
        self,
        destination: PathEntry,
        source: PathEntry,
        operation: FlattenOperation,
    ) -> bool:
        """
        Move a single file (or symlink) into the destination without overwriting.

        Returns:
            bool: True if moved, False if skipped because the name is taken.

        Raises:
            MoveError: If the move itself fails.
        """
        target = destination.path / source.name

        if self._name_taken(target):
            logger.warning(f"Skipped (name exists in destination): {source.path}")
            operation.files_skipped += 1
            operation.skipped_files.append(source.path)
            self._report_progress(source.path)
            return False

        if self.dry_run:
            logger.debug(f"[DRY RUN] Would move: {source.path} -> {target}")
            self._planned_names.add(source.name)
        else:
            logger.debug(f"moving '{source.path}' to '{destination.path}'")
            try:
                shutil.move(str(source.path), str(target))
            except OSError as e:
                raise MoveError(
                    f"Failed to move '{source.path}' to '{destination.path}' "
                    f"(errno {e.errno}): {e.strerror or e}",
                    path=source.path,
                    cause=e,
                ) from e

        operation.files_moved += 1
        self._report_progress(source.path)
        return True

    def _name_taken(self, target: Path) -> bool:
        """Return True if ``target`` already exists, dangling symlinks included."""
        if self.dry_run and target.name in self._planned_names:
            return True
        return os.path.lexists(target)

    def _list_children(self, directory: PathEntry) -> List[PathEntry]:
        """
        Snapshot the immediate children of ``directory`` in listing order.

        The full listing is taken before any child is touched, so moves and
        removals during the walk cannot disturb the iteration.

        Raises:
            ReadDirError: If the directory cannot be listed or a child cannot be stat'ed.
        """
        children: List[PathEntry] = []
        try:
            with os.scandir(directory.path) as it:
                for dir_entry in it:
                    is_symlink = dir_entry.is_symlink()
                    st_result = dir_entry.stat(follow_symlinks=False)
                    children.append(
                        PathEntry(
                            path=Path(dir_entry.path),
                            is_dir=dir_entry.is_dir(follow_symlinks=False),
                            is_symlink=is_symlink,
                            device=st_result.st_dev,
                            inode=st_result.st_ino,
                        )
                    )
        except OSError as e:
            raise ReadDirError(
                f"Error reading directory '{directory.path}': {e.strerror or e}",
                path=directory.path,
                cause=e,
            ) from e

        return children

    def _send_notice(self, level: NoticeLevel, message: str) -> None:
        if self._notify is not None:
            self._notify(level, message)
        else:
            logger.warning(message)

    def _report_progress(self, path: Path) -> None:
        if self.progress_callback is not None:
            self.progress_callback(path)
