"""Destination and source resolution for flatten runs.

This module provides the PathResolver class, which stats every selected path
and splits the selection into a single destination directory and the ordered
list of sources to flatten into it.

Example:
    >>> from flatdir.operations import PathResolver
    >>> resolver = PathResolver()
    >>> destination, sources = resolver.resolve(None, [Path("a"), Path("b")])
"""

import logging
import os
import stat
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from flatdir.exceptions import NoDestinationError, StatError, TooFewSelectionsError
from flatdir.models import PathEntry

logger = logging.getLogger(__name__)


def stat_entry(path: Path) -> PathEntry:
    """
    Take a PathEntry snapshot of ``path``.

    The entry is classified by following symlinks, so a link to a directory
    can serve as a destination; ``is_symlink`` is recorded from ``lstat``.

    Raises:
        StatError: If the path cannot be stat'ed.
    """
    try:
        link_stat = os.lstat(path)
        is_symlink = stat.S_ISLNK(link_stat.st_mode)
        st_result = os.stat(path) if is_symlink else link_stat
    except OSError as e:
        raise StatError(f"Failed to stat '{path}': {e.strerror or e}", path=path, cause=e) from e

    return PathEntry.from_stat(path, st_result, is_symlink=is_symlink)


class PathResolver:
    """Resolves a selection into a destination and its sources.

    If a destination was prepared by the caller, every selected entry is a
    source. Otherwise the first selected directory is promoted to be the
    destination and everything else, files and directories alike, becomes a
    source in encounter order.
    """

    def resolve(
        self,
        destination: Optional[PathEntry],
        selections: Sequence[Path],
    ) -> Tuple[PathEntry, List[PathEntry]]:
        """
        Split ``selections`` into a destination and the sources to flatten.

        Every selected path is stat'ed before any decision is returned, so a
        single unreadable path aborts the whole resolution.

        Parameters:
            destination (Optional[PathEntry]): Destination prepared by the caller, or None to pick one from ``selections``.
            selections (Sequence[Path]): Selected paths in processing order.

        Returns:
            Tuple[PathEntry, List[PathEntry]]: The destination and the ordered sources. The destination is never among the sources.

        Raises:
            StatError: If any selected path cannot be stat'ed.
            NoDestinationError: If no destination was given and no directory was selected.
            TooFewSelectionsError: If nothing is left to flatten once the destination is set aside.
        """
        entries = [stat_entry(Path(path)) for path in selections]

        resolved = destination
        sources: List[PathEntry] = []

        for entry in entries:
            if resolved is None and entry.is_dir:
                resolved = entry
                logger.debug(f"Using first selected directory as destination: {entry.path}")
                continue

            if resolved is not None and entry.same_entry(resolved):
                logger.debug(f"Dropping destination from sources: {entry.path}")
                continue

            sources.append(entry)

        if resolved is None:
            raise NoDestinationError(
                "Flatten target dir was left empty but no directories were selected"
            )

        if not sources:
            raise TooFewSelectionsError(
                "Nothing to flatten: the selection only contains the destination",
                path=resolved.path,
            )

        return resolved, sources
