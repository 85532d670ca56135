"""File operations package for flatdir.

This package provides the classes that touch the filesystem during a flatten
run: PathResolver splits a selection into a destination and its sources, and
FileOperations creates the destination, moves files into it and removes the
source directories left empty.

Example:
    >>> from flatdir.operations import FileOperations, PathResolver
    >>> destination, sources = PathResolver().resolve(None, selected_paths)
    >>> operation = FileOperations().flatten_sources(destination, sources)
    >>> print(f"Moved: {operation.files_moved}, Skipped: {operation.files_skipped}")
"""

from .file_operations import FileOperations
from .path_resolver import PathResolver, stat_entry

__all__ = ["FileOperations", "PathResolver", "stat_entry"]
