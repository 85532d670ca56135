"""
Core data models for the directory flattening tool.

This module contains the following dataclasses:
- PathEntry: Immutable snapshot of a selected file or directory
- FlattenOperation: Tracks the state and results of a flatten run
- FlattenSummary: Summary of the flatten workflow results
"""

import os
import stat
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional


@dataclass(frozen=True)
class PathEntry:
    """Snapshot of a filesystem entry taken at one point in time."""
    path: Path                        # Path as selected or listed
    is_dir: bool                      # Directory (after following symlinks)
    is_symlink: bool = False          # Entry itself is a symbolic link
    device: int = 0                   # st_dev of the entry
    inode: int = 0                    # st_ino of the entry

    @classmethod
    def from_stat(cls, path: Path, st_result: os.stat_result, is_symlink: bool = False) -> "PathEntry":
        """Build an entry from an ``os.stat_result``.

        ``is_dir`` follows ``st_result``; a symlink to a directory is still
        flagged through ``is_symlink`` so the walk can treat it as a leaf.
        """
        return cls(
            path=path,
            is_dir=stat.S_ISDIR(st_result.st_mode),
            is_symlink=is_symlink,
            device=st_result.st_dev,
            inode=st_result.st_ino,
        )

    @property
    def name(self) -> str:
        return self.path.name

    def same_entry(self, other: "PathEntry") -> bool:
        """Return True if both snapshots refer to the same inode."""
        if self.inode == 0 or other.inode == 0:
            return self.path == other.path
        return (self.device, self.inode) == (other.device, other.inode)


@dataclass
class FlattenOperation:
    """Tracks the state and results of a flatten run."""
    destination: PathEntry            # Directory receiving the files
    sources: List[PathEntry]          # Top-level entries to flatten
    dry_run: bool                     # Dry run mode flag
    timestamp: datetime               # Operation start time
    files_moved: int = 0              # Files moved into the destination
    files_skipped: int = 0            # Files left in place (name collision)
    folders_removed: int = 0          # Emptied source directories deleted
    folders_kept: int = 0             # Source directories left non-empty
    skipped_files: List[Path] = field(default_factory=list)    # Collision paths
    truncated_paths: List[Path] = field(default_factory=list)  # Depth-exceeded branches
    errors: List[str] = field(default_factory=list)            # Error messages


@dataclass
class FlattenSummary:
    """Summary of the flatten workflow returned by FlattenOrchestrator."""
    destination: Optional[Path] = None  # Resolved destination directory
    total_sources: int = 0            # Top-level sources processed
    files_moved: int = 0              # Total files moved
    files_skipped: int = 0            # Total collisions skipped
    folders_removed: int = 0          # Total emptied directories deleted
    truncated_branches: int = 0       # Branches cut off by the depth bound
    errors: List[str] = field(default_factory=list)  # All error messages
    duration_seconds: float = 0.0     # Total workflow duration in seconds
    aborted: bool = False             # Stopped before any change (user input)
    interrupted: bool = False         # Prompt cancelled or Ctrl+C

    @property
    def succeeded(self) -> bool:
        """True when the run completed without errors or early stop."""
        return not (self.errors or self.aborted or self.interrupted)
