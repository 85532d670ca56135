"""
Models package for the directory flattening tool.

This package provides convenient imports for all data models:
- NoticeLevel: Enum for notification severities
- PathEntry: Snapshot of a selected file or directory
- FlattenOperation: Flatten run state
- FlattenSummary: Flatten workflow summary
"""

from .notice_level import NoticeLevel
from .data_models import (
    PathEntry,
    FlattenOperation,
    FlattenSummary,
)

__all__ = [
    "NoticeLevel",
    "PathEntry",
    "FlattenOperation",
    "FlattenSummary",
]
