"""User interface package for flatdir.

- FlattenTUI: Rich prompt, notifier, progress and summary display.
- ArgumentSelection / FileSelection: where the selected paths come from.
"""

from .flatten_tui import FlattenTUI
from .selection import ArgumentSelection, FileSelection

__all__ = ["FlattenTUI", "ArgumentSelection", "FileSelection"]
