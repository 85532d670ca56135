"""
NoticeLevel enum for messages sent to the notifier.

Levels, in order of severity:
1. ERROR - A hard failure aborted the run, or a branch was truncated
2. WARNING - A user-input problem stopped the run before any change
3. INFO - Progress and summary messages
"""

from enum import Enum


class NoticeLevel(Enum):
    """Severity attached to a notification shown to the user."""
    ERROR = "error"        # Hard failure or depth-exceeded branch
    WARNING = "warn"       # Too few selections, no destination
    INFO = "info"          # Informational
