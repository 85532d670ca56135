"""
Exception hierarchy for the directory flattening tool.

Hard errors (StatError, CreateError, ReadDirError, MoveError, DeleteError)
abort the remainder of a flatten run. SelectionError subclasses describe
user-input problems that stop the run before anything on disk changes.
"""

from pathlib import Path
from typing import Optional


class FlattenError(Exception):
    """Base class for all flatten failures.

    Attributes:
        path: Filesystem path the failing operation was acting on.
        cause: Underlying OSError, if any.
    """

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        cause: Optional[OSError] = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.cause = cause

    @property
    def errno(self) -> Optional[int]:
        """errno of the underlying OSError, or None."""
        return getattr(self.cause, "errno", None)


class StatError(FlattenError):
    """A selected path or created directory could not be stat'ed."""


class CreateError(FlattenError):
    """The destination directory could not be created."""


class ReadDirError(FlattenError):
    """A source directory could not be listed."""


class MoveError(FlattenError):
    """A file could not be moved into the destination."""


class DeleteError(FlattenError):
    """An emptied source directory could not be removed."""


class SelectionError(FlattenError):
    """The selection cannot be flattened as given (user-input problem)."""


class TooFewSelectionsError(SelectionError):
    """Fewer than two entries were selected."""


class NoDestinationError(SelectionError):
    """No destination name was given and no directory was selected."""
