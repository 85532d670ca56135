"""flatdir - Directory Flattening Tool.

Moves every file found below a set of selected directories directly into a
single destination directory, skipping name collisions, and removes the
source directories left empty.
"""

__version__ = "0.1.0"

from .exceptions import (
    FlattenError,
    StatError,
    CreateError,
    ReadDirError,
    MoveError,
    DeleteError,
    SelectionError,
    TooFewSelectionsError,
    NoDestinationError,
)
from .models import (
    NoticeLevel,
    PathEntry,
    FlattenOperation,
    FlattenSummary,
)

__all__ = [
    "__version__",
    "FlattenError",
    "StatError",
    "CreateError",
    "ReadDirError",
    "MoveError",
    "DeleteError",
    "SelectionError",
    "TooFewSelectionsError",
    "NoDestinationError",
    "NoticeLevel",
    "PathEntry",
    "FlattenOperation",
    "FlattenSummary",
]


def main() -> None:
    """Entry point for the flatdir CLI application.

    Imports and runs the Typer app from the flatdir.cli module.
    """
    from flatdir.cli import app
    app()
