"""Selection sources for flatten runs.

A selection source supplies the paths the user picked and can clear that
selection once a run has fully succeeded. Two sources are provided:

- ArgumentSelection: paths given on the command line.
- FileSelection: a newline-separated list of paths in a selection file, the
  format file managers write when handing their selection to an external
  command.

Both return paths sorted by their string form so processing order is
deterministic.
"""

from pathlib import Path
from typing import Iterable, List


def _sorted_unique(paths: Iterable[Path]) -> List[Path]:
    """Drop duplicates and sort by the string form of each path."""
    unique = {str(path): path for path in paths}
    return [unique[key] for key in sorted(unique)]


class ArgumentSelection:
    """Selection made of paths passed directly by the caller."""

    def __init__(self, paths: Iterable[Path]) -> None:
        self._paths = [Path(p) for p in paths]

    def get_selected(self) -> List[Path]:
        """Return the selected paths, sorted by path string."""
        return _sorted_unique(self._paths)

    def clear(self) -> None:
        """Forget the selection."""
        self._paths = []


class FileSelection:
    """Selection stored as one path per line in a text file.

    Blank lines are ignored. Relative entries are kept as written and so
    resolve against the working directory of the run.

    Args:
        selection_file: Path to the selection file.
    """

    def __init__(self, selection_file: Path) -> None:
        self.selection_file = Path(selection_file)

    def get_selected(self) -> List[Path]:
        """
        Read the selection file.

        Returns:
            Sorted list of selected paths; empty if the file does not exist.

        Raises:
            OSError: If the file exists but cannot be read.
        """
        if not self.selection_file.exists():
            return []

        text = self.selection_file.read_text(encoding="utf-8")
        return _sorted_unique(Path(line.strip()) for line in text.splitlines() if line.strip())

    def clear(self) -> None:
        """Truncate the selection file so the selection is empty."""
        if self.selection_file.exists():
            self.selection_file.write_text("", encoding="utf-8")
