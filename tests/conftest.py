"""Pytest fixtures for flatdir tests."""

import io
import tempfile
from pathlib import Path
from typing import Dict, Generator, List

import pytest
from rich.console import Console

from flatdir.models import FlattenSummary, PathEntry
from flatdir.operations import stat_entry
from flatdir.ui import FlattenTUI


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests of a single component")
    config.addinivalue_line("markers", "integration: end-to-end tests on a real directory tree")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for isolated test environments.

    Yields:
        Path to the temporary directory.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def flatten_tree(temp_dir: Path) -> Dict[str, Path]:
    """Create the two-directory tree used by most flatten tests.

    Creates:
        temp_dir/
        ├── dir1/
        │   ├── a.txt
        │   └── sub/
        │       └── b.txt
        └── dir2/
            └── c.txt

    Args:
        temp_dir: Temporary directory fixture.

    Returns:
        Dictionary with the base directory and both source directories.
    """
    dir1 = temp_dir / "dir1"
    (dir1 / "sub").mkdir(parents=True)
    (dir1 / "a.txt").write_text("a")
    (dir1 / "sub" / "b.txt").write_text("b")

    dir2 = temp_dir / "dir2"
    dir2.mkdir()
    (dir2 / "c.txt").write_text("c")

    return {"base": temp_dir, "dir1": dir1, "dir2": dir2}


@pytest.fixture
def deep_chain(temp_dir: Path) -> List[Path]:
    """Create a chain of 12 nested directories, each holding one file.

    Creates temp_dir/chain/d0/d1/.../d11 where directory ``di`` contains
    ``f{i}.txt``. Relative to ``d0`` (depth 0) the file in ``di`` sits at
    depth ``i + 1``.

    Returns:
        The directories d0..d11, outermost first.
    """
    dirs = []
    current = temp_dir / "chain"
    for i in range(12):
        current = current / f"d{i}"
        current.mkdir(parents=True)
        (current / f"f{i}.txt").write_text(f"level {i}")
        dirs.append(current)
    return dirs


@pytest.fixture
def destination(temp_dir: Path) -> PathEntry:
    """Create an empty destination directory and return its snapshot."""
    dest = temp_dir / "merged"
    dest.mkdir()
    return stat_entry(dest)


@pytest.fixture
def tui_with_output() -> tuple[FlattenTUI, io.StringIO]:
    """Create a FlattenTUI with captured output.

    Returns:
        Tuple of (FlattenTUI instance, StringIO for reading output).
    """
    output = io.StringIO()
    console = Console(file=output, force_terminal=False, color_system=None, width=200)
    return FlattenTUI(console=console), output


@pytest.fixture
def sample_flatten_summary() -> FlattenSummary:
    """Summary of a small completed run."""
    return FlattenSummary(
        destination=Path("/data/merged"),
        total_sources=2,
        files_moved=1234,
        files_skipped=3,
        folders_removed=5,
        truncated_branches=1,
        duration_seconds=83.4,
    )
