"""
Unit tests for the flatdir data models.

Tests cover:
- PathEntry construction from stat results
- PathEntry identity comparison
- FlattenOperation defaults
- FlattenSummary success flag
"""

import os
from datetime import datetime
from pathlib import Path

import pytest

from flatdir.models import FlattenOperation, FlattenSummary, NoticeLevel, PathEntry


@pytest.mark.unit
class TestPathEntry:
    """Tests for the PathEntry snapshot."""

    def test_from_stat_directory(self, temp_dir: Path):
        entry = PathEntry.from_stat(temp_dir, os.stat(temp_dir))

        assert entry.path == temp_dir
        assert entry.is_dir is True
        assert entry.is_symlink is False
        assert entry.inode == os.stat(temp_dir).st_ino

    def test_from_stat_file(self, temp_dir: Path):
        file_path = temp_dir / "file.txt"
        file_path.write_text("content")

        entry = PathEntry.from_stat(file_path, os.stat(file_path))

        assert entry.is_dir is False
        assert entry.name == "file.txt"

    def test_entries_are_immutable(self):
        entry = PathEntry(path=Path("/a"), is_dir=True)

        with pytest.raises(AttributeError):
            entry.is_dir = False

    def test_same_entry_by_inode(self):
        first = PathEntry(path=Path("/a/b"), is_dir=True, device=1, inode=42)
        alias = PathEntry(path=Path("/a/../a/b"), is_dir=True, device=1, inode=42)
        other = PathEntry(path=Path("/a/c"), is_dir=True, device=1, inode=43)

        assert first.same_entry(alias)
        assert not first.same_entry(other)

    def test_same_entry_falls_back_to_path_without_inode(self):
        planned = PathEntry(path=Path("/data/merged"), is_dir=True)

        assert planned.same_entry(PathEntry(path=Path("/data/merged"), is_dir=True, inode=7))
        assert not planned.same_entry(PathEntry(path=Path("/data/other"), is_dir=True))


@pytest.mark.unit
class TestFlattenOperation:
    def test_defaults(self):
        dest = PathEntry(path=Path("/dest"), is_dir=True)
        operation = FlattenOperation(
            destination=dest, sources=[], dry_run=False, timestamp=datetime.now()
        )

        assert operation.files_moved == 0
        assert operation.files_skipped == 0
        assert operation.folders_removed == 0
        assert operation.skipped_files == []
        assert operation.truncated_paths == []
        assert operation.errors == []


@pytest.mark.unit
class TestFlattenSummary:
    def test_succeeded_when_clean(self):
        assert FlattenSummary(files_moved=3).succeeded

    @pytest.mark.parametrize(
        "summary",
        [
            FlattenSummary(errors=["boom"]),
            FlattenSummary(aborted=True),
            FlattenSummary(interrupted=True),
        ],
    )
    def test_not_succeeded(self, summary: FlattenSummary):
        assert not summary.succeeded

    def test_truncation_alone_is_still_success(self):
        assert FlattenSummary(truncated_branches=2).succeeded


@pytest.mark.unit
def test_notice_level_values():
    assert NoticeLevel.ERROR.value == "error"
    assert NoticeLevel.WARNING.value == "warn"
