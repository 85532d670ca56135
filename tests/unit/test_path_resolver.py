"""
Unit tests for PathResolver.

Tests cover:
- Stat failures abort resolution
- Promoting the first selected directory to destination
- Pre-supplied destinations
- Destination never appearing among the sources
- Selections without any directory
"""

from pathlib import Path

import pytest

from flatdir.exceptions import NoDestinationError, StatError, TooFewSelectionsError
from flatdir.operations import PathResolver, stat_entry


@pytest.fixture
def resolver() -> PathResolver:
    return PathResolver()


@pytest.mark.unit
class TestStatEntry:
    def test_missing_path_raises_stat_error(self, temp_dir: Path):
        missing = temp_dir / "missing"

        with pytest.raises(StatError) as exc_info:
            stat_entry(missing)

        assert exc_info.value.path == missing
        assert isinstance(exc_info.value.cause, FileNotFoundError)

    def test_symlink_to_directory_is_flagged(self, temp_dir: Path):
        target = temp_dir / "target"
        target.mkdir()
        link = temp_dir / "link"
        try:
            link.symlink_to(target, target_is_directory=True)
        except OSError:
            pytest.skip("Symlinks not supported")

        entry = stat_entry(link)

        assert entry.is_dir is True
        assert entry.is_symlink is True


@pytest.mark.unit
class TestResolve:
    def test_first_directory_becomes_destination(self, resolver: PathResolver, temp_dir: Path):
        (temp_dir / "a.txt").write_text("a")
        (temp_dir / "b_dir").mkdir()
        (temp_dir / "c_dir").mkdir()
        selections = [temp_dir / "a.txt", temp_dir / "b_dir", temp_dir / "c_dir"]

        destination, sources = resolver.resolve(None, selections)

        assert destination.path == temp_dir / "b_dir"
        assert [s.path for s in sources] == [temp_dir / "a.txt", temp_dir / "c_dir"]

    def test_supplied_destination_keeps_every_selection(self, resolver: PathResolver, temp_dir: Path):
        (temp_dir / "one").mkdir()
        (temp_dir / "two").mkdir()
        dest_dir = temp_dir / "merged"
        dest_dir.mkdir()

        destination, sources = resolver.resolve(
            stat_entry(dest_dir), [temp_dir / "one", temp_dir / "two"]
        )

        assert destination.path == dest_dir
        assert [s.path for s in sources] == [temp_dir / "one", temp_dir / "two"]

    def test_supplied_destination_is_dropped_from_sources(self, resolver: PathResolver, temp_dir: Path):
        (temp_dir / "one").mkdir()
        dest_dir = temp_dir / "merged"
        dest_dir.mkdir()

        destination, sources = resolver.resolve(
            stat_entry(dest_dir), [temp_dir / "merged", temp_dir / "one"]
        )

        assert all(not s.same_entry(destination) for s in sources)
        assert [s.path for s in sources] == [temp_dir / "one"]

    def test_no_directory_raises_no_destination(self, resolver: PathResolver, temp_dir: Path):
        (temp_dir / "a.txt").write_text("a")
        (temp_dir / "b.txt").write_text("b")

        with pytest.raises(NoDestinationError):
            resolver.resolve(None, [temp_dir / "a.txt", temp_dir / "b.txt"])

    def test_stat_failure_aborts_before_choosing(self, resolver: PathResolver, temp_dir: Path):
        (temp_dir / "dir").mkdir()

        with pytest.raises(StatError):
            resolver.resolve(None, [temp_dir / "dir", temp_dir / "gone"])

    def test_only_destination_selected(self, resolver: PathResolver, temp_dir: Path):
        dest_dir = temp_dir / "merged"
        dest_dir.mkdir()

        with pytest.raises(TooFewSelectionsError):
            resolver.resolve(stat_entry(dest_dir), [dest_dir])

    def test_no_destination_error_is_distinct_from_stat_error(self):
        assert not issubclass(NoDestinationError, StatError)
        assert not issubclass(StatError, NoDestinationError)
