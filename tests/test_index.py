"""Tests for the tracked-file index."""

import pytest

from svcs.core.errors import InvalidPathError, NotFoundError
from svcs.core.index import Index


@pytest.fixture
def work(tmp_path):
    root = tmp_path / "work"
    root.mkdir()
    (root / "vcs").mkdir()
    (root / "a.txt").write_text("a")
    (root / "b.txt").write_text("b")
    return root


@pytest.fixture
def index(work):
    return Index(work / "vcs" / "index.txt", work, work / "vcs")


class TestIndex:
    def test_empty_when_file_missing(self, index):
        assert index.list() == []

    def test_preserves_order_and_duplicates(self, index):
        for path in ["b.txt", "a.txt", "b.txt"]:
            index.track(path)

        assert index.list() == ["b.txt", "a.txt", "b.txt"]

    def test_file_format_is_space_terminated_tokens(self, index, work):
        index.track("a.txt")
        index.track("b.txt")

        assert (work / "vcs" / "index.txt").read_text() == "a.txt b.txt "

    def test_reads_legacy_whitespace(self, index, work):
        (work / "vcs" / "index.txt").write_text("a.txt   b.txt\n")
        assert index.list() == ["a.txt", "b.txt"]

    def test_missing_file_is_not_found(self, index):
        with pytest.raises(NotFoundError, match="Can't find 'nope.txt'"):
            index.track("nope.txt")
        assert index.list() == []

    def test_directory_is_not_a_file(self, index, work):
        (work / "dir").mkdir()
        with pytest.raises(NotFoundError):
            index.track("dir")

    def test_nested_path(self, index, work):
        (work / "src").mkdir()
        (work / "src" / "main.py").write_text("pass")

        assert index.track("src/../src/main.py") == "src/main.py"
        assert index.list() == ["src/main.py"]

    def test_absolute_path_inside_root_is_made_relative(self, index, work):
        assert index.track(str(work / "a.txt")) == "a.txt"

    def test_path_outside_root_rejected(self, index, tmp_path):
        outside = tmp_path / "outside.txt"
        outside.write_text("x")
        with pytest.raises(InvalidPathError):
            index.track(str(outside))

    def test_storage_dir_rejected(self, index, work):
        (work / "vcs" / "config.txt").write_text("alice")
        with pytest.raises(InvalidPathError):
            index.track("vcs/config.txt")

    def test_whitespace_rejected(self, index, work):
        (work / "my file.txt").write_text("x")
        with pytest.raises(InvalidPathError):
            index.track("my file.txt")
