"""Tests for the commit log."""

import json

import pytest

from svcs.core.commit_log import CommitLog, CommitRecord
from svcs.core.errors import StorageError


@pytest.fixture
def log(tmp_path):
    return CommitLog(tmp_path / "log.txt")


class TestCommitLog:
    def test_empty(self, log):
        assert log.all() == []
        assert log.latest() is None
        assert log.show() == ["No commits yet."]

    def test_append_and_latest(self, log):
        log.append(CommitRecord("id1", "alice", "first"))
        log.append(CommitRecord("id2", "bob", "second"))

        assert [r.id for r in log.all()] == ["id1", "id2"]
        assert log.latest() == CommitRecord("id2", "bob", "second")

    def test_show_is_most_recent_first(self, log):
        log.append(CommitRecord("id1", "alice", "first"))
        log.append(CommitRecord("id2", "alice", "second"))

        assert log.show() == [
            "commit id2",
            "Author: alice",
            "second",
            "commit id1",
            "Author: alice",
            "first",
        ]

    def test_one_json_record_per_line(self, log, tmp_path):
        log.append(CommitRecord("id1", "", "msg"))

        lines = (tmp_path / "log.txt").read_text().splitlines()
        assert [json.loads(line) for line in lines] == [
            {"id": "id1", "author": "", "message": "msg"}
        ]

    def test_messages_with_delimiters_survive(self, log):
        tricky = "a|||b//c\nd"
        log.append(CommitRecord("id1", "x//y", tricky))
        log.append(CommitRecord("id2", "z", "plain"))

        records = log.all()
        assert len(records) == 2
        assert records[0].message == tricky
        assert records[0].author == "x//y"

    def test_reads_legacy_format(self, log, tmp_path):
        (tmp_path / "log.txt").write_text("id1//alice//first|||id2//bob//second|||")

        assert log.all() == [
            CommitRecord("id1", "alice", "first"),
            CommitRecord("id2", "bob", "second"),
        ]

    def test_append_converts_legacy_format(self, log, tmp_path):
        (tmp_path / "log.txt").write_text("id1//alice//first|||")
        log.append(CommitRecord("id2", "bob", "second"))

        lines = (tmp_path / "log.txt").read_text().splitlines()
        assert [json.loads(line)["id"] for line in lines] == ["id1", "id2"]

    def test_corrupt_line_raises(self, log, tmp_path):
        (tmp_path / "log.txt").write_text('{"id": "id1", "author": "", "message": ""}\n{oops\n')
        with pytest.raises(StorageError):
            log.all()
