"""Tests for the command-line interface."""

import json

import pytest

from svcs.app.cli import HELP_TEXT, main


@pytest.fixture
def work(tmp_path, monkeypatch):
    root = tmp_path / "work"
    root.mkdir()
    (root / "a.txt").write_text("hello")
    monkeypatch.setenv("SVCS_ROOT", str(root))
    return root


def _commit_ids(work):
    lines = (work / "vcs" / "log.txt").read_text().splitlines()
    return [json.loads(line)["id"] for line in lines]


@pytest.mark.parametrize("argv", [[], ["--help"]])
def test_help(work, capsys, argv):
    assert main(argv) == 0
    assert capsys.readouterr().out == HELP_TEXT + "\n"


def test_unknown_command(work, capsys):
    assert main(["push"]) == 1
    assert capsys.readouterr().err == "'push' is not a SVCS command.\n"


@pytest.mark.parametrize("argv", [["--foo"], ["-x", "add"], ["--debug", "push"]])
def test_unknown_option_is_unknown_command(work, capsys, argv):
    unknown = next(a for a in argv if a != "--debug")

    assert main(argv) == 1
    assert capsys.readouterr().err == f"'{unknown}' is not a SVCS command.\n"


def test_commit_without_message(work, capsys):
    assert main(["commit"]) == 1

    captured = capsys.readouterr()
    assert captured.err == "Message was not passed.\n"
    assert captured.out == ""
    assert (work / "vcs" / "log.txt").read_text() == ""
    assert list((work / "vcs" / "commits").iterdir()) == []


def test_checkout_unknown_id(work, capsys):
    main(["add", "a.txt"])
    main(["commit", "first"])
    (work / "a.txt").write_text("edited")
    capsys.readouterr()

    assert main(["checkout", "0123abcd"]) == 1
    assert capsys.readouterr().err == "Commit does not exist.\n"
    assert (work / "a.txt").read_text() == "edited"


def test_add_echoes_normalized_path(work, capsys):
    assert main(["add", "./a.txt"]) == 0
    assert capsys.readouterr().out == "The file 'a.txt' is tracked.\n"


def test_add_missing_file(work, capsys):
    assert main(["add", "ghost.txt"]) == 1
    assert capsys.readouterr().err == "Can't find 'ghost.txt'.\n"


def test_debug_flag_logs_to_stderr(work, capsys, monkeypatch):
    monkeypatch.setenv("SVCS_DEBUG", "0")
    main(["--debug", "add", "a.txt"])

    captured = capsys.readouterr()
    assert captured.out == "The file 'a.txt' is tracked.\n"
    assert "[svcs] tracked a.txt" in captured.err
    assert "[svcs] root=" in captured.err
    assert "tracked=0 commits=0 latest=None detection=sum" in captured.err


def test_end_to_end(work, capsys):
    assert main(["config"]) == 0
    assert main(["add"]) == 0
    assert main(["log"]) == 0
    assert capsys.readouterr().out == (
        "Please, tell me who you are.\n"
        "Add a file to the index.\n"
        "No commits yet.\n"
    )

    main(["config", "alice"])
    main(["add", "a.txt"])
    main(["commit", "first"])
    assert capsys.readouterr().out == (
        "The username is alice.\n"
        "The file 'a.txt' is tracked.\n"
        "Changes are committed.\n"
    )
    first_id = _commit_ids(work)[0]

    main(["log"])
    assert capsys.readouterr().out == f"commit {first_id}\nAuthor: alice\nfirst\n"

    assert main(["commit", "again"]) == 0
    assert capsys.readouterr().out == "Nothing to commit.\n"

    (work / "a.txt").write_text("world")
    main(["commit", "second"])
    second_id = _commit_ids(work)[1]
    capsys.readouterr()

    main(["log"])
    assert capsys.readouterr().out == (
        f"commit {second_id}\nAuthor: alice\nsecond\n"
        f"commit {first_id}\nAuthor: alice\nfirst\n"
    )

    assert main(["checkout", first_id]) == 0
    assert capsys.readouterr().out == f"Switched to commit {first_id}.\n"
    assert (work / "a.txt").read_text() == "hello"

    main(["add"])
    assert capsys.readouterr().out == "Tracked files:\na.txt\n"
