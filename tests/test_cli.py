"""Tests for the command line interface."""

import pytest
from typer.testing import CliRunner

from targzip.cli import USAGE, app
from tests.helpers import read_targz


@pytest.fixture
def runner():
    """Typer CLI runner."""
    return CliRunner()


def test_no_arguments_prints_usage(runner):
    result = runner.invoke(app, [])
    assert result.exit_code == 0
    assert "Synopsis" in result.output
    assert "Done." not in result.output


def test_invalid_option(runner):
    result = runner.invoke(app, ["x", "a.tar.gz", "dir"])
    assert result.exit_code == 1
    assert result.output.splitlines() == ["Invalid options", "Done."]


def test_missing_operands(runner):
    result = runner.invoke(app, ["c", "a.tar.gz"])
    assert result.exit_code == 1
    assert USAGE.strip().splitlines()[0] in result.output
    assert result.output.rstrip().endswith("Done.")


def test_create_prints_entries(runner, tmp_path, source_tree):
    archive = tmp_path / "cli.tar.gz"
    result = runner.invoke(app, ["c", str(archive), str(source_tree)])

    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "top.txt",
        "sub/data.bin",
        "sub/deeper/unix.txt",
        "Done.",
    ]
    assert archive.exists()


def test_extract(runner, tmp_path, sample_archive):
    dest = tmp_path / "out"
    result = runner.invoke(app, ["e", str(sample_archive), str(dest)])

    assert result.exit_code == 0
    assert result.output.splitlines() == ["Done."]
    assert (dest / "other" / "notes.txt").read_bytes() == b"old2"


def test_update_translates_other_entries(runner, sample_archive, replacement_file):
    result = runner.invoke(app, ["u", str(sample_archive), str(replacement_file)])

    assert result.exit_code == 0
    assert result.output.splitlines() == ["Done."]
    entries = dict(read_targz(sample_archive))
    assert entries["dir/notes.txt"] == b"new"
    assert entries["dir/readme.md"] == b"line one\r\nline two\r\n"


def test_update_missing_file(runner, tmp_path, sample_archive):
    result = runner.invoke(app, ["u", str(sample_archive), str(tmp_path / "gone.txt")])

    assert result.exit_code == 1
    assert result.output.splitlines() == ["Please input valid file", "Done."]


def test_update_no_match(runner, tmp_path, sample_archive):
    other = tmp_path / "unmatched.txt"
    other.write_bytes(b"x")
    before = sample_archive.read_bytes()

    result = runner.invoke(app, ["u", str(sample_archive), str(other)])

    assert result.exit_code == 1
    assert result.output.startswith("Error: No entry")
    assert sample_archive.read_bytes() == before


def test_update_no_match_allowed_by_env(runner, tmp_path, sample_archive, monkeypatch):
    monkeypatch.setenv("TARGZIP_ALLOW_NO_MATCH", "true")
    other = tmp_path / "unmatched.txt"
    other.write_bytes(b"x")

    result = runner.invoke(app, ["u", str(sample_archive), str(other)])

    assert result.exit_code == 0


def test_corrupt_archive(runner, tmp_path):
    archive = tmp_path / "bad.tar.gz"
    archive.write_bytes(b"junk")
    result = runner.invoke(app, ["e", str(archive), str(tmp_path / "out")])

    assert result.exit_code == 1
    assert result.output.startswith("Error:")
    assert result.output.rstrip().endswith("Done.")
