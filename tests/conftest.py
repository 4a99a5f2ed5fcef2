"""Test configuration and fixtures."""

import pytest

from tests.helpers import build_targz


@pytest.fixture
def sample_entries():
    """Entries of a small archive with a repeated basename."""
    return {
        "dir/": None,
        "dir/notes.txt": b"old",
        "dir/readme.md": b"line one\nline two\n",
        "other/": None,
        "other/notes.txt": b"old2",
        "other/image.bin": bytes([0x89, 0x50, 0x4E, 0x47, 0x0A, 0x1A, 0x0A, 0x00]),
    }


@pytest.fixture
def sample_archive(tmp_path, sample_entries):
    """A tar.gz built from sample_entries inside its own directory."""
    archive_dir = tmp_path / "archives"
    archive_dir.mkdir()
    return build_targz(archive_dir / "sample.tar.gz", sample_entries)


@pytest.fixture
def replacement_file(tmp_path):
    """A local notes.txt holding the new content."""
    source_dir = tmp_path / "replacement"
    source_dir.mkdir()
    path = source_dir / "notes.txt"
    path.write_bytes(b"new")
    return path


@pytest.fixture
def source_tree(tmp_path):
    """A small directory tree to archive."""
    root = tmp_path / "tree"
    (root / "sub" / "deeper").mkdir(parents=True)
    (root / "top.txt").write_bytes(b"top level\n")
    (root / "sub" / "data.bin").write_bytes(bytes(range(256)))
    (root / "sub" / "deeper" / "unix.txt").write_bytes(b"a\nb\n")
    (root / "empty").mkdir()
    return root


# Pytest configuration
def pytest_configure(config):
    """Configure pytest markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as unit test (default)")
