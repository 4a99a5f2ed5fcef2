"""Create a tar.gz archive from a directory tree."""

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Optional

from ..core.types import ArchiveConfig
from ..exceptions import PreconditionError
from ..tar.framing import open_gzip_writer
from ..tar.models import ArchiveEntry
from ..tar.writer import TarEntryWriter

logger = logging.getLogger(__name__)


def normalize_root(root: str) -> str:
    """Normalize a root path used as the entry name prefix.

    Backslashes become forward slashes and one trailing slash is dropped.
    """
    normalized = root.replace("\\", "/")
    if normalized.endswith("/"):
        normalized = normalized[:-1]
    return normalized


def entry_name(path: Path, root: str) -> str:
    """Archive name of a path relative to the normalized root."""
    name = path.as_posix().replace("\\", "/")
    if root and name.startswith(root + "/"):
        name = name[len(root) + 1 :]
    return name.lstrip("/")


def _add_directory(
    writer: TarEntryWriter,
    directory: Path,
    root: str,
    recurse: bool,
    is_root: bool,
    names: list[str],
    on_entry: Optional[Callable[[str], None]],
) -> None:
    if not is_root:
        writer.write_directory(
            ArchiveEntry.from_path(directory, entry_name(directory, root))
        )

    children = sorted(directory.iterdir())

    for path in children:
        if not path.is_file():
            continue
        entry = ArchiveEntry.from_path(path, entry_name(path, root))
        with open(path, "rb") as payload:
            writer.write_entry(entry, payload)
        names.append(entry.name)
        logger.debug("Added %s", entry.name)
        if on_entry:
            on_entry(entry.name)

    if recurse:
        for path in children:
            if path.is_dir():
                _add_directory(writer, path, root, recurse, False, names, on_entry)


def create_targz(
    archive_path: Path | str,
    source_dir: Path | str,
    recurse: bool = True,
    on_entry: Optional[Callable[[str], None]] = None,
    config: Optional[ArchiveConfig] = None,
) -> list[str]:
    """Create a gzip compressed tar from a directory.

    Files of a directory are written before its subdirectories are entered.
    Every directory below the source gets its own entry.

    Args:
        archive_path: Output tar.gz, created or truncated
        source_dir: Directory to archive, entry names are relative to it
        recurse: Whether to descend into subdirectories
        on_entry: Called with each file entry name once it is written
        config: Compression level

    Returns:
        Names of the file entries written, in archive order

    Raises:
        PreconditionError: If source_dir is not a directory
        UnsupportedEntryError: If a name does not fit a USTAR header
    """
    config = config or ArchiveConfig()
    source = Path(source_dir)
    if not source.is_dir():
        raise PreconditionError(f"Source directory does not exist: {source}")

    root = normalize_root(str(source))
    names: list[str] = []

    with open_gzip_writer(archive_path, config.compresslevel) as stream:
        with TarEntryWriter(stream, str(archive_path)) as writer:
            _add_directory(writer, source, root, recurse, True, names, on_entry)

    logger.info("Created %s with %d files", archive_path, len(names))
    return names
