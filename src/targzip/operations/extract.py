"""Extract tar and tar.gz archives to a directory."""

import logging
import os
from pathlib import Path
from typing import BinaryIO, Optional

from ..core.types import ArchiveConfig
from ..exceptions import PreconditionError
from ..tar.framing import codec_errors, decompress_file, open_gzip_reader
from ..tar.reader import TarEntryReader
from ..utils.stream import copy_stream
from ..utils.validator import validate_input_file

logger = logging.getLogger(__name__)


def extract_stream(
    stream: BinaryIO, dest_dir: Path, name: str, buffer_size: int
) -> list[Path]:
    """Materialize every entry of an uncompressed tar stream under dest_dir.

    Args:
        stream: Readable tar data
        dest_dir: Extraction root, created if missing
        name: Archive name used in error messages
        buffer_size: Size of the copy buffer

    Returns:
        Paths created, in archive order
    """
    dest_dir.mkdir(parents=True, exist_ok=True)
    created: list[Path] = []

    with TarEntryReader(stream, name) as reader:
        for entry, payload in reader:
            target = entry.local_path(dest_dir)
            if entry.is_directory:
                target.mkdir(parents=True, exist_ok=True)
            else:
                target.parent.mkdir(parents=True, exist_ok=True)
                with open(target, "wb") as out:
                    copy_stream(payload, out, buffer_size)
                os.utime(target, (entry.mtime, entry.mtime))
            created.append(target)
            logger.debug("Extracted %s", entry.name)

    return created


def extract_targz(
    archive_path: Path | str,
    dest_dir: Path | str,
    config: Optional[ArchiveConfig] = None,
) -> list[Path]:
    """Extract a tar.gz archive.

    Args:
        archive_path: Gzip compressed tar to read
        dest_dir: Directory to extract into
        config: Buffer size

    Returns:
        Paths created, in archive order

    Raises:
        PreconditionError: If the archive does not exist
        CorruptArchiveError: If the gzip stream or a tar header is malformed
    """
    config = config or ArchiveConfig()
    archive = Path(archive_path)
    validate_input_file(archive, "Archive")

    with codec_errors(archive), open_gzip_reader(archive) as stream:
        created = extract_stream(stream, Path(dest_dir), str(archive), config.buffer_size)

    logger.info("Extracted %d entries from %s", len(created), archive)
    return created


def extract_tar(
    tar_path: Path | str,
    dest_dir: Path | str,
    config: Optional[ArchiveConfig] = None,
) -> list[Path]:
    """Extract an uncompressed tar archive.

    Args:
        tar_path: Plain tar to read
        dest_dir: Directory to extract into
        config: Buffer size

    Returns:
        Paths created, in archive order
    """
    config = config or ArchiveConfig()
    tar = Path(tar_path)
    validate_input_file(tar, "Tar file")

    with open(tar, "rb") as stream:
        created = extract_stream(stream, Path(dest_dir), str(tar), config.buffer_size)

    logger.info("Extracted %d entries from %s", len(created), tar)
    return created


def decompress_targz(
    archive_path: Path | str,
    target_dir: Path | str,
    config: Optional[ArchiveConfig] = None,
) -> Path:
    """Gunzip a tar.gz into a plain tar inside target_dir.

    The output keeps the archive name minus its last suffix, so
    ``backup.tar.gz`` becomes ``backup.tar``.

    Args:
        archive_path: Gzip compressed file
        target_dir: Existing directory receiving the plain file

    Returns:
        Path of the decompressed file
    """
    config = config or ArchiveConfig()
    archive = Path(archive_path)
    validate_input_file(archive, "Archive")

    target_dir = Path(target_dir)
    if not target_dir.is_dir():
        raise PreconditionError(f"Target directory does not exist: {target_dir}")

    target = target_dir / archive.stem
    decompress_file(archive, target, config.buffer_size)
    return target
