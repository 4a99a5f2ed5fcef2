"""Gzip framing over byte streams."""

import gzip
import logging
import tarfile
import zlib
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO

from ..exceptions import CorruptArchiveError
from ..utils.stream import DEFAULT_BUFFER_SIZE, copy_stream

logger = logging.getLogger(__name__)

DEFAULT_COMPRESSLEVEL = 9


@contextmanager
def codec_errors(path: Path | str) -> Iterator[None]:
    """Convert codec failures into CorruptArchiveError.

    Filesystem errors are not codec failures and propagate unchanged.

    Args:
        path: Archive being decoded, used in the error message

    Raises:
        CorruptArchiveError: If the gzip stream or a tar header is malformed
    """
    try:
        yield
    except gzip.BadGzipFile as e:
        raise CorruptArchiveError(f"Invalid gzip stream in {path}: {e}") from e
    except (EOFError, zlib.error) as e:
        raise CorruptArchiveError(f"Truncated or damaged gzip stream in {path}: {e}") from e
    except tarfile.TarError as e:
        raise CorruptArchiveError(f"Invalid tar data in {path}: {e}") from e


@contextmanager
def open_gzip_reader(path: Path | str) -> Iterator[BinaryIO]:
    """Open a gzip file for decompressed reading."""
    with gzip.open(path, "rb") as stream:
        yield stream  # type: ignore[misc]


@contextmanager
def open_gzip_writer(
    path: Path | str, compresslevel: int = DEFAULT_COMPRESSLEVEL
) -> Iterator[BinaryIO]:
    """Open a gzip file for compressed writing.

    The gzip trailer is flushed when the context exits, including on error.
    """
    with gzip.open(path, "wb", compresslevel=compresslevel) as stream:
        yield stream  # type: ignore[misc]


def decompress_file(
    source: Path, target: Path, buffer_size: int = DEFAULT_BUFFER_SIZE
) -> int:
    """Decompress a gzip file into a plain file.

    Args:
        source: Gzip compressed input
        target: Output path, created or truncated
        buffer_size: Size of the copy buffer

    Returns:
        Number of decompressed bytes written

    Raises:
        CorruptArchiveError: If source is not a valid gzip stream
    """
    with codec_errors(source):
        with open_gzip_reader(source) as src, open(target, "wb") as dst:
            size = copy_stream(src, dst, buffer_size)

    logger.debug("Decompressed %s to %s (%d bytes)", source, target, size)
    return size


def compress_file(
    source: Path,
    target: Path,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
    compresslevel: int = DEFAULT_COMPRESSLEVEL,
) -> int:
    """Gzip compress a plain file.

    Args:
        source: Uncompressed input
        target: Output path, created or truncated
        buffer_size: Size of the copy buffer
        compresslevel: Gzip compression level (1-9)

    Returns:
        Number of uncompressed bytes consumed
    """
    with open(source, "rb") as src, open_gzip_writer(target, compresslevel) as dst:
        size = copy_stream(src, dst, buffer_size)

    logger.debug("Compressed %s to %s (%d bytes)", source, target, size)
    return size
