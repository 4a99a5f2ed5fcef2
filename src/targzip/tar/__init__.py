"""Tar and gzip streaming primitives."""

from .framing import codec_errors, compress_file, decompress_file
from .models import ArchiveEntry
from .reader import TarEntryReader
from .writer import TarEntryWriter

__all__ = [
    "ArchiveEntry",
    "TarEntryReader",
    "TarEntryWriter",
    "codec_errors",
    "compress_file",
    "decompress_file",
]
