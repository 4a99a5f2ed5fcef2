"""Sequential tar entry writer."""

import tarfile
from typing import BinaryIO, Optional

from ..exceptions import CorruptArchiveError, EntrySizeError, UnsupportedEntryError
from .models import ArchiveEntry


class TarEntryWriter:
    """Writer that appends entries to an uncompressed tar stream.

    Every file entry declares its size up front and must be followed by
    exactly that many payload bytes.
    """

    def __init__(self, fileobj: BinaryIO, name: str = "<stream>") -> None:
        """Initialize tar writer.

        Args:
            fileobj: Writable stream receiving the tar data
            name: Name used in error messages
        """
        self.fileobj = fileobj
        self.name = name
        self.entries_written = 0
        self._tar_file: Optional[tarfile.TarFile] = None

    def __enter__(self) -> "TarEntryWriter":
        """Enter context manager."""
        self._tar_file = tarfile.open(
            fileobj=self.fileobj, mode="w", format=tarfile.USTAR_FORMAT
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit context manager."""
        self.close()

    def close(self) -> None:
        """Write the end-of-archive blocks. The underlying file stays open."""
        if self._tar_file:
            self._tar_file.close()
            self._tar_file = None

    def write_directory(self, entry: ArchiveEntry) -> None:
        """Write a header-only directory entry."""
        if not entry.is_directory:
            raise ValueError(f"Not a directory entry: {entry.name}")
        self._add(entry.to_tarinfo(), None)

    def write_entry(self, entry: ArchiveEntry, payload: BinaryIO) -> None:
        """Write a file entry and exactly ``entry.size`` bytes of payload.

        Args:
            entry: Entry header, its size is the declared payload length
            payload: Stream providing exactly ``entry.size`` bytes

        Raises:
            EntrySizeError: If payload is shorter or longer than declared
            UnsupportedEntryError: If the name does not fit a USTAR header
        """
        if entry.is_directory:
            raise ValueError(f"Not a file entry: {entry.name}")

        counted = _CountingReader(payload)
        try:
            self._add(entry.to_tarinfo(), counted)
        except OSError as e:
            if counted.exhausted:
                raise EntrySizeError(
                    f"Payload of {entry.name} ended after {counted.count} bytes, "
                    f"declared {entry.size}"
                ) from e
            raise

        if payload.read(1):
            raise EntrySizeError(
                f"Payload of {entry.name} exceeds declared size {entry.size}"
            )

    def _add(self, info: tarfile.TarInfo, payload: Optional[BinaryIO]) -> None:
        if not self._tar_file:
            raise CorruptArchiveError("Tar stream not opened")
        try:
            self._tar_file.addfile(info, payload)
        except ValueError as e:
            raise UnsupportedEntryError(
                f"Cannot write entry {info.name} to {self.name}: {e}"
            ) from e
        self.entries_written += 1


class _CountingReader:
    """Read-through wrapper that notices a short payload."""

    def __init__(self, source: BinaryIO) -> None:
        self._source = source
        self.count = 0
        self.exhausted = False

    def read(self, size: int = -1) -> bytes:
        data = self._source.read(size)
        self.count += len(data)
        if size is not None and size >= 0 and len(data) < size:
            self.exhausted = True
        return data
