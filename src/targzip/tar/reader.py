"""Sequential tar entry reader."""

import io
import tarfile
from collections.abc import Iterator
from typing import BinaryIO, Optional

from ..exceptions import CorruptArchiveError, UnsupportedEntryError
from .framing import codec_errors
from .models import ArchiveEntry


class TarEntryReader:
    """Forward-only reader over an uncompressed tar stream.

    Entries are produced in archive order. Only the current entry's payload
    can be read; moving to the next entry discards whatever is left of it.
    The reader cannot be restarted, open a new one from the stream start to
    iterate again.
    """

    def __init__(self, fileobj: BinaryIO, name: str = "<stream>") -> None:
        """Initialize tar reader.

        Args:
            fileobj: Readable stream positioned at the start of the tar data
            name: Name used in error messages
        """
        self.fileobj = fileobj
        self.name = name
        self._tar_file: Optional[tarfile.TarFile] = None
        self._consumed = False

    def __enter__(self) -> "TarEntryReader":
        """Enter context manager."""
        with codec_errors(self.name):
            self._tar_file = tarfile.open(
                fileobj=self.fileobj, mode="r|", tarinfo=_StrictTarInfo
            )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit context manager."""
        self.close()

    def close(self) -> None:
        """Close the tar stream. The underlying file object stays open."""
        if self._tar_file:
            self._tar_file.close()
            self._tar_file = None

    def __iter__(self) -> Iterator[tuple[ArchiveEntry, BinaryIO]]:
        """Iterate over (entry, payload) pairs.

        Yields:
            Entry metadata and a stream over exactly its payload bytes

        Raises:
            CorruptArchiveError: If a header cannot be decoded
            UnsupportedEntryError: If an entry is neither a file nor a directory
        """
        if not self._tar_file:
            raise CorruptArchiveError("Tar stream not opened")
        if self._consumed:
            raise RuntimeError("TarEntryReader cannot be iterated twice")
        self._consumed = True

        members = iter(self._tar_file)
        while True:
            with codec_errors(self.name):
                member = next(members, None)
            if member is None:
                return

            if member.isdir():
                yield ArchiveEntry.from_tarinfo(member), io.BytesIO()
                continue

            if not member.isreg():
                raise UnsupportedEntryError(
                    f"Unsupported entry type for {member.name} in {self.name}"
                )

            with codec_errors(self.name):
                payload = self._tar_file.extractfile(member)
            if payload is None:
                raise CorruptArchiveError(f"Could not read payload of {member.name}")

            yield ArchiveEntry.from_tarinfo(member), _CodecGuardedPayload(
                payload, self.name
            )


class _StrictTarInfo(tarfile.TarInfo):
    """TarInfo that rejects damaged headers anywhere in the archive.

    tarfile only reports a bad header at offset 0 and otherwise stops as if
    the archive had ended there. Subsequent header errors are always raised.
    """

    @classmethod
    def frombuf(cls, buf, encoding, errors):
        try:
            return super().frombuf(buf, encoding, errors)
        except (tarfile.InvalidHeaderError, tarfile.TruncatedHeaderError) as e:
            raise tarfile.SubsequentHeaderError(str(e)) from e


class _CodecGuardedPayload(io.RawIOBase):
    """Payload view that reports codec failures as CorruptArchiveError."""

    def __init__(self, payload: BinaryIO, name: str) -> None:
        self._payload = payload
        self._name = name

    def readable(self) -> bool:
        return True

    def read(self, size: int = -1) -> bytes:
        with codec_errors(self._name):
            return self._payload.read(size)

    def readinto(self, buffer) -> int:
        data = self.read(len(buffer))
        buffer[: len(data)] = data
        return len(data)
