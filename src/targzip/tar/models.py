"""Data models for tar entry handling."""

import os
import tarfile
import time
from dataclasses import dataclass, field, replace
from pathlib import Path


@dataclass(frozen=True)
class ArchiveEntry:
    """One file or directory entry of a tar container."""

    name: str  # Always "/" separated inside the archive
    size: int
    is_directory: bool = False
    mode: int = 0o644
    mtime: float = field(default_factory=time.time)

    @classmethod
    def from_tarinfo(cls, info: tarfile.TarInfo) -> "ArchiveEntry":
        """Build an entry from a header read by the codec."""
        return cls(
            name=info.name,
            size=0 if info.isdir() else info.size,
            is_directory=info.isdir(),
            mode=info.mode,
            mtime=info.mtime,
        )

    @classmethod
    def from_path(cls, path: Path, name: str) -> "ArchiveEntry":
        """Build an entry for a file or directory on disk.

        Args:
            path: Filesystem path to stat
            name: Entry name inside the archive
        """
        stat = path.stat()
        is_directory = path.is_dir()
        return cls(
            name=name,
            size=0 if is_directory else stat.st_size,
            is_directory=is_directory,
            mode=stat.st_mode & 0o7777,
            mtime=stat.st_mtime,
        )

    @property
    def basename(self) -> str:
        """Final path segment of the entry name."""
        return os.path.basename(self.host_path)

    @property
    def host_path(self) -> str:
        """Entry name with the host path separator."""
        return self.name.rstrip("/").replace("/", os.sep)

    def local_path(self, root: Path) -> Path:
        """Filesystem path of this entry under an extraction root."""
        return Path(root) / self.host_path

    def with_size(self, size: int) -> "ArchiveEntry":
        """Copy of this entry with a new declared size."""
        return replace(self, size=size)

    def to_tarinfo(self) -> tarfile.TarInfo:
        """Header to hand to the codec when writing this entry."""
        info = tarfile.TarInfo(self.name)
        info.mode = self.mode
        info.mtime = int(self.mtime)
        if self.is_directory:
            info.type = tarfile.DIRTYPE
            info.size = 0
        else:
            info.type = tarfile.REGTYPE
            info.size = self.size
        return info
