"""Helpers building and reading test archives."""

import gzip
import io
import tarfile
from pathlib import Path
from typing import Optional


def build_tar(tar_path: Path, entries: dict[str, Optional[bytes]]) -> Path:
    """Write a plain tar. A value of None adds a directory entry."""
    with tarfile.open(tar_path, "w", format=tarfile.USTAR_FORMAT) as tar:
        for name, content in entries.items():
            info = tarfile.TarInfo(name)
            if content is None:
                info.type = tarfile.DIRTYPE
                info.mode = 0o755
                tar.addfile(info)
            else:
                info.size = len(content)
                info.mode = 0o644
                tar.addfile(info, fileobj=io.BytesIO(content))
    return tar_path


def build_targz(archive_path: Path, entries: dict[str, Optional[bytes]]) -> Path:
    """Write a gzip compressed tar. A value of None adds a directory entry."""
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w", format=tarfile.USTAR_FORMAT) as tar:
        for name, content in entries.items():
            info = tarfile.TarInfo(name)
            if content is None:
                info.type = tarfile.DIRTYPE
                tar.addfile(info)
            else:
                info.size = len(content)
                tar.addfile(info, fileobj=io.BytesIO(content))
    archive_path.write_bytes(gzip.compress(buffer.getvalue()))
    return archive_path


def read_tar_members(tar: tarfile.TarFile) -> list[tuple[str, Optional[bytes]]]:
    """List (name, content) pairs in order, content None for directories."""
    members = []
    for member in tar.getmembers():
        if member.isdir():
            members.append((member.name, None))
        else:
            members.append((member.name, tar.extractfile(member).read()))
    return members


def read_targz(archive_path: Path) -> list[tuple[str, Optional[bytes]]]:
    """Read every entry of a tar.gz in order."""
    with tarfile.open(archive_path, "r:gz") as tar:
        return read_tar_members(tar)


def read_tar(tar_path: Path) -> list[tuple[str, Optional[bytes]]]:
    """Read every entry of a plain tar in order."""
    with tarfile.open(tar_path, "r:") as tar:
        return read_tar_members(tar)


def damage_header(data: bytes, offset: int) -> bytes:
    """Overwrite the start of the tar header at offset so its checksum fails."""
    return data[:offset] + b"\xff" * 20 + data[offset + 20 :]


def build_damaged_tar_bytes(entries: dict[str, bytes], offset: int = 1024) -> bytes:
    """Plain tar bytes with the header at offset damaged."""
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w", format=tarfile.USTAR_FORMAT) as tar:
        for name, content in entries.items():
            info = tarfile.TarInfo(name)
            info.size = len(content)
            tar.addfile(info, fileobj=io.BytesIO(content))
    return damage_header(buffer.getvalue(), offset)
