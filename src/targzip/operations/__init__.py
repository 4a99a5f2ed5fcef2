"""Archive operations built on the tar and gzip primitives."""

from .create import create_targz
from .extract import decompress_targz, extract_tar, extract_targz
from .update import update_tar, update_targz

__all__ = [
    "create_targz",
    "decompress_targz",
    "extract_tar",
    "extract_targz",
    "update_tar",
    "update_targz",
]
