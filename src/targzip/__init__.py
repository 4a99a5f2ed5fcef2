"""targzip - Create, extract and update entries of tar.gz archives."""

__version__ = "0.1.0"

from .archive import create_archive, extract_archive, update_archive
from .core.pipeline import ArchiveUpdatePipeline
from .core.types import ArchiveConfig, PipelineState, UpdatePlan, UpdateResult
from .exceptions import (
    ArchiveError,
    CleanupError,
    CorruptArchiveError,
    EntrySizeError,
    NoMatchingEntryError,
    PreconditionError,
    UnsupportedEntryError,
)
from .operations import (
    create_targz,
    decompress_targz,
    extract_tar,
    extract_targz,
    update_tar,
    update_targz,
)

__all__ = [
    # Async API
    "create_archive",
    "extract_archive",
    "update_archive",
    # Sync operations
    "create_targz",
    "decompress_targz",
    "extract_tar",
    "extract_targz",
    "update_tar",
    "update_targz",
    # Pipeline
    "ArchiveConfig",
    "ArchiveUpdatePipeline",
    "PipelineState",
    "UpdatePlan",
    "UpdateResult",
    # Exceptions
    "ArchiveError",
    "CleanupError",
    "CorruptArchiveError",
    "EntrySizeError",
    "NoMatchingEntryError",
    "PreconditionError",
    "UnsupportedEntryError",
]
