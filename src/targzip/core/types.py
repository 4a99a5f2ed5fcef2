"""Core data types for archive operations."""

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from ..tar.framing import DEFAULT_COMPRESSLEVEL
from ..utils.stream import DEFAULT_BUFFER_SIZE
from .matchers import EntryMatcher, basename_matcher

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ArchiveConfig:
    """Tunables shared by all archive operations."""

    buffer_size: int = DEFAULT_BUFFER_SIZE
    temp_name: str = "tmp.tar"  # Created next to the archive being updated
    compresslevel: int = DEFAULT_COMPRESSLEVEL
    allow_no_match: bool = False

    def __post_init__(self) -> None:
        if self.buffer_size <= 0:
            raise ValueError(f"buffer_size must be positive: {self.buffer_size}")
        if not 0 <= self.compresslevel <= 9:
            raise ValueError(f"compresslevel must be 0-9: {self.compresslevel}")
        if not self.temp_name or os.sep in self.temp_name or "/" in self.temp_name:
            raise ValueError(f"temp_name must be a bare file name: {self.temp_name!r}")

    @classmethod
    def from_env(cls) -> "ArchiveConfig":
        """Build a config from TARGZIP_* environment variables."""
        defaults = cls()
        return cls(
            buffer_size=int(os.getenv("TARGZIP_BUFFER_SIZE", defaults.buffer_size)),
            temp_name=os.getenv("TARGZIP_TEMP_NAME", defaults.temp_name),
            compresslevel=int(
                os.getenv("TARGZIP_COMPRESSLEVEL", defaults.compresslevel)
            ),
            allow_no_match=os.getenv("TARGZIP_ALLOW_NO_MATCH", "false").lower()
            in _TRUE_VALUES,
        )


class PipelineState(Enum):
    """Stages of one archive update run."""

    IDLE = "idle"
    DECOMPRESSING = "decompressing"
    REWRITING = "rewriting"
    RECOMPRESSING = "recompressing"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class UpdatePlan:
    """What one update run replaces, and where."""

    archive_path: Path
    replacement_path: Path
    translate: bool = True
    matcher: EntryMatcher = basename_matcher

    def __post_init__(self) -> None:
        object.__setattr__(self, "archive_path", Path(self.archive_path))
        object.__setattr__(self, "replacement_path", Path(self.replacement_path))


@dataclass
class UpdateResult:
    """Outcome of one update run."""

    archive_path: Path
    state: PipelineState
    replaced: int = 0
    entries_written: int = 0
    cleanup_errors: list[str] = field(default_factory=list)

    @property
    def modified(self) -> bool:
        """Whether the archive on disk was replaced."""
        return self.state is PipelineState.DONE and self.replaced > 0
