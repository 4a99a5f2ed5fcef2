"""Core types and the archive update pipeline."""

from .matchers import EntryMatcher, basename_matcher, full_path_matcher, glob_matcher
from .pipeline import ArchiveUpdatePipeline, RewriteStats, rewrite_tar
from .types import ArchiveConfig, PipelineState, UpdatePlan, UpdateResult

__all__ = [
    "ArchiveConfig",
    "ArchiveUpdatePipeline",
    "EntryMatcher",
    "PipelineState",
    "RewriteStats",
    "UpdatePlan",
    "UpdateResult",
    "basename_matcher",
    "full_path_matcher",
    "glob_matcher",
    "rewrite_tar",
]
