"""Replace entries of tar and tar.gz archives."""

import logging
import os
from pathlib import Path
from typing import Optional

from ..core.matchers import EntryMatcher, basename_matcher
from ..core.pipeline import ArchiveUpdatePipeline, RewriteStats, rewrite_tar
from ..core.types import ArchiveConfig, UpdatePlan, UpdateResult
from ..exceptions import NoMatchingEntryError, PreconditionError
from ..utils.validator import colliding_paths, validate_input_file

logger = logging.getLogger(__name__)


def update_targz(
    archive_path: Path | str,
    replacement_path: Path | str,
    translate: bool = True,
    matcher: EntryMatcher = basename_matcher,
    config: Optional[ArchiveConfig] = None,
) -> UpdateResult:
    """Replace the matching entries of a tar.gz with a file's content.

    Args:
        archive_path: Archive to update in place
        replacement_path: File whose bytes replace every matching entry
        translate: Convert bare LF to CRLF in the other text entries
        matcher: Policy selecting the entries to replace
        config: Buffer size, temporary name and no-match policy

    Returns:
        Result of the update run
    """
    plan = UpdatePlan(
        archive_path=Path(archive_path),
        replacement_path=Path(replacement_path),
        translate=translate,
        matcher=matcher,
    )
    return ArchiveUpdatePipeline(plan, config).run()


def update_tar(
    tar_path: Path | str,
    replacement_path: Path | str,
    translate: bool = True,
    matcher: EntryMatcher = basename_matcher,
    config: Optional[ArchiveConfig] = None,
) -> RewriteStats:
    """Replace the matching entries of an uncompressed tar.

    The tar is rewritten to a sibling temporary file which then replaces it.

    Args:
        tar_path: Plain tar to update in place
        replacement_path: File whose bytes replace every matching entry
        translate: Convert bare LF to CRLF in the other text entries
        matcher: Policy selecting the entries to replace
        config: Buffer size, temporary name and no-match policy

    Returns:
        Counters for the rewrite

    Raises:
        PreconditionError: If an input is missing or the temporary name is taken
        NoMatchingEntryError: If nothing matched and the config forbids it
    """
    config = config or ArchiveConfig()
    tar = Path(tar_path)
    plan = UpdatePlan(
        archive_path=tar,
        replacement_path=Path(replacement_path),
        translate=translate,
        matcher=matcher,
    )
    validate_input_file(tar, "Tar file")
    validate_input_file(plan.replacement_path, "Replacement file")

    temp = tar.parent / config.temp_name
    if colliding_paths([temp], [tar, plan.replacement_path]):
        raise PreconditionError(f"Input uses a temporary file name: {temp}")
    if temp.exists():
        raise PreconditionError(f"Temporary file already exists: {temp}")

    try:
        stats = rewrite_tar(tar, temp, plan, config.buffer_size)
        if not stats.replaced:
            message = f"No entry in {tar} matches {plan.replacement_path.name}"
            if not config.allow_no_match:
                raise NoMatchingEntryError(message)
            logger.warning("%s, tar left unchanged", message)
        else:
            os.replace(temp, tar)
    finally:
        temp.unlink(missing_ok=True)

    return stats
