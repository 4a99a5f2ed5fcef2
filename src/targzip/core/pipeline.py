"""Replace entries inside an existing tar.gz archive."""

import logging
import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional

from ..exceptions import CleanupError, NoMatchingEntryError
from ..tar.framing import compress_file, decompress_file
from ..tar.models import ArchiveEntry
from ..tar.reader import TarEntryReader
from ..tar.writer import TarEntryWriter
from ..utils.ascii import copy_with_ascii_translate
from ..utils.stream import DEFAULT_BUFFER_SIZE
from ..utils.validator import validate_update_inputs
from .types import ArchiveConfig, PipelineState, UpdatePlan, UpdateResult

logger = logging.getLogger(__name__)

# Translated payloads larger than this spill from memory to disk
SPOOL_MAX_SIZE = 1024 * 1024


@dataclass
class RewriteStats:
    """Counters collected while rewriting a tar."""

    replaced: int = 0
    entries_written: int = 0
    directories_dropped: int = 0


def rewrite_tar(
    source_tar: Path,
    target_tar: Path,
    plan: UpdatePlan,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> RewriteStats:
    """Copy a plain tar entry by entry, substituting the matching entries.

    Directory entries are dropped. Every file entry selected by the plan's
    matcher gets the replacement file's bytes under its original name. Other
    entries keep their header and, when the plan asks for it, have bare LF
    line endings of text payloads turned into CRLF.

    Args:
        source_tar: Plain tar to read
        target_tar: Plain tar to create
        plan: Replacement file, matcher and translation flag
        buffer_size: Size of the copy buffer

    Returns:
        Counters for the rewrite

    Raises:
        CorruptArchiveError: If source_tar cannot be decoded
        EntrySizeError: If a payload does not match its declared size
    """
    stats = RewriteStats()

    with open(source_tar, "rb") as src, open(target_tar, "wb") as dst:
        with TarEntryReader(src, str(source_tar)) as reader, TarEntryWriter(
            dst, str(target_tar)
        ) as writer:
            for entry, payload in reader:
                if entry.is_directory:
                    stats.directories_dropped += 1
                    continue

                if plan.matcher(entry.name, plan.replacement_path):
                    _write_replacement(writer, entry, plan.replacement_path)
                    stats.replaced += 1
                    logger.info(
                        "Replaced %s with %s", entry.name, plan.replacement_path
                    )
                elif plan.translate:
                    _write_translated(writer, entry, payload, buffer_size)
                else:
                    writer.write_entry(entry, payload)

            stats.entries_written = writer.entries_written

    return stats


def _write_replacement(
    writer: TarEntryWriter, entry: ArchiveEntry, replacement_path: Path
) -> None:
    with open(replacement_path, "rb") as replacement:
        stat = os.fstat(replacement.fileno())
        header = ArchiveEntry(
            name=entry.name,
            size=stat.st_size,
            mode=entry.mode,
            mtime=stat.st_mtime,
        )
        writer.write_entry(header, replacement)


def _write_translated(
    writer: TarEntryWriter, entry: ArchiveEntry, payload: BinaryIO, buffer_size: int
) -> None:
    # The translated length is only known after the whole payload is read
    with tempfile.SpooledTemporaryFile(max_size=SPOOL_MAX_SIZE) as spool:
        size = copy_with_ascii_translate(payload, spool, buffer_size)
        spool.seek(0)
        if size != entry.size:
            logger.debug("Translated %s: %d -> %d bytes", entry.name, entry.size, size)
        writer.write_entry(entry.with_size(size), spool)


class ArchiveUpdatePipeline:
    """One update run: decompress, rewrite, recompress, clean up.

    All temporary artifacts live next to the archive and are owned by the
    run. The original archive is only swapped out, atomically, after the
    rewritten tar has been fully compressed, so a failure at any stage leaves
    it untouched. Runs against the same archive must be serialized by the
    caller since the temporary names are fixed.
    """

    def __init__(self, plan: UpdatePlan, config: Optional[ArchiveConfig] = None) -> None:
        """Initialize pipeline.

        Args:
            plan: What to replace and where
            config: Buffer size, temporary name and no-match policy
        """
        self.plan = plan
        self.config = config or ArchiveConfig()
        self.state = PipelineState.IDLE

        directory = plan.archive_path.parent
        self.plain_tar = directory / self.config.temp_name
        self.rewritten_tar = directory / f"{self.config.temp_name}.new"
        self.staged_archive = directory / f"{self.config.temp_name}.gz"
        self._owned: list[Path] = []

    @property
    def temp_paths(self) -> list[Path]:
        """Every temporary artifact a run may create."""
        return [self.plain_tar, self.rewritten_tar, self.staged_archive]

    def run(self) -> UpdateResult:
        """Execute the whole pipeline.

        Returns:
            Result describing what was replaced

        Raises:
            PreconditionError: If an input is missing or a temporary name is taken
            NoMatchingEntryError: If nothing matched and the config forbids it
            CorruptArchiveError: If the archive cannot be decoded
            OSError: On filesystem failures
        """
        if self.state is not PipelineState.IDLE:
            raise RuntimeError(f"Pipeline already ran (state: {self.state.value})")

        result = UpdateResult(archive_path=self.plan.archive_path, state=self.state)
        logger.info(
            "Updating %s with %s", self.plan.archive_path, self.plan.replacement_path
        )

        try:
            self._enter(PipelineState.DECOMPRESSING)
            self.decompress()

            self._enter(PipelineState.REWRITING)
            stats = self.rewrite()
            result.replaced = stats.replaced
            result.entries_written = stats.entries_written

            if stats.replaced:
                self._enter(PipelineState.RECOMPRESSING)
                self.recompress()
            else:
                self._handle_no_match()

            self._enter(PipelineState.DONE)
        except Exception:
            self._enter(PipelineState.FAILED)
            raise
        finally:
            result.cleanup_errors = self.cleanup()
            result.state = self.state

        return result

    def decompress(self) -> None:
        """Check preconditions and gunzip the archive to the plain temp tar."""
        validate_update_inputs(
            self.plan.archive_path, self.plan.replacement_path, self.temp_paths
        )
        self._owned.append(self.plain_tar)
        decompress_file(self.plan.archive_path, self.plain_tar, self.config.buffer_size)

    def rewrite(self) -> RewriteStats:
        """Rewrite the plain temp tar with the replacement substituted."""
        self._owned.append(self.rewritten_tar)
        return rewrite_tar(
            self.plain_tar, self.rewritten_tar, self.plan, self.config.buffer_size
        )

    def recompress(self) -> None:
        """Compress the rewritten tar and swap it in place of the archive."""
        self._owned.append(self.staged_archive)
        compress_file(
            self.rewritten_tar,
            self.staged_archive,
            self.config.buffer_size,
            self.config.compresslevel,
        )
        shutil.copymode(self.plan.archive_path, self.staged_archive)
        os.replace(self.staged_archive, self.plan.archive_path)

    def cleanup(self) -> list[str]:
        """Remove the temporary artifacts this run created.

        Returns:
            Messages for artifacts that could not be removed
        """
        errors = []
        while self._owned:
            path = self._owned.pop()
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                error = CleanupError(f"Failed to remove temporary file {path}: {e}")
                logger.warning("%s", error)
                errors.append(str(error))
        return errors

    def _handle_no_match(self) -> None:
        message = (
            f"No entry in {self.plan.archive_path} matches "
            f"{self.plan.replacement_path.name}"
        )
        if not self.config.allow_no_match:
            raise NoMatchingEntryError(message)
        logger.warning("%s, archive left unchanged", message)

    def _enter(self, state: PipelineState) -> None:
        logger.debug("Pipeline %s -> %s", self.state.value, state.value)
        self.state = state

