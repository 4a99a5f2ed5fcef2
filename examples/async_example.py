"""Example usage of the async archive API."""

import asyncio
import logging
import sys
import tempfile
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, "src")

from targzip import (
    ArchiveError,
    create_archive,
    extract_archive,
    update_archive,
)

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def main():
    """Create an archive, replace one file in it and extract the result."""
    with tempfile.TemporaryDirectory() as workdir:
        work = Path(workdir)
        source = work / "project"
        (source / "docs").mkdir(parents=True)
        (source / "docs" / "notes.txt").write_text("old notes\n")
        (source / "readme.md").write_text("hello\nworld\n")

        archive = work / "project.tar.gz"
        replacement = work / "notes.txt"
        replacement.write_text("new notes\n")

        try:
            logger.info("Creating archive...")
            names = await create_archive(str(archive), str(source))
            logger.info(f"Archived {len(names)} files: {names}")

            logger.info("Replacing notes.txt...")
            result = await update_archive(str(archive), str(replacement))
            logger.info(f"Replaced {result.replaced} entries ({result.state.value})")

            logger.info("Extracting...")
            restored = work / "restored"
            await extract_archive(str(archive), str(restored))
            for path in sorted(restored.rglob("*")):
                if path.is_file():
                    logger.info(f"  {path.relative_to(restored)}: {path.read_bytes()!r}")

        except ArchiveError as e:
            logger.error(f"Archive error: {e}")
        except Exception as e:
            logger.error(f"Unexpected error: {e}")


if __name__ == "__main__":
    asyncio.run(main())
