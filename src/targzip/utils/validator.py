"""Precondition checks for archive operations."""

from pathlib import Path

from ..exceptions import CorruptArchiveError, PreconditionError

GZIP_MAGIC = b"\x1f\x8b"


def is_path_exists(path: Path) -> bool:
    """Check if file path exists."""
    return path.exists()


def is_regular_file(path: Path) -> bool:
    """Check if path is an existing regular file."""
    return path.is_file()


def has_gzip_magic(path: Path) -> bool:
    """Check if file starts with the gzip magic number."""
    with open(path, "rb") as f:
        return f.read(len(GZIP_MAGIC)) == GZIP_MAGIC


def are_paths_free(paths: list[Path]) -> bool:
    """Check that none of the paths exist."""
    return not any(is_path_exists(path) for path in paths)


def colliding_paths(paths: list[Path], inputs: list[Path]) -> list[Path]:
    """List the paths that name the same file as one of the inputs."""
    resolved = {path.resolve() for path in inputs}
    return [path for path in paths if path.resolve() in resolved]


def validate_input_file(path: Path, kind: str) -> None:
    """Ensure an input file exists and is a regular file.

    Args:
        path: File to check
        kind: Human readable role of the file, used in the error message

    Raises:
        PreconditionError: If the file is missing or not a regular file
    """
    if not is_path_exists(path):
        raise PreconditionError(f"{kind} does not exist: {path}")
    if not is_regular_file(path):
        raise PreconditionError(f"{kind} is not a regular file: {path}")


def validate_update_inputs(
    archive_path: Path, replacement_path: Path, temp_paths: list[Path]
) -> None:
    """Validate everything an update run needs before touching the disk.

    Args:
        archive_path: The tar.gz archive to update
        replacement_path: File whose content replaces the matching entries
        temp_paths: Temporary artifacts the run is going to create

    Raises:
        PreconditionError: If an input is missing, an input has a temporary
            name or a temporary path is taken
        CorruptArchiveError: If the archive is not gzip compressed
    """
    validate_input_file(archive_path, "Archive")
    validate_input_file(replacement_path, "Replacement file")

    if not has_gzip_magic(archive_path):
        raise CorruptArchiveError(f"Not a gzip file: {archive_path}")

    clashes = colliding_paths(temp_paths, [archive_path, replacement_path])
    if clashes:
        raise PreconditionError(
            f"Input uses a temporary file name: {', '.join(map(str, clashes))}"
        )

    if not are_paths_free(temp_paths):
        taken = [str(path) for path in temp_paths if is_path_exists(path)]
        raise PreconditionError(f"Temporary file already exists: {', '.join(taken)}")
