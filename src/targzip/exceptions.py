"""Custom exceptions for targzip."""


class ArchiveError(Exception):
    """Base exception for all archive-related errors."""

    pass


class PreconditionError(ArchiveError):
    """Raised when an input file is missing or a temporary name is taken."""

    pass


class NoMatchingEntryError(PreconditionError):
    """Raised when no archive entry matches the replacement file."""

    pass


class CorruptArchiveError(ArchiveError):
    """Raised when the gzip stream or a tar header cannot be decoded."""

    pass


class EntrySizeError(CorruptArchiveError):
    """Raised when an entry's payload does not match its declared size."""

    pass


class UnsupportedEntryError(ArchiveError):
    """Raised when an entry needs extended headers to be represented."""

    pass


class CleanupError(ArchiveError):
    """Raised when a temporary artifact cannot be removed."""

    pass
