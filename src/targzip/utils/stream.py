"""Buffered stream copy utilities."""

from dataclasses import dataclass
from typing import BinaryIO

DEFAULT_BUFFER_SIZE = 32 * 1024


@dataclass
class CopyState:
    """Per-copy state, owned by exactly one copy call.

    Attributes:
        buffer_size: Size of each read from the source
        previous_cr: Whether the last byte handed to the translator was CR
    """

    buffer_size: int = DEFAULT_BUFFER_SIZE
    previous_cr: bool = False

    def __post_init__(self) -> None:
        if self.buffer_size <= 0:
            raise ValueError(f"Buffer size must be positive: {self.buffer_size}")


def iter_chunks(source: BinaryIO, buffer_size: int = DEFAULT_BUFFER_SIZE):
    """Yield chunks of at most buffer_size bytes until end of stream."""
    while True:
        chunk = source.read(buffer_size)
        if not chunk:
            break
        yield chunk


def copy_stream(
    source: BinaryIO, destination: BinaryIO, buffer_size: int = DEFAULT_BUFFER_SIZE
) -> int:
    """Copy all remaining bytes from source to destination.

    Args:
        source: Readable binary stream
        destination: Writable binary stream
        buffer_size: Size of the intermediate buffer

    Returns:
        Number of bytes copied

    Raises:
        OSError: If reading or writing fails
    """
    state = CopyState(buffer_size=buffer_size)
    copied = 0
    for chunk in iter_chunks(source, state.buffer_size):
        destination.write(chunk)
        copied += len(chunk)
    return copied
