"""Text detection and LF to CRLF line ending translation."""

import re
from typing import BinaryIO

from .stream import DEFAULT_BUFFER_SIZE, CopyState, iter_chunks

# Number of leading payload bytes inspected to classify content
SAMPLE_SIZE = 200

# Bytes below 8, between 13 and 32 (exclusive) and 255 mark binary content
BINARY_BYTES = re.compile(rb"[\x00-\x07\x0e-\x1f\xff]")

# LF not preceded by CR
BARE_LF = re.compile(rb"(?<!\r)\n")


def looks_like_text(sample: bytes) -> bool:
    """Check whether a content sample looks like ASCII text.

    Only the first SAMPLE_SIZE bytes are inspected. An empty sample is text.

    Args:
        sample: Leading bytes of the content

    Returns:
        True if no byte in the sample marks the content as binary
    """
    return BINARY_BYTES.search(sample[:SAMPLE_SIZE]) is None


def translate_line_endings(chunk: bytes, state: CopyState) -> bytes:
    """Convert bare LF to CRLF in one chunk of a longer stream.

    The CR flag in ``state`` carries across chunk boundaries, so a CRLF pair
    split between two reads is left alone.

    Args:
        chunk: Next bytes of the stream
        state: Copy state of the stream being translated

    Returns:
        Translated bytes
    """
    if not chunk:
        return chunk

    if state.previous_cr:
        translated = BARE_LF.sub(b"\r\n", b"\r" + chunk)[1:]
    else:
        translated = BARE_LF.sub(b"\r\n", chunk)

    state.previous_cr = chunk.endswith(b"\r")
    return translated


def copy_with_ascii_translate(
    source: BinaryIO, destination: BinaryIO, buffer_size: int = DEFAULT_BUFFER_SIZE
) -> int:
    """Copy a payload, translating line endings when it looks like text.

    The text/binary decision is made once from the first SAMPLE_SIZE bytes,
    whatever the buffer size, and applied to the whole payload.

    Args:
        source: Readable binary stream positioned at the payload start
        destination: Writable binary stream
        buffer_size: Size of each read from the source

    Returns:
        Number of bytes written to destination
    """
    state = CopyState(buffer_size=buffer_size)
    chunks = iter_chunks(source, state.buffer_size)

    sample = b""
    for chunk in chunks:
        sample += chunk
        if len(sample) >= SAMPLE_SIZE:
            break
    is_text = looks_like_text(sample)

    written = 0
    for chunk in _prepend(sample, chunks):
        if is_text:
            chunk = translate_line_endings(chunk, state)
        destination.write(chunk)
        written += len(chunk)
    return written


def _prepend(first: bytes, rest):
    if first:
        yield first
    yield from rest
