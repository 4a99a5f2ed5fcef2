"""Tests for buffered stream copies."""

import io

import pytest

from targzip.utils.stream import CopyState, copy_stream, iter_chunks


class RecordingReader(io.BytesIO):
    """BytesIO remembering the size of every read request."""

    def __init__(self, data: bytes):
        super().__init__(data)
        self.requests: list[int] = []

    def read(self, size=-1):
        self.requests.append(size)
        return super().read(size)


def test_copy_stream_copies_everything():
    data = bytes(range(256)) * 100
    out = io.BytesIO()
    assert copy_stream(io.BytesIO(data), out, buffer_size=1000) == len(data)
    assert out.getvalue() == data


def test_copy_stream_uses_fixed_buffer():
    source = RecordingReader(b"x" * 10)
    copy_stream(source, io.BytesIO(), buffer_size=4)
    assert source.requests == [4, 4, 4, 4]


def test_copy_stream_empty_source():
    out = io.BytesIO()
    assert copy_stream(io.BytesIO(), out) == 0
    assert out.getvalue() == b""


def test_copy_stream_propagates_write_errors():
    class BrokenWriter(io.RawIOBase):
        def writable(self):
            return True

        def write(self, data):
            raise OSError("disk full")

    with pytest.raises(OSError, match="disk full"):
        copy_stream(io.BytesIO(b"data"), BrokenWriter())


def test_iter_chunks():
    assert list(iter_chunks(io.BytesIO(b"abcdefg"), 3)) == [b"abc", b"def", b"g"]


def test_copy_state_rejects_bad_buffer_size():
    with pytest.raises(ValueError):
        CopyState(buffer_size=0)


def test_copy_state_defaults():
    state = CopyState()
    assert state.buffer_size == 32 * 1024
    assert state.previous_cr is False
