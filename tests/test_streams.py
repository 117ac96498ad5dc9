"""Contract tests covering the seekable and forward-only stream adapters."""

from __future__ import annotations

import io
import os
from pathlib import Path

import pytest

from blockconv.app.adapters import ForwardStreamAdapter, SeekableFileAdapter
from blockconv.errors import IOFailure, StreamKind, UnsupportedOperation


def _read_all(source, block: int = 4) -> bytes:
    buffer = memoryview(bytearray(block))
    chunks = []
    while count := source.read_into(buffer):
        chunks.append(bytes(buffer[:count]))
    return b"".join(chunks)


def test_seekable_file_reports_size_without_moving(temp_dir: Path) -> None:
    path = temp_dir / "input.bin"
    path.write_bytes(b"0123456789")

    source = SeekableFileAdapter(path.open("rb"))
    try:
        assert source.kind is StreamKind.SEEKABLE
        assert source.seek(3, os.SEEK_CUR) == 3
        assert source.size() == 10
        assert _read_all(source) == b"3456789"
        assert source.seek(-4, os.SEEK_END) == 6
        assert source.seek(1, os.SEEK_SET) == 1
    finally:
        source.close()


def test_seekable_file_close_is_idempotent(temp_dir: Path) -> None:
    path = temp_dir / "output.bin"
    sink = SeekableFileAdapter(path.open("xb"))

    assert sink.write(b"payload") == 7
    sink.close()
    sink.close()

    assert path.read_bytes() == b"payload"


def test_forward_stream_skips_by_discarding() -> None:
    stream = ForwardStreamAdapter(io.BytesIO(b"abcdefghij"))

    assert stream.kind is StreamKind.FORWARD_ONLY
    assert stream.seek(4, os.SEEK_CUR) == 4
    assert _read_all(stream) == b"efghij"


def test_forward_stream_skip_stops_at_end_of_input() -> None:
    stream = ForwardStreamAdapter(io.BytesIO(b"abc"))

    assert stream.seek(100, os.SEEK_CUR) == 3
    assert _read_all(stream) == b""


def test_forward_stream_zero_skip_is_allowed() -> None:
    stream = ForwardStreamAdapter(io.BytesIO(b"abc"))

    assert stream.seek(0, os.SEEK_CUR) == 0
    assert _read_all(stream) == b"abc"


@pytest.mark.parametrize(
    ("offset", "whence"),
    [(0, os.SEEK_SET), (5, os.SEEK_SET), (0, os.SEEK_END), (-1, os.SEEK_CUR)],
)
def test_forward_stream_rejects_other_seeks(offset: int, whence: int) -> None:
    stream = ForwardStreamAdapter(io.BytesIO(b"abcdef"))

    with pytest.raises(UnsupportedOperation) as exc_info:
        stream.seek(offset, whence)

    assert exc_info.value.operation == "seek"
    assert exc_info.value.variant is StreamKind.FORWARD_ONLY
    assert _read_all(stream) == b"abcdef"


def test_forward_stream_size_is_unsupported() -> None:
    stream = ForwardStreamAdapter(io.BytesIO(b"abc"))

    with pytest.raises(UnsupportedOperation, match="size is not supported") as exc_info:
        stream.size()

    assert exc_info.value.operation == "size"


def test_forward_stream_leaves_unowned_handle_open() -> None:
    handle = io.BytesIO()
    stream = ForwardStreamAdapter(handle, owns_handle=False)

    stream.write(b"out")
    stream.close()
    stream.close()

    assert not handle.closed
    assert handle.getvalue() == b"out"


def test_forward_stream_closes_owned_handle() -> None:
    handle = io.BytesIO(b"x")
    stream = ForwardStreamAdapter(handle)

    stream.close()

    assert handle.closed


def test_write_reports_zero_for_would_block() -> None:
    class WouldBlock(io.RawIOBase):
        def writable(self) -> bool:
            return True

        def write(self, data) -> None:  # type: ignore[override]
            return None

    assert ForwardStreamAdapter(WouldBlock()).write(b"abc") == 0


def test_forward_stream_seek_defaults_to_absolute_and_is_rejected() -> None:
    stream = ForwardStreamAdapter(io.BytesIO(b"abcdef"))

    with pytest.raises(UnsupportedOperation):
        stream.seek(5)

    assert _read_all(stream) == b"abcdef"


class _NotReady(io.RawIOBase):
    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> None:  # type: ignore[override]
        return None


@pytest.mark.parametrize("adapter", [ForwardStreamAdapter, SeekableFileAdapter])
def test_read_with_no_data_ready_is_not_end_of_input(adapter) -> None:
    source = adapter(_NotReady())

    with pytest.raises(IOFailure, match="not ready"):
        source.read_into(memoryview(bytearray(4)))
