"""Pytest configuration and fixtures."""

from __future__ import annotations

import gc
import io
import os
import shutil
import tempfile
import time
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from blockconv.config import Settings
from blockconv.errors import StreamKind, UnsupportedOperation


class RecordingSink:
    """In-memory sink that can be told to accept only a few bytes per write."""

    kind = StreamKind.FORWARD_ONLY

    def __init__(self, max_chunk: int | None = None) -> None:
        self.max_chunk = max_chunk
        self.buffer = bytearray()
        self.calls: list[bytes] = []
        self.closed = False

    @property
    def data(self) -> bytes:
        return bytes(self.buffer)

    def write(self, data: bytes) -> int:
        self.calls.append(bytes(data))
        accepted = len(data) if self.max_chunk is None else min(len(data), self.max_chunk)
        self.buffer.extend(data[:accepted])
        return accepted

    def close(self) -> None:
        self.closed = True


class MemorySource:
    """In-memory source of either variant, recording every read."""

    def __init__(self, data: bytes, kind: StreamKind = StreamKind.SEEKABLE) -> None:
        self.kind = kind
        self._stream = io.BytesIO(data)
        self._size = len(data)
        self.reads: list[int] = []
        self.closed = False

    def read_into(self, buffer: memoryview) -> int:
        count = self._stream.readinto(buffer)
        self.reads.append(count)
        return count

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        if self.kind is StreamKind.FORWARD_ONLY and (whence != os.SEEK_CUR or offset < 0):
            raise UnsupportedOperation("seek", self.kind)
        return self._stream.seek(offset, whence)

    def size(self) -> int:
        if self.kind is StreamKind.FORWARD_ONLY:
            raise UnsupportedOperation("size", self.kind)
        return self._size

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    try:
        yield Path(tmpdir)
    finally:
        # Force garbage collection to release any file handles
        gc.collect()
        # Small delay to allow OS to release file locks
        time.sleep(0.01)
        shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def sample_text_file(temp_dir: Path) -> Path:
    """Create a sample UTF-8 text file."""
    file_path = temp_dir / "sample.txt"
    file_path.write_bytes("  Grüße aus Köln, ḁ€ 😀  \n".encode("utf-8"))
    return file_path


@pytest.fixture
def make_sink() -> Callable[..., RecordingSink]:
    """Factory for :class:`RecordingSink` instances."""
    return RecordingSink


@pytest.fixture
def make_source() -> Callable[..., MemorySource]:
    """Factory for :class:`MemorySource` instances."""
    return MemorySource


@pytest.fixture
def override_settings() -> Generator[Settings, None, None]:
    """Provide isolated blockconv settings scoped to tests."""

    import blockconv.config as config_module

    original_settings = getattr(config_module, "_settings", None)

    settings = config_module.Settings(
        default_block_size=1024,
        log_level="WARNING",
        max_stalled_writes=4,
    )

    config_module._settings = settings

    try:
        yield settings
    finally:
        config_module._settings = original_settings
