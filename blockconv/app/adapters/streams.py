"""File- and stream-backed implementations of the source and sink ports."""

from __future__ import annotations

import logging
import os
from typing import BinaryIO

from blockconv.app.ports import SinkPort, SourcePort
from blockconv.errors import IOFailure, StreamKind, UnsupportedOperation

logger = logging.getLogger(__name__)

# Upper bound on the scratch buffer used to discard skipped bytes.
_SKIP_CHUNK = 64 * 1024


def _read_into(handle: BinaryIO, buffer: memoryview) -> int:
    count = handle.readinto(buffer)
    if count is None:
        # Non-blocking handle with nothing available; 0 is reserved for EOF.
        raise IOFailure("input is not ready for reading (non-blocking stream)")
    return count


class SeekableFileAdapter(SourcePort, SinkPort):
    """Random-access endpoint over a binary file handle with a known size."""

    kind = StreamKind.SEEKABLE

    def __init__(self, handle: BinaryIO) -> None:
        self._handle = handle
        self._closed = False

    def read_into(self, buffer: memoryview) -> int:
        return _read_into(self._handle, buffer)

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        return self._handle.seek(offset, whence)

    def size(self) -> int:
        current = self._handle.tell()
        try:
            return self._handle.seek(0, os.SEEK_END)
        finally:
            self._handle.seek(current, os.SEEK_SET)

    def write(self, data: bytes) -> int:
        written = self._handle.write(data)
        return written if written is not None else 0

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._handle.close()


class ForwardStreamAdapter(SourcePort, SinkPort):
    """Forward-only endpoint over a pipe or standard stream of unknown size.

    Skipping ahead is done by reading and discarding. Handles that are not
    owned (the process's standard streams) are flushed on close but left open.
    """

    kind = StreamKind.FORWARD_ONLY

    def __init__(self, handle: BinaryIO, *, owns_handle: bool = True) -> None:
        self._handle = handle
        self._owns_handle = owns_handle
        self._closed = False

    def read_into(self, buffer: memoryview) -> int:
        return _read_into(self._handle, buffer)

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        if whence != os.SEEK_CUR:
            raise UnsupportedOperation("seek", self.kind, "only relative seeking is allowed")
        if offset < 0:
            raise UnsupportedOperation("seek", self.kind, "cannot seek backwards")

        scratch = memoryview(bytearray(min(offset, _SKIP_CHUNK)))
        skipped = 0
        while skipped < offset:
            count = self.read_into(scratch[: min(offset - skipped, len(scratch))])
            if not count:
                logger.debug("Input ended after skipping %d of %d bytes", skipped, offset)
                break
            skipped += count
        return skipped

    def size(self) -> int:
        raise UnsupportedOperation("size", self.kind)

    def write(self, data: bytes) -> int:
        written = self._handle.write(data)
        return written if written is not None else 0

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._owns_handle:
            self._handle.close()
        elif self._handle.writable():
            self._handle.flush()
