"""Source and sink port interfaces for byte streams."""

import os
from typing import Protocol

from blockconv.errors import StreamKind


class SourcePort(Protocol):
    """Port interface for the input side of a copy run.

    Two variants exist: seekable sources with a known size, and forward-only
    streams that only support skipping ahead and report no size.

    Side effects: Reads from the underlying resource.
    """

    kind: StreamKind

    def read_into(self, buffer: memoryview) -> int:
        """Read up to ``len(buffer)`` bytes into ``buffer``.

        Args:
            buffer: Writable buffer to fill

        Returns:
            Number of bytes placed into ``buffer``; 0 signals end of input
        """
        ...

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        """Move the read position.

        Args:
            offset: Byte offset, interpreted according to ``whence``
            whence: ``os.SEEK_SET``, ``os.SEEK_CUR`` or ``os.SEEK_END``

        Returns:
            New position (bytes skipped for forward-only streams)

        Raises:
            UnsupportedOperation: If the variant cannot honor the request
        """
        ...

    def size(self) -> int:
        """Return total size in bytes.

        Raises:
            UnsupportedOperation: If the size is unknown (forward-only streams)
        """
        ...

    def close(self) -> None:
        """Release the underlying resource. Safe to call more than once."""
        ...


class SinkPort(Protocol):
    """Port interface for the output side of a copy run.

    Side effects: Writes to the underlying resource.
    """

    kind: StreamKind

    def write(self, data: bytes) -> int:
        """Offer ``data`` to the sink.

        Args:
            data: Bytes to write

        Returns:
            Number of bytes accepted, possibly fewer than ``len(data)``
        """
        ...

    def close(self) -> None:
        """Flush and release the underlying resource. Safe to call more than once."""
        ...
