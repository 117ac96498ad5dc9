"""Ordered output queue that survives partial writes."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum

from blockconv.app.ports import SinkPort
from blockconv.errors import IOFailure

logger = logging.getLogger(__name__)


class SegmentKind(str, Enum):
    """Origin of a queued byte segment."""

    RAW = "raw"
    CONVERTED = "converted"


@dataclass(slots=True, frozen=True)
class Segment:
    """Bytes waiting for the sink, tagged with where they came from."""

    kind: SegmentKind
    data: bytes


class OutputQueue:
    """FIFO of segments bound for a sink.

    Segments leave strictly in the order they were pushed. When the sink
    accepts only part of a segment, the unwritten suffix stays at the front
    and is the first thing offered on the next drain.
    """

    def __init__(self, sink: SinkPort, *, max_stalled_writes: int = 16) -> None:
        self._sink = sink
        self._segments: deque[Segment] = deque()
        self._pending = 0
        self._stalled = 0
        self._max_stalled_writes = max_stalled_writes
        self.bytes_written = 0

    def __len__(self) -> int:
        return self._pending

    def __bool__(self) -> bool:
        return self._pending > 0

    @property
    def segments(self) -> list[Segment]:
        return list(self._segments)

    def push(self, kind: SegmentKind, data: bytes) -> None:
        if not data:
            return
        self._segments.append(Segment(kind, bytes(data)))
        self._pending += len(data)

    def push_raw(self, data: bytes) -> None:
        self.push(SegmentKind.RAW, data)

    def push_converted(self, data: bytes) -> None:
        self.push(SegmentKind.CONVERTED, data)

    def drain(self) -> bool:
        """Offer queued segments to the sink until it falls short.

        Returns:
            True when the queue is empty afterwards

        Raises:
            IOFailure: If the sink errors, reports an impossible count, or
                keeps accepting nothing
        """

        while self._segments:
            segment = self._segments[0]
            try:
                written = self._sink.write(segment.data)
            except OSError as exc:
                raise IOFailure(f"unable to write to output: {exc}") from exc

            if written < 0 or written > len(segment.data):
                raise IOFailure(
                    f"output reported {written} bytes written for a {len(segment.data)}-byte write"
                )

            self.bytes_written += written
            self._pending -= written

            if written == len(segment.data):
                self._segments.popleft()
                self._stalled = 0
                continue

            self._segments[0] = Segment(segment.kind, segment.data[written:])
            if written:
                self._stalled = 0
            else:
                self._stalled += 1
                if self._stalled > self._max_stalled_writes:
                    raise IOFailure(
                        f"output accepted no data after {self._stalled} consecutive attempts"
                    )
            logger.debug(
                "Short write: %d of %d %s bytes accepted, %d pending",
                written,
                len(segment.data),
                segment.kind.value,
                self._pending,
            )
            return False

        return True
