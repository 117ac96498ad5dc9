"""UTF-8 boundary-safe decode-and-convert engine."""

from __future__ import annotations

import codecs
import logging

from blockconv.app.converter_chain import ConverterChain
from blockconv.app.output_queue import OutputQueue

logger = logging.getLogger(__name__)


class DecodeConvertEngine:
    """Turn raw byte chunks into converted output on an :class:`OutputQueue`.

    Valid UTF-8 text is routed through the converter chain. Malformed bytes
    are copied through verbatim and never reach a converter. An incomplete
    character at the end of a chunk is handed back to the caller so it can be
    completed by the next read.

    Everything is queued in read order: text decoded ahead of a malformed run
    is converted and queued first, converters release any text they were
    holding, and only then is the malformed run queued.
    """

    def __init__(self, chain: ConverterChain, queue: OutputQueue) -> None:
        self._chain = chain
        self._queue = queue
        self.raw_bytes = 0

    @property
    def backlog(self) -> int:
        """Bytes produced but not yet accepted by the sink."""
        return len(self._queue)

    def feed(self, data: bytes, final: bool) -> bytes:
        """Process ``data`` and write as much output as the sink accepts.

        Args:
            data: Unprocessed bytes, starting with any tail from the previous call
            final: True when no more bytes will ever arrive

        Returns:
            Trailing bytes of an incomplete character to prepend to the next
            chunk; always empty when ``final`` is set
        """

        view = memoryview(data)
        position = 0
        while position < len(view):
            try:
                text, consumed = codecs.utf_8_decode(view[position:], "strict", final)
            except UnicodeDecodeError as exc:
                start = position + exc.start
                end = position + exc.end
                self._queue_text(codecs.utf_8_decode(view[position:start], "strict", True)[0])
                self._queue_raw(bytes(view[start:end]))
                position = end
                continue

            self._queue_text(text)
            position += consumed
            break

        self._queue.drain()
        return bytes(view[position:])

    def _queue_text(self, text: str) -> None:
        if not text:
            return
        converted = self._chain.convert(text)
        self._queue.push_converted(converted.encode("utf-8"))

    def _queue_raw(self, raw: bytes) -> None:
        held = self._chain.flush()
        self._queue.push_converted(held.encode("utf-8"))
        self._queue.push_raw(raw)
        self.raw_bytes += len(raw)
        logger.debug("Passing through %d undecodable bytes", len(raw))
