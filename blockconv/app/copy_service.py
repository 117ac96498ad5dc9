"""Copy service: pre-run validation, offset skipping, and the bounded block-read loop."""

from __future__ import annotations

import logging
import math
import os
from dataclasses import asdict, dataclass, field

from blockconv.app.converter_chain import ConverterChain
from blockconv.app.decoder import DecodeConvertEngine
from blockconv.app.output_queue import OutputQueue
from blockconv.app.ports import SinkPort, SourcePort
from blockconv.config import DEFAULT_BLOCK_SIZE, Settings
from blockconv.errors import IOFailure, UnsupportedOperation, ValidationError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CopyJob:
    """Everything a single run needs, built once from the configuration."""

    source: SourcePort
    sink: SinkPort
    chain: ConverterChain = field(default_factory=ConverterChain)
    offset: int = 0
    limit: int | None = None
    block_size: int = DEFAULT_BLOCK_SIZE

    def __post_init__(self) -> None:
        if self.offset < 0:
            raise ValueError("offset must be >= 0")
        if self.limit is not None and self.limit < 0:
            raise ValueError("limit must be >= 0")
        if self.block_size < 1:
            raise ValueError("block_size must be >= 1")


@dataclass(slots=True)
class CopyStats:
    """Counters reported after a run."""

    bytes_read: int = 0
    bytes_written: int = 0
    raw_bytes: int = 0
    blocks: int = 0

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass(slots=True)
class CopyService:
    """Run a :class:`CopyJob` from start to finish.

    The source and sink are closed on every exit path, including validation
    failures and I/O errors raised from inside the loop. Output written before
    a failure stays where it is.
    """

    settings: Settings

    def run(self, job: CopyJob) -> CopyStats:
        """Validate, skip to the offset, and stream the job's source into its sink.

        Raises:
            ValidationError: If the offset is not inside a source of known size
            UnsupportedOperation: If the source refuses the offset skip
            IOFailure: On any read, write, seek or close error
        """

        logger.info(
            "Starting copy: offset=%d limit=%s block_size=%d conversions=%s",
            job.offset,
            "unbounded" if job.limit is None else job.limit,
            job.block_size,
            ",".join(job.chain.names) or "none",
        )
        try:
            self.validate(job)
            self.skip_to_offset(job)
            stats = self.copy(job)
        finally:
            failures = self.release(job)

        if failures:
            name, exc = failures[0]
            raise IOFailure(f"unable to close {name}: {exc}") from exc

        logger.info(
            "Copy finished: %d bytes read, %d bytes written, %d raw bytes passed through",
            stats.bytes_read,
            stats.bytes_written,
            stats.raw_bytes,
        )
        return stats

    def validate(self, job: CopyJob) -> None:
        """Reject an offset that falls outside a source of known size."""

        try:
            input_size = job.source.size()
        except UnsupportedOperation:
            logger.debug("Input size unknown; skipping offset check")
            return
        except OSError as exc:
            raise IOFailure(f"unable to get input file info: {exc}") from exc

        if job.offset >= input_size:
            raise ValidationError(f"invalid offset {job.offset}>={input_size} (input file size)")

    def skip_to_offset(self, job: CopyJob) -> None:
        try:
            job.source.seek(job.offset, os.SEEK_CUR)
        except OSError as exc:
            raise IOFailure(f"failed to set the specified offset {job.offset}: {exc}") from exc

    def copy(self, job: CopyJob) -> CopyStats:
        """Drive the decode engine until the limit is reached and all output is written."""

        stats = CopyStats()
        queue = OutputQueue(job.sink, max_stalled_writes=self.settings.max_stalled_writes)
        engine = DecodeConvertEngine(job.chain, queue)

        buffer = memoryview(bytearray(job.block_size))
        remaining: float = math.inf if job.limit is None else job.limit
        carry = b""

        while remaining > 0 or carry or queue:
            if remaining > 0:
                want = int(min(job.block_size, remaining))
                try:
                    count = job.source.read_into(buffer[:want])
                except OSError as exc:
                    raise IOFailure(f"unable to read from input: {exc}") from exc

                stats.blocks += 1
                stats.bytes_read += count
                carry += buffer[:count]
                remaining -= count
                if not count:
                    remaining = 0
                logger.debug("Read block %d: %d bytes", stats.blocks, count)

            carry = engine.feed(carry, final=remaining == 0)

        stats.bytes_written = queue.bytes_written
        stats.raw_bytes = engine.raw_bytes
        return stats

    def release(self, job: CopyJob) -> list[tuple[str, OSError]]:
        """Close source and sink, collecting failures instead of stopping at the first."""

        failures: list[tuple[str, OSError]] = []
        for name, endpoint in (("input", job.source), ("output", job.sink)):
            try:
                endpoint.close()
            except OSError as exc:
                logger.warning("Failed to close %s: %s", name, exc)
                failures.append((name, exc))
        return failures
