"""Application bootstrap wiring ports, adapters, and services."""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from blockconv.app import ConverterChain, CopyJob, CopyService
from blockconv.app.adapters import ForwardStreamAdapter, SeekableFileAdapter, create_converter
from blockconv.app.ports import SinkPort, SourcePort
from blockconv.config import ConversionName, CopyOptions, Settings, get_settings
from blockconv.errors import ConfigurationError
from blockconv.utils.paths import ensure_new_output, ensure_readable_input

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ApplicationContainer:
    """Aggregates wired services for the CLI layer."""

    settings: Settings
    copy_service: CopyService

    def build_job(self, options: CopyOptions) -> CopyJob:
        return build_job(options)


def open_source(path: Path | None) -> SourcePort:
    """Open ``path`` as a seekable source, or wrap stdin when no path is given."""

    if path is None:
        return ForwardStreamAdapter(sys.stdin.buffer, owns_handle=False)

    resolved = ensure_readable_input(path)
    try:
        handle = resolved.open("rb")
    except OSError as exc:
        raise ConfigurationError(f"can't access the specified input file ({path}): {exc}") from exc
    return SeekableFileAdapter(handle)


def open_sink(path: Path | None) -> SinkPort:
    """Create ``path`` as a new file sink, or wrap stdout when no path is given."""

    if path is None:
        return ForwardStreamAdapter(sys.stdout.buffer, owns_handle=False)

    resolved = ensure_new_output(path)
    try:
        handle = resolved.open("xb")
    except FileExistsError as exc:
        raise ConfigurationError(f"specified output file {path} already exists") from exc
    except OSError as exc:
        raise ConfigurationError(f"can't create the specified output file ({path}): {exc}") from exc
    return SeekableFileAdapter(handle)


def build_chain(conversions: Iterable[ConversionName]) -> ConverterChain:
    """Instantiate fresh converters for ``conversions`` in the given order."""

    return ConverterChain.of(create_converter(name) for name in conversions)


def build_job(options: CopyOptions) -> CopyJob:
    """Open the endpoints named by ``options`` and assemble a :class:`CopyJob`.

    The source is closed again if the sink cannot be created.
    """

    source = open_source(options.source_path)
    try:
        sink = open_sink(options.target_path)
    except BaseException:
        source.close()
        raise

    logger.debug("Opened %s input and %s output", source.kind.value, sink.kind.value)
    return CopyJob(
        source=source,
        sink=sink,
        chain=build_chain(options.conversions),
        offset=options.offset,
        limit=options.limit,
        block_size=options.block_size,
    )


def bootstrap_application(settings: Settings | None = None) -> ApplicationContainer:
    """Construct the application container."""

    active_settings = settings or get_settings()
    return ApplicationContainer(
        settings=active_settings,
        copy_service=CopyService(settings=active_settings),
    )
