"""Exception hierarchy shared by the CLI, bootstrap, and copy service."""

from __future__ import annotations

from enum import Enum


class StreamKind(str, Enum):
    """Capability variant of a source or sink."""

    SEEKABLE = "seekable"
    FORWARD_ONLY = "forward-only"


class BlockconvError(Exception):
    """Base class for all blockconv failures."""

    exit_code: int = 1


class ConfigurationError(BlockconvError):
    """Raised when flags are unparseable, conflicting, or point at unusable paths."""

    exit_code = 2


class ValidationError(BlockconvError):
    """Raised when parameters are inconsistent with the input (offset past EOF)."""

    exit_code = 2


class UnsupportedOperation(BlockconvError):
    """Raised when a stream variant cannot honor the requested operation.

    The pre-run size check relies on catching this to tell an unknown size
    apart from a genuine failure, so the operation and variant are kept as
    attributes.
    """

    def __init__(self, operation: str, variant: StreamKind, detail: str | None = None) -> None:
        self.operation = operation
        self.variant = variant
        message = f"{operation} is not supported on a {variant.value} stream"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class IOFailure(BlockconvError):
    """Raised for read/write errors other than the expected end of input."""
