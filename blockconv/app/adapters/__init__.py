"""Concrete adapters wiring application ports to built-in implementations."""

from __future__ import annotations

from .converters import (
    LowerCaseConverter,
    TrimSpacesConverter,
    UpperCaseConverter,
    create_converter,
)
from .streams import ForwardStreamAdapter, SeekableFileAdapter

__all__ = [
    "ForwardStreamAdapter",
    "LowerCaseConverter",
    "SeekableFileAdapter",
    "TrimSpacesConverter",
    "UpperCaseConverter",
    "create_converter",
]
