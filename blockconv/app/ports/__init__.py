"""Port interfaces for the blockconv application layer.

These protocol interfaces define contracts for adapters.
The copy service depends on these ports, never on concrete implementations.
"""

__all__ = [
    "ConverterPort",
    "SinkPort",
    "SourcePort",
]

from blockconv.app.ports.converter import ConverterPort
from blockconv.app.ports.stream import SinkPort, SourcePort
