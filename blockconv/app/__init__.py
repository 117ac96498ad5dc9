"""Application layer for blockconv.

This layer orchestrates the streaming copy without opening files itself.
Sources, sinks and converters are supplied through port interfaces.
"""

__all__ = [
    "ConverterChain",
    "CopyJob",
    "CopyService",
    "CopyStats",
    "DecodeConvertEngine",
    "OutputQueue",
]

from blockconv.app.converter_chain import ConverterChain
from blockconv.app.copy_service import CopyJob, CopyService, CopyStats
from blockconv.app.decoder import DecodeConvertEngine
from blockconv.app.output_queue import OutputQueue
