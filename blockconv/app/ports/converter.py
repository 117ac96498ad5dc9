"""Converter port interface for stateful text transformations."""

from typing import Protocol


class ConverterPort(Protocol):
    """Port interface for one link of the converter chain.

    Fragments arrive in stream order and a converter may be called many
    times during a single run, so implementations keep their own state
    between calls.
    """

    name: str

    def convert(self, fragment: str) -> str:
        """Transform the next fragment of decoded text.

        Args:
            fragment: Text decoded from the stream, in order

        Returns:
            Text ready to be passed on; may hold back part of the input
        """
        ...

    def flush(self) -> str:
        """Release any held text because non-text bytes follow it.

        Returns:
            Held text, or an empty string
        """
        ...
