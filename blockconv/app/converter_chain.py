"""Ordered chain of stateful text converters."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from blockconv.app.ports import ConverterPort


@dataclass(slots=True)
class ConverterChain:
    """Apply converters in a fixed order, threading each one's output into the next."""

    converters: tuple[ConverterPort, ...] = field(default_factory=tuple)

    @classmethod
    def of(cls, converters: Iterable[ConverterPort]) -> "ConverterChain":
        return cls(tuple(converters))

    @property
    def names(self) -> list[str]:
        return [converter.name for converter in self.converters]

    def convert(self, text: str) -> str:
        for converter in self.converters:
            text = converter.convert(text)
        return text

    def flush(self) -> str:
        """Release text held by any converter, still passing it down the chain.

        Text a converter releases goes through every converter after it, and
        is placed after whatever those later converters were holding.
        """

        released = ""
        for converter in self.converters:
            released = converter.convert(released) + converter.flush()
        return released
