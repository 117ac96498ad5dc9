"""Built-in text converters: case folding and whitespace trimming."""

from __future__ import annotations

from blockconv.app.ports import ConverterPort
from blockconv.config import ConversionName

# Unicode White_Space characters. Unlike str.isspace, the ASCII information
# separators U+001C..U+001F are not whitespace here.
WHITESPACE = (
    "\t\n\v\f\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)


class UpperCaseConverter(ConverterPort):
    """Map every character to its upper-case form."""

    name = "upper_case"

    def convert(self, fragment: str) -> str:
        return fragment.upper()

    def flush(self) -> str:
        return ""


class LowerCaseConverter(ConverterPort):
    """Map every character to its lower-case form."""

    name = "lower_case"

    def convert(self, fragment: str) -> str:
        # Per character, so final-sigma handling cannot depend on where a
        # block boundary falls.
        return "".join(map(str.lower, fragment))

    def flush(self) -> str:
        return ""


class TrimSpacesConverter(ConverterPort):
    """Strip leading and trailing whitespace from the whole stream.

    Leading whitespace is dropped until the first non-whitespace character
    arrives; after that the leading rule never fires again. A whitespace run
    at the end of a fragment is held back as undecided: it is emitted in
    front of the next fragment that contains non-whitespace text, and simply
    never emitted if the stream ends first.
    """

    name = "trim_spaces"

    def __init__(self) -> None:
        self._leading_done = False
        self._undecided: list[str] = []

    @property
    def undecided(self) -> str:
        """Whitespace currently held back."""
        return "".join(self._undecided)

    def convert(self, fragment: str) -> str:
        if not self._leading_done:
            fragment = fragment.lstrip(WHITESPACE)
            if not fragment:
                return ""
            self._leading_done = True

        body = fragment.rstrip(WHITESPACE)
        if not body:
            self._undecided.append(fragment)
            return ""

        held = self.undecided
        self._undecided = [fragment[len(body):]] if len(body) < len(fragment) else []
        return held + body

    def flush(self) -> str:
        held = self.undecided
        self._undecided = []
        return held


_CONVERTERS: dict[ConversionName, type[ConverterPort]] = {
    "upper_case": UpperCaseConverter,
    "lower_case": LowerCaseConverter,
    "trim_spaces": TrimSpacesConverter,
}


def create_converter(name: ConversionName) -> ConverterPort:
    """Return a fresh converter instance for ``name``."""

    try:
        factory = _CONVERTERS[name]
    except KeyError as exc:
        raise ValueError(f"unknown conversion type: {name}") from exc
    return factory()
