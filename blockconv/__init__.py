"""blockconv - streaming byte copier with UTF-8 aware text conversions.

Copies a byte range from a file or stdin to a new file or stdout, applying
case folding and whitespace trimming without loading the input into memory.
"""

__version__ = "0.1.0"
__author__ = "blockconv Contributors"

from blockconv.config import Settings, get_settings

__all__ = ["Settings", "get_settings", "__version__"]
