"""Path checks performed before any stream is opened."""

from __future__ import annotations

import os
from pathlib import Path

from blockconv.errors import ConfigurationError


def ensure_readable_input(path: Path) -> Path:
    """Resolve ``path`` and ensure it names a readable, non-directory file."""

    resolved_path = Path(path).expanduser().resolve()
    if not resolved_path.exists():
        raise ConfigurationError(f"can't access the specified input file ({path}): not found")
    if resolved_path.is_dir():
        raise ConfigurationError(f"can't access the specified input file ({path}): is a directory")
    if not os.access(resolved_path, os.R_OK):
        raise ConfigurationError(f"can't access the specified input file ({path}): permission denied")
    return resolved_path


def ensure_new_output(path: Path) -> Path:
    """Resolve ``path`` and ensure nothing exists there yet."""

    candidate = Path(path).expanduser()
    if candidate.exists() or candidate.is_symlink():
        raise ConfigurationError(f"specified output file {path} already exists")
    if not candidate.resolve().parent.is_dir():
        raise ConfigurationError(
            f"can't create the specified output file ({path}): parent directory does not exist"
        )
    return candidate.resolve()
