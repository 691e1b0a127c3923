"""Filesystem helpers for document and include roots."""

import os
from pathlib import Path

from trill.errors import ConfigurationError


def verify_directory(path: str | Path) -> bool:
    """Return True if *path* exists and is a directory."""
    return Path(path).is_dir()


def collect_includes(include_root: str | Path) -> tuple[Path, ...]:
    """Walk *include_root* recursively and return every file in it.

    Runs once at server construction. Paths are sorted so the include
    set has a stable order.

    Raises:
        ConfigurationError: If the root is missing or not a directory.
    """
    root = Path(include_root)
    if not root.exists():
        msg = f"includes: no such directory: {str(root)!r}"
        raise ConfigurationError(msg)
    if not root.is_dir():
        msg = f"includes: not a directory: {str(root)!r}"
        raise ConfigurationError(msg)

    files: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        files.extend(Path(dirpath) / name for name in sorted(filenames))
    return tuple(files)


def include_names(include_root: str | Path, includes: tuple[Path, ...]) -> tuple[str, ...]:
    """Template names for the include set, relative to *include_root*.

    These are the names templates use to reach a fragment, e.g.
    ``{% include "partials/nav.html" %}``.
    """
    root = Path(include_root)
    return tuple(path.relative_to(root).as_posix() for path in includes)
