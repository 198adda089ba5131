"""Path resolution for command directories."""

import os
from pathlib import Path

from cmdloader.exceptions import PathInvalidError


def normalize_path(path: str | os.PathLike[str]) -> Path:
    """Normalize separators and expand ``~`` without touching the filesystem.

    Both ``/`` and ``\\`` are accepted as separators in raw strings.
    """
    raw = os.fspath(path)
    if os.sep != "\\":
        raw = raw.replace("\\", "/")
    return Path(raw).expanduser()


def try_resolve_directory(path: str | os.PathLike[str] | None) -> Path | None:
    """Resolve ``path`` to a canonical existing directory.

    Returns:
        The absolute, symlink-free path, or None when the path is empty,
        missing or not a directory.
    """
    if path is None or os.fspath(path) == "":
        return None

    try:
        resolved = normalize_path(path).resolve(strict=True)
    except (OSError, RuntimeError):
        return None

    if not resolved.is_dir():
        return None
    return resolved


def resolve_directory(path: str | os.PathLike[str] | None) -> Path:
    """Resolve ``path`` to a canonical existing directory.

    Raises:
        PathInvalidError: If the path cannot be resolved to a directory.
    """
    resolved = try_resolve_directory(path)
    if resolved is None:
        raise PathInvalidError(f"Path {path!s} is not an existing directory")
    return resolved
