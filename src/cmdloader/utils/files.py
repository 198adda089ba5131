"""File operations utilities."""

from collections.abc import Iterator
from pathlib import Path

# Default extension of command source files
SOURCE_EXTENSION = ".py"

# Common hidden/ignored directories
IGNORED_DIRS = frozenset(
    {
        ".git",
        ".svn",
        ".hg",
        "node_modules",
        "__pycache__",
        ".pytest_cache",
        ".mypy_cache",
        "venv",
        ".venv",
        "env",
        ".env",
        ".idea",
        ".vscode",
        "dist",
        "build",
        ".tox",
        ".nox",
    }
)


def is_hidden(path: Path) -> bool:
    """Check if a file or directory is hidden.

    Args:
        path: Path to check.

    Returns:
        True if path is hidden (starts with .).
    """
    return path.name.startswith(".")


def is_private(path: Path) -> bool:
    """Check if a file is private (``_helpers.py``, ``__init__.py``)."""
    return path.name.startswith("_")


def should_ignore_dir(name: str) -> bool:
    """Check if a directory should be ignored during traversal.

    Args:
        name: Directory name.

    Returns:
        True if directory should be ignored.
    """
    return name in IGNORED_DIRS or name.startswith(".") or name.endswith(".egg-info")


def read_text_safe(path: Path, errors: str = "ignore") -> str | None:
    """Safely read text file content.

    Args:
        path: Path to file.
        errors: How to handle encoding errors.

    Returns:
        File content as string, or None if cannot be read.
    """
    try:
        return path.read_text(encoding="utf-8", errors=errors)
    except OSError:
        return None


def iter_source_files(
    directory: Path,
    *,
    extension: str = SOURCE_EXTENSION,
    recursive: bool = False,
) -> Iterator[Path]:
    """Iterate over command source files in a directory.

    Entries are visited in name order. Hidden entries, private files and
    ignored directories are skipped.

    Args:
        directory: Root directory to search.
        extension: Only include files with this extension.
        recursive: Descend into sub-directories.

    Yields:
        Path objects for matching files.
    """

    def _walk(path: Path) -> Iterator[Path]:
        try:
            entries = sorted(path.iterdir(), key=lambda p: p.name)
        except PermissionError:
            return

        for entry in entries:
            if is_hidden(entry):
                continue

            if entry.is_dir():
                if recursive and not should_ignore_dir(entry.name):
                    yield from _walk(entry)

            elif entry.is_file():
                if is_private(entry) or entry.suffix != extension:
                    continue
                yield entry

    yield from _walk(directory)


def scan_sources(
    directory: Path,
    *,
    extension: str = SOURCE_EXTENSION,
    recursive: bool = False,
) -> list[str]:
    """List command source files relative to ``directory``.

    Args:
        directory: Canonical directory to scan.
        extension: Source file extension, including the dot.
        recursive: Include files in nested sub-directories.

    Returns:
        POSIX-style relative file names in traversal order, e.g. ``["Add.py", "admin/Grant.py"]``.
    """
    return [
        entry.relative_to(directory).as_posix()
        for entry in iter_source_files(directory, extension=extension, recursive=recursive)
    ]
