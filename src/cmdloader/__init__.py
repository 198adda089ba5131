"""cmdloader - discover and instantiate command classes from a directory tree."""

from cmdloader.loader import (
    CommandLoader,
    ErrorPolicy,
    LoadResult,
    load_from_directory,
)

__version__ = "0.1.0"

__all__ = [
    "CommandLoader",
    "ErrorPolicy",
    "LoadResult",
    "__version__",
    "load_from_directory",
]
