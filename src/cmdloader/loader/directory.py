"""Best-effort loading of a flat directory of commands.

Unlike :class:`~cmdloader.loader.command_loader.CommandLoader`, nothing is
configured: each file declares its own ``__namespace__`` and the command is
resolved as ``<namespace>.<FileName>``.
"""

import importlib
import os
from typing import Any

from cmdloader.exceptions import CommandLoaderError
from cmdloader.loader.identity import CommandDescriptor, build_flat_identifier, extract_namespace
from cmdloader.loader.paths import resolve_directory
from cmdloader.loader.reflection import TypePredicate, load_candidate, skip
from cmdloader.loader.result import LoadResult, SkippedFile, SkipReason
from cmdloader.utils.files import SOURCE_EXTENSION, read_text_safe, scan_sources
from cmdloader.utils.logging import get_logger

logger = get_logger(__name__)


def scan_directory(
    path: str | os.PathLike[str],
    predicate: TypePredicate | None = None,
    *,
    extension: str = SOURCE_EXTENSION,
) -> LoadResult:
    """Load the commands found directly under ``path``.

    Args:
        path: Directory holding command source files.
        predicate: Optional filter applied to each resolved class.
        extension: Extension of command source files.

    Returns:
        A LoadResult; ``error`` is set only when ``path`` is not a directory.
    """
    try:
        directory = resolve_directory(path)
    except CommandLoaderError as e:
        return LoadResult.fail(e)

    importlib.invalidate_caches()

    commands: list[Any] = []
    skipped: list[SkippedFile] = []

    for file_name in scan_sources(directory, extension=extension):
        contents = read_text_safe(directory / file_name)
        namespace = extract_namespace(contents) if contents is not None else None
        if namespace is None:
            skipped.append(skip(file_name, None, SkipReason.NO_NAMESPACE))
            continue

        descriptor = CommandDescriptor(
            source_file=file_name,
            extracted_namespace=namespace,
            fully_qualified_id=build_flat_identifier(namespace, file_name, extension),
        )
        loaded = load_candidate(descriptor, predicate)
        if isinstance(loaded, SkippedFile):
            skipped.append(loaded)
        else:
            commands.append(loaded)

    logger.debug(
        "Loaded %d command(s) from %s, skipped %d", len(commands), directory, len(skipped)
    )
    return LoadResult.ok(commands, skipped)


def load_from_directory(
    path: str | os.PathLike[str],
    predicate: TypePredicate | None = None,
) -> list[Any]:
    """Load all commands from ``path``.

    Args:
        path: A directory with zero or more command source files.
        predicate: Optional filter applied to each resolved class.

    Returns:
        Instantiated commands, or an empty list when ``path`` is not a
        directory or holds no loadable commands.
    """
    return scan_directory(path, predicate).unwrap_or_empty()
