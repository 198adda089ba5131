"""Command discovery and loading.

Usage:
    from cmdloader.loader import CommandLoader, ErrorPolicy, load_from_directory

    # Flat directory, each file declares __namespace__
    commands = load_from_directory("./commands")

    # Module directories under a configured prefix
    loader = CommandLoader(ErrorPolicy.SOFT_FAIL)
    loader.set_path("./commands").set_namespace("myapp.commands")
    commands = loader.get_module_commands("users")
"""

from cmdloader.loader.command_loader import CommandLoader
from cmdloader.loader.directory import load_from_directory, scan_directory
from cmdloader.loader.identity import (
    CommandDescriptor,
    build_flat_identifier,
    build_module_identifier,
    extract_namespace,
)
from cmdloader.loader.paths import resolve_directory, try_resolve_directory
from cmdloader.loader.reflection import resolve_type, subclass_of
from cmdloader.loader.result import ErrorPolicy, LoadResult, SkippedFile, SkipReason

__all__ = [
    "CommandDescriptor",
    "CommandLoader",
    "ErrorPolicy",
    "LoadResult",
    "SkipReason",
    "SkippedFile",
    "build_flat_identifier",
    "build_module_identifier",
    "extract_namespace",
    "load_from_directory",
    "resolve_directory",
    "resolve_type",
    "scan_directory",
    "subclass_of",
    "try_resolve_directory",
]
