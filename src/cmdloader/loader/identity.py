"""Identity extraction and fully-qualified identifier construction.

A command module declares the package it belongs to with a module-level
constant::

    __namespace__ = "myapp.commands"

The declaration is read from the source text, so identity can be recovered
without importing the file.
"""

import re
from dataclasses import dataclass

from cmdloader.utils.files import SOURCE_EXTENSION

# Separator between identifier segments
IDENTITY_SEPARATOR = "."

NAMESPACE_PATTERN = re.compile(
    r"""^[ \t]*__namespace__[ \t]*(?::[^=\n]*)?=[ \t]*(['"])([\w.\\-]*)\1""",
    re.MULTILINE,
)

_BACKSLASHES = re.compile(r"\\+")


@dataclass(frozen=True)
class CommandDescriptor:
    """Identity of one candidate file during a scan.

    Attributes:
        source_file: File name relative to the scanned directory.
        extracted_namespace: Namespace declared in the file, if read.
        fully_qualified_id: Identifier used to resolve the command class.
    """

    source_file: str
    extracted_namespace: str | None
    fully_qualified_id: str


def extract_namespace(contents: str) -> str | None:
    """Return the first ``__namespace__`` declared in ``contents``.

    Backslash separators are normalized to dots. Returns None when the
    text holds no declaration or the declared value is empty.
    """
    match = NAMESPACE_PATTERN.search(contents)
    if match is None:
        return None

    namespace = _BACKSLASHES.sub(IDENTITY_SEPARATOR, match.group(2)).strip(IDENTITY_SEPARATOR)
    return namespace or None


def strip_extension(file_name: str, extension: str = SOURCE_EXTENSION) -> str:
    """Remove the source extension from ``file_name``."""
    if extension and file_name.endswith(extension):
        return file_name[: -len(extension)]
    return file_name


def _join(*segments: str) -> str:
    return IDENTITY_SEPARATOR.join(s.strip(IDENTITY_SEPARATOR) for s in segments if s)


def build_flat_identifier(
    namespace: str,
    file_name: str,
    extension: str = SOURCE_EXTENSION,
) -> str:
    """Build ``namespace.BaseName`` for a file in a flat directory."""
    return _join(namespace, strip_extension(file_name, extension))


def build_module_identifier(
    prefix: str,
    module: str,
    file_name: str,
    extension: str = SOURCE_EXTENSION,
) -> str:
    """Build ``prefix.module.BaseName`` from configuration and file location.

    Path separators inside nested file names (``admin/Grant.py``) become
    identifier separators (``prefix.module.admin.Grant``). Any namespace the
    file declares itself is ignored.
    """
    base = strip_extension(file_name, extension)
    base = base.replace("\\", "/").replace("/", IDENTITY_SEPARATOR)
    prefix = prefix.replace("\\", IDENTITY_SEPARATOR)
    module = module.replace("\\", "/").replace("/", IDENTITY_SEPARATOR)
    return _join(prefix, module, base)
