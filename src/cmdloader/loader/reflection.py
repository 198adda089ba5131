"""Type resolution, filtering and instantiation of command candidates.

An identifier such as ``myapp.commands.users.Add`` is resolved by:

1. looking it up in :class:`~cmdloader.commands.registry.CommandRegistry`;
2. importing ``myapp.commands.users.Add`` and taking its ``Add`` attribute
   (one class per file, named after the file);
3. importing ``myapp.commands.users`` and taking its ``Add`` attribute.

Every per-file failure becomes a :class:`SkippedFile`; nothing here raises
for a bad candidate.
"""

import importlib
import inspect
import logging
from collections.abc import Callable, Iterable
from typing import Any

from cmdloader.commands.registry import CommandRegistry
from cmdloader.loader.identity import IDENTITY_SEPARATOR, CommandDescriptor
from cmdloader.loader.result import LoadResult, SkippedFile, SkipReason
from cmdloader.utils.logging import get_logger, log_with_context

logger = get_logger(__name__)

# Predicate applied to resolved classes
TypePredicate = Callable[[type], bool]

_MISSING = object()

_QUIET_REASONS = frozenset({SkipReason.ABSTRACT, SkipReason.FILTERED})

_ARGUMENT_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
    inspect.Parameter.KEYWORD_ONLY,
)


def skip(
    source_file: str,
    identifier: str | None,
    reason: SkipReason,
    detail: str | None = None,
) -> SkippedFile:
    """Record a skipped file and emit its diagnostic line."""
    skipped = SkippedFile(source_file, identifier, reason, detail)
    target = identifier or source_file

    if reason in _QUIET_REASONS and detail is None:
        level, message = logging.DEBUG, f"Skipping {target} ({reason.value})"
    else:
        level, message = logging.WARNING, f"Unable to load {target}, skipping"

    log_with_context(
        logger,
        level,
        message,
        source_file=source_file,
        identifier=identifier,
        reason=reason.value,
        detail=detail,
    )
    return skipped


def is_valid_identifier(identifier: str) -> bool:
    """Check that every segment of ``identifier`` is a Python identifier."""
    segments = identifier.split(IDENTITY_SEPARATOR)
    return bool(identifier) and all(segment.isidentifier() for segment in segments)


def _import_attribute(module_name: str, attribute: str) -> Any:
    """Import ``module_name`` and return ``attribute`` or ``_MISSING``.

    A missing module yields ``_MISSING``; errors raised while executing an
    existing module propagate.
    """
    try:
        module = importlib.import_module(module_name)
    except ModuleNotFoundError as e:
        if e.name and (module_name == e.name or module_name.startswith(e.name + ".")):
            return _MISSING
        raise
    return getattr(module, attribute, _MISSING)


def resolve_type(identifier: str) -> Any | None:
    """Resolve a fully-qualified identifier to the object it names.

    Returns:
        The registered or imported object, or None if it cannot be found.

    Raises:
        Exception: Whatever a found module raises while being imported.
    """
    registered = CommandRegistry.get(identifier)
    if registered is not None:
        return registered

    if not is_valid_identifier(identifier):
        return None

    module_name, _, attribute = identifier.rpartition(IDENTITY_SEPARATOR)
    if not module_name:
        return None

    candidate = _import_attribute(identifier, attribute)
    if candidate is _MISSING:
        candidate = _import_attribute(module_name, attribute)
    return None if candidate is _MISSING else candidate


def requires_arguments(command_class: type) -> bool:
    """Check whether constructing ``command_class`` needs any argument."""
    try:
        signature = inspect.signature(command_class)
    except (TypeError, ValueError):
        # Builtin or C-implemented constructors without metadata
        return False

    return any(
        parameter.kind in _ARGUMENT_KINDS and parameter.default is inspect.Parameter.empty
        for parameter in signature.parameters.values()
    )


def inspect_candidate(
    descriptor: CommandDescriptor,
    predicate: TypePredicate | None = None,
) -> type | SkippedFile:
    """Resolve and filter one candidate.

    Returns:
        The concrete, zero-argument-constructible class accepted by
        ``predicate``, or a SkippedFile naming why it was rejected.
    """
    identifier = descriptor.fully_qualified_id
    source_file = descriptor.source_file

    try:
        resolved = resolve_type(identifier)
    except Exception as e:
        logger.debug("Import of %s failed", identifier, exc_info=True)
        return skip(source_file, identifier, SkipReason.UNRESOLVABLE, f"{type(e).__name__}: {e}")

    if resolved is None:
        return skip(source_file, identifier, SkipReason.UNRESOLVABLE)

    if not inspect.isclass(resolved):
        return skip(source_file, identifier, SkipReason.NOT_A_CLASS)

    # Abstract classes are rejected before the predicate sees them
    if inspect.isabstract(resolved):
        return skip(source_file, identifier, SkipReason.ABSTRACT)

    if requires_arguments(resolved):
        return skip(source_file, identifier, SkipReason.REQUIRES_ARGUMENTS)

    if predicate is not None:
        try:
            accepted = predicate(resolved)
        except Exception as e:
            logger.debug("Predicate failed for %s", identifier, exc_info=True)
            return skip(source_file, identifier, SkipReason.FILTERED, f"{type(e).__name__}: {e}")
        if not accepted:
            return skip(source_file, identifier, SkipReason.FILTERED)

    return resolved


def instantiate(descriptor: CommandDescriptor, command_class: type) -> Any:
    """Construct ``command_class`` without arguments.

    Returns:
        The new instance, or a SkippedFile if the constructor raised.
    """
    try:
        return command_class()
    except Exception as e:
        logger.debug("Constructor of %s failed", descriptor.fully_qualified_id, exc_info=True)
        return skip(
            descriptor.source_file,
            descriptor.fully_qualified_id,
            SkipReason.INSTANTIATION_FAILED,
            f"{type(e).__name__}: {e}",
        )


def load_candidate(
    descriptor: CommandDescriptor,
    predicate: TypePredicate | None = None,
) -> Any:
    """Run the filter and instantiation stages for one candidate.

    Returns:
        A command instance, or a SkippedFile.
    """
    command_class = inspect_candidate(descriptor, predicate)
    if isinstance(command_class, SkippedFile):
        return command_class
    return instantiate(descriptor, command_class)


def subclass_of(*bases: type) -> TypePredicate:
    """Build a predicate accepting only subclasses of ``bases``.

    Example:
        loader.get_module_commands("users", subclass_of(BaseCommand))
    """

    def predicate(command_class: type) -> bool:
        return issubclass(command_class, bases)

    return predicate


def load_all(
    descriptors: Iterable[CommandDescriptor],
    predicate: TypePredicate | None = None,
) -> LoadResult:
    """Load every candidate, skipping the ones that fail.

    Returns:
        A successful LoadResult; files that did not produce a command are
        listed in ``skipped``.
    """
    commands: list[Any] = []
    skipped: list[SkippedFile] = []

    for descriptor in descriptors:
        loaded = load_candidate(descriptor, predicate)
        if isinstance(loaded, SkippedFile):
            skipped.append(loaded)
        else:
            commands.append(loaded)

    return LoadResult.ok(commands, skipped)
