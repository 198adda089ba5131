"""Module-scoped command loading.

A CommandLoader is configured with a base path and an identifier prefix.
Each sub-directory of the base path is a module; every source file in it
names a command class ``<prefix>.<module>.<FileName>``::

    commands/
        users/
            Add.py          -> myapp.commands.users.Add
            admin/Grant.py  -> myapp.commands.users.admin.Grant

Usage:
    loader = CommandLoader().set_path("./commands").set_namespace("myapp.commands")
    for command in loader.get_module_commands("users"):
        app.add(command)
"""

import importlib
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar

from cmdloader.exceptions import (
    CommandLoaderError,
    CommandModuleNotFoundError,
    InvalidArgumentError,
    LoaderNotReadyError,
)
from cmdloader.loader.identity import CommandDescriptor, build_module_identifier
from cmdloader.loader.paths import normalize_path, try_resolve_directory
from cmdloader.loader.reflection import TypePredicate, load_all
from cmdloader.loader.result import ErrorPolicy, LoadResult
from cmdloader.utils.files import SOURCE_EXTENSION, is_private, scan_sources, should_ignore_dir
from cmdloader.utils.logging import get_logger

if TYPE_CHECKING:
    from cmdloader.config.schema import LoaderSettings

logger = get_logger(__name__)

T = TypeVar("T")


class CommandLoader:
    """Loads command instances from module directories under a base path.

    Configuration and resolution failures follow the loader's
    :class:`ErrorPolicy`: under ``THROWING`` they raise typed
    :class:`~cmdloader.exceptions.CommandLoaderError` subclasses, under
    ``SOFT_FAIL`` they are logged and an empty result is returned.
    Failures of individual files inside a module are always skipped.

    The ``load_module`` / ``resolve_*`` methods return results instead
    and ignore the policy.
    """

    def __init__(
        self,
        error_policy: ErrorPolicy = ErrorPolicy.THROWING,
        *,
        extension: str = SOURCE_EXTENSION,
        recursive: bool = True,
    ) -> None:
        """Initialize the loader.

        Args:
            error_policy: How configuration and resolution failures surface.
            extension: Extension of command source files.
            recursive: Include files in nested sub-directories of a module.
        """
        self.error_policy = ErrorPolicy(error_policy)
        self.extension = extension
        self.recursive = recursive
        self._path: str | None = None
        self._namespace: str | None = None

    @classmethod
    def from_settings(cls, settings: "LoaderSettings") -> "CommandLoader":
        """Create a loader from configuration settings."""
        loader = cls(
            settings.error_policy,
            extension=settings.extension,
            recursive=settings.recursive,
        )
        if settings.path is not None:
            loader.set_path(settings.path)
        if settings.namespace is not None:
            loader.set_namespace(settings.namespace)
        return loader

    @property
    def use_exceptions(self) -> bool:
        """Whether failures are raised rather than logged."""
        return self.error_policy == ErrorPolicy.THROWING

    # ---------------- Configuration ----------------

    def set_path(self, path: str | os.PathLike[str]) -> "CommandLoader":
        """Set the base path at which to begin scanning for modules.

        Returns:
            The loader, for method chaining.
        """
        self._path = os.fspath(path)
        return self

    def set_namespace(self, namespace: str) -> "CommandLoader":
        """Set the identifier prefix of every loaded command.

        Returns:
            The loader, for method chaining.
        """
        self._namespace = namespace
        return self

    def get_namespace(self) -> str | None:
        """Return the configured identifier prefix."""
        return self._namespace

    # ---------------- Policy ----------------

    def _handle(self, error: CommandLoaderError, default: T) -> T:
        """Raise ``error`` or log it and return ``default``, per policy."""
        if self.use_exceptions:
            raise error
        logger.warning("%s", error)
        return default

    def _require_path(self, caller: str = "get_path") -> Path:
        if self._path is None:
            raise LoaderNotReadyError(
                f"Use CommandLoader.set_path() prior to CommandLoader.{caller}()"
            )

        resolved = try_resolve_directory(self._path)
        if resolved is None:
            raise LoaderNotReadyError(f"CommandLoader path is invalid! ({self._path})")
        return resolved

    def _require_module_path(self, module: str, caller: str = "get_module_path") -> Path:
        if not module:
            raise InvalidArgumentError("Module must be provided!")

        if self._path is None:
            raise LoaderNotReadyError(
                f"Use CommandLoader.set_path() prior to CommandLoader.{caller}()"
            )

        # The base path itself is not checked; a missing base is a missing module
        candidate = normalize_path(self._path) / normalize_path(module)
        resolved = try_resolve_directory(candidate)
        if resolved is None:
            raise CommandModuleNotFoundError(f"Could not find a Module at {candidate}!")
        return resolved

    def _check_ready(self, caller: str) -> None:
        missing = []
        if self._path is None:
            missing.append("CommandLoader.set_path()")
        if self._namespace is None:
            missing.append("CommandLoader.set_namespace()")

        if missing:
            raise LoaderNotReadyError(
                f"Use {' and '.join(missing)} prior to CommandLoader.{caller}()"
            )

    # ---------------- Resolution ----------------

    def resolve_path(self) -> Path | CommandLoaderError:
        """Return the resolved base path, or the error preventing it."""
        try:
            return self._require_path()
        except CommandLoaderError as e:
            return e

    def resolve_module_path(self, module: str) -> Path | CommandLoaderError:
        """Return the resolved module path, or the error preventing it."""
        try:
            return self._require_module_path(module)
        except CommandLoaderError as e:
            return e

    def get_path(self) -> Path | None:
        """Return the canonical base path.

        Raises:
            LoaderNotReadyError: If no path is set or it does not resolve
                (throwing policy only).
        """
        try:
            return self._require_path()
        except CommandLoaderError as e:
            return self._handle(e, None)

    def get_module_path(self, module: str) -> Path | None:
        """Return the canonical path of ``module`` under the base path.

        Raises:
            InvalidArgumentError: If ``module`` is empty.
            LoaderNotReadyError: If no base path is set.
            CommandModuleNotFoundError: If the module directory does not
                exist (all under throwing policy only).
        """
        try:
            return self._require_module_path(module)
        except CommandLoaderError as e:
            return self._handle(e, None)

    def is_ready(self, caller: str = "get_module_commands") -> bool:
        """Check that both path and namespace are configured.

        Raises:
            LoaderNotReadyError: Naming the missing setter (throwing policy only).
        """
        try:
            self._check_ready(caller)
        except CommandLoaderError as e:
            return self._handle(e, False)
        return True

    def list_modules(self) -> list[str]:
        """Return the names of module directories under the base path."""
        base = self.get_path()
        if base is None:
            return []

        return sorted(
            entry.name
            for entry in base.iterdir()
            if entry.is_dir() and not should_ignore_dir(entry.name) and not is_private(entry)
        )

    # ---------------- Loading ----------------

    def describe_module(self, module: str) -> list[CommandDescriptor]:
        """Build the candidate descriptors of ``module`` without loading them.

        Raises:
            CommandLoaderError: If the loader is not ready or the module
                cannot be resolved, regardless of policy.
        """
        return self._describe(module, "describe_module")

    def _describe(self, module: str, caller: str) -> list[CommandDescriptor]:
        self._check_ready(caller)
        module_path = self._require_module_path(module, caller)
        namespace = self._namespace or ""

        return [
            CommandDescriptor(
                source_file=file_name,
                extracted_namespace=None,
                fully_qualified_id=build_module_identifier(
                    namespace, module, file_name, self.extension
                ),
            )
            for file_name in scan_sources(
                module_path, extension=self.extension, recursive=self.recursive
            )
        ]

    def load_module(
        self,
        module: str,
        predicate: TypePredicate | None = None,
    ) -> LoadResult:
        """Load the commands of ``module`` into a LoadResult.

        Never raises for configuration or resolution failures; they are
        carried in ``LoadResult.error``.

        Args:
            module: Module directory name, relative to the base path.
            predicate: Optional filter applied to each resolved class.
        """
        return self._load(module, predicate, "load_module")

    def _load(self, module: str, predicate: TypePredicate | None, caller: str) -> LoadResult:
        try:
            descriptors = self._describe(module, caller)
        except CommandLoaderError as e:
            return LoadResult.fail(e)

        # Files may have appeared since the last scan
        importlib.invalidate_caches()

        result = load_all(descriptors, predicate)
        logger.debug(
            "Loaded %d command(s) from module %s, skipped %d",
            len(result.commands),
            module,
            len(result.skipped),
        )
        return result

    def get_module_commands(
        self,
        module: str,
        predicate: TypePredicate | None = None,
    ) -> list[Any]:
        """Load all commands of ``module``.

        Args:
            module: Module directory name, relative to the base path.
            predicate: Optional filter applied to each resolved class.

        Returns:
            Command instances in scan order; empty when the module cannot
            be loaded under soft policy.

        Raises:
            LoaderNotReadyError: If path or namespace is not configured.
            InvalidArgumentError: If ``module`` is empty.
            CommandModuleNotFoundError: If the module directory is missing
                (all under throwing policy only).
        """
        result = self._load(module, predicate, "get_module_commands")
        if result.error is not None:
            return self._handle(result.error, [])
        return result.commands

    def get_all_commands(self, predicate: TypePredicate | None = None) -> list[Any]:
        """Load the commands of every module under the base path."""
        if not self.is_ready("get_all_commands"):
            return []

        commands: list[Any] = []
        for module in self.list_modules():
            commands.extend(self.get_module_commands(module, predicate))
        return commands

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(path={self._path!r}, "
            f"namespace={self._namespace!r}, error_policy={self.error_policy.value!r})"
        )
