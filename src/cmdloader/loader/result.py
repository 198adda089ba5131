"""Result types for load operations."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from cmdloader.exceptions import CommandLoaderError


class ErrorPolicy(str, Enum):
    """How configuration and resolution failures are reported."""

    THROWING = "throwing"
    SOFT_FAIL = "soft_fail"


class SkipReason(str, Enum):
    """Why a candidate file did not produce a command."""

    NO_NAMESPACE = "no_namespace"
    UNRESOLVABLE = "unresolvable"
    NOT_A_CLASS = "not_a_class"
    ABSTRACT = "abstract"
    REQUIRES_ARGUMENTS = "requires_arguments"
    FILTERED = "filtered"
    INSTANTIATION_FAILED = "instantiation_failed"


@dataclass(frozen=True)
class SkippedFile:
    """A candidate file that was skipped during a scan.

    Attributes:
        source_file: File name relative to the scanned directory.
        identifier: Fully-qualified identifier, if one could be built.
        reason: Why the file was skipped.
        detail: Optional human-readable detail (e.g. an exception message).
    """

    source_file: str
    identifier: str | None
    reason: SkipReason
    detail: str | None = None

    def __str__(self) -> str:
        target = self.identifier or self.source_file
        suffix = f": {self.detail}" if self.detail else ""
        return f"{target} ({self.reason.value}){suffix}"


@dataclass
class LoadResult:
    """Outcome of a load operation.

    Either ``commands`` (plus the files that were ``skipped``) or a typed
    ``error`` describing why the operation could not run at all.

    Attributes:
        commands: Instantiated commands, in scan order.
        skipped: Files that were skipped without aborting the scan.
        error: Configuration or resolution failure, if any.
    """

    commands: list[Any] = field(default_factory=list)
    skipped: list[SkippedFile] = field(default_factory=list)
    error: CommandLoaderError | None = None

    @classmethod
    def ok(
        cls,
        commands: list[Any],
        skipped: list[SkippedFile] | None = None,
    ) -> "LoadResult":
        """Create a successful result."""
        return cls(commands=commands, skipped=skipped or [])

    @classmethod
    def fail(cls, error: CommandLoaderError) -> "LoadResult":
        """Create a failed result."""
        return cls(error=error)

    @property
    def success(self) -> bool:
        """Whether the operation ran (individual files may still be skipped)."""
        return self.error is None

    def unwrap(self) -> list[Any]:
        """Return the commands, raising the carried error on failure."""
        if self.error is not None:
            raise self.error
        return self.commands

    def unwrap_or_empty(self) -> list[Any]:
        """Return the commands, or an empty list on failure."""
        return self.commands if self.error is None else []
