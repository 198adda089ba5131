"""Base command pattern implementation.

This module provides an optional foundation for discoverable commands:
the CommandContext carrying the working directory and output console,
and the BaseCommand abstract class. The loader itself accepts any
concrete class; BaseCommand subclasses just get a consistent interface.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape


@dataclass
class CommandContext:
    """Context object passed to commands at execution time.

    Commands resolve relative paths against ``working_dir`` instead of
    changing the process working directory.

    Attributes:
        working_dir: The working directory for file operations.
        console: The console used for command output.
        verbose: Whether to show verbose output.
    """

    working_dir: Path = field(default_factory=Path.cwd)
    console: Console = field(default_factory=Console)
    verbose: bool = False

    def resolve(self, path: str | Path = "") -> Path:
        """Resolve ``path`` relative to the working directory."""
        candidate = Path(path).expanduser()
        if not candidate.is_absolute():
            candidate = self.working_dir / candidate
        return candidate.resolve()

    def with_working_dir(self, working_dir: str | Path) -> "CommandContext":
        """Create a new context rooted at another directory."""
        return replace(self, working_dir=self.resolve(working_dir))

    def with_verbose(self, verbose: bool = True) -> "CommandContext":
        """Create a new context with verbose mode set."""
        return replace(self, verbose=verbose)


@dataclass
class CommandResult:
    """Result of a command execution.

    Attributes:
        success: Whether the command succeeded.
        data: The result data (type depends on command).
        error: Error message if command failed.
        metadata: Additional metadata about the execution.
    """

    success: bool
    data: Any = None
    error: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, data: Any = None, **metadata: Any) -> "CommandResult":
        """Create a successful result."""
        return cls(success=True, data=data, metadata=metadata)

    @classmethod
    def fail(cls, error: str, **metadata: Any) -> "CommandResult":
        """Create a failed result."""
        return cls(success=False, error=error, metadata=metadata)


class BaseCommand(ABC):
    """Abstract base class for discoverable commands.

    Subclasses must be constructible without arguments to be picked up
    by the loader.

    Example:
        class Greet(BaseCommand):
            @property
            def name(self) -> str:
                return "greet"

            @property
            def description(self) -> str:
                return "Say hello"

            def execute(self, ctx: CommandContext, **kwargs) -> CommandResult:
                return CommandResult.ok(f"Hello from {ctx.working_dir}")
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The command name (used in CLI)."""

    @property
    @abstractmethod
    def description(self) -> str:
        """A short description of what the command does."""

    @property
    def aliases(self) -> list[str]:
        """Alternative names for the command."""
        return []

    @abstractmethod
    def execute(self, ctx: CommandContext, **kwargs: Any) -> CommandResult:
        """Execute the command.

        Args:
            ctx: The command context.
            **kwargs: Command-specific arguments.

        Returns:
            CommandResult indicating success/failure and data.
        """

    def run(self, ctx: CommandContext, **kwargs: Any) -> CommandResult:
        """Execute and print the result to the context's console."""
        result = self.execute(ctx, **kwargs)
        if result.success:
            if result.data is not None:
                ctx.console.print(result.data)
        else:
            ctx.console.print(f"[red]Error:[/red] {escape(result.error or 'Unknown error')}")
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
