"""Explicit registry mapping identifiers to command classes."""

from collections.abc import Callable
from typing import TypeVar

# Type for command classes
CommandClass = TypeVar("CommandClass", bound=type)


def default_identifier(command_class: type) -> str:
    """Return ``module.ClassName`` for a class."""
    return f"{command_class.__module__}.{command_class.__qualname__}"


class CommandRegistry:
    """Registry of command classes keyed by fully-qualified identifier.

    The loader consults this registry before falling back to importing
    modules, so applications can publish commands under stable identifiers
    without relying on file layout.

    Usage:
        # Register under module.ClassName
        @CommandRegistry.register
        class Add(BaseCommand):
            ...

        # Or under an explicit identifier
        @CommandRegistry.register_as("myapp.commands.users.Add")
        class AddUser(BaseCommand):
            ...

        # Look up a class
        command_class = CommandRegistry.get("myapp.commands.users.Add")
    """

    _commands: dict[str, type] = {}

    @classmethod
    def register(cls, command_class: CommandClass) -> CommandClass:
        """Decorator to register a command class under its default identifier.

        Args:
            command_class: The command class to register.

        Returns:
            The command class (unchanged).
        """
        cls.register_command(command_class)
        return command_class

    @classmethod
    def register_as(cls, identifier: str) -> Callable[[CommandClass], CommandClass]:
        """Decorator factory to register a command class under ``identifier``.

        Example:
            @CommandRegistry.register_as("myapp.commands.Add")
            class AddCommand(BaseCommand):
                ...
        """

        def decorator(command_class: CommandClass) -> CommandClass:
            cls.register_command(command_class, identifier)
            return command_class

        return decorator

    @classmethod
    def register_command(cls, command_class: type, identifier: str | None = None) -> str:
        """Register a command class.

        Registering a class with the same module and qualified name again
        (e.g. after a module reload) replaces the previous entry.

        Args:
            command_class: The command class to register.
            identifier: Identifier to register under. Defaults to
                ``module.ClassName``.

        Returns:
            The identifier used.

        Raises:
            ValueError: If a different class is already registered under
                the identifier.
        """
        key = identifier or default_identifier(command_class)

        existing = cls._commands.get(key)
        if existing is not None and default_identifier(existing) != default_identifier(
            command_class
        ):
            raise ValueError(f"Identifier '{key}' is already registered")

        cls._commands[key] = command_class
        return key

    @classmethod
    def get(cls, identifier: str) -> type | None:
        """Get a command class by identifier, or None if not registered."""
        return cls._commands.get(identifier)

    @classmethod
    def list_identifiers(cls) -> list[str]:
        """List all registered identifiers."""
        return list(cls._commands.keys())

    @classmethod
    def is_registered(cls, identifier: str) -> bool:
        """Check if an identifier is registered."""
        return identifier in cls._commands

    @classmethod
    def unregister(cls, identifier: str) -> bool:
        """Unregister an identifier.

        Returns:
            True if unregistered, False if not found.
        """
        return cls._commands.pop(identifier, None) is not None

    @classmethod
    def clear(cls) -> None:
        """Clear all registered commands (mainly for testing)."""
        cls._commands.clear()
