"""Command interfaces and the explicit command registry.

Usage:
    from cmdloader.commands import BaseCommand, CommandContext, CommandResult
    from cmdloader.commands import CommandRegistry

    @CommandRegistry.register_as("myapp.commands.Hello")
    class Hello(BaseCommand):
        @property
        def name(self) -> str:
            return "hello"

        @property
        def description(self) -> str:
            return "Say hello"

        def execute(self, ctx: CommandContext, **kwargs) -> CommandResult:
            return CommandResult.ok(data="hello")
"""

from cmdloader.commands.base import BaseCommand, CommandContext, CommandResult
from cmdloader.commands.registry import CommandRegistry, default_identifier

__all__ = [
    "BaseCommand",
    "CommandContext",
    "CommandRegistry",
    "CommandResult",
    "default_identifier",
]
