"""Exception hierarchy for cmdloader."""


class CommandLoaderError(Exception):
    """Base exception for all cmdloader errors."""

    exit_code: int = 1
    user_message: str = "An error occurred"

    def __init__(
        self,
        message: str | None = None,
        *,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message or self.user_message)
        if user_message:
            self.user_message = user_message


# Resolution Errors
class PathInvalidError(CommandLoaderError):
    """Path does not resolve to an existing directory."""

    exit_code = 2
    user_message = "Path is not an existing directory"


class CommandModuleNotFoundError(CommandLoaderError):
    """Module sub-directory does not exist under the base path."""

    exit_code = 3
    user_message = "Command module not found"


# Configuration Errors
class LoaderNotReadyError(CommandLoaderError):
    """Loader is missing required configuration."""

    exit_code = 4
    user_message = "Command loader is not configured"


class InvalidArgumentError(CommandLoaderError, ValueError):
    """A required argument was empty or invalid."""

    exit_code = 5
    user_message = "Invalid argument"


# Per-file Errors
class ClassUnresolvableError(CommandLoaderError):
    """A candidate file could not be turned into a command instance.

    Never propagated out of a scan; carried inside skip reports only.
    """

    exit_code = 6
    user_message = "Command class could not be resolved"


# Config Errors
class ConfigError(CommandLoaderError):
    """Configuration errors."""

    exit_code = 20
    user_message = "Configuration error"


class ConfigNotFoundError(ConfigError):
    """Configuration file not found."""

    exit_code = 21
    user_message = "Configuration file not found"


class ConfigValidationError(ConfigError):
    """Configuration validation failed."""

    exit_code = 22
    user_message = "Invalid configuration"
