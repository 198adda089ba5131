"""Configuration loading from TOML files and environment variables."""

import os
import tomllib
from pathlib import Path

from pydantic import ValidationError

from cmdloader.config.defaults import (
    DEFAULT_CONFIG_TOML,
    ENV_LOADER_NAMESPACE,
    ENV_LOADER_PATH,
    ENV_LOG_LEVEL,
    ENV_STRICT,
    get_config_path,
)
from cmdloader.config.schema import CmdLoaderConfig
from cmdloader.exceptions import ConfigError, ConfigNotFoundError, ConfigValidationError
from cmdloader.loader.result import ErrorPolicy

# Global config instance (singleton)
_config: CmdLoaderConfig | None = None

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def load_config(
    config_path: Path | None = None,
    *,
    create_if_missing: bool = False,
) -> CmdLoaderConfig:
    """Load configuration from a TOML file and environment variables.

    Args:
        config_path: Path to config file. If None, uses default.
        create_if_missing: Write the default config if the file doesn't exist.

    Returns:
        Loaded and validated configuration.

    Raises:
        ConfigNotFoundError: If an explicitly given file does not exist.
        ConfigError: If the file cannot be read or parsed.
        ConfigValidationError: If configuration is invalid.
    """
    path = config_path or get_config_path()

    if not path.exists():
        if create_if_missing:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(DEFAULT_CONFIG_TOML)
        elif config_path is not None:
            raise ConfigNotFoundError(f"Config file {path} does not exist")
        else:
            return _apply_env_overrides(CmdLoaderConfig())

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Failed to load config from {path}: {e}") from e

    try:
        config = CmdLoaderConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid configuration: {e}") from e

    return _apply_env_overrides(config)


def _apply_env_overrides(config: CmdLoaderConfig) -> CmdLoaderConfig:
    """Apply environment variable overrides to configuration."""
    path_env = os.environ.get(ENV_LOADER_PATH)
    if path_env:
        config.loader.path = Path(path_env)

    namespace_env = os.environ.get(ENV_LOADER_NAMESPACE)
    if namespace_env:
        config.loader.namespace = namespace_env

    strict_env = os.environ.get(ENV_STRICT)
    if strict_env:
        if strict_env.lower() in _TRUE_VALUES:
            config.loader.error_policy = ErrorPolicy.THROWING
        elif strict_env.lower() in _FALSE_VALUES:
            config.loader.error_policy = ErrorPolicy.SOFT_FAIL

    log_level = os.environ.get(ENV_LOG_LEVEL)
    if log_level:
        config.logging.level = log_level.upper()

    return config


def get_config() -> CmdLoaderConfig:
    """Get the current configuration (singleton).

    Loads config on first access, caches for subsequent calls.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config(config_path: Path | None = None) -> CmdLoaderConfig:
    """Reload configuration from disk."""
    global _config
    _config = load_config(config_path)
    return _config


def reset_config() -> None:
    """Reset the configuration singleton (mainly for testing)."""
    global _config
    _config = None
