"""Pydantic models for cmdloader configuration."""

from pathlib import Path

from pydantic import BaseModel, Field

from cmdloader.loader.result import ErrorPolicy
from cmdloader.utils.files import SOURCE_EXTENSION


class LoaderSettings(BaseModel):
    """Command loader configuration."""

    path: Path | None = None  # Base path holding module directories
    namespace: str | None = None  # Identifier prefix, e.g. "myapp.commands"
    error_policy: ErrorPolicy = ErrorPolicy.THROWING
    extension: str = SOURCE_EXTENSION
    recursive: bool = True


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "WARNING"
    file: Path | None = None  # Default: no file logging
    json_format: bool = False
    color: bool = True


class CmdLoaderConfig(BaseModel):
    """Root configuration for cmdloader."""

    loader: LoaderSettings = Field(default_factory=LoaderSettings)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
