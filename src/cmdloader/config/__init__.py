"""Configuration management."""

from cmdloader.config.loader import get_config, load_config, reset_config
from cmdloader.config.schema import CmdLoaderConfig, LoaderSettings

__all__ = ["CmdLoaderConfig", "LoaderSettings", "get_config", "load_config", "reset_config"]
