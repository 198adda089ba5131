"""Default configuration values and paths."""

import os
from pathlib import Path
from typing import Final

# Default directories
DEFAULT_CONFIG_DIR: Final[Path] = Path.home() / ".config" / "cmdloader"

# Default file paths
DEFAULT_CONFIG_FILE: Final[Path] = DEFAULT_CONFIG_DIR / "config.toml"

# Environment variable names
ENV_CONFIG_PATH: Final[str] = "CMDLOADER_CONFIG"
ENV_LOADER_PATH: Final[str] = "CMDLOADER_PATH"
ENV_LOADER_NAMESPACE: Final[str] = "CMDLOADER_NAMESPACE"
ENV_STRICT: Final[str] = "CMDLOADER_STRICT"
ENV_LOG_LEVEL: Final[str] = "CMDLOADER_LOG_LEVEL"

# Default config content (TOML)
DEFAULT_CONFIG_TOML: Final[str] = """\
# cmdloader configuration

[loader]
# path = "./commands"
# namespace = "myapp.commands"
error_policy = "throwing"   # or "soft_fail"
extension = ".py"
recursive = true

[logging]
level = "WARNING"
json_format = false
color = true
"""


def get_config_path() -> Path:
    """Get the configuration file path."""
    env_path = os.environ.get(ENV_CONFIG_PATH)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_FILE
