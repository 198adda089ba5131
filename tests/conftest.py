"""Pytest fixtures for cmdloader tests."""

import logging
import sys
import textwrap
import uuid
from collections.abc import Generator
from dataclasses import dataclass
from pathlib import Path

import pytest

from cmdloader.commands.registry import CommandRegistry
from cmdloader.config import reset_config
from cmdloader.config.defaults import (
    ENV_CONFIG_PATH,
    ENV_LOADER_NAMESPACE,
    ENV_LOADER_PATH,
    ENV_LOG_LEVEL,
    ENV_STRICT,
)

CONCRETE_SOURCE = '''
__namespace__ = "{namespace}"


class {name}:
    """The {name} command."""
'''

ABSTRACT_SOURCE = '''
from abc import ABC, abstractmethod

__namespace__ = "{namespace}"


class {name}(ABC):
    """Shared base for other commands."""

    @abstractmethod
    def execute(self):
        ...
'''

NO_NAMESPACE_SOURCE = '''
class {name}:
    """Declares no namespace."""
'''


@dataclass
class CommandSandbox:
    """A throwaway import root holding a uniquely named command package."""

    root: Path
    package: str

    @property
    def package_dir(self) -> Path:
        return self.root / self.package

    def write(self, relative: str, source: str) -> Path:
        """Write ``source`` to ``package_dir / relative``."""
        path = self.package_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(source).lstrip())
        return path

    def write_concrete(self, relative: str, namespace: str | None = None) -> Path:
        name = Path(relative).stem
        return self.write(
            relative, CONCRETE_SOURCE.format(namespace=namespace or self.package, name=name)
        )

    def write_abstract(self, relative: str, namespace: str | None = None) -> Path:
        name = Path(relative).stem
        return self.write(
            relative, ABSTRACT_SOURCE.format(namespace=namespace or self.package, name=name)
        )

    def write_without_namespace(self, relative: str) -> Path:
        return self.write(relative, NO_NAMESPACE_SOURCE.format(name=Path(relative).stem))


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """Create a temporary directory for tests."""
    return tmp_path


@pytest.fixture
def sandbox(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[CommandSandbox, None, None]:
    """Importable command package, removed from sys.modules afterwards."""
    package = f"cmds_{uuid.uuid4().hex[:10]}"
    root = tmp_path / "import_root"
    (root / package).mkdir(parents=True)
    monkeypatch.syspath_prepend(str(root))

    yield CommandSandbox(root=root, package=package)

    for name in list(sys.modules):
        if name == package or name.startswith(f"{package}."):
            del sys.modules[name]


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Point config at a missing file and drop cmdloader environment overrides."""
    monkeypatch.setenv(ENV_CONFIG_PATH, str(tmp_path / "missing-config.toml"))
    for name in (ENV_LOADER_PATH, ENV_LOADER_NAMESPACE, ENV_STRICT, ENV_LOG_LEVEL):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_config_fixture() -> Generator[None, None, None]:
    """Reset config singleton between tests."""
    reset_config()
    yield
    reset_config()


@pytest.fixture(autouse=True)
def clear_registry() -> Generator[None, None, None]:
    """Clear the command registry before and after each test."""
    CommandRegistry.clear()
    yield
    CommandRegistry.clear()


@pytest.fixture(autouse=True)
def reset_package_logger() -> Generator[None, None, None]:
    """Undo setup_logging() so caplog keeps seeing cmdloader records."""
    package_logger = logging.getLogger("cmdloader")
    yield
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True
