"""Tests for type resolution, filtering and instantiation."""

import logging
from abc import ABC, abstractmethod

import pytest

from cmdloader.commands.registry import CommandRegistry
from cmdloader.loader.identity import CommandDescriptor
from cmdloader.loader.reflection import (
    inspect_candidate,
    is_valid_identifier,
    load_all,
    load_candidate,
    requires_arguments,
    resolve_type,
    subclass_of,
)
from cmdloader.loader.result import SkippedFile, SkipReason


def _descriptor(identifier: str, source_file: str = "Cmd.py") -> CommandDescriptor:
    return CommandDescriptor(source_file, None, identifier)


class Concrete:
    """Plain concrete command."""


class Abstract(ABC):
    """Abstract command."""

    @abstractmethod
    def execute(self) -> None: ...


class NeedsArgument:
    def __init__(self, value: int) -> None:
        self.value = value


class OptionalArgument:
    def __init__(self, value: int = 1, *args: object, **kwargs: object) -> None:
        self.value = value


class Exploding:
    def __init__(self) -> None:
        raise RuntimeError("boom")


class TestResolveType:
    """Tests for resolve_type."""

    def test_module_named_after_class(self, sandbox) -> None:
        """Test resolving package.Module.Module."""
        sandbox.write_concrete("Add.py")

        resolved = resolve_type(f"{sandbox.package}.Add")

        assert resolved.__name__ == "Add"
        assert resolved.__module__ == f"{sandbox.package}.Add"

    def test_attribute_of_parent_module(self, sandbox) -> None:
        """Test resolving a class defined in the parent module."""
        sandbox.write("tools.py", "class Ping:\n    pass\n")

        resolved = resolve_type(f"{sandbox.package}.tools.Ping")

        assert resolved.__name__ == "Ping"

    def test_registry_takes_precedence(self, sandbox) -> None:
        """Test that registered identifiers are resolved without importing."""
        CommandRegistry.register_command(Concrete, f"{sandbox.package}.Virtual")

        assert resolve_type(f"{sandbox.package}.Virtual") is Concrete

    def test_unknown_identifier(self, sandbox) -> None:
        """Test that unknown identifiers resolve to None."""
        assert resolve_type(f"{sandbox.package}.Missing") is None
        assert resolve_type("no_such_package_xyz.Missing") is None

    def test_invalid_identifiers(self) -> None:
        """Test identifiers that cannot name a Python object."""
        assert resolve_type("") is None
        assert resolve_type("Single") is None
        assert resolve_type("has-hyphen.Cmd") is None

    def test_import_errors_inside_module_propagate(self, sandbox) -> None:
        """Test that a broken module is not mistaken for a missing one."""
        sandbox.write("Broken.py", "import no_such_dependency_xyz\n")

        with pytest.raises(ModuleNotFoundError):
            resolve_type(f"{sandbox.package}.Broken")

    def test_is_valid_identifier(self) -> None:
        assert is_valid_identifier("a.b.C")
        assert not is_valid_identifier("a..C")
        assert not is_valid_identifier("1a.C")


class TestRequiresArguments:
    """Tests for requires_arguments."""

    def test_zero_argument_classes(self) -> None:
        assert requires_arguments(Concrete) is False
        assert requires_arguments(OptionalArgument) is False

    def test_required_argument(self) -> None:
        assert requires_arguments(NeedsArgument) is True


class TestInspectCandidate:
    """Tests for inspect_candidate."""

    @pytest.fixture(autouse=True)
    def register_samples(self) -> None:
        for command_class in (Concrete, Abstract, NeedsArgument, Exploding):
            CommandRegistry.register_command(command_class, f"samples.{command_class.__name__}")
        CommandRegistry.register_command(OptionalArgument, "samples.OptionalArgument")

    def test_concrete_class(self) -> None:
        assert inspect_candidate(_descriptor("samples.Concrete")) is Concrete

    def test_abstract_class_is_skipped(self) -> None:
        result = inspect_candidate(_descriptor("samples.Abstract"))

        assert isinstance(result, SkippedFile)
        assert result.reason == SkipReason.ABSTRACT

    def test_abstract_class_is_skipped_even_if_predicate_accepts(self) -> None:
        """Test that abstract classes never pass, whatever the predicate."""
        result = inspect_candidate(_descriptor("samples.Abstract"), lambda cls: True)

        assert isinstance(result, SkippedFile)
        assert result.reason == SkipReason.ABSTRACT

    def test_constructor_arguments_are_rejected(self) -> None:
        result = inspect_candidate(_descriptor("samples.NeedsArgument"))

        assert isinstance(result, SkippedFile)
        assert result.reason == SkipReason.REQUIRES_ARGUMENTS

    def test_predicate_rejection(self) -> None:
        result = inspect_candidate(_descriptor("samples.Concrete"), lambda cls: False)

        assert isinstance(result, SkippedFile)
        assert result.reason == SkipReason.FILTERED

    def test_predicate_receives_class(self) -> None:
        seen: list[type] = []

        inspect_candidate(_descriptor("samples.Concrete"), lambda cls: seen.append(cls) or True)

        assert seen == [Concrete]

    def test_failing_predicate_skips(self, caplog: pytest.LogCaptureFixture) -> None:
        def predicate(cls: type) -> bool:
            raise RuntimeError("boom")

        with caplog.at_level(logging.WARNING, logger="cmdloader"):
            result = inspect_candidate(_descriptor("samples.Concrete"), predicate)

        assert isinstance(result, SkippedFile)
        assert result.reason == SkipReason.FILTERED
        assert result.detail == "RuntimeError: boom"
        assert caplog.messages == ["Unable to load samples.Concrete, skipping"]

    def test_not_a_class(self, sandbox) -> None:
        sandbox.write("helper.py", "def helper():\n    pass\n")

        result = inspect_candidate(_descriptor(f"{sandbox.package}.helper"))

        assert isinstance(result, SkippedFile)
        assert result.reason == SkipReason.NOT_A_CLASS

    def test_unresolvable_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test the single diagnostic line naming the identifier."""
        with caplog.at_level(logging.WARNING, logger="cmdloader"):
            result = inspect_candidate(_descriptor("samples.Missing"))

        assert isinstance(result, SkippedFile)
        assert result.reason == SkipReason.UNRESOLVABLE
        assert "Unable to load samples.Missing, skipping" in caplog.messages

    def test_broken_module_is_skipped(self, sandbox) -> None:
        sandbox.write("Broken.py", "class Broken(:\n")

        result = inspect_candidate(_descriptor(f"{sandbox.package}.Broken"))

        assert isinstance(result, SkippedFile)
        assert result.reason == SkipReason.UNRESOLVABLE
        assert result.detail is not None
        assert "SyntaxError" in result.detail


class TestLoadCandidate:
    """Tests for load_candidate and load_all."""

    @pytest.fixture(autouse=True)
    def register_samples(self) -> None:
        for command_class in (Concrete, Abstract, Exploding, OptionalArgument):
            CommandRegistry.register_command(command_class, f"samples.{command_class.__name__}")

    def test_instance_is_created(self) -> None:
        assert isinstance(load_candidate(_descriptor("samples.Concrete")), Concrete)

    def test_optional_arguments_use_defaults(self) -> None:
        instance = load_candidate(_descriptor("samples.OptionalArgument"))

        assert isinstance(instance, OptionalArgument)
        assert instance.value == 1

    def test_constructor_failure_is_skipped(self) -> None:
        result = load_candidate(_descriptor("samples.Exploding"))

        assert isinstance(result, SkippedFile)
        assert result.reason == SkipReason.INSTANTIATION_FAILED
        assert result.detail == "RuntimeError: boom"

    def test_load_all_splits_commands_and_skips(self) -> None:
        result = load_all(
            [
                _descriptor("samples.Concrete", "Concrete.py"),
                _descriptor("samples.Abstract", "Abstract.py"),
                _descriptor("samples.Exploding", "Exploding.py"),
                _descriptor("samples.Missing", "Missing.py"),
            ]
        )

        assert result.success
        assert [type(c) for c in result.commands] == [Concrete]
        assert [s.source_file for s in result.skipped] == [
            "Abstract.py",
            "Exploding.py",
            "Missing.py",
        ]


class TestSubclassOf:
    """Tests for the subclass_of predicate factory."""

    def test_accepts_subclasses(self) -> None:
        predicate = subclass_of(Abstract)

        assert predicate(Abstract) is True
        assert predicate(Concrete) is False

    def test_multiple_bases(self) -> None:
        predicate = subclass_of(Concrete, NeedsArgument)

        assert predicate(Concrete) is True
        assert predicate(NeedsArgument) is True
        assert predicate(Exploding) is False
