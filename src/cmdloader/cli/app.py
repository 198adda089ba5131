"""Command-line interface for inspecting command directories."""

import sys
from pathlib import Path
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cmdloader import __version__
from cmdloader.commands.base import BaseCommand
from cmdloader.config import get_config
from cmdloader.config.loader import reload_config
from cmdloader.exceptions import CommandLoaderError
from cmdloader.loader import CommandLoader, ErrorPolicy, LoadResult, scan_directory
from cmdloader.loader.paths import try_resolve_directory
from cmdloader.utils.logging import setup_logging

app = typer.Typer(
    name="cmdloader",
    help="Discover and load command classes from a directory tree",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"cmdloader version {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    config_file: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a config file.",
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Log level (DEBUG, INFO, WARNING, ERROR).",
    ),
) -> None:
    """Discover and load command classes from a directory tree."""
    try:
        config = reload_config(config_file) if config_file else get_config()
    except CommandLoaderError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(e.exit_code) from None

    setup_logging(
        level=log_level or config.logging.level,
        log_file=config.logging.file,
        json_format=config.logging.json_format,
        use_color=config.logging.color,
    )


def _add_import_root(root: Path) -> None:
    """Make command packages below ``root`` importable."""
    entry = str(root)
    if entry not in sys.path:
        sys.path.insert(0, entry)


def _default_import_root(path: Path, namespace: str) -> Path:
    """Return the directory that ``namespace`` is relative to.

    For ``./src/myapp/commands`` with namespace ``myapp.commands`` this is
    ``./src``.
    """
    root = path
    for _ in filter(None, namespace.split(".")):
        root = root.parent
    return root


def _describe(command: Any) -> tuple[str, str, str]:
    command_class = type(command)
    identifier = f"{command_class.__module__}.{command_class.__qualname__}"
    if isinstance(command, BaseCommand):
        return identifier, command.name, command.description

    # Plain classes: first docstring line
    doc_lines = (command_class.__doc__ or "").strip().splitlines()
    return identifier, "", doc_lines[0] if doc_lines else ""


def _print_result(result: LoadResult, title: str, verbose: bool) -> None:
    """Print loaded commands as a table, and skipped files when verbose."""
    if not result.commands:
        console.print("[dim]No commands found[/dim]")
    else:
        table = Table(title=title)
        table.add_column("Identifier", style="cyan")
        table.add_column("Name", style="green")
        table.add_column("Description")
        for command in result.commands:
            table.add_row(*(escape(value) for value in _describe(command)))
        console.print(table)

    if verbose and result.skipped:
        console.print("\n[bold]Skipped:[/bold]")
        for skipped in result.skipped:
            console.print(f"  [yellow]{escape(str(skipped))}[/yellow]")

    console.print(f"\n[dim]{len(result.commands)} loaded, {len(result.skipped)} skipped[/dim]")


def _fail(error: CommandLoaderError) -> NoReturn:
    err_console.print(f"[red]Error:[/red] {escape(str(error).strip())}")
    raise typer.Exit(error.exit_code)


@app.command()
def scan(
    directory: Path = typer.Argument(..., help="Directory of command files."),
    import_root: Path | None = typer.Option(
        None,
        "--import-root",
        help="Directory to put on the import path (default: parent of DIRECTORY).",
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Fail if DIRECTORY is not a directory."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="List skipped files."),
) -> None:
    """Load commands from a flat directory; each file declares __namespace__."""
    resolved = try_resolve_directory(directory)
    if resolved is not None:
        _add_import_root(import_root or resolved.parent)

    result = scan_directory(directory)
    if result.error is not None and strict:
        _fail(result.error)

    _print_result(result, str(resolved or directory), verbose)


def _build_loader(
    path: Path | None,
    namespace: str | None,
    strict: bool | None,
) -> CommandLoader:
    settings = get_config().loader.model_copy()
    if path is not None:
        settings.path = path
    if namespace is not None:
        settings.namespace = namespace
    if strict is not None:
        settings.error_policy = ErrorPolicy.THROWING if strict else ErrorPolicy.SOFT_FAIL
    return CommandLoader.from_settings(settings)


@app.command()
def module(
    name: str = typer.Argument(..., help="Module directory under the base path."),
    path: Path | None = typer.Option(None, "--path", "-p", help="Base path of modules."),
    namespace: str | None = typer.Option(
        None, "--namespace", "-n", help="Identifier prefix, e.g. myapp.commands."
    ),
    strict: bool | None = typer.Option(
        None, "--strict/--soft", help="Raise on configuration errors, or only log them."
    ),
    import_root: Path | None = typer.Option(
        None,
        "--import-root",
        help="Directory to put on the import path (default: derived from the namespace).",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="List skipped files."),
) -> None:
    """Load the commands of one module."""
    loader = _build_loader(path, namespace, strict)

    base = loader.resolve_path()
    if isinstance(base, Path):
        _add_import_root(import_root or _default_import_root(base, loader.get_namespace() or ""))

    result = loader.load_module(name)
    if result.error is not None:
        if loader.use_exceptions:
            _fail(result.error)
        err_console.print(f"[yellow]Warning:[/yellow] {escape(str(result.error).strip())}")

    _print_result(result, name, verbose)


@app.command()
def modules(
    path: Path | None = typer.Option(None, "--path", "-p", help="Base path of modules."),
) -> None:
    """List the module directories under the base path."""
    loader = _build_loader(path, None, True)
    try:
        names = loader.list_modules()
    except CommandLoaderError as e:
        _fail(e)

    if not names:
        console.print("[dim]No modules found[/dim]")
        return
    for module_name in names:
        console.print(module_name)


@app.command("config")
def config_cmd() -> None:
    """Show the effective configuration."""
    from cmdloader.config.defaults import get_config_path

    config = get_config()
    console.print("[bold]cmdloader configuration[/bold]\n")
    console.print(f"Config file: {get_config_path()}")
    console.print(f"Path: {config.loader.path or '-'}")
    console.print(f"Namespace: {config.loader.namespace or '-'}")
    console.print(f"Error policy: {config.loader.error_policy.value}")
    console.print(f"Extension: {config.loader.extension}")
    console.print(f"Recursive: {config.loader.recursive}")
    console.print(f"Log level: {config.logging.level}")


def main() -> None:
    """Entry point for the CLI."""
    app()
