"""CLI entry point for Srcnav."""

import json
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from srcnav.config import load_settings
from srcnav.core import Navigator, SrcnavError
from srcnav.core.build import NullToolchain
from srcnav.remote import HTTPDefinitionClient

app = typer.Typer(
    name="srcnav",
    help="Code navigation over per-commit analysis artifacts.",
    no_args_is_help=True,
)
api_app = typer.Typer(
    help="Editor API: JSON answers about a file or a position in it.",
    no_args_is_help=True,
)
app.add_typer(api_app, name="api")

console = Console()
err_console = Console(stderr=True)


def setup_logging(verbose: bool) -> None:
    """Send log records to stderr; stdout is reserved for results."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@contextmanager
def open_navigator(file: Path, no_build: bool) -> Iterator[Navigator]:
    """Navigator for the repository holding ``file``; exits with status 1 on errors."""
    try:
        settings = load_settings()
        with HTTPDefinitionClient(settings.api_url, settings.api_timeout) as client:
            toolchain = NullToolchain() if no_build else None
            yield Navigator.for_file(file, settings, client, toolchain)
    except SrcnavError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1) from e


@app.callback()
def main(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log diagnostics to stderr")
    ] = False,
) -> None:
    setup_logging(verbose)


@api_app.command()
def describe(
    file: Annotated[Path, typer.Option("--file", help="File containing the position")],
    start_byte: Annotated[
        int, typer.Option("--start-byte", min=0, help="Byte offset of the cursor")
    ],
    no_examples: Annotated[
        bool, typer.Option("--no-examples", help="Don't fetch usage examples")
    ] = False,
    no_build: Annotated[
        bool, typer.Option("--no-build", help="Use the store as it is, without building")
    ] = False,
) -> None:
    """Display the definition referred to by the reference at a position."""
    with open_navigator(file, no_build) as nav:
        result = nav.describe(file, start_byte, include_examples=not no_examples)
    print(json.dumps(result.to_dict()))


@api_app.command("list")
def list_refs(
    file: Annotated[Path, typer.Option("--file", help="File to list references for")],
    no_build: Annotated[
        bool, typer.Option("--no-build", help="Use the store as it is, without building")
    ] = False,
) -> None:
    """List all references in a file."""
    with open_navigator(file, no_build) as nav:
        refs = nav.list_refs(file)
    print(json.dumps([r.to_dict() for r in refs]))


@app.command()
def units(
    file: Annotated[Path, typer.Argument(help="File to look up")],
    output_json: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
    no_build: Annotated[
        bool, typer.Option("--no-build", help="Use the store as it is, without building")
    ] = False,
) -> None:
    """Show the source units a file belongs to."""
    with open_navigator(file, no_build) as nav:
        found = nav.units(file)

    if output_json:
        print(json.dumps([u.to_dict() for u in found]))
        return

    if not found:
        console.print(f"[cyan]{file}[/cyan] is not in any source unit")
        return

    table = Table("Unit", "Type", "Files")
    for unit in found:
        table.add_row(unit.name, unit.type, str(len(unit.files)))
    console.print(table)


if __name__ == "__main__":
    app()
