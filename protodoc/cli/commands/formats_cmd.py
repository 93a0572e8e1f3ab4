"""List the built-in output formats."""

import typer
from rich.console import Console
from rich.table import Table

from protodoc.core.config.parameter import RAW_JSON_FORMAT
from protodoc.core.rendering.loader import builtin_formats

console = Console()


def formats(
    plain: bool = typer.Option(False, "--plain", help="Print one name per line"),
) -> None:
    """List the formats that can be passed as FORMAT.

    Examples
    --------
    protodoc formats
    protodoc formats --plain
    """
    names = [RAW_JSON_FORMAT, *builtin_formats()]

    if plain:
        for name in names:
            typer.echo(name)
        return

    table = Table(title="Built-in formats")
    table.add_column("Format", style="cyan")
    table.add_column("Output")
    for name in names:
        kind = "raw document tree" if name == RAW_JSON_FORMAT else "template"
        table.add_row(name, kind)
    console.print(table)
