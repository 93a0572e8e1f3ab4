"""protodoc CLI - Main entrypoint."""

import typer
from rich.console import Console

from protodoc import __version__
from protodoc.cli.commands import formats_cmd, render_cmd
from protodoc.core.logging import configure_logging

app = typer.Typer(
    name="protodoc",
    help="protodoc - reference documentation for protobuf schemas.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=False,
)

console = Console()

app.command("render")(render_cmd.render)
app.command("formats")(formats_cmd.formats)


@app.callback(invoke_without_command=True)
def callback(
    ctx: typer.Context,
    *,
    quiet: bool = typer.Option(False, "-q", "--quiet", help="Only log errors"),
    verbose: bool = typer.Option(False, "-V", "--verbose", help="Enable debug logging"),
    log_format: str = typer.Option(
        "structured", "--log-format", help="Log format: console|json|structured|rich"
    ),
    version: bool = typer.Option(False, "--version", "-v", help="Show version and exit"),
) -> None:
    """protodoc CLI.

    Global flags are parsed here and stored on `ctx.obj` for subcommands.
    """
    if ctx.obj is None:
        ctx.obj = {}

    effective_level = "WARNING"
    if quiet:
        effective_level = "ERROR"
    elif verbose:
        effective_level = "DEBUG"

    ctx.obj.update({"quiet": quiet, "verbose": verbose, "log_level": effective_level})

    # Explicit flags override project logging settings.
    if quiet or verbose or log_format != "structured":
        ctx.obj["log_override"] = True
        configure_logging(level=effective_level, format=log_format)  # type: ignore[arg-type]

    if version:
        console.print(f"[bold blue]protodoc[/bold blue] version [green]{__version__}[/green]")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def main() -> None:
    """Main CLI entrypoint."""
    app()


if __name__ == "__main__":
    main()
