"""Render documentation from a compiled descriptor set."""

from dataclasses import replace
from pathlib import Path
from typing import Annotated

import typer
from google.protobuf.descriptor_pb2 import FileDescriptorSet
from google.protobuf.message import DecodeError
from rich.console import Console
from rich.markup import escape

from protodoc.core.config import GeneratorOptions, apply_logging_config, load_config
from protodoc.core.context import GeneratorContext
from protodoc.core.exceptions import ProtodocError
from protodoc.core.logging import get_logger

logger = get_logger(__name__)

# Status goes to stderr so "-o -" output stays clean.
err_console = Console(stderr=True)


def _fail(message: str) -> typer.Exit:
    err_console.print(f"[red]✗[/red] {escape(message)}")
    return typer.Exit(1)


def _read_descriptor_set(path: Path) -> FileDescriptorSet:
    try:
        return FileDescriptorSet.FromString(path.read_bytes())
    except OSError as e:
        raise _fail(f"{path}: {e.strerror or e}") from e
    except DecodeError as e:
        raise _fail(f"{path}: not a FileDescriptorSet ({e})") from e


def render(
    ctx: typer.Context,
    descriptor_set: Annotated[
        Path,
        typer.Argument(
            help="FileDescriptorSet written by protoc --include_source_info -o",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Built-in format, 'json', or a template file"),
    ] = "html",
    output: Annotated[
        str,
        typer.Option("--output", "-o", help="Output file, '-' for stdout"),
    ] = "-",
    no_exclude: Annotated[
        bool,
        typer.Option("--no-exclude", help="Ignore @exclude directives"),
    ] = False,
    source_root: Annotated[
        list[Path] | None,
        typer.Option(
            "--source-root",
            "-I",
            help="Directory holding the .proto sources (repeatable)",
        ),
    ] = None,
    only: Annotated[
        list[str] | None,
        typer.Option("--file", help="Only document this schema file (repeatable)"),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option("--config", help="Path to protodoc.toml or pyproject.toml"),
    ] = None,
) -> None:
    """Render documentation for the files in DESCRIPTOR_SET.

    Files are documented in descriptor set order. The descriptor set must be
    built with source info so documentation comments are available.

    Examples
    --------
    protoc --include_source_info -o api.pb api/*.proto
    protodoc render api.pb -f html -o api.html
    protodoc render api.pb -f json --no-exclude
    protodoc render api.pb -f docs/custom.jinja -I proto/ -o api.md
    """
    try:
        settings = load_config(config)
    except ProtodocError as e:
        raise _fail(str(e)) from e

    if not (ctx.obj or {}).get("log_override"):
        apply_logging_config(settings.logging)
    if source_root:
        settings = replace(settings, source_roots=tuple(str(root) for root in source_root))

    files = list(_read_descriptor_set(descriptor_set).file)
    logger.debug("Read {count} files from {path}", count=len(files), path=descriptor_set)
    if only:
        known = {file.name for file in files}
        missing = [name for name in only if name not in known]
        if missing:
            raise _fail(f"not in descriptor set: {', '.join(missing)}")
        files = [file for file in files if file.name in only]

    options = GeneratorOptions(format, output, no_exclude)
    try:
        context = GeneratorContext.from_options(options, settings)
        for file in files:
            context.add_file(file)
        result = context.render()
    except ProtodocError as e:
        raise _fail(str(e)) from e

    if output == "-":
        typer.echo(result, nl=False)
        return

    try:
        Path(output).write_text(result, encoding="utf-8")
    except OSError as e:
        raise _fail(f"{output}: {e.strerror or e}") from e
    err_console.print(f"[green]✓[/green] Wrote {escape(output)} ({len(context.tree)} files)")
