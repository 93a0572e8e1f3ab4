"""Template lookup for built-in formats and user template files."""

from importlib.resources import files
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import NamedTuple

from jinja2 import BaseLoader, Environment, TemplateNotFound
from jinja2.loaders import split_template_path

from protodoc.core.exceptions import TemplateReadError
from protodoc.core.logging import get_logger

logger = get_logger(__name__)

TEMPLATE_SUFFIX = ".jinja"


def _builtin_root() -> Traversable:
    return files("protodoc") / "templates"


def builtin_formats() -> list[str]:
    """Return the names of the built-in formats, sorted."""
    return sorted(
        entry.name.removesuffix(TEMPLATE_SUFFIX)
        for entry in _builtin_root().iterdir()
        if entry.is_file() and entry.name.endswith(TEMPLATE_SUFFIX)
    )


class TemplateSource(NamedTuple):
    """A main template and the directories its includes are looked up in."""

    name: str
    source: str
    search_dirs: tuple[Path, ...] = ()


def read_template(name: str) -> TemplateSource:
    """Resolve a built-in format name or a template file path.

    Raises
    ------
    TemplateReadError
        If ``name`` is not a built-in format and the file cannot be read
    """
    if name in builtin_formats():
        source = (_builtin_root() / f"{name}{TEMPLATE_SUFFIX}").read_text(encoding="utf-8")
        logger.info("Using built-in format {name}", name=name)
        return TemplateSource(name, source)

    path = Path(name)
    try:
        source = path.read_text(encoding="utf-8")
    except OSError as e:
        raise TemplateReadError(name, e.strerror or str(e)) from e
    except UnicodeDecodeError as e:
        raise TemplateReadError(name, str(e)) from e
    logger.info("Using template file {path}", path=path)
    return TemplateSource(name, source, (path.parent,))


class TemplateLoader(BaseLoader):
    """Serve the main template and resolve its includes.

    Includes are looked up in the search directories first, then among the
    built-in templates. Every template is compiled with its own name as file
    name, so tracebacks through rendered code point back at it. Sources are
    remembered to translate line numbers into character offsets.
    """

    def __init__(self, main: TemplateSource) -> None:
        self.main_name = main.name
        self.search_dirs = main.search_dirs
        self.sources: dict[str, str] = {main.name: main.source}

    def get_source(self, environment: Environment, template: str) -> tuple[str, str, object]:
        if template not in self.sources:
            self.sources[template] = self._find(template)
        return self.sources[template], template, lambda: True

    def _find(self, template: str) -> str:
        pieces = split_template_path(template)
        for directory in self.search_dirs:
            path = directory.joinpath(*pieces)
            if path.is_file():
                return path.read_text(encoding="utf-8")

        builtin = _builtin_root().joinpath(*pieces)
        if builtin.is_file():
            return builtin.read_text(encoding="utf-8")
        builtin = _builtin_root().joinpath(*pieces[:-1], f"{pieces[-1]}{TEMPLATE_SUFFIX}")
        if builtin.is_file():
            return builtin.read_text(encoding="utf-8")

        raise TemplateNotFound(template)
