"""Rendering of the document tree to the final output text.

Two renderers exist: ``JsonRenderer`` dumps the tree as JSON, and
``TemplateRenderer`` feeds it to a sandboxed Jinja2 environment with the
text filters from ``protodoc.core.rendering.filters``. Either one returns the
complete output or raises; nothing is written on failure.
"""

import traceback
from typing import Protocol

from jinja2 import TemplateError, TemplateNotFound, TemplateSyntaxError
from jinja2.sandbox import SandboxedEnvironment
from pydantic import TypeAdapter
from pydantic_core import PydanticSerializationError

from protodoc.core.docs.models import DocumentTree, SchemaFileDoc
from protodoc.core.exceptions import OutputError, RenderError
from protodoc.core.logging import get_logger
from protodoc.core.rendering.filters import FILTERS, bind_filter
from protodoc.core.rendering.loader import TemplateLoader, TemplateSource, read_template

logger = get_logger(__name__)

_FILES_ADAPTER = TypeAdapter(list[SchemaFileDoc])

# Errors a template can raise while compiling or rendering.
_RUNTIME_ERRORS = (
    TemplateError,
    TypeError,
    ValueError,
    AttributeError,
    LookupError,
    ArithmeticError,
    RuntimeError,
)


class DocumentRenderer(Protocol):
    """Anything that turns a document tree into output text."""

    def render(self, tree: DocumentTree) -> str: ...


class JsonRenderer:
    """Serialize the document tree as indented JSON."""

    def render(self, tree: DocumentTree) -> str:
        try:
            data = _FILES_ADAPTER.dump_json(list(tree.files), indent=4)
        except PydanticSerializationError as e:
            raise OutputError("failed to build output document") from e
        return data.decode("utf-8") + "\n"


class TemplateRenderer:
    """Render the document tree through a Jinja2 template.

    The template sees the schema files as ``files`` and can use the filters
    ``p``/``paragraph`` and ``nobr``/``no_line_breaks``.

    Parameters
    ----------
    template : TemplateSource
        Main template and its include search directories
    """

    def __init__(self, template: TemplateSource) -> None:
        self.template = template
        self.loader = TemplateLoader(template)
        self.env = SandboxedEnvironment(
            loader=self.loader, autoescape=False, keep_trailing_newline=True
        )
        for name, text_filter in FILTERS.items():
            self.env.filters[name] = bind_filter(text_filter)

    @property
    def name(self) -> str:
        return self.template.name

    def render(self, tree: DocumentTree) -> str:
        """Render the template with ``files`` in scope.

        Raises
        ------
        RenderError
            If the template fails to compile or render
        """
        try:
            return self.env.get_template(self.name).render(files=list(tree.files))
        except _RUNTIME_ERRORS as e:
            raise self._located(e) from e

    def _located(self, error: Exception) -> RenderError:
        template_name, lineno = self._locate(error)
        partial = template_name if template_name != self.name else None
        position = self._offset(template_name, lineno)

        if isinstance(error, TemplateNotFound):
            message = f"template not found: {error.name}"
        elif isinstance(error, TemplateError):
            message = error.message or type(error).__name__
        else:
            message = f"{type(error).__name__}: {error}"

        logger.debug(
            "Render failure in {template} line {line}: {message}",
            template=template_name,
            line=lineno,
            message=message,
        )
        return RenderError(self.name, partial, position, message)

    def _locate(self, error: Exception) -> tuple[str, int | None]:
        if isinstance(error, TemplateSyntaxError) and error.name in self.loader.sources:
            return error.name, error.lineno

        # Rendered template code runs under the template name as file name.
        located: tuple[str, int | None] = (self.name, None)
        for frame, lineno in traceback.walk_tb(error.__traceback__):
            filename = frame.f_code.co_filename
            if filename in self.loader.sources:
                located = (filename, lineno)
        return located

    def _offset(self, template_name: str, lineno: int | None) -> int:
        if not lineno:
            return 0
        lines = self.loader.sources[template_name].splitlines(keepends=True)
        return sum(len(line) for line in lines[: lineno - 1])


def create_renderer(template_name: str, raw_json: bool = False) -> DocumentRenderer:
    """Return the renderer for a format name or template path.

    Raises
    ------
    TemplateReadError
        If the template file cannot be read
    """
    if raw_json:
        logger.info("Rendering raw JSON")
        return JsonRenderer()
    return TemplateRenderer(read_template(template_name))
