"""Output rendering for protodoc."""

from protodoc.core.rendering.filters import FILTERS, no_line_breaks, paragraph
from protodoc.core.rendering.loader import (
    TemplateLoader,
    TemplateSource,
    builtin_formats,
    read_template,
)
from protodoc.core.rendering.renderer import (
    DocumentRenderer,
    JsonRenderer,
    TemplateRenderer,
    create_renderer,
)

__all__ = [
    "FILTERS",
    "DocumentRenderer",
    "JsonRenderer",
    "TemplateLoader",
    "TemplateRenderer",
    "TemplateSource",
    "builtin_formats",
    "create_renderer",
    "no_line_breaks",
    "paragraph",
    "read_template",
]
