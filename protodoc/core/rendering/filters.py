"""Text filters available to templates.

A filter is a plain function of the raw argument text and a sub-template
renderer. The renderer is injected when the filter is bound to the template
environment, so the functions themselves hold no state.
"""

import re
from collections.abc import Callable

from jinja2 import pass_context
from jinja2.runtime import Context

SubRenderer = Callable[[str], str]
TextFilter = Callable[[str, SubRenderer], str]

# A line break, optional whitespace, and another line break.
PARAGRAPH_BREAK = re.compile(r"(?:\r\n|\r|\n)\s*(?:\r\n|\r|\n)")

_TEMPLATE_MARKERS = ("{{", "{%", "{#")


def paragraph(text: str, render_sub: SubRenderer) -> str:
    """Render ``text`` and wrap each paragraph in ``<p>...</p>``.

    >>> paragraph("Hello\\n\\nWorld", lambda text: text)
    '<p>Hello</p><p>World</p>'
    """
    rendered = render_sub(text)
    return "<p>" + "</p><p>".join(PARAGRAPH_BREAK.split(rendered)) + "</p>"


def no_line_breaks(text: str, render_sub: SubRenderer) -> str:
    """Render ``text`` and delete every CRLF, then CR, then LF."""
    rendered = render_sub(text)
    return rendered.replace("\r\n", "").replace("\r", "").replace("\n", "")


FILTERS: dict[str, TextFilter] = {
    "p": paragraph,
    "paragraph": paragraph,
    "nobr": no_line_breaks,
    "no_line_breaks": no_line_breaks,
}


def sub_renderer(context: Context) -> SubRenderer:
    """Return a renderer evaluating text as a template in ``context``."""

    def render(text: str) -> str:
        if not any(marker in text for marker in _TEMPLATE_MARKERS):
            return text
        return context.environment.from_string(text).render(context.get_all())

    return render


def bind_filter(text_filter: TextFilter) -> Callable[[Context, object], str]:
    """Adapt a text filter to a Jinja filter."""

    @pass_context
    def jinja_filter(context: Context, value: object) -> str:
        return text_filter(str(value), sub_renderer(context))

    jinja_filter.__name__ = text_filter.__name__
    return jinja_filter
