"""Documentation comment extractors.

Two extractors live here:

- ``CommentExtractor`` normalizes the comments protoc attaches to a message,
  enum, enum value or field.
- ``FileHeaderExtractor`` reads the top-of-file documentation block straight
  from the schema source, since descriptors carry no file-level comment.

Both recognize the ``@exclude`` directive at the start of a normalized
comment.
"""

import re
from collections.abc import Iterable
from pathlib import Path
from typing import NamedTuple

from protodoc.core.exceptions import SourceReadError
from protodoc.core.logging import get_logger

logger = get_logger(__name__)

EXCLUDE_DIRECTIVE = "@exclude"

# Lexical forms of documentation comments in schema sources.
LINE_DOC_MARKER = "///"
BLOCK_DOC_OPEN = "/**"
BLOCK_DOC_CLOSE = "*/"
EMPTY_BLOCK_DOC = "/***/"
BYTE_ORDER_MARK = "\ufeff"

_LEADING_SPACE = re.compile(r"^ ", re.MULTILINE)


class Description(NamedTuple):
    """A normalized description and whether the item is excluded."""

    text: str
    excluded: bool = False


def apply_exclude_directive(text: str, ignore_directives: bool) -> Description:
    """Strip a leading ``@exclude`` from trimmed ``text``.

    The directive is always removed from the text; the item is only
    reported as excluded when directives are honored.
    """
    text = text.strip()
    if text.startswith(EXCLUDE_DIRECTIVE):
        text = text[len(EXCLUDE_DIRECTIVE) :]
        return Description(text.strip(), excluded=not ignore_directives)
    return Description(text)


class CommentExtractor:
    """Extract item descriptions from protoc source comments.

    protoc hands over comment text without the ``//`` or ``/*`` opener. A
    comment is documentation only when the next character is ``*`` (from
    ``/** ... */``) or ``/`` (from ``/// ...``); ordinary comments are
    ignored.
    """

    def __init__(self, ignore_directives: bool = False) -> None:
        self.ignore_directives = ignore_directives

    @staticmethod
    def normalize(raw: str) -> str:
        """Return the documentation text of one raw comment, or ``""``."""
        if not raw or raw[0] not in "*/":
            return ""
        return _LEADING_SPACE.sub("", raw[1:])

    def extract(self, leading: str = "", trailing: str = "") -> Description:
        """Combine leading and trailing comments into a description.

        Parameters
        ----------
        leading : str
            Leading comment text as reported by protoc
        trailing : str
            Trailing comment text as reported by protoc

        Returns
        -------
        Description
            Trimmed description and exclusion flag
        """
        text = self.normalize(leading) + self.normalize(trailing)
        return apply_exclude_directive(text, self.ignore_directives)


class FileHeaderExtractor:
    """Extract the documentation block at the top of a schema source file.

    Either a run of consecutive ``///`` lines or one ``/** ... */`` block,
    which must come before any other content, is taken as the file
    description.
    """

    def __init__(
        self, ignore_directives: bool = False, source_roots: Iterable[Path | str] = ()
    ) -> None:
        self.ignore_directives = ignore_directives
        self.source_roots = [Path(root) for root in source_roots] or [Path()]

    def read_source(self, file_name: str) -> str:
        """Read a schema file, trying each source root in order.

        Raises
        ------
        SourceReadError
            If no source root holds a readable copy of the file
        """
        reason = "No such file or directory"
        for root in self.source_roots:
            path = root / file_name
            try:
                return path.read_text(encoding="utf-8-sig")
            except FileNotFoundError as e:
                reason = e.strerror or reason
            except (OSError, UnicodeDecodeError) as e:
                raise SourceReadError(file_name, str(e)) from e
        raise SourceReadError(file_name, reason)

    def extract(self, file_name: str) -> Description:
        """Read ``file_name`` and extract its header description."""
        source = self.read_source(file_name)
        description = self.extract_from_text(source)
        logger.debug(
            "Header of {file}: {size} chars, excluded={excluded}",
            file=file_name,
            size=len(description.text),
            excluded=description.excluded,
        )
        return description

    def extract_from_text(self, source: str) -> Description:
        """Extract the header description from schema source text."""
        lines = source.removeprefix(BYTE_ORDER_MARK).splitlines()
        return apply_exclude_directive(_scan_header(lines), self.ignore_directives)


def _scan_header(lines: list[str]) -> str:
    stripped = (line.strip() for line in lines)
    for line in stripped:
        if not line:
            continue
        if line.startswith(LINE_DOC_MARKER):
            return _scan_line_block(line, stripped)
        if line.startswith(BLOCK_DOC_OPEN) and not line.startswith(EMPTY_BLOCK_DOC):
            return _scan_comment_block(line, stripped)
        break
    return ""


def _scan_line_block(first: str, rest: Iterable[str]) -> str:
    parts = []
    line: str | None = first
    remaining = iter(rest)
    while line is not None and line.startswith(LINE_DOC_MARKER):
        body = line[len(LINE_DOC_MARKER) :]
        parts.append(body[1:] if body.startswith(" ") else body)
        line = next(remaining, None)
    return "\n".join(parts)


def _scan_comment_block(first: str, rest: Iterable[str]) -> str:
    parts = []
    # Content on the opening line is kept verbatim after "/*".
    line: str | None = first[2:]
    remaining = iter(rest)
    while line is not None:
        end = line.find(BLOCK_DOC_CLOSE)
        if end != -1:
            start = 0
            if line.startswith("*") and not line.startswith(BLOCK_DOC_CLOSE):
                start = 2 if line.startswith("* ") else 1
            parts.append(line[start:end])
            break
        parts.append(_strip_star(line))
        line = next(remaining, None)
    return "\n".join(parts)


def _strip_star(line: str) -> str:
    if line.startswith("* "):
        return line[2:]
    if line.startswith("*"):
        return line[1:]
    return line
