"""Document model and builders for protodoc.

This package turns protobuf file descriptors and their source comments into
a typed document tree, ready for JSON output or template rendering.
"""

from protodoc.core.docs.assembler import CommentIndex, DocumentAssembler
from protodoc.core.docs.extractors import CommentExtractor, Description, FileHeaderExtractor
from protodoc.core.docs.models import (
    DocumentTree,
    EnumDoc,
    EnumValueDoc,
    FieldDoc,
    MessageDoc,
    SchemaFileDoc,
    sort_fields,
    sort_values,
)
from protodoc.core.docs.types import TypeRenderer

__all__ = [
    "CommentExtractor",
    "CommentIndex",
    "Description",
    "DocumentAssembler",
    "DocumentTree",
    "EnumDoc",
    "EnumValueDoc",
    "FieldDoc",
    "FileHeaderExtractor",
    "MessageDoc",
    "SchemaFileDoc",
    "TypeRenderer",
    "sort_fields",
    "sort_values",
]
