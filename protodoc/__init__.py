"""protodoc - reference documentation generator for protobuf schemas.

protodoc runs as a protoc plugin (``protoc-gen-doc``) or as a standalone
command (``protodoc``) over a descriptor set, and renders the documentation
comments of messages, enums and fields as JSON or through a Jinja2 template.
"""

from protodoc.core.context import GeneratorContext
from protodoc.core.docs import DocumentTree, SchemaFileDoc
from protodoc.core.exceptions import ProtodocError

__version__ = "0.3.0"

__all__ = [
    "DocumentTree",
    "GeneratorContext",
    "ProtodocError",
    "SchemaFileDoc",
    "__version__",
]
