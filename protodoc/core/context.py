"""Run-scoped state of one documentation generation run."""

from google.protobuf.descriptor_pb2 import FileDescriptorProto

from protodoc.core.config.models import ProtodocConfig
from protodoc.core.config.parameter import GeneratorOptions
from protodoc.core.docs.assembler import DocumentAssembler
from protodoc.core.docs.models import DocumentTree, SchemaFileDoc
from protodoc.core.exceptions import RunStateError
from protodoc.core.logging import get_logger
from protodoc.core.rendering.renderer import DocumentRenderer, create_renderer

logger = get_logger(__name__)


class GeneratorContext:
    """Accumulate schema files and render them once.

    A context is created at the start of a run, receives schema files one at
    a time in host order, and is rendered exactly once after the last one.

    Parameters
    ----------
    options : GeneratorOptions
        Parsed run parameter
    assembler : DocumentAssembler
        Builder of per-file document nodes
    renderer : DocumentRenderer
        Renderer used for the final output
    """

    def __init__(
        self,
        options: GeneratorOptions,
        assembler: DocumentAssembler,
        renderer: DocumentRenderer,
    ) -> None:
        self.options = options
        self.assembler = assembler
        self.renderer = renderer
        self.tree = DocumentTree()
        self._rendered = False

    @classmethod
    def from_options(
        cls, options: GeneratorOptions, config: ProtodocConfig | None = None
    ) -> "GeneratorContext":
        """Create a context, resolving the template named by ``options``.

        Raises
        ------
        TemplateReadError
            If the template file cannot be read
        """
        config = config or ProtodocConfig()
        assembler = DocumentAssembler.create(
            ignore_directives=options.no_exclude,
            source_roots=config.source_roots,
            type_url=config.type_url,
            scalar_type_url=config.scalar_type_url,
        )
        renderer = create_renderer(options.template_name, raw_json=options.raw_json)
        return cls(options, assembler, renderer)

    def add_file(self, file: FileDescriptorProto) -> SchemaFileDoc | None:
        """Append the documentation of ``file`` to the tree.

        Returns the appended node, or None when the file is excluded.
        """
        if self._rendered:
            raise RunStateError(f"cannot add {file.name}: output was already rendered")

        node = self.assembler.build_file(file)
        if node is not None:
            self.tree.append(node)
            logger.debug(
                "Appended {name}: {messages} messages, {enums} enums",
                name=file.name,
                messages=len(node.file_messages),
                enums=len(node.file_enums),
            )
        return node

    def render(self) -> str:
        """Render the accumulated tree. May only be called once."""
        if self._rendered:
            raise RunStateError("output was already rendered")
        self._rendered = True
        output = self.renderer.render(self.tree)
        logger.info(
            "Rendered {count} files to {output}",
            count=len(self.tree),
            output=self.options.output_name,
        )
        return output
