"""Build document tree nodes from protobuf file descriptors.

The walk is depth-first and pre-order. Nested messages and enums are
flattened into the owning file's lists, and an excluded message or enum is
never descended into.
"""

from collections.abc import Sequence
from pathlib import PurePosixPath

from google.protobuf.descriptor_pb2 import (
    DescriptorProto,
    EnumDescriptorProto,
    FileDescriptorProto,
    SourceCodeInfo,
)

from protodoc.core.docs.extractors import CommentExtractor, Description, FileHeaderExtractor
from protodoc.core.docs.models import (
    EnumDoc,
    EnumValueDoc,
    FieldDoc,
    MessageDoc,
    SchemaFileDoc,
    sort_fields,
    sort_values,
)
from protodoc.core.docs.types import TypeRenderer
from protodoc.core.logging import get_logger

logger = get_logger(__name__)

# Field numbers used in SourceCodeInfo.Location.path
FILE_MESSAGE_TYPE = FileDescriptorProto.MESSAGE_TYPE_FIELD_NUMBER
FILE_ENUM_TYPE = FileDescriptorProto.ENUM_TYPE_FIELD_NUMBER
MESSAGE_FIELD = DescriptorProto.FIELD_FIELD_NUMBER
MESSAGE_NESTED_TYPE = DescriptorProto.NESTED_TYPE_FIELD_NUMBER
MESSAGE_ENUM_TYPE = DescriptorProto.ENUM_TYPE_FIELD_NUMBER
ENUM_VALUE = EnumDescriptorProto.VALUE_FIELD_NUMBER

DescriptorPath = tuple[int, ...]


class CommentIndex:
    """Leading and trailing comments of a file, keyed by descriptor path."""

    def __init__(self, source_code_info: SourceCodeInfo) -> None:
        self._locations: dict[DescriptorPath, SourceCodeInfo.Location] = {}
        for location in source_code_info.location:
            # Keep the first location for a path, as protoc's own lookup does.
            self._locations.setdefault(tuple(location.path), location)

    def comments(self, path: DescriptorPath) -> tuple[str, str]:
        location = self._locations.get(path)
        if location is None:
            return "", ""
        return location.leading_comments, location.trailing_comments


class _FileWalk:
    """State of a walk over a single file."""

    def __init__(self, assembler: "DocumentAssembler", comments: CommentIndex) -> None:
        self.assembler = assembler
        self.comments = comments
        self.messages: list[MessageDoc] = []
        self.enums: list[EnumDoc] = []

    def describe(self, path: DescriptorPath) -> Description:
        return self.assembler.comment_extractor.extract(*self.comments.comments(path))

    def add_message(self, message: DescriptorProto, path: DescriptorPath) -> None:
        description = self.describe(path)
        if description.excluded:
            logger.debug("Excluding message {name}", name=message.name)
            return

        fields = []
        for index, field in enumerate(message.field):
            field_description = self.describe((*path, MESSAGE_FIELD, index))
            if field_description.excluded:
                logger.debug(
                    "Excluding field {message}.{name}", message=message.name, name=field.name
                )
                continue
            fields.append(
                FieldDoc(
                    field_name=field.name,
                    field_description=field_description.text,
                    field_type=self.assembler.type_renderer.render(field),
                )
            )

        self.messages.append(
            MessageDoc(
                message_name=message.name,
                message_description=description.text,
                message_fields=sort_fields(fields),
            )
        )

        for index, nested in enumerate(message.nested_type):
            self.add_message(nested, (*path, MESSAGE_NESTED_TYPE, index))
        for index, enum in enumerate(message.enum_type):
            self.add_enum(enum, (*path, MESSAGE_ENUM_TYPE, index))

    def add_enum(self, enum: EnumDescriptorProto, path: DescriptorPath) -> None:
        description = self.describe(path)
        if description.excluded:
            logger.debug("Excluding enum {name}", name=enum.name)
            return

        values = []
        for index, value in enumerate(enum.value):
            value_description = self.describe((*path, ENUM_VALUE, index))
            if value_description.excluded:
                logger.debug(
                    "Excluding enum value {enum}.{name}", enum=enum.name, name=value.name
                )
                continue
            values.append(
                EnumValueDoc(
                    value_name=value.name,
                    value_number=value.number,
                    value_description=value_description.text,
                )
            )

        self.enums.append(
            EnumDoc(
                enum_name=enum.name,
                enum_description=description.text,
                enum_values=sort_values(values),
            )
        )


class DocumentAssembler:
    """Turn file descriptors into ``SchemaFileDoc`` nodes.

    Parameters
    ----------
    comment_extractor : CommentExtractor
        Extractor for item comments
    header_extractor : FileHeaderExtractor
        Extractor for the file-level description
    type_renderer : TypeRenderer
        Renderer for field display types
    """

    def __init__(
        self,
        comment_extractor: CommentExtractor,
        header_extractor: FileHeaderExtractor,
        type_renderer: TypeRenderer,
    ) -> None:
        self.comment_extractor = comment_extractor
        self.header_extractor = header_extractor
        self.type_renderer = type_renderer

    @classmethod
    def create(
        cls,
        ignore_directives: bool = False,
        source_roots: Sequence[str] = (),
        type_url: str = "#{name}",
        scalar_type_url: str | None = None,
    ) -> "DocumentAssembler":
        """Build an assembler with default collaborators."""
        return cls(
            CommentExtractor(ignore_directives),
            FileHeaderExtractor(ignore_directives, source_roots),
            TypeRenderer(type_url, scalar_type_url),
        )

    def build_file(self, file: FileDescriptorProto) -> SchemaFileDoc | None:
        """Build the documentation node for ``file``.

        Returns None when the file header carries the exclusion directive.

        Raises
        ------
        SourceReadError
            If the schema source cannot be read for its header
        """
        header = self.header_extractor.extract(file.name)
        if header.excluded:
            logger.debug("Excluding file {name}", name=file.name)
            return None

        walk = _FileWalk(self, CommentIndex(file.source_code_info))
        for index, message in enumerate(file.message_type):
            walk.add_message(message, (FILE_MESSAGE_TYPE, index))
        for index, enum in enumerate(file.enum_type):
            walk.add_enum(enum, (FILE_ENUM_TYPE, index))

        return SchemaFileDoc(
            file_name=PurePosixPath(file.name).name,
            file_package=file.package,
            file_description=header.text,
            file_messages=tuple(walk.messages),
            file_enums=tuple(walk.enums),
        )
