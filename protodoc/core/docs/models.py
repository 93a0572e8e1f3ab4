"""Data models for the generated documentation.

These Pydantic models form the document tree handed to the renderer. Field
names are the keys templates see and the keys of the raw JSON output, so they
are part of the public template contract.
"""

from collections.abc import Iterable, Iterator

from pydantic import BaseModel, ConfigDict, Field, computed_field


class _DocModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class FieldDoc(_DocModel):
    """Documentation for a single message field.

    Attributes
    ----------
    field_name : str
        Declared field name
    field_description : str
        Normalized documentation comment
    field_type : str
        Display type, fully resolved (links, ``?`` suffix, ``array of``)
    """

    field_name: str
    field_description: str = ""
    field_type: str = ""


class EnumValueDoc(_DocModel):
    """Documentation for a single enum value."""

    value_name: str
    value_number: int
    value_description: str = ""


class EnumDoc(_DocModel):
    """Documentation for an enum.

    Attributes
    ----------
    enum_name : str
        Bare enum name (nested enums are not qualified)
    enum_description : str
        Normalized documentation comment
    enum_values : tuple[EnumValueDoc, ...]
        Values sorted by ``value_name``
    """

    enum_name: str
    enum_description: str = ""
    enum_values: tuple[EnumValueDoc, ...] = Field(default_factory=tuple)


class MessageDoc(_DocModel):
    """Documentation for a message.

    Nested messages and enums are not children of this node; they are
    flattened into the owning file's lists.
    """

    message_name: str
    message_description: str = ""
    message_fields: tuple[FieldDoc, ...] = Field(default_factory=tuple)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def message_has_fields(self) -> bool:
        """Whether any field survived exclusion."""
        return bool(self.message_fields)


class SchemaFileDoc(_DocModel):
    """Documentation for one schema file.

    Attributes
    ----------
    file_name : str
        Base name of the schema file
    file_package : str
        Declared package, possibly empty
    file_description : str
        Top-of-file documentation block
    file_messages : tuple[MessageDoc, ...]
        Messages in pre-order walk order, nested ones flattened in
    file_enums : tuple[EnumDoc, ...]
        Nested enums in walk order, followed by top-level enums
    """

    file_name: str
    file_package: str = ""
    file_description: str = ""
    file_messages: tuple[MessageDoc, ...] = Field(default_factory=tuple)
    file_enums: tuple[EnumDoc, ...] = Field(default_factory=tuple)


class DocumentTree:
    """Append-only list of schema files accumulated over one run."""

    def __init__(self) -> None:
        self._files: list[SchemaFileDoc] = []

    def append(self, file: SchemaFileDoc) -> None:
        self._files.append(file)

    @property
    def files(self) -> tuple[SchemaFileDoc, ...]:
        return tuple(self._files)

    def __iter__(self) -> Iterator[SchemaFileDoc]:
        return iter(self.files)

    def __len__(self) -> int:
        return len(self._files)


# Sorting. Each list kind has its own key; sorted() is stable.


def sort_fields(fields: Iterable[FieldDoc]) -> tuple[FieldDoc, ...]:
    """Return fields in ascending ``field_name`` order."""
    return tuple(sorted(fields, key=lambda field: field.field_name))


def sort_values(values: Iterable[EnumValueDoc]) -> tuple[EnumValueDoc, ...]:
    """Return enum values in ascending ``value_name`` order."""
    return tuple(sorted(values, key=lambda value: value.value_name))
