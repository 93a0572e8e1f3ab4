"""Display types for message fields."""

from html import escape

from google.protobuf.descriptor_pb2 import FieldDescriptorProto

from protodoc.core.exceptions import ConfigurationError
from protodoc.core.logging import get_logger

logger = get_logger(__name__)

UNKNOWN_TYPE = "<unknown>"

# Field names containing this substring are shown as timestamps.
DATE_MARKER = "date"

_FDP = FieldDescriptorProto

SCALAR_CATEGORIES: dict[int, str] = {
    _FDP.TYPE_BOOL: "bool",
    _FDP.TYPE_BYTES: "string",
    _FDP.TYPE_STRING: "string",
    _FDP.TYPE_DOUBLE: "float",
    _FDP.TYPE_FLOAT: "float",
    _FDP.TYPE_FIXED32: "int",
    _FDP.TYPE_FIXED64: "int",
    _FDP.TYPE_INT32: "int",
    _FDP.TYPE_INT64: "int",
    _FDP.TYPE_SFIXED32: "int",
    _FDP.TYPE_SFIXED64: "int",
    _FDP.TYPE_SINT32: "int",
    _FDP.TYPE_SINT64: "int",
    _FDP.TYPE_UINT32: "int",
    _FDP.TYPE_UINT64: "int",
}

_REFERENCE_TYPES = frozenset({_FDP.TYPE_MESSAGE, _FDP.TYPE_GROUP, _FDP.TYPE_ENUM})


def check_type_url(type_url: str) -> None:
    """Check that ``type_url`` formats with ``{name}`` as its only field.

    Raises
    ------
    ConfigurationError
        If the format string is malformed or uses other fields
    """
    try:
        type_url.format(name="Type")
    except (KeyError, IndexError, AttributeError, ValueError) as e:
        raise ConfigurationError(f"type_url: invalid link format {type_url!r} ({e!r})") from e


def bare_name(type_name: str) -> str:
    """Return the last component of a fully qualified type name.

    >>> bare_name(".acme.api.Order.Line")
    'Line'
    """
    return type_name.rsplit(".", 1)[-1]


class TypeRenderer:
    """Turn a field's kind and label into a display type string.

    Parameters
    ----------
    type_url : str
        Format string for message/enum links; ``{name}`` is the bare type name
    scalar_type_url : str | None
        Link target for scalar categories and the word ``array``. Scalars are
        plain text when this is None.
    """

    def __init__(self, type_url: str = "#{name}", scalar_type_url: str | None = None) -> None:
        check_type_url(type_url)
        self.type_url = type_url
        self.scalar_type_url = scalar_type_url

    def render(self, field: FieldDescriptorProto) -> str:
        """Return the display type for ``field``."""
        if field.type in _REFERENCE_TYPES:
            display = self.reference(bare_name(field.type_name))
        elif DATE_MARKER in field.name:
            display = self.scalar("time")
        else:
            category = SCALAR_CATEGORIES.get(field.type)
            if category is None:
                logger.warning(
                    "Unknown type {type} for field {field}", type=field.type, field=field.name
                )
                display = UNKNOWN_TYPE
            else:
                display = self.scalar(category)

        if field.label == _FDP.LABEL_OPTIONAL:
            return f"{display}?"
        if field.label == _FDP.LABEL_REPEATED:
            return f"{self.scalar('array')} of {display}"
        return display

    def reference(self, name: str) -> str:
        href = self.type_url.format(name=name)
        return f'<a href="{escape(href)}">{name}</a>'

    def scalar(self, category: str) -> str:
        if self.scalar_type_url is None:
            return category
        return f'<a href="{escape(self.scalar_type_url)}">{category}</a>'
