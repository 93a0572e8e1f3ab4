"""Parsing of the generator parameter string.

protoc passes everything between ``--doc_out=`` and ``:`` as one string::

    <FORMAT_OR_TEMPLATE>,<OUTPUT_NAME>[,no-exclude]
"""

from __future__ import annotations

from dataclasses import dataclass

from protodoc.core.exceptions import ConfigurationError
from protodoc.core.rendering.loader import builtin_formats

RAW_JSON_FORMAT = "json"
NO_EXCLUDE_OPTION = "no-exclude"


@dataclass(frozen=True, slots=True)
class GeneratorOptions:
    """Options of one generator run.

    Attributes
    ----------
    template_name : str
        Built-in format name or template file path; ``"json"`` for raw output
    output_name : str
        Name of the output file handed to the host
    no_exclude : bool, default=False
        Ignore ``@exclude`` directives
    """

    template_name: str
    output_name: str
    no_exclude: bool = False

    @property
    def raw_json(self) -> bool:
        return self.template_name == RAW_JSON_FORMAT


def usage() -> str:
    """Return the usage line, listing the built-in formats."""
    formats = "|".join([RAW_JSON_FORMAT, *builtin_formats()])
    return f"Usage: --doc_out={formats}|<TEMPLATE_FILENAME>,<OUT_FILENAME>[,no-exclude]:<OUT_DIR>"


def parse_parameter(parameter: str) -> GeneratorOptions:
    """Parse the generator parameter string.

    Raises
    ------
    ConfigurationError
        With the usage text when the string is malformed
    """
    tokens = parameter.split(",")
    if len(tokens) not in (2, 3):
        raise ConfigurationError(usage())

    no_exclude = False
    if len(tokens) == 3:
        if tokens[2] != NO_EXCLUDE_OPTION:
            raise ConfigurationError(usage())
        no_exclude = True

    template_name, output_name = tokens[0], tokens[1]
    if not template_name or not output_name:
        raise ConfigurationError(usage())

    return GeneratorOptions(template_name, output_name, no_exclude)
