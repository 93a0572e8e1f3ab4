"""Configuration data models for protodoc."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Logging configuration for protodoc.

    Attributes
    ----------
    level : str, default="WARNING"
        Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    format : str, default="structured"
        Output format (console, json, structured, rich)
    output_file : str | None, default=None
        Optional file path to write logs to
    use_color : bool, default=True
        Use ANSI color codes (auto-disabled for non-TTY)
    include_timestamp : bool, default=True
        Include timestamp in log output
    use_rich : bool, default=False
        Use Rich for console output

    Examples
    --------
    TOML configuration:

    ```toml
    [tool.protodoc.logging]
    level = "DEBUG"
    format = "rich"
    ```

    Environment variable overrides:

    ```bash
    export PROTODOC_LOG_LEVEL=DEBUG
    export PROTODOC_LOG_FORMAT=json
    export PROTODOC_LOG_FILE=/tmp/protodoc.log
    ```
    """

    level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["console", "json", "structured", "rich"] = "structured"
    output_file: str | None = None
    use_color: bool = True
    include_timestamp: bool = True
    use_rich: bool = False


@dataclass(frozen=True, slots=True)
class ProtodocConfig:
    """Project settings for protodoc.

    Attributes
    ----------
    source_roots : tuple[str, ...]
        Directories searched, in order, for schema sources (file headers)
    type_url : str
        Link format for message and enum references; ``{name}`` is replaced
    scalar_type_url : str | None
        Link target for scalar types, or None for plain text
    logging : LoggingConfig
        Logging settings
    """

    source_roots: tuple[str, ...] = (".",)
    type_url: str = "#{name}"
    scalar_type_url: str | None = None
    logging: LoggingConfig = field(default_factory=LoggingConfig)
