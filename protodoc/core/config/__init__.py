"""Configuration loading for protodoc."""

from protodoc.core.config.loader import (
    ConfigLoader,
    apply_logging_config,
    clear_config_cache,
    get_default_config,
    load_config,
)
from protodoc.core.config.models import LoggingConfig, ProtodocConfig
from protodoc.core.config.parameter import GeneratorOptions, parse_parameter, usage

__all__ = [
    "ConfigLoader",
    "GeneratorOptions",
    "LoggingConfig",
    "ProtodocConfig",
    "apply_logging_config",
    "clear_config_cache",
    "get_default_config",
    "load_config",
    "parse_parameter",
    "usage",
]
