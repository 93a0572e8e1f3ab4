"""TOML configuration loader for protodoc."""

from __future__ import annotations

import os
import re
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any

from protodoc.core.config.models import LoggingConfig, ProtodocConfig
from protodoc.core.exceptions import ConfigurationError
from protodoc.core.docs.types import check_type_url
from protodoc.core.logging import LOG_FORMATS, LOG_LEVELS, configure_logging, get_logger

_TRUTHY_VALUES = frozenset({"true", "1", "yes", "on", "enabled"})
_FALSY_VALUES = frozenset({"false", "0", "no", "off", "disabled"})

logger = get_logger(__name__)


def _parse_bool_env(value: str) -> bool:
    """Parse boolean from environment variable value.

    Raises
    ------
    ValueError
        If value is not a recognized boolean string
    """
    normalized = value.lower().strip()
    if normalized in _TRUTHY_VALUES:
        return True
    if normalized in _FALSY_VALUES:
        return False
    expected = sorted(_TRUTHY_VALUES | _FALSY_VALUES)
    raise ValueError(f"Invalid boolean value: {value!r}. Expected one of: {expected}")


@lru_cache(maxsize=32)
def _load_and_parse_cached(path_str: str) -> ProtodocConfig:
    """Cached configuration loader."""
    return ConfigLoader()._load_and_parse(Path(path_str))


class ConfigLoader:
    """Loads protodoc settings from TOML files."""

    ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")

    SEARCH_PATHS = ("protodoc.toml", "pyproject.toml", ".protodoc.toml")

    def load_from_toml(self, path: str | Path | None = None) -> ProtodocConfig:
        """Load configuration from a TOML file.

        Parameters
        ----------
        path : str | Path | None
            Path to TOML file. If None, searches the working directory.

        Returns
        -------
        ProtodocConfig
            Parsed configuration, or defaults when no file is found
        """
        config_path = self._find_config_file(path)
        if config_path is None:
            return get_default_config()
        return _load_and_parse_cached(str(config_path.absolute()))

    def _load_and_parse(self, config_path: Path) -> ProtodocConfig:
        logger.info("Loading configuration from {path}", path=config_path)

        try:
            with config_path.open("rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(f"{config_path}: {e}") from e

        if "tool" in data and "protodoc" in data.get("tool", {}):
            protodoc_data = data["tool"]["protodoc"]
        elif config_path.name == "pyproject.toml":
            logger.debug("No [tool.protodoc] section in {path}, using defaults", path=config_path)
            protodoc_data = {}
        else:
            # Flat format (top-level keys)
            protodoc_data = data

        return self._parse_config(self._substitute_env_vars(protodoc_data))

    def _find_config_file(self, path: str | Path | None) -> Path | None:
        """Find the configuration file.

        Raises
        ------
        ConfigurationError
            If an explicit path does not exist
        """
        if path:
            config_path = Path(path)
            if not config_path.exists():
                raise ConfigurationError(f"Configuration file not found: {config_path}")
            return config_path

        if env_path := os.getenv("PROTODOC_CONFIG_PATH"):
            config_path = Path(env_path)
            if config_path.exists():
                logger.debug("Using config from PROTODOC_CONFIG_PATH: {path}", path=config_path)
                return config_path
            logger.warning("PROTODOC_CONFIG_PATH set but file not found: {path}", path=config_path)

        for search_path in self.SEARCH_PATHS:
            candidate = Path(search_path)
            if candidate.exists():
                return candidate

        return None

    def _substitute_env_vars(self, data: Any) -> Any:
        """Recursively replace ``${VAR}`` with environment values."""
        if isinstance(data, str):

            def replacer(match: re.Match[str]) -> str:
                var_name = match.group(1)
                value = os.environ.get(var_name)
                if value is None:
                    logger.debug(
                        "Environment variable ${{{name}}} not found, keeping placeholder",
                        name=var_name,
                    )
                    return match.group(0)
                return value

            return self.ENV_VAR_PATTERN.sub(replacer, data)

        if isinstance(data, dict):
            return {key: self._substitute_env_vars(value) for key, value in data.items()}

        if isinstance(data, list):
            return [self._substitute_env_vars(item) for item in data]

        return data

    def _parse_config(self, data: dict[str, Any]) -> ProtodocConfig:
        defaults = ProtodocConfig()

        source_roots = data.get("source_roots", list(defaults.source_roots))
        if isinstance(source_roots, str):
            source_roots = [source_roots]
        if not isinstance(source_roots, list) or not all(
            isinstance(root, str) for root in source_roots
        ):
            raise ConfigurationError("source_roots must be a list of directory names")

        type_url = data.get("type_url", defaults.type_url)
        scalar_type_url = data.get("scalar_type_url", defaults.scalar_type_url)
        for key, value in (("type_url", type_url), ("scalar_type_url", scalar_type_url)):
            if value is not None and not isinstance(value, str):
                raise ConfigurationError(f"{key} must be a string")
        check_type_url(type_url)

        return ProtodocConfig(
            source_roots=tuple(source_roots),
            type_url=type_url,
            scalar_type_url=scalar_type_url,
            logging=self._parse_logging_config(data.get("logging", {})),
        )

    def _parse_logging_config(self, logging_data: dict[str, Any]) -> LoggingConfig:
        """Parse logging configuration with environment variable overrides.

        Environment variables take precedence over TOML configuration:
        - PROTODOC_LOG_LEVEL: Log level
        - PROTODOC_LOG_FORMAT: Output format (console, json, structured, rich)
        - PROTODOC_LOG_FILE: Optional file path for log output
        - PROTODOC_LOG_COLOR: Use color output (true/false)
        - PROTODOC_LOG_RICH: Use Rich for console output (true/false)
        """
        level = logging_data.get("level", "WARNING")
        format_type = logging_data.get("format", "structured")
        output_file = logging_data.get("output_file")
        use_color = logging_data.get("use_color", True)
        include_timestamp = logging_data.get("include_timestamp", True)
        use_rich = logging_data.get("use_rich", False)

        if env_level := os.getenv("PROTODOC_LOG_LEVEL"):
            level = env_level
        if env_format := os.getenv("PROTODOC_LOG_FORMAT"):
            format_type = env_format
        if env_file := os.getenv("PROTODOC_LOG_FILE"):
            output_file = env_file

        if env_color := os.getenv("PROTODOC_LOG_COLOR"):
            try:
                use_color = _parse_bool_env(env_color)
            except ValueError as e:
                logger.warning("Invalid PROTODOC_LOG_COLOR value: {error}", error=e)

        if env_rich := os.getenv("PROTODOC_LOG_RICH"):
            try:
                use_rich = _parse_bool_env(env_rich)
            except ValueError as e:
                logger.warning("Invalid PROTODOC_LOG_RICH value: {error}", error=e)

        level = str(level).upper()
        format_type = str(format_type).lower()
        if level not in LOG_LEVELS:
            raise ConfigurationError(
                f"logging.level: {level!r} is not one of {sorted(LOG_LEVELS)}"
            )
        if format_type not in LOG_FORMATS:
            raise ConfigurationError(
                f"logging.format: {format_type!r} is not one of {sorted(LOG_FORMATS)}"
            )

        return LoggingConfig(
            level=level,  # type: ignore[arg-type]
            format=format_type,  # type: ignore[arg-type]
            output_file=output_file,
            use_color=use_color,
            include_timestamp=include_timestamp,
            use_rich=use_rich,
        )


def get_default_config() -> ProtodocConfig:
    """Return the built-in default configuration."""
    return ProtodocConfig()


def load_config(path: str | Path | None = None) -> ProtodocConfig:
    """Load protodoc settings, falling back to defaults."""
    return ConfigLoader().load_from_toml(path)


def clear_config_cache() -> None:
    """Clear the configuration cache (useful in tests)."""
    _load_and_parse_cached.cache_clear()


def apply_logging_config(config: LoggingConfig) -> None:
    """Configure logging from the ``[logging]`` settings."""
    configure_logging(
        level=config.level,
        format=config.format,
        output_file=config.output_file,
        use_color=config.use_color,
        include_timestamp=config.include_timestamp,
        use_rich=config.use_rich,
    )
