"""Exception hierarchy for protodoc.

Every error raised by protodoc is fatal for the run: nothing is retried and
no output is written once one of these has been raised. All of them inherit
from ProtodocError so host adapters can convert them in one place.
"""

from __future__ import annotations

# ============================================================================
# Base Exception
# ============================================================================


class ProtodocError(Exception):
    """Base exception for all protodoc errors."""

    pass


# ============================================================================
# Configuration Errors
# ============================================================================


class ConfigurationError(ProtodocError):
    """Raised when the run parameter string or project settings are invalid.

    Examples
    --------
    Example usage::

        raise ConfigurationError("Usage: --doc_out=html|markdown|<TEMPLATE>,<OUT>")
    """

    pass


# ============================================================================
# I/O Errors
# ============================================================================


class SourceReadError(ProtodocError):
    """Raised when a schema source file cannot be opened for header extraction.

    Examples
    --------
    Example usage::

        raise SourceReadError("api/service.proto", "No such file or directory")
    """

    def __init__(self, file_name: str, reason: str) -> None:
        """Initialize source read error.

        Args
        ----
            file_name: Schema file name as given by the descriptor
            reason: Underlying I/O failure
        """
        super().__init__(f"{file_name}: {reason}")
        self.file_name = file_name
        self.reason = reason


class TemplateReadError(ProtodocError):
    """Raised when a template file cannot be read."""

    def __init__(self, path: str, reason: str) -> None:
        """Initialize template read error.

        Args
        ----
            path: Template path that was tried
            reason: Underlying I/O failure
        """
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class OutputError(ProtodocError):
    """Raised when the output document cannot be built or written."""

    pass


# ============================================================================
# Rendering Errors
# ============================================================================


class RenderError(ProtodocError):
    """Raised when the template engine fails while rendering.

    The message is always a single line of the form
    ``<template>[ in partial <name>]:<offset>: <message>``.

    Examples
    --------
    Example usage::

        raise RenderError("html", None, 120, "unexpected '}'")
    """

    def __init__(
        self, template: str, partial: str | None, position: int, message: str
    ) -> None:
        """Initialize render error.

        Args
        ----
            template: Name of the template being rendered
            partial: Name of the included template that failed, if any
            position: Character offset of the failure in the failing template
            message: Engine error message
        """
        location = template if not partial else f"{template} in partial {partial}"
        single_line = " ".join(message.split())
        super().__init__(f"{location}:{position}: {single_line}")
        self.template = template
        self.partial = partial
        self.position = position
        self.message = single_line


# ============================================================================
# Run State Errors
# ============================================================================


class RunStateError(ProtodocError):
    """Raised when a generator context is used out of order.

    A context accepts files until it is rendered, and renders exactly once.
    """

    pass
