"""protodoc command line interface."""

from protodoc.cli.main import app, main

__all__ = ["app", "main"]
