"""protodoc CLI commands."""
