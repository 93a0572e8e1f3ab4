"""Entry point for running protodoc as a module.

- python -m protodoc [CLI command]
- python -m protodoc --plugin (act as protoc plugin on stdin/stdout)
"""

from __future__ import annotations

import sys


def main() -> None:
    """Main entry point for module execution."""
    if "--plugin" in sys.argv:
        from protodoc.plugin import main as plugin_main

        plugin_main()
    else:
        from protodoc.cli.main import main as cli_main

        cli_main()


if __name__ == "__main__":
    main()
