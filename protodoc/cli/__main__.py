#!/usr/bin/env python3
"""Entry point for the protodoc CLI when run as python -m protodoc.cli."""

if __name__ == "__main__":
    from protodoc.cli.main import main

    main()
