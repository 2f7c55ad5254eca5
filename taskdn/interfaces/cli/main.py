"""Entry point for the taskdn CLI.

Usage:
    python -m taskdn.interfaces.cli.main

Or via installed entry point:
    taskdn <command>
"""

from taskdn.interfaces.cli import app


def main() -> None:
    """Run the taskdn CLI application."""
    app()


if __name__ == "__main__":
    main()
