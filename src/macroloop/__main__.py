"""macroloop CLI entry point."""

from macroloop.cli import app

if __name__ == "__main__":
    app()
