"""
overlay-build - copy a package's src/ into dist/ and overlay shared configs.

Usage:
    overlay-build [--pkg <path>] [--dry-run] [--verbose]
"""

import typer

from overlay_build.cli.commands import build as build_command

__version__ = "0.1.0"

app = typer.Typer(
    name="overlay-build",
    help="Copy src/ into dist/ and overlay configs declared in build.json",
    add_completion=False,
)
app.command(context_settings={"help_option_names": ["-h", "--help"]})(build_command)


def main():
    app()


if __name__ == "__main__":
    main()
