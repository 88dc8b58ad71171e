# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.16
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/gittfs/cli/main.py

"""
Process entry point for git-tfs.

The typer app accepts any argument list untouched and hands it to the
dispatcher, which resolves the command itself; this lets command names
appear after global options (``git tfs -i other pull``). Errors become a
message and a non-zero exit code here and nowhere else.
"""

# Standard library imports
from typing import Optional, Sequence

# Third-party imports
import typer
from rich.console import Console

# Local imports
from gittfs.cli.dispatcher import GitTfs
from gittfs.cli.utils import handle_fatal_error
from gittfs.config.manager import load_merged_user_config
from gittfs.system.exceptions import GitTfsError
from gittfs.system.logging_setup import setup_logging

app = typer.Typer(add_completion=False)


def run_cli(argv: Sequence[str], console: Optional[Console] = None) -> int:
    """Run git-tfs with argv (without the program name); return the exit code."""
    console = console or Console()
    try:
        user_config = load_merged_user_config()
    except GitTfsError as e:
        return handle_fatal_error(console, e)

    setup_logging(user_config=user_config)
    git_tfs = GitTfs(console=console, user_config=user_config)
    try:
        return int(git_tfs.run(list(argv)))
    except Exception as e:
        return handle_fatal_error(console, e)


@app.command(
    context_settings={
        "allow_extra_args": True,
        "ignore_unknown_options": True,
        "help_option_names": [],
    }
)
def git_tfs(ctx: typer.Context) -> None:
    """git-tfs - bridge between git and Team Foundation Server."""
    raise typer.Exit(run_cli(ctx.args))


def main() -> None:  # pragma: no cover - entry point
    """Entry point for the git-tfs CLI application."""
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
