#!/usr/bin/env python3
"""
File Store Manager.

Interactive menu for managing Gemini File Search stores and documents.
Built with Typer for option parsing and Rich for formatted output.

Usage:
    python manager.py                 # Prompts for the API key
    python manager.py --key <key>     # Use the given key
    python manager.py --debug         # Enable debug logging

Without --key, GEMINI_API_KEY from the environment or config/.env is
used; if that is empty too, the key is read from a hidden prompt.
"""

import sys
from pathlib import Path

import typer
from rich.console import Console

# Add project root to path for absolute imports
project_root = Path(__file__).resolve().parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from filestore.api.client import create_client
from filestore.core.config import get_app_config, resolve_api_key, validate_project_root
from filestore.core.logging import setup_logging

app = typer.Typer(
    name="manager",
    help="Gemini File Store Manager - interactive menu for stores and documents.",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()


def prompt_for_api_key() -> str:
    """Read the API key from a hidden prompt."""
    try:
        return console.input("Please enter your Gemini API Key: ", password=True).strip()
    except (EOFError, KeyboardInterrupt):
        console.print()
        return ""


@app.command()
def main(
    key: str | None = typer.Option(
        None,
        "--key",
        "-k",
        help="Gemini API key. Defaults to GEMINI_API_KEY, then a hidden prompt.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode (DEBUG level logging)",
    ),
) -> None:
    """
    Start the interactive File Store Manager.

    Lists, creates and deletes stores; lists, uploads and deletes documents.
    """
    validate_project_root()

    if debug:
        setup_logging(level="DEBUG")
        console.print("[dim]Debug mode enabled[/dim]")
    elif verbose:
        setup_logging(level="INFO")
    else:
        setup_logging()

    api_key = resolve_api_key(key) or prompt_for_api_key()
    if not api_key:
        console.print("[red]API Key not provided. Exiting.[/red]")
        raise typer.Exit(1)

    from filestore.cli.shell import run_shell

    app_config = get_app_config().application
    with create_client(api_key, source="shell") as client:
        run_shell(
            client,
            console=console,
            poll_interval=app_config.upload.interactive_poll_interval_seconds,
            selection_attempts=app_config.interactive.selection_attempts,
            clear_screen=app_config.interactive.clear_screen,
        )


if __name__ == "__main__":
    app()
