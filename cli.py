#!/usr/bin/env python3
"""
File Store CLI.

One-shot command-line client for Gemini File Search stores.
Use --action to select what to run.

Usage:
    python cli.py --help
    python cli.py --action=list
    python cli.py --action=create --storage-name=Docs
    python cli.py --action=delete --storage-name=Docs
    python cli.py --action=upload --storage-name=Docs --folder=./manuals
    python cli.py --action=list-documents --storage-name=Docs
    python cli.py --action=delete-document --storage-name=fileSearchStores/abc/documents/xyz

The API key comes from --key, or from GEMINI_API_KEY in the environment
or config/.env.
"""

import sys
from pathlib import Path

import click
import structlog

PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from filestore.api.client import create_client
from filestore.cli import actions
from filestore.core.config import get_app_config, resolve_api_key, validate_project_root
from filestore.core.logging import get_logger, setup_logging


@click.command()
@click.option(
    "--action", "-a",
    type=click.Choice(list(actions.ACTIONS)),
    default=None,
    help="Action to run.",
)
@click.option(
    "--storage-name",
    default=None,
    help="Store display name; for delete-document, the document resource name.",
)
@click.option(
    "--folder",
    default=None,
    type=click.Path(file_okay=False),
    help="Folder whose files are uploaded (upload only).",
)
@click.option(
    "--key",
    default=None,
    help="Gemini API key. Defaults to GEMINI_API_KEY.",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output (INFO level logging).",
)
@click.option(
    "--debug", "-d",
    is_flag=True,
    help="Enable debug output (DEBUG level logging).",
)
def main(
    action: str | None,
    storage_name: str | None,
    folder: str | None,
    key: str | None,
    verbose: bool,
    debug: bool,
) -> None:
    """
    Gemini File Store CLI.

    Use --action to choose what to run against the File Search API.

    \b
    Examples:
        python cli.py --action=list
        python cli.py --action=create --storage-name=Docs
        python cli.py --action=upload --storage-name=Docs --folder=./manuals
        python cli.py --action=list-documents --storage-name=Docs --debug
    """
    validate_project_root()

    if debug:
        log_level = "DEBUG"
    elif verbose:
        log_level = "INFO"
    else:
        log_level = "WARNING"

    setup_logging(level=log_level)

    structlog.contextvars.bind_contextvars(source="cli")

    logger = get_logger(__name__)

    logger.debug("CLI invoked", action=action, log_level=log_level)

    if action is None:
        click.echo("Invalid action. " + actions.usage_text())
        sys.exit(1)

    api_key = resolve_api_key(key)
    if not api_key:
        actions.fail("Error: API key not provided. Pass --key or set GEMINI_API_KEY.")

    poll_interval = get_app_config().application.upload.poll_interval_seconds

    with create_client(api_key, source="cli") as client:
        if action == "list":
            actions.list_stores(client)
        elif action == "create":
            actions.create_store(client, storage_name)
        elif action == "delete":
            actions.delete_store(client, storage_name)
        elif action == "upload":
            actions.upload(client, storage_name, folder, poll_interval)
        elif action == "list-documents":
            actions.list_documents(client, storage_name)
        elif action == "delete-document":
            actions.delete_document(client, storage_name)


if __name__ == "__main__":
    main()
