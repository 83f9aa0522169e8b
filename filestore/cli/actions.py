"""
One-Shot Actions.

Handlers behind ``cli.py --action=...``. Each handler prints
human-readable output with click.echo, catches application errors at
the call site, and exits with status 1 on failure.
"""

import sys
from pathlib import Path

import click

from filestore.api.client import FileStoreClient
from filestore.cli.formatting import document_lines, store_rows
from filestore.core.exceptions import ApplicationError, NotFoundError
from filestore.core.logging import get_logger
from filestore.services.upload import UploadEvent, upload_folder

logger = get_logger(__name__)

ACTIONS = ("list", "delete", "upload", "create", "list-documents", "delete-document")

USAGE = {
    "list": "python cli.py --action=list",
    "delete": "python cli.py --action=delete --storage-name=<name>",
    "upload": "python cli.py --action=upload --storage-name=<name> --folder=<path>",
    "create": "python cli.py --action=create --storage-name=<name>",
    "list-documents": "python cli.py --action=list-documents --storage-name=<name>",
    "delete-document": "python cli.py --action=delete-document --storage-name=<document-name>",
}


def usage_text() -> str:
    """Available actions followed by one usage line per action."""
    lines = [f"Available actions: {', '.join(ACTIONS)}", "Usage:"]
    lines.extend(f"  {USAGE[action]}" for action in ACTIONS)
    return "\n".join(lines)


def fail(message: str) -> None:
    """Print an error message and exit with status 1."""
    click.echo(click.style(message, fg="red"))
    sys.exit(1)


def require(action: str, **values: str | None) -> None:
    """Exit with the action's usage line when a required argument is missing."""
    missing = [name for name, value in values.items() if not value]
    if missing:
        logger.debug("Missing arguments", action=action, missing=missing)
        fail(f"Usage: {USAGE[action]}")


def list_stores(client: FileStoreClient) -> None:
    """Print every file store as a two-column table."""
    click.echo("Listing file storages...")
    try:
        stores = list(client.iter_stores())
    except ApplicationError as e:
        fail(f"Error listing storages: {e.message}")
        return

    if not stores:
        click.echo("No file stores found.")
        return

    click.echo(f"{'Display Name':<35} | ID (name)")
    click.echo("-" * 80)
    for display_name, name in store_rows(stores):
        click.echo(f"{display_name:<35} | {name}")


def create_store(client: FileStoreClient, storage_name: str | None) -> None:
    """Create a store named ``storage_name``."""
    require("create", storage_name=storage_name)
    click.echo(f"Creating storage '{storage_name}'...")
    try:
        store = client.create_store(storage_name)
    except ApplicationError as e:
        fail(f"Error creating storage: {e.message}")
        return

    if "name" not in store:
        fail(f"Error creating storage '{storage_name}'. Response: {store}")
        return
    click.echo(f"Storage '{storage_name}' created successfully with name: {store['name']}")


def delete_store(client: FileStoreClient, storage_name: str | None) -> None:
    """Delete the store whose display name is ``storage_name``."""
    require("delete", storage_name=storage_name)
    click.echo(f"Deleting storage '{storage_name}'...")
    try:
        store = client.get_store_by_display_name(storage_name)
        if store is None:
            click.echo(f"Storage '{storage_name}' not found.")
            return
        client.delete_store(store["name"])
    except ApplicationError as e:
        fail(f"Error deleting storage: {e.message}")
        return
    click.echo(f"Storage '{storage_name}' deleted successfully.")


def _echo_upload_event(event: UploadEvent) -> None:
    if event.kind == "uploading":
        click.echo(f"Uploading {event.path}...")
    elif event.kind == "processing":
        click.echo(f"Processing... (operation: {event.operation_name})")
    elif event.kind == "done":
        click.echo(f"File {event.path} uploaded successfully.")
    elif event.kind == "failed":
        click.echo(click.style(f"Error uploading {event.path}: {event.error}", fg="red"))


def upload(
    client: FileStoreClient,
    storage_name: str | None,
    folder: str | None,
    poll_interval: float,
) -> None:
    """Upload every file in ``folder`` to the store named ``storage_name``."""
    require("upload", storage_name=storage_name, folder=folder)
    if not Path(folder).expanduser().is_dir():
        fail(f"Error: Folder '{folder}' not found.")
        return
    click.echo(f"Uploading files from '{folder}' to '{storage_name}'...")
    try:
        store = client.require_store(storage_name)
        results = upload_folder(
            client, store["name"], folder, poll_interval, on_event=_echo_upload_event,
        )
    except NotFoundError as e:
        fail(f"Error: {e.message}")
        return
    except ApplicationError as e:
        fail(f"Error during upload: {e.message}")
        return

    if not results:
        click.echo(f"No files found in '{folder}'.")
        return

    succeeded = sum(1 for r in results if r.success)
    click.echo(f"Uploaded {succeeded} of {len(results)} file(s).")
    if succeeded < len(results):
        sys.exit(1)


def list_documents(client: FileStoreClient, storage_name: str | None) -> None:
    """Print the documents of the store named ``storage_name``."""
    require("list-documents", storage_name=storage_name)
    click.echo(f"Listing documents in storage '{storage_name}'...")
    try:
        store = client.require_store(storage_name)
        documents = list(client.iter_documents(store["name"]))
    except NotFoundError as e:
        fail(f"Error: {e.message}")
        return
    except ApplicationError as e:
        fail(f"Error listing documents: {e.message}")
        return

    if not documents:
        click.echo(f"No documents found in storage '{storage_name}'.")
        return

    click.echo(f"Found {len(documents)} document(s):\n")
    for document in documents:
        for line in document_lines(document):
            click.echo(line)
        click.echo()


def delete_document(client: FileStoreClient, document_name: str | None) -> None:
    """Delete a document by its full resource name."""
    require("delete-document", storage_name=document_name)
    click.echo(f"Deleting document '{document_name}'...")
    try:
        client.delete_document(document_name)
    except ApplicationError as e:
        fail(f"Error deleting document: {e.message}")
        return
    click.echo(f"Document '{document_name}' deleted successfully.")
