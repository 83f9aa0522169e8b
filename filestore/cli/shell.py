"""
Interactive Shell Mode.

Numbered-menu shell for managing file stores and their documents.
Uses Rich for output formatting and basic input handling.

Every handler may raise ApplicationError; the loop catches it, prints
it in an error panel and shows the menu again.
"""

from collections.abc import Callable
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table

from filestore.api.client import FileStoreClient
from filestore.cli.formatting import format_size
from filestore.cli.selection import select_item
from filestore.core.exceptions import ApplicationError
from filestore.core.logging import get_logger
from filestore.services.upload import UploadEvent, upload_folder

logger = get_logger(__name__)

MENU = (
    ("1", "List all File Stores"),
    ("2", "Create a new File Store"),
    ("3", "Delete a File Store"),
    ("4", "List Documents in a Store"),
    ("5", "Upload Files to a Store"),
    ("6", "Delete a Document from a Store"),
    ("q", "Quit"),
)


class InteractiveShell:
    """
    Menu-driven shell over a FileStoreClient.

    Usage:
        with create_client(api_key, source="shell") as client:
            InteractiveShell(client).run()
    """

    def __init__(
        self,
        client: FileStoreClient,
        console: Console | None = None,
        ask: Callable[[str], str] | None = None,
        poll_interval: float = 3.0,
        selection_attempts: int | None = 3,
        clear_screen: bool = True,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        """
        Initialize the interactive shell.

        Args:
            client: API client used by every handler.
            console: Rich console for output; a new one by default.
            ask: Reads a line of input given a prompt; defaults to console.input.
            poll_interval: Seconds between upload operation polls.
            selection_attempts: Invalid answers tolerated by the numbered selector.
            clear_screen: Clear the terminal between screens.
            sleep: Sleep function used while polling; time.sleep by default.
        """
        self.client = client
        self.console = console or Console()
        self.ask = ask or self.console.input
        self.poll_interval = poll_interval
        self.selection_attempts = selection_attempts
        self.clear_screen = clear_screen
        self.sleep = sleep
        self.running = False
        self.handlers: dict[str, Callable[[], None]] = {
            "1": self.handle_list_stores,
            "2": self.handle_create_store,
            "3": self.handle_delete_store,
            "4": self.handle_list_documents,
            "5": self.handle_upload_files,
            "6": self.handle_delete_document,
        }

    def run(self) -> None:
        """Run the menu loop until the user quits or input ends."""
        self.running = True
        self._clear()

        while self.running:
            self.display_menu()
            try:
                choice = self.ask("Enter your choice: ").strip().lower()
            except (EOFError, KeyboardInterrupt):
                self.console.print()
                break

            self._clear()
            if choice == "q":
                self.running = False
                break

            self.dispatch(choice)

            try:
                self.ask("\nPress Enter to continue...")
            except (EOFError, KeyboardInterrupt):
                break
            self._clear()

        self.console.print("[dim]Goodbye![/dim]")

    def dispatch(self, choice: str) -> None:
        """Run the handler for a menu choice, reporting any application error."""
        handler = self.handlers.get(choice)
        if handler is None:
            self.console.print("[red]Invalid choice. Please try again.[/red]")
            return

        logger.debug("Menu choice", source="shell", choice=choice)
        try:
            handler()
        except ApplicationError as e:
            logger.warning("Action failed", source="shell", choice=choice, error=e.message)
            self.console.print(Panel(
                escape(e.message),
                title="An error occurred",
                border_style="red",
            ))

    def display_menu(self) -> None:
        """Print the numbered main menu."""
        lines = []
        for key, label in MENU:
            if key in ("4", "q"):
                lines.append("[dim]" + "-" * 41 + "[/dim]")
            lines.append(f"[cyan]{key}.[/cyan] {label}")
        self.console.print(Panel("\n".join(lines), title="Gemini File Store Manager"))

    # -------------------------------------------------------------------------
    # Action handlers
    # -------------------------------------------------------------------------

    def handle_list_stores(self) -> None:
        """Show every store with its display name and resource name."""
        self.console.print("Fetching File Stores...\n")
        stores = list(self.client.iter_stores())
        if not stores:
            self.console.print("No File Stores found.")
            return

        table = Table(title="Available File Stores", show_header=True)
        table.add_column("Display Name", style="cyan")
        table.add_column("ID (name)")
        for store in stores:
            table.add_row(escape(store.get("displayName", "")), escape(store.get("name", "")))
        self.console.print(table)

    def handle_create_store(self) -> None:
        """Prompt for a display name and create the store."""
        self.console.print("[bold]Create a New File Store[/bold]")
        display_name = self._prompt("Enter a display name for the new store: ")
        if not display_name:
            self.console.print("[red]Name cannot be empty.[/red]")
            return

        self.console.print(f"Creating store '{escape(display_name)}'...")
        result = self.client.create_store(display_name)
        self.console.print(f"[green]Success! Store created with ID: {escape(result.get('name', ''))}[/green]")

    def handle_delete_store(self) -> None:
        """Pick a store and delete it after confirmation."""
        self.console.print("[bold]Delete a File Store[/bold]")
        store = self.select_store("Select a store to DELETE:")
        if store is None:
            return

        label = store.get("displayName") or store["name"]
        if not self.confirm(f"Are you sure you want to permanently delete '{label}'? [y/n]: "):
            self.console.print("Operation cancelled.")
            return

        self.client.delete_store(store["name"])
        self.console.print(f"[green]Store '{escape(label)}' has been deleted.[/green]")

    def handle_list_documents(self) -> None:
        """Pick a store and show its documents."""
        self.console.print("[bold]List Documents in a Store[/bold]")
        store = self.select_store("Select a store to view its documents:")
        if store is None:
            return

        label = escape(store.get("displayName") or store["name"])
        documents = list(self.client.iter_documents(store["name"]))
        if not documents:
            self.console.print(f"This store ('{label}') contains no documents.")
            return

        self.console.print(f"Documents in '{label}':")
        for doc in documents:
            self.console.print(Rule(style="dim"))
            self.console.print(f"  Name: {escape(doc.get('displayName', ''))}")
            self.console.print(f"    ID: {escape(doc.get('name', ''))}")
            self.console.print(f"    Type: {escape(doc.get('mimeType', ''))}")
            self.console.print(f"    Size: {format_size(doc.get('sizeBytes'))}")
        self.console.print(Rule(style="dim"))

    def handle_upload_files(self) -> None:
        """Pick a store, ask for a folder and upload every file in it."""
        self.console.print("[bold]Upload Files to a Store[/bold]")
        store = self.select_store("Select a destination store for your files:")
        if store is None:
            return

        folder = self._prompt("Enter the full path to the folder with your files: ")
        if not folder or not Path(folder).expanduser().is_dir():
            self.console.print(f"[red]Error: Folder '{escape(folder)}' not found.[/red]")
            return

        results = upload_folder(
            self.client,
            store["name"],
            folder,
            self.poll_interval,
            on_event=self._print_upload_event,
            sleep=self.sleep,
        )
        if not results:
            self.console.print(f"No files found in '{escape(folder)}'.")
            return

        succeeded = sum(1 for r in results if r.success)
        colour = "green" if succeeded == len(results) else "yellow"
        self.console.print(f"\n[{colour}]Uploaded {succeeded} of {len(results)} file(s).[/{colour}]")

    def handle_delete_document(self) -> None:
        """Pick a store, then a document in it, and delete it after confirmation."""
        self.console.print("[bold]Delete a Document from a Store[/bold]")
        store = self.select_store("First, select the store containing the document:")
        if store is None:
            return

        document = self.select_document(store, "Now, select the document to DELETE:")
        if document is None:
            return

        label = document.get("displayName") or document["name"]
        if not self.confirm(f"Are you sure you want to permanently delete '{label}'? [y/n]: "):
            self.console.print("Operation cancelled.")
            return

        self.client.delete_document(document["name"])
        self.console.print(f"[green]Document '{escape(label)}' has been deleted.[/green]")

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def select_store(self, prompt: str) -> dict[str, Any] | None:
        """Let the user pick a store by number."""
        stores = list(self.client.iter_stores())
        return self._select(prompt, stores)

    def select_document(self, store: dict[str, Any], prompt: str) -> dict[str, Any] | None:
        """Let the user pick a document of ``store`` by number."""
        documents = list(self.client.iter_documents(store["name"]))
        return self._select(prompt, documents)

    def _select(self, prompt: str, items: list[dict[str, Any]]) -> dict[str, Any] | None:
        return select_item(
            prompt,
            items,
            ask=self.ask,
            console=self.console,
            max_attempts=self.selection_attempts,
        )

    def confirm(self, prompt: str) -> bool:
        """Ask a y/n question; only 'y' confirms."""
        return self._prompt(escape(prompt)).lower() == "y"

    def _prompt(self, prompt: str) -> str:
        """Read one stripped answer; end of input reads as an empty answer."""
        try:
            return self.ask(prompt).strip()
        except EOFError:
            return ""

    def _print_upload_event(self, event: UploadEvent) -> None:
        path = escape(str(event.path))
        if event.kind == "uploading":
            self.console.print(f"\nUploading: {path}...")
        elif event.kind == "processing":
            self.console.print(f"[dim]Processing... (operation: {escape(event.operation_name or '')})[/dim]")
        elif event.kind == "done":
            self.console.print("[green]File uploaded successfully.[/green]")
        elif event.kind == "failed":
            self.console.print(f"[red]Error uploading {path}: {escape(event.error or '')}[/red]")

    def _clear(self) -> None:
        if self.clear_screen:
            self.console.clear()


def run_shell(client: FileStoreClient, **kwargs: Any) -> None:
    """Run the interactive shell."""
    InteractiveShell(client, **kwargs).run()
