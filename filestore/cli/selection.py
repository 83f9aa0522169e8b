"""
Numbered Selection Helper.

Prints a 1-based numbered list with a cancel option and reads the
user's choice. Used by the interactive shell to pick stores and
documents.
"""

from collections.abc import Callable
from typing import Any

from rich.console import Console
from rich.markup import escape

CANCEL = 0


def parse_choice(raw: str, count: int) -> int | None:
    """
    Parse a menu answer.

    Returns the chosen number (0 meaning cancel), or None when the answer
    is not an integer in 0..count.
    """
    raw = raw.strip()
    try:
        choice = int(raw)
    except ValueError:
        return None
    if choice < CANCEL or choice > count:
        return None
    return choice


def select_item(
    prompt: str,
    items: list[dict[str, Any]],
    ask: Callable[[str], str],
    console: Console,
    display_key: str = "displayName",
    max_attempts: int | None = 3,
) -> dict[str, Any] | None:
    """
    Let the user pick one item by number.

    Args:
        prompt: Heading shown above the list.
        items: Records to choose from.
        ask: Reads one line of input given a prompt.
        console: Where the list and messages are printed.
        display_key: Record field shown for each entry; falls back to "name".
        max_attempts: Invalid answers tolerated before giving up; None retries forever.

    Returns:
        The selected item, or None on cancel, empty list, EOF or too many
        invalid answers.
    """
    if not items:
        console.print("No items found to select.")
        return None

    console.print(prompt)
    for index, item in enumerate(items, start=1):
        label = item.get(display_key) or item.get("name", "")
        console.print(f"  [{index}] {escape(str(label))}")
    console.print(f"  [{CANCEL}] Cancel")

    attempts = 0
    while max_attempts is None or attempts < max_attempts:
        try:
            raw = ask("Your choice: ")
        except EOFError:
            return None

        choice = parse_choice(raw, len(items))
        if choice is None:
            attempts += 1
            console.print("[red]Invalid input. Please enter a number from the list.[/red]")
            continue
        if choice == CANCEL:
            console.print("Operation cancelled.")
            return None
        return items[choice - 1]

    console.print("Too many invalid answers. Operation cancelled.")
    return None
