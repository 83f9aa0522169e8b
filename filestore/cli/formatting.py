"""Plain-text rendering of API records shared by both front ends."""

from typing import Any


def format_size(size_bytes: Any) -> str:
    """Format a byte count with thousands separators, e.g. '1,234 bytes'."""
    try:
        value = int(size_bytes)
    except (TypeError, ValueError):
        value = 0
    return f"{value:,} bytes"


def store_rows(stores: list[dict[str, Any]]) -> list[tuple[str, str]]:
    """(display name, resource name) pairs for a store listing."""
    return [(s.get("displayName", ""), s.get("name", "")) for s in stores]


def document_lines(document: dict[str, Any]) -> list[str]:
    """Detail lines for one document, as printed by list-documents."""
    return [
        f"  - Display Name: {document.get('displayName', '')}",
        f"    Name: {document.get('name', '')}",
        f"    State: {document.get('state', '')}",
        f"    MIME Type: {document.get('mimeType', '')}",
        f"    Size: {format_size(document.get('sizeBytes'))}",
        f"    Created: {document.get('createTime', '')}",
        f"    Updated: {document.get('updateTime', '')}",
    ]
