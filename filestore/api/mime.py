"""
MIME type lookup for uploads.

The File Search API needs an explicit content type on the multipart part.
Types come from a static table keyed by file extension.
"""

from pathlib import Path

DEFAULT_MIME_TYPE = "application/octet-stream"

MIME_TYPES: dict[str, str] = {
    "pdf": "application/pdf",
    "txt": "text/plain",
    "md": "text/markdown",
    "markdown": "text/markdown",
    "html": "text/html",
    "htm": "text/html",
    "json": "application/json",
    "xml": "application/xml",
    "csv": "text/csv",
    "doc": "application/msword",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "xls": "application/vnd.ms-excel",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "ppt": "application/vnd.ms-powerpoint",
    "pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
}


def guess_mime_type(path: str | Path) -> str:
    """Return the MIME type for a file path, case-insensitive on the extension."""
    extension = Path(path).suffix.lower().lstrip(".")
    return MIME_TYPES.get(extension, DEFAULT_MIME_TYPE)
