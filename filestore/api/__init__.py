"""
API Client Module.

Provides the HTTP client for the Gemini File Search API.
"""

from filestore.api.client import FileStoreClient, create_client
from filestore.api.mime import guess_mime_type

__all__ = ["FileStoreClient", "create_client", "guess_mime_type"]
