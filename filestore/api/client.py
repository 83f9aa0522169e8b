"""
HTTP Client for the Gemini File Search API.

Wraps the handful of REST calls the tool needs: file stores, their
documents, multipart uploads and long-running operations. The API key
is attached to every request as the ``key`` query parameter.

Responses are returned as plain dicts. Nothing is validated locally;
the service owns the shape of its records.

Usage:
    with create_client(api_key) as client:
        store = client.create_store("Docs")
        operation = client.upload_file(store["name"], "manual.pdf")
"""

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import httpx

from filestore.api.mime import guess_mime_type
from filestore.core.config import get_app_config
from filestore.core.exceptions import ExternalServiceError, FileStoreAPIError, NotFoundError
from filestore.core.logging import get_logger

logger = get_logger(__name__)

STORES_PATH = "/fileSearchStores"


class FileStoreClient:
    """
    Synchronous client for File Search stores, documents and operations.

    Features:
    - API key passed explicitly and sent as a query parameter
    - Non-2xx responses raise FileStoreAPIError with status and raw body
    - Transport failures raise ExternalServiceError
    - Structured logging of requests/responses

    Usage:
        client = FileStoreClient(api_key="...", base_url="https://.../v1beta",
                                 upload_base_url="https://.../upload/v1beta")
        stores = client.list_stores()
        client.close()
    """

    def __init__(
        self,
        api_key: str,
        base_url: str,
        upload_base_url: str,
        timeout: float = 60.0,
        transport: httpx.BaseTransport | None = None,
        source: str = "cli",
    ) -> None:
        """
        Initialize the client.

        Args:
            api_key: Gemini API key.
            base_url: REST base URL (…/v1beta).
            upload_base_url: Media upload base URL (…/upload/v1beta).
            timeout: Request timeout in seconds.
            transport: Optional httpx transport, used by tests.
            source: Log source recorded on every request record.
        """
        if not api_key:
            raise ValueError("api_key is required")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.upload_base_url = upload_base_url.rstrip("/")
        self.timeout = timeout
        self.source = source
        self._transport = transport
        self._client: httpx.Client | None = None

    def __enter__(self) -> "FileStoreClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _get_client(self) -> httpx.Client:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(
                base_url=self.base_url,
                timeout=self.timeout,
                params={"key": self.api_key},
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            self._client.close()
        self._client = None

    def request(self, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
        """
        Make an HTTP request and decode the JSON reply.

        Args:
            method: HTTP method (GET, POST, DELETE)
            url: Path relative to the REST base URL, or an absolute URL
            **kwargs: Additional arguments for httpx

        Returns:
            Decoded JSON body; an empty body decodes to {}.

        Raises:
            FileStoreAPIError: On any non-2xx status
            ExternalServiceError: On transport failure or an undecodable body
        """
        client = self._get_client()

        logger.debug("API request", source=self.source, method=method, url=url)

        try:
            response = client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error("API request failed", source=self.source, method=method, url=url, error=str(e))
            raise ExternalServiceError(f"Request to {url} failed: {e}") from e

        logger.debug(
            "API response", source=self.source, method=method, url=url, status_code=response.status_code,
        )

        if not response.is_success:
            raise FileStoreAPIError(response.status_code, response.text)

        if not response.content.strip():
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise ExternalServiceError(
                f"Invalid JSON from {url}: {response.text[:200]}"
            ) from e

    # -------------------------------------------------------------------------
    # File stores
    # -------------------------------------------------------------------------

    def list_stores(
        self,
        page_size: int | None = None,
        page_token: str | None = None,
    ) -> dict[str, Any]:
        """List file stores. Returns the raw page ({"fileSearchStores": [...], "nextPageToken": ...})."""
        return self.request("GET", STORES_PATH, params=_page_params(page_size, page_token))

    def iter_stores(self, page_size: int | None = None) -> Iterator[dict[str, Any]]:
        """Yield every file store, following nextPageToken."""
        yield from _paginate(
            lambda token: self.list_stores(page_size=page_size, page_token=token),
            "fileSearchStores",
        )

    def get_store_by_display_name(self, display_name: str) -> dict[str, Any] | None:
        """Return the first store whose displayName matches exactly, or None."""
        for store in self.iter_stores():
            if store.get("displayName") == display_name:
                return store
        return None

    def require_store(self, display_name: str) -> dict[str, Any]:
        """Like get_store_by_display_name, but raise NotFoundError when missing."""
        store = self.get_store_by_display_name(display_name)
        if store is None:
            raise NotFoundError(f"Storage '{display_name}' not found.")
        return store

    def create_store(self, display_name: str) -> dict[str, Any]:
        """Create a file store with the given display name."""
        return self.request("POST", STORES_PATH, json={"displayName": display_name})

    def delete_store(self, name: str, force: bool = True) -> None:
        """Delete a file store by resource name; force also removes its documents."""
        self.request("DELETE", f"/{name}", params=_force_params(force))

    # -------------------------------------------------------------------------
    # Documents
    # -------------------------------------------------------------------------

    def list_documents(
        self,
        store_name: str,
        page_size: int | None = None,
        page_token: str | None = None,
    ) -> dict[str, Any]:
        """List documents of a store. Returns the raw page ({"documents": [...], ...})."""
        return self.request(
            "GET", f"/{store_name}/documents", params=_page_params(page_size, page_token),
        )

    def iter_documents(self, store_name: str, page_size: int | None = None) -> Iterator[dict[str, Any]]:
        """Yield every document in a store, following nextPageToken."""
        yield from _paginate(
            lambda token: self.list_documents(store_name, page_size=page_size, page_token=token),
            "documents",
        )

    def delete_document(self, name: str, force: bool = True) -> None:
        """Delete a document by resource name (fileSearchStores/…/documents/…)."""
        self.request("DELETE", f"/{name}", params=_force_params(force))

    # -------------------------------------------------------------------------
    # Uploads and operations
    # -------------------------------------------------------------------------

    def upload_file(self, store_name: str, path: str | Path) -> dict[str, Any]:
        """
        Upload a local file into a store as multipart form data.

        Returns the long-running operation that tracks indexing.
        """
        path = Path(path)
        url = f"{self.upload_base_url}/{store_name}:uploadToFileSearchStore"
        mime_type = guess_mime_type(path)

        with path.open("rb") as fh:
            return self.request(
                "POST",
                url,
                files={"file": (path.name, fh, mime_type)},
            )

    def get_operation(self, name: str) -> dict[str, Any]:
        """Fetch a long-running operation by resource name."""
        return self.request("GET", f"/{name}")


def _page_params(page_size: int | None, page_token: str | None) -> dict[str, Any]:
    params: dict[str, Any] = {}
    if page_size is not None:
        params["pageSize"] = page_size
    if page_token:
        params["pageToken"] = page_token
    return params


def _force_params(force: bool) -> dict[str, str]:
    return {"force": "true"} if force else {}


def _paginate(fetch, items_key: str) -> Iterator[dict[str, Any]]:
    token: str | None = None
    while True:
        page = fetch(token)
        yield from page.get(items_key) or []
        token = page.get("nextPageToken")
        if not token:
            return


def create_client(
    api_key: str,
    source: str = "cli",
    transport: httpx.BaseTransport | None = None,
) -> FileStoreClient:
    """Build a client with endpoints and timeout from application.yaml."""
    api = get_app_config().application.api
    return FileStoreClient(
        api_key=api_key,
        base_url=api.base_url,
        upload_base_url=api.upload_base_url,
        timeout=api.timeout_seconds,
        transport=transport,
        source=source,
    )
