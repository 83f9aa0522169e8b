"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

HTTP is never sent over the network: FakeFileSearchService implements
the handful of File Search endpoints in memory and is mounted into
the client through httpx.MockTransport.
"""

import json
import logging
import re
from collections.abc import Generator
from typing import Any

import httpx
import pytest

from filestore.api.client import FileStoreClient
from filestore.core.config import get_app_config, get_settings

API_KEY = "test-api-key"
BASE_URL = "https://files.test/v1beta"
UPLOAD_BASE_URL = "https://files.test/upload/v1beta"


class FakeFileSearchService:
    """
    In-memory stand-in for the File Search REST API.

    Attributes:
        stores: Store records keyed by resource name.
        documents: Document records per store resource name.
        operations: Operation records keyed by resource name.
        requests: Every request received, in order.
        polls_until_done: Operation GETs answered with done=false before done=true.
        fail_next: Optional (status, body) returned for the next request.
    """

    def __init__(self, api_key: str = API_KEY, polls_until_done: int = 1) -> None:
        self.api_key = api_key
        self.polls_until_done = polls_until_done
        self.stores: dict[str, dict[str, Any]] = {}
        self.documents: dict[str, list[dict[str, Any]]] = {}
        self.operations: dict[str, dict[str, Any]] = {}
        self.requests: list[httpx.Request] = []
        self.fail_next: tuple[int, str] | None = None
        self._counter = 0

    # ------------------------------------------------------------------
    # Helpers for tests
    # ------------------------------------------------------------------

    def add_store(self, display_name: str) -> dict[str, Any]:
        self._counter += 1
        name = f"fileSearchStores/store-{self._counter}"
        store = {"name": name, "displayName": display_name, "createTime": "2025-01-01T00:00:00Z"}
        self.stores[name] = store
        self.documents[name] = []
        return store

    def add_document(self, store_name: str, display_name: str, size: int = 1024) -> dict[str, Any]:
        self._counter += 1
        doc = {
            "name": f"{store_name}/documents/doc-{self._counter}",
            "displayName": display_name,
            "mimeType": "text/plain",
            "sizeBytes": str(size),
            "state": "STATE_ACTIVE",
            "createTime": "2025-01-01T00:00:00Z",
            "updateTime": "2025-01-02T00:00:00Z",
        }
        self.documents[store_name].append(doc)
        return doc

    def calls(self, method: str, pattern: str) -> list[httpx.Request]:
        return [
            r for r in self.requests
            if r.method == method and re.search(pattern, r.url.path)
        ]

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    # ------------------------------------------------------------------
    # Request handling
    # ------------------------------------------------------------------

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.url.params.get("key") != self.api_key:
            return httpx.Response(403, json={"error": {"code": 403, "message": "API key not valid"}})

        if self.fail_next is not None:
            status, body = self.fail_next
            self.fail_next = None
            return httpx.Response(status, text=body)

        path = request.url.path
        method = request.method

        if path.startswith("/upload/v1beta/") and path.endswith(":uploadToFileSearchStore"):
            store_name = path[len("/upload/v1beta/"):-len(":uploadToFileSearchStore")]
            return self._upload(store_name, request)

        if not path.startswith("/v1beta/"):
            return httpx.Response(404, text="not found")
        resource = path[len("/v1beta/"):]

        if resource == "fileSearchStores":
            if method == "GET":
                return self._list(list(self.stores.values()), "fileSearchStores", request)
            if method == "POST":
                payload = json.loads(request.content)
                return httpx.Response(200, json=self.add_store(payload["displayName"]))

        if resource in self.stores:
            if method == "DELETE":
                del self.stores[resource]
                self.documents.pop(resource, None)
                return httpx.Response(200, json={})
            if method == "GET":
                return httpx.Response(200, json=self.stores[resource])

        if resource.endswith("/documents") and method == "GET":
            store_name = resource[: -len("/documents")]
            if store_name not in self.stores:
                return httpx.Response(404, text=f"store {store_name} not found")
            return self._list(self.documents[store_name], "documents", request)

        if "/documents/" in resource and method == "DELETE":
            store_name = resource.split("/documents/")[0]
            docs = self.documents.get(store_name, [])
            for doc in docs:
                if doc["name"] == resource:
                    docs.remove(doc)
                    return httpx.Response(200, json={})
            return httpx.Response(404, text=f"document {resource} not found")

        if resource in self.operations and method == "GET":
            operation = self.operations[resource]
            operation["_polls"] += 1
            body = {"name": resource, "done": operation["_polls"] >= self.polls_until_done}
            if body["done"]:
                body["response"] = {"documentName": operation["document"]}
            return httpx.Response(200, json=body)

        return httpx.Response(404, text=f"no route for {method} {path}")

    def _list(self, items: list[dict[str, Any]], key: str, request: httpx.Request) -> httpx.Response:
        if not items:
            return httpx.Response(200, json={})
        page_size = int(request.url.params.get("pageSize", 0) or 0)
        start = int(request.url.params.get("pageToken", 0) or 0)
        if not page_size:
            return httpx.Response(200, json={key: items})
        page = items[start:start + page_size]
        body: dict[str, Any] = {key: page}
        if start + page_size < len(items):
            body["nextPageToken"] = str(start + page_size)
        return httpx.Response(200, json=body)

    def _upload(self, store_name: str, request: httpx.Request) -> httpx.Response:
        if store_name not in self.stores:
            return httpx.Response(404, text=f"store {store_name} not found")
        filename = _multipart_filename(request.content)
        document = self.add_document(store_name, filename or "upload", size=len(request.content))
        self._counter += 1
        op_name = f"{store_name}/upload/operations/op-{self._counter}"
        self.operations[op_name] = {"_polls": 0, "document": document["name"]}
        return httpx.Response(200, json={"name": op_name, "done": self.polls_until_done == 0})


def _multipart_filename(content: bytes) -> str | None:
    match = re.search(rb'filename="([^"]+)"', content)
    return match.group(1).decode() if match else None


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def _clear_config_cache(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Fresh config per test and no API key leaking in from the environment."""
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    get_settings.cache_clear()
    get_app_config.cache_clear()
    yield
    get_settings.cache_clear()
    get_app_config.cache_clear()


@pytest.fixture
def fake_service() -> FakeFileSearchService:
    """In-memory File Search API."""
    return FakeFileSearchService()


@pytest.fixture
def client(fake_service: FakeFileSearchService) -> Generator[FileStoreClient, None, None]:
    """FileStoreClient wired to the fake service."""
    api_client = FileStoreClient(
        api_key=API_KEY,
        base_url=BASE_URL,
        upload_base_url=UPLOAD_BASE_URL,
        timeout=5.0,
        transport=fake_service.transport,
    )
    yield api_client
    api_client.close()


@pytest.fixture
def no_sleep(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    """Replace time.sleep with a recorder so polling tests run instantly."""
    slept: list[float] = []
    monkeypatch.setattr("time.sleep", slept.append)
    return slept


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Generator[None, None, None]:
    """Entry points reconfigure the root logger; put it back after each test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
