"""
Folder Upload Service.

Uploads every regular file of a local folder into a file store and
waits for each upload's long-running operation to finish.

Polling uses a fixed interval with no backoff and no timeout: it keeps
going until the operation reports done or the process is stopped.
A failure on one file is recorded in that file's result and the batch
moves on to the next file.

Both front ends share this module. Progress is reported through an
optional ``on_event`` callback so each front end can render it its own
way (click.echo for the one-shot CLI, Rich for the shell).

Usage:
    results = upload_folder(client, store["name"], "./docs", interval=2.0,
                            on_event=print_event)
    failed = [r for r in results if not r.success]
"""

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from filestore.api.client import FileStoreClient
from filestore.core.exceptions import ApplicationError, ValidationError
from filestore.core.logging import get_logger

logger = get_logger(__name__)


@dataclass
class UploadEvent:
    """Progress notification emitted while a folder is uploaded."""

    kind: str  # "uploading" | "processing" | "done" | "failed"
    path: Path
    operation_name: str | None = None
    error: str | None = None


@dataclass
class UploadResult:
    """Outcome of uploading a single file."""

    path: Path
    success: bool
    operation_name: str | None = None
    error: str | None = None
    polls: int = 0
    response: dict[str, Any] = field(default_factory=dict)


EventCallback = Callable[[UploadEvent], None]


def iter_folder_files(folder: str | Path) -> list[Path]:
    """
    List the regular files directly inside a folder, sorted by name.

    Sub-directories are not descended into.

    Raises:
        ValidationError: If the folder does not exist or is not a directory.
    """
    folder = Path(folder).expanduser()
    if not folder.is_dir():
        raise ValidationError(f"Folder '{folder}' not found.", details={"folder": str(folder)})
    return sorted((p.resolve() for p in folder.iterdir() if p.is_file()), key=lambda p: p.name)


def wait_for_operation(
    client: FileStoreClient,
    operation: dict[str, Any],
    interval: float,
    on_poll: Callable[[dict[str, Any]], None] | None = None,
    sleep: Callable[[float], None] | None = None,
) -> tuple[dict[str, Any], int]:
    """
    Poll an operation until ``done`` is true.

    Args:
        client: API client used to re-fetch the operation.
        operation: Operation as returned by the upload call; must have a name.
        interval: Seconds to sleep between polls.
        on_poll: Called with the current operation before every sleep.
        sleep: Sleep function, defaults to time.sleep.

    Returns:
        Tuple of (finished operation, number of polls made).
    """
    sleep = sleep or time.sleep
    name = operation["name"]
    polls = 0

    while not operation.get("done", False):
        if on_poll is not None:
            on_poll(operation)
        sleep(interval)
        operation = client.get_operation(name)
        polls += 1
        logger.debug("Operation polled", operation=name, polls=polls, done=operation.get("done", False))

    return operation, polls


def upload_one(
    client: FileStoreClient,
    store_name: str,
    path: Path,
    interval: float,
    on_event: EventCallback | None = None,
    sleep: Callable[[float], None] | None = None,
) -> UploadResult:
    """Upload a single file and wait for its operation. Never raises ApplicationError."""
    emit = on_event or (lambda event: None)
    emit(UploadEvent("uploading", path))

    try:
        operation = client.upload_file(store_name, path)
        name = operation.get("name")
        if not name:
            # No operation to track; surface what the service sent back
            error = f"Unexpected upload response: {operation}"
            emit(UploadEvent("failed", path, error=error))
            return UploadResult(path=path, success=False, error=error, response=operation)

        operation, polls = wait_for_operation(
            client,
            operation,
            interval,
            on_poll=lambda op: emit(UploadEvent("processing", path, operation_name=name)),
            sleep=sleep,
        )
    except (ApplicationError, OSError) as e:
        error = getattr(e, "message", None) or str(e)
        logger.warning("Upload failed", path=str(path), store=store_name, error=error)
        emit(UploadEvent("failed", path, error=error))
        return UploadResult(path=path, success=False, error=error)

    if "error" in operation:
        # The operation finished but the service reports a failure status
        error = f"Operation {name} failed: {operation['error']}"
        emit(UploadEvent("failed", path, operation_name=name, error=error))
        return UploadResult(
            path=path, success=False, operation_name=name, error=error,
            polls=polls, response=operation,
        )

    logger.info("File uploaded", path=str(path), store=store_name, operation=name, polls=polls)
    emit(UploadEvent("done", path, operation_name=name))
    return UploadResult(path=path, success=True, operation_name=name, polls=polls, response=operation)


def upload_folder(
    client: FileStoreClient,
    store_name: str,
    folder: str | Path,
    interval: float,
    on_event: EventCallback | None = None,
    sleep: Callable[[float], None] | None = None,
) -> list[UploadResult]:
    """
    Upload every regular file in ``folder`` to ``store_name``.

    Raises:
        ValidationError: If the folder does not exist.

    Returns:
        One UploadResult per file, in upload order.
    """
    files = iter_folder_files(folder)
    logger.info("Uploading folder", folder=str(folder), store=store_name, files=len(files))
    return [
        upload_one(client, store_name, path, interval, on_event=on_event, sleep=sleep)
        for path in files
    ]
