"""Console listeners attached to every new session.

They only log: transfers at INFO (progress at DEBUG), repository events at
INFO, failures at WARNING. Nothing here feeds back into resolution.
"""

from __future__ import annotations

import logging
import time

from m2boot.listeners.events import (
    RepositoryEvent,
    RepositoryEventType,
    RequestType,
    TransferEvent,
)
from m2boot.listeners.hookspecs import hookimpl

logger = logging.getLogger(__name__)


def format_size(size: int) -> str:
    if size >= 1024:
        return f"{(size + 1023) // 1024} KB"
    return f"{size} B"


class ConsoleTransferListener:
    """Logs downloads/uploads with size and throughput."""

    def __init__(self) -> None:
        self._started: dict[str, float] = {}

    @hookimpl
    def transfer_initiated(self, event: TransferEvent) -> None:
        verb = "Uploading" if event.request_type is RequestType.PUT else "Downloading"
        self._started[event.resource_url] = time.perf_counter()
        logger.info("%s: %s", verb, event.resource_url)

    @hookimpl
    def transfer_progressed(self, event: TransferEvent) -> None:
        if event.content_length > 0:
            status = f"{format_size(event.transferred_bytes)}/{format_size(event.content_length)}"
        else:
            status = format_size(event.transferred_bytes)
        logger.debug("Progress %s: %s", event.resource_url, status)

    @hookimpl
    def transfer_succeeded(self, event: TransferEvent) -> None:
        started = self._completed(event)
        if event.content_length < 0:
            return
        verb = "Uploaded" if event.request_type is RequestType.PUT else "Downloaded"
        size = format_size(event.content_length)
        throughput = ""
        if started is not None:
            elapsed = time.perf_counter() - started
            if elapsed > 0:
                throughput = f" at {event.transferred_bytes / 1024.0 / elapsed:.1f} KB/sec"
        logger.info("%s: %s (%s%s)", verb, event.resource_url, size, throughput)

    @hookimpl
    def transfer_failed(self, event: TransferEvent) -> None:
        self._completed(event)
        logger.warning("Transfer failed: %s (%s)", event.resource_url, event.error)

    @hookimpl
    def transfer_corrupted(self, event: TransferEvent) -> None:
        logger.warning("Corrupted transfer: %s (%s)", event.resource_url, event.error)

    def _completed(self, event: TransferEvent) -> float | None:
        return self._started.pop(event.resource_url, None)


_REPOSITORY_MESSAGES: dict[RepositoryEventType, str] = {
    RepositoryEventType.ARTIFACT_DESCRIPTOR_INVALID: (
        "Invalid artifact descriptor for {artifact}: {error}"
    ),
    RepositoryEventType.ARTIFACT_DESCRIPTOR_MISSING: "Missing artifact descriptor for {artifact}",
    RepositoryEventType.METADATA_INVALID: "Invalid metadata {metadata}",
    RepositoryEventType.ARTIFACT_RESOLVING: "Resolving artifact {artifact}",
    RepositoryEventType.ARTIFACT_RESOLVED: "Resolved artifact {artifact} from {repository}",
    RepositoryEventType.METADATA_RESOLVING: "Resolving metadata {metadata} from {repository}",
    RepositoryEventType.METADATA_RESOLVED: "Resolved metadata {metadata} from {repository}",
    RepositoryEventType.ARTIFACT_DOWNLOADING: "Downloading artifact {artifact} from {repository}",
    RepositoryEventType.ARTIFACT_DOWNLOADED: "Downloaded artifact {artifact} from {repository}",
    RepositoryEventType.METADATA_DOWNLOADING: "Downloading metadata {metadata} from {repository}",
    RepositoryEventType.METADATA_DOWNLOADED: "Downloaded metadata {metadata} from {repository}",
    RepositoryEventType.ARTIFACT_INSTALLING: "Installing {artifact} to {file}",
    RepositoryEventType.ARTIFACT_INSTALLED: "Installed {artifact} to {file}",
    RepositoryEventType.METADATA_INSTALLING: "Installing {metadata} to {file}",
    RepositoryEventType.METADATA_INSTALLED: "Installed {metadata} to {file}",
    RepositoryEventType.ARTIFACT_DEPLOYING: "Deploying {artifact} to {repository}",
    RepositoryEventType.ARTIFACT_DEPLOYED: "Deployed {artifact} to {repository}",
    RepositoryEventType.METADATA_DEPLOYING: "Deploying {metadata} to {repository}",
    RepositoryEventType.METADATA_DEPLOYED: "Deployed {metadata} to {repository}",
}

_PROBLEM_EVENTS = frozenset(
    {
        RepositoryEventType.ARTIFACT_DESCRIPTOR_INVALID,
        RepositoryEventType.ARTIFACT_DESCRIPTOR_MISSING,
        RepositoryEventType.METADATA_INVALID,
    }
)


class ConsoleRepositoryListener:
    """Logs one line per repository event."""

    @hookimpl
    def repository_event(self, event: RepositoryEvent) -> None:
        message = _REPOSITORY_MESSAGES[event.type].format(**event.model_dump(exclude={"type"}))
        level = logging.WARNING if event.type in _PROBLEM_EVENTS else logging.INFO
        logger.log(level, "%s", message)
