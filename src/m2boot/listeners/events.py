"""Event payloads passed to transfer and repository listener hooks."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel


class TransferEventType(StrEnum):
    INITIATED = "initiated"
    STARTED = "started"
    PROGRESSED = "progressed"
    CORRUPTED = "corrupted"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class RequestType(StrEnum):
    GET = "get"
    GET_EXISTENCE = "get_existence"
    PUT = "put"


class TransferEvent(BaseModel):
    """State of one resource transfer.

    ``content_length`` is -1 when the remote side did not announce a size.
    """

    model_config = {"frozen": True}

    type: TransferEventType
    request_type: RequestType = RequestType.GET
    repository_url: str
    resource_name: str
    content_length: int = -1
    transferred_bytes: int = 0
    data_length: int = 0
    error: str | None = None

    @property
    def resource_url(self) -> str:
        return self.repository_url.rstrip("/") + "/" + self.resource_name


class RepositoryEventType(StrEnum):
    ARTIFACT_DESCRIPTOR_INVALID = "artifact_descriptor_invalid"
    ARTIFACT_DESCRIPTOR_MISSING = "artifact_descriptor_missing"
    METADATA_INVALID = "metadata_invalid"
    ARTIFACT_RESOLVING = "artifact_resolving"
    ARTIFACT_RESOLVED = "artifact_resolved"
    METADATA_RESOLVING = "metadata_resolving"
    METADATA_RESOLVED = "metadata_resolved"
    ARTIFACT_DOWNLOADING = "artifact_downloading"
    ARTIFACT_DOWNLOADED = "artifact_downloaded"
    METADATA_DOWNLOADING = "metadata_downloading"
    METADATA_DOWNLOADED = "metadata_downloaded"
    ARTIFACT_INSTALLING = "artifact_installing"
    ARTIFACT_INSTALLED = "artifact_installed"
    METADATA_INSTALLING = "metadata_installing"
    METADATA_INSTALLED = "metadata_installed"
    ARTIFACT_DEPLOYING = "artifact_deploying"
    ARTIFACT_DEPLOYED = "artifact_deployed"
    METADATA_DEPLOYING = "metadata_deploying"
    METADATA_DEPLOYED = "metadata_deployed"


class RepositoryEvent(BaseModel):
    """Something happened to an artifact or metadata in a repository."""

    model_config = {"frozen": True}

    type: RepositoryEventType
    artifact: str | None = None
    metadata: str | None = None
    repository: str | None = None
    file: str | None = None
    error: str | None = None
