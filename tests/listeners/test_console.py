"""Tests for the console transfer and repository listeners."""

from __future__ import annotations

import logging

import pytest

from m2boot.listeners import ConsoleRepositoryListener, ConsoleTransferListener
from m2boot.listeners.console import format_size
from m2boot.listeners.events import (
    RepositoryEvent,
    RepositoryEventType,
    RequestType,
    TransferEvent,
    TransferEventType,
)

REPO = "https://repo.maven.apache.org/maven2/"
JAR = "junit/junit/4.13.2/junit-4.13.2.jar"


def _event(event_type: TransferEventType, **kwargs) -> TransferEvent:
    return TransferEvent(type=event_type, repository_url=REPO, resource_name=JAR, **kwargs)


@pytest.fixture
def captured(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    caplog.set_level(logging.DEBUG, logger="m2boot")
    return caplog


class TestFormatSize:
    @pytest.mark.parametrize(
        ("size", "expected"),
        [(0, "0 B"), (1023, "1023 B"), (1024, "1 KB"), (1025, "2 KB")],
    )
    def test_units(self, size: int, expected: str):
        assert format_size(size) == expected


class TestConsoleTransferListener:
    def test_download_initiated(self, captured):
        ConsoleTransferListener().transfer_initiated(_event(TransferEventType.INITIATED))
        assert f"Downloading: {REPO}{JAR}" in captured.text

    def test_upload_initiated(self, captured):
        event = _event(TransferEventType.INITIATED, request_type=RequestType.PUT)
        ConsoleTransferListener().transfer_initiated(event)
        assert f"Uploading: {REPO}{JAR}" in captured.text

    def test_progress_at_debug(self, captured):
        event = _event(TransferEventType.PROGRESSED, content_length=4096, transferred_bytes=2048)
        ConsoleTransferListener().transfer_progressed(event)
        (record,) = captured.records
        assert record.levelno == logging.DEBUG
        assert "2 KB/4 KB" in record.getMessage()

    def test_progress_unknown_length(self, captured):
        event = _event(TransferEventType.PROGRESSED, transferred_bytes=100)
        ConsoleTransferListener().transfer_progressed(event)
        assert "100 B" in captured.text

    def test_downloaded(self, captured):
        listener = ConsoleTransferListener()
        listener.transfer_initiated(_event(TransferEventType.INITIATED))
        listener.transfer_succeeded(
            _event(TransferEventType.SUCCEEDED, content_length=2048, transferred_bytes=2048)
        )
        message = captured.records[-1].getMessage()
        assert message.startswith(f"Downloaded: {REPO}{JAR} (2 KB")

    def test_success_without_length_is_silent(self, captured):
        ConsoleTransferListener().transfer_succeeded(_event(TransferEventType.SUCCEEDED))
        assert captured.records == []

    def test_failed_at_warning(self, captured):
        listener = ConsoleTransferListener()
        listener.transfer_failed(_event(TransferEventType.FAILED, error="404 Not Found"))
        (record,) = captured.records
        assert record.levelno == logging.WARNING
        assert "404 Not Found" in record.getMessage()

    def test_corrupted_at_warning(self, captured):
        ConsoleTransferListener().transfer_corrupted(
            _event(TransferEventType.CORRUPTED, error="checksum mismatch")
        )
        (record,) = captured.records
        assert record.levelno == logging.WARNING
        assert "Corrupted transfer" in record.getMessage()


class TestConsoleRepositoryListener:
    def test_resolved_at_info(self, captured):
        ConsoleRepositoryListener().repository_event(
            RepositoryEvent(
                type=RepositoryEventType.ARTIFACT_RESOLVED,
                artifact="junit:junit:jar:4.13.2",
                repository="central",
            )
        )
        (record,) = captured.records
        assert record.levelno == logging.INFO
        assert record.getMessage() == "Resolved artifact junit:junit:jar:4.13.2 from central"

    def test_invalid_descriptor_at_warning(self, captured):
        ConsoleRepositoryListener().repository_event(
            RepositoryEvent(
                type=RepositoryEventType.ARTIFACT_DESCRIPTOR_INVALID,
                artifact="a:b:1",
                error="bad pom",
            )
        )
        (record,) = captured.records
        assert record.levelno == logging.WARNING
        assert record.getMessage() == "Invalid artifact descriptor for a:b:1: bad pom"

    @pytest.mark.parametrize("event_type", list(RepositoryEventType))
    def test_every_event_type_has_a_message(self, captured, event_type):
        ConsoleRepositoryListener().repository_event(RepositoryEvent(type=event_type))
        assert len(captured.records) == 1
