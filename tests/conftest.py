"""Shared test fixtures for the tubelink test suite."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field

import pytest

from tubelink.domain.entities.exceptions import ExtractionError
from tubelink.domain.entities.locale import Locale
from tubelink.domain.entities.streams import (
    AudioStream,
    ContentKind,
    StreamCatalog,
    VideoStream,
)
from tubelink.domain.entities.transport import TransportRequest, TransportResponse
from tubelink.domain.ports.http_transport import HttpTransportPort
from tubelink.infrastructure.extraction.adapter import ExtractionAdapter

# ---------------------------------------------------------------------------
# Test doubles for the extraction library
# ---------------------------------------------------------------------------


class FakeTransport:
    """Transport that never touches the network."""

    def __init__(self) -> None:
        self.closed = False

    def execute(self, request: TransportRequest) -> TransportResponse:
        return TransportResponse(
            status_code=200, text="", headers={}, content=b"", url=request.url
        )

    def close(self) -> None:
        self.closed = True


class FakeStreamExtractor:
    """Serves a catalog; ``fail_with`` makes ``fetch_page`` raise."""

    def __init__(
        self,
        url: str,
        catalog: StreamCatalog,
        fail_with: Exception | None = None,
    ) -> None:
        self.url = url
        self.catalog = catalog
        self.fail_with = fail_with
        self.fetch_count = 0

    def fetch_page(self) -> None:
        self.fetch_count += 1
        if self.fail_with is not None:
            raise self.fail_with

    def content_kind(self) -> ContentKind:
        return self.catalog.kind

    def video_streams(self) -> list[VideoStream]:
        return list(self.catalog.video_streams)

    def video_only_streams(self) -> list[VideoStream]:
        return list(self.catalog.video_only_streams)

    def audio_streams(self) -> list[AudioStream]:
        return list(self.catalog.audio_streams)


@dataclass
class FakeExtractionService:
    """Extraction library double with an initialization counter."""

    catalog: StreamCatalog = field(
        default_factory=lambda: StreamCatalog(kind=ContentKind.VIDEO)
    )
    fail_with: Exception | None = None
    init_delay: float = 0.0
    init_count: int = 0
    transport: HttpTransportPort | None = None
    locale: Locale | None = None
    extractors: list[FakeStreamExtractor] = field(default_factory=list)

    def init(self, transport: HttpTransportPort, locale: Locale) -> None:
        if self.init_delay:
            threading.Event().wait(self.init_delay)
        self.init_count += 1
        self.transport = transport
        self.locale = locale

    def canonical_url(self, video_id: str) -> str:
        return f"https://www.youtube.com/watch?v={video_id}"

    def get_extractor(self, url: str) -> FakeStreamExtractor:
        extractor = FakeStreamExtractor(url, self.catalog, self.fail_with)
        self.extractors.append(extractor)
        return extractor


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def fake_service() -> FakeExtractionService:
    return FakeExtractionService()


@pytest.fixture()
def adapter(fake_service: FakeExtractionService) -> ExtractionAdapter:
    return ExtractionAdapter(service=fake_service, transport_factory=FakeTransport)


@pytest.fixture()
def extraction_error() -> ExtractionError:
    return ExtractionError("This video is unavailable")
