"""Ports for the third-party page extraction library."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from tubelink.domain.entities.locale import Locale
from tubelink.domain.entities.streams import AudioStream, ContentKind, VideoStream
from tubelink.domain.ports.http_transport import HttpTransportPort


@runtime_checkable
class StreamExtractorPort(Protocol):
    """Handle for one video page.

    ``fetch_page`` must be called before any of the listing methods.
    """

    def fetch_page(self) -> None:
        """Download and parse the page. Raises ``ExtractionError`` on failure."""
        ...

    def content_kind(self) -> ContentKind: ...

    def video_streams(self) -> list[VideoStream]:
        """Muxed (video + audio) streams in page order."""
        ...

    def video_only_streams(self) -> list[VideoStream]: ...

    def audio_streams(self) -> list[AudioStream]: ...


@runtime_checkable
class ExtractionServicePort(Protocol):
    """Process-wide extraction library entry point."""

    def init(self, transport: HttpTransportPort, locale: Locale) -> None:
        """One-time global configuration."""
        ...

    def canonical_url(self, video_id: str) -> str: ...

    def get_extractor(self, url: str) -> StreamExtractorPort: ...
