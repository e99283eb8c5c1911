"""Resolution result handed back to the host player."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tubelink.domain.ports.extraction import StreamExtractorPort


@dataclass(frozen=True)
class StreamFallback:
    """Everything the fallback retry needs: the fetched extractor and the live flag."""

    extractor: StreamExtractorPort
    is_live: bool


def retry_fallback(fallback: StreamFallback) -> ResolutionResult | None:
    """Re-fetch the page once and return the first muxed stream that has a URL.

    Best effort: any failure yields ``None``. Not memoized, every call
    performs a new fetch.
    """
    try:
        fallback.extractor.fetch_page()
        for stream in fallback.extractor.video_streams():
            if stream.url is not None:
                return ResolutionResult(
                    url=stream.url,
                    is_video=True,
                    is_live=fallback.is_live,
                )
    except Exception:  # noqa: BLE001
        return None
    return None


@dataclass(frozen=True)
class ResolutionResult:
    """Direct stream URL(s) for one resolved page.

    ``audio_url`` is set when the video stream carries no audio and a
    separate audio track has to be played alongside it.
    """

    url: str
    is_video: bool
    is_live: bool
    audio_url: str | None = None
    fallback: StreamFallback | None = None

    def attempt_fallback(self) -> ResolutionResult | None:
        """Try to produce a replacement result when ``url`` proved unusable."""
        if self.fallback is None:
            return None
        return retry_fallback(self.fallback)
