"""YouTube stream resolver: shared YouTube links to direct stream URLs.

Pipeline: URL -> video id -> one page fetch via the extraction adapter
-> stream catalog -> video pass (muxed first, then video-only) and
audio pass -> ResolutionResult with a best-effort fallback.
"""

from __future__ import annotations

import structlog

from tubelink.domain.entities.exceptions import (
    ExtractionError,
    ResolutionError,
    ResolutionErrorKind,
    TransportError,
)
from tubelink.domain.entities.resolution import ResolutionResult
from tubelink.domain.entities.streams import (
    AudioStream,
    QualityTier,
    StreamCatalog,
    VideoStream,
)
from tubelink.infrastructure.extraction.adapter import ExtractionAdapter
from tubelink.infrastructure.stream_resolvers.result_builder import build_result
from tubelink.infrastructure.stream_resolvers.youtube_url import (
    extract_video_id,
    is_supported,
)
from tubelink.infrastructure.stream_selection.quality_selector import (
    select_audio_stream,
    select_video_stream,
)

log = structlog.get_logger(__name__)


def select_streams(
    catalog: StreamCatalog, quality: QualityTier
) -> tuple[VideoStream | None, AudioStream | None]:
    """Run the video pass and the audio pass over *catalog*.

    The video pass is skipped entirely for audio content. The audio pass
    always runs: video-only streams need a paired track and audio
    content has nothing else.
    """
    video: VideoStream | None = None
    if catalog.kind.has_video:
        video = select_video_stream(catalog.video_streams, quality)
        if video is None:
            video = select_video_stream(catalog.video_only_streams, quality)

    audio = select_audio_stream(catalog.audio_streams, quality)
    return video, audio


class YoutubeStreamResolver:
    """Resolves YouTube watch/share/embed/shorts URLs."""

    def __init__(
        self,
        adapter: ExtractionAdapter,
        default_quality: QualityTier = QualityTier.HIGHEST,
    ) -> None:
        self._adapter = adapter
        self._default_quality = default_quality

    @property
    def platform_name(self) -> str:
        return "YouTube"

    def supports(self, url: str) -> bool:
        return is_supported(url)

    def resolve(
        self, url: str, quality: QualityTier | str | None = None
    ) -> ResolutionResult:
        """Resolve *url* to direct stream URLs for *quality*.

        Raises ``ResolutionError`` with kind INVALID_URL (before any
        network call), EXTRACTION_FAILURE or NO_STREAMS_AVAILABLE.
        """
        quality = (
            QualityTier.parse(quality) if quality is not None else self._default_quality
        )

        if not self.supports(url):
            raise ResolutionError(
                ResolutionErrorKind.INVALID_URL, url, "Invalid YouTube URL"
            )
        video_id = extract_video_id(url)
        if video_id is None:
            raise ResolutionError(
                ResolutionErrorKind.INVALID_URL, url, "No video id found"
            )

        log.debug("youtube_resolve_start", video_id=video_id, quality=quality.value)
        try:
            page = self._adapter.resolve_page(video_id)
        except (ExtractionError, TransportError) as exc:
            log.warning("youtube_extraction_failed", url=url, error=str(exc))
            raise ResolutionError(
                ResolutionErrorKind.EXTRACTION_FAILURE, url, exc
            ) from exc

        video, audio = select_streams(page.catalog, quality)
        result = build_result(
            video=video,
            audio=audio,
            kind=page.catalog.kind,
            extractor=page.extractor,
        )
        if result is None:
            log.warning("youtube_no_streams", url=url, kind=page.catalog.kind.value)
            raise ResolutionError(
                ResolutionErrorKind.NO_STREAMS_AVAILABLE, url, "No streams available"
            )

        log.info(
            "youtube_resolve_success",
            video_id=video_id,
            quality=quality.value,
            is_live=result.is_live,
            separate_audio=result.audio_url is not None,
        )
        return result
