"""Assembles the ResolutionResult from the selected streams."""

from __future__ import annotations

from tubelink.domain.entities.resolution import ResolutionResult, StreamFallback
from tubelink.domain.entities.streams import AudioStream, ContentKind, VideoStream
from tubelink.domain.ports.extraction import StreamExtractorPort


def primary_url(
    video: VideoStream | None, audio: AudioStream | None
) -> str | None:
    """The video URL when a video stream was chosen, else the audio URL."""
    if video is not None and video.url is not None:
        return video.url
    if audio is not None and audio.url is not None:
        return audio.url
    return None


def build_result(
    *,
    video: VideoStream | None,
    audio: AudioStream | None,
    kind: ContentKind,
    extractor: StreamExtractorPort,
) -> ResolutionResult | None:
    """Package the selection; None when neither stream has a URL.

    A separate audio track is attached only to video-only streams,
    muxed streams already carry their audio.
    """
    url = primary_url(video, audio)
    if url is None:
        return None

    audio_url = None
    if (
        video is not None
        and video.url is not None
        and not video.is_muxed
        and audio is not None
    ):
        audio_url = audio.url

    return ResolutionResult(
        url=url,
        is_video=kind.has_video,
        is_live=kind.is_live,
        audio_url=audio_url,
        fallback=StreamFallback(extractor=extractor, is_live=kind.is_live),
    )
