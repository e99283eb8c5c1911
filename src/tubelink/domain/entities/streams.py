"""Domain entities describing the streams a video page offers.

Pure value objects without I/O.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum


class QualityTier(Enum):
    """Caller-requested quality preference, lowest to highest."""

    LOWEST = "lowest"
    LOW = "low"
    MIDDLE = "middle"
    HIGH = "high"
    HIGHEST = "highest"

    @property
    def target_height(self) -> float:
        """Target video height in pixels (HIGHEST is unbounded)."""
        return _TARGET_HEIGHTS[self]

    @classmethod
    def parse(cls, value: object) -> QualityTier:
        """Coerce a tier name into a QualityTier.

        Unknown or missing values (including non-string values) default to
        ``HIGHEST``.
        """
        if isinstance(value, QualityTier):
            return value
        if not value or not isinstance(value, str):
            return cls.HIGHEST
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.HIGHEST


_TARGET_HEIGHTS: dict[QualityTier, float] = {
    QualityTier.LOWEST: 144,
    QualityTier.LOW: 360,
    QualityTier.MIDDLE: 720,
    QualityTier.HIGH: 1080,
    QualityTier.HIGHEST: math.inf,
}


class ContentKind(Enum):
    """What kind of content a page carries, as reported by the extractor."""

    VIDEO = "video"
    AUDIO_ONLY = "audio_only"
    LIVE_VIDEO = "live_video"
    LIVE_AUDIO = "live_audio"

    @property
    def is_live(self) -> bool:
        return self in (ContentKind.LIVE_VIDEO, ContentKind.LIVE_AUDIO)

    @property
    def has_video(self) -> bool:
        return self not in (ContentKind.AUDIO_ONLY, ContentKind.LIVE_AUDIO)


@dataclass(frozen=True)
class VideoStream:
    """A video stream as listed on the page (muxed or video-only)."""

    url: str | None
    resolution: str = ""  # "720p", "1080p60", or "" when unknown
    height: int = 0
    is_muxed: bool = False


@dataclass(frozen=True)
class AudioStream:
    """An audio-only stream as listed on the page."""

    url: str | None
    average_bitrate: int = 0  # kbps


@dataclass(frozen=True)
class StreamCatalog:
    """All stream descriptors obtained from one page fetch.

    Lists keep the order the page reported them in.
    """

    kind: ContentKind
    video_streams: list[VideoStream] = field(default_factory=list)
    video_only_streams: list[VideoStream] = field(default_factory=list)
    audio_streams: list[AudioStream] = field(default_factory=list)
