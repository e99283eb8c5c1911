"""Quality-based stream selection.

Picks at most one video stream and at most one audio stream from a
catalog for a requested QualityTier. Streams without a URL never win.

Ties are broken by catalog order: the first candidate encountered wins
for maximum, minimum and closest-to-target picks (``max``/``min`` return
the first of several equal keys).
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from tubelink.domain.entities.streams import AudioStream, QualityTier, VideoStream

# Resolution labels mapped to pixel heights; "...p60" maps like its base label
RESOLUTION_HEIGHTS: dict[str, int] = {
    "144p": 144,
    "240p": 240,
    "360p": 360,
    "480p": 480,
    "720p": 720,
    "720p60": 720,
    "1080p": 1080,
    "1080p60": 1080,
    "1440p": 1440,
    "1440p60": 1440,
    "2160p": 2160,
    "2160p60": 2160,
    "4320p": 4320,
    "4320p60": 4320,
}

_LABEL_DIGITS = re.compile(r"(\d+)p")

# Audio bitrate targets (kbps) for the tiers that aim at a middle value
_AUDIO_TARGET_KBPS: dict[QualityTier, int] = {
    QualityTier.MIDDLE: 128,
    QualityTier.LOW: 64,
}


def _parse_resolution_label(label: str) -> int:
    match = _LABEL_DIGITS.match(label)
    if match is None:
        return 0
    return int(match.group(1))


def resolution_height(stream: VideoStream) -> int:
    """Height of *stream* in pixels, 0 when unknown.

    A non-empty label is looked up in RESOLUTION_HEIGHTS, otherwise its
    leading ``<digits>p`` is parsed. An empty label falls back to the
    reported height.
    """
    if not stream.resolution:
        return max(stream.height, 0)
    height = RESOLUTION_HEIGHTS.get(stream.resolution)
    if height is None:
        height = _parse_resolution_label(stream.resolution)
    return height


def select_video_stream(
    streams: Sequence[VideoStream], quality: QualityTier
) -> VideoStream | None:
    """Best video stream for *quality*, or None when no stream has a URL."""
    candidates = [s for s in streams if s.url is not None]
    if not candidates:
        return None

    if quality is QualityTier.HIGHEST:
        return max(candidates, key=resolution_height)
    if quality is QualityTier.LOWEST:
        return min(candidates, key=resolution_height)

    target = quality.target_height
    return min(candidates, key=lambda s: abs(resolution_height(s) - target))


def select_audio_stream(
    streams: Sequence[AudioStream], quality: QualityTier
) -> AudioStream | None:
    """Best audio stream for *quality*, or None when no stream has a URL."""
    candidates = [s for s in streams if s.url is not None]
    if not candidates:
        return None

    if quality in (QualityTier.HIGHEST, QualityTier.HIGH):
        return max(candidates, key=lambda s: s.average_bitrate)
    if quality is QualityTier.LOWEST:
        return min(candidates, key=lambda s: s.average_bitrate)

    target = _AUDIO_TARGET_KBPS[quality]
    return min(candidates, key=lambda s: abs(s.average_bitrate - target))
