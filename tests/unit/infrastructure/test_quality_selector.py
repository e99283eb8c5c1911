"""Tests for quality-based stream selection."""

from __future__ import annotations

import pytest

from tubelink.domain.entities.streams import AudioStream, QualityTier, VideoStream
from tubelink.infrastructure.stream_selection.quality_selector import (
    resolution_height,
    select_audio_stream,
    select_video_stream,
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _video(
    height: int,
    *,
    url: str | None = "auto",
    label: str | None = None,
) -> VideoStream:
    return VideoStream(
        url=f"https://cdn.example.com/v{height}.mp4" if url == "auto" else url,
        resolution=f"{height}p" if label is None else label,
        height=height,
    )


def _audio(bitrate: int, *, url: str | None = "auto") -> AudioStream:
    return AudioStream(
        url=f"https://cdn.example.com/a{bitrate}.m4a" if url == "auto" else url,
        average_bitrate=bitrate,
    )


LADDER = [_video(h) for h in (144, 360, 720, 1080, 2160)]
BITRATES = [_audio(b) for b in (32, 64, 128, 192, 320)]


# ---------------------------------------------------------------------------
# resolution_height
# ---------------------------------------------------------------------------


class TestResolutionHeight:
    @pytest.mark.parametrize(
        ("label", "expected"),
        [
            ("144p", 144),
            ("720p60", 720),
            ("1080p60", 1080),
            ("1440p60", 1440),
            ("4320p", 4320),
        ],
    )
    def test_known_labels(self, label: str, expected: int) -> None:
        assert resolution_height(VideoStream(url="u", resolution=label)) == expected

    def test_unlisted_label_is_parsed(self) -> None:
        assert resolution_height(VideoStream(url="u", resolution="540p")) == 540

    def test_unlisted_label_with_suffix(self) -> None:
        assert resolution_height(VideoStream(url="u", resolution="1080p50")) == 1080

    def test_unparsable_label_is_zero(self) -> None:
        assert resolution_height(VideoStream(url="u", resolution="999x")) == 0

    def test_unparsable_label_ignores_height_field(self) -> None:
        stream = VideoStream(url="u", resolution="hd", height=720)
        assert resolution_height(stream) == 0

    def test_empty_label_uses_height(self) -> None:
        assert resolution_height(VideoStream(url="u", resolution="", height=480)) == 480

    def test_empty_label_negative_height_floored(self) -> None:
        assert resolution_height(VideoStream(url="u", resolution="", height=-1)) == 0


# ---------------------------------------------------------------------------
# select_video_stream
# ---------------------------------------------------------------------------


class TestSelectVideoStream:
    @pytest.mark.parametrize(
        ("quality", "expected_height"),
        [
            (QualityTier.HIGHEST, 2160),
            (QualityTier.LOWEST, 144),
            (QualityTier.MIDDLE, 720),
            (QualityTier.HIGH, 1080),
            (QualityTier.LOW, 360),
        ],
    )
    def test_ladder(self, quality: QualityTier, expected_height: int) -> None:
        selected = select_video_stream(LADDER, quality)
        assert selected is not None
        assert selected.height == expected_height

    def test_closest_when_no_exact_match(self) -> None:
        streams = [_video(240), _video(480), _video(1440)]
        selected = select_video_stream(streams, QualityTier.MIDDLE)
        # |480 - 720| = 240 < |1440 - 720| = 720
        assert selected is not None
        assert selected.height == 480

    def test_tie_break_first_in_catalog_order(self) -> None:
        first = _video(720, url="https://cdn.example.com/first.mp4")
        second = _video(720, url="https://cdn.example.com/second.mp4")
        for quality in QualityTier:
            selected = select_video_stream([first, second], quality)
            assert selected is first

    def test_equidistant_tie_break(self) -> None:
        # 360 and 1080 are both 360px away from MIDDLE's 720
        low = _video(360)
        high = _video(1080)
        assert select_video_stream([low, high], QualityTier.MIDDLE) is low
        assert select_video_stream([high, low], QualityTier.MIDDLE) is high

    def test_streams_without_url_never_win(self) -> None:
        streams = [_video(2160, url=None), _video(720)]
        selected = select_video_stream(streams, QualityTier.HIGHEST)
        assert selected is not None
        assert selected.height == 720

    def test_all_without_url(self) -> None:
        streams = [_video(720, url=None), _video(1080, url=None)]
        assert select_video_stream(streams, QualityTier.HIGHEST) is None

    def test_empty(self) -> None:
        assert select_video_stream([], QualityTier.MIDDLE) is None

    def test_unknown_height_ranks_as_zero(self) -> None:
        unknown = VideoStream(url="https://cdn.example.com/unknown.mp4")
        streams = [unknown, _video(1080)]
        assert select_video_stream(streams, QualityTier.LOWEST) is unknown
        # |0 - 360| = 360 beats |1080 - 360| = 720
        assert select_video_stream(streams, QualityTier.LOW) is unknown

    def test_highest_uses_labels_over_height_field(self) -> None:
        a = VideoStream(url="https://cdn.example.com/a.mp4", resolution="1080p60")
        b = VideoStream(
            url="https://cdn.example.com/b.mp4", resolution="720p", height=2000
        )
        assert select_video_stream([b, a], QualityTier.HIGHEST) is a


# ---------------------------------------------------------------------------
# select_audio_stream
# ---------------------------------------------------------------------------


class TestSelectAudioStream:
    @pytest.mark.parametrize(
        ("quality", "expected_bitrate"),
        [
            (QualityTier.HIGHEST, 320),
            (QualityTier.HIGH, 320),
            (QualityTier.LOWEST, 32),
            (QualityTier.MIDDLE, 128),
            (QualityTier.LOW, 64),
        ],
    )
    def test_bitrates(self, quality: QualityTier, expected_bitrate: int) -> None:
        selected = select_audio_stream(BITRATES, quality)
        assert selected is not None
        assert selected.average_bitrate == expected_bitrate

    def test_middle_closest(self) -> None:
        streams = [_audio(48), _audio(160)]
        selected = select_audio_stream(streams, QualityTier.MIDDLE)
        assert selected is not None
        assert selected.average_bitrate == 160

    def test_streams_without_url_never_win(self) -> None:
        streams = [_audio(320, url=None), _audio(128)]
        selected = select_audio_stream(streams, QualityTier.HIGHEST)
        assert selected is not None
        assert selected.average_bitrate == 128

    def test_tie_break_first_in_catalog_order(self) -> None:
        first = _audio(128, url="https://cdn.example.com/first.m4a")
        second = _audio(128, url="https://cdn.example.com/second.m4a")
        for quality in QualityTier:
            assert select_audio_stream([first, second], quality) is first

    def test_empty(self) -> None:
        assert select_audio_stream([], QualityTier.HIGHEST) is None

    def test_all_without_url(self) -> None:
        assert select_audio_stream([_audio(128, url=None)], QualityTier.LOW) is None
