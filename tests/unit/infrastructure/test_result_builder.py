"""Tests for ResolutionResult assembly."""

from __future__ import annotations

from unittest.mock import MagicMock

from tubelink.domain.entities.streams import AudioStream, ContentKind, VideoStream
from tubelink.infrastructure.stream_resolvers.result_builder import (
    build_result,
    primary_url,
)

MUXED = VideoStream(
    url="https://cdn.example.com/muxed.mp4", resolution="720p", is_muxed=True
)
VIDEO_ONLY = VideoStream(url="https://cdn.example.com/vonly.mp4", resolution="1080p")
AUDIO = AudioStream(url="https://cdn.example.com/a.m4a", average_bitrate=128)


class TestPrimaryUrl:
    def test_prefers_video(self) -> None:
        assert primary_url(MUXED, AUDIO) == MUXED.url

    def test_falls_back_to_audio(self) -> None:
        assert primary_url(None, AUDIO) == AUDIO.url

    def test_none_when_nothing_selected(self) -> None:
        assert primary_url(None, None) is None


class TestBuildResult:
    def test_video_only_carries_audio_track(self) -> None:
        result = build_result(
            video=VIDEO_ONLY, audio=AUDIO, kind=ContentKind.VIDEO, extractor=MagicMock()
        )
        assert result is not None
        assert result.url == VIDEO_ONLY.url
        assert result.audio_url == AUDIO.url

    def test_muxed_has_no_separate_audio(self) -> None:
        result = build_result(
            video=MUXED, audio=AUDIO, kind=ContentKind.VIDEO, extractor=MagicMock()
        )
        assert result is not None
        assert result.url == MUXED.url
        assert result.audio_url is None

    def test_audio_only_content(self) -> None:
        result = build_result(
            video=None, audio=AUDIO, kind=ContentKind.AUDIO_ONLY, extractor=MagicMock()
        )
        assert result is not None
        assert result.url == AUDIO.url
        assert result.is_video is False
        assert result.is_live is False
        assert result.audio_url is None

    def test_live_flags(self) -> None:
        result = build_result(
            video=MUXED, audio=None, kind=ContentKind.LIVE_VIDEO, extractor=MagicMock()
        )
        assert result is not None
        assert result.is_video is True
        assert result.is_live is True

    def test_fallback_holds_extractor_and_live_flag(self) -> None:
        extractor = MagicMock()
        result = build_result(
            video=MUXED, audio=None, kind=ContentKind.LIVE_VIDEO, extractor=extractor
        )
        assert result is not None
        assert result.fallback is not None
        assert result.fallback.extractor is extractor
        assert result.fallback.is_live is True

    def test_nothing_selected(self) -> None:
        assert (
            build_result(
                video=None, audio=None, kind=ContentKind.VIDEO, extractor=MagicMock()
            )
            is None
        )
