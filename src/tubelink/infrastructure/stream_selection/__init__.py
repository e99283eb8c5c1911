"""Quality-based selection of video and audio streams."""

from __future__ import annotations

from .quality_selector import (
    resolution_height,
    select_audio_stream,
    select_video_stream,
)

__all__ = ["resolution_height", "select_audio_stream", "select_video_stream"]
