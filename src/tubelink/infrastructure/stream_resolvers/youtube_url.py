"""YouTube URL recognition and video id extraction."""

from __future__ import annotations

import re
from urllib.parse import urlparse

# youtu.be/<id>, youtube.com/{embed,v,shorts,feeds/api/videos}/<id>,
# youtube.com/watch?v=<id>, youtube.com/watch?...&v=<id>
_YOUTUBE_PATTERN = re.compile(
    r"(?:youtu\.be/|youtube\.com/(?:embed/|v/|shorts/|feeds/api/videos/"
    r"|watch\?v=|watch\?.+&v=))([^/?&#]+)"
)


def _has_host(url: str) -> bool:
    try:
        return bool(urlparse(url).hostname)
    except ValueError:
        return False


def extract_video_id(url: str) -> str | None:
    """Return the video id of a supported YouTube URL, or None.

    The id is returned exactly as it appears in the URL.
    """
    match = _YOUTUBE_PATTERN.search(url)
    return match.group(1) if match else None


def is_supported(url: str) -> bool:
    """Check if *url* is an absolute URL with a recognizable YouTube video id."""
    return _has_host(url) and extract_video_id(url) is not None
