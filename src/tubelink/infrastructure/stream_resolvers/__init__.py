"""Stream resolver implementations for extracting playable stream URLs."""

from __future__ import annotations

from .registry import StreamResolverRegistry
from .youtube import YoutubeStreamResolver

__all__ = ["StreamResolverRegistry", "YoutubeStreamResolver"]
