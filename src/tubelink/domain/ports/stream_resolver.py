"""Port for resolving a shared video page URL into direct stream URLs."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from tubelink.domain.entities.resolution import ResolutionResult
from tubelink.domain.entities.streams import QualityTier


@runtime_checkable
class StreamResolverPort(Protocol):
    """Resolves page URLs of one hosting platform.

    Implementations handle URL recognition, page extraction and stream
    selection for their platform.
    """

    @property
    def platform_name(self) -> str:
        """Display name of the platform (e.g. 'YouTube')."""
        ...

    def supports(self, url: str) -> bool: ...

    def resolve(
        self, url: str, quality: QualityTier | str | None = None
    ) -> ResolutionResult:
        """Resolve *url* to direct stream URLs. Unknown tiers mean HIGHEST.

        Raises ``ResolutionError`` when the URL is unsupported, extraction
        fails, or no usable stream exists.
        """
        ...
