"""Registry that dispatches URL resolution to per-platform resolvers."""

from __future__ import annotations

import structlog

from tubelink.domain.entities.exceptions import ResolutionError, ResolutionErrorKind
from tubelink.domain.entities.resolution import ResolutionResult
from tubelink.domain.entities.streams import QualityTier
from tubelink.domain.ports.stream_resolver import StreamResolverPort

log = structlog.get_logger(__name__)


class StreamResolverRegistry:
    """Dispatches a page URL to the first registered resolver that supports it.

    Resolution results are not cached; every call resolves afresh.
    """

    def __init__(self, resolvers: list[StreamResolverPort] | None = None) -> None:
        self._resolvers: list[StreamResolverPort] = []
        for resolver in resolvers or []:
            self.register(resolver)

    def register(self, resolver: StreamResolverPort) -> None:
        """Register a resolver. Earlier registrations take priority."""
        self._resolvers.append(resolver)
        log.debug("stream_resolver_registered", platform=resolver.platform_name)

    @property
    def supported_platforms(self) -> list[str]:
        """Return platform names of registered resolvers."""
        return [r.platform_name for r in self._resolvers]

    def find(self, url: str) -> StreamResolverPort | None:
        for resolver in self._resolvers:
            if resolver.supports(url):
                return resolver
        return None

    def resolve(
        self, url: str, quality: QualityTier | str | None = None
    ) -> ResolutionResult:
        """Resolve *url* with the matching resolver.

        Raises ``ResolutionError`` (INVALID_URL) when no resolver matches;
        resolver errors propagate unchanged.
        """
        resolver = self.find(url)
        if resolver is None:
            log.info("stream_resolver_not_found", url=url)
            raise ResolutionError(
                ResolutionErrorKind.INVALID_URL, url, "No resolver supports this URL"
            )
        if quality is not None:
            quality = QualityTier.parse(quality)
        return resolver.resolve(url, quality)
