"""Composition root: builds the resolver stack from configuration."""

from __future__ import annotations

import functools

import structlog

from tubelink.domain.ports.extraction import ExtractionServicePort
from tubelink.infrastructure.config.schema import AppConfig
from tubelink.infrastructure.extraction.adapter import ExtractionAdapter
from tubelink.infrastructure.http.transport import HttpxTransport
from tubelink.infrastructure.stream_resolvers import (
    StreamResolverRegistry,
    YoutubeStreamResolver,
)

log = structlog.get_logger(__name__)


def build_extraction_adapter(
    config: AppConfig,
    service: ExtractionServicePort | None = None,
) -> ExtractionAdapter:
    """Create an adapter; the transport is only built on first resolution."""
    if service is None:
        from tubelink.infrastructure.extraction.ytdlp_service import (
            YtDlpExtractionService,
        )

        service = YtDlpExtractionService()

    return ExtractionAdapter(
        service=service,
        transport_factory=functools.partial(
            HttpxTransport, user_agent=config.http_user_agent
        ),
        locale=config.locale,
    )


def build_youtube_resolver(
    config: AppConfig,
    adapter: ExtractionAdapter | None = None,
) -> YoutubeStreamResolver:
    return YoutubeStreamResolver(
        adapter=adapter or build_extraction_adapter(config),
        default_quality=config.quality,
    )


def build_registry(
    config: AppConfig,
    adapter: ExtractionAdapter | None = None,
) -> StreamResolverRegistry:
    """Registry with every built-in resolver registered."""
    registry = StreamResolverRegistry()
    registry.register(build_youtube_resolver(config, adapter))
    log.debug("stream_registry_built", platforms=registry.supported_platforms)
    return registry
