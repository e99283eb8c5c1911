"""Entry hook for host applications that load resolvers as plugins.

The host calls ``start`` once with its resolver registry; the YouTube
resolver is registered into it.
"""

from __future__ import annotations

import structlog

from tubelink.infrastructure.config.schema import AppConfig
from tubelink.infrastructure.extraction.adapter import ExtractionAdapter
from tubelink.infrastructure.stream_resolvers.registry import StreamResolverRegistry
from tubelink.interfaces.composition import build_youtube_resolver

log = structlog.get_logger(__name__)

PLUGIN_ID = "tubelink_youtube_plugin"


def start(
    registry: StreamResolverRegistry,
    config: AppConfig | None = None,
    *,
    adapter: ExtractionAdapter | None = None,
) -> None:
    resolver = build_youtube_resolver(config or AppConfig(), adapter)
    registry.register(resolver)
    log.info("plugin_started", plugin=PLUGIN_ID, platform=resolver.platform_name)
