"""Extraction adapter: one-time library setup plus one page fetch per video."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import structlog

from tubelink.domain.entities.exceptions import ExtractionError, TransportError
from tubelink.domain.entities.locale import Locale
from tubelink.domain.entities.streams import StreamCatalog
from tubelink.domain.ports.extraction import ExtractionServicePort, StreamExtractorPort
from tubelink.domain.ports.http_transport import HttpTransportPort
from tubelink.infrastructure.extraction.once import OnceInitializer

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ExtractionContext:
    """Initialized extraction library state shared by all resolutions."""

    service: ExtractionServicePort
    transport: HttpTransportPort
    locale: Locale


@dataclass(frozen=True)
class FetchedPage:
    """A fetched extractor handle and the catalog read from it."""

    extractor: StreamExtractorPort
    catalog: StreamCatalog


class ExtractionAdapter:
    """Owns the extraction context and turns video ids into stream catalogs.

    The context (transport + library init) is built lazily on first use
    and exactly once, even with concurrent first callers. It is never
    torn down or reconfigured.
    """

    def __init__(
        self,
        service: ExtractionServicePort,
        transport_factory: Callable[[], HttpTransportPort],
        locale: Locale | None = None,
    ) -> None:
        self._service = service
        self._transport_factory = transport_factory
        self._locale = locale or Locale()
        self._context = OnceInitializer(self._create_context)

    def _create_context(self) -> ExtractionContext:
        transport = self._transport_factory()
        try:
            self._service.init(transport, self._locale)
        except Exception as exc:
            log.error("extraction_context_init_failed", error=str(exc))
            raise ExtractionError(f"Extraction library init failed: {exc}") from exc
        log.info("extraction_context_initialized", locale=self._locale.tag)
        return ExtractionContext(
            service=self._service, transport=transport, locale=self._locale
        )

    @property
    def is_initialized(self) -> bool:
        return self._context.is_initialized

    def ensure_initialized(self) -> ExtractionContext:
        """Return the shared context, creating it on first call."""
        return self._context.get()

    def resolve_page(self, video_id: str) -> FetchedPage:
        """Fetch and parse the page for *video_id* (exactly one network fetch).

        No quality decisions are made here; the catalog lists streams as
        reported by the page. Raises ``ExtractionError`` on any fetch or
        parse failure.
        """
        context = self.ensure_initialized()
        url = context.service.canonical_url(video_id)
        extractor = context.service.get_extractor(url)

        try:
            extractor.fetch_page()
            catalog = StreamCatalog(
                kind=extractor.content_kind(),
                video_streams=list(extractor.video_streams()),
                video_only_streams=list(extractor.video_only_streams()),
                audio_streams=list(extractor.audio_streams()),
            )
        except ExtractionError:
            raise
        except TransportError as exc:
            raise ExtractionError(
                f"Transport failure while fetching {url}: {exc}"
            ) from exc

        log.debug(
            "extraction_page_fetched",
            video_id=video_id,
            kind=catalog.kind.value,
            video=len(catalog.video_streams),
            video_only=len(catalog.video_only_streams),
            audio=len(catalog.audio_streams),
        )
        return FetchedPage(extractor=extractor, catalog=catalog)
