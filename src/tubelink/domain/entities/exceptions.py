"""Stream resolution exceptions."""

from __future__ import annotations

from enum import Enum


class ResolutionErrorKind(Enum):
    """Why a URL could not be resolved to a playable stream."""

    INVALID_URL = "invalid_url"
    EXTRACTION_FAILURE = "extraction_failure"
    NO_STREAMS_AVAILABLE = "no_streams_available"


class TransportError(Exception):
    """HTTP layer failure (connect, timeout, interrupted request)."""


class ExtractionError(Exception):
    """Page fetch or parse failed, or the platform reported the content unavailable."""


class ResolutionError(Exception):
    """Raised to callers of ``resolve``; carries the input URL and the cause."""

    def __init__(
        self,
        kind: ResolutionErrorKind,
        url: str,
        cause: BaseException | str | None = None,
    ) -> None:
        self.kind = kind
        self.url = url
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"{kind.value} for {url}{detail}")
