"""httpx-backed transport used by the extraction library for all page fetches."""

from __future__ import annotations

import httpx
import structlog

from tubelink.domain.entities.exceptions import TransportError
from tubelink.domain.entities.transport import TransportRequest, TransportResponse

log = structlog.get_logger(__name__)

# Connect and per-request timeouts (seconds)
_TIMEOUT_SECONDS = 30.0


def _to_header_list(headers: dict[str, list[str]]) -> list[tuple[str, str]]:
    """Flatten a header multimap; each value becomes its own header entry."""
    return [(name, value) for name, values in headers.items() for value in values]


def _to_header_multimap(headers: httpx.Headers) -> dict[str, list[str]]:
    out: dict[str, list[str]] = {}
    for name, value in headers.multi_items():
        out.setdefault(name, []).append(value)
    return out


class HttpxTransport:
    """Executes generic requests on a single pooled ``httpx.Client``.

    The client is created once and reused for every request, so
    connections are kept alive across page fetches. ``httpx.Client`` is
    safe to share between threads.
    """

    def __init__(
        self,
        *,
        user_agent: str | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        if client is None:
            headers = {"User-Agent": user_agent} if user_agent else None
            client = httpx.Client(
                timeout=httpx.Timeout(_TIMEOUT_SECONDS, connect=_TIMEOUT_SECONDS),
                follow_redirects=True,
                headers=headers,
            )
        self._client = client

    def execute(self, request: TransportRequest) -> TransportResponse:
        """Send *request* and return the response after following redirects.

        Raises ``TransportError`` for any httpx-level failure.
        """
        try:
            resp = self._client.request(
                request.method,
                request.url,
                headers=_to_header_list(request.headers),
                content=request.data or None,
            )
        except httpx.TimeoutException as exc:
            log.warning("http_request_timeout", url=request.url)
            raise TransportError(f"Request timed out: {request.url}") from exc
        except httpx.HTTPError as exc:
            log.warning("http_request_failed", url=request.url, error=str(exc))
            raise TransportError(f"Request failed: {request.url}: {exc}") from exc

        log.debug(
            "http_request_done",
            method=request.method,
            url=request.url,
            status=resp.status_code,
        )
        return TransportResponse(
            status_code=resp.status_code,
            text=resp.text,
            headers=_to_header_multimap(resp.headers),
            content=resp.content,
            url=str(resp.url),
        )

    def close(self) -> None:
        """Close the underlying client and its connection pool."""
        self._client.close()
