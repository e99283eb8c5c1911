"""Generic HTTP request/response exchanged between the extractor and the transport."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TransportRequest:
    """Outgoing request. The method follows from the body: POST with data, else GET."""

    url: str
    headers: dict[str, list[str]] = field(default_factory=dict)
    data: bytes | None = None

    @property
    def method(self) -> str:
        return "POST" if self.data else "GET"


@dataclass(frozen=True)
class TransportResponse:
    """Response after redirects were followed; ``url`` is the final URL."""

    status_code: int
    text: str
    headers: dict[str, list[str]]
    content: bytes
    url: str
