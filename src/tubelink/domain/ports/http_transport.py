"""Port for the HTTP transport the extraction library sends its requests through."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from tubelink.domain.entities.transport import TransportRequest, TransportResponse


@runtime_checkable
class HttpTransportPort(Protocol):
    """Executes generic requests on behalf of the extraction library.

    Implementations are created once and must be safe for concurrent use.
    """

    def execute(self, request: TransportRequest) -> TransportResponse:
        """Send *request*, following redirects.

        Raises ``TransportError`` on connection, timeout or interruption.
        """
        ...

    def close(self) -> None: ...
