from .extraction import ExtractionServicePort, StreamExtractorPort
from .http_transport import HttpTransportPort
from .stream_resolver import StreamResolverPort

__all__ = [
    "ExtractionServicePort",
    "HttpTransportPort",
    "StreamExtractorPort",
    "StreamResolverPort",
]
