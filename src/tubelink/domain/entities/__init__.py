from .exceptions import (
    ExtractionError,
    ResolutionError,
    ResolutionErrorKind,
    TransportError,
)
from .locale import Locale
from .resolution import ResolutionResult, StreamFallback, retry_fallback
from .streams import AudioStream, ContentKind, QualityTier, StreamCatalog, VideoStream
from .transport import TransportRequest, TransportResponse

__all__ = [
    "AudioStream",
    "ContentKind",
    "ExtractionError",
    "Locale",
    "QualityTier",
    "ResolutionError",
    "ResolutionErrorKind",
    "ResolutionResult",
    "StreamCatalog",
    "StreamFallback",
    "TransportError",
    "TransportRequest",
    "TransportResponse",
    "VideoStream",
    "retry_fallback",
]
