"""yt-dlp backed extraction service.

yt-dlp downloads and parses the watch page; every HTTP request it makes
is routed through the transport installed by ``init`` via a request
handler registered with ``yt_dlp.networking``. Raw formats are mapped to
the stream descriptors used by the selector:

- muxed: video codec and audio codec both present
- video-only: video codec present, audio codec ``none``
- audio-only: video codec ``none``, audio codec present
- neither (storyboards): ignored
"""

from __future__ import annotations

import email.message
import http.cookiejar
import io
import re
import urllib.request
import urllib.response
from typing import Any

import structlog
import yt_dlp
from yt_dlp.networking.common import (
    RequestHandler,
    Response,
    register_preference,
    register_rh,
)
from yt_dlp.networking.exceptions import HTTPError, UnsupportedRequest
from yt_dlp.networking.exceptions import TransportError as YtDlpTransportError
from yt_dlp.utils import DownloadError, ExtractorError

from tubelink.domain.entities.exceptions import ExtractionError, TransportError
from tubelink.domain.entities.locale import Locale
from tubelink.domain.entities.streams import (
    AudioStream,
    ContentKind,
    VideoStream,
)
from tubelink.domain.entities.transport import TransportRequest
from tubelink.domain.ports.http_transport import HttpTransportPort

log = structlog.get_logger(__name__)

_WATCH_URL = "https://www.youtube.com/watch?v={video_id}"

# "720p", "1080p60", "2160p60 HDR" -> leading resolution token
_RESOLUTION_LABEL = re.compile(r"^(\d+p\d*)\b")

# httpx already decoded the body; these would describe the wire form
_DROPPED_RESPONSE_HEADERS = frozenset({"content-encoding", "content-length"})

_COOKIE_HEADERS = frozenset({"set-cookie", "set-cookie2"})


@register_rh
class TubelinkRH(RequestHandler):
    """Sends yt-dlp requests through the process-wide injected transport.

    Only plain GET/POST requests are taken; anything else (HEAD, proxies,
    impersonation) is declined so yt-dlp falls back to its own handlers,
    which do not use the injected transport or its timeouts. Cookies are
    read from and stored back into yt-dlp's cookie jar.
    """

    RH_NAME = "tubelink"
    _SUPPORTED_URL_SCHEMES = ("http", "https")
    _SUPPORTED_PROXY_SCHEMES = ()
    _SUPPORTED_FEATURES = ()

    transport: HttpTransportPort | None = None

    def _validate(self, request):
        if TubelinkRH.transport is None:
            raise UnsupportedRequest("transport not installed")
        expected = "POST" if request.data else "GET"
        if request.method != expected:
            raise UnsupportedRequest(f"method {request.method} not supported")
        super()._validate(request)

    def _check_proxies(self, proxies):
        proxied = sorted(k for k, v in proxies.items() if v and k != "no")
        if proxied:
            # Declined below; yt-dlp's own handlers (and timeouts) take over
            log.warning("ytdlp_proxy_bypasses_transport", schemes=proxied)
        super()._check_proxies(proxies)

    def _check_extensions(self, extensions):
        super()._check_extensions(extensions)
        extensions.pop("cookiejar", None)
        extensions.pop("timeout", None)
        extensions.pop("legacy_ssl", None)
        extensions.pop("keep_header_casing", None)

    def _send(self, request):
        transport = TubelinkRH.transport
        if transport is None:
            raise UnsupportedRequest("transport not installed")

        cookiejar = self._get_cookiejar(request)
        headers = self._merge_headers(request.headers)
        cookie = cookiejar.get_cookie_header(request.url)
        if cookie:
            headers["Cookie"] = cookie

        try:
            resp = transport.execute(
                TransportRequest(
                    url=request.url,
                    headers={name: [value] for name, value in headers.items()},
                    data=_read_body(request.data),
                )
            )
        except TransportError as exc:
            raise YtDlpTransportError(cause=exc) from exc

        response = Response(
            fp=io.BytesIO(resp.content),
            url=resp.url,
            headers={
                name: ", ".join(values)
                for name, values in resp.headers.items()
                if name.lower() not in _DROPPED_RESPONSE_HEADERS
            },
            status=resp.status_code,
        )
        _store_cookies(cookiejar, resp.url, resp.headers)
        if not 200 <= resp.status_code < 300:
            raise HTTPError(response)
        return response


@register_preference(TubelinkRH)
def _prefer_tubelink(rh, request) -> int:
    return 500


def _read_body(data: Any) -> bytes | None:
    if data is None or isinstance(data, bytes):
        return data
    if hasattr(data, "read"):
        return data.read()
    return b"".join(data)


def _store_cookies(
    cookiejar: http.cookiejar.CookieJar, url: str, headers: dict[str, list[str]]
) -> None:
    """Feed ``Set-Cookie`` headers of a response back into *cookiejar*."""
    message = email.message.Message()
    for name, values in headers.items():
        if name.lower() in _COOKIE_HEADERS:
            for value in values:
                message.add_header(name, value)
    response = urllib.response.addinfourl(io.BytesIO(), message, url)
    cookiejar.extract_cookies(response, urllib.request.Request(url))


def _has_video(fmt: dict[str, Any]) -> bool:
    vcodec = fmt.get("vcodec")
    if vcodec is None:
        return bool(fmt.get("height"))
    return vcodec != "none"


def _has_audio(fmt: dict[str, Any]) -> bool:
    acodec = fmt.get("acodec")
    if acodec is None:
        return bool(fmt.get("abr") or fmt.get("asr"))
    return acodec != "none"


def _resolution_label(fmt: dict[str, Any]) -> str:
    match = _RESOLUTION_LABEL.match(fmt.get("format_note") or "")
    return match.group(1) if match else ""


def _to_video_stream(fmt: dict[str, Any], *, muxed: bool) -> VideoStream:
    return VideoStream(
        url=fmt.get("url"),
        resolution=_resolution_label(fmt),
        height=int(fmt.get("height") or 0),
        is_muxed=muxed,
    )


def _to_audio_stream(fmt: dict[str, Any]) -> AudioStream:
    bitrate = fmt.get("abr") or fmt.get("tbr") or 0
    return AudioStream(url=fmt.get("url"), average_bitrate=int(round(bitrate)))


def content_kind_from_info(info: dict[str, Any]) -> ContentKind:
    """Classify a raw yt-dlp info dict."""
    formats = info.get("formats") or []
    is_live = bool(info.get("is_live")) or info.get("live_status") == "is_live"
    has_video = any(_has_video(f) for f in formats)
    if is_live:
        return ContentKind.LIVE_VIDEO if has_video else ContentKind.LIVE_AUDIO
    return ContentKind.VIDEO if has_video else ContentKind.AUDIO_ONLY


class YtDlpStreamExtractor:
    """Extractor handle for one watch page."""

    def __init__(self, url: str, params: dict[str, Any]) -> None:
        self._url = url
        self._params = params
        self._info: dict[str, Any] | None = None

    @property
    def url(self) -> str:
        return self._url

    def fetch_page(self) -> None:
        """Run yt-dlp extraction for the page (no format processing)."""
        try:
            with yt_dlp.YoutubeDL(self._params) as ydl:
                info = ydl.extract_info(self._url, download=False, process=False)
        except (DownloadError, ExtractorError) as exc:
            log.warning("ytdlp_extract_failed", url=self._url, error=str(exc))
            raise ExtractionError(str(exc)) from exc
        if not info:
            raise ExtractionError(f"No information extracted for {self._url}")
        self._info = info

    def _require_info(self) -> dict[str, Any]:
        if self._info is None:
            raise ExtractionError(f"Page not fetched yet: {self._url}")
        return self._info

    def _formats(self) -> list[dict[str, Any]]:
        return [f for f in self._require_info().get("formats") or [] if f]

    def content_kind(self) -> ContentKind:
        return content_kind_from_info(self._require_info())

    def video_streams(self) -> list[VideoStream]:
        return [
            _to_video_stream(f, muxed=True)
            for f in self._formats()
            if _has_video(f) and _has_audio(f)
        ]

    def video_only_streams(self) -> list[VideoStream]:
        return [
            _to_video_stream(f, muxed=False)
            for f in self._formats()
            if _has_video(f) and not _has_audio(f)
        ]

    def audio_streams(self) -> list[AudioStream]:
        return [
            _to_audio_stream(f)
            for f in self._formats()
            if _has_audio(f) and not _has_video(f)
        ]


class YtDlpExtractionService:
    """Extraction library entry point backed by yt-dlp."""

    def __init__(self, extra_params: dict[str, Any] | None = None) -> None:
        self._extra_params = dict(extra_params or {})
        self._locale = Locale()

    def init(self, transport: HttpTransportPort, locale: Locale) -> None:
        """Install *transport* for all yt-dlp HTTP traffic and set the locale."""
        TubelinkRH.transport = transport
        self._locale = locale
        log.debug("ytdlp_transport_installed", locale=locale.tag)

    def canonical_url(self, video_id: str) -> str:
        return _WATCH_URL.format(video_id=video_id)

    def get_extractor(self, url: str) -> YtDlpStreamExtractor:
        return YtDlpStreamExtractor(url, self._params())

    def _params(self) -> dict[str, Any]:
        params: dict[str, Any] = {
            "quiet": True,
            "no_warnings": True,
            "noplaylist": True,
            "skip_download": True,
            "logger": structlog.get_logger("yt_dlp"),
            "http_headers": {
                "Accept-Language": f"{self._locale.tag},{self._locale.language};q=0.9",
            },
            "extractor_args": {"youtube": {"lang": [self._locale.language]}},
        }
        params.update(self._extra_params)
        return params
