"""
Read-only views over the request and response objects handed to the hooks.

LoggerMiddleware never assumes one HTTP client. httpx, requests and aiohttp
name the same facts differently (``status_code`` vs ``status``,
``http_version`` vs ``version`` vs ``raw.version``), so these wrappers pick
whichever attribute the object has.
"""

from typing import Any

import httpx

from .headers import normalize_headers


def _protocol_version(message) -> str:
    """
    Extract the HTTP protocol version ("1.1", "2", ...) from a client object.

    httpx exposes ``http_version`` ("HTTP/1.1"), aiohttp ``version``
    (HttpVersion(1, 1)) and requests the urllib3 ``raw.version`` (11).
    """
    version = getattr(message, "protocol_version", None)
    if isinstance(version, str):
        return version

    version = getattr(message, "http_version", None)
    if isinstance(version, str):
        return version.removeprefix("HTTP/")

    version = getattr(message, "version", None)
    if isinstance(version, tuple) and len(version) == 2:
        return f"{version[0]}.{version[1]}"

    raw_version = getattr(getattr(message, "raw", None), "version", None)
    if isinstance(raw_version, int) and raw_version:
        major, minor = divmod(raw_version, 10)
        # urllib3 reports HTTP/2 as 20
        return str(major) if major >= 2 else f"{major}.{minor}"

    return "1.1"


def _status(response) -> Any:
    # aiohttp calls it .status
    status = getattr(response, "status_code", None)
    return status if status is not None else getattr(response, "status", None)


def is_response(candidate: Any) -> bool:
    """True when ``candidate`` looks like an HTTP response, i.e. has an integer status."""
    status = _status(candidate)
    return isinstance(status, int) and not isinstance(status, bool)


class UnifiedRequest:
    """
    Transport independent view of an outgoing request.

    Wraps a client request object such as httpx.Request,
    requests.PreparedRequest or aiohttp's ClientRequest.
    """

    def __init__(
        self,
        method: str,
        url: Any,
        headers: Any = None,
        protocol_version: str = "1.1",
    ):
        self.method = method.upper()
        self.url = str(url)
        self.headers = normalize_headers(headers)
        self.protocol_version = protocol_version

    @classmethod
    def wrap(cls, request) -> "UnifiedRequest":
        if isinstance(request, cls):
            return request
        return cls(
            method=request.method,
            url=request.url,
            headers=getattr(request, "headers", None),
            protocol_version=_protocol_version(request),
        )


class UnifiedResponse:
    """
    Transport independent view of a received response.

    Only wrap objects for which `is_response` holds.
    """

    def __init__(self, response):
        self.status_code = _status(response)
        self.reason = (
            getattr(response, "reason_phrase", None)
            or getattr(response, "reason", None)
            or _default_reason(self.status_code)
        )
        self.protocol_version = _protocol_version(response)
        self.headers = normalize_headers(getattr(response, "headers", None))

    @classmethod
    def wrap(cls, response) -> "UnifiedResponse":
        if isinstance(response, cls):
            return response
        return cls(response)


def _default_reason(status_code) -> str:
    try:
        return httpx.codes.get_reason_phrase(int(status_code))
    except (TypeError, ValueError):
        return ""
