"""
Test suite for the HttpClient host pipeline.

This module covers how HttpClient drives middleware hooks around an
httpx send: transaction ids, request/response pass-through, error
dispatch, raise_for_status and integration with LoggerMiddleware.
"""

import httpx
import pytest

from http_log_middleware.client import HttpClient
from http_log_middleware.config import LoggerSettings
from http_log_middleware.exceptions import ResponseError
from http_log_middleware.logging_middleware import LoggerMiddleware
from tests.fakes import MockTransport
from tests.fakes import RecordingSink


class SpyMiddleware:
    """
    Spy middleware for testing hook order and arguments.

    Records every hook call and re-raises errors as the protocol requires.
    """

    def __init__(self, name: str = "spy", calls: list | None = None):
        self.name = name
        self.calls = calls if calls is not None else []

    async def on_request(self, request, transaction_id, options=None):
        self.calls.append((self.name, "request", transaction_id, request))
        return request

    async def on_response(self, response, transaction_id, options=None):
        self.calls.append((self.name, "response", transaction_id, response))
        return response

    async def on_error(self, error, transaction_id, options=None):
        self.calls.append((self.name, "error", transaction_id, error))
        raise error


class HeaderMiddleware(SpyMiddleware):
    """Hands a different request on, the way a signing middleware would."""

    async def on_request(self, request, transaction_id, options=None):
        await super().on_request(request, transaction_id, options)
        return httpx.Request(
            request.method, request.url, headers={"X-Signed": "yes"}
        )


@pytest.fixture
def settings() -> LoggerSettings:
    return LoggerSettings(level="debug", error_level="error")


@pytest.mark.asyncio
async def test_hooks_share_transaction_id_and_native_objects(settings):
    spy = SpyMiddleware()
    transport = MockTransport()
    client = HttpClient(settings, middlewares=[spy], transport=transport)

    response = await client.get("https://api.test/items", params={"page": 2})

    assert response.status_code == 200
    assert [call[1] for call in spy.calls] == ["request", "response"]
    assert spy.calls[0][2] == spy.calls[1][2]
    assert isinstance(spy.calls[0][3], httpx.Request)
    assert spy.calls[1][3] is response
    assert transport.requests[0] is spy.calls[0][3]
    assert str(transport.requests[0].url) == "https://api.test/items?page=2"
    assert transport.requests[0].method == "GET"


@pytest.mark.asyncio
async def test_request_returned_by_middleware_is_sent(settings):
    transport = MockTransport()
    client = HttpClient(settings, middlewares=[HeaderMiddleware()], transport=transport)

    await client.get("https://api.test/items")

    assert transport.requests[0].headers["X-Signed"] == "yes"


@pytest.mark.asyncio
async def test_each_request_gets_a_new_transaction_id(settings):
    spy = SpyMiddleware()
    client = HttpClient(settings, middlewares=[spy], transport=MockTransport())

    await client.get("https://api.test/a")
    await client.get("https://api.test/b")

    ids = {call[2] for call in spy.calls}
    assert len(ids) == 2


@pytest.mark.asyncio
async def test_middlewares_run_in_order(settings):
    calls = []
    first = SpyMiddleware("first", calls)
    second = SpyMiddleware("second", calls)
    client = HttpClient(settings, middlewares=[first, second], transport=MockTransport())

    await client.post("https://api.test/items", json={"name": "x"})

    assert [(name, hook) for name, hook, _, _ in calls] == [
        ("first", "request"),
        ("second", "request"),
        ("first", "response"),
        ("second", "response"),
    ]


@pytest.mark.asyncio
async def test_transport_error_reaches_every_middleware_and_is_reraised(settings):
    error = ConnectionError("connection reset")

    async def handler(request):
        raise error

    calls = []
    client = HttpClient(
        settings,
        middlewares=[SpyMiddleware("first", calls), SpyMiddleware("second", calls)],
        transport=MockTransport(handler),
    )

    with pytest.raises(ConnectionError) as exc_info:
        await client.get("https://api.test/items")

    assert exc_info.value is error
    assert [(name, hook) for name, hook, _, _ in calls][2:] == [
        ("first", "error"),
        ("second", "error"),
    ]


@pytest.mark.asyncio
async def test_raise_for_status_logs_error_with_response(settings):
    """
    Test that a 5xx response becomes a ResponseError logged with its response.

    Expected behavior:
    - ResponseError is raised and carries the response
    - LoggerMiddleware emits one error record with the response fields
    - No completion record is emitted
    """

    async def handler(request):
        return httpx.Response(502, headers={"X-Upstream": "down"})

    sink = RecordingSink()
    client = HttpClient(
        settings,
        middlewares=[LoggerMiddleware(sink)],
        transport=MockTransport(handler),
        raise_for_status=True,
    )

    with pytest.raises(ResponseError) as exc_info:
        await client.get("https://api.test/items")

    assert exc_info.value.response.status_code == 502
    assert len(sink.records) == 1
    level, message, context = sink.records[0]
    assert level == "error"
    assert "502 Bad Gateway" in message
    assert context["error"]["code"] == 502
    assert context["response"]["status_code"] == 502
    assert context["response"]["status_reason"] == "Bad Gateway"
    assert context["response"]["headers"]["X-Upstream"] == ["down"]


@pytest.mark.asyncio
async def test_client_uses_settings_options_by_default():
    settings = LoggerSettings(
        level="info",
        url_level="debug",
        ignore_headers=["Authorization"],
        ignore_uri_query_items=["api_key"],
    )
    sink = RecordingSink()
    client = HttpClient(settings, middlewares=[LoggerMiddleware(sink)], transport=MockTransport())

    await client.get(
        "https://api.test/items?api_key=secret&q=1",
        headers={"Authorization": "Bearer x", "Accept": "application/json"},
    )

    assert sink.levels == ["debug", "info"]
    _, _, context = sink.records[-1]
    assert context["request"]["uri"] == "https://api.test/items?q=1"
    assert "Authorization" not in context["request"]["headers"]
    assert context["request"]["headers"]["Accept"] == ["application/json"]
    assert context["request"]["headers"]["Host"] == ["api.test"]
    assert context["response"]["status_code"] == 200


@pytest.mark.asyncio
async def test_per_call_options_override_defaults(settings):
    sink = RecordingSink()
    client = HttpClient(settings, middlewares=[LoggerMiddleware(sink)], transport=MockTransport())

    await client.get("https://api.test/items", options={})

    assert sink.records == []


@pytest.mark.asyncio
async def test_client_returns_httpx_response(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, headers={"X-Bar": "foo"}, json=[1, 2])

    sink = RecordingSink()

    async with HttpClient(
        settings, middlewares=[LoggerMiddleware(sink)], transport=MockTransport(handler)
    ) as client:
        response = await client.get("https://api.test/items")
        assert response.json() == [1, 2]

    assert sink.records[0][2]["response"]["headers"]["X-Bar"] == ["foo"]


@pytest.mark.asyncio
async def test_client_close():
    transport = MockTransport()
    client = HttpClient(LoggerSettings(), transport=transport)

    await client.aclose()

    assert transport.closed
