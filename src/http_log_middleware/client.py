"""
Async HTTP client that drives the middleware hooks.

This module provides HttpClient, a small host pipeline for LoggerMiddleware
(or any other `Middleware`) on top of httpx.AsyncClient. For every request it:

- Generates a unique transaction id
- Builds the httpx.Request and runs `on_request` for each middleware, in order
- Sends whatever request the last middleware handed back
- Runs `on_response` on success, or `on_error` on failure and re-raises

The client never retries and never alters what middlewares hand back.

Example usage:
    from http_log_middleware import HttpClient, LoggerSettings

    settings = LoggerSettings(level="debug", ignore_headers=["Authorization"])
    async with HttpClient(settings) as client:
        response = await client.get("https://example.com/?api_key=secret")
"""

import logging
import uuid
from collections.abc import Mapping
from typing import Any

import httpx

from .config import LoggerSettings
from .exceptions import ResponseError
from .logging_middleware import LoggerMiddleware
from .middleware import Middleware
from .sink import StdlibLoggerSink

logger = logging.getLogger("http_log_middleware.client")


class HttpClient:
    """
    Async HTTP client with a middleware pipeline.

    Args:
        settings (LoggerSettings | None): Defaults for timeout and logging options.
            Loaded from the environment when omitted.
        middlewares (list[Middleware] | None): Hooks to run around each request.
            Defaults to a single LoggerMiddleware writing to settings.logger_name
        options (Mapping | None): Per-call options used when a request passes none.
            Defaults to settings.to_options()
        raise_for_status (bool): Raise ResponseError for 4xx/5xx responses
        transport (httpx.AsyncBaseTransport | None): Custom httpx transport,
            e.g. httpx.MockTransport in tests
    """

    def __init__(
        self,
        settings: LoggerSettings | None = None,
        middlewares: list[Middleware] | None = None,
        options: Mapping[Any, Any] | None = None,
        raise_for_status: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings or LoggerSettings()
        self._client = httpx.AsyncClient(timeout=self.settings.timeout, transport=transport)
        if middlewares is None:
            middlewares = [LoggerMiddleware(StdlibLoggerSink(self.settings.logger_name))]
        self.middlewares = middlewares
        self.options = options if options is not None else self.settings.to_options()
        self.raise_for_status = raise_for_status

    async def request(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
        data: Any = None,
        options: Mapping[Any, Any] | None = None,
    ) -> httpx.Response:
        """
        Send one request through the middleware pipeline.

        Args:
            method (str): HTTP method, e.g., 'GET', 'POST'
            url (str): Request URL
            headers (Mapping | None): Request headers
            params (Mapping | None): Query parameters, merged into the URL
            json (Any): JSON body payload
            data (Any): Alternative body (e.g., for form-data)
            options (Mapping | None): Middleware options for this call only

        Returns:
            httpx.Response: The response as returned by the last middleware

        Raises:
            ResponseError: On 4xx/5xx when raise_for_status is set
            Exception: Any httpx or transport failure, unchanged
        """
        options = options if options is not None else self.options
        transaction_id = uuid.uuid4().hex

        request = self._client.build_request(
            method, url, headers=headers, params=params, json=json, data=data
        )
        for mw in self.middlewares:
            request = await mw.on_request(request, transaction_id, options)

        try:
            response = await self._client.send(request)
            if self.raise_for_status and response.is_error:
                raise ResponseError(
                    f"{request.method} {request.url} returned "
                    f"{response.status_code} {response.reason_phrase}",
                    response,
                )
        except Exception as error:
            logger.debug(f"Transaction {transaction_id} failed: {error!r}")
            await self._dispatch_error(error, transaction_id, options)
            raise

        for mw in self.middlewares:
            response = await mw.on_response(response, transaction_id, options)
        return response

    async def _dispatch_error(
        self, error: Exception, transaction_id: str, options: Mapping[Any, Any]
    ):
        # Every middleware sees the failure, each one is expected to re-raise it
        for mw in self.middlewares:
            try:
                await mw.on_error(error, transaction_id, options)
            except Exception as raised:
                if raised is not error:
                    raise

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("POST", url, **kwargs)

    async def aclose(self):
        """
        Gracefully close the underlying httpx client and its connections.
        """
        await self._client.aclose()

    async def __aenter__(self) -> "HttpClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
