"""
Middleware interface driven by HttpClient.

This module defines the `Middleware` protocol: three hooks that follow one
transaction through its lifecycle. The host pipeline guarantees that
`on_request` runs once per transaction before either `on_response` or
`on_error`, and that exactly one of those two follows for the same
transaction id.

Current implementations:
- Logging (see: LoggerMiddleware) - structured request/response/error records
"""

from collections.abc import Mapping
from typing import Any
from typing import NoReturn
from typing import Protocol


class Middleware(Protocol):
    async def on_request(
        self,
        request: Any,
        transaction_id: str,
        options: Mapping[Any, Any] | None = None,
    ) -> Any:
        """
        Called before the HTTP request is executed.

        Args:
            request: The outgoing request (httpx.Request from HttpClient, or any client request object)
            transaction_id (str): Id shared by the hooks of this transaction
            options (Mapping | None): Per-call options keyed by middleware class

        Returns:
            The request to send on to the next middleware
        """

    async def on_response(
        self,
        response: Any,
        transaction_id: str,
        options: Mapping[Any, Any] | None = None,
    ) -> Any:
        """
        Called after the HTTP response is received (but before it's parsed).

        Returns:
            The response to hand on to the next middleware
        """

    async def on_error(
        self,
        error: BaseException,
        transaction_id: str,
        options: Mapping[Any, Any] | None = None,
    ) -> NoReturn:
        """
        Called when the request failed. Must re-raise ``error``.
        """
