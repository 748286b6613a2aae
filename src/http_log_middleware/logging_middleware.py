"""
Logging middleware for http-log-middleware.

This module provides LoggerMiddleware, which follows each transaction
through its three hooks and emits structured records to a logger sink.

Features:
- Optional "requesting" record before the request is sent
- One completion or error record per transaction with request and response facts
- Header and query item filtering for sensitive values
- Message templates with {{dotted.path}} placeholders
- Never changes the request or response, never swallows errors
"""

import logging
from collections.abc import Mapping
from typing import Any, NoReturn, Optional

from pydantic import ValidationError

from .context_store import ContextStore
from .context_store import MemoryContextStore
from .exceptions import HasResponse
from .headers import filter_headers
from .models import ErrorRecord
from .models import RequestRecord
from .models import ResponseRecord
from .models import TransactionContext
from .options import LoggerOptions
from .sink import LoggerSink
from .sink import StdlibLoggerSink
from .templates import render
from .messages import UnifiedRequest
from .messages import UnifiedResponse
from .messages import is_response
from .uri import sanitize_uri

logger = logging.getLogger("http_log_middleware.middleware")


class LoggerMiddleware:
    """
    Middleware that logs HTTP transactions to a sink.

    Options are looked up under the ``LoggerMiddleware`` key of the options
    mapping passed to each hook (see `http_log_middleware.options`).

    Args:
        sink (LoggerSink | None): Receives ``log(level, message, context)``.
            Defaults to the "http_log_middleware.transactions" stdlib logger.
        store (ContextStore | None): Holds contexts between hooks.
            Defaults to a private in-memory store.
    """

    def __init__(
        self,
        sink: Optional[LoggerSink] = None,
        store: Optional[ContextStore] = None,
    ):
        self.sink = sink or StdlibLoggerSink()
        self.store = store or MemoryContextStore()

    async def on_request(
        self,
        request: Any,
        transaction_id: str,
        options: Optional[Mapping[Any, Any]] = None,
    ) -> Any:
        settings = LoggerOptions.from_options(options, LoggerMiddleware)
        if not settings.logging_enabled:
            return request

        message = UnifiedRequest.wrap(request)
        record = RequestRecord(
            method=message.method,
            uri=sanitize_uri(message.url, settings.ignore_uri_query_items),
            protocol_version=message.protocol_version,
            headers=filter_headers(message.headers, settings.ignore_headers),
        )
        context = await self.store.create(transaction_id, record)

        if settings.url_level is not None:
            self._emit(settings.url_level, settings.message_pre, context)

        return request

    async def on_response(
        self,
        response: Any,
        transaction_id: str,
        options: Optional[Mapping[Any, Any]] = None,
    ) -> Any:
        context = await self.store.get(transaction_id)
        if context is None:
            logger.debug(f"No context for transaction {transaction_id}, skipping")
            return response

        # A transaction that produced a response is finished either way
        await self.store.retire(transaction_id)

        settings = LoggerOptions.from_options(options, LoggerMiddleware)
        if settings.level is None:
            return response

        self._add_response(context, response, settings)
        self._emit(settings.level, settings.message_post, context)

        return response

    async def on_error(
        self,
        error: BaseException,
        transaction_id: str,
        options: Optional[Mapping[Any, Any]] = None,
    ) -> NoReturn:
        context = await self.store.get(transaction_id)
        if context is None:
            logger.debug(f"No context for transaction {transaction_id}, skipping")
            raise error

        await self.store.retire(transaction_id)

        settings: Optional[LoggerOptions] = None
        try:
            settings = LoggerOptions.from_options(options, LoggerMiddleware)
        except ValidationError as e:
            logger.warning(f"Invalid options for transaction {transaction_id}: {e}")

        if settings is None or settings.error_level is None:
            raise error

        # botocore style errors carry a dict in .response
        if isinstance(error, HasResponse) and is_response(error.response):
            self._add_response(context, error.response, settings)
        context.error = ErrorRecord.from_exception(error)
        self._emit(settings.error_level, settings.message_error, context)

        raise error

    def _add_response(
        self, context: TransactionContext, response: Any, settings: LoggerOptions
    ):
        message = UnifiedResponse.wrap(response)
        context.response = ResponseRecord(
            status_code=message.status_code,
            status_reason=message.reason,
            protocol_version=message.protocol_version,
            headers=filter_headers(message.headers, settings.ignore_headers),
        )

    def _emit(self, level: Any, template: str, context: TransactionContext):
        data = context.to_dict()
        self.sink.log(level, render(template, data), data)
