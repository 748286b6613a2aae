"""
Example usage of LoggerMiddleware with HttpClient.

This example shows the three kinds of records the middleware emits
(pre-request, completion, error) and how sensitive headers and query
items are kept out of the logs.
"""

import asyncio
import logging

from http_log_middleware import HttpClient
from http_log_middleware import LoggerMiddleware
from http_log_middleware import LoggerSettings
from http_log_middleware import ResponseError
from http_log_middleware import StdlibLoggerSink

# Configure logging
logging.basicConfig(level=logging.DEBUG, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


class ContextFilter(logging.Filter):
    """Append the structured context to transaction records."""

    def filter(self, record: logging.LogRecord) -> bool:
        context = getattr(record, "context", None)
        if context is not None:
            record.msg = f"{record.msg} | context={context}"
        return True


async def demonstrate_logging():
    settings = LoggerSettings(
        level="info",
        error_level="error",
        url_level="debug",
        ignore_headers=["Authorization"],
        ignore_uri_query_items=["api_key"],
        message_post="{{request.method}} {{request.uri}} -> {{response.status_code}} {{response.status_reason}}",
    )

    transactions = logging.getLogger(settings.logger_name)
    transactions.addFilter(ContextFilter())

    middleware = LoggerMiddleware(StdlibLoggerSink(transactions))

    async with HttpClient(
        settings, middlewares=[middleware], raise_for_status=True
    ) as client:
        await client.get(
            "https://httpbin.org/get",
            params={"api_key": "secret", "q": "books"},
            headers={"Authorization": "Bearer secret", "Accept": "application/json"},
        )

        try:
            await client.get("https://httpbin.org/status/503")
        except ResponseError as e:
            logger.info(f"Failure was logged and re-raised: {e}")


if __name__ == "__main__":
    asyncio.run(demonstrate_logging())
