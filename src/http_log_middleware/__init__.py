"""
http-log-middleware - structured transaction logging for HTTP clients.

This package provides:
- LoggerMiddleware that correlates request, response and error hooks
- Header and query string filtering for sensitive values
- {{dotted.path}} message templates rendered against the transaction context
- A stdlib logging sink and an httpx based HttpClient host pipeline
"""

from .client import HttpClient
from .config import LoggerSettings
from .context_store import ContextStore
from .context_store import MemoryContextStore
from .exceptions import DuplicateTransactionError
from .exceptions import HasContext
from .exceptions import HasResponse
from .exceptions import HttpLogError
from .exceptions import ResponseError
from .headers import filter_headers
from .logging_middleware import LoggerMiddleware
from .middleware import Middleware
from .models import TransactionContext
from .options import LoggerOptions
from .sink import LoggerSink
from .sink import StdlibLoggerSink
from .templates import render
from .uri import sanitize_uri

__version__ = "1.0.0"

__all__ = [
    "LoggerMiddleware",
    "LoggerOptions",
    "LoggerSettings",
    "HttpClient",
    "Middleware",
    "ContextStore",
    "MemoryContextStore",
    "TransactionContext",
    "LoggerSink",
    "StdlibLoggerSink",
    "HttpLogError",
    "DuplicateTransactionError",
    "ResponseError",
    "HasResponse",
    "HasContext",
    "filter_headers",
    "sanitize_uri",
    "render",
]
