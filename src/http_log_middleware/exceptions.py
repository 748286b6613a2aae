"""
Custom exceptions for http-log-middleware.
Also defines the optional capabilities LoggerMiddleware looks for on errors.
"""

from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class HasResponse(Protocol):
    """An error that carries the HTTP response it was raised for."""

    response: Any


@runtime_checkable
class HasContext(Protocol):
    """An error that carries structured details worth logging."""

    context: Any


class HttpLogError(Exception):
    """
    Base exception for all package-level failures.

    Args:
        message (str): Short explanation of the error.
        context (Any | None): Optional structured details, logged with the error.
    """

    def __init__(self, message: str, context: Optional[Any] = None):
        super().__init__(message)
        self.context = context


class DuplicateTransactionError(HttpLogError):
    """Raised when a transaction id is reused while its context is still live."""

    def __init__(self, transaction_id: str):
        super().__init__(
            f"Transaction {transaction_id} already has a live context.",
            context={"transaction_id": transaction_id},
        )
        self.transaction_id = transaction_id


class ResponseError(HttpLogError):
    """
    Raised by HttpClient for error status codes when ``raise_for_status`` is set.

    Args:
        message (str): Short explanation of the error.
        response: The response that triggered the error.
        context (Any | None): Optional structured details.
    """

    def __init__(self, message: str, response: Any, context: Optional[Any] = None):
        super().__init__(message, context=context)
        self.response = response
        self.code = response.status_code
