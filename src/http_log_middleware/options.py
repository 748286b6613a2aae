"""
Per-call options for LoggerMiddleware.

Options are passed to every hook as a mapping keyed by the middleware
class, so several middlewares can share one options object:

    options = {
        LoggerMiddleware: {
            LEVEL: "debug",
            ERROR_LEVEL: "error",
            IGNORE_HEADERS: ["Authorization"],
            IGNORE_URI_QUERY_ITEMS: ["api_key"],
        }
    }

A missing key disables the matching behaviour. There are no on/off flags.
"""

from collections.abc import Mapping
from typing import Any, Optional, Union

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import field_validator

from .sink import to_logging_level

LEVEL = "level"
ERROR_LEVEL = "error_level"
URL_LEVEL = "url_level"
MESSAGE_PRE = "message_pre"
MESSAGE_POST = "message_post"
MESSAGE_ERROR = "message_error"
IGNORE_HEADERS = "ignore_headers"
IGNORE_URI_QUERY_ITEMS = "ignore_uri_query_items"

DEFAULT_MESSAGE_PRE = "Requesting {{transaction_id}}: {{request.uri}}"
DEFAULT_MESSAGE_POST = (
    "Request {{transaction_id}} completed with {{response.status_code}}"
)
DEFAULT_MESSAGE_ERROR = "Request {{transaction_id}} failed: {{error.message}}"

# PSR-3 style names ("debug", "notice", ...) or stdlib logging levels
Level = Union[str, int]


def check_level(value: Optional[Level]) -> Optional[Level]:
    """Reject level names no sink could map, so bad options fail before logging starts."""
    if value is not None:
        to_logging_level(value)
    return value


class LoggerOptions(BaseModel):
    """Validated view of the options section that belongs to LoggerMiddleware."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    level: Optional[Level] = None
    error_level: Optional[Level] = None
    url_level: Optional[Level] = None
    message_pre: str = DEFAULT_MESSAGE_PRE
    message_post: str = DEFAULT_MESSAGE_POST
    message_error: str = DEFAULT_MESSAGE_ERROR
    ignore_headers: frozenset[str] = frozenset()
    ignore_uri_query_items: frozenset[str] = frozenset()

    @field_validator("level", "error_level", "url_level")
    @classmethod
    def known_level(cls, value: Optional[Level]) -> Optional[Level]:
        return check_level(value)

    @property
    def logging_enabled(self) -> bool:
        """A context is only worth keeping when a completion or error record can follow."""
        return self.level is not None or self.error_level is not None

    @classmethod
    def from_options(
        cls, options: Optional[Mapping[Any, Any]], key: Any
    ) -> "LoggerOptions":
        section = (options or {}).get(key) or {}
        if isinstance(section, cls):
            return section
        return cls.model_validate(section)
