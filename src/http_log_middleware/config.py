"""
Configuration management for http-log-middleware.

This module provides LoggerSettings, which holds the default LoggerMiddleware
options plus the HttpClient timeout and logger name, with support for environment
variables, .env files, and sensible defaults.

Environment variables are automatically loaded with HTTP_LOG_ prefix.
Example: HTTP_LOG_LEVEL=debug
"""

from typing import Any, Optional

from pydantic import Field
from pydantic import field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict

from .logging_middleware import LoggerMiddleware
from .options import DEFAULT_MESSAGE_ERROR
from .options import DEFAULT_MESSAGE_POST
from .options import DEFAULT_MESSAGE_PRE
from .options import Level
from .options import check_level


class LoggerSettings(BaseSettings):
    """
    Default logging options with environment variable support.

    Every logging option is unset by default, which turns logging off.

    Example:
        # From environment
        export HTTP_LOG_LEVEL=debug
        export HTTP_LOG_IGNORE_HEADERS='["Authorization"]'

        # In code
        options = LoggerSettings().to_options()
    """

    level: Optional[Level] = None
    error_level: Optional[Level] = None
    url_level: Optional[Level] = None
    message_pre: str = DEFAULT_MESSAGE_PRE
    message_post: str = DEFAULT_MESSAGE_POST
    message_error: str = DEFAULT_MESSAGE_ERROR
    ignore_headers: list[str] = Field(default_factory=list)
    ignore_uri_query_items: list[str] = Field(default_factory=list)

    timeout: float = 30.0
    logger_name: str = "http_log_middleware.transactions"

    model_config = SettingsConfigDict(
        env_prefix="HTTP_LOG_", env_file=".env", extra="ignore"
    )

    @field_validator("level", "error_level", "url_level")
    @classmethod
    def known_level(cls, value: Optional[Level]) -> Optional[Level]:
        return check_level(value)

    def to_options(self) -> dict[Any, dict[str, Any]]:
        """Build the per-call options mapping, leaving unset levels out."""
        section = self.model_dump(
            include={
                "level",
                "error_level",
                "url_level",
                "message_pre",
                "message_post",
                "message_error",
                "ignore_headers",
                "ignore_uri_query_items",
            },
            exclude_none=True,
        )
        return {LoggerMiddleware: section}
