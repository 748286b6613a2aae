"""
Command-line interface for http-log-middleware.

Sends a single HTTP request through HttpClient with LoggerMiddleware enabled
and prints the resulting log records. Handy for checking which headers and
query items end up in the logs before wiring the middleware into a service.

Available commands:
- request: Send a request and log the transaction
"""

import asyncio
import json
import logging
import sys

import click

from .client import HttpClient
from .config import LoggerSettings
from .logging_middleware import LoggerMiddleware
from .sink import StdlibLoggerSink

# Configure logging
logging.basicConfig(level=logging.DEBUG, format="%(levelname)s: %(message)s")
logger = logging.getLogger("http_log_middleware.cli")


class EchoContextSink(StdlibLoggerSink):
    """Stdlib sink that also prints the structured context of each record."""

    def log(self, level, message, context):
        super().log(level, message, context)
        click.echo(json.dumps(context, indent=2, default=str))


def _parse_header(value: str) -> tuple[str, str]:
    name, sep, content = value.partition(":")
    if not sep or not name.strip():
        raise click.BadParameter(f"Expected 'Name: value', got {value!r}")
    return name.strip(), content.strip()


@click.group()
def cli():
    """http-log CLI"""
    pass


@cli.command()
@click.argument("method")
@click.argument("url")
@click.option("--header", "-H", "headers", multiple=True, help="Request header as 'Name: value'")
@click.option("--level", default=None, help="Level for completion records, e.g. debug")
@click.option("--error-level", default=None, help="Level for error records, e.g. error")
@click.option("--url-level", default=None, help="Level for the pre-request record")
@click.option("--ignore-header", "ignore_headers", multiple=True, help="Header name to leave out of the logs")
@click.option("--ignore-query", "ignore_query", multiple=True, help="Query key to strip from the logged URI")
@click.option("--message-pre", default=None, help="Template for the pre-request record")
@click.option("--message-post", default=None, help="Template for the completion record")
@click.option("--message-error", default=None, help="Template for the error record")
@click.option("--timeout", default=None, type=float, help="Request timeout in seconds")
@click.option("--show-context/--no-show-context", default=False, help="Print the structured context as JSON")
def request(
    method,
    url,
    headers,
    level,
    error_level,
    url_level,
    ignore_headers,
    ignore_query,
    message_pre,
    message_post,
    message_error,
    timeout,
    show_context,
):
    """Send METHOD URL and log the transaction."""
    overrides = {
        "level": level,
        "error_level": error_level,
        "url_level": url_level,
        "message_pre": message_pre,
        "message_post": message_post,
        "message_error": message_error,
        "timeout": timeout,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    if ignore_headers:
        overrides["ignore_headers"] = list(ignore_headers)
    if ignore_query:
        overrides["ignore_uri_query_items"] = list(ignore_query)

    settings = LoggerSettings(**overrides)
    sink_class = EchoContextSink if show_context else StdlibLoggerSink
    parsed_headers = dict(_parse_header(value) for value in headers)

    async def _run():
        middleware = LoggerMiddleware(sink_class(settings.logger_name))
        async with HttpClient(settings, middlewares=[middleware]) as client:
            return await client.request(method, url, headers=parsed_headers)

    try:
        response = asyncio.run(_run())
    except Exception as e:
        logger.error(f"Request failed: {e}")
        sys.exit(1)

    click.echo(f"{response.status_code} {response.reason_phrase}")


if __name__ == "__main__":
    cli()
