"""
Header helpers for LoggerMiddleware.

HTTP clients expose headers in different containers (httpx.Headers,
aiohttp multidicts, requests' CaseInsensitiveDict, plain dicts).
`normalize_headers` turns any of them into an ordered mapping of
name -> list of values with the original casing kept, and
`filter_headers` drops the names a caller asked to hide.
"""

from collections.abc import Collection
from collections.abc import Iterable
from collections.abc import Mapping
from typing import Any

HeaderMap = dict[str, list[str]]


def _decode(value: Any) -> str:
    if isinstance(value, bytes):
        return value.decode("latin-1")
    return str(value)


def normalize_headers(headers: Any) -> HeaderMap:
    """
    Convert a header container into ``{name: [values]}``.

    Repeated names are merged into one list in the order they were seen.
    """
    if headers is None:
        return {}

    # httpx keeps the original casing only in .raw
    raw = getattr(headers, "raw", None)
    if isinstance(raw, list):
        items: Iterable = raw
    elif isinstance(headers, Mapping) or hasattr(headers, "items"):
        items = headers.items()
    else:
        items = headers

    normalized: HeaderMap = {}
    for name, value in items:
        if isinstance(value, (str, bytes)):
            values = [_decode(value)]
        else:
            values = [_decode(v) for v in value]
        normalized.setdefault(_decode(name), []).extend(values)
    return normalized


def filter_headers(
    headers: Mapping[str, list[str]], excluded: Collection[str]
) -> HeaderMap:
    """
    Drop every header whose name is in ``excluded``.

    Matching is exact and case-sensitive. Order and values are kept as is.

    Args:
        headers (Mapping): Normalized headers
        excluded (Collection[str]): Header names to leave out

    Returns:
        dict: A new header mapping
    """
    return {
        name: list(values) for name, values in headers.items() if name not in excluded
    }
