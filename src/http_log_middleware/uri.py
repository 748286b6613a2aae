"""
Query string sanitizing for logged URIs.

`sanitize_uri` removes query items such as api keys or signatures before a
URI ends up in a log record. Array-style keys (``tag[]=a&tag[]=b``) are
removed together with their plain name.
"""

from collections.abc import Collection
from typing import Any

import httpx


def sanitize_uri(uri: Any, excluded: Collection[str] | None) -> str:
    """
    Return ``uri`` without the query items named in ``excluded``.

    Remaining items keep their relative order. Only the text between ``?``
    and ``#`` is rewritten, so scheme, authority, path and fragment stay
    byte for byte as given. A URI with nothing to remove is returned as is.

    Args:
        uri: URI as a string or httpx.URL
        excluded (Collection[str] | None): Query keys to remove

    Returns:
        str: The sanitized URI
    """
    uri = str(uri)
    if not excluded:
        return uri

    rest, hash_mark, fragment = uri.partition("#")
    prefix, _, query = rest.partition("?")
    if not query:
        return uri

    items = httpx.QueryParams(query).multi_items()
    kept = [
        (key, value)
        for key, value in items
        if key not in excluded
        and not (key.endswith("[]") and key[:-2] in excluded)
    ]
    if len(kept) == len(items):
        return uri

    sanitized = prefix
    if kept:
        sanitized += "?" + str(httpx.QueryParams(kept))
    return sanitized + hash_mark + fragment
