"""
Message templates for LoggerMiddleware.

Templates are plain strings with ``{{dotted.path}}`` placeholders that are
resolved against a transaction context at emission time:

    render("Request {{transaction_id}} completed with {{response.status_code}}", context)

Rules:
- Placeholders match non-greedily, so ``{{a}} and {{b}}`` is two placeholders
- Every distinct placeholder is resolved before anything is substituted
- Missing paths render as an empty string, rendering never raises
"""

import json
import re
from collections.abc import Mapping
from collections.abc import Sequence
from typing import Any

PLACEHOLDER = re.compile(r"\{\{(.+?)\}\}")

_MISSING = object()


def resolve(context: Any, path: str) -> Any:
    """
    Walk a dotted path through nested mappings and lists.

    Integer segments index into lists. Returns ``None`` when any segment
    is missing.
    """
    current = context
    for segment in path.split("."):
        if isinstance(current, Mapping):
            current = current.get(segment, _MISSING)
        elif isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
            try:
                current = current[int(segment)]
            except (ValueError, IndexError):
                current = _MISSING
        else:
            current = _MISSING

        if current is _MISSING:
            return None
    return current


def _format(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        if all(isinstance(item, (str, int, float)) for item in value):
            return ", ".join(str(item) for item in value)
    try:
        return json.dumps(value, default=str)
    except (TypeError, ValueError):
        return str(value)


def render(template: str, context: Mapping[str, Any]) -> str:
    """
    Interpolate ``{{dotted.path}}`` placeholders from ``context``.

    Args:
        template (str): Message template
        context (Mapping): Nested transaction context

    Returns:
        str: The rendered message
    """
    values = {
        placeholder: _format(resolve(context, placeholder.strip()))
        for placeholder in set(PLACEHOLDER.findall(template))
    }
    if not values:
        return template
    return PLACEHOLDER.sub(lambda match: values[match.group(1)], template)
