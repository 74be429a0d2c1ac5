"""
Query string construction.

Descriptors declare their query parameters as an ordered list of
``query_param(name, value)`` results.  Absent values become ``None`` and
are dropped by :func:`build_query`; present values are rendered with
:func:`to_query_value` and URL-encoded in declaration order.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, List, Optional, Tuple
from urllib.parse import urlencode

from .models import wire_value

QueryPair = Tuple[str, str]


def to_query_value(value: Any) -> str:
    """Render a parameter value in its canonical textual form."""
    if isinstance(value, Enum):
        return wire_value(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Decimal):
        return format(value, "f")
    return str(value)


def query_param(name: str, value: Any) -> Optional[QueryPair]:
    """Return ``(name, rendered value)`` or ``None`` when ``value`` is absent."""
    if value is None:
        return None
    return name, to_query_value(value)


def build_query(params: Iterable[Optional[QueryPair]]) -> str:
    """Encode the present pairs into a query string (without the leading ``?``)."""
    pairs: List[QueryPair] = [pair for pair in params if pair is not None]
    if not pairs:
        return ""
    return urlencode(pairs)


__all__ = ["QueryPair", "to_query_value", "query_param", "build_query"]
