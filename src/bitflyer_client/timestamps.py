"""
Timestamp decoding for exchange payloads.

bitFlyer emits instants in two shapes: a full ISO-8601 string with an
offset (``2015-07-08T02:50:59.97+09:00``) and, for most market data, the
same string without any offset (``2015-07-08T02:50:59.97``) which is meant
to be read as UTC.  :func:`parse_timestamp` accepts both by trying the
offset-aware form first and, on failure, retrying once with ``+00:00``
appended.  The result is always a timezone-aware ``datetime`` in UTC.

The module also exposes pydantic annotated aliases (:data:`Timestamp` and
:data:`OptionalTimestamp`) so that model fields can opt into the codec
declaratively.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Annotated, Any, Optional

from pydantic import AwareDatetime, BeforeValidator, TypeAdapter, ValidationError

from .errors import DecodeError

#: Suffix appended on the second parse attempt.
UTC_SUFFIX = "+00:00"

_aware = TypeAdapter(AwareDatetime)

# date and time of day are both required; bare dates and epoch numbers are not timestamps
_ISO_DATETIME = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}")


def _parse_aware(text: str) -> datetime:
    return _aware.validate_python(text)


def parse_timestamp(value: Any) -> datetime:
    """Decode an exchange timestamp string into a UTC ``datetime``.

    Raises:
        DecodeError: if ``value`` is not a string or neither parse attempt
            succeeds.  The offending value is attached as ``value``.
    """
    if isinstance(value, datetime) and value.tzinfo is not None:
        return value.astimezone(timezone.utc)
    if not isinstance(value, str):
        raise DecodeError(f"expected a timestamp string, got {value!r}", value=repr(value))
    if not _ISO_DATETIME.match(value):
        raise DecodeError(f"invalid timestamp {value!r}", value=value)
    try:
        parsed = _parse_aware(value)
    except ValidationError:
        try:
            parsed = _parse_aware(f"{value}{UTC_SUFFIX}")
        except ValidationError as exc:
            raise DecodeError(f"invalid timestamp {value!r}", value=value) from exc
    return parsed.astimezone(timezone.utc)


def parse_optional_timestamp(value: Any) -> Optional[datetime]:
    """Like :func:`parse_timestamp` but maps ``None`` (JSON ``null``) to ``None``."""
    if value is None:
        return None
    return parse_timestamp(value)


def _validate_timestamp(value: Any) -> datetime:
    # pydantic only turns ValueError into a field error
    try:
        return parse_timestamp(value)
    except DecodeError as exc:
        raise ValueError(str(exc)) from exc


def _validate_optional_timestamp(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    return _validate_timestamp(value)


Timestamp = Annotated[datetime, BeforeValidator(_validate_timestamp)]
OptionalTimestamp = Annotated[Optional[datetime], BeforeValidator(_validate_optional_timestamp)]


__all__ = [
    "UTC_SUFFIX",
    "parse_timestamp",
    "parse_optional_timestamp",
    "Timestamp",
    "OptionalTimestamp",
]
