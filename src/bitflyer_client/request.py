"""
The request descriptor contract.

Every API operation is a frozen pydantic model deriving from
:class:`ApiRequest`.  The class declares where and how it is sent
(``PATH``, ``METHOD``, ``IS_PRIVATE``) and what comes back (``RESPONSE``);
instances carry the per-call parameters.  :class:`~bitflyer_client.client.BitflyerClient`
only ever talks to descriptors through the methods defined here.
"""

from __future__ import annotations

import functools
import json
from decimal import Decimal
from enum import Enum
from typing import Any, ClassVar, List, Mapping, Optional
from urllib.parse import urlsplit

from pydantic import TypeAdapter

from .errors import DecodeError, SerializationError, UnexpectedBodyError, UrlBuildError
from .models import Empty, Frozen, wire_value
from .query import QueryPair, build_query

ENTRY_POINT = "https://api.bitflyer.com"


@functools.lru_cache(maxsize=None)
def _adapter(shape: Any) -> TypeAdapter:
    return TypeAdapter(shape)


def encode_json(value: Any) -> str:
    """Serialize ``value`` to compact JSON, writing decimals as exact numbers.

    The standard encoder would either reject :class:`~decimal.Decimal` or
    go through ``float``; prices and sizes must reach the exchange digit for
    digit.
    """
    if isinstance(value, Mapping):
        items = (f"{json.dumps(str(key))}:{encode_json(item)}" for key, item in value.items())
        return "{" + ",".join(items) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(encode_json(item) for item in value) + "]"
    if isinstance(value, Enum):
        return json.dumps(wire_value(value))
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise SerializationError(f"cannot encode non-finite decimal {value}")
        return format(value, "f")
    if value is None or isinstance(value, (bool, int, float, str)):
        return json.dumps(value)
    raise SerializationError(f"cannot encode value of type {type(value).__name__}")


class ApiRequest(Frozen):
    """Base class for endpoint descriptors.

    Subclasses set ``PATH`` and ``RESPONSE`` and, where needed,
    ``METHOD`` and ``IS_PRIVATE``.  Those with query parameters override
    :meth:`url_params`.
    """

    PATH: ClassVar[str]
    METHOD: ClassVar[str] = "GET"
    IS_PRIVATE: ClassVar[bool] = False
    RESPONSE: ClassVar[Any] = Any

    def url_params(self) -> List[Optional[QueryPair]]:
        """Ordered query parameters; ``None`` entries are dropped."""
        return []

    def query_string(self) -> str:
        return build_query(self.url_params())

    def url(self, base_url: str = ENTRY_POINT) -> str:
        """Absolute request URL: origin, ``PATH`` and the filtered query."""
        url = f"{base_url.rstrip('/')}{self.PATH}"
        query = self.query_string()
        if query:
            url = f"{url}?{query}"
        try:
            parts = urlsplit(url)
        except ValueError as exc:
            raise UrlBuildError(f"invalid url {url!r}") from exc
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise UrlBuildError(f"invalid url {url!r}")
        return url

    def body(self) -> Optional[str]:
        """Serialized payload; ``None`` means the request has no body."""
        return None

    def decode_response(self, raw: str) -> Any:
        """Decode the raw response text into ``RESPONSE``.

        JSON numbers with a fractional part are parsed as
        :class:`~decimal.Decimal`.

        Raises:
            DecodeError: the body is not JSON or does not fit ``RESPONSE``
                (missing fields, unknown tags, bad timestamps).  The full
                text is kept as ``raw_body``.
        """
        try:
            data = json.loads(raw, parse_float=Decimal)
            return _adapter(self.RESPONSE).validate_python(data)
        except ValueError as exc:
            raise DecodeError(
                f"cannot decode response from {self.METHOD} {self.PATH}: {exc}", raw_body=raw
            ) from exc


class JsonBodyRequest(ApiRequest):
    """Descriptor whose fields are sent as a JSON body."""

    METHOD: ClassVar[str] = "POST"

    def body(self) -> Optional[str]:
        try:
            payload = self.model_dump(mode="python", exclude_none=True)
        except (TypeError, ValueError) as exc:
            raise SerializationError(f"cannot serialize {type(self).__name__}: {exc}") from exc
        return encode_json(payload)


class EmptyResponseRequest(ApiRequest):
    """Descriptor whose success response carries no content."""

    RESPONSE: ClassVar[Any] = Empty

    def decode_response(self, raw: str) -> Empty:
        if raw:
            raise UnexpectedBodyError(
                f"expected an empty body from {self.PATH}, got {len(raw)} characters",
                raw_body=raw,
            )
        return Empty()


__all__ = [
    "ENTRY_POINT",
    "encode_json",
    "ApiRequest",
    "JsonBodyRequest",
    "EmptyResponseRequest",
]
