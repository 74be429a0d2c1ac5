"""
Exception hierarchy for the bitFlyer client.

Every failure raised by the client derives from :class:`BitflyerError` so
callers can catch the whole family in one place, while the subclasses let
them tell a misconfigured call (:class:`AuthError`), a rejected call
(:class:`HttpError`) and an unexpected payload (:class:`DecodeError`)
apart.  Nothing in this package retries; the exception carries enough
context (status, raw body, offending value) to diagnose the failure
without re-issuing the request.
"""

from __future__ import annotations

from typing import Any, Optional


class BitflyerError(Exception):
    """Base class for all client errors."""


class AuthError(BitflyerError):
    """A private endpoint was called without a configured signing secret."""


class UrlBuildError(BitflyerError):
    """The request URL could not be assembled."""


class SerializationError(BitflyerError):
    """A request field could not be encoded to its wire form."""


class HttpError(BitflyerError):
    """The exchange answered with a non-success status code.

    Attributes:
        status: HTTP status code returned by the exchange.
        request: The request descriptor that was sent.
        request_body: The serialized request payload, if any.
        body: The raw response text, untouched.
    """

    def __init__(
        self,
        status: int,
        request: Any,
        body: str,
        request_body: Optional[str] = None,
    ) -> None:
        self.status = status
        self.request = request
        self.request_body = request_body
        self.body = body
        super().__init__(
            f"request failed: status={status} request={request!r} "
            f"request_body={request_body!r} response={body!r}"
        )


class DecodeError(BitflyerError):
    """A response body (or a value inside it) did not match the expected shape.

    ``raw_body`` holds the full response text when the failure happened
    while decoding a response; ``value`` holds the offending fragment
    (e.g. an unparseable timestamp string) when one is known.
    """

    def __init__(
        self,
        message: str,
        *,
        raw_body: Optional[str] = None,
        value: Optional[str] = None,
    ) -> None:
        self.raw_body = raw_body
        self.value = value
        super().__init__(message)


class UnexpectedBodyError(DecodeError):
    """An endpoint whose success response is empty returned content."""


class ConfigError(BitflyerError):
    """Client settings read from the environment are invalid."""


__all__ = [
    "BitflyerError",
    "AuthError",
    "UrlBuildError",
    "SerializationError",
    "HttpError",
    "DecodeError",
    "UnexpectedBodyError",
    "ConfigError",
]
