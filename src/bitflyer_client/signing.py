"""
Request signing for private endpoints.

bitFlyer authenticates private calls with three headers: the API key, the
Unix timestamp of the request, and an HMAC-SHA256 signature (lowercase
hex) over the concatenation::

    timestamp + METHOD + PATH + ("?" + query if query else "") + body

The exchange rebuilds the same string server-side, so the order of the
pieces must not change.  A new timestamp is taken for every call, so two
signatures for the same request are not expected to match.
"""

from __future__ import annotations

import hashlib
import hmac
import time
from typing import Callable, Dict, Optional

from .errors import AuthError

ACCESS_KEY = "ACCESS-KEY"
ACCESS_TIMESTAMP = "ACCESS-TIMESTAMP"
ACCESS_SIGN = "ACCESS-SIGN"


def canonical_string(
    timestamp: int, method: str, path: str, query: str = "", body: Optional[str] = None
) -> str:
    """Build the exact text that is fed into the HMAC."""
    query_part = f"?{query}" if query else ""
    return f"{timestamp}{method.upper()}{path}{query_part}{body or ''}"


class HmacSigner:
    """HMAC-SHA256 signer holding the caller's API key and shared secret.

    The signer is immutable after construction and may be shared by any
    number of concurrent calls.
    """

    def __init__(
        self,
        api_key: str = "",
        api_secret: Optional[str] = None,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.api_key = api_key
        self._secret = api_secret.encode() if api_secret else None
        self._clock = clock

    @property
    def has_secret(self) -> bool:
        return self._secret is not None

    def _require_secret(self) -> bytes:
        if self._secret is None:
            raise AuthError("credentials required for private endpoint")
        return self._secret

    def sign(
        self, timestamp: int, method: str, path: str, query: str = "", body: Optional[str] = None
    ) -> str:
        """Return the lowercase hex HMAC-SHA256 digest for the request."""
        secret = self._require_secret()
        message = canonical_string(timestamp, method, path, query, body).encode()
        return hmac.new(secret, message, hashlib.sha256).hexdigest()

    def get_headers(
        self,
        method: str,
        path: str,
        query: str = "",
        body: Optional[str] = None,
        *,
        timestamp: Optional[int] = None,
    ) -> Dict[str, str]:
        """Return the authentication headers for one request.

        Args:
            method: HTTP method, e.g. ``"POST"``.
            path: Request path without origin or query, e.g. ``"/v1/me/getbalance"``.
            query: Encoded query string without the leading ``?``.
            body: Serialized request body, if any.
            timestamp: Override for the signing time; defaults to now.

        Raises:
            AuthError: if no shared secret was configured.
        """
        self._require_secret()
        ts = int(self._clock()) if timestamp is None else timestamp
        return {
            ACCESS_KEY: self.api_key,
            ACCESS_TIMESTAMP: str(ts),
            ACCESS_SIGN: self.sign(ts, method, path, query, body),
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(api_key=..., has_secret={self.has_secret})"


__all__ = ["ACCESS_KEY", "ACCESS_TIMESTAMP", "ACCESS_SIGN", "canonical_string", "HmacSigner"]
