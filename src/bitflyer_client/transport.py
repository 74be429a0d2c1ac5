"""
HTTP transport used by the dispatch engine.

The client hands a fully built request (method, URL, headers, optional
body) to an :class:`HttpTransport` and gets back the status code and raw
response text.  :class:`AiohttpTransport` is the default implementation;
tests substitute a fake.  Connection handling, TLS and timeouts belong to
the transport; the client never retries.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional

import aiohttp
from yarl import URL

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportResponse:
    status: int
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class HttpTransport:
    """Abstract base class for transports."""

    async def send(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        body: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
    ) -> TransportResponse:
        """Send one request and return its status and body text.

        Subclasses must implement this method.
        """
        raise NotImplementedError

    async def start(self) -> None:
        """Acquire long-lived resources; called when a client enters its context."""

    async def close(self) -> None:
        """Release any resources acquired by :meth:`start`."""


class AiohttpTransport(HttpTransport):
    """Transport backed by :mod:`aiohttp`.

    When ``session`` is supplied it is reused for every call and left open
    for its owner to close.  Otherwise :meth:`start` opens a session owned by
    the transport (closed again by :meth:`close`), and outside of that a
    short-lived session is opened per request.
    """

    def __init__(self, session: Optional[aiohttp.ClientSession] = None) -> None:
        self._session = session
        self._owns_session = False

    async def start(self) -> None:
        if self._session is None:
            self._session = aiohttp.ClientSession()
            self._owns_session = True

    async def close(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None
            self._owns_session = False

    async def send(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        body: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
    ) -> TransportResponse:
        client_timeout = aiohttp.ClientTimeout(total=timeout) if timeout is not None else None
        data = body.encode() if body is not None else None
        # the query is already encoded and signed; it must go out byte for byte
        target = URL(url, encoded=True)
        if self._session is not None:
            return await self._send(self._session, method, target, headers, data, client_timeout)
        async with aiohttp.ClientSession() as session:
            return await self._send(session, method, target, headers, data, client_timeout)

    @staticmethod
    async def _send(
        session: aiohttp.ClientSession,
        method: str,
        url: URL,
        headers: Dict[str, str],
        data: Optional[bytes],
        timeout: Optional[aiohttp.ClientTimeout],
    ) -> TransportResponse:
        kwargs = {"headers": headers, "data": data}
        if timeout is not None:
            kwargs["timeout"] = timeout
        async with session.request(method, url, **kwargs) as resp:
            text = await resp.text()
            return TransportResponse(status=resp.status, text=text)


__all__ = ["TransportResponse", "HttpTransport", "AiohttpTransport"]
