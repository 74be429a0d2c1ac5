"""
Asynchronous dispatch engine for bitFlyer API descriptors.

:meth:`BitflyerClient.send` takes one descriptor through a fixed sequence:
the URL and body are built, private descriptors are signed, the request is
handed to the transport, and the response is either decoded into the
descriptor's declared shape or rejected with an :class:`HttpError`.  Each
call is a single attempt: there is no retry, backoff or rate limiting, and
the caller owns any retry policy.

The client keeps only read-only state (config, signer, transport) so one
instance can serve any number of concurrent calls::

    async with BitflyerClient(ClientConfig.from_env()) as client:
        ticker, board = await asyncio.gather(
            client.send(GetTicker(product_code=ProductCode.BTC_JPY)),
            client.send(GetBoard(product_code=ProductCode.BTC_JPY)),
        )
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

from . import metrics
from .config import ClientConfig
from .errors import AuthError, DecodeError, HttpError
from .request import ApiRequest
from .signing import HmacSigner
from .transport import AiohttpTransport, HttpTransport

logger = logging.getLogger(__name__)

#: Response bodies are cut to this many characters in log lines.
LOG_BODY_LIMIT = 200


class BitflyerClient:
    """Send request descriptors to the bitFlyer REST API."""

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        transport: Optional[HttpTransport] = None,
        signer: Optional[HmacSigner] = None,
    ) -> None:
        """Construct the client.

        Args:
            config: Credentials, origin and default timeout.  Defaults to an
                anonymous config that can only call public endpoints.
            transport: HTTP transport; defaults to :class:`AiohttpTransport`.
            signer: Override for the request signer; by default one is built
                from ``config``.
        """
        self.config = config or ClientConfig()
        if signer is None:
            secret = self.config.api_secret.get_secret_value() if self.config.api_secret else None
            signer = HmacSigner(self.config.api_key, secret)
        self.signer = signer
        self.transport = transport or AiohttpTransport()

    async def __aenter__(self) -> "BitflyerClient":
        await self.transport.start()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self.transport.close()

    def _build_headers(self, request: ApiRequest, body: Optional[str]) -> Dict[str, str]:
        headers: Dict[str, str] = {}
        if request.IS_PRIVATE:
            headers.update(
                self.signer.get_headers(request.METHOD, request.PATH, request.query_string(), body)
            )
        if body is not None:
            headers["Content-Type"] = "application/json"
        return headers

    async def send(self, request: ApiRequest, *, timeout: Optional[float] = None) -> Any:
        """Dispatch ``request`` and return its decoded response.

        Args:
            request: The endpoint descriptor to send.
            timeout: Deadline for this call in seconds; defaults to
                ``config.timeout``.

        Raises:
            AuthError: a private descriptor was sent without a secret.  No
                network traffic takes place.
            UrlBuildError, SerializationError: the request could not be built.
            HttpError: the exchange answered with a non-2xx status.
            DecodeError: the response did not match the declared shape.
        """
        method, path = request.METHOD, request.PATH
        url = request.url(self.config.base_url)
        body = request.body()
        headers = self._build_headers(request, body)
        logger.debug("Sending %s %s (private=%s)", method, path, request.IS_PRIVATE)

        started = time.monotonic()
        try:
            response = await self.transport.send(
                method,
                url,
                headers,
                body,
                timeout=timeout if timeout is not None else self.config.timeout,
            )
        except Exception:
            metrics.record(method, path, metrics.OUTCOME_TRANSPORT_ERROR, time.monotonic() - started)
            raise
        elapsed = time.monotonic() - started

        if not response.ok:
            metrics.record(method, path, metrics.OUTCOME_HTTP_ERROR, elapsed)
            logger.error(
                "bitFlyer API error %s on %s %s: %s",
                response.status,
                method,
                path,
                response.text[:LOG_BODY_LIMIT],
            )
            raise HttpError(response.status, request, response.text, request_body=body)

        try:
            value = request.decode_response(response.text)
        except DecodeError as exc:
            metrics.record(method, path, metrics.OUTCOME_DECODE_ERROR, elapsed)
            logger.warning("Could not decode response from %s %s: %s", method, path, exc)
            raise
        metrics.record(method, path, metrics.OUTCOME_OK, elapsed)
        return value

    def __repr__(self) -> str:
        return "BitflyerClient(...)"


async def send_public(
    request: ApiRequest,
    *,
    transport: Optional[HttpTransport] = None,
    timeout: Optional[float] = None,
) -> Any:
    """Send a public descriptor without configuring a client.

    Raises:
        AuthError: if ``request`` is a private descriptor.
    """
    if request.IS_PRIVATE:
        raise AuthError("credentials required for private endpoint")
    client = BitflyerClient(transport=transport)
    return await client.send(request, timeout=timeout)


__all__ = ["LOG_BODY_LIMIT", "BitflyerClient", "send_public"]
