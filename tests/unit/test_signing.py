"""Tests for the HMAC-SHA256 request signer.

The expected digests below were computed independently (OpenSSL HMAC) over
the canonical strings shown in each test.
"""

from __future__ import annotations

from decimal import Decimal

import pytest  # type: ignore

from bitflyer_client.endpoints import GetChildOrders, SendChildOrder
from bitflyer_client.errors import AuthError
from bitflyer_client.models import LimitChildOrder, ProductCode, Side
from bitflyer_client.signing import ACCESS_KEY, ACCESS_SIGN, ACCESS_TIMESTAMP, HmacSigner, canonical_string

SECRET = "test-secret"
TIMESTAMP = 1700000000
ORDER_BODY = '{"child_order_type":"LIMIT","price":100,"product_code":"BTC_JPY","side":"BUY","size":0.01}'
ORDER_DIGEST = "fba0b05421c80f4e24f0ef8d0b7cc066c8bd650c0f3dda9854151ebf51f237b0"
LIST_DIGEST = "b18346d92cbc30adbe96478f467e57c8ab7a4aa31903ea28e7167523bd81755b"


def test_canonical_string_layout() -> None:
    assert canonical_string(1, "get", "/v1/me/getbalance") == "1GET/v1/me/getbalance"
    assert canonical_string(1, "GET", "/p", "a=1") == "1GET/p?a=1"
    assert canonical_string(1, "POST", "/p", "", "{}") == "1POST/p{}"


def test_known_answer_for_order_body() -> None:
    signer = HmacSigner("key", SECRET)
    digest = signer.sign(TIMESTAMP, "POST", "/v1/me/sendchildorder", "", ORDER_BODY)
    assert digest == ORDER_DIGEST
    # pure function of its inputs
    assert signer.sign(TIMESTAMP, "POST", "/v1/me/sendchildorder", "", ORDER_BODY) == digest


def test_known_answer_for_query() -> None:
    signer = HmacSigner("key", SECRET)
    query = GetChildOrders(product_code=ProductCode.BTC_JPY, count=10).query_string()
    assert signer.sign(TIMESTAMP, "GET", "/v1/me/getchildorders", query) == LIST_DIGEST


def test_descriptor_body_matches_signed_vector() -> None:
    order = SendChildOrder(
        child_order_type=LimitChildOrder(price=Decimal("100")),
        product_code=ProductCode.BTC_JPY,
        side=Side.BUY,
        size=Decimal("0.01"),
    )
    assert order.body() == ORDER_BODY


def test_headers_use_clock_and_key() -> None:
    signer = HmacSigner("my-key", SECRET, clock=lambda: TIMESTAMP + 0.9)
    headers = signer.get_headers("POST", "/v1/me/sendchildorder", "", ORDER_BODY)
    assert headers == {
        ACCESS_KEY: "my-key",
        ACCESS_TIMESTAMP: str(TIMESTAMP),
        ACCESS_SIGN: ORDER_DIGEST,
    }


def test_fresh_timestamp_per_call() -> None:
    ticks = iter([TIMESTAMP, TIMESTAMP + 1])
    signer = HmacSigner("k", SECRET, clock=lambda: next(ticks))
    first = signer.get_headers("GET", "/v1/me/getbalance")
    second = signer.get_headers("GET", "/v1/me/getbalance")
    assert first[ACCESS_TIMESTAMP] != second[ACCESS_TIMESTAMP]
    assert first[ACCESS_SIGN] != second[ACCESS_SIGN]


@pytest.mark.parametrize("secret", [None, ""])
def test_missing_secret_raises_auth_error(secret) -> None:
    signer = HmacSigner("key", secret)
    assert not signer.has_secret
    with pytest.raises(AuthError, match="credentials required"):
        signer.get_headers("GET", "/v1/me/getbalance")


def test_repr_hides_credentials() -> None:
    assert SECRET not in repr(HmacSigner("key", SECRET))
