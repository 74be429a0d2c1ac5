"""Tests for query parameter rendering and URL construction."""

from __future__ import annotations

from decimal import Decimal

import pytest  # type: ignore

from bitflyer_client.endpoints import GetChildOrders, GetExecutions, GetMarkets, GetParentOrder, GetTicker
from bitflyer_client.errors import SerializationError, UrlBuildError
from bitflyer_client.models import OrderState, ProductCode, Side
from bitflyer_client.query import build_query, query_param, to_query_value
from bitflyer_client.request import ENTRY_POINT


def test_query_param_drops_absent_values() -> None:
    assert query_param("count", None) is None
    assert query_param("count", 0) == ("count", "0")


def test_enums_render_wire_names() -> None:
    assert to_query_value(ProductCode.FX_BTC_JPY) == "FX_BTC_JPY"
    assert to_query_value(Side.SELL) == "SELL"
    assert to_query_value(Decimal("1E+2")) == "100"
    assert to_query_value(True) == "true"


def test_other_product_code_cannot_be_sent() -> None:
    with pytest.raises(SerializationError):
        to_query_value(ProductCode.OTHER)


def test_build_query_keeps_declared_order_and_encodes() -> None:
    query = build_query([("b", "1"), None, ("a", "x y&z"), None])
    assert query == "b=1&a=x+y%26z"
    assert build_query([None, None]) == ""


def test_url_without_parameters_has_no_question_mark() -> None:
    assert GetTicker().url() == f"{ENTRY_POINT}/v1/ticker"
    assert GetMarkets().url() == f"{ENTRY_POINT}/v1/markets"


def test_url_with_parameters() -> None:
    request = GetExecutions(product_code=ProductCode.BTC_JPY, count=10, after=123)
    assert request.url() == f"{ENTRY_POINT}/v1/executions?product_code=BTC_JPY&count=10&after=123"
    assert request.query_string() == "product_code=BTC_JPY&count=10&after=123"


def test_absent_parameters_never_appear() -> None:
    request = GetChildOrders(child_order_state=OrderState.ACTIVE, parent_order_id="JCP20150825-000001-12345")
    url = request.url()
    assert "product_code" not in url
    assert "count" not in url
    assert url.endswith("?child_order_state=ACTIVE&parent_order_id=JCP20150825-000001-12345")


def test_custom_base_url_is_used() -> None:
    request = GetParentOrder(parent_order_acceptance_id="JRF20150925-060559-396699")
    assert request.url("http://localhost:8080/") == (
        "http://localhost:8080/v1/me/getparentorder?parent_order_acceptance_id=JRF20150925-060559-396699"
    )


def test_invalid_base_url_raises() -> None:
    with pytest.raises(UrlBuildError):
        GetTicker().url("not a url")
