"""
Endpoint descriptors for the bitFlyer Lightning REST API.

Each class maps one API operation to its path, method, privacy flag and
response shape.  Public market-data endpoints come first, followed by the
private ``/v1/me`` endpoints that require signed requests.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, ClassVar, List, Optional

from pydantic import Field

from .models import (
    Balance,
    Board,
    BoardHealth,
    BoardState,
    ChildOrder,
    ChildOrderType,
    Collateral,
    CollateralAccount,
    Execution,
    FlattenedVariant,
    Market,
    OrderState,
    ParentOrderDetail,
    ParentOrderMethod,
    ParentOrderSummary,
    Position,
    ProductCode,
    ProductCodeField,
    SendChildOrderResponse,
    SendParentOrderResponse,
    Side,
    Ticker,
    TimeInForce,
)
from .query import QueryPair, query_param
from .request import ApiRequest, EmptyResponseRequest, JsonBodyRequest

# Public


class GetMarkets(ApiRequest):
    PATH: ClassVar[str] = "/v1/markets"
    RESPONSE: ClassVar[Any] = List[Market]


class GetBoard(ApiRequest):
    PATH: ClassVar[str] = "/v1/board"
    RESPONSE: ClassVar[Any] = Board

    product_code: Optional[ProductCodeField] = None

    def url_params(self) -> List[Optional[QueryPair]]:
        return [query_param("product_code", self.product_code)]


class GetTicker(ApiRequest):
    PATH: ClassVar[str] = "/v1/ticker"
    RESPONSE: ClassVar[Any] = Ticker

    product_code: Optional[ProductCodeField] = None

    def url_params(self) -> List[Optional[QueryPair]]:
        return [query_param("product_code", self.product_code)]


class GetExecutions(ApiRequest):
    PATH: ClassVar[str] = "/v1/executions"
    RESPONSE: ClassVar[Any] = List[Execution]

    product_code: Optional[ProductCodeField] = None
    count: Optional[int] = Field(default=None, ge=0)
    before: Optional[int] = None
    after: Optional[int] = None

    def url_params(self) -> List[Optional[QueryPair]]:
        return [
            query_param("product_code", self.product_code),
            query_param("count", self.count),
            query_param("before", self.before),
            query_param("after", self.after),
        ]


class GetBoardState(ApiRequest):
    PATH: ClassVar[str] = "/v1/getboardstate"
    RESPONSE: ClassVar[Any] = BoardState

    product_code: Optional[ProductCodeField] = None

    def url_params(self) -> List[Optional[QueryPair]]:
        return [query_param("product_code", self.product_code)]


class GetBoardHealth(ApiRequest):
    PATH: ClassVar[str] = "/v1/gethealth"
    RESPONSE: ClassVar[Any] = BoardHealth

    product_code: Optional[ProductCodeField] = None

    def url_params(self) -> List[Optional[QueryPair]]:
        return [query_param("product_code", self.product_code)]


# Private: account


class GetPermissions(ApiRequest):
    PATH: ClassVar[str] = "/v1/me/getpermissions"
    IS_PRIVATE: ClassVar[bool] = True
    RESPONSE: ClassVar[Any] = List[str]


class GetBalance(ApiRequest):
    PATH: ClassVar[str] = "/v1/me/getbalance"
    IS_PRIVATE: ClassVar[bool] = True
    RESPONSE: ClassVar[Any] = List[Balance]


class GetCollateral(ApiRequest):
    PATH: ClassVar[str] = "/v1/me/getcollateral"
    IS_PRIVATE: ClassVar[bool] = True
    RESPONSE: ClassVar[Any] = Collateral


class GetCollateralAccounts(ApiRequest):
    PATH: ClassVar[str] = "/v1/me/getcollateralaccounts"
    IS_PRIVATE: ClassVar[bool] = True
    RESPONSE: ClassVar[Any] = List[CollateralAccount]


class GetPositions(ApiRequest):
    """Open positions; the exchange only supports ``FX_BTC_JPY`` here."""

    PATH: ClassVar[str] = "/v1/me/getpositions"
    IS_PRIVATE: ClassVar[bool] = True
    RESPONSE: ClassVar[Any] = List[Position]

    product_code: ProductCodeField = ProductCode.FX_BTC_JPY

    def url_params(self) -> List[Optional[QueryPair]]:
        return [query_param("product_code", self.product_code)]


# Private: child orders


class SendChildOrder(JsonBodyRequest, FlattenedVariant):
    """Place a limit or market order.

    ``child_order_type`` is written at the top level of the body together
    with its fields, e.g. ``{"child_order_type": "LIMIT", "price": 100, ...}``.
    """

    FLATTEN: ClassVar[str] = "child_order_type"
    PATH: ClassVar[str] = "/v1/me/sendchildorder"
    IS_PRIVATE: ClassVar[bool] = True
    RESPONSE: ClassVar[Any] = SendChildOrderResponse

    child_order_type: ChildOrderType
    product_code: ProductCodeField
    side: Side
    size: Decimal = Field(..., gt=0)
    minute_to_expire: Optional[int] = Field(default=None, gt=0)
    time_in_force: Optional[TimeInForce] = None


class CancelChildOrder(EmptyResponseRequest, JsonBodyRequest):
    PATH: ClassVar[str] = "/v1/me/cancelchildorder"
    IS_PRIVATE: ClassVar[bool] = True

    product_code: ProductCodeField
    child_order_acceptance_id: str


class CancelAllChildOrders(EmptyResponseRequest, JsonBodyRequest):
    PATH: ClassVar[str] = "/v1/me/cancelallchildorders"
    IS_PRIVATE: ClassVar[bool] = True

    product_code: ProductCodeField


class GetChildOrders(ApiRequest):
    PATH: ClassVar[str] = "/v1/me/getchildorders"
    IS_PRIVATE: ClassVar[bool] = True
    RESPONSE: ClassVar[Any] = List[ChildOrder]

    product_code: Optional[ProductCodeField] = None
    count: Optional[int] = Field(default=None, ge=0)
    before: Optional[int] = None
    after: Optional[int] = None
    child_order_state: Optional[OrderState] = None
    child_order_id: Optional[str] = None
    child_order_acceptance_id: Optional[str] = None
    parent_order_id: Optional[str] = None

    def url_params(self) -> List[Optional[QueryPair]]:
        return [
            query_param("product_code", self.product_code),
            query_param("count", self.count),
            query_param("before", self.before),
            query_param("after", self.after),
            query_param("child_order_state", self.child_order_state),
            query_param("child_order_id", self.child_order_id),
            query_param("child_order_acceptance_id", self.child_order_acceptance_id),
            query_param("parent_order_id", self.parent_order_id),
        ]


# Private: parent orders


class SendParentOrder(JsonBodyRequest, FlattenedVariant):
    """Place a SIMPLE, IFD, OCO or IFDOCO order."""

    FLATTEN: ClassVar[str] = "order_method"
    PATH: ClassVar[str] = "/v1/me/sendparentorder"
    IS_PRIVATE: ClassVar[bool] = True
    RESPONSE: ClassVar[Any] = SendParentOrderResponse

    order_method: ParentOrderMethod
    minute_to_expire: Optional[int] = Field(default=None, gt=0)
    time_in_force: Optional[TimeInForce] = None


class CancelParentOrder(EmptyResponseRequest, JsonBodyRequest):
    PATH: ClassVar[str] = "/v1/me/cancelparentorder"
    IS_PRIVATE: ClassVar[bool] = True

    product_code: ProductCodeField
    parent_order_acceptance_id: str


class GetParentOrders(ApiRequest):
    PATH: ClassVar[str] = "/v1/me/getparentorders"
    IS_PRIVATE: ClassVar[bool] = True
    RESPONSE: ClassVar[Any] = List[ParentOrderSummary]

    product_code: Optional[ProductCodeField] = None
    count: Optional[int] = Field(default=None, ge=0)
    before: Optional[int] = None
    after: Optional[int] = None
    parent_order_state: Optional[OrderState] = None

    def url_params(self) -> List[Optional[QueryPair]]:
        return [
            query_param("product_code", self.product_code),
            query_param("count", self.count),
            query_param("before", self.before),
            query_param("after", self.after),
            query_param("parent_order_state", self.parent_order_state),
        ]


class GetParentOrder(ApiRequest):
    PATH: ClassVar[str] = "/v1/me/getparentorder"
    IS_PRIVATE: ClassVar[bool] = True
    RESPONSE: ClassVar[Any] = ParentOrderDetail

    parent_order_id: Optional[str] = None
    parent_order_acceptance_id: Optional[str] = None

    def url_params(self) -> List[Optional[QueryPair]]:
        return [
            query_param("parent_order_id", self.parent_order_id),
            query_param("parent_order_acceptance_id", self.parent_order_acceptance_id),
        ]


__all__ = [
    "GetMarkets",
    "GetBoard",
    "GetTicker",
    "GetExecutions",
    "GetBoardState",
    "GetBoardHealth",
    "GetPermissions",
    "GetBalance",
    "GetCollateral",
    "GetCollateralAccounts",
    "GetPositions",
    "SendChildOrder",
    "CancelChildOrder",
    "CancelAllChildOrders",
    "GetChildOrders",
    "SendParentOrder",
    "CancelParentOrder",
    "GetParentOrders",
    "GetParentOrder",
]
