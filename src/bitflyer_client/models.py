"""
Domain models for bitFlyer payloads using Pydantic.

Every model is frozen: values are created by decoding a response or by a
caller assembling a request, and are never mutated afterwards.  Monetary
quantities are :class:`decimal.Decimal`; response bodies are parsed with
``parse_float=Decimal`` before they reach these models so that prices and
sizes never pass through binary floating point.

Order types are tagged unions.  Each variant carries its discriminator as
a ``Literal`` field, and containers that embed a union at their own JSON
level (``child_order_type`` / ``order_method``) derive from
:class:`FlattenedVariant`, which lifts the flat wire object into the
variant on decode and merges it back on encode.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, ClassVar, Dict, List, Literal, Mapping, Optional, Tuple, Union

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    model_serializer,
    model_validator,
)

from .errors import SerializationError
from .timestamps import OptionalTimestamp, Timestamp


class WireEnum(str, Enum):
    """String enum whose ``str()`` is its wire value."""

    def __str__(self) -> str:
        return self.value


class Side(WireEnum):
    BUY = "BUY"
    SELL = "SELL"

    def reverse(self) -> "Side":
        return Side.SELL if self is Side.BUY else Side.BUY


class ParentOrderSide(WireEnum):
    BUY = "BUY"
    SELL = "SELL"
    BUYSELL = "BUYSELL"


class MarketType(WireEnum):
    SPOT = "Spot"
    FX = "FX"
    FUTURES = "Futures"


class ProductCode(WireEnum):
    """Known trading pairs.

    The set is open on the decode side: any code the exchange adds later
    decodes to :attr:`OTHER` instead of failing.  ``OTHER`` cannot be sent
    back to the exchange.
    """

    BTC_JPY = "BTC_JPY"
    XRP_JPY = "XRP_JPY"
    ETH_JPY = "ETH_JPY"
    XLM_JPY = "XLM_JPY"
    MONA_JPY = "MONA_JPY"
    ETH_BTC = "ETH_BTC"
    BCH_BTC = "BCH_BTC"
    FX_BTC_JPY = "FX_BTC_JPY"
    OTHER = "OTHER"

    @classmethod
    def _missing_(cls, value: object) -> Optional["ProductCode"]:
        if isinstance(value, str):
            return cls.OTHER
        return None


class Health(WireEnum):
    NORMAL = "NORMAL"
    BUSY = "BUSY"
    VERY_BUSY = "VERY_BUSY"
    SUPER_BUSY = "SUPER_BUSY"
    NO_ORDER = "NO_ORDER"
    STOP = "STOP"

    @classmethod
    def _missing_(cls, value: object) -> Optional["Health"]:
        # documented spelling uses spaces ("VERY BUSY")
        if isinstance(value, str) and " " in value:
            return cls.__members__.get(value.replace(" ", "_"))
        return None


class State(WireEnum):
    RUNNING = "RUNNING"
    CLOSED = "CLOSED"
    STARTING = "STARTING"
    PREOPEN = "PREOPEN"
    CIRCUIT_BREAK = "CIRCUIT BREAK"
    AWAITING_SQ = "AWAITING SQ"
    MATURED = "MATURED"

    @classmethod
    def _missing_(cls, value: object) -> Optional["State"]:
        if value == "CIRCUT BREAK":
            return cls.CIRCUIT_BREAK
        return None


class ParentOrderType(WireEnum):
    LIMIT = "LIMIT"
    MARKET = "MARKET"
    STOP = "STOP"
    STOPLIMIT = "STOPLIMIT"
    TRAIL = "TRAIL"
    SIMPLE = "SIMPLE"
    IFD = "IFD"
    OCO = "OCO"
    IFDOCO = "IFDOCO"


class TimeInForce(WireEnum):
    GTC = "GTC"
    IOC = "IOC"
    FOK = "FOK"


class OrderState(WireEnum):
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    CANCELED = "CANCELED"
    EXPIRED = "EXPIRED"
    REJECTED = "REJECTED"


def wire_value(member: Enum) -> str:
    """Return the wire representation of an enum member.

    Raises:
        SerializationError: for :attr:`ProductCode.OTHER`, which only
            exists on the decode side.
    """
    if member is ProductCode.OTHER:
        raise SerializationError("ProductCode.OTHER has no wire representation")
    return str(member.value)


def _lookup(enum_cls: type) -> BeforeValidator:
    # route strings through Enum.__call__ so that _missing_ applies
    def validate(value: Any) -> Any:
        if isinstance(value, str) and not isinstance(value, enum_cls):
            return enum_cls(value)
        return value

    return BeforeValidator(validate)


ProductCodeField = Annotated[ProductCode, _lookup(ProductCode)]
HealthField = Annotated[Health, _lookup(Health)]
StateField = Annotated[State, _lookup(State)]


class Frozen(BaseModel):
    """Immutable value type with structural equality."""

    model_config = ConfigDict(frozen=True)


class FlattenedVariant(Frozen):
    """Container whose ``FLATTEN`` field holds a tagged union on the same JSON level.

    On decode, a flat mapping whose ``FLATTEN`` key is still a bare tag is
    copied into that field so the discriminated union can select the
    variant from it (variants ignore the container's other keys).  On
    encode, the variant's fields are merged back into the container.
    """

    FLATTEN: ClassVar[str]

    @model_validator(mode="before")
    @classmethod
    def _lift_variant(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        if isinstance(data.get(cls.FLATTEN), (BaseModel, Mapping)):
            return data
        flat = dict(data)
        lifted = dict(flat)
        lifted[cls.FLATTEN] = flat
        return lifted

    @model_serializer(mode="wrap")
    def _merge_variant(self, handler: SerializerFunctionWrapHandler) -> Dict[str, Any]:
        data = handler(self)
        variant = data.pop(self.FLATTEN, None) or {}
        return {**variant, **data}


# Child order types


class LimitChildOrder(Frozen):
    child_order_type: Literal["LIMIT"] = "LIMIT"
    price: Decimal


class MarketChildOrder(Frozen):
    child_order_type: Literal["MARKET"] = "MARKET"


ChildOrderType = Annotated[
    Union[LimitChildOrder, MarketChildOrder],
    Field(discriminator="child_order_type"),
]


# Parent order conditions


class _Condition(Frozen):
    product_code: ProductCodeField
    side: Side
    size: Decimal


class LimitCondition(_Condition):
    condition_type: Literal["LIMIT"] = "LIMIT"
    price: Decimal


class MarketCondition(_Condition):
    condition_type: Literal["MARKET"] = "MARKET"


class StopCondition(_Condition):
    condition_type: Literal["STOP"] = "STOP"
    trigger_price: Decimal


class StopLimitCondition(_Condition):
    condition_type: Literal["STOPLIMIT"] = "STOPLIMIT"
    price: Decimal
    trigger_price: Decimal


class TrailCondition(_Condition):
    condition_type: Literal["TRAIL"] = "TRAIL"
    offset: int = Field(..., ge=0)


ParentOrderCondition = Annotated[
    Union[LimitCondition, MarketCondition, StopCondition, StopLimitCondition, TrailCondition],
    Field(discriminator="condition_type"),
]


# Parent order methods.  The number of conditions is part of each variant's
# type: a fixed-length tuple rather than a list.


class SimpleMethod(Frozen):
    order_method: Literal["SIMPLE"] = "SIMPLE"
    parameters: Tuple[ParentOrderCondition]


class IfdMethod(Frozen):
    """If-done: the second condition is placed once the first executes."""

    order_method: Literal["IFD"] = "IFD"
    parameters: Tuple[ParentOrderCondition, ParentOrderCondition]


class OcoMethod(Frozen):
    """One-cancels-other: whichever condition executes first cancels the other."""

    order_method: Literal["OCO"] = "OCO"
    parameters: Tuple[ParentOrderCondition, ParentOrderCondition]


class IfdocoMethod(Frozen):
    """If-done then one-cancels-other on the second and third conditions."""

    order_method: Literal["IFDOCO"] = "IFDOCO"
    parameters: Tuple[ParentOrderCondition, ParentOrderCondition, ParentOrderCondition]


ParentOrderMethod = Annotated[
    Union[SimpleMethod, IfdMethod, OcoMethod, IfdocoMethod],
    Field(discriminator="order_method"),
]


# Market data


class Market(Frozen):
    product_code: ProductCodeField
    alias: Optional[str] = None
    market_type: MarketType


class BoardElement(Frozen):
    price: Decimal
    size: Decimal


class Board(Frozen):
    mid_price: Decimal
    bids: List[BoardElement]
    asks: List[BoardElement]


class Ticker(Frozen):
    product_code: ProductCodeField
    state: StateField
    timestamp: Timestamp
    tick_id: Decimal
    best_bid: Decimal
    best_ask: Decimal
    best_bid_size: Decimal
    best_ask_size: Decimal
    total_bid_depth: Decimal
    total_ask_depth: Decimal
    market_bid_size: Decimal
    market_ask_size: Decimal
    ltp: Decimal
    volume: Decimal
    volume_by_product: Decimal


class Execution(Frozen):
    id: int
    side: Side
    price: Decimal
    size: Decimal
    exec_date: Timestamp
    buy_child_order_acceptance_id: str
    sell_child_order_acceptance_id: str


class BoardStateData(Frozen):
    special_quotation: str


class BoardState(Frozen):
    health: HealthField
    state: StateField
    data: Optional[BoardStateData] = None


class BoardHealth(Frozen):
    status: HealthField


# Account


class Balance(Frozen):
    currency_code: str
    amount: Decimal
    available: Decimal


class Collateral(Frozen):
    collateral: Decimal
    open_position_pnl: Decimal
    require_collateral: Decimal
    keep_rate: float
    margin_call_amount: Decimal
    margin_call_due_date: OptionalTimestamp = None


class CollateralAccount(Frozen):
    currency_code: str
    amount: Decimal


class Position(Frozen):
    product_code: ProductCodeField
    side: Side
    price: Decimal
    size: Decimal
    commission: Decimal
    swap_point_accumulate: Decimal
    require_collateral: Decimal
    open_date: Timestamp
    leverage: Decimal
    pnl: Decimal
    sfd: Decimal


# Orders


class ChildOrder(FlattenedVariant):
    FLATTEN: ClassVar[str] = "child_order_type"

    id: int
    child_order_id: str
    product_code: ProductCodeField
    side: Side
    child_order_type: ChildOrderType
    average_price: Decimal
    size: Decimal
    child_order_state: OrderState
    expire_date: Timestamp
    child_order_date: Timestamp
    child_order_acceptance_id: str
    outstanding_size: Decimal
    cancel_size: Decimal
    executed_size: Decimal
    total_commission: Decimal
    time_in_force: TimeInForce


class ParentOrderSummary(Frozen):
    """One entry of the parent order listing."""

    id: int
    parent_order_id: str
    product_code: ProductCodeField
    side: ParentOrderSide
    parent_order_type: ParentOrderType
    price: Decimal
    average_price: Decimal
    size: Decimal
    parent_order_state: OrderState
    expire_date: Timestamp
    parent_order_date: Timestamp
    parent_order_acceptance_id: str
    outstanding_size: Decimal
    cancel_size: Decimal
    executed_size: Decimal
    total_commission: Decimal


class ParentOrderDetail(FlattenedVariant):
    """A single parent order with its full condition set."""

    FLATTEN: ClassVar[str] = "order_method"

    id: int
    parent_order_id: str
    expire_date: Timestamp
    time_in_force: TimeInForce
    order_method: ParentOrderMethod
    parent_order_acceptance_id: str


class SendChildOrderResponse(Frozen):
    child_order_acceptance_id: str


class SendParentOrderResponse(Frozen):
    parent_order_acceptance_id: str


class Empty(Frozen):
    """Successful response with no content."""


__all__ = [
    "WireEnum",
    "Side",
    "ParentOrderSide",
    "MarketType",
    "ProductCode",
    "Health",
    "State",
    "ParentOrderType",
    "TimeInForce",
    "OrderState",
    "wire_value",
    "ProductCodeField",
    "Frozen",
    "FlattenedVariant",
    "LimitChildOrder",
    "MarketChildOrder",
    "ChildOrderType",
    "LimitCondition",
    "MarketCondition",
    "StopCondition",
    "StopLimitCondition",
    "TrailCondition",
    "ParentOrderCondition",
    "SimpleMethod",
    "IfdMethod",
    "OcoMethod",
    "IfdocoMethod",
    "ParentOrderMethod",
    "Market",
    "BoardElement",
    "Board",
    "Ticker",
    "Execution",
    "BoardStateData",
    "BoardState",
    "BoardHealth",
    "Balance",
    "Collateral",
    "CollateralAccount",
    "Position",
    "ChildOrder",
    "ParentOrderSummary",
    "ParentOrderDetail",
    "SendChildOrderResponse",
    "SendParentOrderResponse",
    "Empty",
]
