"""Order kinds and the request parameters they turn into."""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class _WireEnum(str, Enum):
    """An enum whose value is the string sent on the wire."""

    def __str__(self) -> str:
        return self.value


class OrderType(_WireEnum):
    LIMIT = "LIMIT"
    MARKET = "MARKET"
    STOP_LOSS_LIMIT = "STOP_LOSS_LIMIT"


class OrderSide(_WireEnum):
    BUY = "BUY"
    SELL = "SELL"


class TimeInForce(_WireEnum):
    GTC = "GTC"
    IOC = "IOC"
    FOK = "FOK"


def format_number(value: float) -> str:
    """Render a number in plain decimal notation, shortest form, never with an exponent."""
    number = float(value)
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "inf" if number > 0 else "-inf"
    text = format(Decimal(repr(number)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


@dataclass
class OrderRequest:
    """An order sized in units of the base asset."""

    symbol: str
    qty: float
    price: float
    order_side: OrderSide
    order_type: OrderType
    time_in_force: TimeInForce = TimeInForce.GTC
    stop_price: float | None = None
    new_client_order_id: str | None = None

    def __post_init__(self) -> None:
        self.symbol = str(self.symbol)
        self.qty = float(self.qty)
        self.price = float(self.price)
        if self.stop_price is not None:
            self.stop_price = float(self.stop_price)
        self.order_side = OrderSide(self.order_side)
        self.order_type = OrderType(self.order_type)
        self.time_in_force = TimeInForce(self.time_in_force)

    def to_parameters(self) -> dict[str, str]:
        """The request parameters, ordered by name."""
        params = {
            "symbol": self.symbol,
            "side": self.order_side.value,
            "type": self.order_type.value,
            "quantity": format_number(self.qty),
        }
        if self.stop_price is not None:
            params["stopPrice"] = format_number(self.stop_price)
        if self.price != 0.0:
            params["price"] = format_number(self.price)
            params["timeInForce"] = self.time_in_force.value
        if self.new_client_order_id is not None:
            params["newClientOrderId"] = self.new_client_order_id
        return dict(sorted(params.items()))


@dataclass
class QuoteQuantityOrderRequest:
    """An order sized in units of the quote asset."""

    symbol: str
    quote_order_qty: float
    order_side: OrderSide
    order_type: OrderType
    price: float = 0.0
    time_in_force: TimeInForce = TimeInForce.GTC
    new_client_order_id: str | None = None

    def __post_init__(self) -> None:
        self.symbol = str(self.symbol)
        self.quote_order_qty = float(self.quote_order_qty)
        self.price = float(self.price)
        self.order_side = OrderSide(self.order_side)
        self.order_type = OrderType(self.order_type)
        self.time_in_force = TimeInForce(self.time_in_force)

    def to_parameters(self) -> dict[str, str]:
        """The request parameters, ordered by name."""
        params = {
            "symbol": self.symbol,
            "side": self.order_side.value,
            "type": self.order_type.value,
            "quoteOrderQty": format_number(self.quote_order_qty),
        }
        if self.price != 0.0:
            params["price"] = format_number(self.price)
            params["timeInForce"] = self.time_in_force.value
        if self.new_client_order_id is not None:
            params["newClientOrderId"] = self.new_client_order_id
        return dict(sorted(params.items()))